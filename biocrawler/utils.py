import re
from urllib.parse import unquote, urlparse

from .config import GBFF_COMPRESSED_SUFFIX, GBFF_EXTENSION


def safe_filename(value: str, max_len: int = 180) -> str:
    """Normalize strings to filesystem-friendly ASCII names."""
    cleaned = re.sub(r"[^A-Za-z0-9._-]+", "_", value)
    cleaned = cleaned.strip("._-")
    return cleaned[:max_len] if cleaned else "unknown"


def gbff_filename(url: str) -> str:
    """``.../GCF_000001_ASM1v1_genomic.gbff.gz`` -> ``GCF_000001_ASM1v1_genomic.gbff``."""
    segment = unquote(urlparse(url).path.rstrip("/").split("/")[-1])
    if segment.endswith(GBFF_COMPRESSED_SUFFIX):
        segment = segment[: -len(GBFF_COMPRESSED_SUFFIX)]
    return f"{safe_filename(segment)}.{GBFF_EXTENSION}"


def format_elapsed(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m{rest:.1f}s"

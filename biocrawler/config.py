from dataclasses import dataclass


DEFAULT_USER_AGENT = "Mozilla/5.0 (X11; Linux x86_64) BioCrawler/1.0"
DEFAULT_SEED_URL = "https://pubmed.ncbi.nlm.nih.gov/29708484/"
DEFAULT_OUTPUT = "data.json"
DEFAULT_TIMEOUT = 30
DEFAULT_DOWNLOAD_TIMEOUT = 600
MAX_BODY_SIZE = 100 * 1024 * 1024

ASSEMBLY_LINK_TEXT = "Assembly"
FTP_DIRECTORY_MARKER = "FTP directory"
GBFF_MARKER = "genomic.gbff.gz"
GBFF_COMPRESSED_SUFFIX = ".gbff.gz"
GBFF_EXTENSION = "gbff"


@dataclass
class CrawlConfig:
    seed_url: str = DEFAULT_SEED_URL
    output_path: str = DEFAULT_OUTPUT
    download_dir: str = "."
    user_agent: str = DEFAULT_USER_AGENT
    delay: float = 0.0
    timeout: int = DEFAULT_TIMEOUT
    download_timeout: int = DEFAULT_DOWNLOAD_TIMEOUT
    max_body_size: int = MAX_BODY_SIZE
    download: bool = True
    print_report: bool = False

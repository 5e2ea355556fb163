from typing import Dict, Optional


class CrawlError(Exception):
    """Base error for a crawl stage, carrying the stage name and URL."""

    def __init__(self, message: str, stage: str = "", url: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.url = url

    def __str__(self) -> str:
        context = []
        if self.stage:
            context.append(f"stage={self.stage}")
        if self.url:
            context.append(f"url={self.url}")
        if not context:
            return self.message
        return f"{self.message} ({' '.join(context)})"


class MissingCrossReference(CrawlError):
    """The publication page has no link to the assembly search."""

    def __init__(self, url: str) -> None:
        super().__init__("No assembly cross-reference found", stage="publication", url=url)


class MalformedDetailPage(CrawlError):
    """Definition-list labels and values on a detail page do not line up.

    ``fields`` holds whatever was dispatched before the mismatch was found.
    """

    def __init__(
        self,
        url: str,
        terms: int,
        values: int,
        fields: Optional[Dict[str, str]] = None,
    ) -> None:
        super().__init__(
            f"Mismatched detail labels ({terms}) and values ({values})",
            stage="assembly",
            url=url,
        )
        self.terms = terms
        self.values = values
        self.fields = dict(fields or {})


class FetchFailure(CrawlError):
    """Transport-level failure: network error, timeout, HTTP status or write error."""

    def __init__(self, url: str, reason: object, stage: str = "") -> None:
        super().__init__(f"Failed to fetch: {reason}", stage=stage, url=url)
        self.reason = reason

class SongchartError(Exception):
    """Base exception for songchart."""


class UnknownTonicError(SongchartError):
    """Raised when a tonic does not name one of the twelve pitch classes."""

    def __init__(self, tonic: str):
        self.tonic = tonic
        super().__init__(f"Unknown tonic: {tonic}")


class FetchError(SongchartError):
    """Raised when an HTTP request fails."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} fetching {url}")


class SourceError(SongchartError):
    """Raised when chart text cannot be read from a source."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot read chart from {location}: {reason}")


class UnsupportedSourceError(SongchartError):
    """Raised when no source loader accepts the given location."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"No source found for: {location!r}")

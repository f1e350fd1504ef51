from abc import ABC, abstractmethod


class ChartSource(ABC):
    """Abstract base class for everything chart text can be loaded from."""

    @classmethod
    @abstractmethod
    def can_handle(cls, location: str) -> bool:
        """Return True if this source can load the given location."""

    @abstractmethod
    def fetch(self, location: str) -> str:
        """Read the raw payload at location (file contents, HTTP body).

        Raises SourceError or FetchError when the payload cannot be read.
        """

    @abstractmethod
    def extract(self, raw: str, location: str) -> str:
        """Return the chart text contained in a raw payload.

        By the time this returns, wrapper markup (HTML, Markdown fences) has
        been removed and the result can be passed straight to parse_song()
        or convert_to_degrees().

        Raises SourceError if no chart can be found.
        """

    def load(self, location: str) -> str:
        """Convenience method: fetch + extract."""
        raw = self.fetch(location)
        return self.extract(raw, location)

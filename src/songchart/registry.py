import logging

from .exceptions import UnsupportedSourceError
from .sources.base import ChartSource
from .sources.local import LocalSource
from .sources.web import WebSource

logger = logging.getLogger(__name__)

# Checked in order; LocalSource accepts any non-empty location so it goes last.
_SOURCES: list[type[ChartSource]] = [
    WebSource,
    LocalSource,
]


def get_source(location: str) -> ChartSource:
    """Return an instantiated source for the given location.

    Raises UnsupportedSourceError if no source matches.
    """
    for cls in _SOURCES:
        if cls.can_handle(location):
            logger.debug("Loading %r with %s", location, cls.__name__)
            return cls()
    raise UnsupportedSourceError(location)

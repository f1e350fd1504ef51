"""Source for charts stored on disk or piped in on stdin.

Location forms:

    path/to/song.txt      plain chart text
    path/to/note.md       Markdown note with one or more ```song fences
    -                     read stdin
"""

import logging
import sys
from pathlib import Path

from ..exceptions import SourceError
from .base import ChartSource
from .utils import extract_song_blocks

logger = logging.getLogger(__name__)

STDIN = "-"


class LocalSource(ChartSource):
    """Source for local files and stdin.  Accepts any location."""

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return bool(location)

    def fetch(self, location: str) -> str:
        if location == STDIN:
            return sys.stdin.read()
        path = Path(location)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise SourceError(location, "no such file") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceError(location, str(exc)) from exc
        logger.debug("Read %d characters from %s", len(text), path)
        return text

    def extract(self, raw: str, location: str) -> str:
        return extract_song_blocks(raw)

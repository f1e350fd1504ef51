"""Text projections of a parsed :class:`~songchart.models.Song`.

View modes
----------

+-------------+------------------------------------------------------------+
| Mode        | Output                                                     |
+=============+============================================================+
| ``both``    | ``[Section]`` headers, chord lines with ``|`` removed      |
|             | (spacing kept) above their lyric lines                     |
+-------------+------------------------------------------------------------+
| ``lyrics``  | headers and lyric lines, a blank line after each section   |
+-------------+------------------------------------------------------------+
| ``chords``  | headers and one bar per line, ``b``/``#`` shown as ♭/♯     |
+-------------+------------------------------------------------------------+
| ``json``    | the whole model as indented JSON                           |
+-------------+------------------------------------------------------------+

Blank chord lines, blank lyric lines and empty bars are skipped.  Returned
text has no leading or trailing whitespace.

Usage::

    from songchart.views import ViewMode, render
    print(render(parse_song(text), ViewMode.CHORDS))
"""

import dataclasses
import json
import re
from enum import Enum

from .models import Song


class ViewMode(str, Enum):
    BOTH = "both"
    LYRICS = "lyrics"
    CHORDS = "chords"
    JSON = "json"


_WHITESPACE_RE = re.compile(r"\s+")


def render_both(song: Song) -> str:
    """Return chords above lyrics, one header per section."""
    lines: list[str] = []
    for section in song.sections:
        lines.append(f"[{section.name}]")
        for row in section.rows:
            chords = row.chord_line.replace("|", "")
            if chords.strip():
                lines.append(chords)
            if row.lyrics.strip():
                lines.append(row.lyrics)
    return "\n".join(lines).strip()


def render_lyrics(song: Song) -> str:
    """Return only the lyrics, sections separated by a blank line."""
    lines: list[str] = []
    for section in song.sections:
        lines.append(f"[{section.name}]")
        lines.extend(row.lyrics for row in section.rows if row.lyrics.strip())
        lines.append("")
    return "\n".join(lines).strip()


def render_chords(song: Song) -> str:
    """Return the chord chart, one bar per line."""
    lines: list[str] = []
    for section in song.sections:
        lines.append(f"[{section.name}]")
        for row in section.rows:
            for bar in row.bar_slices:
                if bar.text.strip():
                    lines.append(_chart_symbols(bar.text))
    return "\n".join(lines).strip()


def render_json(song: Song) -> str:
    """Return the full model as JSON, field names as in the dataclasses."""
    return json.dumps(dataclasses.asdict(song), indent=2, ensure_ascii=False)


_RENDERERS = {
    ViewMode.BOTH: render_both,
    ViewMode.LYRICS: render_lyrics,
    ViewMode.CHORDS: render_chords,
    ViewMode.JSON: render_json,
}


def render(song: Song, mode: ViewMode | str = ViewMode.BOTH) -> str:
    """Render *song* in the given view mode (enum member or its value)."""
    return _RENDERERS[ViewMode(mode)](song)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _chart_symbols(text: str) -> str:
    """``"bVII  #IVø"`` → ``"♭VII ♯IVø"``."""
    text = text.replace("b", "♭").replace("#", "♯")
    return _WHITESPACE_RE.sub(" ", text).strip()

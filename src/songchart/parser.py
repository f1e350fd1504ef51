"""Chord chart parser: raw chart text → :class:`~songchart.models.Song`.

Input is line oriented::

    [Intro]                         section header
    {Mod IV}                        modulation marker
    |   IIm      V7   |  Imaj7      chord line  ┐ one row
    No existe un momento del día,   lyric line  ┘

Algorithm
---------
1. Split the text on ``\\n`` or ``\\r\\n`` only (a form feed or U+2028 inside a
   lyric stays in that lyric) and expand every tab to four spaces, so chord
   columns do not depend on how the author indented.
2. Classify each non-blank line, first match wins: header, marker, or the
   first line of a chord/lyric pair.  A pair consumes two lines.
3. A chord line that is directly followed by a header or marker has no
   lyric line to pair with and is dropped, as is a chord line on the very
   last line.  After a trailing newline that last line is the empty string,
   so a final chord line pairs with empty lyrics.
4. Each row records its chord tokens, the columns of its ``|`` separators
   and the bar slices between them.
5. A chord line that does not open with ``|`` continues the measure left
   open by the previous row, even when that row is in an earlier section:
   its first slice is appended to the previous row's last slice.

The parser never raises; odd input produces odd (possibly empty) songs.
"""

import logging
import re

from .grammar import find_degree_chords
from .models import BarSlice, ChordToken, Row, Section, Song

logger = logging.getLogger(__name__)

TAB_WIDTH = 4

# Name of the section created for content that appears before any header.
UNTITLED = "Untitled"

HEADER_RE = re.compile(r"^\s*\[([^\]]+)\]\s*$")

MARKER_RE = re.compile(r"^\s*\{\s*(.+?)\s*\}\s*$")

_MOD_PREFIX_RE = re.compile(r"^Mod\s+", re.IGNORECASE)

# (x2), [x3], ( X 4 )
REPEAT_HINT_RE = re.compile(r"[(\[]\s*x\s*(\d+)\s*[)\]]", re.IGNORECASE)

_LEADING_PIPE_RE = re.compile(r"^\s*\|")

LINE_BREAK_RE = re.compile(r"\r?\n")


# ---------------------------------------------------------------------------
# Line helpers
# ---------------------------------------------------------------------------


def expand_tabs(line: str) -> str:
    """Replace every tab with a fixed run of :data:`TAB_WIDTH` spaces."""
    return line.replace("\t", " " * TAB_WIDTH)


def is_header(line: str) -> bool:
    return HEADER_RE.match(line) is not None


def is_marker(line: str) -> bool:
    return MARKER_RE.match(line) is not None


def extract_marker_text(line: str) -> str | None:
    """Return the text of a ``{...}`` marker line without a ``Mod`` prefix.

    ``"{ Mod IV }"`` → ``"IV"``; ``"{bVII}"`` → ``"bVII"``.
    """
    m = MARKER_RE.match(line)
    if not m:
        return None
    return _MOD_PREFIX_RE.sub("", m.group(1)).strip()


def extract_repeat_hint(lyrics: str) -> int | None:
    """Return N from an ``(xN)`` / ``[xN]`` hint when N > 1."""
    m = REPEAT_HINT_RE.search(lyrics)
    if not m:
        return None
    count = int(m.group(1))
    return count if count > 1 else None


def extract_chord_tokens(line: str) -> list[ChordToken]:
    return [ChordToken(text=c.text, start_column=c.start) for c in find_degree_chords(line)]


def extract_bar_boundaries(line: str) -> list[int]:
    """Return the column of every ``|`` in *line*."""
    return [i for i, ch in enumerate(line) if ch == "|"]


def extract_bar_slices(line: str, boundaries: list[int]) -> list[BarSlice]:
    """Cut *line* into the segments between consecutive bar boundaries.

    The segment before the first ``|`` and the one after the last ``|`` are
    included even when empty.  A line without any ``|`` is a single slice,
    or none at all if it holds only whitespace.
    """
    if not boundaries:
        text = line.strip()
        return [BarSlice(start_column=0, end_column=len(line), text=text)] if text else []

    anchors = [-1, *boundaries, len(line)]
    slices = []
    for left, right in zip(anchors, anchors[1:]):
        start = left + 1
        slices.append(BarSlice(start_column=start, end_column=right, text=line[start:right].strip()))
    return slices


# ---------------------------------------------------------------------------
# Row construction
# ---------------------------------------------------------------------------


class _RowBuilder:
    """Builds rows in song order, one row of lookback for bar carry-over.

    The previously built row stays open: the next chord line may still
    complete its last measure.
    """

    def __init__(self):
        self.previous: Row | None = None

    def build(
        self,
        chord_line: str,
        lyrics: str,
        modulation_note: str | None = None,
        preceded_by_blank_line: bool = False,
    ) -> Row:
        boundaries = extract_bar_boundaries(chord_line)
        slices = extract_bar_slices(chord_line, boundaries)

        prev = self.previous
        if not _LEADING_PIPE_RE.match(chord_line) and prev is not None and prev.bar_slices:
            head = slices.pop(0) if slices else None
            if head is not None and head.text:
                last = prev.bar_slices[-1]
                last.text = f"{last.text} {head.text}".strip()
                logger.debug("Carried %r over into the previous row's last bar", head.text)

        row = Row(
            chord_line=chord_line,
            lyrics=lyrics,
            chord_tokens=extract_chord_tokens(chord_line),
            bar_boundary_columns=boundaries,
            bar_slices=slices,
            repeat_count=extract_repeat_hint(lyrics),
            modulation_note=modulation_note,
            preceded_by_blank_line=preceded_by_blank_line,
        )
        self.previous = row
        return row


# ---------------------------------------------------------------------------
# Full parser
# ---------------------------------------------------------------------------


def parse_song(source_text: str) -> Song:
    """Parse chord chart text into a :class:`~songchart.models.Song`.

    Args:
        source_text: The chart, e.g. the body of a ```` ```song ```` block.

    Returns:
        The parsed song.  Never raises; unparsable lines are dropped.

    ``preceded_by_blank_line`` is False at the top of the text.  A header
    consumes a pending blank line, a marker leaves it for the next row.
    """
    lines = [expand_tabs(line) for line in LINE_BREAK_RE.split(source_text)]
    song = Song()
    builder = _RowBuilder()
    current: Section | None = None
    pending_modulation: str | None = None
    saw_blank = False

    def open_section(name: str) -> Section:
        section = Section(name=name, preceded_by_blank_line=saw_blank)
        song.sections.append(section)
        return section

    i = 0
    while i < len(lines):
        line = lines[i]

        if not line.strip():
            saw_blank = True
            i += 1
            continue

        header = HEADER_RE.match(line)
        if header:
            current = open_section(header.group(1).strip())
            saw_blank = False
            i += 1
            continue

        marker_text = extract_marker_text(line)
        if marker_text is not None:
            if current is None:
                current = open_section(UNTITLED)
            current.note = marker_text
            pending_modulation = marker_text
            i += 1
            continue

        # Chord line + lyric line
        if i + 1 >= len(lines):
            logger.debug("Dropping unpaired chord line at end of chart: %r", line)
            break
        lyric_line = lines[i + 1]
        if is_header(lyric_line) or is_marker(lyric_line):
            logger.debug("Dropping line %d, no lyric line follows: %r", i + 1, line)
            i += 1
            continue

        if current is None:
            current = open_section(UNTITLED)
        current.rows.append(
            builder.build(
                line,
                lyric_line,
                modulation_note=pending_modulation,
                preceded_by_blank_line=saw_blank,
            )
        )
        pending_modulation = None
        saw_blank = False
        i += 2

    return song

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class ChordToken:
    """A chord recognised in a chord line, e.g. ``IIm7`` at column 4."""

    text: str
    start_column: int


@dataclass
class BarSlice:
    """The content of one measure: everything between two bar separators.

    ``start_column`` / ``end_column`` index into the untrimmed chord line
    (end exclusive); ``text`` is the trimmed content.
    """

    start_column: int
    end_column: int
    text: str


@dataclass
class Row:
    """A chord line paired with the lyric line beneath it.

    Example::

        |   IIm     V7   |  Imaj7
        No existe un momento del día,
    """

    chord_line: str  # tabs expanded, pipes kept
    lyrics: str  # verbatim, not trimmed
    chord_tokens: list[ChordToken] = field(default_factory=list)
    bar_boundary_columns: list[int] = field(default_factory=list)
    bar_slices: list[BarSlice] = field(default_factory=list)
    repeat_count: int | None = None  # from a "(x3)" hint, always >= 2
    modulation_note: str | None = None
    preceded_by_blank_line: bool = False


@dataclass
class Section:
    """A named block of a song: ``[Intro]``, ``[Coro]``, ..."""

    name: str
    rows: list[Row] = field(default_factory=list)
    note: str | None = None  # e.g. "IV" from a "{Mod IV}" marker
    preceded_by_blank_line: bool = False


@dataclass
class Song:
    """Parsed chord chart."""

    sections: list[Section] = field(default_factory=list)

    def rows(self) -> Iterator[Row]:
        """Yield every row of every section in song order."""
        for section in self.sections:
            yield from section.rows

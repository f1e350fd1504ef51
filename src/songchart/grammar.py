"""Chord grammars shared by the chart parser and the degree converter.

Two notations are recognised:

  "degree"    Roman numerals relative to a key:  IIm7  bVII  ♯IVdim  vi
  "absolute"  note names:                       Dm7   Bb/D  F#m7b5  Cmaj7

Each grammar is assembled from named parts so that a match can be taken
apart again (accidental / numeral / quality / extensions, or root / quality /
extensions / bass).  Alternatives are listed in the order they are tried;
the regex engine backtracks into shorter alternatives when a longer one
would leave the token glued to a following word character, so ``Cm7b5``
splits as quality ``m7`` + extension ``b5`` and ``Imaj7`` is never read as
``Im`` + ``aj7``.

A token must not touch an ASCII letter, digit or underscore on either side.
``°``, ``ø``, ``♭`` and ``♯`` are *not* word characters, so ``vii°`` and
``E/G#`` are matched whole.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

_NOT_AFTER_WORD = r"(?<![A-Za-z0-9_])"
_NOT_BEFORE_WORD = r"(?![A-Za-z0-9_])"

# ---------------------------------------------------------------------------
# Degree notation
# ---------------------------------------------------------------------------

_DEGREE_ACCIDENTAL = r"♭♭|♯♯|[b#♭♯]"

# Upper case for major, lower case spellings are accepted as well.
_NUMERAL = r"I{1,3}|IV|V|VI|VII|i{1,3}|iv|v|vi|vii"

_DEGREE_QUALITY = r"m|°|dim|aug|ø|sus\d*"

_DEGREE_EXTENSION = r"maj7|6|7|9|11|13|add\d+|b\d+|#\d+"

DEGREE_CHORD_RE = re.compile(
    _NOT_AFTER_WORD
    + r"(?P<accidental>" + _DEGREE_ACCIDENTAL + r")?"
    + r"(?P<numeral>" + _NUMERAL + r")"
    + r"(?P<quality>" + _DEGREE_QUALITY + r")?"
    + r"(?P<extensions>(?:" + _DEGREE_EXTENSION + r")*)"
    + _NOT_BEFORE_WORD
)

# ---------------------------------------------------------------------------
# Absolute notation
# ---------------------------------------------------------------------------

_NOTE = r"[A-G][#b]?"

# Quality or first extension directly after the root.
_ABSOLUTE_QUALITY = (
    r"maj7|maj9|maj11|maj13"
    r"|m|m7|m9|m11|m13|m6|mMaj7"
    r"|dim7|dim|aug"
    r"|add\d+"
    r"|sus\d*"
    r"|°|ø"
    r"|6|7|9|11|13"
    r"|b5|#5|b9|#9|b11|#11|b13|#13"
    r"|(?:m)?7b5|(?:m)?7#5|(?:m)?7"
)

# Further alterations stacked after the quality: Cm7b5#9, G7sus4add9.
_ABSOLUTE_EXTENSION = r"add\d+|sus\d*|b5|#5|b9|#9|b11|#11|b13|#13"

ABSOLUTE_CHORD_RE = re.compile(
    _NOT_AFTER_WORD
    + r"(?P<root>" + _NOTE + r")"
    + r"(?P<quality>" + _ABSOLUTE_QUALITY + r")?"
    + r"(?P<extensions>(?:" + _ABSOLUTE_EXTENSION + r")*)"
    + r"(?:/(?P<bass>" + _NOTE + r"))?"
    + _NOT_BEFORE_WORD
)


# ---------------------------------------------------------------------------
# Tagged matches
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DegreeChord:
    """A degree chord found in a line, taken apart into its grammar parts."""

    text: str
    start: int
    end: int
    accidental: str | None
    numeral: str
    quality: str | None
    extensions: str  # possibly empty run, e.g. "7b9"


@dataclass(frozen=True)
class AbsoluteChord:
    """An absolute chord found in a line, taken apart into its grammar parts."""

    text: str
    start: int
    end: int
    root: str
    quality: str | None
    extensions: str
    bass: str | None

    @property
    def suffix(self) -> str:
        """Everything written between the root and the slash bass."""
        return (self.quality or "") + self.extensions


def find_degree_chords(line: str) -> list[DegreeChord]:
    """Return every degree chord in *line*, left to right, non-overlapping.

    >>> [(c.text, c.start) for c in find_degree_chords("|  IIm7   V7 | Imaj7")]
    [('IIm7', 3), ('V7', 10), ('Imaj7', 15)]
    """
    return [
        DegreeChord(
            text=m.group(),
            start=m.start(),
            end=m.end(),
            accidental=m.group("accidental"),
            numeral=m.group("numeral"),
            quality=m.group("quality"),
            extensions=m.group("extensions"),
        )
        for m in DEGREE_CHORD_RE.finditer(line)
    ]


def find_absolute_chords(line: str) -> Iterator[AbsoluteChord]:
    """Yield every absolute chord in *line*, left to right, non-overlapping."""
    for m in ABSOLUTE_CHORD_RE.finditer(line):
        yield AbsoluteChord(
            text=m.group(),
            start=m.start(),
            end=m.end(),
            root=m.group("root"),
            quality=m.group("quality"),
            extensions=m.group("extensions"),
            bass=m.group("bass"),
        )

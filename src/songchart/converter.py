"""Absolute chord names → Roman scale degrees relative to a tonic.

    >>> convert_to_degrees("| Dm7  G7 | Cmaj7 |", "C")
    '| IIm7  V7 | Imaj7 |'

Each chord root (and slash bass) is mapped to the nearest degree of the
tonic's major scale.  When the root is not diatonic the distance to that
degree becomes an accidental on the numeral: ``F#`` in C is ``♯IV``.
Quality and extensions are carried through as written, except ``dim7``
which becomes ``°7``.  Text between chords is left untouched.
"""

import logging
import re

from .exceptions import UnknownTonicError
from .grammar import AbsoluteChord, find_absolute_chords

logger = logging.getLogger(__name__)

PITCH_CLASSES = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "E#": 5,
    "Fb": 4,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "B#": 0,
    "Cb": 11,
}

# Semitones above the tonic for degrees I..VII of the major scale.
MAJOR_OFFSETS = (0, 2, 4, 5, 7, 9, 11)

NUMERALS = ("I", "II", "III", "IV", "V", "VI", "VII")

ACCIDENTAL_MARKS = {-2: "♭♭", -1: "♭", 0: "", 1: "♯", 2: "♯♯"}

_TONIC_RE = re.compile(r"^\s*([A-Za-z])([#b]?)")

_LINE_BREAK_RE = re.compile(r"\r?\n")


# ---------------------------------------------------------------------------
# Pitch classes
# ---------------------------------------------------------------------------


def pitch_class(note: str) -> int | None:
    """Return the pitch class (0-11) of a note name, or None if unknown.

    Only the first letter is case-normalised: ``"bb"`` is B-flat, ``"BB"``
    is not a note.
    """
    note = note.strip()
    if not note:
        return None
    return PITCH_CLASSES.get(note[0].upper() + note[1:])


def tonic_pitch_class(tonic: str) -> int:
    """Return the pitch class of *tonic*, ignoring any trailing quality.

    ``"F#m"`` → 6, ``"bb"`` → 10.

    Raises:
        UnknownTonicError: the leading letter and accidental do not name a
            pitch class (``"H"``, ``""``).
    """
    m = _TONIC_RE.match(tonic)
    pc = pitch_class(m.group(1) + m.group(2)) if m else None
    if pc is None:
        raise UnknownTonicError(tonic)
    return pc


def nearest_degree(pc: int, tonic_pc: int) -> tuple[int, int]:
    """Return ``(degree_index, accidental)`` of the scale degree closest to *pc*.

    The signed distance to each degree is wrapped into [-6, 5].  The first
    degree with the strictly smallest absolute distance wins, so an exact tie
    goes to the lower numeral (G# in C is ``♯V``, not ``♭VI``).  Every pitch
    class lies within a semitone of some major-scale degree, so the tritone
    wrap never decides a result.
    """
    best_index, best_distance = 0, 99
    for index, offset in enumerate(MAJOR_OFFSETS):
        degree_pc = (tonic_pc + offset) % 12
        distance = ((pc - degree_pc + 18) % 12) - 6
        if abs(distance) < abs(best_distance):
            best_index, best_distance = index, distance
    return best_index, max(-2, min(2, best_distance))


def degree_name(pc: int, tonic_pc: int) -> str:
    """Return the accidental + numeral for *pc*, e.g. ``"♭VII"``."""
    index, accidental = nearest_degree(pc, tonic_pc)
    return ACCIDENTAL_MARKS[accidental] + NUMERALS[index]


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------


def normalize_suffix(suffix: str) -> str:
    """Map a chord suffix onto degree notation (``dim7`` → ``°7``)."""
    if suffix.lower() == "dim7":
        return "°7"
    return suffix


def chord_to_degree(chord: AbsoluteChord, tonic_pc: int) -> str:
    """Rewrite one absolute chord as a degree chord.

    A root that cannot be resolved leaves the chord as written; a bass that
    cannot be resolved is dropped from the result.
    """
    root_pc = pitch_class(chord.root)
    if root_pc is None:
        logger.debug("Leaving %r unconverted: unknown root", chord.text)
        return chord.text

    degree = degree_name(root_pc, tonic_pc) + normalize_suffix(chord.suffix)
    if chord.bass:
        bass_pc = pitch_class(chord.bass)
        if bass_pc is not None:
            return f"{degree}/{degree_name(bass_pc, tonic_pc)}"
    return degree


def convert_line(line: str, tonic_pc: int) -> str:
    parts: list[str] = []
    last = 0
    for chord in find_absolute_chords(line):
        parts.append(line[last:chord.start])
        parts.append(chord_to_degree(chord, tonic_pc))
        last = chord.end
    parts.append(line[last:])
    return "".join(parts)


def convert_to_degrees(source_text: str, tonic: str) -> str:
    """Return *source_text* with every absolute chord rewritten as a degree.

    Args:
        source_text: Any text; lines are converted independently.
        tonic:       Key centre, e.g. ``"D"``, ``"Bb"``, ``"F#m"``.

    Raises:
        UnknownTonicError: *tonic* is not a recognised note.  Nothing is
            converted in that case.
    """
    tonic_pc = tonic_pitch_class(tonic)
    return "\n".join(convert_line(line, tonic_pc) for line in _LINE_BREAK_RE.split(source_text))

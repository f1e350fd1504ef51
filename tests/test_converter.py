import pytest

from songchart.converter import (
    chord_to_degree,
    convert_to_degrees,
    nearest_degree,
    pitch_class,
    tonic_pitch_class,
)
from songchart.exceptions import UnknownTonicError
from songchart.grammar import AbsoluteChord

# ---------------------------------------------------------------------------
# Pitch classes
# ---------------------------------------------------------------------------


def test_pitch_class_enharmonics():
    assert pitch_class("C#") == pitch_class("Db") == 1
    assert pitch_class("A#") == pitch_class("Bb") == 10


def test_pitch_class_diatonic_edge_spellings():
    assert pitch_class("B#") == 0
    assert pitch_class("Cb") == 11
    assert pitch_class("E#") == 5
    assert pitch_class("Fb") == 4


def test_pitch_class_uppercases_leading_letter_only():
    assert pitch_class("eb") == 3
    assert pitch_class("  f# ") == 6
    assert pitch_class("EB") is None


def test_pitch_class_unknown():
    assert pitch_class("H") is None
    assert pitch_class("") is None


def test_tonic_ignores_trailing_quality():
    assert tonic_pitch_class("F#m") == 6
    assert tonic_pitch_class("Am7") == 9
    assert tonic_pitch_class("bb") == 10


@pytest.mark.parametrize("tonic", ["H", "", "   ", "#C", "X#"])
def test_tonic_unknown(tonic):
    with pytest.raises(UnknownTonicError) as exc_info:
        tonic_pitch_class(tonic)
    assert exc_info.value.tonic == tonic


# ---------------------------------------------------------------------------
# nearest_degree
# ---------------------------------------------------------------------------


def test_nearest_degree_diatonic():
    assert nearest_degree(0, 0) == (0, 0)
    assert nearest_degree(7, 0) == (4, 0)
    assert nearest_degree(11, 0) == (6, 0)


def test_nearest_degree_sharp():
    # F# in C: a semitone above IV
    assert nearest_degree(6, 0) == (3, 1)


def test_nearest_degree_tie_goes_to_lower_numeral():
    # Bb in C is as close to VI (+1) as to VII (-1)
    assert nearest_degree(10, 0) == (5, 1)
    # Eb in C: II (+1) wins over III (-1)
    assert nearest_degree(3, 0) == (1, 1)


def test_nearest_degree_relative_to_tonic():
    # D in G is V
    assert nearest_degree(2, 7) == (4, 0)


# ---------------------------------------------------------------------------
# chord_to_degree
# ---------------------------------------------------------------------------


def _chord(root, quality=None, extensions="", bass=None, text="?") -> AbsoluteChord:
    return AbsoluteChord(
        text=text, start=0, end=len(text), root=root, quality=quality, extensions=extensions, bass=bass
    )


def test_chord_to_degree_unknown_root_left_as_written():
    assert chord_to_degree(_chord("H", quality="m", text="Hm"), 0) == "Hm"


def test_chord_to_degree_unknown_bass_dropped():
    assert chord_to_degree(_chord("G", quality="7", bass="H", text="G7/H"), 0) == "V7"


def test_chord_to_degree_dim7_symbol():
    assert chord_to_degree(_chord("B", quality="dim7", text="Bdim7"), 0) == "VII°7"


# ---------------------------------------------------------------------------
# convert_to_degrees
# ---------------------------------------------------------------------------


def test_diatonic_triads_in_c():
    assert convert_to_degrees("C Dm Em F G Am Bdim", "C") == "I IIm IIIm IV V VIm VIIdim"


def test_chromatic_root_keeps_quality():
    assert convert_to_degrees("F#m7", "C") == "♯IVm7"


def test_slash_chord_resolves_root_and_bass():
    assert convert_to_degrees("E/G#", "C") == "III/♯V"


def test_slash_chord_keeps_quality():
    assert convert_to_degrees("Am7/G", "C") == "VIm7/V"


def test_flat_root():
    assert convert_to_degrees("Bb", "F") == "IV"
    assert convert_to_degrees("Db", "C") == "♯I"


def test_dim7_becomes_symbol():
    assert convert_to_degrees("C#dim7", "D") == "VII°7"


def test_other_qualities_pass_through():
    assert convert_to_degrees("Cmaj7 Caug Cdim Csus4 Cadd9 C7b9", "C") == (
        "Imaj7 Iaug Idim Isus4 Iadd9 I7b9"
    )


def test_half_diminished():
    assert convert_to_degrees("Bm7b5 E7", "A") == "IIm7b5 V7"


def test_other_tonic():
    assert convert_to_degrees("D7 G C Em", "G") == "V7 I IV VIm"


def test_minor_tonic_uses_letter_only():
    assert convert_to_degrees("F#m C#7", "F#m") == "Im V7"


def test_bar_lines_and_spacing_preserved():
    line = "|   Dm7      G7   |  Cmaj7    |"
    assert convert_to_degrees(line, "C") == "|   IIm7      V7   |  Imaj7    |"


def test_lines_converted_independently():
    assert convert_to_degrees("C G\nAm F\n", "C") == "I V\nVIm IV\n"


def test_crlf_normalized():
    assert convert_to_degrees("C\r\nG", "C") == "I\nV"


def test_non_chord_text_untouched():
    text = "[Verse] Every good boy does fine"
    assert convert_to_degrees(text, "C") == text


def test_unknown_tonic_raises():
    with pytest.raises(UnknownTonicError, match="Unknown tonic: H"):
        convert_to_degrees("C G Am F", "H")


def test_empty_text():
    assert convert_to_degrees("", "C") == ""

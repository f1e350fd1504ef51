from songchart.grammar import find_absolute_chords, find_degree_chords


def _degree_texts(line: str) -> list[str]:
    return [c.text for c in find_degree_chords(line)]


def _absolute(line: str):
    return list(find_absolute_chords(line))


# ---------------------------------------------------------------------------
# Degree chords
# ---------------------------------------------------------------------------


def test_degree_offsets():
    chords = find_degree_chords("|  IIm7   V7 | Imaj7")
    assert [(c.text, c.start, c.end) for c in chords] == [
        ("IIm7", 3, 7),
        ("V7", 10, 12),
        ("Imaj7", 15, 20),
    ]


def test_degree_all_numerals():
    assert _degree_texts("I II III IV V VI VII") == ["I", "II", "III", "IV", "V", "VI", "VII"]
    assert _degree_texts("i ii iii iv v vi vii") == ["i", "ii", "iii", "iv", "v", "vi", "vii"]


def test_degree_parts():
    (chord,) = find_degree_chords("VIIm7b5")
    assert chord.accidental is None
    assert chord.numeral == "VII"
    assert chord.quality == "m"
    assert chord.extensions == "7b5"


def test_degree_maj7_not_split_into_minor():
    (chord,) = find_degree_chords("Imaj7")
    assert chord.quality is None
    assert chord.extensions == "maj7"


def test_degree_ascii_accidentals():
    flat, sharp = find_degree_chords("bVII  #IVm")
    assert (flat.accidental, flat.numeral, flat.start) == ("b", "VII", 0)
    assert (sharp.accidental, sharp.numeral, sharp.quality, sharp.start) == ("#", "IV", "m", 6)


def test_degree_symbol_accidentals():
    assert _degree_texts("♯VIdim  ♭III  ♭♭VII") == ["♯VIdim", "♭III", "♭♭VII"]


def test_degree_symbol_qualities():
    assert _degree_texts("vii°  iiø7") == ["vii°", "iiø7"]


def test_degree_sus_and_add():
    assert _degree_texts("Vsus4  IVadd9  V7#9") == ["Vsus4", "IVadd9", "V7#9"]


def test_degree_ignores_words():
    assert _degree_texts("Vida Iglesia VIPs") == []


def test_degree_separated_by_pipes():
    assert _degree_texts("|I|IV|V|") == ["I", "IV", "V"]


# ---------------------------------------------------------------------------
# Absolute chords
# ---------------------------------------------------------------------------


def test_absolute_parts():
    (chord,) = _absolute("F#m7b5/E")
    assert chord.root == "F#"
    assert chord.quality == "m7"
    assert chord.extensions == "b5"
    assert chord.bass == "E"
    assert chord.suffix == "m7b5"


def test_absolute_plain_triads():
    chords = _absolute("C Dm Em F G Am Bdim")
    assert [c.text for c in chords] == ["C", "Dm", "Em", "F", "G", "Am", "Bdim"]
    assert [c.suffix for c in chords] == ["", "m", "m", "", "", "m", "dim"]


def test_absolute_sharp_root_matched_whole():
    (chord,) = _absolute("C# ")
    assert chord.text == "C#"
    assert chord.root == "C#"


def test_absolute_sharp_bass_matched_whole():
    (chord,) = _absolute("E/G#")
    assert (chord.root, chord.bass, chord.text) == ("E", "G#", "E/G#")


def test_absolute_flat_root():
    (chord,) = _absolute("Bbmaj7")
    assert chord.root == "Bb"
    assert chord.quality == "maj7"


def test_absolute_stacked_extensions():
    (chord,) = _absolute("G7sus4")
    assert chord.quality == "7"
    assert chord.extensions == "sus4"


def test_absolute_positions_in_line():
    chords = _absolute("| Dm7  G7 | Cmaj7 |")
    assert [(c.text, c.start, c.end) for c in chords] == [
        ("Dm7", 2, 5),
        ("G7", 7, 9),
        ("Cmaj7", 12, 17),
    ]


def test_absolute_ignores_words():
    assert _absolute("Bad Dog Every Fine") == []

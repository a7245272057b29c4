"""
Tests for core music primitives.

Tests cover:
- PitchClass, Interval, Note (pitch.py)
- ScaleType, Scale, generate_scale (scale.py)
- ChordShape, detect_chord, get_chord_notes, estimate_parent_key (chord.py)
"""

import pytest

from chuk_mcp_chordscope.core import (
    CHORD_SHAPES,
    DIATONIC_SCALES,
    PENTATONIC_SCALES,
    ChordResult,
    Interval,
    Note,
    PitchClass,
    ScaleFamily,
    ScaleType,
    chord_qualities,
    compatible_scale_types,
    detect_chord,
    detect_chord_from_midi,
    estimate_parent_key,
    generate_scale,
    get_chord_notes,
    get_chord_shape,
    interval_between,
    note_from_midi,
    parent_key_scale,
    scales_in_family,
    transpose,
)


def notes(*midi: int) -> list[Note]:
    return [note_from_midi(m) for m in midi]


class TestPitchClass:
    """Tests for PitchClass enum."""

    def test_pitch_values(self) -> None:
        """Pitch classes have correct values."""
        assert PitchClass.C == 0
        assert PitchClass.Cs == 1
        assert PitchClass.E == 4
        assert PitchClass.G == 7
        assert PitchClass.B == 11

    def test_transpose_up(self) -> None:
        """Transposing up works correctly."""
        assert transpose(PitchClass.C, 2) == PitchClass.D
        assert transpose(PitchClass.A, 3) == PitchClass.C

    def test_transpose_wraps(self) -> None:
        """Transposing wraps around the octave."""
        assert PitchClass.B.transpose(1) == PitchClass.C
        assert PitchClass.G.transpose(19) == PitchClass.D

    def test_transpose_down(self) -> None:
        """Negative semitones never produce a negative index."""
        assert transpose(PitchClass.C, -1) == PitchClass.B
        assert transpose(PitchClass.D, -14) == PitchClass.C

    def test_transpose_inverse(self) -> None:
        """Transposing back by the same amount returns the original."""
        for pc in PitchClass:
            for n in range(-30, 31):
                assert transpose(transpose(pc, n), -n) == pc

    def test_interval_between_self_is_unison(self) -> None:
        """Interval from a pitch class to itself is zero."""
        for pc in PitchClass:
            assert interval_between(pc, pc) == Interval.P1

    def test_interval_between_never_negative(self) -> None:
        """Intervals always land in 0-11."""
        for a in PitchClass:
            for b in PitchClass:
                assert 0 <= interval_between(a, b) <= 11

    def test_interval_between_values(self) -> None:
        """Ascending intervals are measured from the root."""
        assert interval_between(PitchClass.C, PitchClass.G) == Interval.P5
        assert interval_between(PitchClass.G, PitchClass.C) == Interval.P4
        assert interval_between(PitchClass.B, PitchClass.C) == Interval.m2

    def test_spell_uses_sharps(self) -> None:
        """Display names are sharps only."""
        assert PitchClass.C.spell() == "C"
        assert PitchClass.Cs.spell() == "C#"
        assert PitchClass.As.spell() == "A#"

    def test_parse(self) -> None:
        """Parse pitch class from string."""
        assert PitchClass.parse("C") == PitchClass.C
        assert PitchClass.parse("F#") == PitchClass.Fs
        assert PitchClass.parse("Bb") == PitchClass.As
        assert PitchClass.parse("gs") == PitchClass.Gs

    def test_parse_unknown(self) -> None:
        """Unknown names are rejected."""
        with pytest.raises(ValueError, match="Unknown pitch class"):
            PitchClass.parse("H")

    def test_to_midi(self) -> None:
        """Convert to MIDI note numbers."""
        assert PitchClass.C.to_midi(4) == 60
        assert PitchClass.A.to_midi(4) == 69
        assert PitchClass.C.to_midi(-1) == 0


class TestInterval:
    """Tests for Interval enum."""

    def test_named_intervals(self) -> None:
        """Named intervals have correct values."""
        assert Interval.P1.semitones == 0
        assert Interval.m3.semitones == 3
        assert Interval.M3.semitones == 4
        assert Interval.P5.semitones == 7
        assert Interval.M7.semitones == 11

    def test_aliases(self) -> None:
        """Extension aliases fold into the octave."""
        assert Interval.TT is Interval.d5
        assert Interval.NINTH is Interval.M2
        assert Interval.b9 is Interval.m2
        assert Interval.SHARP_NINTH is Interval.m3

    def test_normalize(self) -> None:
        """Compound and negative distances fold into 0-11."""
        assert Interval.normalize(14) == Interval.M2
        assert Interval.normalize(-1) == Interval.M7
        assert Interval.normalize(12) == Interval.P1

    def test_invert(self) -> None:
        """Inverting intervals works."""
        assert Interval.M3.invert() == Interval.m6
        assert Interval.P5.invert() == Interval.P4
        assert Interval.P1.invert() == Interval.P1


class TestNote:
    """Tests for Note and note_from_midi."""

    def test_middle_c(self) -> None:
        """MIDI 60 is C4."""
        note = note_from_midi(60)
        assert note.pitch_class == PitchClass.C
        assert note.octave == 4
        assert note.midi == 60
        assert str(note) == "C4"

    def test_sharp_note(self) -> None:
        """Black keys spell with sharps."""
        note = note_from_midi(61)
        assert str(note) == "C#4"
        assert note.name == "C#"

    def test_lowest_midi(self) -> None:
        """MIDI 0 is C-1."""
        note = note_from_midi(0)
        assert note.pitch_class == PitchClass.C
        assert note.octave == -1

    def test_negative_midi_is_consistent(self) -> None:
        """Out-of-range numbers still satisfy the invariant."""
        note = note_from_midi(-1)
        assert note.pitch_class == PitchClass.B
        assert note.octave == -2
        assert (note.octave + 1) * 12 + note.pitch_class == note.midi

    def test_invariant_holds(self) -> None:
        """midi == (octave + 1) * 12 + pitch class for every MIDI note."""
        for midi in range(128):
            note = note_from_midi(midi)
            assert (note.octave + 1) * 12 + note.pitch_class == midi

    def test_inconsistent_fields_rejected(self) -> None:
        """Fields that disagree cannot be constructed."""
        with pytest.raises(ValueError, match="Inconsistent note"):
            Note(PitchClass.C, 4, 61)

    def test_notes_are_hashable(self) -> None:
        """Equal notes collapse in a set."""
        assert len({note_from_midi(60), note_from_midi(60), note_from_midi(72)}) == 2


class TestScale:
    """Tests for scale generation."""

    def test_c_major(self) -> None:
        """C major has the white keys."""
        scale = generate_scale(PitchClass.C, ScaleType.MAJOR)
        assert scale.notes == (
            PitchClass.C,
            PitchClass.D,
            PitchClass.E,
            PitchClass.F,
            PitchClass.G,
            PitchClass.A,
            PitchClass.B,
        )
        assert scale.name == "C Major"

    def test_template_order_not_sorted(self) -> None:
        """Notes follow the template from the root, wrapping past B."""
        scale = generate_scale(PitchClass.G, ScaleType.MAJOR)
        assert scale.notes[0] == PitchClass.G
        assert scale.notes[3] == PitchClass.C
        assert scale.notes[6] == PitchClass.Fs

    def test_minor_pentatonic(self) -> None:
        """A minor pentatonic is A C D E G."""
        scale = generate_scale(PitchClass.A, ScaleType.MINOR_PENTATONIC)
        assert [pc.spell() for pc in scale.notes] == ["A", "C", "D", "E", "G"]

    def test_harmonic_minor(self) -> None:
        """Harmonic minor raises the seventh."""
        scale = generate_scale(PitchClass.A, ScaleType.HARMONIC_MINOR)
        assert scale.notes[-1] == PitchClass.Gs

    def test_lengths_for_every_root(self) -> None:
        """Diatonic scales have 7 notes, pentatonics 5."""
        for root in PitchClass:
            for scale_type in DIATONIC_SCALES:
                assert len(generate_scale(root, scale_type).notes) == 7
            for scale_type in PENTATONIC_SCALES:
                assert len(generate_scale(root, scale_type).notes) == 5

    def test_modes_share_templates(self) -> None:
        """Ionian is Major and Aeolian is Minor, under their own names."""
        ionian = generate_scale(PitchClass.D, ScaleType.IONIAN)
        major = generate_scale(PitchClass.D, ScaleType.MAJOR)
        assert ionian.notes == major.notes
        assert ionian.scale_type != major.scale_type
        aeolian = generate_scale(PitchClass.E, ScaleType.AEOLIAN)
        assert aeolian.notes == generate_scale(PitchClass.E, ScaleType.MINOR).notes

    def test_generate_from_name(self) -> None:
        """Scale types can be given by name."""
        scale = generate_scale(PitchClass.D, "dorian")
        assert scale.scale_type == ScaleType.DORIAN

    def test_parse(self) -> None:
        """Scale type names parse in several spellings."""
        assert ScaleType.parse("Harmonic Minor") == ScaleType.HARMONIC_MINOR
        assert ScaleType.parse("harmonic_minor") == ScaleType.HARMONIC_MINOR
        assert ScaleType.parse("MAJOR_PENTATONIC") == ScaleType.MAJOR_PENTATONIC
        assert ScaleType.parse("natural minor") == ScaleType.MINOR

    def test_unknown_scale_type(self) -> None:
        """Unknown scale types fail fast."""
        with pytest.raises(ValueError, match="Unknown scale type"):
            generate_scale(PitchClass.C, "bebop")

    def test_contains_and_degree(self) -> None:
        """Membership and degree lookups."""
        scale = generate_scale(PitchClass.C, ScaleType.MAJOR)
        assert scale.contains(PitchClass.G)
        assert not scale.contains(PitchClass.Cs)
        assert scale.degree_of(PitchClass.G) == 5
        assert scale.degree_of(PitchClass.Cs) is None

    def test_families(self) -> None:
        """Scale families list their members."""
        assert len(scales_in_family(ScaleFamily.DIATONIC)) == 11
        assert scales_in_family("Pentatonic") == PENTATONIC_SCALES

    def test_compatible_scales(self) -> None:
        """Chord qualities suggest fitting scales."""
        assert compatible_scale_types("Dom7") == (
            ScaleType.MIXOLYDIAN,
            ScaleType.MAJOR,
            ScaleType.MAJOR_PENTATONIC,
        )
        assert ScaleType.DORIAN in compatible_scale_types("min7")
        assert compatible_scale_types("m7b5") == (ScaleType.LOCRIAN, ScaleType.HARMONIC_MINOR)

    def test_compatible_scales_fallback(self) -> None:
        """Qualities without a mapping allow every scale."""
        assert compatible_scale_types("Aug") == tuple(ScaleType)


class TestChordShapes:
    """Tests for the chord shape table."""

    def test_table_size_and_order(self) -> None:
        """Twenty shapes, triads first."""
        assert len(CHORD_SHAPES) == 20
        assert chord_qualities()[:3] == ["Major", "Minor", "Dim"]
        assert chord_qualities()[-1] == "m6"

    def test_every_shape_has_root(self) -> None:
        """All shapes include the unison."""
        for shape in CHORD_SHAPES:
            assert shape.intervals[0] == Interval.P1

    def test_get_chord_shape(self) -> None:
        """Strict lookup by quality."""
        assert get_chord_shape("Maj9").size == 5
        with pytest.raises(ValueError, match="Unknown chord quality"):
            get_chord_shape("Maj13")


class TestDetectChord:
    """Tests for chord detection."""

    def test_c_major(self) -> None:
        """C E G is C Major."""
        chord = detect_chord(notes(60, 64, 67))
        assert chord == ChordResult(PitchClass.C, "Major", "C Major")

    def test_maj7_beats_triad(self) -> None:
        """The more specific match wins."""
        chord = detect_chord(notes(60, 64, 67, 71))
        assert chord is not None
        assert chord.quality == "Maj7"
        assert chord.name == "C Maj7"

    def test_too_few_notes(self) -> None:
        """Fewer than three distinct notes is never a chord."""
        assert detect_chord([]) is None
        assert detect_chord(notes(60, 64)) is None
        assert detect_chord(notes(60, 60, 64)) is None

    def test_no_matching_shape(self) -> None:
        """C D F# matches nothing."""
        assert detect_chord(notes(60, 62, 66)) is None

    def test_octave_independent(self) -> None:
        """Spread voicings reduce to pitch classes."""
        chord = detect_chord(notes(48, 67, 76))
        assert chord is not None
        assert chord.name == "C Major"

    def test_octave_doubling_does_not_make_a_triad(self) -> None:
        """Three notes but only two pitch classes."""
        assert detect_chord(notes(60, 72, 64)) is None

    def test_input_order_irrelevant(self) -> None:
        """Detection sorts its input."""
        assert detect_chord(notes(67, 64, 60, 71)) == detect_chord(notes(60, 64, 67, 71))

    def test_tie_break_prefers_lowest_root(self) -> None:
        """A C E G: min7 on A and 6 on C tie; the lowest note's reading wins."""
        chord = detect_chord(notes(57, 60, 64, 67))
        assert chord is not None
        assert chord.name == "A min7"

        chord = detect_chord(notes(60, 64, 67, 69))
        assert chord is not None
        assert chord.name == "C 6"

    def test_extra_notes_tolerated(self) -> None:
        """Shapes are subset matches."""
        chord = detect_chord(notes(60, 64, 67, 66))
        assert chord is not None
        assert chord.name == "C Major"

    def test_dominant_ninth(self) -> None:
        """C E G Bb D is a 9 chord."""
        chord = detect_chord(notes(60, 64, 67, 70, 74))
        assert chord is not None
        assert chord.name == "C 9"

    def test_sharp_nine(self) -> None:
        """The Hendrix chord keeps both thirds."""
        chord = detect_chord(notes(60, 64, 67, 70, 75))
        assert chord is not None
        assert chord.quality == "7#9"

    def test_diminished_seventh(self) -> None:
        """Symmetric chords take the lowest note as root."""
        chord = detect_chord(notes(60, 63, 66, 69))
        assert chord is not None
        assert chord.name == "C Dim7"

    def test_minor_and_sus(self) -> None:
        """Other triads."""
        assert detect_chord_from_midi([57, 60, 64]).name == "A Minor"
        assert detect_chord_from_midi([62, 67, 69]).name == "D Sus4"
        assert detect_chord_from_midi([62, 64, 69]).name == "D Sus2"
        assert detect_chord_from_midi([71, 74, 77]).name == "B Dim"


class TestGetChordNotes:
    """Tests for spelling chords as notes."""

    def test_c_major_octave_4(self) -> None:
        """Root at C4."""
        assert [n.midi for n in get_chord_notes(PitchClass.C, "Major", 4)] == [60, 64, 67]

    def test_dominant_seventh(self) -> None:
        """G7 from G3."""
        result = get_chord_notes(PitchClass.G, "Dom7", 3)
        assert [str(n) for n in result] == ["G3", "B3", "D4", "F4"]

    def test_ninth_keeps_table_order(self) -> None:
        """Folded extensions sit just above the root."""
        assert [n.midi for n in get_chord_notes(PitchClass.C, "9", 3)] == [48, 52, 55, 58, 50]

    def test_unknown_quality(self) -> None:
        """Unknown qualities give no notes."""
        assert get_chord_notes(PitchClass.C, "Maj13", 4) == []

    def test_round_trip_detection(self) -> None:
        """Every shape detects as itself from its own root."""
        for quality in ("Major", "Minor", "Maj7", "min7", "Dom7", "m7b5", "Maj9", "7b9"):
            chord = detect_chord(get_chord_notes(PitchClass.D, quality, 3))
            assert chord is not None
            assert chord.quality == quality
            assert chord.root == PitchClass.D


class TestParentKey:
    """Tests for parent-key estimation."""

    def test_minor_is_relative_minor(self) -> None:
        """A Minor lives in C."""
        assert estimate_parent_key(ChordResult.of(PitchClass.A, "Minor")) == PitchClass.C

    def test_diminished_is_leading_tone(self) -> None:
        """B Dim lives in C."""
        assert estimate_parent_key(ChordResult.of(PitchClass.B, "Dim")) == PitchClass.C

    def test_dominant(self) -> None:
        """G Dom7 lives in C."""
        assert estimate_parent_key(ChordResult.of(PitchClass.G, "Dom7")) == PitchClass.C
        assert estimate_parent_key(ChordResult.of(PitchClass.G, "7b9")) == PitchClass.C

    def test_major_is_tonic(self) -> None:
        """Major-type chords are their own key."""
        for quality in ("Major", "Maj7", "Maj9", "6", "add9", "Aug", "Sus2", "Sus4"):
            assert estimate_parent_key(ChordResult.of(PitchClass.F, quality)) == PitchClass.F

    def test_other_groups(self) -> None:
        """min7 and m7b5 follow their groups."""
        assert estimate_parent_key(ChordResult.of(PitchClass.D, "min7")) == PitchClass.F
        assert estimate_parent_key(ChordResult.of(PitchClass.B, "m7b5")) == PitchClass.C
        assert estimate_parent_key(ChordResult.of(PitchClass.Gs, "Dim7")) == PitchClass.A

    def test_unknown_quality_is_identity(self) -> None:
        """Anything else keeps the root."""
        assert estimate_parent_key(ChordResult.of(PitchClass.E, "quartal")) == PitchClass.E

    def test_parent_key_scale(self) -> None:
        """The parent key comes with its major scale."""
        scale = parent_key_scale(ChordResult.of(PitchClass.A, "Minor"))
        assert scale.root == PitchClass.C
        assert scale.scale_type == ScaleType.MAJOR

"""Tests for USTX reader."""

import pytest

from ustxconv.formats.ustx.reader import UstxReader, default_tempos, default_time_signatures
from ustxconv.formats.ustx.schema import UstxFormatError, load_project
from ustxconv.models.project import Format, ImportParams

MINIMAL = """\
name: Minimal
comment: ''
output_dir: Vocal
cache_dir: UCache
ustx_version: 0.6
expressions: {}
tracks:
- phonemizer: OpenUtau.Core.DefaultPhonemizer
voice_parts: []
"""


class TestUstxReader:
    """Test cases for importing USTX projects."""

    def test_project_metadata(self, ustx_file):
        project = UstxReader.read(ustx_file)

        assert project.format is Format.USTX
        assert project.name == "Sample Song"
        assert project.input_files == [ustx_file]
        assert project.measure_prefix == 0
        assert project.import_warnings == []

    def test_track_names(self, ustx_file):
        project = UstxReader.read(ustx_file)

        assert [t.id for t in project.tracks] == [0, 1]
        assert project.tracks[0].name == "Vocal"
        assert project.tracks[1].name == "Track 2"

    def test_notes_accumulate_across_voice_parts(self, ustx_file):
        project = UstxReader.read(ustx_file)
        notes = project.tracks[0].notes

        assert [(n.id, n.key, n.lyric, n.phoneme, n.tick_on, n.tick_off) for n in notes] == [
            (0, 60, "ka", "k a", 480, 960),
            (1, 64, "s a", "s a", 960, 1440),
            (2, 65, "mi", None, 1920, 2400),
        ]

    def test_second_track_notes(self, ustx_file):
        project = UstxReader.read(ustx_file)
        notes = project.tracks[1].notes

        assert [(n.key, n.lyric, n.tick_on, n.tick_off) for n in notes] == [(67, "la", 0, 960)]

    def test_dropped_items_reported(self, ustx_file):
        dropped = []
        UstxReader.read(ustx_file, dropped=dropped)

        assert [d.kind for d in dropped] == ["note", "voice_part"]
        assert dropped[0].voice_part_index == 0
        assert dropped[0].note_index == 1
        assert dropped[1].voice_part_index == 1
        assert dropped[1].track_index == 5

    def test_tempo_and_time_signature(self, ustx_file):
        project = UstxReader.read(ustx_file)

        assert [(t.tick_position, t.bpm) for t in project.tempos] == [(0, 120.0)]
        # Empty list falls back to beat_per_bar / beat_unit
        assert [
            (t.measure_position, t.numerator, t.denominator) for t in project.time_signatures
        ] == [(0, 3, 4)]

    def test_pitch_includes_curve(self, ustx_file):
        project = UstxReader.read(ustx_file)
        pitch = {p.tick: p.cents for p in project.tracks[0].pitch.points}

        # pitd rises 0 -> 50 cents between ticks 480 and 960
        assert pitch[720] == pytest.approx(25.0)
        assert min(pitch) == 480
        assert max(pitch) == 2400

    def test_pitch_not_covering_gap_between_parts(self, ustx_file):
        project = UstxReader.read(ustx_file)
        ticks = [p.tick for p in project.tracks[0].pitch.points]

        assert not any(1440 < t < 1920 for t in ticks)
        assert ticks == sorted(ticks)

    def test_pitch_is_reduced(self, ustx_file):
        project = UstxReader.read(ustx_file)
        points = project.tracks[0].pitch.points

        for a, b in zip(points, points[1:]):
            assert (a.tick, a.cents) != (b.tick, b.cents)

    def test_simple_import_skips_pitch(self, ustx_file):
        project = UstxReader.read(ustx_file, ImportParams(simple_import=True))

        assert all(t.pitch is None for t in project.tracks)
        assert len(project.tracks[0].notes) == 3

    def test_track_without_voice_parts(self):
        project = UstxReader().parse_text(MINIMAL)

        assert len(project.tracks) == 1
        assert project.tracks[0].notes == []
        assert project.tracks[0].pitch is None

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            UstxReader.read(tmp_path / "missing.ustx")


class TestDefaults:
    """Test cases for tempo and time signature defaulting."""

    def test_defaults_without_globals(self):
        ustx = load_project(MINIMAL)

        assert [(t.tick_position, t.bpm) for t in default_tempos(ustx)] == [(0, 120.0)]
        assert [
            (t.measure_position, t.numerator, t.denominator)
            for t in default_time_signatures(ustx)
        ] == [(0, 4, 4)]

    def test_defaults_from_globals(self):
        ustx = load_project(MINIMAL + "bpm: 98.5\nbeat_per_bar: 6\nbeat_unit: 8\ntempos: []\n")

        assert default_tempos(ustx)[0].bpm == 98.5
        assert default_time_signatures(ustx)[0].numerator == 6
        assert default_time_signatures(ustx)[0].denominator == 8

    def test_explicit_lists_win(self):
        ustx = load_project(
            MINIMAL
            + "bpm: 98.5\n"
            + "tempos:\n- {position: 0, bpm: 100}\n- {position: 1920, bpm: 150}\n"
            + "time_signatures:\n- {bar_position: 0, beat_per_bar: 5, beat_unit: 4}\n"
        )

        assert [(t.tick_position, t.bpm) for t in default_tempos(ustx)] == [
            (0, 100.0),
            (1920, 150.0),
        ]
        assert default_time_signatures(ustx)[0].numerator == 5


class TestSchemaErrors:
    """Test cases for documents that do not match the schema."""

    def test_missing_required_field(self):
        text = MINIMAL.replace("voice_parts: []\n", "")
        with pytest.raises(UstxFormatError, match="voice_parts"):
            UstxReader().parse_text(text)

    def test_wrong_value_type(self, ustx_text):
        text = ustx_text.replace("tone: 67", "tone: high")
        with pytest.raises(UstxFormatError, match=r"voice_parts\[2\]\.notes\[0\]\.tone"):
            UstxReader().parse_text(text)

    def test_not_a_mapping(self):
        with pytest.raises(UstxFormatError, match="mapping"):
            UstxReader().parse_text("- just\n- a list\n")

    def test_invalid_yaml(self):
        with pytest.raises(UstxFormatError):
            UstxReader().parse_text("name: [unclosed\n")

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            UstxReader().parse_text("42")


class TestTrackNamesAndCurves:
    """Test cases for track naming and pitd decoding."""

    def test_empty_track_name_preserved(self):
        text = MINIMAL.replace(
            "- phonemizer: OpenUtau.Core.DefaultPhonemizer\n",
            "- phonemizer: OpenUtau.Core.DefaultPhonemizer\n  track_name: ''\n"
            "- phonemizer: OpenUtau.Core.DefaultPhonemizer\n",
        )
        project = UstxReader().parse_text(text)

        assert project.tracks[0].name == ""
        assert project.tracks[1].name == "Track 2"

    def test_pitd_values_truncated(self):
        text = MINIMAL.replace(
            "voice_parts: []\n",
            """\
voice_parts:
- name: Part
  comment: ''
  track_no: 0
  position: 0
  notes:
  - position: 0
    duration: 480
    tone: 60
    lyric: a
    pitch:
      data:
      - {x: -25, y: 0, shape: io}
      - {x: 25, y: 0, shape: io}
      snap_first: true
    vibrato: {length: 0, period: 175, depth: 25, in: 10, out: 10, shift: 0, drift: 0}
  curves:
  - abbr: pitd
    xs: [0, 480]
    ys: [-12.7, -12.7]
""",
        )
        pitch = UstxReader().parse_text(text).tracks[0].pitch

        assert {p.tick: p.cents for p in pitch.points}[240] == -12.0


class TestSchemaDecoding:
    """Test cases for lenient parts of the document schema."""

    def test_unknown_keys_ignored(self):
        ustx = load_project(MINIMAL + "wave_parts: []\nexp_selectors: [vel]\n")
        assert ustx.name == "Minimal"

    def test_null_optional_values_use_defaults(self):
        ustx = load_project(MINIMAL.replace(
            "- phonemizer: OpenUtau.Core.DefaultPhonemizer\n",
            "- phonemizer: OpenUtau.Core.DefaultPhonemizer\n  mute: null\n  track_name: null\n",
        ))
        assert ustx.tracks[0].mute is False
        assert ustx.tracks[0].track_name is None

    def test_numeric_text_fields_read_as_strings(self):
        ustx = load_project(MINIMAL.replace("name: Minimal", "name: 2024"))
        assert ustx.name == "2024"

    def test_vibrato_fade_keys(self, ustx_text):
        ustx = load_project(ustx_text)
        vibrato = ustx.voice_parts[0].notes[2].vibrato

        assert (vibrato.fade_in, vibrato.fade_out) == (20.0, 20.0)
        dumped = vibrato.model_dump(by_alias=True)
        assert dumped["in"] == 20
        assert isinstance(dumped["in"], int)
        assert "fade_in" not in dumped

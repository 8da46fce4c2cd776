"""Round trip tests: USTX -> Project -> USTX -> Project."""

import asyncio

import pytest

from ustxconv.converters import generate, parse, parse_file, parse_text
from ustxconv.models.project import Feature, ImportParams


def note_tuples(project):
    return [
        [(n.key, n.lyric, n.phoneme, n.tick_on, n.tick_off) for n in track.notes]
        for track in project.tracks
    ]


def reimport(project, features=(Feature.CONVERT_PITCH,), params=None):
    result = generate(project, list(features))
    return parse_text(result.data.decode("utf-8"), params)


class TestRoundtrip:
    """Test cases for exporting and re-importing projects."""

    def test_notes_preserved(self, ustx_file):
        project = parse_file(ustx_file)
        again = reimport(project)

        assert note_tuples(again) == note_tuples(project)
        assert [t.name for t in again.tracks] == [t.name for t in project.tracks]

    def test_timing_preserved(self, ustx_file):
        project = parse_file(ustx_file)
        again = reimport(project)

        assert again.tempos == project.tempos
        assert again.time_signatures == project.time_signatures

    def test_second_export_is_stable(self, ustx_file):
        project = parse_file(ustx_file)
        first = generate(project, [Feature.CONVERT_PITCH])
        second = generate(parse_text(first.data.decode("utf-8")), [Feature.CONVERT_PITCH])

        assert note_tuples(parse_text(second.data.decode("utf-8"))) == note_tuples(project)

    def test_nothing_dropped_on_reimport(self, ustx_file):
        project = parse_file(ustx_file)
        dropped = []
        parse_text(generate(project).data.decode("utf-8"), dropped=dropped)

        assert dropped == []

    @pytest.mark.parametrize("track_index", [0, 1])
    def test_pitch_preserved(self, ustx_file, track_index):
        project = parse_file(ustx_file)
        again = reimport(project)

        original = project.tracks[track_index].pitch
        result = {p.tick: p.cents for p in again.tracks[track_index].pitch.points}
        for point in original.points:
            assert result[point.tick] == pytest.approx(point.cents, abs=0.6)

    def test_pitch_dropped_without_feature(self, ustx_file):
        project = parse_file(ustx_file)
        again = reimport(project, features=())

        pitch = again.tracks[0].pitch
        # Only the note glides remain; the pitd bump at tick 720 is gone
        assert {p.tick: p.cents for p in pitch.points}[720] == 0.0

    def test_simple_import_exports_notes_only(self, ustx_file):
        project = parse_file(ustx_file, ImportParams(simple_import=True))
        result = generate(project, [Feature.CONVERT_PITCH])
        again = parse_text(result.data.decode("utf-8"))

        assert note_tuples(again) == note_tuples(project)
        assert b"pitd\n" not in result.data.split(b"voice_parts:")[1]


class TestAsyncParse:
    """Test cases for the async import entry point."""

    def test_parse(self, ustx_file):
        project = asyncio.run(parse(ustx_file))

        assert project.name == "Sample Song"
        assert project.input_files == [ustx_file]
        assert note_tuples(project) == note_tuples(parse_file(ustx_file))

    def test_parse_reports_dropped(self, ustx_file):
        dropped = []
        asyncio.run(parse(ustx_file, dropped=dropped))
        assert len(dropped) == 2

    def test_parse_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            asyncio.run(parse(tmp_path / "missing.ustx"))


class TestTrackNameRoundtrip:
    def test_empty_track_name(self, simple_project):
        simple_project.tracks[0].name = ""
        again = reimport(simple_project)

        assert again.tracks[0].name == ""

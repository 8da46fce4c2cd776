"""Test configuration and fixtures."""

import pytest
from pathlib import Path

from ustxconv.models.project import Format, Note, Project, Tempo, TimeSignature, Track

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def ustx_file(fixtures_dir):
    """Return path to the sample USTX project."""
    return fixtures_dir / "sample.ustx"


@pytest.fixture
def ustx_text(ustx_file):
    """Return the text of the sample USTX project."""
    return ustx_file.read_text(encoding="utf-8")


@pytest.fixture
def simple_project():
    """Return a generic project with one track of non-overlapping notes."""
    notes = [
        Note(id=0, key=60, lyric="ka", phoneme="k a", tick_on=0, tick_off=480),
        Note(id=1, key=62, lyric="ki", tick_on=480, tick_off=960),
        Note(id=2, key=64, lyric="ku", phoneme="k u", tick_on=1200, tick_off=1440),
    ]
    return Project(
        format=Format.USTX,
        name="My Song",
        tracks=[Track(id=0, name="Lead", notes=notes)],
        time_signatures=[TimeSignature(0, 4, 4)],
        tempos=[Tempo(0, 120.0)],
    )

"""Shared fixtures for the course planner tests."""

from pathlib import Path

import pytest

from course_planner.config import Config
from course_planner.exceptions import ProbeFailedError
from course_planner.loader import parse_curriculum


class FakeProbe:
    """Duration probe backed by a name -> seconds map.

    A value of None makes the probe fail for that file.
    """

    def __init__(self, durations: dict):
        self.durations = durations
        self.calls: list[str] = []

    def __call__(self, path) -> float:
        name = Path(path).name
        self.calls.append(name)
        seconds = self.durations.get(name)
        if seconds is None:
            raise ProbeFailedError(name, reason="simulated failure", exit_code=1)
        return seconds


@pytest.fixture
def fake_probe():
    return FakeProbe


@pytest.fixture
def make_curriculum():
    """Build a Curriculum from (section title, [(lesson title, duration), ...]) pairs."""
    def _make(sections, course_title="Test Course"):
        return parse_curriculum({
            'courseTitle': course_title,
            'sections': [
                {
                    'sectionTitle': title,
                    'lessons': [
                        {'lessonTitle': name, 'duration': duration}
                        for name, duration in lessons
                    ],
                }
                for title, lessons in sections
            ],
        })
    return _make


@pytest.fixture
def make_slides():
    """Create empty SlideN files for the given slots."""
    def _make(directory: Path, slots, ext=".tif"):
        directory.mkdir(parents=True, exist_ok=True)
        for slot in slots:
            (directory / f"Slide{slot}{ext}").write_bytes(b"")
        return directory
    return _make


@pytest.fixture
def make_videos():
    """Create empty video files and return their directory."""
    def _make(directory: Path, names):
        directory.mkdir(parents=True, exist_ok=True)
        for name in names:
            (directory / name).write_bytes(b"")
        return directory
    return _make


@pytest.fixture
def config():
    return Config()

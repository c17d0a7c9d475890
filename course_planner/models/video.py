"""Local video file and match pair models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class LocalVideoFile:
    """A video file found on disk, with its probed duration."""

    file_name: str
    duration_seconds: int = 0
    error: Optional[str] = None  # probe failure message, if any

    def __post_init__(self):
        if not self.file_name:
            raise ValueError("file_name cannot be empty")
        if self.duration_seconds < 0:
            raise ValueError(f"duration_seconds cannot be negative: {self.duration_seconds}")

    @property
    def has_error(self) -> bool:
        return self.error is not None

    @property
    def is_usable(self) -> bool:
        """Whether the file can take part in matching."""
        return not self.has_error and self.duration_seconds > 0


@dataclass(frozen=True)
class LessonTarget:
    """A curriculum lesson flattened for matching."""

    title: str
    duration_seconds: int
    raw_duration: str
    section_index: int
    index_in_section: int
    section_title: str = ""

    @property
    def key(self) -> tuple[int, int]:
        return (self.section_index, self.index_in_section)


@dataclass(frozen=True)
class MatchedPair:
    """A lesson bound to a local video file."""

    lesson: LessonTarget
    file_name: str
    duration_delta: int

"""Slide inventory: how many numbered slides a plan needs, and whether they exist.

Slide numbering:
    1, 2      blank slides, placed before the first matched lesson of a section
    3, 4, ... sequential slots handed out in plan order: one section intro per
              section with a match, then an intro and an outro per matched lesson
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..exceptions import MissingSlidesError, SlideDirectoryNotFoundError
from ..logging_config import get_logger
from .matcher import MatchResult

logger = get_logger('slides')

RESERVED_SLOTS = (1, 2)
FIRST_SEQUENTIAL_SLOT = 3


def slide_pattern(slot: int) -> re.Pattern:
    """Regex for the on-disk file of one slot, e.g. 'Slide 7.TIFF'."""
    return re.compile(rf'^slide\s*{slot}\.(tif|tiff)$', re.IGNORECASE)


def expected_slide_name(slot: int) -> str:
    """Display name used when a slot has no file."""
    return f"Slide{slot}.tiff (or .tif)"


@dataclass(frozen=True)
class SlideRequirements:
    """Slide counts derived from a match result."""
    sections_with_match: int
    matched_lessons: int

    @classmethod
    def from_matches(cls, result: MatchResult) -> 'SlideRequirements':
        return cls(
            sections_with_match=result.sections_with_match,
            matched_lessons=result.matched_count,
        )

    @property
    def sequential_slides_needed(self) -> int:
        return self.sections_with_match + self.matched_lessons * 2

    @property
    def needs_reserved(self) -> bool:
        return self.matched_lessons > 0 or self.sections_with_match > 0

    @property
    def total(self) -> int:
        return len(self.required_slots())

    def required_slots(self) -> list[int]:
        """Every slot number that must exist on disk, ascending."""
        if not self.needs_reserved:
            return []
        last = FIRST_SEQUENTIAL_SLOT + self.sequential_slides_needed
        return list(RESERVED_SLOTS) + list(range(FIRST_SEQUENTIAL_SLOT, last))


@dataclass(frozen=True)
class SlideAllocation:
    """A slot number bound to a slide file name."""
    slot: int
    file_name: str
    found: bool = True


@dataclass
class SlideInventory:
    """Slot -> file name map for a validated slide directory."""
    slide_dir: Optional[str] = None
    files: dict[int, str] = field(default_factory=dict)

    def resolve(self, slot: int) -> SlideAllocation:
        """Allocation for a slot; falls back to the expected name when absent."""
        name = self.files.get(slot)
        if name is None:
            return SlideAllocation(slot=slot, file_name=f"Slide{slot}.tiff", found=False)
        return SlideAllocation(slot=slot, file_name=name)


class SlotAllocator:
    """Hands out sequential slide slots, one per call, across the whole plan."""

    def __init__(self, start: int = FIRST_SEQUENTIAL_SLOT):
        self._cursor = start

    @property
    def cursor(self) -> int:
        """The slot the next call will return."""
        return self._cursor

    def next_slot(self) -> int:
        slot = self._cursor
        self._cursor += 1
        return slot


class SlideValidator:
    """Checks a slide directory against the slots a plan requires."""

    def __init__(self, slide_dir: Union[str, Path]):
        self.slide_dir = Path(slide_dir)

    def _listing(self) -> list[str]:
        return sorted(entry.name for entry in self.slide_dir.iterdir() if entry.is_file())

    def scan(self, slots: list[int]) -> tuple[dict[int, str], list[int]]:
        """Map each slot to its first matching file; return (found, missing slots)."""
        listing = self._listing()
        found: dict[int, str] = {}
        missing: list[int] = []
        for slot in slots:
            pattern = slide_pattern(slot)
            match = next((name for name in listing if pattern.match(name)), None)
            if match is None:
                missing.append(slot)
            else:
                found[slot] = match
        return found, missing

    def validate(self, requirements: SlideRequirements) -> SlideInventory:
        """Resolve every required slot or fail.

        Raises:
            SlideDirectoryNotFoundError: Slides are required but the directory is missing
            MissingSlidesError: At least one required slot has no file
        """
        slots = requirements.required_slots()
        if not slots:
            logger.info("No lessons matched; slide validation skipped")
            return SlideInventory(slide_dir=str(self.slide_dir))

        if not self.slide_dir.is_dir():
            raise SlideDirectoryNotFoundError(str(self.slide_dir), required=len(slots))

        logger.info(
            f"Slide Scan: expecting {len(slots)} slides "
            f"(2 blanks + {requirements.sequential_slides_needed} sequential) in {self.slide_dir}"
        )
        found, missing = self.scan(slots)

        if missing:
            error = MissingSlidesError(
                str(self.slide_dir), [expected_slide_name(slot) for slot in missing]
            )
            logger.error(str(error))
            raise error

        logger.info(f"Slide Validation: all {len(slots)} required slides found")
        return SlideInventory(slide_dir=str(self.slide_dir), files=found)

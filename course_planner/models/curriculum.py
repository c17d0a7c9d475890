"""Curriculum data models: the scraped course structure, read-only to the planner."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CurriculumLesson:
    """One lesson scraped from the course page."""

    title: str
    duration: str              # raw published duration, e.g. "10:23"
    section_index: int         # 0-based position of the parent section
    index_in_section: int      # 0-based position within the section


@dataclass(frozen=True)
class CurriculumSection:
    """An ordered group of lessons under a titled heading."""

    title: str
    index: int
    lessons: tuple[CurriculumLesson, ...] = ()


@dataclass(frozen=True)
class Curriculum:
    """A complete scraped curriculum."""

    course_title: str = ""
    sections: tuple[CurriculumSection, ...] = field(default_factory=tuple)

    @property
    def lesson_count(self) -> int:
        """Total number of lessons across all sections."""
        return sum(len(section.lessons) for section in self.sections)

"""Pydantic schemas for the scraped curriculum document."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Curriculum, CurriculumLesson, CurriculumSection


class LessonDocument(BaseModel):
    """A lesson as written by the course scraper."""
    model_config = ConfigDict(populate_by_name=True)

    lesson_title: str = Field(alias="lessonTitle", description="Lesson title as published")
    duration: Optional[str] = Field(
        default=None,
        description="Published duration string (H:MM:SS, MM:SS or SS)"
    )

    @field_validator("duration", mode="before")
    @classmethod
    def _non_string_duration(cls, value: Any) -> Optional[str]:
        # Anything but a string normalizes to 0 s downstream
        if value is None or isinstance(value, str):
            return value
        return ""


class SectionDocument(BaseModel):
    """A section as written by the course scraper."""
    model_config = ConfigDict(populate_by_name=True)

    section_title: str = Field(default="", alias="sectionTitle", description="Section heading")
    lessons: list[LessonDocument] = Field(
        default_factory=list,
        description="Lessons in published order"
    )


class CurriculumDocument(BaseModel):
    """The full scraper output."""
    model_config = ConfigDict(populate_by_name=True)

    course_title: str = Field(default="", alias="courseTitle", description="Course title")
    sections: list[SectionDocument] = Field(
        min_length=1,
        description="Sections in published order; at least one is required"
    )

    def to_curriculum(self) -> Curriculum:
        """Convert to the read-only curriculum model, recording positions."""
        sections = []
        for section_index, section in enumerate(self.sections):
            lessons = tuple(
                CurriculumLesson(
                    title=lesson.lesson_title,
                    duration=lesson.duration or "",
                    section_index=section_index,
                    index_in_section=lesson_index,
                )
                for lesson_index, lesson in enumerate(section.lessons)
            )
            sections.append(CurriculumSection(
                title=section.section_title,
                index=section_index,
                lessons=lessons,
            ))
        return Curriculum(course_title=self.course_title, sections=tuple(sections))

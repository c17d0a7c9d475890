"""Master Plan data models.

The JSON produced by ``MasterPlan.to_json`` is the contract with the downstream
editing automation: key names, nesting and key order must not change.
"""

import json
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class PlanLesson:
    """One matched lesson with its slide and video assignments."""

    lesson_title: str
    udemy_duration: str
    lesson_index_in_section: int          # 1-based among the section's emitted lessons
    lesson_intro_slide: Optional[str]
    matched_video_file: str
    lesson_outro_slide: Optional[str]
    blank_slide_1: Optional[str] = None   # only on a section's first lesson
    blank_slide_2: Optional[str] = None
    global_lesson_index: Optional[int] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'lessonTitle': self.lesson_title,
            'udemyDuration': self.udemy_duration,
            'lessonIndexInSection': self.lesson_index_in_section,
            'blankSlide1': self.blank_slide_1,
            'blankSlide2': self.blank_slide_2,
            'lessonIntroSlide': self.lesson_intro_slide,
            'matchedVideoFile': self.matched_video_file,
            'lessonOutroSlide': self.lesson_outro_slide,
            'globalLessonIndex': self.global_lesson_index,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'PlanLesson':
        """Create from dictionary."""
        return cls(
            lesson_title=data['lessonTitle'],
            udemy_duration=data.get('udemyDuration', ''),
            lesson_index_in_section=data['lessonIndexInSection'],
            blank_slide_1=data.get('blankSlide1'),
            blank_slide_2=data.get('blankSlide2'),
            lesson_intro_slide=data.get('lessonIntroSlide'),
            matched_video_file=data['matchedVideoFile'],
            lesson_outro_slide=data.get('lessonOutroSlide'),
            global_lesson_index=data.get('globalLessonIndex'),
        )

    @property
    def timeline(self) -> list[str]:
        """Media items in editing order, skipping unassigned slots."""
        items = [
            self.blank_slide_1,
            self.blank_slide_2,
            self.lesson_intro_slide,
            self.matched_video_file,
            self.lesson_outro_slide,
        ]
        return [item for item in items if item]


@dataclass
class PlanSection:
    """A curriculum section holding at least one matched lesson."""

    udemy_section_title: str
    section_index: int                     # original 0-based curriculum index
    section_intro_slide: Optional[str]
    lessons: list[PlanLesson] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'udemySectionTitle': self.udemy_section_title,
            'sectionIndex': self.section_index,
            'sectionIntroSlide': self.section_intro_slide,
            'lessons': [lesson.to_dict() for lesson in self.lessons],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'PlanSection':
        """Create from dictionary."""
        return cls(
            udemy_section_title=data['udemySectionTitle'],
            section_index=data['sectionIndex'],
            section_intro_slide=data.get('sectionIntroSlide'),
            lessons=[PlanLesson.from_dict(item) for item in data.get('lessons', [])],
        )


@dataclass
class MasterPlan:
    """The persisted editing plan for one course."""

    course_title: str
    base_video_path: str
    base_slide_path: str
    project_data_path: str
    premiere_project_file: str
    sections: list[PlanSection] = field(default_factory=list)

    @property
    def lesson_count(self) -> int:
        return sum(len(section.lessons) for section in self.sections)

    def iter_lessons(self):
        """Yield lessons in plan order."""
        for section in self.sections:
            yield from section.lessons

    def assign_global_indexes(self) -> None:
        """Number every lesson from zero in plan order."""
        for index, lesson in enumerate(self.iter_lessons()):
            lesson.global_lesson_index = index

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'courseTitle': self.course_title,
            'baseVideoPath': self.base_video_path,
            'baseSlidePath': self.base_slide_path,
            'projectDataPath': self.project_data_path,
            'premiereProjectFile': self.premiere_project_file,
            'sections': [section.to_dict() for section in self.sections],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MasterPlan':
        """Create from dictionary."""
        return cls(
            course_title=data['courseTitle'],
            base_video_path=data['baseVideoPath'],
            base_slide_path=data['baseSlidePath'],
            project_data_path=data['projectDataPath'],
            premiere_project_file=data['premiereProjectFile'],
            sections=[PlanSection.from_dict(item) for item in data.get('sections', [])],
        )

    def to_json(self) -> str:
        """Canonical JSON representation."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> 'MasterPlan':
        return cls.from_dict(json.loads(text))

"""Assemble matched lessons and validated slides into a Master Plan."""

from pathlib import Path
from typing import Union

from ..core.layout import ProjectLayout, as_posix
from ..exceptions import PlanPersistenceError
from ..logging_config import get_logger
from ..models import Curriculum, MasterPlan, PlanLesson, PlanSection
from .matcher import MatchResult
from .slides import SlideInventory, SlotAllocator

logger = get_logger('plan_builder')


class MasterPlanBuilder:
    """Builds the plan from a validated slide inventory.

    Per section, the first matched lesson is laid out as
    [blank1, blank2, sectionIntro, lessonIntro, video, lessonOutro] and every
    later matched lesson as [lessonIntro, video, lessonOutro].
    """

    def __init__(self, inventory: SlideInventory):
        self.inventory = inventory

    def _slide(self, slot: int) -> str:
        allocation = self.inventory.resolve(slot)
        if not allocation.found:
            logger.warning(f"Slide slot {slot} unresolved, using {allocation.file_name}")
        return allocation.file_name

    def _build_section(self, section, matches: MatchResult, allocator: SlotAllocator):
        lessons: list[PlanLesson] = []
        section_intro = None

        for lesson in section.lessons:
            pair = matches.pair_for(section.index, lesson.index_in_section)
            if pair is None:
                continue

            first_in_section = not lessons
            if first_in_section:
                section_intro = self._slide(allocator.next_slot())

            entry = PlanLesson(
                lesson_title=lesson.title,
                udemy_duration=lesson.duration,
                lesson_index_in_section=len(lessons) + 1,
                lesson_intro_slide=self._slide(allocator.next_slot()),
                matched_video_file=pair.file_name,
                lesson_outro_slide=self._slide(allocator.next_slot()),
            )
            if first_in_section:
                entry.blank_slide_1 = self._slide(1)
                entry.blank_slide_2 = self._slide(2)
            lessons.append(entry)

        if not lessons:
            return None
        return PlanSection(
            udemy_section_title=section.title,
            section_index=section.index,
            section_intro_slide=section_intro,
            lessons=lessons,
        )

    def build(
        self,
        curriculum: Curriculum,
        matches: MatchResult,
        layout: ProjectLayout,
    ) -> MasterPlan:
        """Lay out every matched lesson in curriculum order."""
        allocator = SlotAllocator()
        plan = MasterPlan(
            course_title=curriculum.course_title or layout.course_name,
            base_video_path=as_posix(layout.video_dir),
            base_slide_path=as_posix(layout.slide_dir),
            project_data_path=as_posix(layout.project_data_dir),
            premiere_project_file=as_posix(layout.premiere_project_file),
        )

        for section in curriculum.sections:
            plan_section = self._build_section(section, matches, allocator)
            if plan_section is not None:
                plan.sections.append(plan_section)

        plan.assign_global_indexes()
        logger.info(
            f"Built Master Plan: {len(plan.sections)} sections, {plan.lesson_count} lessons, "
            f"last slide slot {allocator.cursor - 1 if plan.lesson_count else 0}"
        )
        return plan


def save_master_plan(plan: MasterPlan, path: Union[str, Path]) -> Path:
    """Write the plan's canonical JSON, creating the parent directory if needed.

    Raises:
        PlanPersistenceError: The directory or file could not be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(plan.to_json(), encoding='utf-8')
    except OSError as e:
        raise PlanPersistenceError(str(path), reason=str(e)) from e

    logger.info(f"Master Plan saved to: {as_posix(path)}")
    return path


def load_master_plan(path: Union[str, Path]) -> MasterPlan:
    """Read a persisted plan.

    Raises:
        PlanPersistenceError: Missing, unreadable or malformed plan file
    """
    path = Path(path)
    try:
        return MasterPlan.from_json(path.read_text(encoding='utf-8'))
    except OSError as e:
        raise PlanPersistenceError(str(path), reason=str(e)) from e
    except (ValueError, KeyError, TypeError) as e:
        raise PlanPersistenceError(str(path), reason=f"malformed plan ({e})") from e

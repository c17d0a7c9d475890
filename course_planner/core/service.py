"""PlanService - orchestrates the planning pipeline."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ..config import Config, get_config
from ..logging_config import get_logger
from ..models import Curriculum, LocalVideoFile, MasterPlan
from ..probe import FFprobeDurationProbe, ProbeBatchResult, ProgressCallback, scan_video_directory
from ..processing.duration import format_seconds
from ..processing.matcher import MatchEngine, MatchResult
from ..processing.plan_builder import MasterPlanBuilder, save_master_plan
from ..processing.slides import SlideRequirements, SlideValidator
from .layout import ProjectLayout

logger = get_logger('service')


@dataclass
class PlanOutcome:
    """Everything a caller needs to report on one planning run."""
    plan: MasterPlan
    plan_path: Path
    matches: MatchResult
    requirements: SlideRequirements
    messages: list[str] = field(default_factory=list)

    @property
    def unmatched_videos(self) -> list[LocalVideoFile]:
        return self.matches.unmatched_videos

    def unmatched_video_lines(self) -> list[str]:
        """'name (Duration: Xm Ys)' for every usable video no lesson took."""
        return [
            f"{video.file_name} (Duration: {format_seconds(video.duration_seconds)})"
            for video in self.unmatched_videos
        ]


class PlanService:
    """
    Main orchestrator for Master Plan generation.

    Handles the complete pipeline:
    1. Probing local video durations
    2. Matching lessons to videos
    3. Validating the slide inventory
    4. Building and persisting the Master Plan
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        probe: Optional[Callable[[Path], float]] = None,
    ):
        self.config = config or get_config()
        self.probe = probe or FFprobeDurationProbe(
            ffprobe_path=self.config.probe.ffprobe_path,
            timeout_seconds=self.config.probe.timeout_seconds,
        )
        self.engine = MatchEngine()

    def layout_for(
        self,
        base_dir,
        course_name: str,
        video_dir=None,
        slide_dir=None,
    ) -> ProjectLayout:
        """Project layout using the configured directory names."""
        return ProjectLayout.for_course(
            base_dir,
            course_name,
            config=self.config.layout,
            video_dir=video_dir,
            slide_dir=slide_dir,
        )

    def scan_videos(
        self,
        video_dir,
        on_progress: Optional[ProgressCallback] = None,
    ) -> ProbeBatchResult:
        """List and probe every video in a directory."""
        return scan_video_directory(
            video_dir,
            self.probe,
            extensions=self.config.videos.extensions,
            max_workers=self.config.probe.max_workers,
            on_progress=on_progress,
        )

    def generate(
        self,
        curriculum: Curriculum,
        videos: list[LocalVideoFile],
        layout: ProjectLayout,
    ) -> PlanOutcome:
        """Match, validate slides, build and save a fresh plan.

        Raises:
            SlideDirectoryNotFoundError: Slides needed but directory missing
            MissingSlidesError: Required slides missing on disk
            PlanPersistenceError: Plan could not be written
        """
        logger.info("--- Starting Video Matching Process ---")
        matches = self.engine.match_curriculum(curriculum, videos)
        return self._assemble(curriculum, matches, layout, [matches.summary()])

    def regenerate(
        self,
        curriculum: Curriculum,
        previous: PlanOutcome,
        layout: ProjectLayout,
    ) -> PlanOutcome:
        """Re-validate slides and rebuild using an earlier run's matches.

        Library API for callers that keep the previous PlanOutcome in memory,
        e.g. after slides were fixed; the CLI always runs a full generate().
        """
        logger.info("Re-using previous video matching results for regeneration")
        return self._assemble(
            curriculum,
            previous.matches,
            layout,
            ["Re-using previous video matching results for regeneration."],
        )

    def _assemble(
        self,
        curriculum: Curriculum,
        matches: MatchResult,
        layout: ProjectLayout,
        messages: list[str],
    ) -> PlanOutcome:
        if matches.unmatched_videos:
            messages.append(
                f"WARNING: {len(matches.unmatched_videos)} local video(s) were not matched "
                f"to any lesson. Remove slides that belong to them, then run again."
            )
            for video in matches.unmatched_videos:
                logger.warning(f"Unmatched local video: {video.file_name} ({video.duration_seconds}s)")

        requirements = SlideRequirements.from_matches(matches)
        messages.append(
            f"Slide Scan: expecting {requirements.total} sequentially numbered slides."
        )
        inventory = SlideValidator(layout.slide_dir).validate(requirements)

        plan = MasterPlanBuilder(inventory).build(curriculum, matches, layout)
        plan_path = save_master_plan(plan, layout.master_plan_path)
        messages.append(f"Master Plan saved to: {plan_path.as_posix()}")

        return PlanOutcome(
            plan=plan,
            plan_path=plan_path,
            matches=matches,
            requirements=requirements,
            messages=messages,
        )

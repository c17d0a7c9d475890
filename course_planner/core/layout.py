"""Per-course project paths."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from ..config import LayoutConfig

PathLike = Union[str, Path]


def safe_course_name(name: str) -> str:
    """Course name usable as a file or directory name.

    Characters outside letters, digits, underscore, whitespace, hyphen and
    dot become underscores; whitespace runs become one underscore; trailing
    dots are removed.
    """
    safe = re.sub(r'[^\w\s\-.]', '_', name.strip(), flags=re.ASCII)
    safe = re.sub(r'\s+', '_', safe)
    return re.sub(r'\.+$', '', safe)


def as_posix(path: PathLike) -> str:
    """Render a path with forward slashes, as the plan document expects."""
    return str(path).replace('\\', '/')


@dataclass(frozen=True)
class ProjectLayout:
    """Where one course's inputs live and where its plan goes."""
    course_name: str
    course_root: Path
    video_dir: Path
    slide_dir: Path
    project_data_dir: Path
    premiere_project_file: Path

    @classmethod
    def for_course(
        cls,
        base_dir: PathLike,
        course_name: str,
        config: Optional[LayoutConfig] = None,
        video_dir: Optional[PathLike] = None,
        slide_dir: Optional[PathLike] = None,
    ) -> 'ProjectLayout':
        """Derive the layout under ``base_dir/<safe course name>``.

        Args:
            base_dir: Parent directory holding all courses
            course_name: Human course name
            config: Directory names (defaults from LayoutConfig)
            video_dir: Override for the raw video directory
            slide_dir: Override for the slide directory

        Raises:
            ValueError: The course name is empty after sanitizing
        """
        config = config or LayoutConfig()
        safe_name = safe_course_name(course_name)
        if not safe_name:
            raise ValueError(f"Invalid course name after sanitization: '{course_name}'")

        root = Path(base_dir) / safe_name
        return cls(
            course_name=course_name,
            course_root=root,
            video_dir=Path(video_dir) if video_dir else root / config.raw_videos_dir,
            slide_dir=Path(slide_dir) if slide_dir else root / config.slides_dir,
            project_data_dir=root / config.project_data_dir,
            premiere_project_file=root / config.premiere_projects_dir / f"{safe_name}.prproj",
        )

    @property
    def safe_name(self) -> str:
        return safe_course_name(self.course_name)

    @property
    def master_plan_path(self) -> Path:
        return self.project_data_dir / f"{self.safe_name}_MasterPlan.json"

"""Lesson-to-video matching by duration, with a title tie-break.

Matching is a greedy single pass over lessons in curriculum order. Each lesson
takes the closest unclaimed file within the tolerance; the file is then
claimed and unavailable to later lessons. Earlier lessons therefore win
ambiguous files, and identical inputs always give identical pairings.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from ..logging_config import get_logger
from ..models import Curriculum, LessonTarget, LocalVideoFile, MatchedPair
from .duration import parse_duration_to_seconds
from .similarity import title_distance

logger = get_logger('matcher')

# Maximum allowed |lesson - file| duration difference, in seconds
MATCH_TOLERANCE_SECONDS = 1


def flatten_curriculum(curriculum: Curriculum) -> list[LessonTarget]:
    """Lessons in traversal order, with parsed target durations."""
    return [
        LessonTarget(
            title=lesson.title,
            duration_seconds=parse_duration_to_seconds(lesson.duration),
            raw_duration=lesson.duration,
            section_index=section.index,
            index_in_section=lesson.index_in_section,
            section_title=section.title,
        )
        for section in curriculum.sections
        for lesson in section.lessons
    ]


class CandidatePool:
    """Local video files available for matching, in scan order.

    Files with a probe error or a zero duration never become eligible.
    A file can be claimed exactly once.
    """

    def __init__(self, files: Iterable[LocalVideoFile]):
        self._files = list(files)
        self._by_name = {f.file_name: f for f in self._files}
        self._claimed: set[str] = set()

    def __len__(self) -> int:
        return len(self._files)

    def eligible(self) -> Iterator[LocalVideoFile]:
        """Unclaimed, usable files in original order."""
        for video in self._files:
            if video.is_usable and video.file_name not in self._claimed:
                yield video

    def claim(self, file_name: str) -> bool:
        """Take a file out of the pool. False if unknown, unusable or already taken."""
        video = self._by_name.get(file_name)
        if video is None or not video.is_usable or file_name in self._claimed:
            return False
        self._claimed.add(file_name)
        return True

    def is_claimed(self, file_name: str) -> bool:
        return file_name in self._claimed

    def unclaimed(self) -> list[LocalVideoFile]:
        """Usable files that no lesson took."""
        return list(self.eligible())

    @property
    def errored(self) -> list[LocalVideoFile]:
        return [video for video in self._files if video.has_error]


@dataclass
class MatchResult:
    """Outcome of one matching run."""
    lessons: list[LessonTarget]
    pairs: list[MatchedPair] = field(default_factory=list)
    unmatched_videos: list[LocalVideoFile] = field(default_factory=list)

    def __post_init__(self):
        self._by_key = {pair.lesson.key: pair for pair in self.pairs}

    @property
    def matched_count(self) -> int:
        return len(self.pairs)

    @property
    def unmatched(self) -> list[LessonTarget]:
        return [lesson for lesson in self.lessons if lesson.key not in self._by_key]

    @property
    def sections_with_match(self) -> int:
        return len({pair.lesson.section_index for pair in self.pairs})

    def pair_for(self, section_index: int, index_in_section: int) -> Optional[MatchedPair]:
        return self._by_key.get((section_index, index_in_section))

    def summary(self) -> str:
        return (
            f"Video Matching: {self.matched_count} of {len(self.lessons)} "
            f"lessons matched to local videos."
        )


class MatchEngine:
    """Pairs lessons with local video files."""

    def __init__(self, tolerance_seconds: int = MATCH_TOLERANCE_SECONDS):
        self.tolerance_seconds = tolerance_seconds

    def best_candidate(
        self,
        lesson: LessonTarget,
        pool: CandidatePool,
    ) -> Optional[tuple[LocalVideoFile, int]]:
        """Find the best eligible file for one lesson.

        Smallest duration difference wins. On an equal difference the file
        whose name is closer to the lesson title wins; if that ties too, the
        file scanned first is kept.
        """
        best: Optional[LocalVideoFile] = None
        best_diff = 0
        best_distance: Optional[int] = None

        for candidate in pool.eligible():
            diff = abs(lesson.duration_seconds - candidate.duration_seconds)
            if diff > self.tolerance_seconds:
                continue

            if best is None or diff < best_diff:
                best, best_diff, best_distance = candidate, diff, None
                continue

            if diff == best_diff:
                if best_distance is None:
                    best_distance = title_distance(best.file_name, lesson.title)
                distance = title_distance(candidate.file_name, lesson.title)
                if distance < best_distance:
                    best, best_distance = candidate, distance

        if best is None:
            return None
        return best, best_diff

    def match(self, lessons: list[LessonTarget], pool: CandidatePool) -> MatchResult:
        """Match every lesson, in the given order, against the pool."""
        pairs = []
        logger.debug(f"Matching {len(lessons)} lessons against {len(pool)} local files")

        for lesson in lessons:
            found = self.best_candidate(lesson, pool)
            if found is None:
                logger.debug(
                    f"No match for '{lesson.title}' ({lesson.duration_seconds}s)"
                )
                continue

            video, diff = found
            if not pool.claim(video.file_name):
                # eligible() only yields unclaimed files
                raise RuntimeError(f"Candidate already claimed: {video.file_name}")

            if lesson.duration_seconds == 0:
                logger.warning(
                    f"Lesson '{lesson.title}' has no parsable duration "
                    f"('{lesson.raw_duration}') but matched {video.file_name}"
                )
            pairs.append(MatchedPair(lesson=lesson, file_name=video.file_name, duration_delta=diff))
            logger.debug(f"Matched '{lesson.title}' -> {video.file_name} (diff {diff}s)")

        result = MatchResult(lessons=list(lessons), pairs=pairs, unmatched_videos=pool.unclaimed())
        logger.info(result.summary())
        return result

    def match_curriculum(
        self,
        curriculum: Curriculum,
        videos: Iterable[LocalVideoFile],
    ) -> MatchResult:
        """Flatten the curriculum and match it against a fresh pool."""
        return self.match(flatten_curriculum(curriculum), CandidatePool(videos))

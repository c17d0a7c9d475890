"""Discover local video files and probe their durations with ffprobe.

Probing is the only concurrent stage: every file in a batch is probed in a
thread pool and the batch returns once all probes have settled. A failed
probe marks that one file unusable; it never aborts the batch.
"""

import math
import subprocess
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from .exceptions import ProbeFailedError, VideoDirectoryNotFoundError
from .logging_config import get_logger
from .models import LocalVideoFile
from .processing.duration import round_half_up

logger = get_logger('probe')

ProgressCallback = Callable[[int, int, str, str], None]


class FFprobeDurationProbe:
    """Reads a media file's container duration using the ffprobe binary."""

    def __init__(self, ffprobe_path: str = "ffprobe", timeout_seconds: Optional[float] = 60.0):
        self.ffprobe_path = ffprobe_path
        self.timeout_seconds = timeout_seconds

    def command(self, path: Union[str, Path]) -> list[str]:
        return [
            self.ffprobe_path,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(path),
        ]

    def __call__(self, path: Union[str, Path]) -> float:
        """Duration in seconds.

        Raises:
            ProbeFailedError: ffprobe missing, timed out, exited non-zero,
                or printed something that is not a number
        """
        name = Path(path).name
        try:
            result = subprocess.run(
                self.command(path),
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError as e:
            raise ProbeFailedError(name, reason=f"ffprobe not found at '{self.ffprobe_path}'") from e
        except subprocess.TimeoutExpired as e:
            raise ProbeFailedError(name, reason=f"timed out after {self.timeout_seconds}s") from e
        except OSError as e:
            raise ProbeFailedError(name, reason=f"failed to start ffprobe: {e}") from e

        stdout = (result.stdout or "").strip()
        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            raise ProbeFailedError(name, reason=stderr or "ffprobe failed", exit_code=result.returncode)

        try:
            duration = float(stdout)
        except ValueError:
            raise ProbeFailedError(name, reason=f"unparsable output '{stdout}'") from None
        if not math.isfinite(duration) or duration < 0:
            raise ProbeFailedError(name, reason=f"invalid duration '{stdout}'")
        return duration


@dataclass
class ProbeBatchResult:
    """Result of probing every file in a directory."""
    video_dir: str
    files: list[LocalVideoFile] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.files)

    @property
    def failed(self) -> list[LocalVideoFile]:
        return [f for f in self.files if f.has_error]

    @property
    def error_count(self) -> int:
        return len(self.failed)

    def summary(self) -> str:
        if self.error_count:
            return (
                f"Found {self.total} video(s). Errors fetching duration for "
                f"{self.error_count} file(s)."
            )
        return f"Found and processed durations for {self.total} video file(s)."


def list_video_files(video_dir: Union[str, Path], extensions: Iterable[str]) -> list[str]:
    """Names of video files directly inside ``video_dir``, sorted.

    Raises:
        VideoDirectoryNotFoundError: Path missing or not a directory
    """
    video_dir = Path(video_dir)
    if not video_dir.is_dir():
        raise VideoDirectoryNotFoundError(str(video_dir))

    allowed = {ext.lower().lstrip('.') for ext in extensions}
    names = [
        entry.name for entry in video_dir.iterdir()
        if entry.is_file() and entry.suffix.lower().lstrip('.') in allowed
    ]
    return sorted(names)


def probe_durations(
    paths: list[Path],
    probe: Callable[[Path], float],
    max_workers: Optional[int] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> list[LocalVideoFile]:
    """Probe every path concurrently and wait for all of them.

    Args:
        paths: Files to probe
        probe: Callable returning seconds or raising ProbeFailedError
        max_workers: Thread cap (None or 0: one thread per file)
        on_progress: Callback (done, total, file_name, status)

    Returns:
        One LocalVideoFile per path, sorted by file name
    """
    if not paths:
        return []

    total = len(paths)
    done = 0
    lock = threading.Lock()

    def _report(name: str, status: str) -> None:
        nonlocal done
        with lock:
            done += 1
            current = done
        if on_progress:
            on_progress(current, total, name, status)

    def _probe_one(path: Path) -> LocalVideoFile:
        name = path.name
        try:
            seconds = round_half_up(probe(path))
        except ProbeFailedError as e:
            logger.error(f"Error processing duration for {name}: {e}")
            _report(name, f"failed: {e.reason or e}")
            return LocalVideoFile(file_name=name, duration_seconds=0, error=str(e))
        logger.debug(f"Duration for {name}: {seconds}s")
        _report(name, f"{seconds}s")
        return LocalVideoFile(file_name=name, duration_seconds=seconds)

    workers = max_workers or total
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="probe") as executor:
        futures = [executor.submit(_probe_one, path) for path in paths]
        files = [future.result() for future in futures]

    return sorted(files, key=lambda f: f.file_name)


def scan_video_directory(
    video_dir: Union[str, Path],
    probe: Callable[[Path], float],
    extensions: Iterable[str],
    max_workers: Optional[int] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> ProbeBatchResult:
    """List the videos in a directory and probe them all."""
    video_dir = Path(video_dir)
    names = list_video_files(video_dir, extensions)
    logger.info(f"Listing {len(names)} video file(s) in {video_dir} and fetching durations")

    files = probe_durations(
        [video_dir / name for name in names],
        probe,
        max_workers=max_workers,
        on_progress=on_progress,
    )
    result = ProbeBatchResult(video_dir=str(video_dir), files=files)
    if result.error_count:
        logger.warning(result.summary())
    else:
        logger.info(result.summary())
    return result

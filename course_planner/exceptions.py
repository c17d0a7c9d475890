"""Custom exceptions for the Course Planner.

Exception Hierarchy:
    CoursePlannerError (base)
    ├── CurriculumError
    │   ├── CurriculumNotFoundError
    │   └── InvalidCurriculumError
    ├── VideoError
    │   ├── VideoDirectoryNotFoundError
    │   └── ProbeFailedError
    ├── SlideError
    │   ├── SlideDirectoryNotFoundError
    │   └── MissingSlidesError
    ├── PlanPersistenceError
    └── ConfigurationError
"""

from typing import Optional

# Number of missing slide names shown before the list is truncated
MISSING_SLIDES_DISPLAY_LIMIT = 10


class CoursePlannerError(Exception):
    """Base exception for all course planner errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# Curriculum Errors
# =============================================================================

class CurriculumError(CoursePlannerError):
    """Base class for problems with the scraped curriculum document."""
    pass


class CurriculumNotFoundError(CurriculumError):
    """Raised when the curriculum file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Curriculum file not found: '{path}'", details={'path': path})


class InvalidCurriculumError(CurriculumError):
    """Raised when the curriculum is malformed, empty, or fails validation."""

    def __init__(self, reason: str, path: Optional[str] = None):
        self.reason = reason
        self.path = path
        message = "Curriculum data is invalid"
        if path:
            message += f" in '{path}'"
        message += f": {reason}"
        super().__init__(message)


# =============================================================================
# Video Errors
# =============================================================================

class VideoError(CoursePlannerError):
    """Base class for local video file errors."""
    pass


class VideoDirectoryNotFoundError(VideoError):
    """Raised when the raw video path does not exist or is not a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"Raw video path does not exist or is not a directory: '{path}'",
            details={'path': path}
        )


class ProbeFailedError(VideoError):
    """Raised when the duration probe cannot report a duration for a file.

    Callers probing a batch catch this per file and mark the file unusable.
    """

    def __init__(self, file_name: str, reason: Optional[str] = None,
                 exit_code: Optional[int] = None):
        self.file_name = file_name
        self.reason = reason
        self.exit_code = exit_code
        message = f"Could not probe duration for '{file_name}'"
        if reason:
            message += f": {reason}"
        details = {}
        if exit_code is not None:
            details['exit_code'] = exit_code
        super().__init__(message, details=details)


# =============================================================================
# Slide Errors
# =============================================================================

class SlideError(CoursePlannerError):
    """Base class for slide inventory errors."""
    pass


class SlideDirectoryNotFoundError(SlideError):
    """Raised when slides are required but the slide directory is missing."""

    def __init__(self, path: str, required: int):
        self.path = path
        self.required = required
        super().__init__(
            f"Slides directory not found: '{path}'. "
            f"{required} slide(s) are required for the matched lessons",
            details={'path': path, 'required': required}
        )


class MissingSlidesError(SlideError):
    """Raised when one or more required slide slots have no file on disk.

    Attributes:
        missing: Every missing slide display name, in slot order
        displayed: The first few names plus a continuation marker
    """

    def __init__(self, path: str, missing: list[str]):
        self.path = path
        self.missing = list(missing)
        self.displayed = self.missing[:MISSING_SLIDES_DISPLAY_LIMIT]
        if len(self.missing) > MISSING_SLIDES_DISPLAY_LIMIT:
            self.displayed.append(
                f"... and {len(self.missing) - MISSING_SLIDES_DISPLAY_LIMIT} more"
            )
        super().__init__(
            f"{len(self.missing)} required slide(s) missing in '{path}': "
            + ", ".join(self.displayed)
        )


# =============================================================================
# Persistence Errors
# =============================================================================

class PlanPersistenceError(CoursePlannerError):
    """Raised when the Master Plan cannot be written or read back."""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        message = f"Failed to persist Master Plan at '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, details={'path': path})


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(CoursePlannerError):
    """Raised when there's a configuration problem."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        self.config_key = config_key
        super().__init__(message, details={'config_key': config_key})

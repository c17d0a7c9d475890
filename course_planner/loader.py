"""Load the scraped curriculum JSON into models."""

import json
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from .exceptions import CurriculumNotFoundError, InvalidCurriculumError
from .logging_config import get_logger
from .models import Curriculum
from .schemas import CurriculumDocument

logger = get_logger('loader')


def _describe(error: ValidationError) -> str:
    """Summarize pydantic errors as 'location: message' pairs."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get('loc', ()))
        parts.append(f"{location}: {item.get('msg')}" if location else str(item.get('msg')))
    return "; ".join(parts)


def parse_curriculum(data: Any, source: Optional[str] = None) -> Curriculum:
    """Validate an already-decoded curriculum document.

    Args:
        data: Decoded JSON (expected to be a mapping)
        source: Optional file path, used in error messages

    Returns:
        Curriculum model

    Raises:
        InvalidCurriculumError: Missing, empty or malformed data
    """
    if not data:
        raise InvalidCurriculumError("no curriculum data", path=source)
    if not isinstance(data, dict):
        raise InvalidCurriculumError(
            f"expected a JSON object, got {type(data).__name__}", path=source
        )

    try:
        document = CurriculumDocument.model_validate(data)
    except ValidationError as e:
        raise InvalidCurriculumError(_describe(e), path=source) from e

    curriculum = document.to_curriculum()
    logger.debug(
        f"Parsed curriculum '{curriculum.course_title}': "
        f"{len(curriculum.sections)} sections, {curriculum.lesson_count} lessons"
    )
    return curriculum


def load_curriculum(path: Union[str, Path]) -> Curriculum:
    """Read and validate a curriculum JSON file.

    Raises:
        CurriculumNotFoundError: File does not exist
        InvalidCurriculumError: File is not valid JSON or fails validation
    """
    path = Path(path)
    if not path.is_file():
        raise CurriculumNotFoundError(str(path))

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidCurriculumError(f"not valid JSON ({e})", path=str(path)) from e
    except UnicodeDecodeError as e:
        raise InvalidCurriculumError(f"could not be decoded as UTF-8 ({e})", path=str(path)) from e
    except OSError as e:
        raise InvalidCurriculumError(f"could not be read ({e})", path=str(path)) from e

    curriculum = parse_curriculum(data, source=str(path))
    logger.info(f"Loaded curriculum from {path}")
    return curriculum

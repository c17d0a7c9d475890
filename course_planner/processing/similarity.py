"""Edit-distance comparison between file names and lesson titles."""

from pathlib import PurePath


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance: insertions, deletions and substitutions cost 1."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            current.append(min(
                previous[j] + 1,                        # deletion
                current[j - 1] + 1,                     # insertion
                previous[j - 1] + (char_a != char_b),   # substitution
            ))
        previous = current
    return previous[-1]


def strip_extension(file_name: str) -> str:
    """'Intro.Part1.mp4' -> 'Intro.Part1'."""
    suffix = PurePath(file_name).suffix
    return file_name[:-len(suffix)] if suffix else file_name


def title_distance(file_name: str, lesson_title: str) -> int:
    """Case-insensitive distance between an extension-less file name and a title."""
    return edit_distance(strip_extension(file_name).lower(), (lesson_title or "").lower())

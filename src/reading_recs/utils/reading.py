"""Reading-speed arithmetic."""

import math

from reading_recs.constants import DEFAULT_WPM

__all__ = ["DEFAULT_WPM", "count_words", "estimated_minutes", "max_words"]


def max_words(minutes: int, wpm: int) -> int:
    """Largest word count readable in ``minutes`` at ``wpm``."""
    return max(0, minutes) * max(1, wpm)


def estimated_minutes(word_count: int, wpm: int) -> int:
    """
    Minutes needed to read ``word_count`` words, rounded up.

    Examples:
        >>> estimated_minutes(2001, 200)
        11
        >>> estimated_minutes(0, 200)
        0
    """
    if word_count <= 0:
        return 0
    return math.ceil(word_count / max(1, wpm))


def count_words(text: str) -> int:
    """Number of whitespace-delimited tokens in ``text``."""
    return len(text.split())

"""Small text and number helpers shared by the scorers and the matcher."""

import math
import re

_WHITESPACE_RE = re.compile(r"\s+")


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with .5 going up, unlike Python's banker's rounding.

    >>> round_half_up(2.5)
    3.0
    >>> round_half_up(1.25, 1)
    1.3
    """
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def split_whitespace(text: str) -> list[str]:
    """Split on whitespace runs, keeping empty leading/trailing pieces.

    Used where the word count must include a leading empty token
    (e.g. keyword density denominators).
    """
    return _WHITESPACE_RE.split(text)


def non_empty_lines(text: str) -> list[str]:
    """Trimmed, non-empty lines of ``text``."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")

"""Syllable counting and Flesch Reading Ease."""

import re

_NON_ALPHA_RE = re.compile(r"[^a-z]")
_SILENT_SUFFIX_RE = re.compile(r"(?:[^laeiouy]es|ed|[^laeiouy]e)$")
_LEADING_Y_RE = re.compile(r"^y")
_VOWEL_GROUP_RE = re.compile(r"[aeiouy]{1,2}")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def count_word_syllables(word: str) -> int:
    """Heuristic syllable count for a single word (minimum 1)."""
    word = _NON_ALPHA_RE.sub("", word.lower())
    if len(word) <= 3:
        return 1
    word = _SILENT_SUFFIX_RE.sub("", word)
    word = _LEADING_Y_RE.sub("", word)
    return len(_VOWEL_GROUP_RE.findall(word)) or 1


def count_syllables(text: str) -> int:
    return sum(count_word_syllables(word) for word in text.lower().split())


def split_sentences(text: str) -> list[str]:
    return [s for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def flesch_reading_ease(avg_sentence_length: float, avg_syllables_per_word: float) -> float:
    """Flesch Reading Ease clamped to [0, 100]."""
    score = 206.835 - 1.015 * avg_sentence_length - 84.6 * avg_syllables_per_word
    return max(0.0, min(100.0, score))

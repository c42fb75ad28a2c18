"""Utility functions for spelling safari."""

import re

from .config import (
    HARD_ACCURACY_THRESHOLD, HARD_LEVEL_THRESHOLD,
    EASY_ACCURACY_THRESHOLD, EASY_LEVEL_THRESHOLD,
    DIFFICULTY_EASY, DIFFICULTY_MEDIUM, DIFFICULTY_HARD
)

_JSON_FENCE = re.compile(r'```json\s*([\s\S]+?)\s*```')


def normalize_word(text: str) -> str:
    """Canonical form of a word for comparison.

    Drops punctuation (and underscores), collapses whitespace and lowercases,
    so "Store." and "store" compare equal.
    """
    text = re.sub(r'[^\w\s]|_', '', text)
    text = re.sub(r'\s+', ' ', text)
    return text.strip().lower()


def split_words(sentence: str) -> list[str]:
    """Split a sentence on single spaces; empty tokens keep their position."""
    return sentence.split(' ')


def extract_json(text: str) -> str:
    """Return the body of a ```json fenced block, or the text unchanged."""
    match = _JSON_FENCE.search(text)
    if match:
        return match.group(1).strip()
    return text


def choose_difficulty(accuracy: float, current_level: int) -> str:
    if accuracy > HARD_ACCURACY_THRESHOLD and current_level > HARD_LEVEL_THRESHOLD:
        return DIFFICULTY_HARD
    if accuracy < EASY_ACCURACY_THRESHOLD or current_level < EASY_LEVEL_THRESHOLD:
        return DIFFICULTY_EASY
    return DIFFICULTY_MEDIUM

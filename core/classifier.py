"""Mistake classification for a submitted round.

Compares the words a player clicked against the declared misspellings.
Both the submission tally and the analysis request are derived from here,
so the two can never disagree about what counts as a miss.
"""

from typing import Iterable

from .models import MistakeReport
from .utils import normalize_word, split_words


def error_indices(words: list[str], error: str) -> list[int]:
    """Indices of every word that normalizes to the same form as ``error``."""
    target = normalize_word(error)
    return [i for i, word in enumerate(words) if normalize_word(word) == target]


def is_error_word(word: str, errors: Iterable[str]) -> bool:
    cleaned = normalize_word(word)
    return any(normalize_word(e) == cleaned for e in errors)


def _missed_errors(words: list[str], errors: Iterable[str], clicked: set) -> list[str]:
    missed = []
    for error in errors:
        if not any(i in clicked for i in error_indices(words, error)):
            missed.append(error)
    return missed


def count_missed(sentence: str, errors: Iterable[str], clicked_indices: Iterable[int]) -> int:
    """Number of declared errors the player never clicked."""
    return len(_missed_errors(split_words(sentence), errors, set(clicked_indices)))


def classify(sentence: str, errors: Iterable[str], clicked_indices: Iterable[int]) -> MistakeReport:
    """Split a round's outcome into missed errors and false positives.

    Missed errors are reported with their original spelling from the answer
    key; false positives with the clicked word as it appears in the
    sentence, in click order. Indices outside the sentence are ignored.
    """
    errors = list(errors)
    clicked_indices = list(clicked_indices)
    words = split_words(sentence)

    missed = _missed_errors(words, errors, set(clicked_indices))

    false_positives = []
    for index in clicked_indices:
        if not 0 <= index < len(words):
            continue
        word = words[index]
        if not is_error_word(word, errors):
            false_positives.append(word)

    return MistakeReport(missed=missed, false_positives=false_positives)

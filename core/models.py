"""Domain models for spelling safari.

Every value here is immutable. A round moves forward by replacing its
state object wholesale, never by mutating fields in place.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Union

from .config import DEFAULT_LEVEL, DIFFICULTY_MEDIUM
from .utils import split_words

VERDICT_CORRECT = 'correct'
VERDICT_INCORRECT = 'incorrect'


def _text(value) -> str:
    """Model output as a string: lists are joined, None and other non-scalars become ''."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, list):
        return ', '.join(v for v in (_text(item) for item in value) if v)
    return ''


@dataclass(frozen=True)
class SentenceRecord:
    """A generated sentence and its answer key."""

    sentence: str
    errors: tuple[str, ...] = ()
    difficulty: str = DIFFICULTY_MEDIUM

    @property
    def words(self) -> list[str]:
        return split_words(self.sentence)

    def to_dict(self) -> dict:
        return {
            'sentence': self.sentence,
            'errors': list(self.errors),
            'difficulty': self.difficulty
        }

    @classmethod
    def from_dict(cls, data: dict, difficulty: str = DIFFICULTY_MEDIUM) -> 'SentenceRecord':
        """Build a record from a provider payload.

        Payloads come from a language model and are not trusted: a missing or
        non-list ``errors`` becomes an empty answer key, non-string entries
        are dropped and a non-string ``difficulty`` falls back to the default.
        """
        if not isinstance(data, dict):
            data = {}
        sentence = data.get('sentence')
        if not isinstance(sentence, str):
            sentence = '' if sentence is None else str(sentence)
        errors = data.get('errors')
        if not isinstance(errors, (list, tuple)):
            errors = []
        if isinstance(data.get('difficulty'), str) and data['difficulty']:
            difficulty = data['difficulty']
        return cls(
            sentence=sentence,
            errors=tuple(e for e in errors if isinstance(e, str)),
            difficulty=difficulty
        )


@dataclass(frozen=True)
class Score:
    correct: int = 0
    incorrect: int = 0
    streak: int = 0

    @property
    def total(self) -> int:
        return self.correct + self.incorrect


@dataclass(frozen=True)
class SessionStats:
    """Progress carried from one round to the next."""

    accuracy: float = 0.0
    current_level: int = DEFAULT_LEVEL


@dataclass(frozen=True)
class Suggestion:
    """Explanation for one misspelled or wrongly flagged word."""

    corrected_spelling: str = ''
    explanation: str = ''
    error_pattern: str = ''
    error_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'Suggestion':
        if not isinstance(data, dict):
            return cls(explanation=str(data))
        return cls(
            corrected_spelling=_text(data.get('corrected_spelling')) or _text(data.get('suggestion')),
            explanation=_text(data.get('explanation')),
            error_pattern=_text(data.get('error_pattern')),
            error_type=_text(data.get('error_type')) or None
        )

    def to_dict(self) -> dict:
        data = {
            'corrected_spelling': self.corrected_spelling,
            'explanation': self.explanation,
            'error_pattern': self.error_pattern
        }
        if self.error_type is not None:
            data['error_type'] = self.error_type
        return data


@dataclass(frozen=True)
class Analysis:
    """Result of the analyze action: a message, suggestions, or both empty."""

    message: Optional[str] = None
    suggestions: dict = field(default_factory=dict)
    failed: bool = False

    @property
    def needs_retry(self) -> bool:
        return self.failed or (not self.message and not self.suggestions)

    def visible_suggestions(self) -> dict:
        # The model marks correctly spelled words with error_type "None"
        return {word: s for word, s in self.suggestions.items() if s.error_type != 'None'}


@dataclass(frozen=True)
class MistakeReport:
    missed: list[str] = field(default_factory=list)
    false_positives: list[str] = field(default_factory=list)

    @property
    def mistakes(self) -> list[str]:
        """Missed errors followed by false positives, as sent for analysis."""
        return self.missed + self.false_positives


# Round states

@dataclass(frozen=True)
class IdleState:
    error: Optional[str] = None


@dataclass(frozen=True)
class LoadingState:
    round_id: int


@dataclass(frozen=True)
class ActiveState:
    """Fields shared by a round that has a sentence on screen."""

    round_id: int
    record: SentenceRecord
    started_at: float
    score: Score = Score()
    clicks: tuple[tuple[int, str], ...] = ()
    response_times: tuple[float, ...] = ()

    @property
    def clicked_indices(self) -> list[int]:
        return [index for index, _ in self.clicks]

    def verdict(self, index: int) -> Optional[str]:
        for clicked, verdict in self.clicks:
            if clicked == index:
                return verdict
        return None


@dataclass(frozen=True)
class LoadedState(ActiveState):
    """Sentence shown; clicks are accepted."""


@dataclass(frozen=True)
class SubmittedState(ActiveState):
    """Answers locked in."""

    missed_count: int = 0
    submitted_at: float = 0.0
    show_mistakes: bool = False
    analysis: Optional[Analysis] = None
    show_analysis: bool = False

    def with_analysis(self, analysis: Analysis) -> 'SubmittedState':
        return replace(self, analysis=analysis, show_analysis=True)


RoundState = Union[IdleState, LoadingState, LoadedState, SubmittedState]

"""Round state machine.

Each function takes a round state and returns the next one. Actions that
do not apply to the current state return it unchanged, so callers never
need to guard a click or a submit themselves.
"""

from dataclasses import replace

from .classifier import count_missed, is_error_word
from .config import (
    MIN_LEVEL, MAX_LEVEL, LEVEL_STEP,
    ADVANCE_ACCURACY_THRESHOLD, DEMOTE_ACCURACY_THRESHOLD,
    CELEBRATION_SECONDS
)
from .models import (
    LoadedState, SubmittedState, Score, SessionStats, SentenceRecord,
    VERDICT_CORRECT, VERDICT_INCORRECT
)


def load_round(record: SentenceRecord, round_id: int, now: float) -> LoadedState:
    """Start a fresh round with a zeroed score and no clicks."""
    return LoadedState(round_id=round_id, record=record, started_at=now)


def click_word(state, index: int, now: float):
    """Judge a click on the word at ``index``.

    Only a loaded round accepts clicks, and each index is judged once.
    """
    if not isinstance(state, LoadedState):
        return state
    words = state.record.words
    if not 0 <= index < len(words) or index in state.clicked_indices:
        return state

    score = state.score
    if is_error_word(words[index], state.record.errors):
        verdict = VERDICT_CORRECT
        score = replace(score, correct=score.correct + 1, streak=score.streak + 1)
    else:
        verdict = VERDICT_INCORRECT
        score = replace(score, incorrect=score.incorrect + 1, streak=0)

    return replace(
        state,
        score=score,
        clicks=state.clicks + ((index, verdict),),
        response_times=state.response_times + (now - state.started_at,)
    )


def submit_round(state, now: float):
    """Lock in answers and charge every missed error as incorrect."""
    if not isinstance(state, LoadedState):
        return state
    record = state.record
    missed = count_missed(record.sentence, record.errors, state.clicked_indices)
    score = replace(state.score, incorrect=state.score.incorrect + missed)
    return SubmittedState(
        round_id=state.round_id,
        record=record,
        started_at=state.started_at,
        score=score,
        clicks=state.clicks,
        response_times=state.response_times,
        missed_count=missed,
        submitted_at=now
    )


def toggle_mistakes(state):
    if not isinstance(state, SubmittedState):
        return state
    return replace(state, show_mistakes=not state.show_mistakes)


def toggle_analysis(state):
    if not isinstance(state, SubmittedState) or state.analysis is None:
        return state
    return replace(state, show_analysis=not state.show_analysis)


def is_celebrating(state, now: float) -> bool:
    """True for a few seconds after a round is submitted."""
    if not isinstance(state, SubmittedState):
        return False
    return now - state.submitted_at < CELEBRATION_SECONDS


def sentence_accuracy(score: Score) -> float:
    """Percentage of judged answers that were correct, to two decimals."""
    if score.total == 0:
        return 0.0
    return round(score.correct / score.total * 100, 2)


def advance_level(accuracy: float, current_level: int) -> int:
    if accuracy >= ADVANCE_ACCURACY_THRESHOLD:
        return min(MAX_LEVEL, current_level + LEVEL_STEP)
    if accuracy < DEMOTE_ACCURACY_THRESHOLD:
        return max(MIN_LEVEL, current_level - LEVEL_STEP)
    return current_level


def advance_stats(stats: SessionStats, accuracy: float) -> SessionStats:
    """Stats for the next round after finishing one at ``accuracy``."""
    return SessionStats(
        accuracy=accuracy,
        current_level=advance_level(accuracy, stats.current_level)
    )

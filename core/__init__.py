from .models import (
    SentenceRecord, Score, SessionStats, Suggestion, Analysis, MistakeReport,
    IdleState, LoadingState, LoadedState, SubmittedState, RoundState,
    VERDICT_CORRECT, VERDICT_INCORRECT
)
from .interfaces import AIProvider, ContentProvider
from .exceptions import SafariError, ContentFetchFailed, AnalysisFailed
from .utils import normalize_word, split_words, extract_json, choose_difficulty
from .classifier import classify, count_missed
from .rounds import sentence_accuracy, advance_level, advance_stats
from .session import GameSession

__all__ = [
    'SentenceRecord', 'Score', 'SessionStats', 'Suggestion', 'Analysis', 'MistakeReport',
    'IdleState', 'LoadingState', 'LoadedState', 'SubmittedState', 'RoundState',
    'VERDICT_CORRECT', 'VERDICT_INCORRECT',
    'AIProvider', 'ContentProvider',
    'SafariError', 'ContentFetchFailed', 'AnalysisFailed',
    'normalize_word', 'split_words', 'extract_json', 'choose_difficulty',
    'classify', 'count_missed',
    'sentence_accuracy', 'advance_level', 'advance_stats',
    'GameSession'
]

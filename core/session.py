"""Game session: drives rounds against a content provider."""

import logging
import random
import time
from typing import Optional

from .classifier import classify
from .config import ENCOURAGEMENTS, FETCH_FAILED_MESSAGE, ANALYSIS_FAILED_MESSAGE
from .exceptions import ContentFetchFailed, AnalysisFailed
from .interfaces import ContentProvider
from .models import (
    IdleState, LoadingState, ActiveState, SubmittedState,
    SentenceRecord, SessionStats, Analysis, MistakeReport
)
from . import rounds

logger = logging.getLogger(__name__)


class GameSession:
    """Holds the current round state and the stats carried between rounds.

    Each content fetch is tagged with a round id. A response is only applied
    if its id is still the newest one issued, so a slow fetch can never
    overwrite a round the player has already moved past.
    """

    def __init__(self, provider: ContentProvider, stats: SessionStats = None,
                 rng: random.Random = None, clock=time.monotonic):
        self.provider = provider
        self.stats = stats or SessionStats()
        self.rng = rng or random.Random()
        self.clock = clock
        self.state = IdleState()
        self._last_round_id = 0

    # Round lifecycle

    def begin_round(self) -> int:
        """Start fetching a new round. Returns the id to complete it with."""
        self._last_round_id += 1
        self.state = LoadingState(self._last_round_id)
        return self._last_round_id

    def _is_current(self, round_id: int) -> bool:
        if round_id != self._last_round_id:
            logger.warning(f"Discarding stale response for round {round_id} (current: {self._last_round_id})")
            return False
        return True

    def complete_round(self, round_id: int, record: SentenceRecord) -> bool:
        """Load a fetched record. Returns False if the fetch was superseded."""
        if not self._is_current(round_id):
            return False
        self.state = rounds.load_round(record, round_id, self.clock())
        logger.info(f"Round {round_id} loaded ({record.difficulty}, {len(record.errors)} errors)")
        return True

    def fail_round(self, round_id: int, error: ContentFetchFailed) -> bool:
        """Apply a failed fetch. Raw response text, if any, becomes the sentence."""
        if not self._is_current(round_id):
            return False
        if error.raw_text is not None:
            logger.warning(f"Round {round_id}: showing raw response as sentence")
            self.state = rounds.load_round(SentenceRecord(error.raw_text), round_id, self.clock())
        else:
            logger.error(f"Round {round_id}: sentence fetch failed: {error}")
            self.state = IdleState(error=FETCH_FAILED_MESSAGE)
        return True

    def new_round(self):
        """Fetch and load a new round, discarding the current one."""
        round_id = self.begin_round()
        try:
            record = self.provider.generate_sentence(self.stats.accuracy, self.stats.current_level)
        except ContentFetchFailed as e:
            self.fail_round(round_id, e)
        else:
            self.complete_round(round_id, record)
        return self.state

    def regenerate(self):
        """Skip the current sentence without scoring it."""
        return self.new_round()

    def next_round(self):
        """Carry the finished round's accuracy into stats and fetch the next one.

        Only a submitted round can be moved past this way.
        """
        if not isinstance(self.state, SubmittedState):
            return self.state
        accuracy = self.accuracy()
        previous_level = self.stats.current_level
        self.stats = rounds.advance_stats(self.stats, accuracy)
        if self.stats.current_level != previous_level:
            logger.info(f"Level {previous_level} -> {self.stats.current_level} (accuracy {accuracy})")
        return self.new_round()

    # Player actions

    def click(self, index: int):
        self.state = rounds.click_word(self.state, index, self.clock())
        return self.state

    def submit(self):
        self.state = rounds.submit_round(self.state, self.clock())
        return self.state

    def toggle_mistakes(self):
        self.state = rounds.toggle_mistakes(self.state)
        return self.state

    def analyze(self) -> Optional[Analysis]:
        """Explain the round's mistakes, or toggle an existing explanation.

        A perfect round gets an encouragement instead of a provider call.
        A failed or empty analysis is shown but not kept, so the next call
        retries.
        """
        state = self.state
        if not isinstance(state, SubmittedState):
            return None
        if state.analysis is not None and not state.analysis.needs_retry:
            self.state = rounds.toggle_analysis(state)
            return state.analysis

        if state.score.incorrect <= 0:
            analysis = Analysis(message=self.rng.choice(ENCOURAGEMENTS))
        else:
            mistakes = self.report().mistakes
            try:
                analysis = Analysis(suggestions=self.provider.analyze_mistakes(mistakes))
            except AnalysisFailed as e:
                logger.error(f"Mistake analysis failed: {e}")
                analysis = Analysis(message=ANALYSIS_FAILED_MESSAGE, failed=True)

        # The round may have been replaced while the provider was answering
        if self.state is state:
            self.state = state.with_analysis(analysis)
        return analysis

    # Read-only views

    def accuracy(self) -> float:
        if not isinstance(self.state, ActiveState):
            return 0.0
        return rounds.sentence_accuracy(self.state.score)

    def report(self) -> MistakeReport:
        if not isinstance(self.state, ActiveState):
            return MistakeReport()
        record = self.state.record
        return classify(record.sentence, record.errors, self.state.clicked_indices)

    def celebrating(self) -> bool:
        return rounds.is_celebrating(self.state, self.clock())

"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod

from .models import SentenceRecord


class AIProvider(ABC):
    """Abstract base class for the language model behind the server."""

    @abstractmethod
    def generate_sentence(self, difficulty: str) -> tuple[dict, int]:
        """Generate a sentence with misspellings.
        Returns ({sentence, errors, difficulty}, generation_time_ms)."""
        pass

    @abstractmethod
    def analyze_mistakes(self, mistakes: list[str]) -> tuple[dict, int]:
        """Explain a list of misspelled or wrongly flagged words.
        Returns ({suggestions: {word: {...}}}, analysis_time_ms)."""
        pass


class ContentProvider(ABC):
    """Abstract base class for where the game gets its rounds from."""

    @abstractmethod
    def generate_sentence(self, accuracy: float, current_level: int) -> SentenceRecord:
        """Fetch a sentence for the next round. Raises ContentFetchFailed."""
        pass

    @abstractmethod
    def analyze_mistakes(self, mistakes: list[str]) -> dict:
        """Fetch {word: Suggestion} for the given mistakes. Raises AnalysisFailed."""
        pass

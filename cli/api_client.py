"""REST API client for the spelling safari server."""

import logging

import requests

from core.exceptions import ContentFetchFailed, AnalysisFailed
from core.interfaces import ContentProvider
from core.models import SentenceRecord, Suggestion

logger = logging.getLogger(__name__)


class SafariAPIClient(ContentProvider):
    """Client for communicating with the spelling safari REST API."""

    def __init__(self, base_url: str = "http://localhost:3000"):
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()

    def _post(self, endpoint: str, data: dict) -> requests.Response:
        """Make a POST request."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def generate_sentence(self, accuracy: float, current_level: int) -> SentenceRecord:
        """Get a sentence for the next round."""
        try:
            response = self._post("/generate-sentence", {
                'accuracy': accuracy,
                'currentLevel': current_level
            })
        except requests.RequestException as e:
            raise ContentFetchFailed(f"Failed to fetch sentence: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Sentence response is not JSON: {e}")
            raise ContentFetchFailed("Sentence response is not JSON", raw_text=response.text) from e
        return SentenceRecord.from_dict(data)

    def analyze_mistakes(self, mistakes: list[str]) -> dict:
        """Get a suggestion for each mistake."""
        try:
            data = self._post("/analyze-mistakes", {'mistakes': mistakes}).json()
        except (requests.RequestException, ValueError) as e:
            raise AnalysisFailed(f"Analysis request failed: {e}") from e

        suggestions = data.get('suggestions') if isinstance(data, dict) else None
        if not isinstance(suggestions, dict):
            return {}
        return {word: Suggestion.from_dict(s) for word, s in suggestions.items()}

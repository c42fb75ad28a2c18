"""Tests for the server, the Gemini provider and the HTTP client."""

import unittest
from unittest.mock import MagicMock, patch
import sys

# Mock google.generativeai before importing
sys.modules['google'] = MagicMock()
sys.modules['google.generativeai'] = MagicMock()

import requests
from fastapi.testclient import TestClient

from core.interfaces import AIProvider
from core.exceptions import ContentFetchFailed, AnalysisFailed
from core.models import SentenceRecord, Suggestion
from server import app as app_module
from server.gemini_provider import GeminiProvider
from cli.api_client import SafariAPIClient


# ============================================================================
# Mock Implementations
# ============================================================================

class MockAIProvider(AIProvider):
    """Mock AI provider for testing."""

    def __init__(self):
        self.sentences = []
        self.analyses = []
        self.generate_sentence_calls = []
        self.analyze_mistakes_calls = []
        self.model_name = 'mock-model'

    def set_sentence_response(self, output, ms: int = 100):
        self.sentences.append((output, ms))

    def set_analysis_response(self, output, ms: int = 50):
        self.analyses.append((output, ms))

    def generate_sentence(self, difficulty: str) -> tuple[dict, int]:
        self.generate_sentence_calls.append(difficulty)
        if self.sentences:
            return self.sentences.pop(0)
        return ({'sentence': 'Their going too the store', 'errors': ['Their', 'too'],
                 'difficulty': difficulty}, 100)

    def analyze_mistakes(self, mistakes: list[str]) -> tuple[dict, int]:
        self.analyze_mistakes_calls.append(list(mistakes))
        if self.analyses:
            return self.analyses.pop(0)
        return ({'suggestions': {}}, 50)


class FailingAIProvider(MockAIProvider):

    def generate_sentence(self, difficulty: str) -> tuple[dict, int]:
        raise RuntimeError("quota exceeded")

    def analyze_mistakes(self, mistakes: list[str]) -> tuple[dict, int]:
        raise RuntimeError("quota exceeded")


def mock_response(json_data=None, status_code=200, text=''):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


# ============================================================================
# Gemini Provider
# ============================================================================

class TestGeminiProviderParsing(unittest.TestCase):
    """Tests for GeminiProvider response parsing and fallbacks."""

    def setUp(self):
        # Create provider without connecting
        self.provider = GeminiProvider.__new__(GeminiProvider)

    def test_generate_sentence_plain_json(self):
        raw = '{"sentence": "Thier cat is hapy.", "errors": ["Thier", "hapy."]}'
        with patch.object(self.provider, '_execute', return_value=(raw, 120)):
            output, ms = self.provider.generate_sentence('easy')

        self.assertEqual(ms, 120)
        self.assertEqual(output['sentence'], "Thier cat is hapy.")
        self.assertEqual(output['errors'], ["Thier", "hapy."])
        self.assertEqual(output['difficulty'], 'easy')

    def test_generate_sentence_fenced_json(self):
        raw = 'Sure!\n```json\n{"sentence": "A fenced sentense", "errors": ["sentense"]}\n```'
        with patch.object(self.provider, '_execute', return_value=(raw, 80)):
            output, ms = self.provider.generate_sentence('medium')

        self.assertEqual(output['sentence'], "A fenced sentense")
        self.assertEqual(output['errors'], ["sentense"])

    def test_generate_sentence_unparseable_falls_back_to_text(self):
        raw = "The kwick brown fox"
        with patch.object(self.provider, '_execute', return_value=(raw, 80)):
            output, ms = self.provider.generate_sentence('hard')

        self.assertEqual(output, {'sentence': raw, 'errors': [], 'difficulty': 'hard'})

    def test_generate_sentence_prompt_mentions_difficulty(self):
        with patch.object(self.provider, '_execute', return_value=('{}', 10)) as execute:
            self.provider.generate_sentence('hard')
        prompt = execute.call_args[0][0]
        self.assertIn('"hard"', prompt)
        self.assertIn('exactly 2', prompt)

    def test_analyze_mistakes_valid(self):
        raw = '{"suggestions": {"too": {"corrected_spelling": "to", "explanation": "x", "error_pattern": "homophone"}}}'
        with patch.object(self.provider, '_execute', return_value=(raw, 60)):
            output, ms = self.provider.analyze_mistakes(["too"])

        self.assertEqual(output['suggestions']['too']['corrected_spelling'], "to")

    def test_analyze_mistakes_prompt_lists_mistakes(self):
        with patch.object(self.provider, '_execute', return_value=('{"suggestions": {}}', 10)) as execute:
            self.provider.analyze_mistakes(["too", "Their"])
        self.assertIn('["too", "Their"]', execute.call_args[0][0])

    def test_analyze_mistakes_unparseable(self):
        with patch.object(self.provider, '_execute', return_value=("I cannot help", 60)):
            output, ms = self.provider.analyze_mistakes(["too"])

        self.assertEqual(output, {'suggestions': {}})

    def test_analyze_mistakes_wrong_shape(self):
        with patch.object(self.provider, '_execute', return_value=('["too"]', 60)):
            output, ms = self.provider.analyze_mistakes(["too"])

        self.assertEqual(output, {'suggestions': {}})


# ============================================================================
# API endpoints
# ============================================================================

class TestGenerateSentenceEndpoint(unittest.TestCase):
    """Tests for POST /generate-sentence."""

    def setUp(self):
        self.provider = MockAIProvider()
        app_module.ai_provider = self.provider
        self.client = TestClient(app_module.app)

    def tearDown(self):
        app_module.ai_provider = None

    def test_returns_sentence(self):
        response = self.client.post('/generate-sentence', json={'accuracy': 60, 'currentLevel': 40})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            'sentence': 'Their going too the store',
            'errors': ['Their', 'too'],
            'difficulty': 'medium'
        })
        self.assertEqual(self.provider.generate_sentence_calls, ['medium'])

    def test_difficulty_selection(self):
        self.client.post('/generate-sentence', json={'accuracy': 90, 'currentLevel': 60})
        self.client.post('/generate-sentence', json={'accuracy': 90, 'currentLevel': 20})
        self.client.post('/generate-sentence', json={})
        self.assertEqual(self.provider.generate_sentence_calls, ['hard', 'easy', 'easy'])

    def test_malformed_errors_become_empty(self):
        self.provider.set_sentence_response({'sentence': 'Odd output', 'errors': 'nope'})
        response = self.client.post('/generate-sentence', json={'accuracy': 60, 'currentLevel': 40})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['errors'], [])
        self.assertEqual(response.json()['difficulty'], 'medium')

    def test_non_string_difficulty_uses_selected(self):
        self.provider.set_sentence_response({'sentence': 'x', 'errors': [], 'difficulty': 3})
        response = self.client.post('/generate-sentence', json={'accuracy': 60, 'currentLevel': 40})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'sentence': 'x', 'errors': [], 'difficulty': 'medium'})

    def test_rejects_out_of_range_level(self):
        response = self.client.post('/generate-sentence', json={'accuracy': 60, 'currentLevel': 0})
        self.assertEqual(response.status_code, 422)

    def test_provider_error_is_500(self):
        app_module.ai_provider = FailingAIProvider()
        response = self.client.post('/generate-sentence', json={'accuracy': 60, 'currentLevel': 40})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'error': 'quota exceeded'})


class TestAnalyzeMistakesEndpoint(unittest.TestCase):
    """Tests for POST /analyze-mistakes."""

    def setUp(self):
        self.provider = MockAIProvider()
        app_module.ai_provider = self.provider
        self.client = TestClient(app_module.app)

    def tearDown(self):
        app_module.ai_provider = None

    def test_returns_suggestions(self):
        self.provider.set_analysis_response({'suggestions': {
            'too': {'corrected_spelling': 'to', 'explanation': 'Preposition', 'error_pattern': 'homophone'},
            'the': {'suggestion': 'the', 'explanation': 'Spelled correctly'}
        }})
        response = self.client.post('/analyze-mistakes', json={'mistakes': ['too', 'the']})

        self.assertEqual(response.status_code, 200)
        suggestions = response.json()['suggestions']
        self.assertEqual(suggestions['too'], {
            'corrected_spelling': 'to', 'explanation': 'Preposition', 'error_pattern': 'homophone'
        })
        self.assertEqual(suggestions['the']['corrected_spelling'], 'the')
        self.assertEqual(suggestions['the']['error_pattern'], '')
        self.assertEqual(self.provider.analyze_mistakes_calls, [['too', 'the']])

    def test_non_string_suggestion_fields(self):
        self.provider.set_analysis_response({'suggestions': {
            'too': {'corrected_spelling': ['to'], 'explanation': 7, 'error_pattern': None}
        }})
        response = self.client.post('/analyze-mistakes', json={'mistakes': ['too']})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['suggestions']['too'], {
            'corrected_spelling': 'to', 'explanation': '7', 'error_pattern': ''
        })

    def test_missing_mistakes_is_400(self):
        response = self.client.post('/analyze-mistakes', json={})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'error': 'Invalid mistakes provided'})
        self.assertEqual(self.provider.analyze_mistakes_calls, [])

    def test_provider_error_is_500(self):
        app_module.ai_provider = FailingAIProvider()
        response = self.client.post('/analyze-mistakes', json={'mistakes': ['too']})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {'error': 'quota exceeded'})


class TestHealthEndpoint(unittest.TestCase):

    def test_root(self):
        app_module.ai_provider = MockAIProvider()
        try:
            response = TestClient(app_module.app).get('/')
        finally:
            app_module.ai_provider = None
        self.assertEqual(response.json(), {'status': 'ok', 'model': 'mock-model'})


class TestLoadConfig(unittest.TestCase):

    def test_missing_file_is_empty(self):
        self.assertEqual(app_module.load_config('/nonexistent/spelling-safari.json'), {})


# ============================================================================
# HTTP client
# ============================================================================

class TestSafariAPIClient(unittest.TestCase):
    """Tests for SafariAPIClient error mapping."""

    def setUp(self):
        self.client = SafariAPIClient(base_url='http://test:3000/')
        self.client.session = MagicMock()

    def test_generate_sentence(self):
        self.client.session.post.return_value = mock_response({
            'sentence': 'Their going too the store', 'errors': ['Their', 'too'], 'difficulty': 'easy'
        })

        record = self.client.generate_sentence(42.5, 35)

        self.assertEqual(record, SentenceRecord('Their going too the store', ('Their', 'too'), 'easy'))
        self.client.session.post.assert_called_once_with(
            'http://test:3000/generate-sentence', json={'accuracy': 42.5, 'currentLevel': 35}
        )

    def test_generate_sentence_http_error(self):
        self.client.session.post.return_value = mock_response({'error': 'boom'}, status_code=500)
        with self.assertRaises(ContentFetchFailed) as ctx:
            self.client.generate_sentence(0, 50)
        self.assertIsNone(ctx.exception.raw_text)

    def test_generate_sentence_connection_error(self):
        self.client.session.post.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(ContentFetchFailed):
            self.client.generate_sentence(0, 50)

    def test_generate_sentence_non_json_keeps_text(self):
        self.client.session.post.return_value = mock_response(ValueError("no json"), text='Just words')
        with self.assertRaises(ContentFetchFailed) as ctx:
            self.client.generate_sentence(0, 50)
        self.assertEqual(ctx.exception.raw_text, 'Just words')

    def test_analyze_mistakes(self):
        self.client.session.post.return_value = mock_response({'suggestions': {
            'too': {'corrected_spelling': 'to', 'explanation': 'x', 'error_pattern': 'y'}
        }})

        suggestions = self.client.analyze_mistakes(['too'])

        self.assertEqual(suggestions, {'too': Suggestion('to', 'x', 'y')})

    def test_analyze_mistakes_failure(self):
        self.client.session.post.return_value = mock_response({'error': 'boom'}, status_code=500)
        with self.assertRaises(AnalysisFailed):
            self.client.analyze_mistakes(['too'])

    def test_analyze_mistakes_missing_suggestions(self):
        self.client.session.post.return_value = mock_response({})
        self.assertEqual(self.client.analyze_mistakes(['too']), {})


if __name__ == '__main__':
    unittest.main()

"""Gemini AI provider implementation."""

import json
import logging
import time
import google.generativeai as genai

from core.interfaces import AIProvider
from core.config import DEFAULT_GEMINI_MODEL, ERRORS_PER_SENTENCE, MIN_LEVEL, MAX_LEVEL
from core.utils import extract_json

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class GeminiProvider(AIProvider):
    """Gemini AI provider implementation."""

    def __init__(self, api_key: str, model_name: str = DEFAULT_GEMINI_MODEL):
        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(model_name)
        self.model_name = model_name

    def _execute(self, prompt: str) -> tuple[str, int]:
        start_time = time.time()
        response = self.model.generate_content(prompt)
        end_time = time.time()
        ms = int((end_time - start_time) * 1000)
        return (response.text, ms)

    def _diagnose(self, text: str) -> None:
        if '{' not in text:
            logger.error("Diagnosis: No opening brace '{' found in response")
        elif '}' not in text:
            logger.error("Diagnosis: No closing brace '}' found in response")
        elif text.count('{') != text.count('}'):
            logger.error(f"Diagnosis: Mismatched braces - {{ count: {text.count('{')}, }} count: {text.count('}')}")
        else:
            logger.error("Diagnosis: Unknown parsing issue - possibly malformed JSON")

    def _parse_sentence(self, response: str, difficulty: str) -> dict:
        json_text = extract_json(response)
        try:
            output = json.loads(json_text)
        except ValueError as e:
            logger.error(f"Failed to parse generated sentence: {e}")
            logger.error(f"Raw response:\n{response}")
            self._diagnose(json_text)
            # Show the text as-is; the round simply has nothing to find
            return {'sentence': json_text, 'errors': [], 'difficulty': difficulty}

        if not isinstance(output, dict):
            logger.warning(f"Sentence response is not an object: {type(output)}")
            return {'sentence': json_text, 'errors': [], 'difficulty': difficulty}
        errors = output.get('errors')
        if not isinstance(errors, list):
            logger.warning(f"Sentence response has invalid errors field: {errors!r}")
        elif len(errors) != ERRORS_PER_SENTENCE:
            logger.warning(f"Expected {ERRORS_PER_SENTENCE} errors, got {len(errors)}")
        output.setdefault('difficulty', difficulty)
        return output

    def _parse_analysis(self, response: str) -> dict:
        json_text = extract_json(response)
        try:
            output = json.loads(json_text)
        except ValueError as e:
            logger.error(f"Failed to parse analysis: {e}")
            logger.error(f"Raw response:\n{response}")
            self._diagnose(json_text)
            return {'suggestions': {}}

        if not isinstance(output, dict) or not isinstance(output.get('suggestions'), dict):
            logger.warning("Analysis response missing 'suggestions' object")
            return {'suggestions': {}}
        return output

    def generate_sentence(self, difficulty: str) -> tuple[dict, int]:
        prompt = f"""
            Generate a JSON object for a Spelling Safari game with the following properties:
            - "sentence": A natural, engaging sentence appropriate for a level between {MIN_LEVEL} and {MAX_LEVEL},
              with proper spacing and punctuation, that includes exactly {ERRORS_PER_SENTENCE} common misspellings.
            - "errors": An array of exactly {ERRORS_PER_SENTENCE} strings representing the misspelled words
              exactly as they appear in the sentence.

            The difficulty level is "{difficulty}".

            Output ONLY the raw JSON object without any markdown formatting.
        """
        response, ms = self._execute(prompt)
        return (self._parse_sentence(response, difficulty), ms)

    def analyze_mistakes(self, mistakes: list[str]) -> tuple[dict, int]:
        prompt = f"""
            Based on the following spelling mistakes detected in the user's response: {json.dumps(mistakes)}.

            These mistakes include two types:
              1. Missed errors: words that the user did not identify as mistakes.
              2. False positives: words that the user incorrectly identified as mistakes
                 (i.e., correctly spelled words).

            For each mistake in the list, generate a suggestion object with the following keys:
              - "corrected_spelling": the correct spelling of the word,
              - "explanation": a brief explanation of why it is considered a mistake,
              - "error_pattern": a description of the common error pattern
                (e.g., "incorrect vowel combination", "extra punctuation", etc.).

            Output a JSON object with a key "suggestions" mapping each mistake to its suggestion object.
            Output ONLY the raw JSON object without any markdown formatting.
        """
        response, ms = self._execute(prompt)
        return (self._parse_analysis(response), ms)

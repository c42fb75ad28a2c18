"""FastAPI server for spelling safari."""

import asyncio
import json
import logging
import os

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

logger = logging.getLogger(__name__)

from core.models import SentenceRecord, Suggestion
from core.config import (
    MIN_LEVEL, MAX_LEVEL, DEFAULT_LEVEL, DEFAULT_GEMINI_MODEL, CONFIG_FILE
)
from core.utils import choose_difficulty

from server.gemini_provider import GeminiProvider


# Pydantic models for API
class SentenceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    accuracy: float = Field(0, ge=0, le=100)
    current_level: int = Field(DEFAULT_LEVEL, ge=MIN_LEVEL, le=MAX_LEVEL, alias='currentLevel')


class SentenceResponse(BaseModel):
    sentence: str
    errors: list[str]
    difficulty: str


class AnalysisRequest(BaseModel):
    mistakes: Optional[list[str]] = None


class SuggestionResponse(BaseModel):
    corrected_spelling: str
    explanation: str
    error_pattern: str
    error_type: Optional[str] = None


class AnalysisResponse(BaseModel):
    suggestions: dict[str, SuggestionResponse]


# Global state (in production, use proper DI)
ai_provider: GeminiProvider = None


def load_config(config_file: str = CONFIG_FILE) -> dict:
    """Load the optional JSON config file. Returns {} if it does not exist."""
    if not os.path.exists(config_file):
        return {}
    with open(config_file, 'r') as f:
        return json.load(f)


app = FastAPI(title="Spelling Safari API", description="Sentence generation and mistake analysis for Spelling Safari")

# The browser client is served from a different origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Report errors as {"error": message}, the shape the game client expects."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.on_event("startup")
async def startup():
    """Initialize the AI provider on startup."""
    global ai_provider

    # Get API key from environment variable first, then fall back to config file
    config = load_config()
    api_key = os.environ.get('GEMINI_API_KEY') or config.get('gemini_api_key')
    if not api_key:
        raise RuntimeError(
            "GEMINI_API_KEY environment variable not set and config file not found. "
            f"Set GEMINI_API_KEY or create {CONFIG_FILE}"
        )

    model_name = os.environ.get('GEMINI_MODEL') or config.get('gemini_model') or DEFAULT_GEMINI_MODEL
    ai_provider = GeminiProvider(api_key, model_name=model_name)
    print(f"AI provider initialized: {model_name}")


@app.get("/")
async def root():
    """Health check."""
    return {"status": "ok", "model": getattr(ai_provider, 'model_name', None)}


@app.post("/generate-sentence", response_model=SentenceResponse)
async def generate_sentence(request: SentenceRequest):
    """Generate a sentence with misspellings at a difficulty fitting the player."""
    difficulty = choose_difficulty(request.accuracy, request.current_level)
    logger.info(f"Generating {difficulty} sentence (accuracy={request.accuracy}, level={request.current_level})")

    try:
        # Run in executor to not block the event loop
        loop = asyncio.get_event_loop()
        output, ms = await loop.run_in_executor(
            None,
            lambda: ai_provider.generate_sentence(difficulty)
        )
    except Exception as e:
        logger.error(f"Error in /generate-sentence: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    record = SentenceRecord.from_dict(output, difficulty=difficulty)
    logger.info(f"Sentence ready in {ms}ms with {len(record.errors)} errors")
    return SentenceResponse(**record.to_dict())


@app.post("/analyze-mistakes", response_model=AnalysisResponse, response_model_exclude_none=True)
async def analyze_mistakes(request: AnalysisRequest):
    """Explain each missed error or false positive."""
    if request.mistakes is None:
        raise HTTPException(status_code=400, detail="Invalid mistakes provided")

    try:
        loop = asyncio.get_event_loop()
        output, ms = await loop.run_in_executor(
            None,
            lambda: ai_provider.analyze_mistakes(request.mistakes)
        )
    except Exception as e:
        logger.error(f"Error in /analyze-mistakes: {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    suggestions = {
        word: Suggestion.from_dict(data).to_dict()
        for word, data in output.get('suggestions', {}).items()
    }
    logger.info(f"Analyzed {len(request.mistakes)} mistakes in {ms}ms")
    return AnalysisResponse(suggestions=suggestions)

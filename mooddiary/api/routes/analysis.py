"""
Mood analysis endpoint.

Callable from browsers on any origin, so every response carries permissive
CORS headers regardless of the app-wide CORS settings.
"""
import logging
import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError
from mooddiary.api.dependencies import get_gateway_client
from mooddiary.core.utils import format_error
from mooddiary.schemas.analysis import AnalysisRequest, SENTIMENT_UNAVAILABLE
from mooddiary.services.analysis_service import (
    analyze_mood, MoodAnalysisError, RateLimitExceededError
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])

ANALYZE_MOOD_PATH = "/analyze-mood"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def _json(content: dict, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def _internal_failure(message: str) -> JSONResponse:
    return _json(
        format_error(message, emojis=[], sentiment=SENTIMENT_UNAVAILABLE),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


@router.options(ANALYZE_MOOD_PATH)
async def analyze_mood_preflight():
    """CORS pre-flight."""
    return Response(status_code=status.HTTP_200_OK, headers=CORS_HEADERS)


@router.post(ANALYZE_MOOD_PATH)
async def analyze_mood_endpoint(
    request: Request,
    client: httpx.AsyncClient = Depends(get_gateway_client)
):
    """
    Analyze diary content and return mood emojis and a sentiment reflection.

    - 400 with {error} when content is missing or blank (no gateway call)
    - 429 with {error} when the gateway is rate limited
    - 500 with {error, emojis: [], sentiment} on any other failure
    """
    try:
        payload = await request.json()
        content = AnalysisRequest.model_validate(payload).content
    except (ValueError, ValidationError):
        content = ""

    if not content.strip():
        return _json(format_error("Content is required"), status_code=status.HTTP_400_BAD_REQUEST)

    try:
        analysis = await analyze_mood(content, client)
    except RateLimitExceededError as e:
        return _json(format_error(str(e)), status_code=e.status_code)
    except MoodAnalysisError as e:
        logger.error(f"Error in analyze-mood: {e}", exc_info=True)
        return _internal_failure(str(e))
    except Exception as e:
        logger.error(f"Unexpected error in analyze-mood: {e}", exc_info=True)
        return _internal_failure(str(e) or "An unexpected error occurred")

    return _json(analysis.model_dump())

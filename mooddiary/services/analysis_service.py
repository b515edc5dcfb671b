"""
Mood analysis service using an OpenAI-compatible AI gateway.

Sends diary text to the gateway's chat completions API with a fixed prompt and
parses the JSON object the model replies with into an AnalysisResult.
"""
import json
import logging
import httpx
from pydantic import ValidationError
from mooddiary.core.config import settings
from mooddiary.schemas.analysis import AnalysisResult, GatewayAnalysis

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an empathetic diary companion that analyzes emotional tone.
Respond with a JSON object containing:
1. "emojis": array of 3-5 emojis that represent the mood/themes
2. "sentiment": a brief 1-2 sentence reflection on the emotional tone
Keep the sentiment warm, non-judgmental, and supportive."""

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."


class MoodAnalysisError(Exception):
    """Analysis could not be produced."""
    status_code = 500


class RateLimitExceededError(MoodAnalysisError):
    """The gateway refused the request with HTTP 429."""
    status_code = 429

    def __init__(self, message: str = RATE_LIMIT_MESSAGE):
        super().__init__(message)


def build_gateway_payload(content: str) -> dict:
    """Build the chat completions request body for a diary entry."""
    return {
        "model": settings.AI_MODEL,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": f"Analyze this diary entry:\n\n{content}"}
        ],
        "response_format": {"type": "json_object"}
    }


def parse_gateway_reply(result: dict) -> AnalysisResult:
    """
    Extract and normalize the analysis from a chat completions response.

    Raises MoodAnalysisError when the reply has no message content or the
    content is not a JSON object.
    """
    try:
        analysis_text = result["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        analysis_text = None

    if not analysis_text:
        raise MoodAnalysisError("No analysis returned from AI")

    try:
        parsed = json.loads(analysis_text)
    except (TypeError, ValueError) as e:
        raise MoodAnalysisError(f"Invalid analysis JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise MoodAnalysisError("Analysis JSON is not an object")

    try:
        analysis = GatewayAnalysis.model_validate(parsed)
    except ValidationError as e:
        raise MoodAnalysisError(f"Invalid analysis JSON: {e}") from e

    return AnalysisResult.from_gateway(analysis)


async def analyze_mood(content: str, client: httpx.AsyncClient) -> AnalysisResult:
    """
    Analyze the mood of diary content.

    Args:
        content: Diary text, already validated as non-empty
        client: HTTP client used for the single gateway call

    Returns:
        AnalysisResult with emojis and sentiment

    Raises:
        RateLimitExceededError: gateway answered 429
        MoodAnalysisError: any other gateway, transport or parsing failure
    """
    api_key = settings.AI_GATEWAY_API_KEY
    if not api_key:
        raise MoodAnalysisError("AI_GATEWAY_API_KEY is not configured")

    try:
        response = await client.post(
            settings.AI_GATEWAY_URL,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json"
            },
            json=build_gateway_payload(content)
        )
    except httpx.TimeoutException as e:
        raise MoodAnalysisError("AI gateway request timed out") from e
    except httpx.HTTPError as e:
        raise MoodAnalysisError(f"AI gateway request failed: {e}") from e

    if not response.is_success:
        logger.error(f"AI gateway error {response.status_code}: {response.text}")
        if response.status_code == 429:
            raise RateLimitExceededError()
        raise MoodAnalysisError(f"AI gateway error: {response.status_code}")

    try:
        result = response.json()
    except ValueError as e:
        raise MoodAnalysisError(f"Invalid AI gateway response: {e}") from e

    analysis = parse_gateway_reply(result)
    logger.debug(f"Analyzed entry: emojis={analysis.emojis}")
    return analysis

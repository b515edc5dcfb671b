"""
Pydantic schemas for mood analysis.
"""
from pydantic import BaseModel, field_validator
from typing import List, Optional

# User-visible fallback texts
SENTIMENT_MISSING = "Unable to analyze sentiment at this time."
SENTIMENT_UNAVAILABLE = "Unable to analyze at this time."


class AnalysisRequest(BaseModel):
    """Request body for the analysis endpoint."""
    content: str


class GatewayAnalysis(BaseModel):
    """The JSON object the model returns inside its reply content."""
    emojis: Optional[List[str]] = None
    sentiment: Optional[str] = None

    @field_validator("emojis", mode="before")
    @classmethod
    def drop_malformed_emojis(cls, v):
        """Anything other than a list of strings counts as missing."""
        if not isinstance(v, list) or not all(isinstance(e, str) for e in v):
            return None
        return v

    @field_validator("sentiment", mode="before")
    @classmethod
    def drop_malformed_sentiment(cls, v):
        if not isinstance(v, str):
            return None
        return v


class AnalysisResult(BaseModel):
    """Normalized analysis returned to callers."""
    emojis: List[str] = []
    sentiment: str

    @classmethod
    def from_gateway(cls, analysis: GatewayAnalysis) -> "AnalysisResult":
        """Fill in defaults for fields the model left out."""
        return cls(
            emojis=analysis.emojis or [],
            sentiment=analysis.sentiment or SENTIMENT_MISSING
        )

"""
Utility functions for the application.
"""
from typing import Any, Dict, List, Optional
from datetime import datetime


def format_entry_timestamp(value: datetime) -> str:
    """
    Format a timestamp for display, e.g. "March 5, 2025 at 9:07 PM".

    No timezone conversion happens: entry timestamps are UTC, so the label is
    in UTC.
    """
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{value:%B} {value.day}, {value.year} at {hour}:{value:%M} {meridiem}"


def format_error(
    message: str,
    emojis: Optional[List[str]] = None,
    sentiment: Optional[str] = None
) -> Dict[str, Any]:
    """Format error response, optionally carrying fallback analysis fields."""
    response: Dict[str, Any] = {"error": message}
    if emojis is not None:
        response["emojis"] = emojis
    if sentiment is not None:
        response["sentiment"] = sentiment
    return response

"""
Per-session settings chosen by the writer.
"""

from pydantic import BaseModel, Field, field_validator

from .config import DEFAULT_ADVANCE_DELAY, DEFAULT_STREAM_INTERVAL_MS, DEFAULT_TIMER_SECONDS
from .genres import is_known_genre
from .length_policy import LengthSetting


class SessionSettings(BaseModel):
    """Choices that shape a writing session, re-read at every turn boundary."""
    genre: str = "hardboiled"
    timer_seconds: int = Field(default=DEFAULT_TIMER_SECONDS, gt=0)
    ai_length: LengthSetting = LengthSetting.MEDIUM
    stream_interval_ms: int = Field(default=DEFAULT_STREAM_INTERVAL_MS, ge=0)
    advance_delay: float = Field(default=DEFAULT_ADVANCE_DELAY, ge=0)

    @field_validator("genre")
    @classmethod
    def _known_genre(cls, value: str) -> str:
        if not is_known_genre(value):
            raise ValueError(f"unknown genre '{value}'")
        return value

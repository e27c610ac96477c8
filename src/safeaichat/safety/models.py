"""Data models for the safety filter.

These models describe the filter configuration and its verdict,
independent of how a given category is detected.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SafetyLevel(str, Enum):
    """Overall strictness selected by the user."""

    STRICT = "strict"          # Block most potentially harmful content
    MODERATE = "moderate"      # Balance between safety and utility
    PERMISSIVE = "permissive"  # Allow most content (demos/testing only)


class SafetySettings(BaseModel):
    """Safety filter configuration.

    Every field defaults to the most restrictive value. The level and the
    per-category flags are independent; only the flags drive filtering.
    """

    model_config = ConfigDict(frozen=True)

    level: SafetyLevel = Field(default=SafetyLevel.STRICT, description="Overall safety level")
    block_harassment: bool = Field(default=True, description="Block harassment")
    block_hate_speech: bool = Field(default=True, description="Block hate speech")
    block_sexual_content: bool = Field(default=True, description="Block sexual content")
    block_dangerous_content: bool = Field(default=True, description="Block dangerous content")


class FilterDecision(BaseModel):
    """Verdict of the safety filter for one input."""

    model_config = ConfigDict(frozen=True)

    blocked: bool = Field(description="Whether the input was blocked")
    reason: str | None = Field(default=None, description="Human-readable reason when blocked")

    @classmethod
    def allowed(cls) -> "FilterDecision":
        """Decision for input that passed every enabled check."""
        return cls(blocked=False)

"""Safety filter module for safeaichat.

Decides whether a prompt is blocked before any response is produced.
"""

from .filter import (
    BLOCK_CATEGORIES,
    DEFAULT_FILTER_REASON,
    BlockCategory,
    filter_content,
    matching_categories,
)
from .models import FilterDecision, SafetyLevel, SafetySettings

__all__ = [
    "BLOCK_CATEGORIES",
    "DEFAULT_FILTER_REASON",
    "BlockCategory",
    "FilterDecision",
    "SafetyLevel",
    "SafetySettings",
    "filter_content",
    "matching_categories",
]

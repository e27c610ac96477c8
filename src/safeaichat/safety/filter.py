"""Keyword-based content filter.

Hides the keyword lists, the order in which categories are checked and the
reason strings reported back to the user.
"""

from dataclasses import dataclass

from .models import FilterDecision, SafetySettings

DEFAULT_FILTER_REASON = "Content blocked by safety filters"


@dataclass(frozen=True)
class BlockCategory:
    """A filterable content category."""

    name: str
    setting: str  # SafetySettings field that enables the check
    keywords: tuple[str, ...]
    reason: str

    def enabled(self, settings: SafetySettings) -> bool:
        return bool(getattr(settings, self.setting))

    def matches(self, lowered: str) -> bool:
        # Substring containment: "charming" contains "harm"
        return any(keyword in lowered for keyword in self.keywords)


# Checked in this order, first match wins
BLOCK_CATEGORIES: tuple[BlockCategory, ...] = (
    BlockCategory(
        name="harassment",
        setting="block_harassment",
        keywords=("bully", "harass", "threaten", "attack"),
        reason="Content blocked: Potential harassment detected",
    ),
    BlockCategory(
        name="hate_speech",
        setting="block_hate_speech",
        keywords=("hate", "discriminate"),
        reason="Content blocked: Potential hate speech detected",
    ),
    BlockCategory(
        name="dangerous_content",
        setting="block_dangerous_content",
        keywords=("harm", "dangerous", "violence", "weapon"),
        reason="Content blocked: Potentially dangerous content",
    ),
)


def filter_content(text: str, settings: SafetySettings) -> FilterDecision:
    """Decide whether text should be blocked under the given settings.

    Args:
        text: User input to check
        settings: Active safety configuration

    Returns:
        FilterDecision, blocked with the first matching category's reason
    """
    lowered = text.lower()

    for category in BLOCK_CATEGORIES:
        if category.enabled(settings) and category.matches(lowered):
            return FilterDecision(blocked=True, reason=category.reason)

    return FilterDecision.allowed()


def matching_categories(text: str, settings: SafetySettings | None = None) -> list[BlockCategory]:
    """Return every category whose keywords occur in text.

    When settings are given, disabled categories are skipped.
    """
    lowered = text.lower()
    return [
        category
        for category in BLOCK_CATEGORIES
        if (settings is None or category.enabled(settings)) and category.matches(lowered)
    ]

"""Follow-up suggestions offered under assistant replies."""

import re

BASE_SUGGESTIONS = (
    "Summarize that in 3 bullets",
    "Give me an example",
    "What should I do next?",
)

_CODE_PATTERN = re.compile(r"code|function|API", re.IGNORECASE)


def get_suggestions(text: str, limit: int = 3) -> list[str]:
    """Suggest follow-up prompts for an assistant reply."""
    suggestions = list(BASE_SUGGESTIONS)
    if not text:
        return suggestions
    if len(text) > 240:
        suggestions.insert(0, "Shorten that answer")
    if _CODE_PATTERN.search(text):
        suggestions.insert(0, "Show a minimal code snippet")
    return suggestions[:limit]

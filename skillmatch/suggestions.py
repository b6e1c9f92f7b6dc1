"""Tips for sharpening a vague help request."""
from __future__ import annotations

from skillmatch.config import MatchSettings
from skillmatch.llm import CompletionClient, parse_json_array
from skillmatch.log import get_logger

log = get_logger(__name__)

FALLBACK_SUGGESTIONS: tuple[str, ...] = (
    "Be more specific about the tools and technologies involved",
    "Mention your experience level",
    "Describe what you've already attempted",
)

MAX_SUGGESTIONS = 5

_SUGGEST_PROMPT = """\
Analyze this help request and suggest improvements to get better matches:

Query: "{query}"

Provide 3-5 specific suggestions to make this request clearer and more likely to find the right help. Return as a JSON array of strings.

Example response:
["Be more specific about which part of Firebase auth you need help with", "Mention your current skill level", "Include what you've already tried"]

Return only the JSON array, no additional text.
"""


def suggest(
    query: str,
    llm: CompletionClient | None = None,
    settings: MatchSettings | None = None,
) -> list[str]:
    """Return 3-5 improvement tips for *query*; the static list when the model can't help."""
    if llm is None:
        return list(FALLBACK_SUGGESTIONS)

    max_tokens = settings.suggestion_max_tokens if settings else 300
    try:
        raw = llm.complete(_SUGGEST_PROMPT.format(query=query), max_tokens=max_tokens, temperature=0.4)
        items = parse_json_array(raw)
    except Exception as exc:
        log.warning("Suggestion generation failed (%s), using defaults", exc)
        return list(FALLBACK_SUGGESTIONS)

    tips = [s.strip() for s in items if isinstance(s, str) and s.strip()]
    if not tips:
        log.debug("LLM returned no usable suggestions: %r", items)
        return list(FALLBACK_SUGGESTIONS)
    return tips[:MAX_SUGGESTIONS]

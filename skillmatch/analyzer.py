"""Turn a free-text help request into skills, tools, intent and urgency.

Uses the LLM when one is configured; otherwise (or when the call or its JSON
fails) a keyword scan over two fixed vocabularies.
"""
from __future__ import annotations

import math
import re
from typing import Any

from skillmatch.config import MatchSettings
from skillmatch.llm import CompletionClient, parse_json_object
from skillmatch.log import get_logger
from skillmatch.models import URGENCY_LEVELS, QueryAnalysis

log = get_logger(__name__)

# ── Keyword vocabularies ────────────────────────────────────────────────

SKILL_VOCABULARY: tuple[str, ...] = (
    "javascript", "python", "react", "nodejs", "flutter", "swift", "kotlin",
    "ui", "ux", "design", "figma", "photoshop", "sketch",
    "docker", "kubernetes", "aws", "azure", "devops",
    "sql", "mongodb", "database", "analytics", "ml", "ai",
    "ios", "android", "mobile", "frontend", "backend", "api",
)

TOOL_VOCABULARY: tuple[str, ...] = (
    "firebase", "auth", "authentication", "database", "storage",
    "git", "github", "vscode", "xcode", "android studio",
    "docker", "kubernetes", "jenkins", "figma", "jira", "postman",
)

FALLBACK_CONFIDENCE = 0.5
DEFAULT_LLM_CONFIDENCE = 0.7

_NON_LETTERS = re.compile(r"[^a-z]")

_ANALYZE_PROMPT = """\
Analyze this help request and extract relevant skills, tools, and intent:

Query: "{query}"

Return a JSON response with:
{{
  "skills": ["array of relevant skills needed"],
  "tools": ["array of specific tools/technologies mentioned"],
  "intent": "clear description of what the user wants to accomplish",
  "urgency": "low|medium|high based on language used",
  "confidence": 0.0-1.0 confidence score
}}

Common skill categories:
- Programming: JavaScript, Python, React, Node.js, Flutter, Swift, Kotlin
- Design: UI/UX, Figma, Photoshop, Sketch, Adobe Creative Suite
- DevOps: Docker, Kubernetes, AWS, Azure, CI/CD, Jenkins
- Data: SQL, MongoDB, Analytics, Machine Learning, Data Science
- Mobile: iOS, Android, React Native, Flutter
- Web: Frontend, Backend, Full-stack, API Development
- Other: Project Management, Marketing, Business Analysis

Return only valid JSON, no additional text.
"""


def _vocabulary_hits(text: str, vocabulary: tuple[str, ...]) -> list[str]:
    return [
        term for term in vocabulary
        if term in text or _NON_LETTERS.sub("", term) in text
    ]


def extract_keywords(query: str) -> QueryAnalysis:
    """Deterministic extraction: vocabulary order, one hit per vocabulary entry."""
    low = query.lower()
    return QueryAnalysis(
        skills=_vocabulary_hits(low, SKILL_VOCABULARY),
        tools=_vocabulary_hits(low, TOOL_VOCABULARY),
        intent=query,
        urgency="medium",
        confidence=FALLBACK_CONFIDENCE,
    )


def clamp_unit(value: Any, default: float) -> float:
    """Coerce a model-supplied number into [0, 1]; falsy, non-numeric or NaN/inf gives *default*."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    if not value or not math.isfinite(value):
        return default
    return min(max(float(value), 0.0), 1.0)


def _coerce_analysis(data: dict[str, Any], query: str) -> QueryAnalysis:
    def strings(key: str) -> list[str]:
        items = data.get(key)
        if not isinstance(items, list):
            return []
        return [s.strip() for s in items if isinstance(s, str) and s.strip()]

    intent = data.get("intent")
    urgency = data.get("urgency")
    return QueryAnalysis(
        skills=strings("skills"),
        tools=strings("tools"),
        intent=intent.strip() if isinstance(intent, str) and intent.strip() else query,
        urgency=urgency if urgency in URGENCY_LEVELS else "medium",
        confidence=clamp_unit(data.get("confidence"), DEFAULT_LLM_CONFIDENCE),
    )


def analyze_query(
    query: str,
    llm: CompletionClient | None = None,
    settings: MatchSettings | None = None,
) -> QueryAnalysis:
    """Extract structured needs from *query*. Never raises."""
    if llm is None:
        return extract_keywords(query)

    max_tokens = settings.analysis_max_tokens if settings else 400
    raw = ""
    try:
        raw = llm.complete(_ANALYZE_PROMPT.format(query=query), max_tokens=max_tokens, temperature=0.1)
        analysis = _coerce_analysis(parse_json_object(raw), query)
        log.info(
            "Query analysed by LLM — skills=%d, tools=%d, urgency=%s",
            len(analysis.skills), len(analysis.tools), analysis.urgency,
        )
        return analysis
    except Exception as exc:
        log.warning("Query analysis failed (%s), using keyword extraction", exc)
        if raw:
            log.debug("Raw analysis response: %s", raw)
        return extract_keywords(query)

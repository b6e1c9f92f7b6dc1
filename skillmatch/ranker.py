"""Rank a candidate pool against an analysed help request.

Three strategies:

- ``rank_detailed``: the LLM ranks the whole (small) pool.
- ``rank_hybrid``: deterministic pre-filter, cut to a few dozen, then detailed.
- ``rank_basic``: keyword overlap and a fixed weighting, no network.

Detailed falls back to basic on any model or parsing failure.
"""
from __future__ import annotations

import json
import math
from typing import Any

from skillmatch.analyzer import clamp_unit, extract_keywords
from skillmatch.config import MatchSettings
from skillmatch.llm import CompletionClient, parse_json_object
from skillmatch.log import get_logger
from skillmatch.models import Candidate, Match, MatchResult, QueryAnalysis

log = get_logger(__name__)

BASIC_SUGGESTIONS: tuple[str, ...] = (
    "Try being more specific about the tools you need help with",
    "Mention your skill level to get better matches",
    "Consider breaking down complex problems into smaller tasks",
)

DEFAULT_REASONING = "Good skills match"

_RANK_PROMPT = """\
Analyze this help request and rank the most suitable teammates:

Request: "{query}"
Intent: {intent}
Needed Skills: {skills}
Needed Tools: {tools}
Urgency: {urgency}
{context}
Available teammates:
{teammates}

Rank teammates by relevance and return JSON:
{{
  "matches": [
    {{
      "userId": "user_id",
      "name": "User Name",
      "relevanceScore": 0.0-1.0,
      "matchingSkills": ["skills that match"],
      "matchingTools": ["tools that match"],
      "availability": true/false,
      "reasoning": "why this person is a good match"
    }}
  ],
  "extractedSkills": ["skills found in query"],
  "extractedTools": ["tools found in query"],
  "confidence": 0.0-1.0,
  "suggestions": ["helpful tips for the requester"]
}}

Ranking criteria:
1. Direct skill/tool matches (weight: 40%)
2. Availability status (weight: 20%)
3. Help score/reputation (weight: 15%)
4. Recent activity (weight: 15%)
5. Skill complementarity (weight: 10%)

Return only JSON, no additional text.
"""


def _overlaps(label: str, needed: list[str]) -> bool:
    # blank strings are substrings of everything
    low = label.strip().lower()
    if not low:
        return False
    return any(
        n.strip().lower() in low or low in n.strip().lower()
        for n in needed if n.strip()
    )


def _matching(labels: list[str], needed: list[str]) -> list[str]:
    return [label for label in labels if _overlaps(label, needed)]


# ── Basic (deterministic) ───────────────────────────────────────────────


def score_candidate(candidate: Candidate, skills: list[str], tools: list[str]) -> Match:
    matching_skills = _matching(candidate.skills, skills)
    matching_tools = _matching(candidate.tools, tools)

    score = 0.0
    score += 0.4 * len(matching_skills)
    score += 0.3 * len(matching_tools)
    score += 0.2 if candidate.is_available else 0.0
    score += 0.1 * candidate.help_score / 100

    return Match(
        candidate_id=candidate.id,
        name=candidate.name,
        relevance_score=min(score, 1.0),
        matching_skills=matching_skills,
        matching_tools=matching_tools,
        availability=candidate.is_available,
        help_score=candidate.help_score,
        reasoning=f"Matches {len(matching_skills)} skills and {len(matching_tools)} tools",
    )


def rank_basic(query: str, pool: list[Candidate], max_results: int) -> MatchResult:
    """Keyword-overlap ranking. Ignores any earlier analysis of *query*."""
    keywords = extract_keywords(query)
    scored = [score_candidate(c, keywords.skills, keywords.tools) for c in pool]
    kept = [m for m in scored if m.relevance_score > 0 or m.availability]
    kept.sort(key=lambda m: -m.relevance_score)
    log.info("Basic ranking: %d candidates → %d kept", len(pool), len(kept))
    return MatchResult(
        matches=kept[:max_results],
        extracted_skills=keywords.skills,
        extracted_tools=keywords.tools,
        confidence=keywords.confidence,
        suggestions=list(BASIC_SUGGESTIONS),
        strategy="basic",
    )


# ── Detailed (LLM) ──────────────────────────────────────────────────────


def _own_labels(labels: list[str], claimed: Any) -> list[str]:
    """Keep only the candidate's own labels that the model claimed, in the candidate's spelling."""
    if not isinstance(claimed, list):
        return []
    wanted = {c.strip().lower() for c in claimed if isinstance(c, str)}
    return list(dict.fromkeys(label for label in labels if label.lower() in wanted))


def _validated_matches(entries: Any, pool: list[Candidate]) -> list[Match]:
    if not isinstance(entries, list):
        raise ValueError("LLM response has no 'matches' list")

    by_id = {c.id: c for c in pool}
    seen: set[str] = set()
    matches: list[Match] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        cid = entry.get("userId")
        score = entry.get("relevanceScore")
        if not isinstance(cid, str) or not cid or cid not in by_id or cid in seen:
            log.debug("Dropping match with unknown or duplicate id: %r", cid)
            continue
        if (
            isinstance(score, bool)
            or not isinstance(score, (int, float))
            or not math.isfinite(score)
            or score < 0
        ):
            log.debug("Dropping match %s with invalid score %r", cid, score)
            continue
        seen.add(cid)
        cand = by_id[cid]
        reasoning = entry.get("reasoning")
        matches.append(Match(
            candidate_id=cid,
            name=cand.name,
            relevance_score=min(float(score), 1.0),
            matching_skills=_own_labels(cand.skills, entry.get("matchingSkills")),
            matching_tools=_own_labels(cand.tools, entry.get("matchingTools")),
            availability=cand.is_available,
            help_score=cand.help_score,
            reasoning=reasoning.strip() if isinstance(reasoning, str) and reasoning.strip() else DEFAULT_REASONING,
        ))
    return matches


def _build_rank_prompt(
    query: str, analysis: QueryAnalysis, pool: list[Candidate], context: str | None,
) -> str:
    return _RANK_PROMPT.format(
        query=query,
        intent=analysis.intent,
        skills=", ".join(analysis.skills),
        tools=", ".join(analysis.tools),
        urgency=analysis.urgency,
        context=f"Additional context: {context}\n" if context else "",
        teammates=json.dumps([c.summary() for c in pool], indent=2),
    )


def rank_detailed(
    query: str,
    analysis: QueryAnalysis,
    pool: list[Candidate],
    max_results: int,
    llm: CompletionClient | None = None,
    *,
    context: str | None = None,
    settings: MatchSettings | None = None,
    strategy: str = "detailed",
) -> MatchResult:
    """Let the model rank *pool*; fall back to :func:`rank_basic` on any failure."""
    if not pool:
        return MatchResult(
            matches=[],
            extracted_skills=list(analysis.skills),
            extracted_tools=list(analysis.tools),
            confidence=analysis.confidence,
            suggestions=[],
            strategy=strategy,
        )
    if llm is None:
        return rank_basic(query, pool, max_results)

    max_tokens = settings.ranking_max_tokens if settings else 2000
    raw = ""
    try:
        raw = llm.complete(
            _build_rank_prompt(query, analysis, pool, context),
            max_tokens=max_tokens,
            temperature=0.2,
        )
        data = parse_json_object(raw)
        matches = _validated_matches(data.get("matches"), pool)
    except Exception as exc:
        log.warning("LLM ranking failed (%s), using basic matching", exc)
        if raw:
            log.debug("Raw ranking response: %s", raw)
        return rank_basic(query, pool, max_results)

    matches.sort(key=lambda m: -m.relevance_score)
    suggestions = data.get("suggestions")
    if not isinstance(suggestions, list):
        suggestions = []
    log.info("LLM ranked %d of %d candidates (%s)", len(matches), len(pool), strategy)
    return MatchResult(
        matches=matches[:max_results],
        extracted_skills=list(analysis.skills),
        extracted_tools=list(analysis.tools),
        confidence=clamp_unit(data.get("confidence"), analysis.confidence),
        suggestions=[s for s in suggestions if isinstance(s, str) and s.strip()],
        strategy=strategy,
    )


# ── Hybrid ──────────────────────────────────────────────────────────────


def prefilter_pool(pool: list[Candidate], analysis: QueryAnalysis) -> list[Candidate]:
    """Candidates with any skill/tool overlap, plus everyone who is available."""
    return [
        c for c in pool
        if any(_overlaps(s, analysis.skills) for s in c.skills)
        or any(_overlaps(t, analysis.tools) for t in c.tools)
        or c.is_available
    ]


def rank_hybrid(
    query: str,
    analysis: QueryAnalysis,
    pool: list[Candidate],
    max_results: int,
    llm: CompletionClient | None = None,
    *,
    context: str | None = None,
    settings: MatchSettings | None = None,
) -> MatchResult:
    limit = settings.hybrid_pool_limit if settings else 30
    relevant = prefilter_pool(pool, analysis)
    reduced = relevant[:limit]
    log.info("Hybrid pre-filter: %d → %d → %d candidates", len(pool), len(relevant), len(reduced))
    return rank_detailed(
        query, analysis, reduced, max_results, llm,
        context=context, settings=settings, strategy="hybrid",
    )

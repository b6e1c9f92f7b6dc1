"""
Skill matching entry point.

Runs: analyse query → rank (detailed for small pools, hybrid for large) →
basic keyword ranking if anything escapes the ranking step.
"""
from __future__ import annotations

from skillmatch.analyzer import analyze_query
from skillmatch.config import MatchSettings, load_settings
from skillmatch.llm import CompletionClient
from skillmatch.log import get_logger
from skillmatch.models import MatchRequest, MatchResult
from skillmatch.ranker import rank_basic, rank_detailed, rank_hybrid

log = get_logger(__name__)


def resolve_max_results(max_results: int | None, settings: MatchSettings) -> int:
    if max_results is None or max_results <= 0:
        return settings.default_max_results
    return max_results


def match(
    request: MatchRequest,
    llm: CompletionClient | None = None,
    settings: MatchSettings | None = None,
) -> MatchResult:
    """Rank ``request.pool`` for ``request.query``. Never raises on model or network trouble."""
    settings = settings or load_settings()
    max_results = resolve_max_results(request.max_results, settings)
    pool = list(request.pool)

    if not request.query.strip():
        log.info("Empty query — nothing to match")
        return MatchResult(
            matches=[], extracted_skills=[], extracted_tools=[],
            confidence=0.0, suggestions=[], strategy="empty",
        )

    analysis = analyze_query(request.query, llm, settings)

    try:
        if len(pool) <= settings.detailed_pool_limit:
            result = rank_detailed(
                request.query, analysis, pool, max_results, llm,
                context=request.context, settings=settings,
            )
        else:
            result = rank_hybrid(
                request.query, analysis, pool, max_results, llm,
                context=request.context, settings=settings,
            )
    except Exception as exc:
        log.error("Ranking failed (%s), falling back to basic matching", exc)
        result = rank_basic(request.query, pool, max_results)

    log.info(
        "Match complete — pool=%d, matches=%d, strategy=%s, confidence=%.2f",
        len(pool), len(result.matches), result.strategy, result.confidence,
    )
    return result

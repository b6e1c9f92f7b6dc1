"""
Tests for the matching entry point: routing, fallbacks and result invariants.
"""
import copy
from unittest.mock import MagicMock

import pytest

from skillmatch import matcher
from skillmatch.config import MatchSettings
from skillmatch.matcher import match, resolve_max_results
from skillmatch.models import MatchRequest, MatchResult


def _empty_result(strategy):
    return MatchResult([], [], [], 0.5, strategy=strategy)


class TestRouting:
    """Pool size decides between detailed and hybrid ranking."""

    @pytest.fixture
    def spies(self, monkeypatch):
        detailed = MagicMock(return_value=_empty_result("detailed"))
        hybrid = MagicMock(return_value=_empty_result("hybrid"))
        monkeypatch.setattr(matcher, "rank_detailed", detailed)
        monkeypatch.setattr(matcher, "rank_hybrid", hybrid)
        return detailed, hybrid

    @pytest.mark.parametrize("size", [1, 10, 50])
    def test_small_pools_go_detailed(self, spies, pool_factory, settings, size):
        detailed, hybrid = spies

        match(MatchRequest(query="react", pool=pool_factory(size)), settings=settings)

        assert detailed.call_count == 1
        assert hybrid.call_count == 0

    @pytest.mark.parametrize("size", [51, 200])
    def test_large_pools_go_hybrid(self, spies, pool_factory, settings, size):
        detailed, hybrid = spies

        match(MatchRequest(query="react", pool=pool_factory(size)), settings=settings)

        assert hybrid.call_count == 1
        assert detailed.call_count == 0

    def test_threshold_comes_from_settings(self, spies, pool_factory):
        detailed, hybrid = spies

        match(MatchRequest(query="react", pool=pool_factory(11)),
              settings=MatchSettings(detailed_pool_limit=10))

        assert hybrid.call_count == 1

    def test_context_is_forwarded(self, spies, pool_factory, settings):
        detailed, _ = spies

        match(MatchRequest(query="react", pool=pool_factory(3), context="room: web"), settings=settings)

        assert detailed.call_args.kwargs["context"] == "room: web"


class TestFallbacks:

    def test_unreachable_model_still_returns_matches(self, small_pool, failing_llm, settings):
        result = match(MatchRequest(query="need react help", pool=small_pool), failing_llm, settings)

        assert result.strategy == "basic"
        assert [m.candidate_id for m in result.matches] == ["u1"]
        assert result.matches[0].relevance_score == pytest.approx(0.65)

    def test_no_model_configured(self, small_pool, settings):
        result = match(MatchRequest(query="need react help", pool=small_pool), None, settings)

        assert [m.candidate_id for m in result.matches] == ["u1"]
        assert len(result.suggestions) == 3

    def test_exception_escaping_ranking_uses_basic(self, small_pool, settings, monkeypatch):
        monkeypatch.setattr(matcher, "rank_detailed", MagicMock(side_effect=RuntimeError("boom")))

        result = match(MatchRequest(query="need react help", pool=small_pool), None, settings)

        assert result.strategy == "basic"
        assert [m.candidate_id for m in result.matches] == ["u1"]

    def test_blank_query_short_circuits(self, small_pool, failing_llm, settings):
        result = match(MatchRequest(query="   ", pool=small_pool), failing_llm, settings)

        assert result.matches == []
        assert result.strategy == "empty"
        assert failing_llm.calls == 0


class TestEndToEnd:
    """Analyse + rank with a scripted model."""

    def test_llm_path(self, team_pool, scripted_llm, settings):
        llm = scripted_llm(
            {"skills": ["React"], "tools": ["Firebase"], "intent": "auth setup",
             "urgency": "high", "confidence": 0.9},
            {"matches": [
                {"userId": "a", "relevanceScore": 0.95, "matchingSkills": ["React"],
                 "matchingTools": ["Firebase"], "reasoning": "React + Firebase"},
                {"userId": "c", "relevanceScore": 0.3},
            ], "confidence": 0.88, "suggestions": ["Say which auth provider"]},
        )

        result = match(MatchRequest(query="firebase auth in react", pool=team_pool, max_results=1),
                       llm, settings)

        assert result.strategy == "detailed"
        assert [m.candidate_id for m in result.matches] == ["a"]
        assert result.extracted_skills == ["React"]
        assert result.extracted_tools == ["Firebase"]
        assert result.confidence == 0.88
        assert "Urgency: high" in llm.prompts[1]

    def test_invariants_hold(self, team_pool, scripted_llm, settings):
        llm = scripted_llm(
            {"skills": ["Python"], "tools": [], "confidence": 0.6},
            {"matches": [{"userId": c.id, "relevanceScore": 5} for c in team_pool]},
        )

        result = match(MatchRequest(query="python", pool=team_pool, max_results=2), llm, settings)

        ids = {c.id for c in team_pool}
        assert len(result.matches) <= 2
        assert all(0.0 <= m.relevance_score <= 1.0 for m in result.matches)
        assert all(m.candidate_id in ids for m in result.matches)

    def test_nan_from_model_stays_out_of_result(self, team_pool, scripted_llm, settings):
        llm = scripted_llm(
            '{"skills": ["React"], "tools": [], "confidence": NaN}',
            '{"matches": [{"userId": "a", "relevanceScore": NaN},'
            ' {"userId": "c", "relevanceScore": 0.4}], "confidence": NaN}',
        )

        result = match(MatchRequest(query="react", pool=team_pool), llm, settings)

        assert result.strategy == "detailed"
        assert [m.candidate_id for m in result.matches] == ["c"]
        assert 0.0 <= result.confidence <= 1.0
        assert result.confidence == 0.7

    def test_pool_is_not_mutated(self, team_pool, settings):
        before = copy.deepcopy(team_pool)

        match(MatchRequest(query="react docker", pool=team_pool), None, settings)

        assert team_pool == before


class TestResolveMaxResults:

    @pytest.mark.parametrize("given,expected", [(None, 10), (0, 10), (-3, 10), (4, 4)])
    def test_defaults(self, settings, given, expected):
        assert resolve_max_results(given, settings) == expected

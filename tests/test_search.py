"""
Tests for plain candidate search.
"""
from skillmatch.search import search_candidates


class TestSearchCandidates:

    def test_matches_name_skill_or_tool(self, team_pool):
        assert [c.id for c in search_candidates("asha", team_pool)] == ["a"]
        assert [c.id for c in search_candidates("SCRIPT", team_pool)] == ["a"]
        assert [c.id for c in search_candidates("fig", team_pool)] == ["c"]

    def test_blank_query_returns_pool(self, team_pool):
        assert search_candidates("  ", team_pool) == team_pool

    def test_available_only(self, team_pool):
        found = search_candidates("", team_pool, available_only=True)

        assert [c.id for c in found] == ["a", "c"]

    def test_no_hits(self, team_pool):
        assert search_candidates("haskell", team_pool) == []

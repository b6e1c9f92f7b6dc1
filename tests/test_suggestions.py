"""
Tests for query-improvement suggestions.
"""
from skillmatch.suggestions import FALLBACK_SUGGESTIONS, suggest


class TestSuggest:

    def test_unavailable_model_returns_fixed_list(self, failing_llm):
        tips = suggest("help", failing_llm)

        assert tips == list(FALLBACK_SUGGESTIONS)
        assert len(tips) == 3

    def test_no_model_returns_fixed_list(self):
        assert suggest("help") == list(FALLBACK_SUGGESTIONS)

    def test_model_tips_are_used(self, scripted_llm):
        llm = scripted_llm('["Name the Firebase feature", "Say what you tried", "Add your level"]')

        tips = suggest("firebase is broken", llm)

        assert tips == ["Name the Firebase feature", "Say what you tried", "Add your level"]
        assert 'Query: "firebase is broken"' in llm.prompts[0]

    def test_at_most_five(self, scripted_llm):
        llm = scripted_llm([f"tip {i}" for i in range(8)])

        assert suggest("help", llm) == [f"tip {i}" for i in range(5)]

    def test_non_array_uses_fallback(self, scripted_llm):
        llm = scripted_llm("Be more specific.")

        assert suggest("help", llm) == list(FALLBACK_SUGGESTIONS)

    def test_empty_or_non_string_array_uses_fallback(self, scripted_llm):
        llm = scripted_llm("[]", "[1, null, {}]")

        assert suggest("help", llm) == list(FALLBACK_SUGGESTIONS)
        assert suggest("help", llm) == list(FALLBACK_SUGGESTIONS)

    def test_never_empty(self, scripted_llm):
        llm = scripted_llm('["  "]')

        assert suggest("help", llm)

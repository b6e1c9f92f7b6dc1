"""
Pytest fixtures: stub LLM clients and sample candidate pools.

No test talks to a real model or document store.
"""
import json
import os

os.environ.setdefault("LOG_TO_FILE", "0")

import pytest

from skillmatch.config import MatchSettings
from skillmatch.llm import CompletionClient
from skillmatch.models import Candidate


class ScriptedLLM(CompletionClient):
    """Returns canned completions in order and records every prompt."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def complete(self, prompt, *, max_tokens=1000, temperature=0.2):
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError("ScriptedLLM ran out of responses")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, (dict, list)):
            return json.dumps(item)
        return item


class FailingLLM(CompletionClient):
    """Simulates an unreachable model."""

    def __init__(self, exc=None):
        self.exc = exc or ConnectionError("model unreachable")
        self.calls = 0

    def complete(self, prompt, *, max_tokens=1000, temperature=0.2):
        self.calls += 1
        raise self.exc


@pytest.fixture
def settings():
    return MatchSettings()


@pytest.fixture
def failing_llm():
    return FailingLLM()


@pytest.fixture
def scripted_llm():
    return ScriptedLLM


@pytest.fixture
def small_pool():
    return [
        Candidate(id="u1", name="Asha", skills=["React"], tools=[], is_available=True, help_score=50),
        Candidate(id="u2", name="Diego", skills=[], tools=["Docker"], is_available=False, help_score=0),
    ]


@pytest.fixture
def team_pool():
    return [
        Candidate(id="a", name="Asha", skills=["React", "JavaScript"], tools=["Firebase"],
                  is_available=True, help_score=70),
        Candidate(id="b", name="Ben", skills=["Python"], tools=["Docker", "Git"],
                  is_available=False, help_score=90),
        Candidate(id="c", name="Chen", skills=["Design", "UX"], tools=["Figma"],
                  is_available=True, help_score=10),
        Candidate(id="d", name="Dana", skills=["Kotlin"], tools=[], is_available=False, help_score=0),
    ]


def make_pool(size, available=False, prefix="p"):
    return [
        Candidate(id=f"{prefix}{i}", name=f"Person {i}", skills=["Cobol"], tools=["Fax"],
                  is_available=available)
        for i in range(size)
    ]


@pytest.fixture
def pool_factory():
    return make_pool

"""Text-completion client used by the analyzer, ranker and suggestion generator.

Everything that talks to a model goes through :class:`CompletionClient`, so
tests can hand in a scripted or failing stub. The production client calls
Groq's OpenAI-compatible endpoint through the ``openai`` SDK.
"""
from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Callable

from skillmatch.config import MatchSettings, get_env, load_settings
from skillmatch.log import get_logger

log = get_logger(__name__)


class CompletionClient(ABC):
    @abstractmethod
    def complete(self, prompt: str, *, max_tokens: int = 1000, temperature: float = 0.2) -> str:
        """Return the model's text completion for *prompt*."""


class GroqClient(CompletionClient):
    def __init__(self, api_key: str, model: str, base_url: str) -> None:
        from openai import OpenAI

        # a failed call goes straight to the caller's fallback, never retried here
        self.client = OpenAI(api_key=api_key, base_url=base_url, max_retries=0)
        self.model = model

    def complete(self, prompt: str, *, max_tokens: int = 1000, temperature: float = 0.2) -> str:
        r = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            max_tokens=max_tokens,
            temperature=temperature,
        )
        return (r.choices[0].message.content or "").strip()


def get_llm(
    env_getter: Callable[[str], str] = get_env,
    settings: MatchSettings | None = None,
) -> CompletionClient | None:
    """Return a Groq client, or None when no ``GROQ_API_KEY`` is configured."""
    api_key = env_getter("GROQ_API_KEY")
    if not api_key:
        log.debug("No GROQ_API_KEY — matching will use keyword fallbacks")
        return None
    settings = settings or load_settings()
    log.debug("Using Groq model %s", settings.model)
    return GroqClient(api_key, settings.model, settings.base_url)


def _slice(raw: str, opener: str, closer: str) -> str:
    start = raw.find(opener)
    end = raw.rfind(closer) + 1
    if start == -1 or end <= start:
        raise ValueError(f"LLM did not return a JSON {'object' if opener == '{' else 'array'}")
    return raw[start:end]


def parse_json_object(raw: str) -> dict[str, Any]:
    """Pull the outermost ``{...}`` out of a completion and decode it.

    Tolerates code fences and chatter around the JSON.
    """
    data = json.loads(_slice(raw, "{", "}"))
    if not isinstance(data, dict):
        raise ValueError("LLM JSON is not an object")
    return data


def parse_json_array(raw: str) -> list[Any]:
    data = json.loads(_slice(raw, "[", "]"))
    if not isinstance(data, list):
        raise ValueError("LLM JSON is not an array")
    return data

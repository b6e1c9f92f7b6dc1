"""Data models for candidates, query analyses and match results."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

URGENCY_LEVELS: tuple[str, ...] = ("low", "medium", "high")


def _str_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [v.strip() for v in value if isinstance(v, str) and v.strip()]


@dataclass(frozen=True)
class Candidate:
    id: str
    name: str
    skills: list[str] = field(default_factory=list)
    tools: list[str] = field(default_factory=list)
    is_available: bool = False
    help_score: int = 0
    last_active: str | None = None

    @classmethod
    def from_dict(cls, doc: dict[str, Any]) -> Candidate:
        """Build from a plain dict or a document-store record (``$id``, camelCase keys)."""
        cid = doc.get("id") or doc.get("$id")
        if not cid:
            raise ValueError(f"Candidate record has no id: {doc!r}")
        available = doc.get("is_available", doc.get("isAvailable", False))
        help_score = doc.get("help_score", doc.get("helpScore"))
        try:
            help_score = max(int(help_score or 0), 0)
        except (TypeError, ValueError):
            help_score = 0
        return cls(
            id=str(cid),
            name=str(doc.get("name") or ""),
            skills=_str_list(doc.get("skills")),
            tools=_str_list(doc.get("tools")),
            is_available=bool(available),
            help_score=help_score,
            last_active=doc.get("last_active", doc.get("lastActive")),
        )

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "skills": list(self.skills),
            "tools": list(self.tools),
            "available": self.is_available,
            "helpScore": self.help_score,
            "lastActive": self.last_active,
        }


@dataclass
class QueryAnalysis:
    skills: list[str]
    tools: list[str]
    intent: str
    urgency: str = "medium"
    confidence: float = 0.5


@dataclass
class Match:
    candidate_id: str
    name: str
    relevance_score: float
    matching_skills: list[str]
    matching_tools: list[str]
    availability: bool
    help_score: int
    reasoning: str


@dataclass
class MatchRequest:
    query: str
    pool: list[Candidate]
    max_results: int | None = None
    context: str | None = None


@dataclass
class MatchResult:
    matches: list[Match]
    extracted_skills: list[str]
    extracted_tools: list[str]
    confidence: float
    suggestions: list[str] = field(default_factory=list)
    strategy: str = "basic"

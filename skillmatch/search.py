"""Plain (non-AI) search over a candidate pool by name, skill or tool."""
from __future__ import annotations

from skillmatch.models import Candidate


def search_candidates(
    query: str,
    pool: list[Candidate],
    available_only: bool = False,
) -> list[Candidate]:
    candidates = [c for c in pool if c.is_available] if available_only else list(pool)
    needle = query.strip().lower()
    if not needle:
        return candidates
    return [
        c for c in candidates
        if needle in c.name.lower()
        or any(needle in s.lower() for s in c.skills)
        or any(needle in t.lower() for t in c.tools)
    ]

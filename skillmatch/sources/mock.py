"""Sample teammates for demos and when no pool source is configured."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

from skillmatch.log import get_logger
from skillmatch.models import Candidate
from skillmatch.sources.base import PoolSource

log = get_logger(__name__)


def _hours_ago(hours: int) -> str:
    return (datetime.now(timezone.utc) - timedelta(hours=hours)).isoformat(timespec="seconds")


class MockPoolSource(PoolSource):
    def load(self, room_id: str | None = None, available_only: bool = False) -> list[Candidate]:
        log.info("MockPoolSource generating sample teammates")
        pool = [
            Candidate(
                id="mock-1", name="Asha Rao",
                skills=["React", "React Native", "JavaScript"], tools=["Firebase", "Git"],
                is_available=True, help_score=72, last_active=_hours_ago(2),
            ),
            Candidate(
                id="mock-2", name="Diego Martins",
                skills=["Python", "DevOps", "AWS"], tools=["Docker", "Kubernetes", "Jenkins"],
                is_available=False, help_score=40, last_active=_hours_ago(30),
            ),
            Candidate(
                id="mock-3", name="Mei Chen",
                skills=["UI", "UX", "Design"], tools=["Figma", "Sketch"],
                is_available=True, help_score=15, last_active=_hours_ago(6),
            ),
            Candidate(
                id="mock-4", name="Tomás Novak",
                skills=["Kotlin", "Android", "Mobile"], tools=["Android Studio", "Firebase"],
                is_available=True, help_score=0,
            ),
            Candidate(
                id="mock-5", name="Priya Nair",
                skills=["SQL", "MongoDB", "Analytics"], tools=["Database", "Storage"],
                is_available=False, help_score=88, last_active=_hours_ago(1),
            ),
        ]
        if available_only:
            pool = [c for c in pool if c.is_available]
        return pool

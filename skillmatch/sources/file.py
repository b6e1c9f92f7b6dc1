"""Candidate pool from a YAML or JSON file.

Accepted shapes: a list of candidate records, or a mapping with a
``candidates`` list. Records may carry a ``rooms`` list used for room scoping.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from skillmatch.log import get_logger
from skillmatch.models import Candidate
from skillmatch.sources.base import PoolSource

log = get_logger(__name__)


def _records(data: Any, path: Path) -> list[dict[str, Any]]:
    if isinstance(data, dict):
        data = data.get("candidates")
    if not isinstance(data, list):
        raise ValueError(f"{path.name}: expected a list of candidates")
    return [r for r in data if isinstance(r, dict)]


class FilePoolSource(PoolSource):
    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self, room_id: str | None = None, available_only: bool = False) -> list[Candidate]:
        if not self.path.exists():
            raise FileNotFoundError(f"Pool file not found: {self.path}")
        with open(self.path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                raise ValueError(f"{self.path.name}: not valid YAML/JSON ({exc})") from exc

        pool: list[Candidate] = []
        for record in _records(data, self.path):
            if room_id and room_id not in (record.get("rooms") or []):
                continue
            candidate = Candidate.from_dict(record)
            if available_only and not candidate.is_available:
                continue
            pool.append(candidate)

        log.info("Loaded %d candidate(s) from %s", len(pool), self.path.name)
        return pool

"""Load matching settings from config/matching.yaml and the environment."""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from skillmatch.log import get_logger

log = get_logger(__name__)

load_dotenv()

PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent
CONFIG_DIR: Path = PROJECT_ROOT / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "matching.yaml"
REPORTS_DIR: Path = PROJECT_ROOT / "reports"

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"


@dataclass(frozen=True)
class MatchSettings:
    model: str = DEFAULT_MODEL
    base_url: str = GROQ_BASE_URL
    detailed_pool_limit: int = 50
    hybrid_pool_limit: int = 30
    default_max_results: int = 10
    analysis_max_tokens: int = 400
    ranking_max_tokens: int = 2000
    suggestion_max_tokens: int = 300


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name}: expected a mapping at the top level")
    return data


def load_settings(path: Path | None = None) -> MatchSettings:
    """Build settings from defaults, then the YAML file, then env overrides.

    The YAML file may group keys under ``llm:`` and ``matching:``; unknown
    keys are ignored with a warning.
    """
    path = path or SETTINGS_PATH
    values: dict[str, Any] = {}
    if path.exists():
        raw = _read_yaml(path)
        flat: dict[str, Any] = {}
        for section in ("llm", "matching"):
            flat.update(raw.get(section) or {})
        known = {f.name for f in fields(MatchSettings)}
        for key, value in flat.items():
            if key in known:
                values[key] = value
            else:
                log.warning("Ignoring unknown setting %r in %s", key, path.name)

    model = get_env("GROQ_LLM_MODEL")
    if model:
        values["model"] = model
    base_url = get_env("GROQ_BASE_URL")
    if base_url:
        values["base_url"] = base_url
    max_results = get_env("SKILLMATCH_MAX_RESULTS")
    if max_results:
        try:
            values["default_max_results"] = int(max_results)
        except ValueError:
            log.warning("SKILLMATCH_MAX_RESULTS=%r is not an integer, ignoring", max_results)

    for f in fields(MatchSettings):
        if f.name in values and f.type == "int":
            values[f.name] = int(values[f.name])
            if values[f.name] <= 0:
                raise ValueError(f"{f.name} must be positive, got {values[f.name]}")

    return MatchSettings(**values)

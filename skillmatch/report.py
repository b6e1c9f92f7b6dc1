"""Render a match result as a Markdown report."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from skillmatch.config import REPORTS_DIR
from skillmatch.log import get_logger
from skillmatch.models import MatchResult

log = get_logger(__name__)

_STRATEGY_LABELS: dict[str, str] = {
    "detailed": "AI ranking",
    "hybrid": "AI ranking (pre-filtered pool)",
    "basic": "Keyword matching",
    "empty": "No query",
}


def _confidence_badge(confidence: float) -> str:
    if confidence >= 0.8:
        return "\U0001f7e2"
    if confidence >= 0.6:
        return "\U0001f7e0"
    return "\U0001f534"


def _clip(text: str, width: int) -> str:
    return text[:width] + ("…" if len(text) > width else "")


def build_match_report(
    query: str,
    result: MatchResult,
    *,
    suggestions: list[str] | None = None,
    include_tips: bool = True,
) -> str:
    date = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M")
    lines: list[str] = [f"# Skill Match — {date} UTC", ""]
    lines.append(f"> {query}")
    lines.append("")

    strategy = _STRATEGY_LABELS.get(result.strategy, result.strategy)
    lines.append(
        f"{_confidence_badge(result.confidence)} **Confidence:** {result.confidence:.0%}"
        f" | **Matches:** {len(result.matches)} | **Method:** {strategy}"
    )
    lines.append("")
    if result.extracted_skills:
        lines.append(f"- **Detected skills:** {', '.join(result.extracted_skills)}")
    if result.extracted_tools:
        lines.append(f"- **Detected tools:** {', '.join(result.extracted_tools)}")
    lines.append("")

    if result.matches:
        lines.append("## Matches")
        lines.append("")
        lines.append("| # | Name | Score | Available | Help | Skills | Tools |")
        lines.append("|--:|------|------:|:---------:|-----:|--------|-------|")
        for i, m in enumerate(result.matches, 1):
            avail = "✅" if m.availability else "—"
            lines.append(
                f"| {i} | {_clip(m.name or m.candidate_id, 28)} | {m.relevance_score:.0%} | {avail}"
                f" | {m.help_score} | {_clip(', '.join(m.matching_skills), 30)}"
                f" | {_clip(', '.join(m.matching_tools), 30)} |"
            )
        lines.append("")
        lines.append("### Why")
        lines.append("")
        for m in result.matches:
            lines.append(f"- **{m.name or m.candidate_id}:** {m.reasoning}")
        lines.append("")
    else:
        lines.append("_No matching teammates found._")
        lines.append("")

    tips: list[str] = []
    if include_tips:
        tips = list(dict.fromkeys((suggestions or []) + result.suggestions))
    if tips:
        lines.append("---")
        lines.append("")
        lines.append("## Tips")
        lines.append("")
        for tip in tips:
            lines.append(f"- {tip}")
        lines.append("")

    log.debug("Built match report: %d matches, %d tips", len(result.matches), len(tips))
    return "\n".join(lines)


def write_match_report(content: str, reports_dir: Path | None = None) -> Path:
    reports_dir = reports_dir or REPORTS_DIR
    reports_dir.mkdir(parents=True, exist_ok=True)
    stamp = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H%M%S")
    path = reports_dir / f"match_{stamp}.md"
    path.write_text(content, encoding="utf-8")
    log.info("Report written → %s", path)
    return path

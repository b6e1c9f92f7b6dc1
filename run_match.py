#!/usr/bin/env python3
"""Find teammates for a help request from the terminal.

    python run_match.py match "I need help setting up Firebase auth" --pool team.yaml
    python run_match.py suggest "help"
    python run_match.py search react --available-only

Without --pool the candidate pool comes from Appwrite (when APPWRITE_* is set)
or a built-in sample team.
"""
from __future__ import annotations

import argparse
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import requests

sys.path.insert(0, str(Path(__file__).resolve().parent))

from skillmatch.config import get_env, load_settings
from skillmatch.llm import get_llm
from skillmatch.log import get_logger
from skillmatch.models import Candidate

log = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skillmatch", description="AI-assisted teammate matching")
    sub = parser.add_subparsers(dest="command", required=True)

    def pool_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("--pool", type=Path, help="YAML/JSON file with candidates")
        p.add_argument("--room", help="Only candidates in this room")
        p.add_argument("--available-only", action="store_true", help="Skip unavailable candidates")

    p_match = sub.add_parser("match", help="Rank teammates for a help request")
    p_match.add_argument("query")
    pool_args(p_match)
    p_match.add_argument("--max-results", type=int, default=None)
    p_match.add_argument("--context", default=None, help="Extra context for the ranking prompt")
    p_match.add_argument("--no-suggest", action="store_true", help="Leave tips out of the report")
    p_match.add_argument("--report", action="store_true", help="Also write the report to reports/")

    p_suggest = sub.add_parser("suggest", help="Tips to sharpen a help request")
    p_suggest.add_argument("query")

    p_search = sub.add_parser("search", help="Plain name/skill/tool search")
    p_search.add_argument("query")
    pool_args(p_search)
    return parser


def _load_pool(args: argparse.Namespace) -> list[Candidate]:
    from skillmatch.sources import get_pool_source

    source = get_pool_source(args.pool, get_env)
    return source.load(room_id=args.room, available_only=args.available_only)


def cmd_match(args: argparse.Namespace) -> int:
    from skillmatch.matcher import match
    from skillmatch.models import MatchRequest
    from skillmatch.report import build_match_report, write_match_report
    from skillmatch.suggestions import suggest

    settings = load_settings()
    llm = get_llm(settings=settings)
    pool = _load_pool(args)
    request = MatchRequest(
        query=args.query, pool=pool, max_results=args.max_results, context=args.context,
    )

    tips: list[str] = []
    with ThreadPoolExecutor(max_workers=2) as ex:
        match_future = ex.submit(match, request, llm, settings)
        tips_future = None if args.no_suggest else ex.submit(suggest, args.query, llm, settings)
        result = match_future.result()
        if tips_future is not None:
            tips = tips_future.result()

    content = build_match_report(
        args.query, result, suggestions=tips, include_tips=not args.no_suggest,
    )
    print(content)
    if args.report:
        write_match_report(content)
    return 0


def cmd_suggest(args: argparse.Namespace) -> int:
    from skillmatch.suggestions import suggest

    settings = load_settings()
    for tip in suggest(args.query, get_llm(settings=settings), settings):
        print(f"- {tip}")
    return 0


def cmd_search(args: argparse.Namespace) -> int:
    from skillmatch.search import search_candidates

    found = search_candidates(args.query, _load_pool(args))
    for c in found:
        status = "available" if c.is_available else "busy"
        print(f"{c.name or c.id}  [{status}]  skills: {', '.join(c.skills)}  tools: {', '.join(c.tools)}")
    log.info("Search '%s' → %d candidate(s)", args.query, len(found))
    return 0


_COMMANDS = {"match": cmd_match, "suggest": cmd_suggest, "search": cmd_search}


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        return _COMMANDS[args.command](args)
    except (FileNotFoundError, ValueError) as exc:
        log.error("%s", exc)
        return 1
    except requests.RequestException as exc:
        log.error("Could not load the candidate pool: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())

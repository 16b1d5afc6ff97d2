"""Command-line entry point.

Usage:
    augment-engine ask "what's the weather in boston" [--yes]
    augment-engine usage
    augment-engine set-key KEY | clear-key
    augment-engine enable | disable
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from augment_engine.config.settings import Settings
from augment_engine.models.state import SearchState
from augment_engine.observability.logger import setup_logging
from augment_engine.pipeline.factory import (
    build_http_client,
    build_orchestrator,
    build_settings_store,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="augment-engine",
        description="Augment a local assistant with live data, with your consent.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Classify a question and fetch context if confirmed")
    ask.add_argument("query", help="The question to ask")
    ask.add_argument("--yes", "-y", action="store_true", help="Confirm without prompting")
    ask.add_argument("--verbose", "-v", action="store_true", help="Print state transitions")

    sub.add_parser("usage", help="Show this month's web search usage")

    set_key = sub.add_parser("set-key", help="Store the Brave Search API key")
    set_key.add_argument("key")
    sub.add_parser("clear-key", help="Remove the stored API key")
    sub.add_parser("enable", help="Enable web search")
    sub.add_parser("disable", help="Disable web search")
    return parser


async def _confirm(prompt: str) -> bool:
    try:
        answer = await asyncio.to_thread(input, f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


async def run_ask(settings: Settings, query: str, assume_yes: bool, verbose: bool) -> int:
    async with build_http_client(settings) as client:
        orchestrator = await build_orchestrator(settings, client)
        if verbose:

            def show(state: SearchState) -> None:
                print(f"  -> {state}", file=sys.stderr)

            orchestrator.subscribe(show)

        if not await orchestrator.check_if_search_needed(query):
            print("No external data needed; answer offline.")
            return 0

        request = orchestrator.pending_request
        prompt = f"Fetch {request.confirmation_type.value} data for '{request.display_query}'?"
        if not (assume_yes or await _confirm(prompt)):
            result = orchestrator.decline_search()
            print(f"Skipped: {result.reason}")
            return 0

        result = await orchestrator.perform_confirmed_search()
        if not result.succeeded:
            print(f"Failed: {result.reason}", file=sys.stderr)
            return 1

        print(result.formatted_context)
        if result.sources:
            print("\nSources:")
            for source in result.sources:
                print(f"  {source}")
        return 0


async def run_settings_command(settings: Settings, args: argparse.Namespace) -> int:
    store = await build_settings_store(settings)

    if args.command == "usage":
        used = await store.searches_this_month()
        remaining = await store.remaining_searches()
        enabled = await store.is_enabled()
        has_key = await store.has_api_key()
        print(f"Month:       {store.current_month_key()}")
        print(f"Searches:    {used} / {store.monthly_limit}")
        print(f"Remaining:   {remaining}")
        print(f"Web search:  {'enabled' if enabled else 'disabled'}")
        print(f"API key:     {'configured' if has_key else 'missing'}")
    elif args.command == "set-key":
        await store.set_api_key(args.key)
        print("API key saved.")
    elif args.command == "clear-key":
        await store.clear_api_key()
        print("API key removed.")
    elif args.command in ("enable", "disable"):
        await store.set_enabled(args.command == "enable")
        print(f"Web search {args.command}d.")
    return 0


async def run(args: argparse.Namespace, settings: Settings) -> int:
    if args.command == "ask":
        return await run_ask(settings, args.query, args.yes, args.verbose)
    return await run_settings_command(settings, args)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    setup_logging(settings.log_level, json_output=settings.log_json)
    return asyncio.run(run(args, settings))


if __name__ == "__main__":
    sys.exit(main())

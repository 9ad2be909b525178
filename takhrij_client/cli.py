"""Command-line front end for the Takhrij hadith search service."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional, Sequence

from .config import ClientSettings
from .export import format_commentary, format_glossary_entry, format_record
from .http import TakhrijClient
from .reference_data import find_glossary_entry, glossary
from .session import SessionController

LOGGER = logging.getLogger(__name__)


async def run_search(controller: SessionController, query: str, commentary_index: Optional[int]) -> int:
    await controller.submit_search(query)
    response = controller.state.last_response
    if response is None:
        print("Nothing to search for.")
        return 1
    if commentary_index is None:
        return 0
    outcome = controller.state.search_outcome
    if outcome is not None and not outcome.ok:
        print("Search failed; commentary was not requested.", file=sys.stderr)
        return 1

    if not 1 <= commentary_index <= len(response.records):
        print(f"No record #{commentary_index}; the search returned {len(response.records)}.", file=sys.stderr)
        return 2
    record = response.records[commentary_index - 1]
    if not record.allows_commentary:
        print(f"Record #{commentary_index} is AI generated; commentary is unavailable.", file=sys.stderr)
        return 2
    await controller.request_commentary(record)
    return 0


def print_session(controller: SessionController, as_json: bool) -> None:
    state = controller.state
    if as_json:
        payload = {
            "search": state.search_outcome.model_dump(mode="json") if state.search_outcome else None,
            "commentary": state.commentary_outcome.model_dump(mode="json") if state.commentary_outcome else None,
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    response = state.last_response
    if response is None:
        return
    if response.leading_narrative:
        print(response.leading_narrative)
        print()
    if response.records:
        print("Results")
        for number, record in enumerate(response.records, 1):
            print(format_record(record, number))
            print()
    elif not response.is_no_results and state.search_outcome and state.search_outcome.ok:
        print("No hadith records in the response.")

    commentary = state.last_commentary
    if commentary is not None:
        print("Hadith Commentary")
        print(format_commentary(commentary))
        print()
        print(
            "This is an AI-generated explanation and may contain errors or inaccuracies. "
            "Always verify the information with qualified scholars."
        )


def command_search(args: argparse.Namespace) -> int:
    settings = ClientSettings.from_env(base_url=args.base_url, timeout=args.timeout)
    LOGGER.info("Using backend %s", settings.base_url)
    with TakhrijClient(settings) as client:
        controller = SessionController(client)
        code = asyncio.run(run_search(controller, args.query, args.commentary))
    print_session(controller, args.json)
    outcome = controller.state.search_outcome
    if code == 0 and outcome is not None and not outcome.ok:
        return 1
    return code


def command_glossary(args: argparse.Namespace) -> int:
    if args.term:
        entry = find_glossary_entry(args.term)
        if entry is None:
            print(f"Unknown term: {args.term}", file=sys.stderr)
            return 1
        print(format_glossary_entry(entry))
        return 0
    for entry in glossary():
        print(format_glossary_entry(entry))
        print()
    return 0


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser_obj = argparse.ArgumentParser(description="Search hadith and request AI commentary via Takhrij")
    parser_obj.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser_obj.add_subparsers(dest="command", required=True)

    search = subparsers.add_parser("search", help="Search hadith by topic or text")
    search.add_argument("query", help="Topic, phrase or hadith text to look up")
    search.add_argument(
        "--commentary",
        type=int,
        metavar="N",
        help="Also request commentary for result number N (1-based).",
    )
    search.add_argument("--json", action="store_true", help="Output JSON")
    search.add_argument("--base-url", default=None, help="Backend URL (default: TAKHRIJ_BASE_URL env or built-in).")
    search.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds.")
    search.set_defaults(handler=command_search)

    terms = subparsers.add_parser("glossary", help="Show hadith science terms")
    terms.add_argument("term", nargs="?", help="Show a single term")
    terms.set_defaults(handler=command_glossary)

    return parser_obj.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return args.handler(args)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

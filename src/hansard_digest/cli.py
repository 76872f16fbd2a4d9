"""Command line interface for the Hansard digest pipeline."""
from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

from .config import load_config
from .parsing import CHAMBERS, chamber_profile, parse_debates
from .pipeline import prepare_sitting
from .runtime import create_pipeline

LOGGER = logging.getLogger(__name__)

_SITTING_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})([a-d])?$")


def parse_sitting_date(value: str) -> Tuple[date, Optional[str]]:
    """Parse ``YYYY-MM-DD`` with an optional ``a``-``d`` sitting suffix."""

    match = _SITTING_PATTERN.match(value.strip())
    if not match:
        raise argparse.ArgumentTypeError(f"Invalid sitting date {value!r}; expected YYYY-MM-DD[a-d]")
    try:
        parsed = date.fromisoformat(match.group(1))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid sitting date {value!r}: {exc}") from exc
    return parsed, match.group(2)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hansard digest pipeline controller")
    parser.add_argument("--config", type=Path, help="Path to an explicit configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    import_parser = subparsers.add_parser("import", help="Fetch, parse and store sittings")
    import_parser.add_argument(
        "--chamber",
        dest="chambers",
        action="append",
        choices=CHAMBERS,
        help="Chamber to import; repeat for several (default: all)",
    )
    import_parser.add_argument(
        "--start",
        type=parse_sitting_date,
        default=None,
        help="First sitting date, optionally with a suffix such as 2024-09-03a (default: today)",
    )
    import_parser.add_argument("--end", type=parse_sitting_date, help="Last sitting date (inclusive)")
    import_parser.add_argument(
        "--without-summaries",
        action="store_true",
        help="Skip Gemini analysis even if an API key is configured",
    )

    parse_parser = subparsers.add_parser("parse", help="Parse a local transcript file and print JSON")
    parse_parser.add_argument("file", type=Path, help="Path to a TheyWorkForYou XML file")
    parse_parser.add_argument("--chamber", choices=CHAMBERS, default="commons")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = load_config(args.config)

    if args.command == "parse":
        profile = chamber_profile(args.chamber, config.parsing)
        debates = prepare_sitting(parse_debates(args.file.read_bytes(), profile))
        json.dump([debate.to_dict() for debate in debates], sys.stdout, ensure_ascii=False, indent=2)
        sys.stdout.write("\n")
        return 0

    if args.command == "import":
        start, suffix = args.start or (date.today(), None)
        end = args.end[0] if args.end else None
        resources = create_pipeline(config, skip_summaries=args.without_summaries)
        try:
            processed = resources.pipeline.run(
                chambers=args.chambers or CHAMBERS,
                start_date=start,
                end_date=end,
                suffix=suffix,
            )
            LOGGER.info("Imported %s sittings", processed)
            return 0
        finally:
            resources.close()

    parser.error(f"Unknown command {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())

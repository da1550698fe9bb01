"""Command-line entry point for handlecheck."""

import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from .config import Config, load_config, validate_config
from .orchestrator import HandleOrchestrator
from .platforms import Platform
from .utils.handles import generate_handle_variations, normalize_handle, validate_handle

logger = logging.getLogger(__name__)

EXIT_INVALID_HANDLE = 2


def configure_logging(level: str = "INFO") -> None:
    """Configure logging; results go to stdout so logs go to stderr."""
    logging.basicConfig(
        level=getattr(logging, (level or "INFO").upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="handlecheck",
        description="Estimate social handle availability across platforms.",
    )
    parser.add_argument("handle", help="Handle to check (letters, digits, underscores)")
    parser.add_argument(
        "--platform",
        "-p",
        action="append",
        dest="platforms",
        choices=[p.value for p in Platform],
        help="Platform to check (repeatable; defaults to the configured set)",
    )
    parser.add_argument(
        "--variations",
        action="store_true",
        help="Also evaluate suggested variations of the handle",
    )
    return parser


async def run_check(
    config: Config,
    handle: str,
    platforms: Optional[list[str]] = None,
    variations: bool = False,
) -> dict:
    """Evaluate a handle (and optionally its variations) and return a JSON-ready dict."""
    orchestrator = HandleOrchestrator.from_config(config)

    result = await orchestrator.evaluate_all(handle, platforms)
    output = result.to_dict()

    if variations:
        output["variations"] = []
        for candidate in generate_handle_variations(handle):
            alt = await orchestrator.evaluate_all(candidate, platforms)
            output["variations"].append(alt.to_dict())

    return output


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point."""
    args = build_parser().parse_args(argv)
    config = load_config()
    configure_logging(config.log_level)

    validation_errors = validate_config(config)
    if validation_errors:
        for err in validation_errors:
            logger.error(err)
        return 1

    handle = normalize_handle(args.handle)
    if not validate_handle(handle):
        logger.error(f"Invalid handle: {args.handle!r} (1-30 letters, digits or underscores)")
        return EXIT_INVALID_HANDLE

    output = asyncio.run(run_check(config, handle, args.platforms, args.variations))
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

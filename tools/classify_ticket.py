#!/usr/bin/env python3
"""Score a single ticket from the command line and explain the result."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

BASE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "config.yaml"
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from triage_common.classifier import classify  # type: ignore  # pylint: disable=import-error
from triage_common.config import load_config  # type: ignore  # pylint: disable=import-error
from triage_common.logging_setup import configure_logging  # type: ignore  # pylint: disable=import-error
from triage_common.tickets import TicketInput  # type: ignore  # pylint: disable=import-error

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print the urgency score, level and reasons for one ticket.")
    parser.add_argument(
        "--config",
        help=(
            "Path to configuration YAML file. Defaults to "
            f"{DEFAULT_CONFIG_PATH} or config/config.yaml if present."
        ),
    )
    parser.add_argument("--id", default="cli", help="Identifier to report the ticket under.")
    parser.add_argument("--description", required=True, help="Free-text ticket description.")
    parser.add_argument(
        "--tag",
        action="append",
        default=[],
        dest="tags",
        help="Ticket tag. Repeat the option for several tags.",
    )
    parser.add_argument("--urgent", action="store_true", help="Mark the ticket as urgent by hand.")
    parser.add_argument(
        "--console-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the console logging level.",
    )
    return parser


def run(
    config_path: str | None,
    *,
    ticket_id: str,
    description: str,
    tags: Sequence[str],
    urgent: bool,
    console_level: str | None = None,
) -> List[str]:
    config = load_config(config_path)
    if console_level:
        config.setdefault("logging", {}).setdefault("console", {})["level"] = console_level
    configure_logging(config, base_dir=BASE_DIR)

    ticket = TicketInput(
        id=ticket_id,
        description=description,
        tags=tuple(tags),
        is_manually_urgent=urgent,
    )
    result = classify(ticket)
    LOGGER.info("Ticket %s classified as %s (score %.2f)", result.ticket_id, result.level, result.score)
    lines = [
        f"Ticket: {result.ticket_id}",
        f"Score:  {result.score:.2f}",
        f"Level:  {result.level}",
    ]
    if result.reasons:
        lines.append("Reasons:")
        lines.extend(f"  - {reason}" for reason in result.reasons)
    else:
        lines.append("Reasons: none")
    for line in lines:
        print(line)
    return lines


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    run(
        args.config,
        ticket_id=args.id,
        description=args.description,
        tags=args.tags,
        urgent=args.urgent,
        console_level=args.console_level,
    )


if __name__ == "__main__":
    main()

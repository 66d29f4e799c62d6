#!/usr/bin/env python3
"""Rank a batch of support tickets by urgency and write a CSV report."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List

BASE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = BASE_DIR / "config" / "config.yaml"
if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

from triage_common.classifier import rank_with_results  # type: ignore  # pylint: disable=import-error
from triage_common.config import load_config, ranking_workers, resolve_path  # type: ignore  # pylint: disable=import-error
from triage_common.logging_setup import configure_logging  # type: ignore  # pylint: disable=import-error
from triage_common.reporting import (  # type: ignore  # pylint: disable=import-error
    UrgencyReportWriter,
    render_level_table,
    render_ranking_table,
    summarize_levels,
)
from triage_common.tickets import load_tickets  # type: ignore  # pylint: disable=import-error

LOGGER = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Score tickets by urgency and print them from most to least urgent.",
    )
    parser.add_argument(
        "--config",
        help=(
            "Path to configuration YAML file. Defaults to "
            f"{DEFAULT_CONFIG_PATH} or config/config.yaml if present."
        ),
    )
    parser.add_argument(
        "--input",
        help="Ticket file (.json, .jsonl or .csv). Overrides input.path.",
    )
    parser.add_argument(
        "--output-directory",
        help="Directory where the ranking CSV should be written. Overrides reporting.output_directory.",
    )
    parser.add_argument("--report-name", help="Filename to use for the ranking CSV.")
    parser.add_argument(
        "--workers",
        type=_positive_int,
        help="Number of threads used to classify tickets. Overrides ranking.max_workers.",
    )
    parser.add_argument(
        "--limit",
        type=_positive_int,
        help="Only print the N most urgent tickets (the CSV always contains every ticket).",
    )
    parser.add_argument(
        "--console-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the console logging level.",
    )
    return parser


def run(
    config_path: str | None,
    *,
    input_path: str | None = None,
    output_directory: str | None = None,
    report_name: str | None = None,
    workers: int | None = None,
    limit: int | None = None,
    console_level: str | None = None,
) -> List[str]:
    config = load_config(config_path)
    if console_level:
        config.setdefault("logging", {}).setdefault("console", {})["level"] = console_level
    configure_logging(config, base_dir=BASE_DIR)

    if limit is not None and limit < 1:
        LOGGER.error("--limit must be at least 1, got %s", limit)
        raise SystemExit(2)

    # Command line paths are relative to the working directory, configured ones to BASE_DIR.
    reporting_cfg = config.get("reporting", {})
    if input_path:
        source = resolve_path(input_path)
    elif config.get("input", {}).get("path"):
        source = resolve_path(config["input"]["path"], base=BASE_DIR)
    else:
        LOGGER.error("No ticket file provided; use --input or set input.path")
        raise SystemExit(1)
    if output_directory:
        report_directory = resolve_path(output_directory)
    else:
        report_directory = resolve_path(reporting_cfg.get("output_directory", "reports"), base=BASE_DIR)

    try:
        tickets = load_tickets(source)
        max_workers = workers if workers is not None else ranking_workers(config)
        ranking = rank_with_results(tickets, max_workers=max_workers)
        writer = UrgencyReportWriter(
            output_directory=report_directory,
            report_name=report_name or reporting_cfg.get("report_name", "urgency_ranking.csv"),
        )
        report_path = writer.write_ranking(ranking)
    except Exception as exc:  # pragma: no cover - defensive logging
        LOGGER.exception("Failed to rank tickets: %s", exc)
        raise SystemExit(1) from exc

    shown = ranking[:limit] if limit is not None else ranking
    lines = render_ranking_table(shown)
    lines.append("")
    lines.extend(render_level_table(summarize_levels(entry.result for entry in ranking)))
    lines.append("")
    lines.append(f"Report written to {report_path}")
    for line in lines:
        print(line)
    return lines


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    run(
        args.config,
        input_path=args.input,
        output_directory=args.output_directory,
        report_name=args.report_name,
        workers=args.workers,
        limit=args.limit,
        console_level=args.console_level,
    )


if __name__ == "__main__":
    main()

"""CSV and console reports for urgency rankings."""
from __future__ import annotations

import csv
import logging
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from .classifier import LEVELS, RankedTicket, UrgencyResult

LOGGER = logging.getLogger(__name__)


class UrgencyReportWriter:
    """Persist ranked urgency results for the support team."""

    HEADERS: Sequence[str] = (
        "rank",
        "ticket_id",
        "score",
        "level",
        "reasons",
        "matched_terms",
        "description",
        "tags",
        "is_manually_urgent",
        "created_at",
        "created_at_utc",
    )

    def __init__(self, *, output_directory: Path, report_name: str) -> None:
        self.output_directory = output_directory
        self.report_name = report_name
        self.output_directory.mkdir(parents=True, exist_ok=True)

    def write_ranking(self, ranking: Iterable[RankedTicket]) -> Path:
        report_path = self.output_directory / self.report_name
        LOGGER.info("Writing urgency ranking report to %s", report_path)
        with report_path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(self.HEADERS)
            for entry in ranking:
                ticket = entry.ticket
                result = entry.result
                writer.writerow(
                    [
                        entry.rank,
                        ticket.id,
                        f"{result.score:.2f}",
                        result.level,
                        "; ".join(result.reasons),
                        "; ".join(result.matched_terms),
                        ticket.description,
                        ", ".join(ticket.tags),
                        "yes" if ticket.is_manually_urgent else "no",
                        "" if ticket.created_at is None else ticket.created_at,
                        ticket.created_at_utc or "",
                    ]
                )
        return report_path


def summarize_levels(results: Iterable[UrgencyResult]) -> Dict[str, int]:
    """Count results per urgency level, always listing every level."""
    counts: Counter[str] = Counter(result.level for result in results)
    return {level: counts.get(level, 0) for level in LEVELS}


def render_level_table(counts: Dict[str, int]) -> List[str]:
    rows: List[Tuple[str, int]] = [(level.capitalize(), count) for level, count in counts.items()]
    rows.append(("Total", sum(counts.values())))

    label_width = max(len(label) for label, _ in rows + [("Level", 0)])
    header = f"{'Level'.ljust(label_width)}  Tickets"
    separator = f"{'-' * label_width}  -------"

    lines = [header, separator]
    for label, count in rows:
        lines.append(f"{label.ljust(label_width)}  {count:>7}")
    return lines


def render_ranking_table(ranking: Sequence[RankedTicket]) -> List[str]:
    """Format a ranking as fixed-width text, one line per ticket."""
    id_width = max([len("Ticket")] + [len(entry.ticket.id) for entry in ranking])
    header = f"{'#':>4}  {'Ticket'.ljust(id_width)}  {'Score':>6}  {'Level':<6}  Reasons"
    separator = f"{'-' * 4}  {'-' * id_width}  {'-' * 6}  {'-' * 6}  -------"
    lines = [header, separator]
    for entry in ranking:
        reasons = "; ".join(entry.result.reasons) or "-"
        lines.append(
            f"{entry.rank:>4}  {entry.ticket.id.ljust(id_width)}  "
            f"{entry.result.score:>6.2f}  {entry.result.level:<6}  {reasons}"
        )
    return lines

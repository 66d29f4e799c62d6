"""Ticket records supplied to the classifier and helpers to load them from disk."""
from __future__ import annotations

import csv
import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from dateutil import parser as date_parser

LOGGER = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".jsonl", ".csv")
_TRUE_VALUES = {"true", "1", "yes", "y", "si", "sí"}


class TicketLoadError(ValueError):
    """Raised when a ticket file cannot be read or contains malformed records."""


def _to_utc_display(value: Any) -> Optional[str]:
    """Render an ISO 8601 timestamp as UTC text, or ``None`` when it is not one."""
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = date_parser.isoparse(str(value))
        except (ValueError, TypeError, OverflowError):
            LOGGER.debug("Timestamp %r is not ISO 8601; keeping it as given", value)
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt_utc = dt.astimezone(timezone.utc)
    return dt_utc.strftime("%Y-%m-%d %H:%M:%S UTC")


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    return str(value).strip().lower() in _TRUE_VALUES


def _coerce_tags(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(part.strip() for part in value.split(",") if part.strip())
    return tuple(str(tag) for tag in value if tag is not None)


@dataclass(frozen=True)
class TicketInput:
    """Immutable snapshot of a support ticket as handed over by the ticket store."""

    id: str
    description: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    is_manually_urgent: bool = False
    created_at: Any = None
    created_at_utc: Optional[str] = None

    def __post_init__(self) -> None:
        # Frozen, so defaults for missing values go through object.__setattr__.
        if self.description is None:
            object.__setattr__(self, "description", "")
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", _coerce_tags(self.tags))

    @classmethod
    def from_record(cls, payload: Mapping[str, Any]) -> "TicketInput":
        ticket_id = payload.get("id")
        if ticket_id is None or str(ticket_id).strip() == "":
            raise TicketLoadError(f"Ticket record is missing an id: {dict(payload)!r}")
        urgent = payload.get("is_manually_urgent", payload.get("is_urgent"))
        return cls(
            id=str(ticket_id),
            description=str(payload.get("description") or ""),
            tags=_coerce_tags(payload.get("tags")),
            is_manually_urgent=_coerce_bool(urgent),
            created_at=payload.get("created_at"),
            created_at_utc=_to_utc_display(payload.get("created_at")),
        )


def _read_json(path: Path) -> List[Dict[str, Any]]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise TicketLoadError(f"Unable to parse ticket file {path}") from exc
    if isinstance(data, dict):
        data = data.get("tickets")
    if not isinstance(data, list):
        raise TicketLoadError(f"Ticket file {path} must contain a list of tickets or a 'tickets' list")
    return data


def _read_jsonl(path: Path) -> List[Dict[str, Any]]:
    records: List[Dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as handle:
        for line_number, line in enumerate(handle, start=1):
            if not line.strip():
                continue
            try:
                records.append(json.loads(line))
            except json.JSONDecodeError as exc:
                raise TicketLoadError(f"Invalid JSON on line {line_number} of {path}") from exc
    return records


def _read_csv(path: Path) -> List[Dict[str, Any]]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        return list(csv.DictReader(handle))


def parse_tickets(records: Iterable[Mapping[str, Any]]) -> List[TicketInput]:
    tickets: List[TicketInput] = []
    for record in records:
        if not isinstance(record, Mapping):
            raise TicketLoadError(f"Ticket records must be objects, got {type(record).__name__}")
        tickets.append(TicketInput.from_record(record))
    return tickets


def load_tickets(path: str | Path) -> List[TicketInput]:
    """Load ticket records from a ``.json``, ``.jsonl`` or ``.csv`` file."""
    ticket_path = Path(path)
    suffix = ticket_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise TicketLoadError(
            f"Unsupported ticket file type '{suffix or ticket_path.name}'; expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )
    if not ticket_path.exists():
        raise TicketLoadError(f"Ticket file {ticket_path} does not exist")

    if suffix == ".json":
        records = _read_json(ticket_path)
    elif suffix == ".jsonl":
        records = _read_jsonl(ticket_path)
    else:
        records = _read_csv(ticket_path)

    tickets = parse_tickets(records)
    LOGGER.info("Loaded %s tickets from %s", len(tickets), ticket_path)
    return tickets

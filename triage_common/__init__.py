"""Shared modules for the ticket urgency triage tools."""

from .classifier import (
    RankedTicket,
    UrgencyResult,
    classify,
    classify_many,
    level_for_score,
    rank_by_urgency,
    rank_with_results,
)
from .config import ConfigError, load_config, resolve_path
from .logging_setup import configure_logging
from .reporting import UrgencyReportWriter, summarize_levels
from .tickets import TicketInput, TicketLoadError, load_tickets

__all__ = [
    "RankedTicket",
    "UrgencyResult",
    "classify",
    "classify_many",
    "level_for_score",
    "rank_by_urgency",
    "rank_with_results",
    "ConfigError",
    "load_config",
    "resolve_path",
    "configure_logging",
    "UrgencyReportWriter",
    "summarize_levels",
    "TicketInput",
    "TicketLoadError",
    "load_tickets",
]

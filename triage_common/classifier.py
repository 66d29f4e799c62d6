"""Urgency classification and ranking for support tickets."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional, Tuple

from . import lexicon
from .signals import (
    SignalResult,
    historical_signal,
    keyword_signal,
    manual_flag_signal,
    tag_signal,
    time_pattern_signal,
)
from .tickets import TicketInput

LOGGER = logging.getLogger(__name__)

UrgencyLevel = Literal["high", "medium", "low"]
LEVEL_HIGH: UrgencyLevel = "high"
LEVEL_MEDIUM: UrgencyLevel = "medium"
LEVEL_LOW: UrgencyLevel = "low"
LEVELS: Tuple[UrgencyLevel, ...] = (LEVEL_HIGH, LEVEL_MEDIUM, LEVEL_LOW)


@dataclass(frozen=True)
class UrgencyResult:
    ticket_id: str
    score: float
    level: UrgencyLevel
    reasons: Tuple[str, ...] = ()
    signals: Tuple[SignalResult, ...] = field(default=(), compare=False, repr=False)

    @property
    def matched_terms(self) -> Tuple[str, ...]:
        terms: List[str] = []
        for signal in self.signals:
            terms.extend(signal.matched)
        return tuple(terms)


@dataclass(frozen=True)
class RankedTicket:
    rank: int
    ticket: TicketInput
    result: UrgencyResult


def level_for_score(score: float) -> UrgencyLevel:
    if score >= lexicon.HIGH_LEVEL_THRESHOLD:
        return LEVEL_HIGH
    if score >= lexicon.MEDIUM_LEVEL_THRESHOLD:
        return LEVEL_MEDIUM
    return LEVEL_LOW


def evaluate_signals(ticket: TicketInput) -> Tuple[SignalResult, ...]:
    """Run every signal against ``ticket`` in reporting order."""
    tags = ticket.tags or ()
    return (
        keyword_signal(ticket.description, tags),
        time_pattern_signal(ticket.description),
        tag_signal(tags),
        manual_flag_signal(ticket.is_manually_urgent),
        historical_signal(ticket.description, tags),
    )


def classify(ticket: TicketInput) -> UrgencyResult:
    """Score ``ticket`` and explain which signals contributed.

    The score is the plain sum of all signal contributions and the level is
    derived from it alone. Reasons follow the fixed signal order: keywords,
    time patterns, tags, manual flag, historical similarity.
    """
    signals = evaluate_signals(ticket)
    score = 0.0
    for signal in signals:
        score += signal.points
    reasons = tuple(signal.reason for signal in signals if signal.reason)
    result = UrgencyResult(
        ticket_id=ticket.id,
        score=score,
        level=level_for_score(score),
        reasons=reasons,
        signals=signals,
    )
    LOGGER.debug(
        "Ticket %s scored %.2f (%s) reasons=%s",
        ticket.id,
        result.score,
        result.level,
        list(result.reasons),
    )
    return result


def classify_many(
    tickets: Iterable[TicketInput],
    *,
    max_workers: Optional[int] = None,
) -> List[UrgencyResult]:
    """Classify every ticket, returning results in input order.

    With ``max_workers`` above one the tickets are classified on a thread
    pool; ``Executor.map`` keeps the input order either way.
    """
    ticket_list = list(tickets)
    if max_workers and max_workers > 1 and len(ticket_list) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(classify, ticket_list))
    else:
        results = [classify(ticket) for ticket in ticket_list]
    LOGGER.info("Classified %s tickets", len(results))
    return results


def rank_with_results(
    tickets: Iterable[TicketInput],
    *,
    max_workers: Optional[int] = None,
) -> List[RankedTicket]:
    """Order tickets by descending score, keeping their results alongside."""
    ticket_list = list(tickets)
    results = classify_many(ticket_list, max_workers=max_workers)
    # sorted() is stable: equal scores keep their input order.
    ordered = sorted(zip(ticket_list, results), key=lambda pair: pair[1].score, reverse=True)
    return [
        RankedTicket(rank=index, ticket=ticket, result=result)
        for index, (ticket, result) in enumerate(ordered, start=1)
    ]


def rank_by_urgency(
    tickets: Iterable[TicketInput],
    *,
    max_workers: Optional[int] = None,
) -> List[TicketInput]:
    """Return the tickets themselves ordered from most to least urgent."""
    return [entry.ticket for entry in rank_with_results(tickets, max_workers=max_workers)]

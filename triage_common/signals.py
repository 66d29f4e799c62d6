"""Independent urgency signals.

Every signal is a pure function of part of a ticket and returns a
:class:`SignalResult`. Signals never see each other's output, so they can be
evaluated in any order (or concurrently) and summed afterwards.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from . import lexicon
from .text import cosine_similarity

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignalResult:
    name: str
    points: float
    reason: Optional[str] = None
    matched: Tuple[str, ...] = field(default_factory=tuple)
    similarity: Optional[float] = None


def _format_points(points: float) -> str:
    return f"{points:.2f}".rstrip("0").rstrip(".")


def combined_text(description: Optional[str], tags: Iterable[str]) -> str:
    """Description and space-joined tags, lower-cased."""
    return f"{description or ''} {' '.join(tags or ())}".lower()


def keyword_signal(description: Optional[str], tags: Sequence[str]) -> SignalResult:
    text_lower = combined_text(description, tags)
    score = 0.0
    matched: List[str] = []
    for terms, points in (
        (lexicon.HIGH_URGENCY_KEYWORDS, lexicon.HIGH_KEYWORD_POINTS),
        (lexicon.MEDIUM_URGENCY_KEYWORDS, lexicon.MEDIUM_KEYWORD_POINTS),
        (lexicon.LOW_URGENCY_KEYWORDS, lexicon.LOW_KEYWORD_POINTS),
        (lexicon.TECHNICAL_TERMS, lexicon.TECHNICAL_TERM_POINTS),
    ):
        for term in terms:
            # Plain containment: "red" also fires inside longer words.
            if term in text_lower:
                score += points
                matched.append(term)
    score = max(0.0, score)
    reason = f"contains urgency keywords ({_format_points(score)} pts)" if score > 0 else None
    return SignalResult(name="keywords", points=score, reason=reason, matched=tuple(matched))


def time_pattern_signal(description: Optional[str]) -> SignalResult:
    text = description or ""
    matched = [pattern.pattern for pattern in lexicon.TIME_PATTERNS if pattern.search(text)]
    score = lexicon.TIME_PATTERN_POINTS * len(matched)
    reason = f"mentions prolonged disruption ({_format_points(score)} pts)" if score > 0 else None
    return SignalResult(name="time_patterns", points=score, reason=reason, matched=tuple(matched))


def tag_signal(tags: Sequence[str]) -> SignalResult:
    score = 0.0
    matched: List[str] = []
    for tag in tags or ():
        tag_lower = str(tag).lower()
        if any(term in tag_lower for term in lexicon.URGENT_TAGS):
            score += lexicon.URGENT_TAG_POINTS
            matched.append(tag)
        elif any(term in tag_lower for term in lexicon.MEDIUM_TAGS):
            score += lexicon.MEDIUM_TAG_POINTS
            matched.append(tag)
    reason = f"tags indicate urgency ({_format_points(score)} pts)" if score > 0 else None
    return SignalResult(name="tags", points=score, reason=reason, matched=tuple(matched))


def manual_flag_signal(is_manually_urgent: bool) -> SignalResult:
    if not is_manually_urgent:
        return SignalResult(name="manual_flag", points=0.0)
    points = lexicon.MANUAL_FLAG_POINTS
    return SignalResult(
        name="manual_flag",
        points=points,
        reason=f"user marked as urgent ({_format_points(points)} pts)",
    )


def historical_similarity(description: Optional[str], tags: Sequence[str]) -> float:
    """Highest similarity between the ticket text and the known urgent phrases."""
    text_lower = combined_text(description, tags)
    best = 0.0
    for phrase in lexicon.HISTORICAL_URGENT_PHRASES:
        similarity = cosine_similarity(text_lower, phrase)
        if similarity > best:
            best = similarity
    return best


def historical_signal(description: Optional[str], tags: Sequence[str]) -> SignalResult:
    similarity = historical_similarity(description, tags)
    # Points are added even below the reporting threshold; only the reason is withheld.
    points = lexicon.HISTORICAL_WEIGHT * similarity
    reason = None
    if similarity > lexicon.HISTORICAL_REPORT_THRESHOLD:
        reason = f"similar to historical urgent tickets ({similarity:.2f} sim)"
    elif similarity > 0:
        LOGGER.debug(
            "Historical similarity %.2f below report threshold, adding %.2f points silently",
            similarity,
            points,
        )
    return SignalResult(name="historical", points=points, reason=reason, similarity=similarity)

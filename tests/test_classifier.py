from __future__ import annotations

import pytest

from triage_common.classifier import (
    classify,
    classify_many,
    level_for_score,
    rank_by_urgency,
    rank_with_results,
)
from triage_common.tickets import TicketInput

SAMPLE_TEXTS = [
    "",
    "   ",
    "Hola, quisiera cambiar mi foto de perfil",
    "Sugerencia opcional para el futuro, sin prisa, cuando pueda",
    "El servidor está caído y no funciona el sistema desde ayer",
    "Pregunta: ¿cómo cambio la contraseña del wifi?",
    "La impresora no imprime desde hace varios días",
]


def make_ticket(
    ticket_id: str,
    description: str = "",
    *,
    tags=(),
    urgent: bool = False,
) -> TicketInput:
    return TicketInput(
        id=ticket_id,
        description=description,
        tags=tuple(tags),
        is_manually_urgent=urgent,
        created_at="2025-03-03 12:00:00 UTC",
    )


@pytest.mark.parametrize(
    "score, level",
    [(0.0, "low"), (3.99, "low"), (4.0, "medium"), (7.99, "medium"), (8.0, "high"), (15.5, "high")],
)
def test_level_for_score_bands(score, level):
    assert level_for_score(score) == level


def test_manual_flag_only():
    result = classify(make_ticket("T1", "Hola, quisiera cambiar mi foto de perfil", urgent=True))
    assert result.ticket_id == "T1"
    assert result.score == 5.0
    assert result.level == "medium"
    assert list(result.reasons) == ["user marked as urgent (5 pts)"]


def test_single_high_keyword():
    result = classify(make_ticket("T2", "Tenemos pedidos urgentes hoy"))
    assert result.score == 3.0
    assert result.level == "low"
    assert list(result.reasons) == ["contains urgency keywords (3 pts)"]


def test_medium_keyword_technical_term_and_manual_flag():
    result = classify(make_ticket("T3", "Tengo problemas con las impresoras", urgent=True))
    assert result.score == 7.0
    assert result.level == "medium"
    assert list(result.reasons) == [
        "contains urgency keywords (2 pts)",
        "user marked as urgent (5 pts)",
    ]


def test_two_high_keywords_and_manual_flag_reach_high():
    result = classify(make_ticket("T4", "Pedidos urgentes, usuarios bloqueados", urgent=True))
    assert result.score == 11.0
    assert result.level == "high"


def test_exact_historical_phrase_adds_similarity_reason():
    result = classify(make_ticket("T5", "Error crítico, servidor caído"))
    # keywords: caído 3 + crítico 3 + error 1.5 + servidor 0.5; historical: 2 x 1.0
    assert result.score == 10.0
    assert result.level == "high"
    assert list(result.reasons) == [
        "contains urgency keywords (8 pts)",
        "similar to historical urgent tickets (1.00 sim)",
    ]


def test_reasons_follow_signal_order():
    result = classify(make_ticket("T6", "La impresora no imprime desde ayer", tags=["falla"]))
    assert result.score == pytest.approx(6.3)
    assert result.level == "medium"
    assert list(result.reasons) == [
        "contains urgency keywords (2 pts)",
        "mentions prolonged disruption (2 pts)",
        "tags indicate urgency (1.5 pts)",
        "similar to historical urgent tickets (0.40 sim)",
    ]
    assert [signal.name for signal in result.signals] == [
        "keywords",
        "time_patterns",
        "tags",
        "manual_flag",
        "historical",
    ]
    assert "impresora" in result.matched_terms


def test_empty_ticket_scores_zero():
    result = classify(TicketInput(id="empty"))
    assert result.score == 0.0
    assert result.level == "low"
    assert result.reasons == ()


def test_missing_values_fall_back_to_empty_defaults():
    ticket = TicketInput(id="none", description=None, tags=None)  # type: ignore[arg-type]
    assert ticket.description == ""
    assert ticket.tags == ()
    assert classify(ticket).score == 0.0


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
@pytest.mark.parametrize("urgent", [False, True])
def test_score_is_non_negative_and_flag_sets_a_floor(text, urgent):
    result = classify(make_ticket("P", text, tags=["consulta"], urgent=urgent))
    assert result.score >= 0
    if urgent:
        assert result.score >= 5


@pytest.mark.parametrize("text", SAMPLE_TEXTS)
def test_classification_is_deterministic(text):
    ticket = make_ticket("D", text, tags=["urgente", "red"])
    first = classify(ticket)
    second = classify(ticket)
    assert first == second
    assert first.reasons == second.reasons


def _batch():
    return [
        make_ticket("low-a", "Tenemos pedidos urgentes hoy"),
        make_ticket("empty"),
        make_ticket("high", "Pedidos urgentes, usuarios bloqueados", urgent=True),
        make_ticket("medium", "Hola, quisiera cambiar mi foto de perfil", urgent=True),
        make_ticket("low-b", "Necesitamos copias urgentes"),
    ]


def test_rank_by_urgency_orders_by_descending_score_and_is_stable():
    ranked = rank_by_urgency(_batch())
    assert [ticket.id for ticket in ranked] == ["high", "medium", "low-a", "low-b", "empty"]


def test_rank_by_urgency_returns_a_permutation_of_the_input():
    tickets = _batch()
    ranked = rank_by_urgency(tickets)
    assert sorted(ranked, key=lambda t: t.id) == sorted(tickets, key=lambda t: t.id)
    assert all(any(item is original for original in tickets) for item in ranked)
    scores = [classify(ticket).score for ticket in ranked]
    assert scores == sorted(scores, reverse=True)


def test_rank_by_urgency_with_thread_pool_matches_sequential():
    tickets = _batch() * 3
    assert rank_by_urgency(tickets, max_workers=4) == rank_by_urgency(tickets)


def test_rank_by_urgency_of_nothing():
    assert rank_by_urgency([]) == []


def test_rank_with_results_keeps_scores():
    ranking = rank_with_results(_batch())
    assert [entry.rank for entry in ranking] == [1, 2, 3, 4, 5]
    assert [entry.result.level for entry in ranking] == ["high", "medium", "low", "low", "low"]
    for entry in ranking:
        assert entry.result.ticket_id == entry.ticket.id


def test_classify_many_preserves_input_order():
    tickets = _batch()
    results = classify_many(tickets, max_workers=2)
    assert [result.ticket_id for result in results] == [ticket.id for ticket in tickets]

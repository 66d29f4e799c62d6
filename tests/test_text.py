from __future__ import annotations

import math

import pytest

from triage_common.text import cosine_similarity, strip_accents, tokenize


def test_tokenize_normalises_case_accents_and_punctuation():
    assert tokenize("Él está CAÍDO, ¡no funciona!") == ["esta", "caido", "funciona"]


def test_tokenize_keeps_underscores_and_drops_short_tokens():
    assert tokenize("mi_equipo a-b c de") == ["mi_equipo"]


@pytest.mark.parametrize("text", ["", "   ", None, "a b c", "?!"])
def test_tokenize_degenerate_inputs(text):
    assert tokenize(text) == []


def test_strip_accents_handles_tilde():
    assert strip_accents("mañana acción") == "manana accion"


def test_identical_token_multisets_are_fully_similar():
    assert cosine_similarity("Error CRÍTICO: servidor caído", "error crítico servidor caído") == 1.0
    assert cosine_similarity("caido servidor critico error", "error critico servidor caido") == 1.0


def test_similarity_ignores_scale_of_counts():
    assert cosine_similarity("hola hola", "hola") == 1.0


def test_partial_overlap():
    expected = 2 / math.sqrt(8)
    assert cosine_similarity("servidor caido", "error critico servidor caido") == pytest.approx(expected)


def test_no_similarity_without_tokens_or_overlap():
    assert cosine_similarity("", "error critico") == 0.0
    assert cosine_similarity("de la", "a b") == 0.0
    assert cosine_similarity("impresora", "servidor") == 0.0

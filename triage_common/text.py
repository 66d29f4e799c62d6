"""Text normalisation and bag-of-words similarity helpers."""
from __future__ import annotations

import math
import re
import unicodedata
from collections import Counter
from typing import List, Optional

NON_WORD_PATTERN = re.compile(r"[^\w\s]")
MIN_TOKEN_LENGTH = 3


def strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def tokenize(text: Optional[str]) -> List[str]:
    """Split ``text`` into lower-cased, accent-free words of three or more characters."""
    if not text:
        return []
    normalised = strip_accents(text.lower())
    normalised = NON_WORD_PATTERN.sub(" ", normalised)
    return [token for token in normalised.split() if len(token) >= MIN_TOKEN_LENGTH]


def cosine_similarity(text_a: Optional[str], text_b: Optional[str]) -> float:
    """Return the cosine similarity of the word frequency vectors of two texts.

    Both vectors are non-negative, so the result lies in ``[0, 1]``. A text
    without any significant token has no similarity with anything.
    """
    counts_a = Counter(tokenize(text_a))
    counts_b = Counter(tokenize(text_b))
    if not counts_a or not counts_b:
        return 0.0
    if len(counts_a) > len(counts_b):
        counts_a, counts_b = counts_b, counts_a
    dot = 0.0
    for token, count in counts_a.items():
        other = counts_b.get(token)
        if other:
            dot += count * other
    if dot == 0.0:
        return 0.0
    norm_a = sum(count * count for count in counts_a.values())
    norm_b = sum(count * count for count in counts_b.values())
    # sqrt(n * n) is exact, so identical multisets give exactly 1.0.
    similarity = dot / math.sqrt(norm_a * norm_b)
    return min(similarity, 1.0)

"""Extractive summarisation by sentence position and length."""

from __future__ import annotations

import re
from dataclasses import dataclass

_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")
_WORD_SPLIT_RE = re.compile(r"\s+")

POSITION_WEIGHT = 0.6
LENGTH_WEIGHT = 0.4


@dataclass
class _Scored:
    text: str
    score: float


def split_sentences(text: str) -> list[str]:
    return _SENTENCE_RE.findall(text)


def score_sentence(sentence: str, index: int, total: int) -> float:
    """Favour early sentences and sentences of 6 to 29 words."""
    position = 1 - (index / total)
    # Leading whitespace yields an empty first token, which counts as a word.
    word_count = len(_WORD_SPLIT_RE.split(sentence))
    length_bonus = 1.0 if 5 < word_count < 30 else 0.5
    return POSITION_WEIGHT * position + LENGTH_WEIGHT * length_bonus


def summarize(text: str, max_length: int = 500) -> str:
    """Return a summary of *text* made of whole sentences taken verbatim.

    Sentences are ranked by :func:`score_sentence` (ties keep document
    order) and appended until the running length reaches *max_length*.
    The sentence that crosses the limit is kept whole, so at least one
    sentence is always returned.  Text with no terminal punctuation is
    returned unchanged.
    """
    sentences = split_sentences(text)
    if not sentences:
        return text

    total = len(sentences)
    scored = [
        _Scored(text=s.strip(), score=score_sentence(s, i, total))
        for i, s in enumerate(sentences)
    ]
    # sorted() is stable
    ranked = sorted(scored, key=lambda s: s.score, reverse=True)

    parts: list[str] = []
    length = 0
    for sentence in ranked:
        parts.append(sentence.text)
        length += len(sentence.text) + 1
        if length >= max_length:
            break

    return " ".join(parts).strip()

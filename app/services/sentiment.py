"""
Lexicon sentiment for journal and event text.

Tokens are scored against the VADER lexicon; a token directly after a
negator ("not", "never", "don't", ...) has its polarity flipped.

  comparative = sum(polarity) / token_count       -> score, clamped to [-1, 1]
  magnitude   = sum(|polarity|)                    -> >= 0, unbounded

Labels: score <= -0.2 negative, score >= 0.2 positive, else neutral.

Runs in-process: no HTTP, no I/O.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from vaderSentiment.vaderSentiment import NEGATE, SentimentIntensityAnalyzer

from app.core.config import settings

_analyzer = SentimentIntensityAnalyzer()
_LEXICON: dict[str, float] = _analyzer.lexicon
_NEGATORS = frozenset(NEGATE)

_TOKEN_RE = re.compile(r"[a-z0-9']+")
_APOSTROPHES = str.maketrans({"\u2019": "'", "\u2018": "'"})

NEGATIVE_THRESHOLD = -0.2
POSITIVE_THRESHOLD = 0.2


class SentimentLabel:
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    POSITIVE = "positive"


@dataclass(frozen=True)
class SentimentResult:
    score: float       # -1 .. 1
    magnitude: float   # >= 0
    label: str

    def to_document(self, analyzed_at: datetime) -> dict:
        """The `ai` block written onto events and journals."""
        return {
            "sentimentScore": self.score,
            "sentimentMagnitude": self.magnitude,
            "sentimentLabel": self.label,
            "analyzedAt": analyzed_at.isoformat(),
        }


def label_for_score(score: float) -> str:
    if score <= NEGATIVE_THRESHOLD:
        return SentimentLabel.NEGATIVE
    if score >= POSITIVE_THRESHOLD:
        return SentimentLabel.POSITIVE
    return SentimentLabel.NEUTRAL


def tokenize(text: str) -> list[str]:
    # Mobile keyboards type curly apostrophes; fold them before matching.
    return _TOKEN_RE.findall(text.lower().translate(_APOSTROPHES))


def _polarities(tokens: list[str]) -> list[float]:
    values = []
    for i, token in enumerate(tokens):
        valence = _LEXICON.get(token)
        if valence is None:
            continue
        if i > 0 and tokens[i - 1] in _NEGATORS:
            valence = -valence
        values.append(valence)
    return values


def analyze(text: Optional[str], max_chars: Optional[int] = None) -> Optional[SentimentResult]:
    """
    Score `text`. Returns None for None / empty / whitespace-only input.
    Only the first `max_chars` characters (default SENTIMENT_MAX_CHARS)
    are considered.
    """
    trimmed = (text or "").strip()
    if not trimmed:
        return None

    limit = max_chars if max_chars is not None else settings.SENTIMENT_MAX_CHARS
    content = trimmed[:limit]

    tokens = tokenize(content)
    polarities = _polarities(tokens)

    comparative = sum(polarities) / len(tokens) if tokens else 0.0
    score = max(-1.0, min(1.0, comparative))
    magnitude = float(sum(abs(p) for p in polarities))

    return SentimentResult(
        score=score,
        magnitude=magnitude,
        label=label_for_score(score),
    )

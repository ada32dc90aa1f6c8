"""
Unit tests for the lexicon sentiment analyzer. No DB.
"""
from datetime import datetime, timezone

import pytest
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from app.services.sentiment import (
    SentimentLabel,
    SentimentResult,
    analyze,
    label_for_score,
    tokenize,
)

LEXICON = SentimentIntensityAnalyzer().lexicon


class TestEmptyInput:
    @pytest.mark.parametrize("text", ["", "   ", "\n\t  ", None])
    def test_empty_returns_none(self, text):
        assert analyze(text) is None


class TestLabels:
    def test_lower_boundary_is_negative(self):
        assert label_for_score(-0.2) == SentimentLabel.NEGATIVE

    def test_just_above_lower_boundary_is_neutral(self):
        assert label_for_score(-0.19999) == SentimentLabel.NEUTRAL

    def test_upper_boundary_is_positive(self):
        assert label_for_score(0.2) == SentimentLabel.POSITIVE

    def test_just_below_upper_boundary_is_neutral(self):
        assert label_for_score(0.19999) == SentimentLabel.NEUTRAL

    def test_zero_is_neutral(self):
        assert label_for_score(0.0) == SentimentLabel.NEUTRAL


class TestScoring:
    def test_positive_text(self):
        result = analyze("I am happy")
        assert result.label == SentimentLabel.POSITIVE
        assert result.score == pytest.approx(LEXICON["happy"] / 3)

    def test_negative_text(self):
        result = analyze("today was sad and terrible")
        assert result.score < 0
        assert result.label == SentimentLabel.NEGATIVE

    def test_no_lexicon_words_is_neutral(self):
        result = analyze("the meeting is on the third floor")
        assert result.score == 0.0
        assert result.magnitude == 0.0
        assert result.label == SentimentLabel.NEUTRAL

    def test_negator_flips_polarity(self):
        plain = analyze("I am happy")
        negated = analyze("I am not happy")
        assert plain.score > 0
        assert negated.score < 0
        assert negated.label == SentimentLabel.NEGATIVE

    def test_score_is_clamped(self):
        result = analyze("good good good")
        assert result.score == 1.0
        assert result.label == SentimentLabel.POSITIVE

    def test_magnitude_sums_absolute_polarities(self):
        result = analyze("happy sad")
        assert result.magnitude == pytest.approx(abs(LEXICON["happy"]) + abs(LEXICON["sad"]))

    def test_case_insensitive(self):
        assert analyze("HAPPY").score == analyze("happy").score

    def test_only_first_chars_considered(self):
        padding = "the " * 500  # exactly 2000 characters
        result = analyze(padding + "happy happy happy")
        assert result.score == 0.0
        assert result.magnitude == 0.0

    def test_custom_limit(self):
        result = analyze("happy " + "the " * 10 + "awful", max_chars=5)
        assert result.score > 0
        assert result.magnitude == pytest.approx(LEXICON["happy"])

    @pytest.mark.parametrize("text", [
        "I love this so much, best day ever!!!",
        "hate hate hate awful horrible",
        "not bad",
        "ok",
        "1234 5678",
        "¿Qué tal? 😀",
        "x" * 5000,
    ])
    def test_bounds(self, text):
        result = analyze(text)
        assert -1.0 <= result.score <= 1.0
        assert result.magnitude >= 0.0
        assert result.label in {"negative", "neutral", "positive"}


class TestTokenize:
    def test_keeps_apostrophes(self):
        assert tokenize("Don't STOP") == ["don't", "stop"]

    def test_curly_apostrophe_matches_straight(self):
        assert tokenize("Don’t stop") == tokenize("Don't stop") == ["don't", "stop"]
        assert tokenize("‘can’t’") == ["'can't'"]

    def test_curly_apostrophe_still_negates(self):
        straight = analyze("I don't like it")
        curly = analyze("I don’t like it")
        assert curly == straight
        assert curly.label == SentimentLabel.NEGATIVE

    def test_drops_punctuation(self):
        assert tokenize("well... fine!") == ["well", "fine"]


class TestToDocument:
    def test_document_shape(self):
        at = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)
        doc = SentimentResult(score=-0.5, magnitude=4.2, label="negative").to_document(at)
        assert doc == {
            "sentimentScore": -0.5,
            "sentimentMagnitude": 4.2,
            "sentimentLabel": "negative",
            "analyzedAt": "2026-10-17T09:30:00+00:00",
        }

"""Scoring of typed dictation against a reference text.

Words are compared by position, not aligned: a missing or extra word shifts
every following word and each shifted pair counts as a mistake. Existing
score expectations depend on this, so it must not be replaced with an
edit-distance diff without changing the scoring contract.
"""

import math
from itertools import zip_longest

from .errors import ConfigurationError, ValidationError
from .types import Mistake, ScoreResult


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up (12.5 -> 13)."""
    return math.floor(value + 0.5)


def is_blank(text: str) -> bool:
    return not text.strip()


def validate_user_input(user_text: str) -> None:
    """
    Reject an attempt before scoring.

    Raises:
        ValidationError: If the learner typed nothing but whitespace
    """
    if is_blank(user_text):
        raise ValidationError("No text entered. Type what you heard before checking.")


def score(reference: str, user_text: str) -> ScoreResult:
    """
    Score typed text against a reference.

    Both texts are lower-cased and split on whitespace. Each matching position
    earns credit; each position where both words exist but differ is a mistake.
    Positions present on only one side earn nothing and are not reported.

    Args:
        reference: Text the learner is tested against
        user_text: What the learner typed

    Returns:
        ScoreResult with a 0-100 score (relative to the reference word count)
        and every mistake in order

    Raises:
        ValidationError: If user_text is blank
        ConfigurationError: If reference has no words
    """
    validate_user_input(user_text)

    reference_words = reference.lower().split()
    user_words = user_text.lower().split()
    if not reference_words:
        raise ConfigurationError("Reference text is empty; nothing to score against.")

    correct = 0
    mistakes: list[Mistake] = []
    for expected, typed in zip_longest(reference_words, user_words):
        if expected == typed:
            correct += 1
        elif expected and typed:
            mistakes.append(Mistake(word=typed, suggestion=expected))

    accuracy = correct / len(reference_words) * 100
    return ScoreResult(score=round_half_up(accuracy), mistakes=tuple(mistakes))

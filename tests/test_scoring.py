"""Tests for dictation scoring."""

import pytest

from dictation_coach.errors import ConfigurationError, DictationError, ValidationError
from dictation_coach.scoring import round_half_up, score, validate_user_input
from dictation_coach.types import Mistake


class TestRoundHalfUp:
    """Tests for round_half_up function."""

    @pytest.mark.parametrize(
        "value,expected",
        [(66.666, 67), (12.5, 13), (87.5, 88), (0.0, 0), (100.0, 100), (49.4, 49)],
    )
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestValidateUserInput:
    """Tests for validate_user_input function."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_blank_input_rejected(self, text):
        with pytest.raises(ValidationError, match="No text entered"):
            validate_user_input(text)

    def test_text_accepted(self):
        validate_user_input("  hello ")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_user_input("")


class TestScore:
    """Tests for score function."""

    def test_near_miss_last_word(self):
        result = score("Hello everyone welcome", "Hello everyone welcom")
        assert result.score == 67
        assert result.mistakes == (Mistake(word="welcom", suggestion="welcome"),)

    def test_extra_words_are_ignored(self):
        result = score("one two", "one two three")
        assert result.score == 100
        assert result.mistakes == ()

    def test_missing_words_earn_nothing(self):
        result = score("one two three four", "one two")
        assert result.score == 50
        assert result.mistakes == ()

    def test_perfect_match(self):
        result = score("The quick brown fox", "The quick brown fox")
        assert result.score == 100
        assert result.mistakes == ()

    def test_case_insensitive(self):
        reference = "Welcome to Our English dictation"
        typed = "welcome to our english diktation"
        assert score(reference, typed) == score(reference, typed.upper())

    def test_mistakes_are_lower_cased(self):
        result = score("Hello World", "Hello WORD")
        assert result.mistakes == (Mistake(word="word", suggestion="world"),)

    def test_whitespace_runs_split_words(self):
        result = score("one two three", "  one\n\ttwo   three ")
        assert result.score == 100

    def test_punctuation_is_part_of_word(self):
        result = score("Hello everyone!", "hello everyone")
        assert result.score == 50
        assert result.mistakes == (Mistake(word="everyone", suggestion="everyone!"),)

    def test_dropped_word_cascades(self):
        # Positional comparison: a missing word shifts everything after it
        result = score("I really like green tea", "I like green tea")
        assert result.score == 20
        assert [m.word for m in result.mistakes] == ["like", "green", "tea"]
        assert [m.suggestion for m in result.mistakes] == ["really", "like", "green"]

    def test_half_rounds_up(self):
        reference = "a b c d e f g h"
        typed = "a x x x x x x x"
        assert score(reference, typed).score == 13

    def test_all_mistakes_returned(self):
        result = score("a b c d e f g", "z y x w v u t")
        assert result.score == 0
        assert len(result.mistakes) == 7

    def test_idempotent(self):
        assert score("one two three", "one too three") == score("one two three", "one too three")

    @pytest.mark.parametrize("typed", ["", "    "])
    def test_blank_input_rejected(self, typed):
        with pytest.raises(ValidationError):
            score("test", typed)

    @pytest.mark.parametrize("reference", ["", "  \n"])
    def test_empty_reference_is_configuration_error(self, reference):
        with pytest.raises(ConfigurationError, match="Reference text is empty"):
            score(reference, "hello")

    def test_errors_share_base_class(self):
        with pytest.raises(DictationError):
            score("", "hello")

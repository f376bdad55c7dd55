"""Tests for ConstraintSet validation and token parsing."""

import pytest

from anagrove import MAX_WORDS_CEILING, ConstraintSet, InvalidInput, parse_tokens
from anagrove._constraints import check_limit, parse_partial_mode
from anagrove._types import PartialMode


def test_defaults():
    c = ConstraintSet.build()
    assert c.min_word_length == 3
    assert c.max_words == 3
    assert c.excluded == frozenset()
    assert c.required == ()
    assert c.top_n == 200_000


def test_parse_tokens():
    assert parse_tokens("Cat, dog  bird,,cat ; DOG") == ("cat", "dog", "bird")
    assert parse_tokens(["Cat", "dog, emu"]) == ("cat", "dog", "emu")
    assert parse_tokens("") == ()
    assert parse_tokens(None) == ()


def test_tokens_normalized():
    c = ConstraintSet.build(excludes="The, AND", includes=["Ten"])
    assert c.excluded == frozenset({"the", "and"})
    assert c.required == ("ten",)


@pytest.mark.parametrize("kwargs, field", [
    ({"min_word_length": 0}, "min_word_length"),
    ({"min_word_length": "3"}, "min_word_length"),
    ({"max_words": 0}, "max_words"),
    ({"max_words": MAX_WORDS_CEILING + 1}, "max_words"),
    ({"max_words": True}, "max_words"),
    ({"top_n": 0}, "top_n"),
    ({"top_n": 2.5}, "top_n"),
])
def test_invalid_numbers(kwargs, field):
    with pytest.raises(InvalidInput) as exc:
        ConstraintSet.build(**kwargs)
    assert exc.value.field == field
    assert field in str(exc.value)


def test_ceiling_allowed():
    assert ConstraintSet.build(max_words=MAX_WORDS_CEILING).max_words == MAX_WORDS_CEILING


def test_contradictory_tokens():
    with pytest.raises(InvalidInput, match="both required and excluded") as exc:
        ConstraintSet.build(excludes="moon, star", includes="STAR")
    assert exc.value.field == "includes"


def test_include_token_must_be_letters():
    with pytest.raises(InvalidInput) as exc:
        ConstraintSet.build(includes="o'clock")
    assert exc.value.field == "includes"


def test_invalid_input_is_value_error():
    with pytest.raises(ValueError):
        ConstraintSet.build(max_words=-1)


def test_allows():
    c = ConstraintSet.build(min_word_length=3, excludes="net")
    assert c.allows("ten")
    assert not c.allows("net")
    assert not c.allows("at")


def test_check_limit():
    assert check_limit(None) is None
    assert check_limit(7) == 7
    for bad in (0, -1, True, 2.5):
        with pytest.raises(InvalidInput) as exc:
            check_limit(bad)
        assert exc.value.field == "limit"


def test_parse_partial_mode():
    assert parse_partial_mode("frontier") is PartialMode.FRONTIER
    assert parse_partial_mode(PartialMode.NONE) is PartialMode.NONE
    with pytest.raises(InvalidInput) as exc:
        parse_partial_mode("everything")
    assert exc.value.field == "partial_mode"
    assert "dead_end" in str(exc.value)

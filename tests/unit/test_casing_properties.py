from __future__ import annotations

import hypothesis.strategies as st
from hypothesis import HealthCheck, given, settings

from flexdto.casing import to_camel, to_snake
from tests.utils.models import User

_word = st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=2, max_size=8)
_words = st.lists(_word, min_size=1, max_size=4)


def _camel(words):
    return words[0] + "".join(word.capitalize() for word in words[1:])


# Strategy: plain words (no acronyms, no digits) round-trip both ways
@given(_words)
@settings(
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
def test_snake_spelling_camelizes_to_camel_spelling(words):
    assert to_camel("_".join(words)) == _camel(words)


@given(_words)
@settings(
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
def test_camel_spelling_snakes_to_snake_spelling(words):
    assert to_snake(_camel(words)) == "_".join(words)


@given(st.text(max_size=20))
@settings(
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
def test_conversions_are_total_and_deterministic(value):
    assert to_camel(value) == to_camel(value)
    assert to_snake(value) == to_snake(value)


@given(st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789", max_size=12))
@settings(
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
def test_strings_without_separators_or_capitals_are_fixed_points(value):
    assert to_camel(value) == value
    assert to_snake(value) == value


# Either spelling of a payload key populates the same field
@given(st.text(min_size=1, max_size=10))
@settings(
    max_examples=50,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
def test_either_spelling_populates_the_same_value(name):
    snake = User({"user_name": name})
    camel = User({"userName": name})
    assert snake.userName == camel.userName == name

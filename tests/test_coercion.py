from datetime import datetime

import pytest

from cmdbot.commands.coercion import coerce, coerce_all
from cmdbot.commands.manifest import param
from cmdbot.commands.models import ParamType
from tests.conftest import Mode


@pytest.mark.parametrize(
    "token,expected",
    [("42", 42), ("-7", -7), ("+3", 3), ("007", 7)],
)
def test_integer_accepts(token, expected):
    result = coerce(token, param("n", int))
    assert result.ok
    assert result.value == expected


@pytest.mark.parametrize("token", ["4.2", "1_000", "", "abc", "٣", "1e3"])
def test_integer_rejects(token):
    assert not coerce(token, param("n", int)).ok


def test_integer_beyond_digit_limit_fails():
    assert not coerce("9" * 5000, param("n", int)).ok
    assert not coerce("-" + "1" * 5000, param("n", int)).ok


@pytest.mark.parametrize(
    "token,expected",
    [("1.5", 1.5), ("-0.25", -0.25), (".5", 0.5), ("3", 3.0), ("1e3", 1000.0)],
)
def test_float_accepts(token, expected):
    result = coerce(token, param("x", float))
    assert result.ok
    assert result.value == pytest.approx(expected)


@pytest.mark.parametrize("token", ["nan", "inf", "1,5", "one", ".", "1e400", "9" * 400])
def test_float_rejects(token):
    assert not coerce(token, param("x", float)).ok


@pytest.mark.parametrize(
    "token,expected",
    [("true", True), ("True", True), ("FALSE", False), ("1", True), ("0", False)],
)
def test_boolean_accepts(token, expected):
    result = coerce(token, param("flag", bool))
    assert result.ok
    assert result.value is expected


@pytest.mark.parametrize("token", ["yes", "no", "2", "t"])
def test_boolean_rejects(token):
    assert not coerce(token, param("flag", bool)).ok


def test_char():
    spec = param("c", ParamType.CHAR)
    assert coerce("a", spec).value == "a"
    assert not coerce("ab", spec).ok
    assert not coerce("", spec).ok


def test_datetime_iso():
    result = coerce("2024-05-01T18:30", param("when", datetime))
    assert result.ok
    assert result.value == datetime(2024, 5, 1, 18, 30)


def test_datetime_date_only():
    assert coerce("2024-05-01", param("when", datetime)).value == datetime(2024, 5, 1)


def test_datetime_slash_format():
    assert coerce("2024/05/01", param("when", datetime)).value == datetime(2024, 5, 1)


@pytest.mark.parametrize("token", ["tomorrow", "2024-13-01", "01/05", "5"])
def test_datetime_rejects(token):
    assert not coerce(token, param("when", datetime)).ok


def test_enum_exact_name():
    result = coerce("Fast", param("mode", Mode))
    assert result.ok
    assert result.value is Mode.Fast


def test_enum_is_case_sensitive():
    assert not coerce("fast", param("mode", Mode)).ok
    assert not coerce("FAST", param("mode", Mode)).ok


def test_enum_rejects_values():
    assert not coerce("1", param("mode", Mode)).ok


def test_string_always_succeeds():
    result = coerce('"quoted"', param("text", str))
    assert result.ok
    assert result.value == '"quoted"'


def test_coercion_is_deterministic():
    spec = param("n", int)
    assert coerce("12", spec) == coerce("12", spec)


def test_coerce_all_positional():
    values = coerce_all(["Slow", "3"], [param("mode", Mode), param("n", int)])
    assert values == [Mode.Slow, 3]


def test_coerce_all_fails_on_any_position():
    assert coerce_all(["Slow", "x"], [param("mode", Mode), param("n", int)]) is None


def test_coerce_all_length_mismatch():
    assert coerce_all(["1"], [param("a", int), param("b", int)]) is None

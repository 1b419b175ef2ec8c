"""Conversion of string tokens into typed command arguments.

A token that does not fit the declared type is an ordinary outcome, so every
converter returns a ``Coerced`` result instead of raising.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Sequence

from cmdbot.commands.models import ParameterSpec, ParamType

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

_TRUE_VALUES = frozenset({"true", "1"})
_FALSE_VALUES = frozenset({"false", "0"})

_DATETIME_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
)


@dataclass(frozen=True)
class Coerced:
    ok: bool
    value: Any = None


FAILED = Coerced(ok=False)


def _coerce_integer(token: str, spec: ParameterSpec) -> Coerced:
    if not _INTEGER_RE.fullmatch(token):
        return FAILED
    try:
        value = int(token)
    except ValueError:
        # beyond the interpreter's int/str conversion digit limit
        return FAILED
    return Coerced(ok=True, value=value)


def _coerce_float(token: str, spec: ParameterSpec) -> Coerced:
    if not _FLOAT_RE.fullmatch(token):
        return FAILED
    value = float(token)
    if math.isinf(value):
        return FAILED
    return Coerced(ok=True, value=value)


def _coerce_boolean(token: str, spec: ParameterSpec) -> Coerced:
    lowered = token.lower()
    if lowered in _TRUE_VALUES:
        return Coerced(ok=True, value=True)
    if lowered in _FALSE_VALUES:
        return Coerced(ok=True, value=False)
    return FAILED


def _coerce_char(token: str, spec: ParameterSpec) -> Coerced:
    if len(token) != 1:
        return FAILED
    return Coerced(ok=True, value=token)


def _coerce_datetime(token: str, spec: ParameterSpec) -> Coerced:
    try:
        return Coerced(ok=True, value=datetime.fromisoformat(token))
    except ValueError:
        pass
    for fmt in _DATETIME_FORMATS:
        try:
            return Coerced(ok=True, value=datetime.strptime(token, fmt))
        except ValueError:
            continue
    return FAILED


def _coerce_enum(token: str, spec: ParameterSpec) -> Coerced:
    if spec.enum_type is None:
        return FAILED
    member = spec.enum_type.__members__.get(token)
    if member is None:
        return FAILED
    return Coerced(ok=True, value=member)


def _coerce_string(token: str, spec: ParameterSpec) -> Coerced:
    return Coerced(ok=True, value=token)


_CONVERTERS: dict[ParamType, Callable[[str, ParameterSpec], Coerced]] = {
    ParamType.INTEGER: _coerce_integer,
    ParamType.FLOAT: _coerce_float,
    ParamType.BOOLEAN: _coerce_boolean,
    ParamType.CHAR: _coerce_char,
    ParamType.DATETIME: _coerce_datetime,
    ParamType.ENUM: _coerce_enum,
    ParamType.STRING: _coerce_string,
}


def coerce(token: str, spec: ParameterSpec) -> Coerced:
    return _CONVERTERS[spec.type](token, spec)


def coerce_all(tokens: Sequence[str], parameters: Sequence[ParameterSpec]) -> list[Any] | None:
    """Coerce tokens positionally; ``None`` if the lengths differ or any token fails."""
    if len(tokens) != len(parameters):
        return None
    values: list[Any] = []
    for token, spec in zip(tokens, parameters):
        result = coerce(token, spec)
        if not result.ok:
            return None
        values.append(result.value)
    return values

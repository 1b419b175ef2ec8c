from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, StrEnum
from typing import Any, Callable


class ParamType(StrEnum):
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    CHAR = "char"
    DATETIME = "datetime"
    ENUM = "enum"
    STRING = "string"


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    type: ParamType = ParamType.STRING
    enum_type: type[Enum] | None = None
    optional: bool = False
    help: str | None = None  # overrides the type name in help text

    @property
    def enum_names(self) -> tuple[str, ...]:
        if self.enum_type is None:
            return ()
        return tuple(self.enum_type.__members__)


@dataclass(frozen=True)
class Variant:
    """One declared signature of a command.

    ``handler`` is called as ``handler(context, *arguments)`` by the
    invocation layer once this variant has been resolved.
    """

    name: str
    usage: str
    parameters: tuple[ParameterSpec, ...] = ()
    handler: Callable[..., Any] | None = field(default=None, compare=False, repr=False)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def is_parameterless(self) -> bool:
        return not self.parameters

    @property
    def is_single_string(self) -> bool:
        return len(self.parameters) == 1 and self.parameters[0].type is ParamType.STRING

    @property
    def signature(self) -> tuple[tuple[ParamType, type[Enum] | None], ...]:
        return tuple((p.type, p.enum_type) for p in self.parameters)

"""Declarative command manifests.

Feature modules describe their commands with a ``CommandManifest`` and hand
the manifests to ``build_registry`` at startup::

    weather = CommandManifest("weather", "Current weather")

    @weather.variant("/weather <city>", param("city", str))
    async def weather_for(context, city): ...
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Callable

from cmdbot.commands.exceptions import ConfigurationError
from cmdbot.commands.models import ParameterSpec, ParamType, Variant

_PYTHON_TYPES: dict[type, ParamType] = {
    bool: ParamType.BOOLEAN,
    int: ParamType.INTEGER,
    float: ParamType.FLOAT,
    str: ParamType.STRING,
    datetime: ParamType.DATETIME,
}


def param(
    name: str,
    kind: type | ParamType = str,
    *,
    optional: bool = False,
    help: str | None = None,
) -> ParameterSpec:
    """Declare a parameter from a ``ParamType``, a builtin type or an ``Enum`` subclass."""
    if isinstance(kind, ParamType):
        if kind is ParamType.ENUM:
            raise ConfigurationError(f"Parameter {name!r}: pass the Enum class, not ParamType.ENUM")
        return ParameterSpec(name=name, type=kind, optional=optional, help=help)
    if isinstance(kind, type) and issubclass(kind, Enum):
        return ParameterSpec(
            name=name, type=ParamType.ENUM, enum_type=kind, optional=optional, help=help
        )
    if kind in _PYTHON_TYPES:
        return ParameterSpec(name=name, type=_PYTHON_TYPES[kind], optional=optional, help=help)
    raise ConfigurationError(f"Parameter {name!r}: unsupported type {kind!r}")


class CommandManifest:
    def __init__(self, name: str, description: str = "") -> None:
        self.name = name
        self.description = description
        self._variants: list[Variant] = []

    @property
    def variants(self) -> tuple[Variant, ...]:
        return tuple(self._variants)

    def add_variant(self, variant: Variant) -> CommandManifest:
        self._variants.append(variant)
        return self

    def variant(
        self, usage: str, *parameters: ParameterSpec, name: str | None = None
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register the decorated function as the next variant, in declaration order."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_variant(
                Variant(
                    name=name or func.__name__,
                    usage=usage,
                    parameters=tuple(parameters),
                    handler=func,
                )
            )
            return func

        return decorator

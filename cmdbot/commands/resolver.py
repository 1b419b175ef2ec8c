"""Selection of the variant that handles a parameter list.

Tiers, in order:

1. no tokens and a parameterless default -> that default;
2. the first non-default variant of matching arity, in declaration order,
   whose every token coerces;
3. the single-string default, called with the whole raw parameter text;
4. the parameterless default, called with no arguments.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from cmdbot.commands.coercion import coerce_all
from cmdbot.commands.models import Variant
from cmdbot.commands.registry import VariantCatalog


class MatchKind(StrEnum):
    EXACT = "exact"
    SINGLE_STRING = "single_string"
    PARAMETERLESS = "parameterless"


@dataclass(frozen=True)
class Resolution:
    variant: Variant
    arguments: tuple[Any, ...]
    match: MatchKind


def candidates(catalog: VariantCatalog, arity: int) -> list[Variant]:
    return [
        v for v in catalog.variants if v.arity == arity and not catalog.is_default(v)
    ]


def resolve(
    catalog: VariantCatalog, tokens: Sequence[str], raw_parameters: str = ""
) -> Resolution | None:
    """Return the resolved variant with coerced arguments, or ``None`` when nothing fits."""
    if not tokens and catalog.default_parameterless is not None:
        return Resolution(catalog.default_parameterless, (), MatchKind.PARAMETERLESS)

    if tokens:
        for variant in candidates(catalog, len(tokens)):
            values = coerce_all(tokens, variant.parameters)
            if values is not None:
                return Resolution(variant, tuple(values), MatchKind.EXACT)

    if catalog.default_single_string is not None:
        return Resolution(
            catalog.default_single_string, (raw_parameters,), MatchKind.SINGLE_STRING
        )
    if catalog.default_parameterless is not None:
        return Resolution(catalog.default_parameterless, (), MatchKind.PARAMETERLESS)
    return None

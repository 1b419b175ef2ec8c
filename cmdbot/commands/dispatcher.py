from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

from cmdbot.commands.models import Variant
from cmdbot.commands.parser import ParsedRequest, parse_command
from cmdbot.commands.registry import CommandRegistry, VariantCatalog
from cmdbot.commands.resolver import MatchKind, resolve

logger = logging.getLogger(__name__)

VERBOSE_HELP_ARGUMENT = "verbose"


@dataclass(frozen=True)
class HelpRequested:
    request: ParsedRequest
    verbose: bool = False


@dataclass(frozen=True)
class UnknownCommand:
    request: ParsedRequest


@dataclass(frozen=True)
class NoSuitableVariant:
    request: ParsedRequest
    catalog: VariantCatalog


@dataclass(frozen=True)
class Resolved:
    request: ParsedRequest
    catalog: VariantCatalog
    variant: Variant
    arguments: tuple[Any, ...]
    match: MatchKind = MatchKind.EXACT


Outcome = Union[HelpRequested, UnknownCommand, NoSuitableVariant, Resolved]


def dispatch_request(
    registry: CommandRegistry, request: ParsedRequest, help_command: str = "help"
) -> Outcome:
    if request.command == help_command:
        return HelpRequested(request, verbose=request.raw_parameters == VERBOSE_HELP_ARGUMENT)

    catalog = registry.get(request.command) if request.command else None
    if catalog is None:
        return UnknownCommand(request)

    resolution = resolve(catalog, request.parameters, request.raw_parameters)
    if resolution is None:
        return NoSuitableVariant(request, catalog)
    return Resolved(
        request=request,
        catalog=catalog,
        variant=resolution.variant,
        arguments=resolution.arguments,
        match=resolution.match,
    )


def dispatch(
    registry: CommandRegistry,
    text: str | None,
    *,
    marker: str = "/",
    help_command: str = "help",
) -> Outcome:
    """Turn raw message text into an ``Outcome``; never raises for user input."""
    request = parse_command(text, marker=marker)
    logger.debug(
        "Parsed request: command=%r raw_parameters=%r parameters=%r",
        request.command,
        request.raw_parameters,
        request.parameters,
    )
    return dispatch_request(registry, request, help_command=help_command)

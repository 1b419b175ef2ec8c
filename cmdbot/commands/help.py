"""Help text rendering for the registered commands.

Both renderings are computed once when the registry is built and stored on
it; the help command only picks one of them.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cmdbot.commands.models import ParameterSpec, ParamType

if TYPE_CHECKING:
    from cmdbot.commands.registry import VariantCatalog

_TYPE_NAMES: dict[ParamType, str] = {
    ParamType.INTEGER: "Integer",
    ParamType.FLOAT: "Decimal",
    ParamType.BOOLEAN: "Boolean",
    ParamType.CHAR: "Char",
    ParamType.DATETIME: "DateTime",
    ParamType.STRING: "Text",
}

_EXAMPLE_VALUES: dict[ParamType, tuple[str, ...]] = {
    ParamType.INTEGER: ("Any integer number", "0", "1", "42"),
    ParamType.FLOAT: ("Any decimal number", "0.5", "1.12", "42.5"),
    ParamType.BOOLEAN: ("true", "false", "1", "0"),
    ParamType.CHAR: ("Any single character", "a", "z", "b"),
    ParamType.DATETIME: ("A date, time or both, e.g. 2024-05-01 or 2024-05-01T18:30",),
    ParamType.STRING: ("Any text",),
}


_MARKDOWN_SPECIAL_RE = re.compile(r"([_*`\[])")


def _md(text: str) -> str:
    """Escape Telegram Markdown entity characters outside code spans."""
    return _MARKDOWN_SPECIAL_RE.sub(r"\\\1", text)


@dataclass(frozen=True)
class HelpText:
    terse: str
    verbose: str

    def select(self, verbose: bool) -> str:
        return self.verbose if verbose else self.terse


def parameter_help(spec: ParameterSpec) -> str:
    if spec.help:
        return spec.help
    if spec.type is ParamType.ENUM and spec.enum_type is not None:
        return spec.enum_type.__name__
    return _TYPE_NAMES[spec.type]


def parameter_values(spec: ParameterSpec) -> tuple[str, ...]:
    if spec.type is ParamType.ENUM:
        return spec.enum_names
    return _EXAMPLE_VALUES[spec.type]


def _render(catalogs: list[VariantCatalog], title: str, help_command: str, verbose: bool) -> str:
    lines: list[str] = []
    if title:
        lines += [_md(title), ""]
    lines.append("Available commands:")

    for catalog in catalogs:
        lines.append(f"/{_md(catalog.name)}")
        if catalog.description:
            lines.append(f"  Description: {_md(catalog.description)}")
        lines.append("_Command Variants:_")

        for variant in catalog.variants:
            lines.append(f"  *Name*: {_md(variant.name)}")
            lines.append(f"  *Usage*: {_md(variant.usage)}")
            if variant.parameters:
                lines.append("  *Parameters*:")
            for spec in variant.parameters:
                suffix = " (optional)" if spec.optional else ""
                lines.append(f"    `{spec.name.upper()}` - {_md(parameter_help(spec))}{suffix}")
                # Enum members are listed even in the terse rendering.
                if spec.type is ParamType.ENUM or verbose:
                    lines += [f"      > {_md(value)}" for value in parameter_values(spec)]
            lines.append("")
        lines.append("")

    if not verbose:
        lines.append(f"Send /{help_command} verbose to see example values for every parameter.")
    return "\n".join(lines).rstrip() + "\n"


def render_help(
    catalogs: Iterable[VariantCatalog], title: str = "", help_command: str = "help"
) -> HelpText:
    ordered = list(catalogs)
    return HelpText(
        terse=_render(ordered, title, help_command, verbose=False),
        verbose=_render(ordered, title, help_command, verbose=True),
    )

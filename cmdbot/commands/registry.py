from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from cmdbot.commands.exceptions import (
    AmbiguousDefaultError,
    ConfigurationError,
    DuplicateCommandError,
)
from cmdbot.commands.help import HelpText, render_help
from cmdbot.commands.manifest import CommandManifest
from cmdbot.commands.models import ParamType, Variant

logger = logging.getLogger(__name__)

_INVALID_NAME_RE = re.compile(r"[\s@]")


@dataclass(frozen=True)
class VariantCatalog:
    name: str
    description: str
    variants: tuple[Variant, ...]
    default_parameterless: Variant | None = None
    default_single_string: Variant | None = None

    def is_default(self, variant: Variant) -> bool:
        return variant is self.default_parameterless or variant is self.default_single_string


class CommandRegistry:
    """Read-only mapping of command name to ``VariantCatalog``.

    Built once by ``build_registry`` and shared by every dispatch without
    locking; nothing on it can be mutated after construction.
    """

    def __init__(self, catalogs: Mapping[str, VariantCatalog], help_text: HelpText) -> None:
        self._catalogs = MappingProxyType(dict(catalogs))
        self._help_text = help_text

    @property
    def help_text(self) -> HelpText:
        return self._help_text

    def get(self, name: str) -> VariantCatalog | None:
        return self._catalogs.get(name)

    def list_commands(self) -> list[VariantCatalog]:
        return list(self._catalogs.values())

    def __contains__(self, name: object) -> bool:
        return name in self._catalogs

    def __iter__(self) -> Iterator[str]:
        return iter(self._catalogs)

    def __len__(self) -> int:
        return len(self._catalogs)


def _validate_name(name: str, help_command: str) -> None:
    if not name or _INVALID_NAME_RE.search(name):
        raise ConfigurationError(f"Invalid command name: {name!r}")
    if name == help_command:
        raise ConfigurationError(f"Command name {name!r} is reserved for help")


def _validate_variant(command: str, variant: Variant) -> None:
    if not callable(variant.handler):
        raise ConfigurationError(f"/{command} variant {variant.name!r} has no callable handler")
    for spec in variant.parameters:
        if spec.type is ParamType.ENUM and not spec.enum_names:
            raise ConfigurationError(
                f"/{command} variant {variant.name!r}: enum parameter {spec.name!r} "
                "needs an Enum type with at least one member"
            )


def build_catalog(manifest: CommandManifest, help_command: str = "help") -> VariantCatalog:
    """Freeze a manifest into a catalog and pick its default variants."""
    _validate_name(manifest.name, help_command)
    variants = manifest.variants
    if not variants:
        raise ConfigurationError(f"Command /{manifest.name} declares no variants")

    parameterless: Variant | None = None
    single_string: Variant | None = None
    seen: dict[tuple, Variant] = {}

    for variant in variants:
        _validate_variant(manifest.name, variant)

        if variant.is_parameterless:
            if parameterless is not None:
                raise AmbiguousDefaultError(
                    manifest.name, parameterless.name, variant.name, "parameterless"
                )
            parameterless = variant
            continue
        if variant.is_single_string:
            if single_string is not None:
                raise AmbiguousDefaultError(
                    manifest.name, single_string.name, variant.name, "single-string"
                )
            single_string = variant
            continue

        earlier = seen.get(variant.signature)
        if earlier is not None:
            logger.warning(
                "Variant %s of /%s is shadowed by %s (same parameter types)",
                variant.name,
                manifest.name,
                earlier.name,
            )
        else:
            seen[variant.signature] = variant

    return VariantCatalog(
        name=manifest.name,
        description=manifest.description,
        variants=variants,
        default_parameterless=parameterless,
        default_single_string=single_string,
    )


def build_registry(
    manifests: Iterable[CommandManifest],
    *,
    help_command: str = "help",
    title: str = "",
) -> CommandRegistry:
    """Build the immutable registry; raises ``ConfigurationError`` on authoring mistakes."""
    catalogs: dict[str, VariantCatalog] = {}
    for manifest in manifests:
        if manifest.name in catalogs:
            raise DuplicateCommandError(manifest.name)
        catalog = build_catalog(manifest, help_command=help_command)
        catalogs[catalog.name] = catalog
        logger.info(
            "Registered command: /%s (%d variants)", catalog.name, len(catalog.variants)
        )

    help_text = render_help(catalogs.values(), title=title, help_command=help_command)
    return CommandRegistry(catalogs, help_text)

"""Dispatch between the properties and simplified YAML formats."""

from __future__ import annotations

from collections.abc import Callable

from confshift.domain.errors import UnsupportedFormatError
from confshift.domain.models import ConfigProperty
from confshift.domain.properties import generate_properties, parse_properties
from confshift.domain.simple_yaml import generate_yaml, parse_yaml
from confshift.domain.types import ConfigFormat

_PARSERS: dict[ConfigFormat, Callable[[str], list[ConfigProperty]]] = {
    ConfigFormat.PROPERTIES: parse_properties,
    ConfigFormat.YAML: parse_yaml,
}

_GENERATORS: dict[ConfigFormat, Callable[[list[ConfigProperty]], str]] = {
    ConfigFormat.PROPERTIES: generate_properties,
    ConfigFormat.YAML: generate_yaml,
}


def as_config_format(tag: str, *, kind: str = "config format") -> ConfigFormat:
    """Coerce *tag* to a ConfigFormat or raise UnsupportedFormatError."""
    try:
        return ConfigFormat(tag)
    except ValueError:
        raise UnsupportedFormatError(str(tag), kind) from None


def parse_config(text: str, fmt: ConfigFormat | str) -> list[ConfigProperty]:
    """Parse *text* in the given config format."""
    return _PARSERS[as_config_format(fmt, kind="source format")](text)


def generate_config(properties: list[ConfigProperty], fmt: ConfigFormat | str) -> str:
    """Render *properties* in the given config format."""
    return _GENERATORS[as_config_format(fmt, kind="target format")](properties)


def convert_config(text: str, source: ConfigFormat | str, target: ConfigFormat | str) -> str:
    """Convert config text from *source* format to *target* format.

    Both tags are validated before any parsing happens.

    Raises:
        UnsupportedFormatError: If either tag is not ``properties`` or ``yaml``.
        KeyCollisionError: If YAML output is requested for keys that clash.
    """
    source_fmt = as_config_format(source, kind="source format")
    target_fmt = as_config_format(target, kind="target format")
    return generate_config(parse_config(text, source_fmt), target_fmt)

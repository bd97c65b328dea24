"""Conversion errors raised by the domain layer.

Malformed input lines are never errors: parsers skip them. Only a bad
format tag or a structurally impossible key set raises.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base class for all conversion failures."""


class UnsupportedFormatError(ConversionError):
    """A dispatcher received a format tag outside its closed set."""

    def __init__(self, tag: str, kind: str = "format") -> None:
        self.tag = tag
        self.kind = kind
        super().__init__(f"Unsupported {kind}: {tag}")


class KeyCollisionError(ConversionError):
    """A dotted key is used both as a leaf and as a parent of other keys."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Key '{key}' is used both as a value and as a parent section")

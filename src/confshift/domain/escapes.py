"""String escaping and quoting helpers shared by the parsers and generators.

Pure functions. Substitutions are textual and run in a fixed order, so
the order of each table below is part of the contract.
"""

from __future__ import annotations

import re

# Applied in order when reading a properties value. The backslash pair
# comes last, so a literal backslash must be doubled in the source.
_PROPERTIES_UNESCAPES: tuple[tuple[str, str], ...] = (
    ("\\n", "\n"),
    ("\\t", "\t"),
    ("\\r", "\r"),
    ("\\f", "\f"),
    ("\\\\", "\\"),
)

# Applied in order when writing a properties value. Backslash goes first
# so the escape sequences inserted afterwards are not doubled again.
_PROPERTIES_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\", "\\\\"),
    ("\n", "\\n"),
    ("\t", "\\t"),
    ("\r", "\\r"),
    ("\f", "\\f"),
)

_YAML_PLAIN = re.compile(r"^[A-Za-z0-9 ._-]*$")


def unescape_properties_value(value: str) -> str:
    """Resolve ``\\n``, ``\\t``, ``\\r``, ``\\f`` and ``\\\\`` escapes."""
    for escaped, plain in _PROPERTIES_UNESCAPES:
        value = value.replace(escaped, plain)
    return value


def escape_properties_value(value: str) -> str:
    """Inverse of :func:`unescape_properties_value`."""
    for plain, escaped in _PROPERTIES_ESCAPES:
        value = value.replace(plain, escaped)
    return value


def double_quote(value: str) -> str:
    """Wrap *value* in double quotes, escaping inner ``"`` as ``\\"``."""
    return '"' + value.replace('"', '\\"') + '"'


def single_quote(value: str) -> str:
    """YAML single-quoted scalar: inner ``'`` doubled, nothing else escaped."""
    return "'" + value.replace("'", "''") + "'"


def strip_matching_quotes(value: str) -> str:
    """Remove one layer of matching ``"…"`` or ``'…'`` quoting, if present.

    No escape processing is done on the inner text.
    """
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def unquote_env_value(raw: str) -> str:
    """Trim *raw* and strip one layer of matching quotes.

    Inside double quotes only ``\\"`` is unescaped; inside single quotes
    only ``\\'``. Unquoted values are returned trimmed and untouched.
    """
    s = raw.strip()
    if len(s) >= 2 and s[0] == s[-1] == '"':
        return s[1:-1].replace('\\"', '"')
    if len(s) >= 2 and s[0] == s[-1] == "'":
        return s[1:-1].replace("\\'", "'")
    return s


def needs_yaml_quotes(value: str) -> bool:
    """Whether a YAML scalar must be double-quoted.

    True when the value has any character outside ``[A-Za-z0-9 ._-]``.
    Empty values and values with leading or trailing spaces are quoted
    too, otherwise they would not read back as the same leaf.
    """
    if not value or value != value.strip():
        return True
    return _YAML_PLAIN.match(value) is None

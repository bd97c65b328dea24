"""Environment-variable lists: IntelliJ IDEA, ``.env`` and shell ``export``.

Three dialects share one parser with small per-format rules:

* ``idea``: ``KEY=value`` lines (or ``;``-separated), values verbatim.
* ``dotenv``: ``KEY=value`` with optional quoting and ``#`` comments.
* ``linux``: ``export KEY="value"``, possibly several on one line.
"""

from __future__ import annotations

import logging
import re

from confshift.domain.errors import UnsupportedFormatError
from confshift.domain.escapes import double_quote, unquote_env_value
from confshift.domain.models import EnvPair
from confshift.domain.types import EnvFormat

logger = logging.getLogger(__name__)

_SEGMENT_SPLIT = re.compile(r"\r?\n|;")
_EXPORT_PREFIX = re.compile(r"^export\s+")
_DOTENV_NEEDS_QUOTES = re.compile(r"[\s#;\"']")


def as_env_format(tag: str, *, kind: str = "env format") -> EnvFormat:
    """Coerce *tag* to an EnvFormat or raise UnsupportedFormatError."""
    try:
        return EnvFormat(tag)
    except ValueError:
        raise UnsupportedFormatError(str(tag), kind) from None


def split_quoted(line: str) -> list[str]:
    """Split *line* on spaces that sit outside single or double quotes.

    A ``"`` toggles double-quote mode only outside single quotes, and a
    ``'`` toggles single-quote mode only outside double quotes. Quote
    characters are kept in the tokens.

    Examples:
        >>> split_quoted('export A="x y" B=1')
        ['export', 'A="x y"', 'B=1']
    """
    parts: list[str] = []
    current: list[str] = []
    in_single = in_double = False
    for ch in line:
        if ch == '"' and not in_single:
            in_double = not in_double
        elif ch == "'" and not in_double:
            in_single = not in_single
        if ch == " " and not in_single and not in_double:
            token = "".join(current).strip()
            if token:
                parts.append(token)
            current = []
        else:
            current.append(ch)
    token = "".join(current).strip()
    if token:
        parts.append(token)
    return parts


def tokenize(text: str, fmt: EnvFormat) -> list[str]:
    """Break env text into candidate ``KEY=value`` tokens.

    Segments are separated by newlines and ``;``. Blank segments and
    ``#`` comment lines are dropped. For ``linux`` only, a segment holding
    both ``=`` and a space is further split with :func:`split_quoted`.
    """
    tokens: list[str] = []
    for segment in _SEGMENT_SPLIT.split(text):
        line = segment.strip()
        if not line or line.startswith("#"):
            continue
        if fmt is EnvFormat.LINUX and "=" in line and " " in line:
            tokens.extend(split_quoted(line))
        else:
            tokens.append(line)
    return tokens


def parse_to_pairs(text: str, fmt: EnvFormat | str) -> list[EnvPair]:
    """Parse env text in the given dialect into ordered EnvPair entries.

    Tokens without ``=`` or with an empty key are dropped.
    """
    env_format = as_env_format(fmt, kind="source format")
    pairs: list[EnvPair] = []
    for token in tokenize(text, env_format):
        cleaned = _EXPORT_PREFIX.sub("", token, count=1)
        key, sep, value = cleaned.partition("=")
        key = key.strip()
        if not sep or not key:
            logger.debug("Skipping env token without assignment: %r", token)
            continue
        if env_format is EnvFormat.DOTENV:
            trimmed = value.strip()
            # Inline comments are only recognised on unquoted values.
            if not trimmed.startswith(('"', "'")) and "#" in trimmed:
                value = trimmed[: trimmed.index("#")]
        pairs.append(EnvPair(key=key, value=unquote_env_value(value)))
    return pairs


def _dotenv_value(value: str) -> str:
    if value == "":
        return '""'
    if _DOTENV_NEEDS_QUOTES.search(value):
        return double_quote(value)
    return value


def generate_from_pairs(pairs: list[EnvPair], fmt: EnvFormat | str) -> str:
    """Render env pairs in the given dialect, one assignment per line."""
    env_format = as_env_format(fmt, kind="target format")
    if env_format is EnvFormat.IDEA:
        lines = [f"{p.key}={p.value}" for p in pairs]
    elif env_format is EnvFormat.DOTENV:
        lines = [f"{p.key}={_dotenv_value(p.value)}" for p in pairs]
    else:
        lines = [f"export {p.key}={double_quote(p.value)}" for p in pairs]
    return "\n".join(lines)


def convert(text: str, source: EnvFormat | str, target: EnvFormat | str) -> str:
    """Convert env text from one dialect to another."""
    target_format = as_env_format(target, kind="target format")
    return generate_from_pairs(parse_to_pairs(text, source), target_format)

"""Java-style ``.properties`` parsing and generation.

Pure functions, no infrastructure dependencies. The parser is line
oriented and never raises: lines it cannot classify are skipped.
"""

from __future__ import annotations

import logging
import re

from confshift.domain.escapes import escape_properties_value, unescape_properties_value
from confshift.domain.models import ConfigProperty

logger = logging.getLogger(__name__)

LINE_SPLIT = re.compile(r"\r?\n")
_TRAILING_BACKSLASHES = re.compile(r"\\+$")


def is_continued(line: str) -> bool:
    """Whether *line* ends in an unescaped backslash.

    An odd run of trailing backslashes means the last one is a line
    continuation; an even run is a sequence of escaped backslashes.
    """
    match = _TRAILING_BACKSLASHES.search(line)
    return match is not None and len(match.group(0)) % 2 == 1


def parse_properties(text: str) -> list[ConfigProperty]:
    """Parse properties text into an ordered list of ConfigProperty.

    Handles ``#``/``!`` comments, ``key=value`` lines and values
    continued over several physical lines with a trailing backslash.
    Continuation fragments are joined with no separator, then the whole
    value is unescaped once.
    """
    properties: list[ConfigProperty] = []
    current_key: str | None = None
    fragments: list[str] = []
    continuation = False

    def flush() -> None:
        if current_key is not None:
            value = unescape_properties_value("".join(fragments))
            properties.append(ConfigProperty(key=current_key, value=value))

    for lineno, raw in enumerate(LINE_SPLIT.split(text), start=1):
        line = raw.lstrip()
        stripped = line.strip()

        if not stripped:
            # A blank line terminates a dangling continuation.
            continuation = False
            continue
        if stripped.startswith(("#", "!")):
            continue

        if continuation:
            if is_continued(line):
                fragments.append(line[:-1])
            else:
                fragments.append(line)
                continuation = False
            continue

        if "=" not in line:
            if is_continued(line) and current_key is not None:
                fragments.append(line[:-1])
                continuation = True
            else:
                logger.debug("Skipping malformed properties line %d: %r", lineno, stripped)
            continue

        flush()
        key, _, value = line.partition("=")
        current_key = key.strip()
        if is_continued(value):
            fragments = [value[:-1]]
            continuation = True
        else:
            fragments = [value]

    flush()
    return properties


def generate_properties(properties: list[ConfigProperty]) -> str:
    """Render properties as ``key=value`` lines with values escaped."""
    return "\n".join(f"{prop.key}={escape_properties_value(prop.value)}" for prop in properties)

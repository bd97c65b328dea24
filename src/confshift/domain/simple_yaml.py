"""Simplified YAML: nested ``key: value`` mappings flattened to dotted keys.

Only the subset written by hand in Spring-style config files is
understood: nested mappings with scalar leaves. Lists, anchors, flow
collections, block scalars and multiple documents are not supported;
such lines are skipped rather than rejected.

Generation goes through an explicit ordered tree (:class:`YamlNode`),
so a key that would be both a leaf and a section fails fast with
:class:`~confshift.domain.errors.KeyCollisionError`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from confshift.domain.errors import KeyCollisionError
from confshift.domain.escapes import double_quote, needs_yaml_quotes, strip_matching_quotes
from confshift.domain.models import ConfigProperty
from confshift.domain.properties import LINE_SPLIT

logger = logging.getLogger(__name__)

INDENT = "  "


@dataclass
class YamlNode:
    """A mapping node. Children are nested nodes or scalar leaf values.

    Insertion order of ``children`` is the output order.
    """

    children: dict[str, YamlNode | str] = field(default_factory=dict)

    def insert(self, key: str, value: str) -> None:
        """Place *value* at dotted *key*, creating sections on the way."""
        *parents, leaf = key.split(".")
        node = self
        for depth, segment in enumerate(parents, start=1):
            child = node.children.get(segment)
            if child is None:
                child = YamlNode()
                node.children[segment] = child
            elif isinstance(child, str):
                raise KeyCollisionError(".".join(parents[:depth]))
            node = child
        if isinstance(node.children.get(leaf), YamlNode):
            raise KeyCollisionError(key)
        node.children[leaf] = value


def build_tree(properties: list[ConfigProperty]) -> YamlNode:
    """Fold flat properties into a YamlNode tree, first-seen order kept."""
    root = YamlNode()
    for prop in properties:
        root.insert(prop.key, prop.value)
    return root


def format_scalar(value: str) -> str:
    """Render a leaf value, double-quoting it when needed."""
    return double_quote(value) if needs_yaml_quotes(value) else value


def _render(
    node: YamlNode, depth: int, lines: list[str], scalar: Callable[[str], str]
) -> None:
    prefix = INDENT * depth
    for key, child in node.children.items():
        if isinstance(child, YamlNode):
            lines.append(f"{prefix}{key}:")
            _render(child, depth + 1, lines, scalar)
        else:
            lines.append(f"{prefix}{key}: {scalar(child)}")


def generate_yaml(
    properties: list[ConfigProperty],
    *,
    scalar: Callable[[str], str] = format_scalar,
) -> str:
    """Render flat dotted properties as nested YAML with 2-space indents.

    *scalar* formats each leaf value; the default is :func:`format_scalar`.
    """
    lines: list[str] = []
    _render(build_tree(properties), 0, lines, scalar)
    return "\n".join(lines)


def parse_yaml(text: str) -> list[ConfigProperty]:
    """Flatten a simplified YAML document into dotted ConfigProperty entries.

    Nesting is tracked with a stack of ``(indent, key)`` frames: each line
    closes every open section indented at or beyond its own column. Any
    consistent space indentation works; strict 2-space documents nest
    exactly one level per two spaces. Lines indented with tabs are
    skipped.
    """
    properties: list[ConfigProperty] = []
    stack: list[tuple[int, str]] = []

    for lineno, raw in enumerate(LINE_SPLIT.split(text), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith("#"):
            continue

        leading = raw[: len(raw) - len(raw.lstrip())]
        if "\t" in leading:
            logger.debug("Skipping tab-indented YAML line %d", lineno)
            continue
        indent = len(leading)
        while stack and stack[-1][0] >= indent:
            stack.pop()

        if stripped == "-" or stripped.startswith("- "):
            logger.debug("Skipping YAML list item on line %d", lineno)
            continue

        key, sep, rest = stripped.partition(":")
        if not sep:
            logger.debug("Skipping YAML line %d without a key: %r", lineno, stripped)
            continue
        key = key.strip()
        value = rest.strip()

        if value:
            path = [frame_key for _, frame_key in stack]
            path.append(key)
            properties.append(
                ConfigProperty(key=".".join(path), value=strip_matching_quotes(value))
            )
        else:
            stack.append((indent, key))

    return properties

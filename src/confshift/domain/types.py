"""Format tags and the source/target sets the CLI can select from.

The three conversion domains each have a closed set of tags. The
presentation layer combines them into one set of selectable sources
and one set of selectable targets.
"""

from __future__ import annotations

from enum import StrEnum


class ConfigFormat(StrEnum):
    """Hierarchical configuration file formats."""

    PROPERTIES = "properties"
    YAML = "yaml"


class EnvFormat(StrEnum):
    """Environment-variable list dialects."""

    IDEA = "idea"
    DOTENV = "dotenv"
    LINUX = "linux"


class SpringOutput(StrEnum):
    """Spring Boot renderings of an extracted Compose service config."""

    YAML = "spring-yaml"
    PROPERTIES = "spring-properties"
    ENV = "spring-env"


COMPOSE_SOURCE = "compose"

SOURCE_FORMATS: tuple[str, ...] = (
    *(f.value for f in EnvFormat),
    COMPOSE_SOURCE,
    *(f.value for f in ConfigFormat),
)

TARGET_FORMATS: tuple[str, ...] = (
    *(f.value for f in EnvFormat),
    *(f.value for f in SpringOutput),
    *(f.value for f in ConfigFormat),
)

"""Value models shared by the parsers and generators.

Key/value pairs are plain frozen dataclasses; the Spring service config
uses frozen Pydantic models so the service layer can serialise it
directly into a ServiceResult payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel


@dataclass(frozen=True)
class ConfigProperty:
    """A flattened configuration entry."""

    key: str  # dot-delimited path, e.g. "spring.datasource.url"
    value: str  # logical value, already unescaped/unquoted


@dataclass(frozen=True)
class EnvPair:
    """A single environment variable assignment."""

    key: str
    value: str


@dataclass(frozen=True)
class PortMapping:
    """A Compose ``ports:`` entry reduced to its host and container ports."""

    host: int
    container: int


@dataclass(frozen=True)
class DetectedService:
    """Raw result of scanning one MySQL or Redis ``image:`` block."""

    kind: Literal["mysql", "redis"]
    line: int  # zero-based index of the image: line
    environment: dict[str, str] = field(default_factory=dict)
    ports: list[PortMapping] = field(default_factory=list)


# --- Spring service config ---


class MysqlConfig(BaseModel):
    """Connection parameters for a MySQL datasource."""

    model_config = {"frozen": True}

    host: str = "localhost"
    port: int = 3306
    database: str | None = None
    username: str | None = None
    password: str | None = None
    timezone: str | None = None


class RedisConfig(BaseModel):
    """Connection parameters for a Redis client."""

    model_config = {"frozen": True}

    host: str = "localhost"
    port: int = 6379
    password: str | None = None


class SpringServiceConfig(BaseModel):
    """Services extracted from a Compose document. Either may be absent."""

    model_config = {"frozen": True}

    mysql: MysqlConfig | None = None
    redis: RedisConfig | None = None

"""Shared pytest fixtures for confshift tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

COMPOSE_SNIPPET = """
    user-mysql:
      image: mysql:latest
      container_name: user-mysql
      volumes:
        - ./data/mysql/mysql_user_data:/var/lib/mysql
        - ./etc/sql/init.sql:/docker-entrypoint-initdb.d/startup.sql
      ports:
        - "33306:3306"
      environment:
        - TZ=Asia/Shanghai
        - MYSQL_ROOT_PASSWORD=J7*jJ9$2mKpL*5n
        - MYSQL_USER=yukino
        - MYSQL_DATABASE=user
        - MYSQL_PASSWORD=J7*jJ9$2mKpL*5n
      restart: unless-stopped

    user-redis:
      image: redis:7.2-alpine
      container_name: user-redis
      ports:
        - "6379:6379"
      environment:
        - TZ=Asia/Shanghai
      volumes:
        - redis_data:/data
        - ./etc/redis/redis.conf:/usr/local/etc/redis/redis.conf:ro
      command: ["redis-server", "/usr/local/etc/redis/redis.conf"]
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def compose_snippet() -> str:
    """A two-service Compose excerpt with MySQL and Redis."""
    return COMPOSE_SNIPPET


@pytest.fixture
def state_file(tmp_path: Path) -> Path:
    """Location of the preferences file used by the isolated CLI."""
    return tmp_path / "state" / "preferences.yml"


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, state_file: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test away from the real home directory and config files.

    The working directory moves to a temp dir so config discovery finds
    nothing, and the preferences file is redirected into it.
    """
    for var in ("CONFSHIFT_CONFIG", "CONFSHIFT_COMPOSE__HOST"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("CONFSHIFT_PREFERENCES__STATE_FILE", str(state_file))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo the handler each CLI invocation installs on the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)

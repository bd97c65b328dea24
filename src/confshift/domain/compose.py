"""Docker Compose → Spring Boot datasource/redis configuration.

This is not a Compose parser. Lines are classified with a handful of
named predicates; every ``image:`` line naming MySQL or Redis starts an
isolated forward scan that collects that service's ``environment:``
and ``ports:`` blocks. The scan for one service never sees another
service's state.

When a document declares several services of the same kind, the last
one scanned wins. :func:`scan_services` still returns every detection
so callers can report the duplicates.
"""

from __future__ import annotations

import logging
import re
from typing import Literal
from urllib.parse import quote

from confshift.domain.env_convert import generate_from_pairs
from confshift.domain.errors import UnsupportedFormatError
from confshift.domain.escapes import needs_yaml_quotes, single_quote, strip_matching_quotes
from confshift.domain.models import (
    ConfigProperty,
    DetectedService,
    EnvPair,
    MysqlConfig,
    PortMapping,
    RedisConfig,
    SpringServiceConfig,
)
from confshift.domain.properties import LINE_SPLIT, generate_properties
from confshift.domain.simple_yaml import generate_yaml
from confshift.domain.types import EnvFormat, SpringOutput

logger = logging.getLogger(__name__)

MYSQL_PORT = 3306
REDIS_PORT = 6379
MYSQL_DRIVER = "com.mysql.cj.jdbc.Driver"
DEFAULT_HOST = "localhost"

# Extra characters kept literal in URL query components, on top of
# the ones urllib already keeps (letters, digits, "_.-~").
_URI_COMPONENT_SAFE = "!*'()"

# An optional registry/namespace path may precede the image name.
_MYSQL_IMAGE = re.compile(r"image:\s*[\"']?(?:[\w.\-]+/)*mysql\b", re.IGNORECASE)
_REDIS_IMAGE = re.compile(r"image:\s*[\"']?(?:[\w.\-]+/)*redis\b", re.IGNORECASE)
_IMAGE_LINE = re.compile(r"^image:", re.IGNORECASE)
_ENVIRONMENT_HEADER = re.compile(r"^environment:", re.IGNORECASE)
_PORTS_HEADER = re.compile(r"^ports:", re.IGNORECASE)
_LIST_MARKER = re.compile(r"^-\s*")

# ── Line predicates ───────────────────────────────────────────────────


def is_image_line(line: str) -> bool:
    """``image: ...``, the start of a service image declaration."""
    return _IMAGE_LINE.match(line.strip()) is not None


def is_mysql_image(line: str) -> bool:
    """An ``image:`` line naming a MySQL image (any tag or registry path)."""
    return _MYSQL_IMAGE.search(line.strip()) is not None


def is_redis_image(line: str) -> bool:
    """An ``image:`` line naming a Redis image (any tag or registry path)."""
    return _REDIS_IMAGE.search(line.strip()) is not None


def is_environment_header(line: str) -> bool:
    return _ENVIRONMENT_HEADER.match(line.strip()) is not None


def is_ports_header(line: str) -> bool:
    return _PORTS_HEADER.match(line.strip()) is not None


def is_list_item(line: str) -> bool:
    return line.strip().startswith("-")


def is_comment(line: str) -> bool:
    return line.strip().startswith("#")


# ── Block readers ─────────────────────────────────────────────────────


def _indent_of(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def block_lines(lines: list[str], header_index: int) -> list[str]:
    """Return the stripped content lines nested under a ``key:`` header.

    A line belongs to the block when it is indented deeper than the
    header, or is a ``-`` list item at the header's own column (both are
    valid YAML). Blank and comment lines are passed over.
    """
    header_indent = _indent_of(lines[header_index])
    content: list[str] = []
    for raw in lines[header_index + 1 :]:
        stripped = raw.strip()
        if not stripped or is_comment(stripped):
            continue
        indent = _indent_of(raw)
        if indent > header_indent or (indent == header_indent and is_list_item(stripped)):
            content.append(stripped)
        else:
            break
    return content


def parse_environment_block(lines: list[str], header_index: int) -> dict[str, str]:
    """Read ``- KEY=value`` list items or ``KEY: value`` mapping entries."""
    env: dict[str, str] = {}
    for item in block_lines(lines, header_index):
        if is_list_item(item):
            entry = strip_matching_quotes(_LIST_MARKER.sub("", item, count=1))
            key, sep, value = entry.partition("=")
        else:
            key, sep, value = item.partition(":")
        key = key.strip()
        if not sep or not key:
            continue
        env[key] = strip_matching_quotes(value.strip())
    return env


def parse_port(item: str) -> PortMapping | None:
    """Parse a short-syntax port entry such as ``"33306:3306"``.

    An IP prefix (``127.0.0.1:33306:3306``) and a protocol suffix
    (``3306/tcp``) are tolerated. Entries without a host side, port
    ranges and anything non-numeric return ``None``.
    """
    token = _LIST_MARKER.sub("", item.strip(), count=1).replace('"', "").replace("'", "")
    parts = token.split(":")
    if len(parts) < 2:
        return None
    try:
        host = int(parts[-2])
        container = int(parts[-1].split("/", 1)[0])
    except ValueError:
        return None
    return PortMapping(host=host, container=container)


def parse_ports_block(lines: list[str], header_index: int) -> list[PortMapping]:
    """Read the ``- "host:container"`` items under a ``ports:`` header."""
    ports: list[PortMapping] = []
    for item in block_lines(lines, header_index):
        if not is_list_item(item):
            continue
        mapping = parse_port(item)
        if mapping is None:
            logger.debug("Skipping unparsable port mapping: %r", item)
            continue
        ports.append(mapping)
    return ports


# ── Scanning ──────────────────────────────────────────────────────────


def scan_service_block(
    lines: list[str], start: int, kind: Literal["mysql", "redis"]
) -> DetectedService:
    """Collect environment and ports for the service whose image is at *start*.

    Scans forward until the next ``image:`` line, a line indented less
    than the image line (the end of this service), or end of input.
    Every ``environment:`` block is merged; the first ``ports:`` block
    is used.
    """
    image_indent = _indent_of(lines[start])
    environment: dict[str, str] = {}
    ports: list[PortMapping] | None = None

    for j in range(start + 1, len(lines)):
        raw = lines[j]
        stripped = raw.strip()
        if not stripped or is_comment(stripped):
            continue
        if is_image_line(stripped) or _indent_of(raw) < image_indent:
            break
        if is_environment_header(stripped):
            environment.update(parse_environment_block(lines, j))
        elif is_ports_header(stripped) and ports is None:
            ports = parse_ports_block(lines, j)

    return DetectedService(
        kind=kind,
        line=start,
        environment=environment,
        ports=ports or [],
    )


def scan_services(text: str) -> list[DetectedService]:
    """Find every MySQL and Redis service in a Compose document, in order."""
    lines = LINE_SPLIT.split(text)
    detected: list[DetectedService] = []
    for i, raw in enumerate(lines):
        if is_comment(raw):
            continue
        if is_mysql_image(raw):
            detected.append(scan_service_block(lines, i, "mysql"))
        elif is_redis_image(raw):
            detected.append(scan_service_block(lines, i, "redis"))
    return detected


def select_host_port(ports: list[PortMapping], container: int, default: int) -> int:
    """Host port mapped to *container*, else the first mapping, else *default*."""
    for mapping in ports:
        if mapping.container == container:
            return mapping.host
    if ports:
        return ports[0].host
    return default


def mysql_config_from(service: DetectedService, host: str = DEFAULT_HOST) -> MysqlConfig:
    env = service.environment
    return MysqlConfig(
        host=host,
        port=select_host_port(service.ports, MYSQL_PORT, MYSQL_PORT),
        database=env.get("MYSQL_DATABASE"),
        username=env.get("MYSQL_USER", "root"),
        password=env.get("MYSQL_PASSWORD", env.get("MYSQL_ROOT_PASSWORD")),
        timezone=env.get("TZ"),
    )


def redis_config_from(service: DetectedService, host: str = DEFAULT_HOST) -> RedisConfig:
    return RedisConfig(
        host=host,
        port=select_host_port(service.ports, REDIS_PORT, REDIS_PORT),
        password=service.environment.get("REDIS_PASSWORD"),
    )


def parse_compose_to_service_config(text: str, *, host: str = DEFAULT_HOST) -> SpringServiceConfig:
    """Extract MySQL and Redis connection settings from Compose text.

    Each service kind is resolved independently; the last detection of
    a kind replaces earlier ones.
    """
    mysql: MysqlConfig | None = None
    redis: RedisConfig | None = None
    for service in scan_services(text):
        if service.kind == "mysql":
            mysql = mysql_config_from(service, host)
        else:
            redis = redis_config_from(service, host)
    return SpringServiceConfig(mysql=mysql, redis=redis)


# ── Spring generators ─────────────────────────────────────────────────


def build_jdbc_url(cfg: MysqlConfig) -> str:
    """``jdbc:mysql://host:port/db?[serverTimezone=..&]useSSL=false``."""
    base = f"jdbc:mysql://{cfg.host}:{cfg.port}/{cfg.database or ''}"
    params: list[str] = []
    if cfg.timezone:
        params.append(f"serverTimezone={quote(cfg.timezone, safe=_URI_COMPONENT_SAFE)}")
    params.append("useSSL=false")
    return f"{base}?{'&'.join(params)}"


def spring_properties(config: SpringServiceConfig) -> list[ConfigProperty]:
    """Spring Boot property set for the services present, MySQL first."""
    props: list[ConfigProperty] = []
    if config.mysql:
        mysql = config.mysql
        props.append(ConfigProperty("spring.datasource.driver-class-name", MYSQL_DRIVER))
        props.append(ConfigProperty("spring.datasource.url", build_jdbc_url(mysql)))
        if mysql.username:
            props.append(ConfigProperty("spring.datasource.username", mysql.username))
        if mysql.password:
            props.append(ConfigProperty("spring.datasource.password", mysql.password))
    if config.redis:
        redis = config.redis
        props.append(ConfigProperty("spring.data.redis.host", redis.host))
        props.append(ConfigProperty("spring.data.redis.port", str(redis.port)))
        if redis.password:
            props.append(ConfigProperty("spring.data.redis.password", redis.password))
    return props


def to_env_name(key: str) -> str:
    """Spring relaxed-binding env name: ``spring.data.redis.host`` → ``SPRING_DATA_REDIS_HOST``."""
    return key.upper().replace(".", "_").replace("-", "_")


def spring_yaml_scalar(value: str) -> str:
    """Leaf value for Spring YAML; single-quoted so backslashes stay literal."""
    return single_quote(value) if needs_yaml_quotes(value) else value


def to_spring_yaml(config: SpringServiceConfig) -> str:
    return generate_yaml(spring_properties(config), scalar=spring_yaml_scalar)


def to_spring_properties(config: SpringServiceConfig) -> str:
    return generate_properties(spring_properties(config))


def to_spring_env(config: SpringServiceConfig) -> str:
    pairs = [EnvPair(to_env_name(p.key), p.value) for p in spring_properties(config)]
    return generate_from_pairs(pairs, EnvFormat.IDEA)


_SPRING_GENERATORS = {
    SpringOutput.YAML: to_spring_yaml,
    SpringOutput.PROPERTIES: to_spring_properties,
    SpringOutput.ENV: to_spring_env,
}


def as_spring_output(tag: str) -> SpringOutput:
    """Coerce *tag* to a SpringOutput or raise UnsupportedFormatError."""
    try:
        return SpringOutput(tag)
    except ValueError:
        raise UnsupportedFormatError(str(tag), "Spring output") from None


def compose_to_spring(
    text: str, out: SpringOutput | str, *, host: str = DEFAULT_HOST
) -> str:
    """Extract services from Compose *text* and render them as *out*."""
    generator = _SPRING_GENERATORS[as_spring_output(out)]
    return generator(parse_compose_to_service_config(text, host=host))

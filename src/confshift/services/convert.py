"""ConvertService: runs the domain converters and reports ServiceResults.

Also routes a free source/target pair (as selected in the preferences)
to the one conversion domain that can handle it.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable

import structlog

from confshift.domain.compose import (
    DEFAULT_HOST,
    compose_to_spring,
    parse_compose_to_service_config,
    scan_services,
)
from confshift.domain.config_convert import convert_config
from confshift.domain.env_convert import convert as convert_env
from confshift.domain.errors import KeyCollisionError, UnsupportedFormatError
from confshift.domain.types import (
    COMPOSE_SOURCE,
    SOURCE_FORMATS,
    TARGET_FORMATS,
    ConfigFormat,
    EnvFormat,
    SpringOutput,
)
from confshift.services.result import (
    KEY_COLLISION,
    UNSUPPORTED_FORMAT,
    UNSUPPORTED_PAIR,
    ServiceResult,
    failure,
)

log = structlog.get_logger(__name__)

_ENV = frozenset(f.value for f in EnvFormat)
_CONFIG = frozenset(f.value for f in ConfigFormat)
_SPRING = frozenset(f.value for f in SpringOutput)


def route_pair(source: str, target: str) -> str | None:
    """Name the conversion domain for a source/target pair, or None.

    ``env`` for two env dialects, ``compose`` for Compose to a Spring
    output, ``config`` for properties/yaml.
    """
    if source in _ENV and target in _ENV:
        return "env"
    if source == COMPOSE_SOURCE and target in _SPRING:
        return "compose"
    if source in _CONFIG and target in _CONFIG:
        return "config"
    return None


class ConvertService:
    """Stateless wrapper turning domain conversions into ServiceResults.

    Args:
        compose_host: Host written into generated Spring connection settings.
    """

    def __init__(self, *, compose_host: str = DEFAULT_HOST) -> None:
        self._compose_host = compose_host

    @staticmethod
    def _run(
        op: str,
        func: Callable[[], str],
        *,
        source: str,
        target: str,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        try:
            output = func()
        except UnsupportedFormatError as exc:
            return failure(op, UNSUPPORTED_FORMAT, str(exc), tag=exc.tag, kind=exc.kind)
        except KeyCollisionError as exc:
            return failure(op, KEY_COLLISION, str(exc), key=exc.key)

        log.debug(
            "conversion.complete",
            op=op,
            source=source,
            target=target,
            output_lines=output.count("\n") + 1 if output else 0,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={"source": source, "target": target, "output": output},
            warnings=warnings or [],
        )

    def convert_config(self, text: str, source: str, target: str) -> ServiceResult:
        """properties ↔ yaml."""
        return self._run(
            "convert_config",
            lambda: convert_config(text, source, target),
            source=source,
            target=target,
        )

    def convert_env(self, text: str, source: str, target: str) -> ServiceResult:
        """idea / dotenv / linux env lists."""
        return self._run(
            "convert_env",
            lambda: convert_env(text, source, target),
            source=source,
            target=target,
        )

    def compose_to_spring(self, text: str, target: str) -> ServiceResult:
        """Compose MySQL/Redis services → Spring yaml, properties or env."""
        return self._run(
            "compose_to_spring",
            lambda: compose_to_spring(text, target, host=self._compose_host),
            source=COMPOSE_SOURCE,
            target=target,
            warnings=self._compose_warnings(text),
        )

    def inspect_compose(self, text: str) -> ServiceResult:
        """Report the extracted SpringServiceConfig without rendering it."""
        config = parse_compose_to_service_config(text, host=self._compose_host)
        return ServiceResult(
            ok=True,
            op="inspect_compose",
            data={
                "mysql": config.mysql.model_dump() if config.mysql else None,
                "redis": config.redis.model_dump() if config.redis else None,
            },
            warnings=self._compose_warnings(text),
        )

    def convert(self, text: str, source: str, target: str) -> ServiceResult:
        """Convert between any selectable source and target format."""
        op = "convert"
        if source not in SOURCE_FORMATS:
            return failure(
                op, UNSUPPORTED_FORMAT, f"Unsupported source format: {source}", tag=source
            )
        if target not in TARGET_FORMATS:
            return failure(
                op, UNSUPPORTED_FORMAT, f"Unsupported target format: {target}", tag=target
            )

        domain = route_pair(source, target)
        if domain == "env":
            result = self.convert_env(text, source, target)
        elif domain == "compose":
            result = self.compose_to_spring(text, target)
        elif domain == "config":
            result = self.convert_config(text, source, target)
        else:
            return failure(
                op,
                UNSUPPORTED_PAIR,
                f"Cannot convert {source} to {target}",
                source=source,
                target=target,
            )

        if not result.ok:
            return result.model_copy(update={"op": op})
        return result.model_copy(update={"op": op, "data": {**result.data, "domain": domain}})

    @staticmethod
    def _compose_warnings(text: str) -> list[str]:
        services = scan_services(text)
        if not services:
            return ["No MySQL or Redis service found in the Compose input"]

        warnings: list[str] = []
        counts = Counter(s.kind for s in services)
        for kind, count in counts.items():
            if count > 1:
                last = [s for s in services if s.kind == kind][-1]
                warnings.append(
                    f"{count} {kind} services found; using the one at line {last.line + 1}"
                )
        return warnings

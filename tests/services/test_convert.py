"""Tests for ConvertService: domain calls wrapped as ServiceResults."""

from __future__ import annotations

import pytest

from confshift.services.convert import ConvertService, route_pair
from confshift.services.result import KEY_COLLISION, UNSUPPORTED_FORMAT, UNSUPPORTED_PAIR


@pytest.fixture
def service() -> ConvertService:
    return ConvertService()


class TestRoutePair:
    @pytest.mark.parametrize(
        ("source", "target", "domain"),
        [
            ("idea", "linux", "env"),
            ("dotenv", "dotenv", "env"),
            ("compose", "spring-env", "compose"),
            ("yaml", "properties", "config"),
            ("idea", "yaml", None),
            ("compose", "dotenv", None),
            ("properties", "spring-yaml", None),
        ],
    )
    def test_routes(self, source: str, target: str, domain: str | None) -> None:
        assert route_pair(source, target) == domain


class TestConvertConfig:
    def test_success(self, service: ConvertService) -> None:
        result = service.convert_config("a.b=1", "properties", "yaml")
        assert result.ok
        assert result.op == "convert_config"
        assert result.data == {"source": "properties", "target": "yaml", "output": "a:\n  b: 1"}

    def test_unsupported_format(self, service: ConvertService) -> None:
        result = service.convert_config("a=1", "ini", "yaml")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == UNSUPPORTED_FORMAT
        assert result.error.detail == {"tag": "ini", "kind": "source format"}

    def test_key_collision(self, service: ConvertService) -> None:
        result = service.convert_config("a=1\na.b=2", "properties", "yaml")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == KEY_COLLISION
        assert result.error.detail == {"key": "a"}


class TestConvertEnv:
    def test_success(self, service: ConvertService) -> None:
        result = service.convert_env("A=1;B=x y", "idea", "dotenv")
        assert result.ok
        assert result.data["output"] == 'A=1\nB="x y"'

    def test_unsupported_target(self, service: ConvertService) -> None:
        result = service.convert_env("A=1", "idea", "fish")
        assert result.error is not None
        assert result.error.code == UNSUPPORTED_FORMAT
        assert "fish" in result.error.message


class TestComposeToSpring:
    def test_success(self, service: ConvertService, compose_snippet: str) -> None:
        result = service.compose_to_spring(compose_snippet, "spring-properties")
        assert result.ok
        assert result.data["source"] == "compose"
        assert "spring.datasource.url=jdbc:mysql://localhost:33306/user" in result.data["output"]
        assert result.warnings == []

    def test_compose_host(self, compose_snippet: str) -> None:
        result = ConvertService(compose_host="db").compose_to_spring(
            compose_snippet, "spring-properties"
        )
        assert "jdbc:mysql://db:33306/user" in result.data["output"]
        assert "spring.data.redis.host=db" in result.data["output"]

    def test_nothing_found_warns(self, service: ConvertService) -> None:
        result = service.compose_to_spring("web:\n  image: nginx\n", "spring-yaml")
        assert result.ok
        assert result.data["output"] == ""
        assert result.warnings == ["No MySQL or Redis service found in the Compose input"]

    def test_duplicate_services_warn(self, service: ConvertService) -> None:
        text = "a:\n  image: redis\nb:\n  image: redis\n"
        result = service.compose_to_spring(text, "spring-env")
        assert result.warnings == ["2 redis services found; using the one at line 4"]

    def test_unknown_output(self, service: ConvertService) -> None:
        result = service.compose_to_spring("", "spring-xml")
        assert result.error is not None
        assert result.error.code == UNSUPPORTED_FORMAT


class TestInspectCompose:
    def test_reports_models(self, service: ConvertService, compose_snippet: str) -> None:
        result = service.inspect_compose(compose_snippet)
        assert result.ok
        assert result.op == "inspect_compose"
        assert result.data["mysql"]["port"] == 33306
        assert result.data["mysql"]["timezone"] == "Asia/Shanghai"
        assert result.data["redis"] == {"host": "localhost", "port": 6379, "password": None}

    def test_missing_services_are_none(self, service: ConvertService) -> None:
        result = service.inspect_compose("")
        assert result.data == {"mysql": None, "redis": None}
        assert len(result.warnings) == 1


class TestConvertDispatch:
    def test_env_pair(self, service: ConvertService) -> None:
        result = service.convert("export A=1", "linux", "idea")
        assert result.ok
        assert result.op == "convert"
        assert result.data["domain"] == "env"
        assert result.data["output"] == "A=1"

    def test_config_pair(self, service: ConvertService) -> None:
        result = service.convert("a:\n  b: 1", "yaml", "properties")
        assert result.data["domain"] == "config"
        assert result.data["output"] == "a.b=1"

    def test_compose_pair(self, service: ConvertService, compose_snippet: str) -> None:
        result = service.convert(compose_snippet, "compose", "spring-yaml")
        assert result.data["domain"] == "compose"
        assert result.data["output"].startswith("spring:")

    def test_cross_domain_pair(self, service: ConvertService) -> None:
        result = service.convert("A=1", "idea", "yaml")
        assert not result.ok
        assert result.op == "convert"
        assert result.error is not None
        assert result.error.code == UNSUPPORTED_PAIR
        assert result.error.detail == {"source": "idea", "target": "yaml"}

    def test_unknown_source(self, service: ConvertService) -> None:
        result = service.convert("", "spring-env", "idea")
        assert result.error is not None
        assert result.error.code == UNSUPPORTED_FORMAT
        assert result.error.detail == {"tag": "spring-env"}

    def test_unknown_target(self, service: ConvertService) -> None:
        result = service.convert("", "idea", "compose")
        assert result.error is not None
        assert result.error.code == UNSUPPORTED_FORMAT

    def test_domain_error_is_relabelled(self, service: ConvertService) -> None:
        result = service.convert("a=1\na.b=2", "properties", "yaml")
        assert result.op == "convert"
        assert result.error is not None
        assert result.error.code == KEY_COLLISION

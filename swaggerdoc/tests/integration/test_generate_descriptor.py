from pathlib import Path

import pytest
from pydantic import BaseModel
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.routing import Route

from swaggerdoc import PydanticSchemaRegistry, SwaggerConfig, generate
from swaggerdoc.docs import sources
from swaggerdoc.utils.errors import ConfigurationError, SourceReadError, UnsupportedSourceError


async def _ok(request):
    return PlainTextResponse("ok")


class Pet(BaseModel):
    name: str


def _config(ui_dir: Path, **overrides) -> SwaggerConfig:
    values = {"swagger_ui": ui_dir, "base_path": "/api", "swagger_json": "/api-docs.json"}
    values.update(overrides)
    return SwaggerConfig(**values)


def test_missing_required_fields_fail_before_reading(monkeypatch, apis_dir: Path) -> None:
    def explode(*args, **kwargs):
        raise AssertionError("no file should be read")

    monkeypatch.setattr("swaggerdoc.generator.read_api", explode)
    with pytest.raises(ConfigurationError):
        generate({"basePath": "/api", "apis": [str(apis_dir / "users.js")]})
    with pytest.raises(ConfigurationError):
        generate({"swaggerUI": "ui", "apis": [str(apis_dir / "users.js")]})


def test_descriptor_metadata(ui_dir: Path) -> None:
    registry = generate(_config(ui_dir, info={"title": "Pets"}, api_version="2.3"))
    assert registry.build() == {
        "swagger": "2.0",
        "basePath": "/api",
        "info": {"title": "Pets", "version": "2.3"},
        "paths": {},
        "definitions": {},
    }


def test_info_version_defaults(ui_dir: Path) -> None:
    info = {"title": "Pets", "version": "9.9"}
    registry = generate(_config(ui_dir, info=info, swagger_version="1.2"))
    assert registry.descriptor["info"] == {"title": "Pets", "version": "1.0"}
    assert registry.descriptor["swagger"] == "1.2"
    assert info["version"] == "9.9"


def test_no_info_means_no_info_key(ui_dir: Path) -> None:
    assert "info" not in generate(_config(ui_dir)).descriptor


def test_empty_info_still_gets_a_version(ui_dir: Path) -> None:
    assert generate(_config(ui_dir, info={})).descriptor["info"] == {"version": "1.0"}
    registry = generate({"swaggerUI": str(ui_dir), "basePath": "/api", "info": {}, "apiVersion": "3"})
    assert registry.descriptor["info"] == {"version": "3"}


def test_descriptor_url_is_computed_from_base_path(ui_dir: Path) -> None:
    config = _config(ui_dir, base_path="http://localhost:3000/api")
    generate(config)
    assert config.full_swagger_json_path == "/api/api-docs.json"


def test_explicit_descriptor_url_is_kept(ui_dir: Path) -> None:
    config = _config(ui_dir, full_swagger_json_path="/swagger.json")
    generate(config)
    assert config.full_swagger_json_path == "/swagger.json"


def test_all_dialects_merge_in_order(ui_dir: Path, apis_dir: Path) -> None:
    compiled = (apis_dir / "orders.compiled.js.txt").read_text(encoding="utf-8")
    registry = generate(
        _config(
            ui_dir,
            apis=[
                apis_dir / "users.js",
                apis_dir / "plain.js",
                apis_dir / "orders.coffee",
                apis_dir / "login.yml",
            ],
            coffee_compiler=lambda _: compiled,
        )
    )
    assert list(registry.paths) == [
        "/users",
        "/users/{id}",
        "/users/{id}/avatar",
        "/orders",
        "/login",
        "/logout",
    ]
    assert registry.paths["/users"]["get"]["summary"] == "List users"
    assert set(registry.paths["/users/{id}"]) == {"get", "delete"}


def test_later_file_overwrites_same_path_and_method(ui_dir: Path, apis_dir: Path) -> None:
    forward = generate(_config(ui_dir, apis=[apis_dir / "users.js", apis_dir / "override.js"]))
    assert forward.paths["/users"]["get"] == {"summary": "List users (v2)"}

    backward = generate(_config(ui_dir, apis=[apis_dir / "override.js", apis_dir / "users.js"]))
    assert backward.paths["/users"]["get"]["summary"] == "List users"


def test_unsupported_extension_stops_later_entries(
    monkeypatch, ui_dir: Path, apis_dir: Path
) -> None:
    config = _config(
        ui_dir,
        apis=[apis_dir / "override.js", apis_dir / "notes.txt", apis_dir / "login.yml"],
    )
    read = []
    real_source_for = sources.source_for

    def recording(path, **kwargs):
        read.append(Path(path).name)
        return real_source_for(path, **kwargs)

    monkeypatch.setattr(sources, "source_for", recording)
    with pytest.raises(UnsupportedSourceError):
        generate(config)
    assert read == ["override.js", "notes.txt"]


def test_read_failure_halts_generation(ui_dir: Path, apis_dir: Path, tmp_path: Path) -> None:
    with pytest.raises(SourceReadError):
        generate(_config(ui_dir, apis=[tmp_path / "gone.js", apis_dir / "login.yml"]))


def test_route_discovery_replaces_fragment_paths(ui_dir: Path, apis_dir: Path) -> None:
    app = Starlette(routes=[Route("/health", _ok), Route("/users/{id}", _ok, methods=["PUT"])])
    registry = generate(_config(ui_dir, app=app, apis=[apis_dir / "override.js"]))
    assert registry.paths["/health"] == {"get": {"responses": {"200": {}}}}
    assert registry.paths["/users/{id}"] == {"put": {"responses": {"200": {}}}}
    # Fragments read after discovery still merge into the discovered map.
    assert registry.paths["/users"] == {"get": {"summary": "List users (v2)"}}


def test_route_discovery_without_apis_has_exactly_the_routes(ui_dir: Path) -> None:
    app = Starlette(routes=[Route("/a/:x/b/:y", _ok, methods=["POST"])])
    registry = generate(_config(ui_dir, app=app))
    assert registry.paths == {"/a/{x}/b/{y}": {"post": {"responses": {"200": {}}}}}


def test_schema_registry_fills_definitions(ui_dir: Path) -> None:
    registry = generate(_config(ui_dir, schemas=PydanticSchemaRegistry([Pet])))
    assert registry.definitions == {"Pet": Pet.model_json_schema()}

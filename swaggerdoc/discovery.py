"""Descriptor content synthesized from a live route table or model registry."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Protocol, Sequence, Type, runtime_checkable

from pydantic import BaseModel
from starlette.routing import Route

from .registry import PathMap
from .utils.paths import convert_path

log = logging.getLogger(__name__)


@runtime_checkable
class SchemaRegistry(Protocol):
    """Anything that can list model names and render each as JSON schema."""

    def model_names(self) -> Iterable[str]:
        ...

    def json_schema(self, name: str) -> Dict[str, Any]:
        ...


class PydanticSchemaRegistry:
    """Expose pydantic models through the :class:`SchemaRegistry` interface."""

    def __init__(self, models: Sequence[Type[BaseModel]] | Mapping[str, Type[BaseModel]]):
        if isinstance(models, Mapping):
            self._models: Dict[str, Type[BaseModel]] = dict(models)
        else:
            self._models = {model.__name__: model for model in models}

    def model_names(self) -> Iterable[str]:
        return list(self._models)

    def json_schema(self, name: str) -> Dict[str, Any]:
        return self._models[name].model_json_schema()


def _minimal_operation() -> Dict[str, Any]:
    return {"responses": {"200": {}}}


def discover_routes(app: Any) -> PathMap:
    """Build a path map from the concrete routes registered on *app*.

    Mounted sub-applications and websocket routes are skipped; routes keep
    their registration order. The implicit ``HEAD`` of a ``GET`` route is
    not reported.
    """

    routes: PathMap = {}
    for entry in getattr(app, "routes", ()):
        if not isinstance(entry, Route):
            continue
        methods = set(entry.methods or ())
        # Starlette adds HEAD to every GET route.
        if "GET" in methods:
            methods.discard("HEAD")
        if not methods:
            continue
        path = convert_path(entry.path)
        operations = routes.setdefault(path, {})
        for method in sorted(methods):
            operations[method.lower()] = _minimal_operation()
    log.info("discovery.routes", extra={"paths": len(routes)})
    return routes


def discover_definitions(registry: Any) -> Dict[str, Any]:
    """Render every model in *registry* through its own schema generator.

    A plain sequence or mapping of pydantic models is wrapped in a
    :class:`PydanticSchemaRegistry` first.
    """

    if not isinstance(registry, SchemaRegistry):
        registry = PydanticSchemaRegistry(registry)

    definitions = {name: registry.json_schema(name) for name in registry.model_names()}
    log.info("discovery.definitions", extra={"definitions": len(definitions)})
    return definitions


__all__ = [
    "PydanticSchemaRegistry",
    "SchemaRegistry",
    "discover_definitions",
    "discover_routes",
]

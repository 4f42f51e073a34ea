"""Build the merged Swagger descriptor from configuration."""
from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import urlsplit

from .config import SwaggerConfig, coerce_config
from .discovery import discover_definitions, discover_routes
from .docs.sources import read_api
from .registry import DescriptorRegistry
from .utils.config import DEFAULT_API_VERSION
from .utils.logging import scoped_timer

log = logging.getLogger(__name__)


def descriptor_url(config: SwaggerConfig) -> str:
    """Return the URL path the descriptor is served under."""

    if config.full_swagger_json_path:
        return config.full_swagger_json_path
    return urlsplit(f"{config.base_path}{config.swagger_json or ''}").path


def _skeleton(config: SwaggerConfig) -> dict[str, Any]:
    descriptor: dict[str, Any] = {
        "swagger": config.swagger_version,
        "basePath": config.base_path,
    }
    if config.info is not None:
        info = dict(config.info)
        info["version"] = config.api_version or DEFAULT_API_VERSION
        descriptor["info"] = info
    return descriptor


def generate(options: SwaggerConfig | Mapping[str, Any] | None) -> DescriptorRegistry:
    """Validate *options*, run discovery, and merge every ``apis`` file in order.

    Any error is raised to the caller; there is no partially built result.
    """

    config = coerce_config(options)
    config.validate()

    registry = DescriptorRegistry(descriptor=_skeleton(config))
    with scoped_timer(log, "generate.duration", extra={"apis": len(config.apis)}):
        log.info("generate.start", extra={"base_path": config.base_path})

        if config.app is not None:
            # Replaces, not merges: fragments read below land in this map.
            registry.replace_paths(discover_routes(config.app))
        if config.schemas is not None:
            registry.replace_definitions(discover_definitions(config.schemas))

        config.full_swagger_json_path = descriptor_url(config)

        for api in config.apis:
            read_api(api, registry, coffee_compiler=config.coffee_compiler)

        log.info(
            "generate.finish",
            extra={
                "paths": len(registry.paths or {}),
                "definitions": len(registry.definitions),
                "descriptor_url": config.full_swagger_json_path,
            },
        )
    return registry


__all__ = ["descriptor_url", "generate"]

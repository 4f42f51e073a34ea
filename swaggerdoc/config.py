"""Configuration accepted by :func:`swaggerdoc.generate` and :func:`swaggerdoc.init`."""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .utils.config import default_swagger_json, default_swagger_version
from .utils.errors import ConfigurationError

# Option names used by the Express flavour of this middleware.
_ALIASES: Dict[str, str] = {
    "swaggerUI": "swagger_ui",
    "basePath": "base_path",
    "swaggerVersion": "swagger_version",
    "apiVersion": "api_version",
    "mongoose": "schemas",
    "swaggerJSON": "swagger_json",
    "fullSwaggerJSONPath": "full_swagger_json_path",
    "swaggerURL": "swagger_url",
    "coffeeCompiler": "coffee_compiler",
}

ResponseHook = Callable[[Any, Any], Any]


@dataclass
class SwaggerConfig:
    swagger_ui: Optional[str | Path] = None
    base_path: Optional[str] = None
    swagger_version: str = field(default_factory=default_swagger_version)
    info: Optional[Mapping[str, Any]] = None
    api_version: Optional[str] = None
    app: Any = None
    schemas: Any = None
    apis: Sequence[str | Path] = ()
    swagger_json: str = field(default_factory=default_swagger_json)
    full_swagger_json_path: Optional[str] = None
    swagger_url: Optional[str] = None
    middleware: Optional[ResponseHook] = None
    coffee_compiler: Optional[Callable[[str], str]] = None

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "SwaggerConfig":
        """Build a config from keyword options, accepting the camelCase names too."""

        known = {item.name for item in fields(cls)}
        values: Dict[str, Any] = {}
        unknown: List[str] = []
        for key, value in options.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                unknown.append(key)
                continue
            values[name] = value
        if unknown:
            raise ConfigurationError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        return cls(**values)

    def validate(self) -> None:
        if not self.swagger_ui:
            raise ConfigurationError("'swaggerUI' is required.")
        if not self.base_path:
            raise ConfigurationError("'basePath' is required.")


def coerce_config(options: SwaggerConfig | Mapping[str, Any] | None) -> SwaggerConfig:
    if options is None:
        raise ConfigurationError("'option' is required.")
    if isinstance(options, SwaggerConfig):
        return options
    return SwaggerConfig.from_mapping(options)


__all__ = ["ResponseHook", "SwaggerConfig", "coerce_config"]

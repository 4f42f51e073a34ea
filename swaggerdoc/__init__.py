"""Swagger descriptor aggregation middleware for Starlette applications."""

from .utils.config import load_env

# Ensure environment defaults from `.env` are available to all modules on import.
load_env()

from .app import build_docs_app, init  # noqa: E402
from .config import SwaggerConfig  # noqa: E402
from .discovery import PydanticSchemaRegistry, SchemaRegistry  # noqa: E402
from .generator import generate  # noqa: E402
from .registry import DescriptorRegistry  # noqa: E402

__all__ = [
    "DescriptorRegistry",
    "PydanticSchemaRegistry",
    "SchemaRegistry",
    "SwaggerConfig",
    "build_docs_app",
    "generate",
    "init",
]

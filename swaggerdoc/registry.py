"""Descriptor state shared between generation and the serving middleware."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

log = logging.getLogger(__name__)

PathMap = Dict[str, Dict[str, Any]]


@dataclass(slots=True)
class DescriptorRegistry:
    """Merged Swagger state for one server instance.

    ``descriptor`` holds the metadata skeleton (``swagger``, ``basePath``,
    ``info``); ``paths`` and ``definitions`` are attached on every build.
    Generation is the only writer, so serving never needs a lock.
    """

    descriptor: Dict[str, Any] = field(default_factory=dict)
    paths: Optional[PathMap] = field(default_factory=dict)
    definitions: Dict[str, Any] = field(default_factory=dict)

    def merge(self, fragment: Mapping[str, Mapping[str, Any]]) -> None:
        """Merge a fragment by path then method; later entries overwrite earlier ones."""

        if self.paths is None:
            self.paths = {}
        for path_name, methods in fragment.items():
            operations = self.paths.setdefault(path_name, {})
            for method, operation in methods.items():
                if method in operations:
                    log.debug("fragment.overwrite", extra={"path": path_name, "method": method})
                operations[method] = operation

    def replace_paths(self, paths: PathMap) -> None:
        self.paths = paths

    def replace_definitions(self, definitions: Dict[str, Any]) -> None:
        self.definitions = definitions

    def build(self) -> Dict[str, Any]:
        """Return a shallow copy of the skeleton with the live path and definition maps."""

        result = dict(self.descriptor)
        result["paths"] = self.paths
        result["definitions"] = self.definitions
        return result


__all__ = ["DescriptorRegistry", "PathMap"]

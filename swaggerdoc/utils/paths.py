"""Route path helpers."""
from __future__ import annotations

import re

_CONVERTOR_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*):[^}]*\}")
_POSITIONAL_RE = re.compile(r":([A-Za-z_][A-Za-z0-9_]*)")


def convert_path(path: str) -> str:
    """Rewrite ``/users/:id`` style parameters as ``/users/{id}``.

    Starlette convertor suffixes are dropped first so ``{id:int}`` becomes
    ``{id}`` instead of being read as a positional parameter.
    """

    path = _CONVERTOR_RE.sub(r"{\1}", path)
    return _POSITIONAL_RE.sub(r"{\1}", path)


__all__ = ["convert_path"]

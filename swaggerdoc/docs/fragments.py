"""Loading of Swagger path fragments from ``@swagger`` tags."""
from __future__ import annotations

import json
import logging
from functools import lru_cache
from importlib import resources
from typing import Any, Dict, Iterable, List, Optional

import yaml
from jsonschema import Draft202012Validator

from ..utils.errors import FragmentError
from .comments import Tag

log = logging.getLogger(__name__)

MARKER_TAG = "swagger"

Fragment = Dict[str, Dict[str, Any]]


class FragmentLoader(yaml.SafeLoader):
    """``SafeLoader`` that keeps timestamps as ISO-8601 strings, so fragments stay JSON-ready."""


def _construct_timestamp(loader: FragmentLoader, node: yaml.Node) -> str:
    return loader.construct_yaml_timestamp(node).isoformat()


FragmentLoader.add_constructor("tag:yaml.org,2002:timestamp", _construct_timestamp)


@lru_cache(maxsize=1)
def _fragment_validator() -> Draft202012Validator:
    with resources.files("swaggerdoc.schemas").joinpath("fragment.v1.json").open(
        "r", encoding="utf-8"
    ) as handle:
        return Draft202012Validator(json.load(handle))


def validate_fragment(document: Any, *, source: str = "<fragment>") -> Fragment:
    """Check that *document* is a ``path -> method -> operation`` map."""

    errors = [error.message for error in _fragment_validator().iter_errors(document)]
    if errors:
        raise FragmentError(f"{source}: {'; '.join(errors)}")
    return document


def parse_fragments(text: str, *, source: str = "<fragment>") -> List[Fragment]:
    """Parse a YAML stream that may hold several fragment documents."""

    try:
        documents = list(yaml.load_all(text, Loader=FragmentLoader))
    except yaml.YAMLError as exc:
        raise FragmentError(f"{source}: {exc}") from exc
    return [validate_fragment(doc, source=source) for doc in documents if doc is not None]


def load_fragments(tags: Iterable[Tag], *, source: str = "<fragment>") -> Optional[List[Fragment]]:
    """Return the fragments of the first ``@swagger`` tag, or ``None`` if there is none."""

    for tag in tags:
        if tag.title == MARKER_TAG:
            fragments = parse_fragments(tag.description, source=source)
            log.debug(
                "fragment.loaded", extra={"source": source, "documents": len(fragments)}
            )
            return fragments
    return None


__all__ = [
    "Fragment",
    "FragmentLoader",
    "MARKER_TAG",
    "load_fragments",
    "parse_fragments",
    "validate_fragment",
]

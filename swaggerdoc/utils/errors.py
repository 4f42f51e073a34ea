"""Error codes, payload helpers, and exceptions for descriptor generation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, MutableMapping, Optional, Sequence


class ErrorCode(str, Enum):
    """Stable error codes for startup failures and the descriptor endpoint."""

    CONFIG_INVALID = "CONFIG_INVALID"
    UNSUPPORTED_SOURCE = "UNSUPPORTED_SOURCE"
    SOURCE_UNREADABLE = "SOURCE_UNREADABLE"
    COMMENT_INVALID = "COMMENT_INVALID"
    FRAGMENT_INVALID = "FRAGMENT_INVALID"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class ErrorTemplate:
    """Default status, message, and recovery hints for an error code."""

    status: int
    message: str
    recovery: Sequence[str] = ()


_TEMPLATES: Mapping[ErrorCode, ErrorTemplate] = {
    ErrorCode.CONFIG_INVALID: ErrorTemplate(
        status=500,
        message="Swagger configuration is missing or invalid.",
        recovery=(
            "Provide at least 'swagger_ui' and 'base_path'.",
        ),
    ),
    ErrorCode.UNSUPPORTED_SOURCE: ErrorTemplate(
        status=500,
        message="API source file has an unsupported extension.",
        recovery=(
            "List only .js, .coffee or .yml files in 'apis'.",
        ),
    ),
    ErrorCode.SOURCE_UNREADABLE: ErrorTemplate(
        status=500,
        message="API source file could not be read.",
        recovery=(
            "Check that every entry in 'apis' exists and is readable.",
        ),
    ),
    ErrorCode.COMMENT_INVALID: ErrorTemplate(
        status=500,
        message="Documentation comment could not be parsed.",
        recovery=(
            "Make sure every block comment is terminated with '*/'.",
        ),
    ),
    ErrorCode.FRAGMENT_INVALID: ErrorTemplate(
        status=500,
        message="Swagger fragment is not valid YAML or not a path map.",
        recovery=(
            "Fragments must map paths to methods to operation objects.",
        ),
    ),
    ErrorCode.NOT_FOUND: ErrorTemplate(
        status=404,
        message="Swagger descriptor is not available.",
        recovery=(
            "Restart the server so the descriptor is generated again.",
        ),
    ),
}


def _resolve_template(code: ErrorCode) -> ErrorTemplate:
    try:
        return _TEMPLATES[code]
    except KeyError:  # pragma: no cover - defensive guard
        raise ValueError(f"No error template registered for {code!s}") from None


def make_error(
    code: ErrorCode,
    message: Optional[str] = None,
    *,
    recovery: Optional[Iterable[str]] = None,
    status: Optional[int] = None,
) -> Dict[str, object]:
    """Create a JSON-serialisable error dict."""

    template = _resolve_template(code)
    resolved_message = message if message is not None else template.message
    resolved_status = status if status is not None else template.status
    resolved_recovery: List[str] = list(recovery) if recovery is not None else list(
        template.recovery
    )
    payload: MutableMapping[str, object] = {
        "status": int(resolved_status),
        "code": code.value,
        "message": resolved_message,
        "recovery": resolved_recovery,
    }
    return dict(payload)


def envelope_error(code: ErrorCode, message: Optional[str] = None) -> Dict[str, object]:
    return {"ok": False, "data": None, "errors": [make_error(code, message)]}


class SwaggerDocError(Exception):
    """Base class for failures raised while building the descriptor."""

    code: ErrorCode = ErrorCode.CONFIG_INVALID

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or _resolve_template(self.code).message)

    def to_dict(self) -> Dict[str, object]:
        return make_error(self.code, str(self))


class ConfigurationError(SwaggerDocError, ValueError):
    code = ErrorCode.CONFIG_INVALID


class UnsupportedSourceError(SwaggerDocError, ValueError):
    """Raised for an ``apis`` entry whose extension has no reader."""

    code = ErrorCode.UNSUPPORTED_SOURCE

    def __init__(self, extension: str):
        super().__init__(f"Unsupported extension '{extension}'")
        self.extension = extension


class SourceReadError(SwaggerDocError, OSError):
    code = ErrorCode.SOURCE_UNREADABLE


class CommentParseError(SwaggerDocError, ValueError):
    code = ErrorCode.COMMENT_INVALID


class FragmentError(SwaggerDocError, ValueError):
    code = ErrorCode.FRAGMENT_INVALID


__all__ = [
    "CommentParseError",
    "ConfigurationError",
    "ErrorCode",
    "ErrorTemplate",
    "FragmentError",
    "SourceReadError",
    "SwaggerDocError",
    "UnsupportedSourceError",
    "envelope_error",
    "make_error",
]

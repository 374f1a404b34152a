"""Error taxonomy for content generation."""

from __future__ import annotations

from enum import Enum


class GenerationError(Exception):
    """Base class for content generation failures."""


class ValidationError(GenerationError, ValueError):
    """Raised when a caller passes a malformed generation request."""


class TransportErrorKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    NETWORK_FAILURE = "network_failure"
    UPSTREAM_SERVER_ERROR = "upstream_server_error"


class TransportError(GenerationError):
    """Raised when the upstream model could not be reached or refused the request."""

    def __init__(self, kind: TransportErrorKind, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class ParseErrorKind(str, Enum):
    NO_CANDIDATES = "no_candidates"
    EMPTY_TEXT = "empty_text"
    INVALID_JSON = "invalid_json"
    SCHEMA_MISMATCH = "schema_mismatch"


class ParseError(GenerationError):
    """Raised when an upstream reply has no usable content."""

    def __init__(self, kind: ParseErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind

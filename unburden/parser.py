"""Extraction and validation of upstream model replies."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from unburden.errors import ParseError, ParseErrorKind

LOGGER = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```[a-zA-Z]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    text: str = Field(min_length=1)

    @field_validator("*", mode="before")
    @classmethod
    def _blank_optional_to_none(cls, value: Any, info: ValidationInfo) -> Any:
        # Optional cosmetic fields tolerate junk; the generator applies defaults.
        if info.field_name == "text":
            return value
        if value is None or not isinstance(value, str) or not value.strip():
            return None
        return value


class QuickWinPayload(_Payload):
    """One ``{text, category}`` entry as emitted by the model."""

    category: str | None = None


class AffirmationPayload(_Payload):
    """A ``{text, type, author}`` object as emitted by the model."""

    type: str | None = None
    author: str | None = None


_QUICK_WINS_ADAPTER = TypeAdapter(list[QuickWinPayload])


def extract_text(envelope: Any) -> str:
    """Return the trimmed text of the first candidate in a reply envelope."""

    if not isinstance(envelope, dict):
        raise ParseError(ParseErrorKind.NO_CANDIDATES, "Reply envelope is not a JSON object")
    candidates = envelope.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        raise ParseError(ParseErrorKind.NO_CANDIDATES, "No response candidates in reply")

    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        raise ParseError(ParseErrorKind.NO_CANDIDATES, "First candidate has no content parts")

    text = parts[0].get("text")
    if not isinstance(text, str) or not text.strip():
        raise ParseError(ParseErrorKind.EMPTY_TEXT, "Empty response text")
    return text.strip()


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, e.g. ```json ... ```."""

    text = text.strip()
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def _load_json(text: str) -> Any:
    try:
        return json.loads(strip_code_fence(text))
    except json.JSONDecodeError as exc:
        raise ParseError(ParseErrorKind.INVALID_JSON, f"Reply is not valid JSON: {exc}") from exc


def parse_quick_wins(text: str) -> list[QuickWinPayload]:
    """Parse a JSON array of ``{text, category}`` objects.

    Any entry without usable ``text`` fails the whole batch.
    """
    data = _load_json(text)
    if not isinstance(data, list) or not data:
        raise ParseError(ParseErrorKind.SCHEMA_MISMATCH, "Expected a non-empty JSON array of tasks")
    try:
        return _QUICK_WINS_ADAPTER.validate_python(data)
    except PydanticValidationError as exc:
        LOGGER.debug("Quick win validation failed: %s", exc)
        raise ParseError(ParseErrorKind.SCHEMA_MISMATCH, f"Invalid quick win entry: {exc}") from exc


def parse_affirmation(text: str) -> AffirmationPayload:
    data = _load_json(text)
    if not isinstance(data, dict):
        raise ParseError(ParseErrorKind.SCHEMA_MISMATCH, "Expected a JSON object")
    try:
        return AffirmationPayload.model_validate(data)
    except PydanticValidationError as exc:
        raise ParseError(ParseErrorKind.SCHEMA_MISMATCH, f"Invalid affirmation: {exc}") from exc

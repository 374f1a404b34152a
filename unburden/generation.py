"""Content generator orchestrating prompts, the upstream model and fallbacks."""

from __future__ import annotations

import asyncio
import logging
import random
from enum import Enum
from typing import Any, Sequence, TypeVar, Union

from unburden import fallbacks
from unburden.errors import GenerationError, TransportError, TransportErrorKind, ValidationError
from unburden.llm.base import LLMProvider
from unburden.models import (
    AffirmationRequest,
    AffirmationResult,
    AffirmationType,
    ChatRequest,
    ConversationTurn,
    MoodAction,
    MoodActionRequest,
    PersonalizedQuickWinsRequest,
    QuickWin,
    QuickWinCategory,
    QuickWinsRequest,
    QuickWinsResult,
    TextResult,
    TimeOfDay,
)
from unburden.parser import QuickWinPayload, extract_text, parse_affirmation, parse_quick_wins
from unburden.prompts import (
    build_affirmation_payload,
    build_chat_payload,
    build_mood_payload,
    build_personalized_quick_wins_payload,
    build_quick_wins_payload,
)
from unburden.repetition import RepetitionTracker

LOGGER = logging.getLogger(__name__)

_PERSONALIZED_COUNT = 3

_E = TypeVar("_E", bound=Enum)

GenerationRequest = Union[
    ChatRequest, MoodActionRequest, QuickWinsRequest, PersonalizedQuickWinsRequest, AffirmationRequest
]
GenerationResult = Union[TextResult, QuickWinsResult, AffirmationResult]


class ContentGenerator:
    """Single entry point for every generation mode.

    Invalid input raises ``ValidationError`` before anything is sent. Once
    input is valid, every operation returns content: upstream and parse
    failures are logged and answered from the fallback library, with
    ``from_fallback`` set on the result.
    """

    def __init__(
        self,
        llm: LLMProvider,
        tracker: RepetitionTracker,
        request_timeout_seconds: float | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._llm = llm
        self._tracker = tracker
        self._request_timeout_seconds = request_timeout_seconds
        self._rng = rng or random.Random()

    @property
    def tracker(self) -> RepetitionTracker:
        return self._tracker

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run the operation matching a request variant."""

        if isinstance(request, ChatRequest):
            return await self.generate_chat_reply(request.current_message, request.history)
        if isinstance(request, MoodActionRequest):
            return await self.generate_mood_response(request.action, request.history)
        if isinstance(request, QuickWinsRequest):
            return await self.generate_quick_wins(request.count, request.time_of_day)
        if isinstance(request, PersonalizedQuickWinsRequest):
            return await self.generate_personalized_quick_wins(request.mood, request.completed_tasks)
        if isinstance(request, AffirmationRequest):
            return await self.generate_affirmation(request.is_premium)
        raise ValidationError(f"Unsupported request type: {type(request).__name__}")

    async def generate_chat_reply(
        self, message: str, history: Sequence[ConversationTurn] = ()
    ) -> TextResult:
        """Reply to ``message`` in the context of ``history``."""

        if not isinstance(message, str) or not message.strip():
            raise ValidationError("message must not be empty")
        payload = build_chat_payload(message, history)

        try:
            text = await self._request_text(payload)
        except GenerationError as exc:
            LOGGER.warning("Chat generation failed, using fallback: %s", exc)
            return TextResult(text=fallbacks.fallback_chat_text(exc), from_fallback=True)
        return TextResult(text=text)

    async def generate_mood_response(
        self, action: MoodAction | str, history: Sequence[ConversationTurn] = ()
    ) -> TextResult:
        """Respond to one of the mood buttons (better, distract, reflect)."""

        mood_action = _coerce_enum(MoodAction, action, "action")
        payload = build_mood_payload(mood_action, history)

        try:
            text = await self._request_text(payload)
        except GenerationError as exc:
            LOGGER.warning("Mood response for %s failed, using fallback: %s", mood_action.value, exc)
            return TextResult(text=fallbacks.fallback_mood_text(mood_action), from_fallback=True)
        return TextResult(text=text)

    async def generate_quick_wins(
        self, count: int = 3, time_of_day: TimeOfDay | str = TimeOfDay.AFTERNOON
    ) -> QuickWinsResult:
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise ValidationError(f"count must be a positive integer, got {count!r}")
        period = _coerce_enum(TimeOfDay, time_of_day, "time_of_day")
        payload = build_quick_wins_payload(count, period)

        try:
            entries = parse_quick_wins(await self._request_text(payload))
        except GenerationError as exc:
            LOGGER.warning("Quick wins generation failed, using fallback: %s", exc)
            return QuickWinsResult(items=fallbacks.fallback_quick_wins(count, self._rng), from_fallback=True)
        return QuickWinsResult(items=_to_quick_wins(entries[:count], prefix="ai"))

    async def generate_personalized_quick_wins(
        self, mood: str, completed_tasks: Sequence[str] = ()
    ) -> QuickWinsResult:
        """Suggest three quick wins tailored to a described mood."""

        if not isinstance(mood, str) or not mood.strip():
            raise ValidationError("mood must not be empty")
        payload = build_personalized_quick_wins_payload(mood.strip(), list(completed_tasks))

        try:
            entries = parse_quick_wins(await self._request_text(payload))
        except GenerationError as exc:
            LOGGER.warning("Personalized quick wins failed, using fallback: %s", exc)
            return QuickWinsResult(
                items=fallbacks.fallback_quick_wins(_PERSONALIZED_COUNT, self._rng),
                from_fallback=True,
            )
        return QuickWinsResult(items=_to_quick_wins(entries[:_PERSONALIZED_COUNT], prefix="mood"))

    async def generate_affirmation(self, is_premium: bool = False) -> AffirmationResult:
        payload = build_affirmation_payload(bool(is_premium), self._tracker.recent_texts())

        try:
            entry = parse_affirmation(await self._request_text(payload))
        except GenerationError as exc:
            LOGGER.warning("Affirmation generation failed, using fallback: %s", exc)
            return fallbacks.fallback_affirmation(self._tracker, self._rng)

        result = AffirmationResult(
            text=entry.text,
            type=_enum_or_default(AffirmationType, entry.type, AffirmationType.AFFIRMATION),
            author=entry.author,
        )
        self._tracker.record(result.text)
        return result

    async def _request_text(self, payload: dict[str, Any]) -> str:
        """Send ``payload`` upstream and return the reply text.

        Every failure surfaces as a ``GenerationError``; cancellation is
        left to propagate.
        """
        try:
            envelope = await asyncio.wait_for(
                self._llm.generate(payload), timeout=self._request_timeout_seconds
            )
        except GenerationError:
            raise
        except asyncio.TimeoutError as exc:
            raise TransportError(
                TransportErrorKind.NETWORK_FAILURE,
                f"No reply within {self._request_timeout_seconds}s",
            ) from exc
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("Unexpected error from LLM provider")
            raise TransportError(TransportErrorKind.NETWORK_FAILURE, str(exc)) from exc
        return extract_text(envelope)


def _coerce_enum(enum_type: type[_E], value: _E | str, name: str) -> _E:
    try:
        return enum_type(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise ValidationError(f"{name} must be one of: {allowed} (got {value!r})") from exc


def _enum_or_default(enum_type: type[_E], value: str | None, default: _E) -> _E:
    if value is None:
        return default
    try:
        return enum_type(value.strip().lower())
    except ValueError:
        LOGGER.debug("Unknown %s %r, defaulting to %s", enum_type.__name__, value, default.value)
        return default


def _to_quick_wins(entries: Sequence[QuickWinPayload], prefix: str) -> list[QuickWin]:
    return [
        QuickWin(
            id=fallbacks.new_quick_win_id(prefix),
            text=entry.text,
            category=_enum_or_default(QuickWinCategory, entry.category, QuickWinCategory.MENTAL),
        )
        for entry in entries
    ]

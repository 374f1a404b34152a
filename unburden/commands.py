"""Command dispatcher translating text commands onto generator operations.

Plain text is a chat message. ``@``-prefixed messages select another mode:

    @mood <better|distract|reflect>
    @quickwins [count] [morning|afternoon|evening]
    @personalize <mood description>
    @done <task you completed>
    @affirmation [premium]
    @clear
"""

from __future__ import annotations

import logging
from collections import deque

from unburden.errors import ValidationError
from unburden.generation import ContentGenerator
from unburden.models import AffirmationResult, ConversationTurn, QuickWinsResult, TextResult

LOGGER = logging.getLogger(__name__)

_MOOD_USAGE = "Usage: @mood <better|distract|reflect>"
_QUICKWINS_USAGE = "Usage: @quickwins [count] [morning|afternoon|evening]"
_PERSONALIZE_USAGE = "Usage: @personalize <how you are feeling>"


def parse_command(text: str) -> tuple[str, list[str]] | None:
    """Split an @-prefixed message into (command, args).

    Returns:
        A (command, args) tuple where command is lowercased, or None if text
        is not a valid @command.
    """
    text = text.strip()
    if not text.startswith("@"):
        return None
    parts = text[1:].split()
    if not parts:
        return None
    return parts[0].lower(), parts[1:]


class CommandDispatcher:
    """Routes one line of user input to the matching generation mode.

    Keeps the most recent ``history_window`` turns of the session in memory
    so chat and mood replies see the conversation without the payload
    growing without bound.
    """

    def __init__(
        self,
        generator: ContentGenerator,
        is_premium: bool = False,
        history_window: int = 20,
        completed_tasks_window: int = 10,
    ) -> None:
        self._generator = generator
        self._is_premium = is_premium
        self._history: deque[ConversationTurn] = deque(maxlen=history_window)
        self._completed_tasks: deque[str] = deque(maxlen=completed_tasks_window)

    @property
    def history(self) -> tuple[ConversationTurn, ...]:
        return tuple(self._history)

    async def dispatch(self, text: str) -> str | None:
        """Handle one line of input.

        Returns:
            The reply to show, or None for blank input.
        """
        if not text.strip():
            return None
        parsed = parse_command(text)
        if parsed is None:
            return await self._handle_chat(text)

        command, args = parsed
        LOGGER.info("Command dispatch: command=%r args=%r", command, args)
        if command == "chat":
            return await self._handle_chat(" ".join(args))
        if command == "mood":
            return await self._handle_mood(args)
        if command == "quickwins":
            return await self._handle_quick_wins(args)
        if command == "personalize":
            return await self._handle_personalize(args)
        if command == "affirmation":
            premium = self._is_premium or (bool(args) and args[0].lower() == "premium")
            return _format_affirmation(await self._generator.generate_affirmation(premium))
        if command == "done":
            if not args:
                return "Usage: @done <task you completed>"
            self._completed_tasks.append(" ".join(args))
            return "Nice work! Marked as done."
        if command == "clear":
            self._history.clear()
            return "Conversation history cleared."
        # Unknown commands are just something the user typed.
        return await self._handle_chat(text)

    async def _handle_chat(self, message: str) -> str:
        try:
            result = await self._generator.generate_chat_reply(message, self.history)
        except ValidationError:
            return "Tell me what's on your mind."
        self._history.append(ConversationTurn(text=message, is_user=True))
        self._history.append(ConversationTurn(text=result.text, is_user=False))
        return _format_text(result)

    async def _handle_mood(self, args: list[str]) -> str:
        if not args:
            return _MOOD_USAGE
        try:
            result = await self._generator.generate_mood_response(args[0].lower(), self.history)
        except ValidationError:
            return _MOOD_USAGE
        self._history.append(ConversationTurn(text=result.text, is_user=False))
        return _format_text(result)

    async def _handle_quick_wins(self, args: list[str]) -> str:
        count = 3
        time_of_day = "afternoon"
        for arg in args:
            if arg.isdigit():
                count = int(arg)
            else:
                time_of_day = arg.lower()
        try:
            result = await self._generator.generate_quick_wins(count, time_of_day)
        except ValidationError:
            return _QUICKWINS_USAGE
        return _format_quick_wins(result)

    async def _handle_personalize(self, args: list[str]) -> str:
        try:
            result = await self._generator.generate_personalized_quick_wins(
                " ".join(args), list(self._completed_tasks)
            )
        except ValidationError:
            return _PERSONALIZE_USAGE
        return _format_quick_wins(result)


def _format_text(result: TextResult) -> str:
    return result.text


def _format_quick_wins(result: QuickWinsResult) -> str:
    return "\n".join(f"{i}. [{item.category.value}] {item.text}" for i, item in enumerate(result.items, 1))


def _format_affirmation(result: AffirmationResult) -> str:
    if result.author:
        return f"{result.text}\n  - {result.author}"
    return result.text

"""Core domain models used across layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MoodAction(str, Enum):
    BETTER = "better"
    DISTRACT = "distract"
    REFLECT = "reflect"


class TimeOfDay(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class QuickWinCategory(str, Enum):
    PHYSICAL = "physical"
    MENTAL = "mental"
    SOCIAL = "social"
    CREATIVE = "creative"
    MINDFUL = "mindful"


class AffirmationType(str, Enum):
    AFFIRMATION = "affirmation"
    PROVERB = "proverb"
    QUOTE = "quote"
    MANTRA = "mantra"


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """One message of a conversation, tagged by speaker."""

    text: str
    is_user: bool


@dataclass(frozen=True, slots=True)
class ChatRequest:
    current_message: str
    history: tuple[ConversationTurn, ...] = ()


@dataclass(frozen=True, slots=True)
class MoodActionRequest:
    action: MoodAction
    history: tuple[ConversationTurn, ...] = ()


@dataclass(frozen=True, slots=True)
class QuickWinsRequest:
    count: int = 3
    time_of_day: TimeOfDay = TimeOfDay.AFTERNOON


@dataclass(frozen=True, slots=True)
class PersonalizedQuickWinsRequest:
    mood: str
    completed_tasks: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class AffirmationRequest:
    is_premium: bool = False


@dataclass(slots=True)
class QuickWin:
    """A short wellness micro-task suggested to the user."""

    id: str
    text: str
    category: QuickWinCategory
    # Completion is toggled by the UI, never by generation.
    completed: bool = False


@dataclass(slots=True)
class TextResult:
    """Result of the chat and mood-action modes."""

    text: str
    from_fallback: bool = False


@dataclass(slots=True)
class QuickWinsResult:
    items: list[QuickWin] = field(default_factory=list)
    from_fallback: bool = False


@dataclass(slots=True)
class AffirmationResult:
    text: str
    type: AffirmationType = AffirmationType.AFFIRMATION
    author: str | None = None
    from_fallback: bool = False

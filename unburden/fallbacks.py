"""Curated static content served when the upstream model is unusable."""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass

from unburden.errors import GenerationError, ParseError, ParseErrorKind, TransportError
from unburden.models import AffirmationResult, AffirmationType, MoodAction, QuickWin, QuickWinCategory
from unburden.repetition import RepetitionTracker

CHAT_FALLBACK = (
    "I hear you, and I want you to know that sharing your feelings takes real courage. "
    "I'm here to support you through whatever you're experiencing. 💜"
)
CHAT_CONNECTION_FALLBACK = (
    "I'm having trouble connecting right now, but I want you to know that I'm here for you. "
    "Your feelings are valid and important. 💜"
)
CHAT_NO_WORDS_FALLBACK = (
    "I'm listening and I care about what you're going through. Sometimes I need a moment to "
    "find the right words, but please know that your feelings matter deeply to me."
)

MOOD_FALLBACKS: dict[MoodAction, str] = {
    MoodAction.BETTER: (
        "I'm so glad you're feeling better! 🌟 You've shown incredible strength and resilience "
        "today. Take care of yourself, and remember that I'm always here whenever you need support."
    ),
    MoodAction.DISTRACT: (
        "Here's something beautiful to think about: every small step you take toward healing "
        "matters, even when you can't see the progress. You're doing better than you know. ✨"
    ),
    MoodAction.REFLECT: (
        "Looking at our conversation, I see someone who had the courage to reach out and be "
        "honest about their feelings. That vulnerability is a sign of tremendous strength. 💜"
    ),
}


@dataclass(frozen=True, slots=True)
class _Task:
    text: str
    category: QuickWinCategory


@dataclass(frozen=True, slots=True)
class _Affirmation:
    text: str
    type: AffirmationType
    author: str | None = None


_C = QuickWinCategory
QUICK_WIN_CATALOG: tuple[_Task, ...] = (
    _Task("Take 5 deep breaths and notice how your body feels", _C.MINDFUL),
    _Task("Write down one thing you accomplished today", _C.MENTAL),
    _Task("Do 10 gentle stretches or jumping jacks", _C.PHYSICAL),
    _Task("Send a kind message to someone you care about", _C.SOCIAL),
    _Task("Doodle or sketch something that makes you smile", _C.CREATIVE),
    _Task("Organize one small area of your space", _C.MENTAL),
    _Task("Step outside and notice three beautiful things", _C.MINDFUL),
    _Task("Listen to your favorite uplifting song", _C.MENTAL),
    _Task("Write a thank you note to yourself", _C.MENTAL),
    _Task("Dance to one song that makes you happy", _C.PHYSICAL),
    _Task("Call a friend or family member just to say hi", _C.SOCIAL),
    _Task("Take photos of things that bring you joy", _C.CREATIVE),
    _Task("Practice gratitude by listing 3 good things", _C.MINDFUL),
    _Task("Do a 5-minute meditation or breathing exercise", _C.MINDFUL),
    _Task("Write down a positive affirmation about yourself", _C.MENTAL),
)

_T = AffirmationType
AFFIRMATION_CATALOG: tuple[_Affirmation, ...] = (
    _Affirmation(
        "You are braver than you believe, stronger than you seem, and more loved than you'll ever know.",
        _T.AFFIRMATION,
        "A.A. Milne",
    ),
    _Affirmation(
        "Your present circumstances don't determine where you can go; they merely determine where you start.",
        _T.QUOTE,
        "Nido Qubein",
    ),
    _Affirmation("Progress, not perfection, is the goal.", _T.MANTRA),
    _Affirmation("Every small step forward is a victory worth celebrating.", _T.AFFIRMATION),
    _Affirmation("Your resilience is your superpower, even when you don't feel strong.", _T.AFFIRMATION),
    _Affirmation("Healing takes time, and asking for help is a courageous step.", _T.QUOTE, "Mariska Hargitay"),
    _Affirmation("Sometimes the bravest thing you can do is rest.", _T.PROVERB),
    _Affirmation("I am enough, I have enough, I do enough.", _T.MANTRA),
    _Affirmation("Your journey is unique, and every step forward matters.", _T.AFFIRMATION),
    _Affirmation("In this moment, you have everything you need to take the next right step.", _T.MANTRA),
    _Affirmation("Growth begins at the end of your comfort zone.", _T.PROVERB),
    _Affirmation("You are not broken. You are breaking through.", _T.AFFIRMATION),
    _Affirmation("Peace comes from within. Do not seek it without.", _T.QUOTE, "Buddha"),
    _Affirmation("I choose courage over comfort.", _T.MANTRA),
    _Affirmation("Your sensitivity is a strength, not a weakness.", _T.AFFIRMATION),
    _Affirmation(
        "What lies behind us and what lies before us are tiny matters compared to what lies within us.",
        _T.QUOTE,
        "Ralph Waldo Emerson",
    ),
    _Affirmation("I am learning to trust my own journey.", _T.MANTRA),
    _Affirmation("You don't have to be perfect to be worthy of love.", _T.AFFIRMATION),
)


def new_quick_win_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


def fallback_chat_text(error: GenerationError | None = None) -> str:
    """Pick the chat fallback sentence matching the failure, if known."""

    if isinstance(error, TransportError):
        return CHAT_CONNECTION_FALLBACK
    if isinstance(error, ParseError) and error.kind in (ParseErrorKind.NO_CANDIDATES, ParseErrorKind.EMPTY_TEXT):
        return CHAT_NO_WORDS_FALLBACK
    return CHAT_FALLBACK


def fallback_mood_text(action: MoodAction) -> str:
    return MOOD_FALLBACKS[action]


def fallback_quick_wins(count: int, rng: random.Random | None = None) -> list[QuickWin]:
    """Return up to ``count`` distinct catalog tasks in random order."""

    rng = rng or random.Random()
    tasks = list(QUICK_WIN_CATALOG)
    rng.shuffle(tasks)
    return [
        QuickWin(id=new_quick_win_id("fallback"), text=task.text, category=task.category)
        for task in tasks[:count]
    ]


def fallback_affirmation(tracker: RepetitionTracker, rng: random.Random | None = None) -> AffirmationResult:
    """Pick a catalog affirmation not shown recently and remember it.

    If every entry was shown recently the whole catalog is eligible again.
    """
    rng = rng or random.Random()
    candidates = [entry for entry in AFFIRMATION_CATALOG if not tracker.is_recent(entry.text)]
    chosen = rng.choice(candidates or AFFIRMATION_CATALOG)
    tracker.record(chosen.text)
    return AffirmationResult(text=chosen.text, type=chosen.type, author=chosen.author, from_fallback=True)

"""Payload construction for each generation mode.

Every builder is pure: the same request always yields the same payload.
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence

from unburden.models import ConversationTurn, MoodAction, TimeOfDay

PERSONA_PROMPT = """\
You are a compassionate AI companion named "Unburden AI". Your role is to offer \
empathetic, non-judgmental support to people sharing their feelings and emotional struggles.

CORE PRINCIPLES:
- Respond with deep empathy and understanding
- Validate feelings without rushing to "fix" them
- Use warm, genuine language that sounds like a caring friend, not a clinician
- Focus on emotional support rather than advice unless asked
- Acknowledge the courage it takes to share vulnerable feelings
- If the user sounds sad, be gentle and slow down
- If they are confused, ask clarifying questions with warmth

RESPONSE STYLE:
- Keep responses to 2-3 sentences unless more depth is needed
- Include gentle affirmations and validation
- Use emojis sparingly, only to convey warmth (💜, 🌟, 🫂)

WHAT TO AVOID:
- Never minimize or dismiss feelings
- Never give medical advice or diagnose
- Avoid clichés like "everything happens for a reason"
- Don't be overly cheerful when someone is in pain
- Never judge or criticize the user's feelings or actions

Your goal is a safe space where the user feels heard, understood and supported."""

MOOD_PROMPTS: dict[MoodAction, str] = {
    MoodAction.BETTER: (
        "The user is feeling better now. Acknowledge their progress, celebrate their "
        "resilience, and offer gentle encouragement. Keep it warm and supportive, "
        "around 2-3 sentences."
    ),
    MoodAction.DISTRACT: (
        "The user wants a gentle distraction. Offer something uplifting: a fun fact, "
        "gentle humor, an inspiring thought or a positive affirmation. Keep it light "
        "and engaging."
    ),
    MoodAction.REFLECT: (
        "The user wants to reflect on the conversation. Help them recognize their "
        "strength in sharing, validate their journey, and highlight any positive aspects "
        "of their openness or resilience you have noticed."
    ),
}

TIME_OF_DAY_CONTEXT: dict[TimeOfDay, str] = {
    TimeOfDay.MORNING: "energizing morning activities to start the day positively",
    TimeOfDay.AFTERNOON: "refreshing midday activities to boost energy and mood",
    TimeOfDay.EVENING: "calming evening activities for relaxation and reflection",
}

SAFETY_SETTINGS: list[dict[str, str]] = [
    {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
    for category in (
        "HARM_CATEGORY_HARASSMENT",
        "HARM_CATEGORY_HATE_SPEECH",
        "HARM_CATEGORY_SEXUALLY_EXPLICIT",
        "HARM_CATEGORY_DANGEROUS_CONTENT",
    )
]

_QUICK_WIN_FORMAT = """\
Format your response as a JSON array with this structure:
[
  {
    "text": "specific task description",
    "category": "physical|mental|social|creative|mindful"
  }
]

Only return the JSON array, no additional text."""


def _turn(role: str, text: str) -> dict[str, Any]:
    return {"role": role, "parts": [{"text": text}]}


def _generation_config(temperature: float, top_k: int, max_output_tokens: int) -> dict[str, Any]:
    return {
        "temperature": temperature,
        "topK": top_k,
        "topP": 0.95,
        "maxOutputTokens": max_output_tokens,
    }


def format_history(turns: Iterable[ConversationTurn]) -> list[dict[str, Any]]:
    """Render turns as upstream contents, led by the persona instruction.

    Turns whose text is blank are dropped; order and speaker roles are kept.
    """
    contents = [_turn("model", PERSONA_PROMPT)]
    for turn in turns:
        if turn.text.strip():
            contents.append(_turn("user" if turn.is_user else "model", turn.text))
    return contents


def build_chat_payload(message: str, history: Sequence[ConversationTurn]) -> dict[str, Any]:
    contents = format_history([*history, ConversationTurn(text=message, is_user=True)])
    return {
        "contents": contents,
        "generationConfig": _generation_config(temperature=0.8, top_k=40, max_output_tokens=1024),
        "safetySettings": SAFETY_SETTINGS,
    }


def build_mood_payload(action: MoodAction, history: Sequence[ConversationTurn]) -> dict[str, Any]:
    contents = format_history(history)
    contents.append(_turn("user", MOOD_PROMPTS[action]))
    return {
        "contents": contents,
        "generationConfig": _generation_config(temperature=0.9, top_k=40, max_output_tokens=512),
    }


def _structured_payload(prompt: str) -> dict[str, Any]:
    return {
        "contents": [_turn("user", prompt)],
        "generationConfig": _generation_config(temperature=0.9, top_k=50, max_output_tokens=1024),
        "safetySettings": SAFETY_SETTINGS,
    }


def build_quick_wins_payload(count: int, time_of_day: TimeOfDay) -> dict[str, Any]:
    prompt = f"""\
Generate {count} simple, uplifting quick win tasks for someone looking to boost their mood \
and motivation. These should be {TIME_OF_DAY_CONTEXT[time_of_day]}.

Requirements:
- Each task should take 5-15 minutes maximum
- Mix different categories: physical movement, mental wellness, social connection, \
creative expression, and mindfulness
- Make them specific, actionable, and immediately doable
- Focus on small wins that build momentum
- Consider the {time_of_day.value} time context
- Be creative and varied, avoid generic suggestions

{_QUICK_WIN_FORMAT}"""
    return _structured_payload(prompt)


def build_personalized_quick_wins_payload(mood: str, completed_tasks: Sequence[str]) -> dict[str, Any]:
    avoid = ", ".join(completed_tasks) if completed_tasks else "none"
    prompt = f"""\
Based on the user's current mood: "{mood}", generate 3 personalized quick win tasks that \
would be most helpful right now.

Consider:
- Their emotional state and what might lift their spirits
- Avoid suggesting tasks similar to these recently completed ones: {avoid}
- Mix different approaches: physical movement, mental wellness, social connection, \
creative expression, mindfulness
- Make tasks feel achievable and specifically relevant to their current mood
- Each task should take 5-15 minutes maximum

{_QUICK_WIN_FORMAT}"""
    return _structured_payload(prompt)


def build_affirmation_payload(is_premium: bool, recent_texts: Sequence[str]) -> dict[str, Any]:
    if is_premium:
        framing = (
            "Create a deeply personalized, empowering message that feels like it was written "
            "specifically for someone on their unique healing journey."
        )
        tone = "- Make it feel personally crafted and unique"
    else:
        framing = "Create an uplifting, universal message that resonates with anyone seeking emotional support."
        tone = "- Keep it universally relatable"

    avoidance = ""
    if recent_texts:
        avoidance = (
            "\n\nIMPORTANT: Avoid creating messages similar to these recent ones: "
            + " | ".join(recent_texts)
        )

    prompt = f"""\
Generate a unique, inspiring message for someone seeking emotional wellness and strength. {framing}

The message should be one of these types (vary the type for diversity):
1. Personal affirmation (empowering "I am" or "You are" statements)
2. Wisdom proverb (timeless wisdom about resilience, growth, or inner strength)
3. Inspirational quote (motivational message about overcoming challenges)
4. Mindful mantra (short, powerful phrases for meditation)

Requirements:
- Keep it between 10-30 words
- Make it emotionally resonant and genuinely uplifting
- Avoid clichés and overly generic phrases
- Focus on one aspect: inner strength, self-compassion, resilience, hope, growth, courage or peace
- Vary the language style and approach each time
{tone}{avoidance}

Format your response as JSON:
{{
  "text": "the inspiring message",
  "type": "affirmation|proverb|quote|mantra",
  "author": "author name if it's a quote, otherwise null"
}}

Only return the JSON object, no additional text."""
    return _structured_payload(prompt)

"""
Prompt composition and response-shaping rules.

Two user intents get special treatment:
- asking who made the assistant returns a fixed credit message
- mentioning a Republic Act (or Batas) number gets the Lawphil footer
"""

import re
from typing import Iterable, List

from ..models import ChatMessage, Language

CREATOR_RESPONSE = (
    "I was made by TeamBangan as an HCI PIT for the 1st semester of 2025–2026.\n"
    "Here are the members:\n"
    "● Galendez, Hanz\n"
    "● Lagamon, Lester\n"
    "● Pon, Bryll Bryan\n"
    "● Seguerra, Huebert\n"
    "● Yarra, Dave"
)

CITATION_FOOTER = "For full legal text, you may visit Lawphil: https://lawphil.net"

_EXTRA_BLANK_LINES = re.compile(r"\n[ \t]*\n(?:[ \t]*\n)+")

# Matched as lower-cased substrings of the user message
CREATOR_TRIGGERS = (
    "who made you",
    "who created you",
    "your creator",
    "sino gumawa",
    "gumawa sayo",
    "gumawa sa'yo",
    "kinsa nag himo",
    "kinsa nag-himo",
    "developer mo",
    "origin mo",
    "who built you",
)

STATUTE_PATTERN = re.compile(
    r"\b(?:r\.?a\.?|republic\s+act|batas)\s*(?:no\.?\s*)?\d+",
    re.IGNORECASE,
)

SYSTEM_PROMPT_TEMPLATE = """
You are JusticeConnect, a helpful AI legal assistant specialized in Philippine law.

LANGUAGE POLICY:
- Detect the language used in the user's latest message.
- ALWAYS reply in **that same language** (English, Tagalog, Bisaya, Cebuano, mixed, etc.).
- If uncertain, fall back to: {language}.

CREATOR / ORIGIN RULE:
If the user asks who made you, who created you, who built you,
"Sino gumawa sayo?", "Kinsa nag-himo nimo?", or anything related,
ALWAYS respond with this exact message:

"{creator_response}"

REPUBLIC ACT (RA) RULE:
If the user mentions any "RA ___", "Republic Act ___", "Batas", or any Philippine law:
- Provide a simple explanation.
- ALWAYS include this line at the end:
"{citation_footer}"

LEGAL GUIDELINES:
- Explain Philippine law in simple, clear terms.
- Provide general information only, not legal advice.
- Reference specific laws when relevant.
- Encourage consulting a licensed Philippine lawyer for specific concerns.
- Stay respectful, empathetic, and professional.
"""


def build_system_prompt(language: Language | str) -> str:
    """Build the system prompt with ``language`` as the fallback reply language."""
    language_name = language.value if isinstance(language, Language) else str(language)
    return SYSTEM_PROMPT_TEMPLATE.format(
        language=language_name,
        creator_response=CREATOR_RESPONSE,
        citation_footer=CITATION_FOOTER,
    )


def detect_creator_trigger(message: str) -> bool:
    """True if the message asks who made the assistant."""
    lowered = message.lower()
    return any(trigger in lowered for trigger in CREATOR_TRIGGERS)


def detect_statute_reference(message: str) -> bool:
    """True if the message cites a Republic Act / RA / Batas number."""
    return STATUTE_PATTERN.search(message) is not None


def inject_citation_footer(text: str) -> str:
    """
    Make the Lawphil footer the last line of ``text``, exactly once.

    Any copy the model already wrote is removed first, wherever it appears.
    """
    body = _EXTRA_BLANK_LINES.sub("\n\n", text.replace(CITATION_FOOTER, "")).strip()
    if not body:
        return CITATION_FOOTER
    return f"{body}\n\n{CITATION_FOOTER}"


def compose_messages(
    language: Language | str,
    history: Iterable[ChatMessage],
    message: str,
) -> List[ChatMessage]:
    """Request sent to the completion provider: system prompt, history, then the new user message."""
    return [
        ChatMessage(role="system", content=build_system_prompt(language)),
        *history,
        ChatMessage(role="user", content=message),
    ]

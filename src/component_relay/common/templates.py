"""Prompt templating helpers."""
from __future__ import annotations
from collections.abc import Iterable

from component_relay.common.schema import ConversationTurn

SYSTEM_PROMPT = """You are an expert Next.js and shadcn/ui developer. Generate clean, modern, and functional Next.js components using TypeScript and shadcn/ui components.

Rules:
1. Always use TypeScript
2. Use shadcn/ui components when applicable (Button, Card, Input, etc.)
3. Use Tailwind CSS for styling
4. Make components responsive and accessible
5. Include proper imports
6. Generate complete, ready-to-use code
7. Use modern React patterns (hooks, functional components)
8. Add appropriate type definitions

Return ONLY the code without explanations or markdown code blocks."""

HISTORY_HEADER = "Previous conversation:"
REQUEST_LABEL = "User request:"
TRAILING_INSTRUCTION = "Generate the Next.js component code:"


def render_history(turns: Iterable[ConversationTurn]) -> str:
    """
    Render prior turns as a labeled transcript.

    Args:
        turns: Conversation turns in original order.

    Returns:
        The transcript block ending in a blank line, or "" when there are no turns.
    """
    lines = [f"{turn.role}: {turn.content}" for turn in turns]
    if not lines:
        return ""
    return HISTORY_HEADER + "\n" + "".join(line + "\n" for line in lines) + "\n"


def render_prompt(message: str, history: Iterable[ConversationTurn] = ()) -> str:
    """
    Build the single text prompt sent to the generation backend.

    Args:
        message: The new user request.
        history: Optional prior turns, flattened into text.

    Returns:
        System instruction, transcript (if any) and the labeled request.
    """
    return (
        SYSTEM_PROMPT
        + "\n\n"
        + render_history(history)
        + f"{REQUEST_LABEL} {message}\n\n{TRAILING_INSTRUCTION}"
    )

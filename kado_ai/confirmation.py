"""Interactive confirmation before prompt data leaves the machine."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

ConfirmationGate = Callable[[Optional[Path]], str]

CONFIRMATION_QUESTION = (
    "Do you want to proceed with sending this data to the AI for analysis? (yes/no): "
)


def is_affirmative(answer: str | None) -> bool:
    """Only an explicit ``yes`` lets the pipeline continue."""
    return bool(answer) and answer.strip().lower() == "yes"


def terminal_confirmation(
    prompt_path: Optional[Path],
    *,
    input_func: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> str:
    """Tell the user where the prompt was saved and read their answer."""
    if prompt_path is not None:
        output(f"AI input has been saved to {prompt_path}")
    try:
        return input_func(CONFIRMATION_QUESTION)
    except EOFError:
        return ""


__all__ = [
    "CONFIRMATION_QUESTION",
    "ConfirmationGate",
    "is_affirmative",
    "terminal_confirmation",
]

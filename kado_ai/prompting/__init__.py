"""Prompt assembly for infrastructure analysis requests."""

from .assembler import PromptAssembler, PromptSections
from .constants import PLAN_NOT_FOUND

__all__ = ["PLAN_NOT_FOUND", "PromptAssembler", "PromptSections"]

"""
Prompt construction for the gift-ideas call.

The template lives in prompts/gift_ideas.txt; this module only resolves defaults
and fills the placeholders, so the same GiftRequest always yields the same text.
"""

import os
from functools import lru_cache
from typing import Mapping, Optional

from .config import BUDGET_LABELS, DEFAULT_BUDGET_KEY, GIFT_COUNT
from .schemas import GiftRequest

PROMPTS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "prompts")
GIFT_PROMPT_PATH = os.path.join(PROMPTS_DIR, "gift_ideas.txt")


def _read_prompt(path: str) -> str:
    """Read a prompt text file."""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


@lru_cache()
def _gift_template() -> str:
    return _read_prompt(GIFT_PROMPT_PATH)


def resolve_budget_label(budget: Optional[str], budget_labels: Mapping[str, str] = BUDGET_LABELS) -> str:
    if budget and budget in budget_labels:
        return budget_labels[budget]
    return budget_labels.get(DEFAULT_BUDGET_KEY, BUDGET_LABELS[DEFAULT_BUDGET_KEY])


def format_interests(interests) -> str:
    return ", ".join(interests or []) or "open"


def build_prompt(gift_request: GiftRequest, budget_labels: Mapping[str, str] = BUDGET_LABELS) -> str:
    return _gift_template().format(
        delivery=gift_request.delivery or "either",
        occasion=gift_request.occasion or "unspecified",
        recipient=gift_request.recipient or "unspecified",
        gender=gift_request.gender or "prefer-not",
        interests=format_interests(gift_request.interests),
        budget=resolve_budget_label(gift_request.budget, budget_labels),
        vibe=gift_request.vibe or "thoughtful",
        count=GIFT_COUNT,
    )

"""
Turn a Gemini payload into a validated gift list.

Flow:
1. extract_text: join candidates[0].content.parts[*].text (never raises)
2. parse_gift_json: strict json.loads, then the first-'{' .. last-'}' slice
3. validate_gifts: require a `gifts` array (plus count/shape checks in strict mode)
"""

import json
import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from .config import GIFT_COUNT
from .errors import UpstreamFormat, UpstreamShape
from .schemas import GiftIdea
from .utils import strict_loads, truncate

logger = logging.getLogger(__name__)


def extract_text(payload: Any) -> str:
    """Concatenate the text parts of the first candidate, or return ""."""
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    if not isinstance(first, dict):
        return ""
    content = first.get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    return "".join(
        p["text"] for p in parts
        if isinstance(p, dict) and isinstance(p.get("text"), str)
    )


def _slice_braces(text: str) -> str:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise json.JSONDecodeError("No JSON object found", text, 0)
    return text[start:end + 1]


def parse_gift_json(text: str) -> Any:
    """
    Parse model output as JSON.
    Falls back to the outermost brace slice when the model wraps its JSON in
    prose or code fences.
    """
    try:
        return strict_loads(text)
    except ValueError:
        pass

    try:
        parsed = strict_loads(_slice_braces(text))
    except ValueError as e:
        logger.error(f"Failed to parse Gemini text as JSON: {e}")
        logger.debug(f"Raw Gemini text: {truncate(text, 1000)!r}")
        raise UpstreamFormat("Gemini did not return valid JSON.", raw=truncate(text))

    logger.info("Recovered JSON from Gemini text via brace slice")
    return parsed


def _invalid_items(gifts: List[Any]) -> List[str]:
    problems = []
    for i, item in enumerate(gifts):
        try:
            GiftIdea.model_validate(item)
        except ValidationError as e:
            fields = ", ".join(".".join(str(x) for x in err["loc"]) or "item" for err in e.errors())
            problems.append(f"gifts[{i}]: {fields}")
    return problems


def validate_gifts(parsed: Any, strict: bool = False) -> Dict[str, Any]:
    if not isinstance(parsed, dict) or not isinstance(parsed.get("gifts"), list):
        raise UpstreamShape("Unexpected response format.", raw=parsed)

    if strict:
        gifts = parsed["gifts"]
        if len(gifts) != GIFT_COUNT:
            raise UpstreamShape(
                "Unexpected response format.",
                raw=parsed,
                details=f"Expected {GIFT_COUNT} gifts, got {len(gifts)}.",
            )
        problems = _invalid_items(gifts)
        if problems:
            raise UpstreamShape(
                "Unexpected response format.",
                raw=parsed,
                details="Invalid gift fields: " + "; ".join(problems),
            )

    return parsed

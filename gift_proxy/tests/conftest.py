import json
from typing import Any, Dict, List

import pytest

from app.config import Settings


def make_gift(i: int = 0, delivery_fit: str = "online") -> Dict[str, Any]:
    return {
        "title": f"Hand-painted mug #{i}",
        "price_range_inr": "₹600–₹900",
        "why": "Personal and useful every morning.",
        "buy_query": "hand painted ceramic mug India",
        "delivery_fit": delivery_fit,
    }


def make_gifts(n: int = 10) -> List[Dict[str, Any]]:
    return [make_gift(i) for i in range(n)]


def gemini_payload(*texts: str) -> Dict[str, Any]:
    """Build a generateContent payload whose first candidate holds `texts` as parts."""
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": t} for t in texts]}}
        ]
    }


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def api_key(monkeypatch) -> str:
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)


@pytest.fixture
def gift_body() -> bytes:
    return json.dumps({
        "delivery": "online",
        "occasion": "Birthday",
        "recipient": "sister",
        "interests": ["chess", "tea"],
        "budget": "5000-plus",
        "vibe": "handmade",
    }).encode("utf-8")

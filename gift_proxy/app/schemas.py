"""
Pydantic request/response models.

Rationale:
- Every inbound field is optional and falls back to a default.
- GiftIdea/GiftResponse describe what the frontend renders; they are only enforced in strict mode.
"""

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

DELIVERY_OPTIONS = ("online", "offline", "either")


def _as_text(v: Any) -> Optional[str]:
    """Blank strings and non-scalar values become None; numbers are stringified."""
    if isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, str) and v.strip():
        return v
    return None


class GiftRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    delivery: str = "either"
    occasion: Optional[str] = None
    recipient: Optional[str] = None
    gender: Optional[str] = None
    interests: List[str] = []
    budget: Optional[str] = None
    vibe: str = "thoughtful"

    @field_validator("delivery", mode="before")
    @classmethod
    def _normalize_delivery(cls, v: Any) -> str:
        if isinstance(v, str) and v.strip().lower() in DELIVERY_OPTIONS:
            return v.strip().lower()
        return "either"

    @field_validator("occasion", "recipient", "gender", mode="before")
    @classmethod
    def _free_text(cls, v: Any) -> Optional[str]:
        return _as_text(v)

    @field_validator("budget", mode="before")
    @classmethod
    def _budget_key(cls, v: Any) -> Optional[str]:
        # only string keys can match the budget table
        if isinstance(v, str) and v.strip():
            return v
        return None

    @field_validator("vibe", mode="before")
    @classmethod
    def _default_vibe(cls, v: Any) -> str:
        return _as_text(v) or "thoughtful"

    @field_validator("interests", mode="before")
    @classmethod
    def _normalize_interests(cls, v: Any) -> List[str]:
        if isinstance(v, str):
            v = v.split(",")
        elif not isinstance(v, list):
            v = [v]
        cleaned = []
        for item in v:
            item = _as_text(item)
            if item:
                cleaned.append(item.strip())
        return cleaned


class GiftIdea(BaseModel):
    title: str
    price_range_inr: str
    why: str
    buy_query: str
    delivery_fit: Literal["online", "offline", "either"]


class GiftResponse(BaseModel):
    gifts: List[GiftIdea]


class ErrorResponse(BaseModel):
    error: str
    raw: Optional[Any] = None
    details: Optional[str] = None


class ProxyRequest(BaseModel):
    """Platform-neutral view of an inbound HTTP request."""

    method: str
    body: bytes = b""


class ProxyResponse(BaseModel):
    """Platform-neutral response; `body` is a JSON-able value or plain text."""

    status_code: int
    body: Union[dict, list, str, None] = None
    content_type: str = "application/json"

    @property
    def is_json(self) -> bool:
        return self.content_type == "application/json"

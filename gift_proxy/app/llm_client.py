"""
Minimal Gemini REST client.

Rationale:
- Talk to generateContent directly over httpx so the raw payload and HTTP status
  are available for error reporting.
- Keep interface tiny: call_llm(prompt, api_key, settings) -> payload dict.
- No retries / no fallback. One attempt, failures surface as ProxyError subclasses.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from .config import Settings
from .errors import BackendRejected, BackendUnreachable, UpstreamFormat
from .utils import strict_loads, truncate

logger = logging.getLogger(__name__)


def build_request_body(prompt: str, settings: Settings) -> Dict[str, Any]:
    return {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": dict(settings.generation_config),
    }


def _decode_payload(response: httpx.Response) -> Any:
    try:
        return strict_loads(response.content)
    except ValueError:
        return None


def _rejection_status(payload: Any, http_status: int) -> int:
    """Prefer the status Gemini reports in its error object, then the HTTP status."""
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        code = payload["error"].get("code")
        if isinstance(code, int) and not isinstance(code, bool) and 400 <= code <= 599:
            return code
    if 400 <= http_status <= 599:
        return http_status
    return 500


def _rejection_message(payload: Any) -> str:
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        message = payload["error"].get("message")
        if isinstance(message, str) and message.strip():
            return message
    return "Gemini request failed."


async def call_llm(
    prompt: str,
    api_key: str,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> Dict[str, Any]:
    """
    POST the prompt to Gemini and return the decoded JSON payload.
    A caller-supplied client is used as-is and left open.
    """
    body = build_request_body(prompt, settings)
    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=settings.timeout_seconds)

    logger.info(f"Calling Gemini model {settings.model}")
    try:
        response = await client.post(
            settings.endpoint,
            params={"key": api_key},
            json=body,
            headers={"Content-Type": "application/json"},
        )
    except httpx.HTTPError as e:
        logger.error(f"Gemini call failed: {type(e).__name__}: {e}")
        raise BackendUnreachable("Failed to call Gemini.", details=str(e) or type(e).__name__)
    finally:
        if owns_client:
            await client.aclose()

    payload = _decode_payload(response)

    if not response.is_success:
        status = _rejection_status(payload, response.status_code)
        logger.error(f"Gemini returned HTTP {response.status_code} (reported {status})")
        raw = payload if payload is not None else truncate(response.text)
        raise BackendRejected(_rejection_message(payload), status_code=status, raw=raw)

    if payload is None:
        logger.error("Gemini returned a non-JSON success body")
        raise UpstreamFormat("Gemini did not return valid JSON.", raw=truncate(response.text))

    return payload

"""
Core orchestration / pipeline.

Flow:
1. Check method, API key and JSON body
2. Build the prompt from the (defaulted) GiftRequest
3. Single Gemini call
4. Extract text, parse JSON, validate the `gifts` array
5. Return ProxyResponse; every failure becomes a structured error response

Adapters (FastAPI, Lambda) only translate to/from ProxyRequest/ProxyResponse.
"""

import logging
from typing import Any, Optional

import httpx

from .config import Settings, get_api_key, get_settings, API_KEY_ENV
from .errors import InvalidInputBody, MethodNotAllowed, MissingConfiguration, ProxyError
from .extractor import extract_text, parse_gift_json, validate_gifts
from .llm_client import call_llm
from .prompt_builder import build_prompt
from .schemas import GiftRequest, ProxyRequest, ProxyResponse
from .utils import strict_loads

logger = logging.getLogger(__name__)


def _parse_body(body: bytes) -> GiftRequest:
    try:
        data = strict_loads(body)
    except ValueError:
        raise InvalidInputBody("Invalid JSON body.")

    if not isinstance(data, dict):
        # arrays, null and scalars carry no fields: every preference takes its default
        logger.info(f"Non-object JSON body ({type(data).__name__}), using defaults")
        data = {}

    return GiftRequest.model_validate(data)


def error_response(exc: ProxyError) -> ProxyResponse:
    if isinstance(exc, MethodNotAllowed):
        return ProxyResponse(status_code=405, body=exc.message, content_type="text/plain")
    return ProxyResponse(status_code=exc.status_code, body=exc.to_body())


async def _generate(
    request: ProxyRequest,
    settings: Settings,
    client: Optional[httpx.AsyncClient],
) -> Any:
    if request.method.upper() != "POST":
        raise MethodNotAllowed(request.method)

    api_key = get_api_key()
    if not api_key:
        raise MissingConfiguration(f"Missing {API_KEY_ENV} in environment variables.")

    gift_request = _parse_body(request.body)
    prompt = build_prompt(gift_request, settings.budget_labels)
    logger.debug(f"Prompt built ({len(prompt)} chars)")

    payload = await call_llm(prompt, api_key, settings, client=client)

    text = extract_text(payload)
    logger.debug(f"Gemini text length: {len(text)}")

    parsed = parse_gift_json(text)
    return validate_gifts(parsed, strict=settings.strict_validation)


async def handle(
    request: ProxyRequest,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ProxyResponse:
    """
    Handle one gift-suggestion request.

    Args:
        request: platform-neutral method + raw body
        settings: process configuration (defaults to get_settings())
        client: optional shared httpx client for the Gemini call

    Returns:
        ProxyResponse with the gift JSON (200) or a structured error
    """
    settings = settings or get_settings()
    try:
        result = await _generate(request, settings, client)
    except MethodNotAllowed as e:
        logger.warning(f"Rejected {e.method or '<no method>'} request: only POST is allowed")
        return error_response(e)
    except ProxyError as e:
        log = logger.warning if e.status_code < 500 else logger.error
        log(f"Request failed with {e.status_code} ({e.code}): {e.message}")
        return error_response(e)
    except Exception:
        logger.exception("Unhandled error while generating gifts")
        return ProxyResponse(status_code=500, body={"error": "Internal server error."})

    logger.info(f"Returning {len(result['gifts'])} gift ideas")
    return ProxyResponse(status_code=200, body=result)

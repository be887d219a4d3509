"""
AWS Lambda / API Gateway (and Netlify-style event) adapter.

Translates the event dict into a ProxyRequest, runs the shared handler and
returns the {statusCode, headers, body} shape those platforms expect.
"""

import asyncio
from typing import Any, Dict

from dotenv import load_dotenv

from .handler import handle
from .schemas import ProxyRequest, ProxyResponse
from .utils import decode_body, to_json

load_dotenv()


def _event_method(event: Dict[str, Any]) -> str:
    # REST API (v1) events carry httpMethod, HTTP API (v2) events nest it
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "").upper()


def to_lambda_response(result: ProxyResponse) -> Dict[str, Any]:
    if result.is_json:
        body = to_json(result.body)
        content_type = "application/json"
    else:
        body = result.body or ""
        content_type = "text/plain"
    return {
        "statusCode": result.status_code,
        "headers": {"Content-Type": content_type},
        "body": body,
    }


def lambda_handler(event, context):
    """AWS Lambda handler."""
    if not isinstance(event, dict):
        event = {}
    request = ProxyRequest(
        method=_event_method(event),
        body=decode_body(event.get("body"), bool(event.get("isBase64Encoded"))),
    )
    result = asyncio.run(handle(request))
    return to_lambda_response(result)

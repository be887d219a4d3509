"""
FastAPI entrypoint for the gift-suggestion endpoint.

All request handling lives in handler.handle; this module only:
- Configures logging and environment
- Maps the ASGI request to a ProxyRequest and the ProxyResponse back
- Registers the route for every method so non-POST calls get the handler's 405
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from .config import get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from .handler import handle
from .schemas import ErrorResponse, GiftResponse, ProxyRequest, ProxyResponse

ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

# Same path the Netlify frontend already calls
GIFT_PATHS = ["/api/generate-gifts", "/.netlify/functions/generateGifts"]

app = FastAPI(title="Gift Suggestion Proxy")

if settings.cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["POST"],
        allow_headers=["Content-Type"],
    )


def to_http_response(result: ProxyResponse) -> Response:
    if result.is_json:
        return JSONResponse(status_code=result.status_code, content=result.body)
    return PlainTextResponse(status_code=result.status_code, content=result.body or "")


async def generate_gifts_endpoint(request: Request) -> Response:
    body = await request.body()
    result = await handle(ProxyRequest(method=request.method, body=body), settings)
    return to_http_response(result)


for path in GIFT_PATHS:
    app.add_api_route(
        path,
        generate_gifts_endpoint,
        methods=ROUTE_METHODS,
        response_model=None,
        responses={
            200: {"model": GiftResponse},
            400: {"model": ErrorResponse},
            405: {"content": {"text/plain": {}}},
            500: {"model": ErrorResponse},
            502: {"model": ErrorResponse},
        },
        include_in_schema=path.startswith("/api/"),
    )


@app.get("/health")
async def health():
    return {"status": "ok"}

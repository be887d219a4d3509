import json
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.main import app

from conftest import gemini_payload, make_gifts

client = TestClient(app, raise_server_exceptions=False)

PATHS = ["/api/generate-gifts", "/.netlify/functions/generateGifts"]


@pytest.mark.parametrize("path", PATHS)
def test_post_returns_gifts(path, api_key, gift_body):
    gifts = {"gifts": make_gifts(10)}
    with patch("app.handler.call_llm", new_callable=AsyncMock) as mock_call:
        mock_call.return_value = gemini_payload(json.dumps(gifts, ensure_ascii=False))
        response = client.post(path, content=gift_body, headers={"Content-Type": "application/json"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == gifts


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
def test_other_methods_get_plain_text_405(method, api_key):
    with patch("app.handler.call_llm", new_callable=AsyncMock) as mock_call:
        response = client.request(method, "/api/generate-gifts")
    assert response.status_code == 405
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Method Not Allowed"
    mock_call.assert_not_called()


def test_invalid_json_is_400(api_key):
    response = client.post("/api/generate-gifts", content=b"{", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body."}


def test_missing_key_is_500(no_api_key):
    response = client.post("/api/generate-gifts", json={})
    assert response.status_code == 500
    assert response.json() == {"error": "Missing GEMINI_API_KEY in environment variables."}


def test_upstream_shape_is_502(api_key):
    with patch("app.handler.call_llm", new_callable=AsyncMock) as mock_call:
        mock_call.return_value = gemini_payload('{"gift": []}')
        response = client.post("/api/generate-gifts", json={"budget": "under-500"})
    assert response.status_code == 502
    assert response.json() == {"error": "Unexpected response format.", "raw": {"gift": []}}


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.parametrize("text", ['{"gifts": [], "score": NaN}', '{"gifts": [{"price": Infinity}]}'])
def test_non_standard_json_from_gemini_is_json_502(text, api_key):
    with patch("app.handler.call_llm", new_callable=AsyncMock) as mock_call:
        mock_call.return_value = gemini_payload(text)
        response = client.post("/api/generate-gifts", json={})
    assert response.status_code == 502
    assert response.headers["content-type"].startswith("application/json")
    assert response.json() == {"error": "Gemini did not return valid JSON.", "raw": text}


def test_unicode_and_nested_values_survive_serialization(api_key):
    gifts = {"gifts": [{"title": "चाय सेट ☕", "price_range_inr": "₹5,000+", "tags": [1.5, None, {"deep": True}]}]}
    with patch("app.handler.call_llm", new_callable=AsyncMock) as mock_call:
        mock_call.return_value = gemini_payload(json.dumps(gifts, ensure_ascii=False))
        response = client.post("/api/generate-gifts", json={"budget": 500, "occasion": 18})
    assert response.status_code == 200
    assert response.json() == gifts


def test_array_body_falls_back_to_defaults(api_key):
    with patch("app.handler.call_llm", new_callable=AsyncMock) as mock_call:
        mock_call.return_value = gemini_payload('{"gifts": []}')
        response = client.post("/api/generate-gifts", content=b"[]")
    assert response.status_code == 200
    assert "₹1,000–₹2,000" in mock_call.await_args.args[0]

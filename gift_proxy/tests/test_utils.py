import base64
import math

import pytest

from app.utils import decode_body, strict_loads, to_json, truncate


@pytest.mark.parametrize("text", ["NaN", "[Infinity]", '{"a": -Infinity}'])
def test_strict_loads_rejects_non_standard_constants(text):
    with pytest.raises(ValueError):
        strict_loads(text)


def test_strict_loads_accepts_bytes():
    assert strict_loads(b'{"gifts": [1.5e3]}') == {"gifts": [1500.0]}


def test_to_json_refuses_nan():
    with pytest.raises(ValueError):
        to_json({"score": math.nan})


def test_to_json_keeps_unicode():
    assert to_json({"budget": "₹5,000+"}) == '{"budget": "₹5,000+"}'


def test_decode_body():
    assert decode_body(None) == b""
    assert decode_body("{}") == b"{}"
    assert decode_body(base64.b64encode(b"{}").decode("ascii"), is_base64=True) == b"{}"


def test_truncate():
    assert truncate("x" * 3000) == "x" * 2000
    assert truncate(None) == ""

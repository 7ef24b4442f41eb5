import asyncio
import json

import httpx
import pytest

from spamguard.prediction_client import (
    PredictionClient,
    PredictionError,
    PredictionResult,
    TransportError,
    UpstreamError,
)


def make_client(handler, base_url="http://classifier.test"):
    return PredictionClient(base_url=base_url, timeout=5.0, transport=httpx.MockTransport(handler))


def test_predict_posts_text_and_parses_result():
    seen = {}

    def handler(request):
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"class": "1", "confidence": 0.873})

    result = asyncio.run(make_client(handler).predict("Claim your prize now"))

    assert result == PredictionResult(label="1", confidence=0.873)
    assert seen == {
        "method": "POST",
        "url": "http://classifier.test/predict",
        "body": {"text": "Claim your prize now"},
    }


def test_trailing_slash_in_base_url_is_ignored():
    client = PredictionClient(base_url="http://classifier.test/")
    assert client.predict_url == "http://classifier.test/predict"


def test_numeric_class_is_normalized_to_string():
    def handler(request):
        return httpx.Response(200, json={"class": 0, "confidence": "0.5"})

    result = asyncio.run(make_client(handler).predict("hi"))

    assert result.label == "0"
    assert result.confidence == 0.5


def test_non_success_status_raises_upstream_error():
    def handler(request):
        return httpx.Response(503, text="overloaded")

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(make_client(handler).predict("hi"))

    assert exc_info.value.status_code == 503
    assert "503" in str(exc_info.value)


def test_network_failure_raises_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError):
        asyncio.run(make_client(handler).predict("hi"))


def test_malformed_body_raises_prediction_error():
    def handler(request):
        return httpx.Response(200, json={"label": "1"})

    with pytest.raises(PredictionError) as exc_info:
        asyncio.run(make_client(handler).predict("hi"))

    assert not isinstance(exc_info.value, (UpstreamError, TransportError))

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from docchat.base.backends import BackendRegistry, register_openai_compatible
from docchat.base.models import ContentPart, GenerationParams, Message
from docchat.base.models_parts.http_request import REDACTED
from docchat.base.openai_style_parts import build_http_request, build_request, style_for

MESSAGES = [Message("system", "Be brief."), Message("user", "Hi")]


def test_body_shape_and_message_order(registry):
    backend = registry.lookup("local")
    body = build_request(MESSAGES, GenerationParams(model="llama", stream=True), backend)
    assert body == {  # nosec B101
        "model": "llama",
        "messages": [{"role": "system", "content": "Be brief."}, {"role": "user", "content": "Hi"}],
        "stream": True,
    }


def test_optional_params_only_when_set(registry):
    backend = registry.lookup("local")
    body = build_request(MESSAGES, GenerationParams(model="llama", temperature=0.2, max_tokens=64), backend)
    assert body["temperature"] == 0.2  # nosec B101
    assert body["max_tokens"] == 64  # nosec B101
    assert body["stream"] is False  # nosec B101


@pytest.mark.parametrize(
    "requested, backend_stream, enabled, expected",
    [
        (True, True, True, True),
        (True, False, True, False),
        (True, True, False, False),
        (False, True, True, False),
    ],
)
def test_stream_requires_all_three(requested, backend_stream, enabled, expected):
    reg = BackendRegistry()
    backend = register_openai_compatible(reg, "b", stream=backend_stream, models=("m",))
    body = build_request(MESSAGES, GenerationParams(model="m", stream=requested), backend, streaming_enabled=enabled)
    assert body["stream"] is expected  # nosec B101


def test_request_params_sit_underneath_core_keys():
    reg = BackendRegistry()
    backend = register_openai_compatible(reg, "b", request_params={"top_p": 0.5, "model": "ignored"})
    body = build_request(MESSAGES, GenerationParams(model="real"), backend)
    assert body["top_p"] == 0.5  # nosec B101
    assert body["model"] == "real"  # nosec B101


def test_multimodal_content_serialization(registry):
    parts = [ContentPart.of_text("look:"), ContentPart.of_image("data:image/png;base64,AAA")]
    body = build_request([Message("user", parts)], GenerationParams(model="llava"), registry.lookup("local"))
    assert body["messages"][0]["content"] == [  # nosec B101
        {"type": "text", "text": "look:"},
        {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAA"}},
    ]


def test_http_request_headers_and_redaction(registry):
    backend = registry.lookup("local")
    body = build_request(MESSAGES, GenerationParams(model="llama", stream=True), backend)
    req = build_http_request(body, backend)
    assert req.url == "http://localhost:8080/v1/chat/completions"  # nosec B101
    assert req.method == "POST"  # nosec B101
    assert req.stream is True  # nosec B101
    assert req.headers == {"Content-Type": "application/json", "Authorization": "Bearer sk-test"}  # nosec B101
    assert req.redacted_headers()["Authorization"] == REDACTED  # nosec B101
    assert json.loads(req.body_bytes()) == body  # nosec B101


def test_backend_headers_override_defaults():
    reg = BackendRegistry()
    backend = register_openai_compatible(reg, "b", header={"Content-Type": "application/json; charset=utf-8"})
    req = build_http_request({"stream": False}, backend)
    assert req.headers["Content-Type"] == "application/json; charset=utf-8"  # nosec B101


def test_style_dispatch_builds_http_request(registry):
    backend = registry.lookup("local")
    req = style_for(backend).build_request(MESSAGES, GenerationParams(model="llama"), backend)
    assert req.body["model"] == "llama"  # nosec B101


@pytest.mark.parametrize("kwargs", [{"model": ""}, {"model": "m", "temperature": 3.0}, {"model": "m", "max_tokens": 0}])
def test_generation_params_validation(kwargs):
    with pytest.raises(ValidationError):
        GenerationParams(**kwargs)

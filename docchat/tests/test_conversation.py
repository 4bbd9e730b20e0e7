from __future__ import annotations

import httpx
import pytest

from docchat.base.errors import BackendNotFound, ErrorCode, ProviderError
from docchat.base.backends import BackendRegistry, register_openai_compatible
from docchat.config import Settings
from docchat.document import Document
from docchat.service.conversation import Conversation, default_registry

TEXT = "### Hi\nHello\n### What's 2+2?"
DOC = Document(TEXT, response_spans=((7, 12),), mode="markdown")


def test_default_registry_has_openai():
    reg = default_registry()
    backend = reg.lookup("openai")
    assert backend.url == "https://api.openai.com/v1/chat/completions"  # nosec B101
    assert backend.supports_streaming  # nosec B101
    assert backend.supports_images("gpt-4o")  # nosec B101


def test_prepare_builds_request(registry):
    conv = Conversation(registry, Settings(system_prompt="sys", backend="local", model=None))
    req = conv.prepare(DOC, backend="local", model="llama", temperature=0.3)
    assert req.url == "http://localhost:8080/v1/chat/completions"  # nosec B101
    assert req.stream is True  # nosec B101
    assert req.body["model"] == "llama"  # nosec B101
    assert req.body["temperature"] == 0.3  # nosec B101
    assert req.body["messages"] == [  # nosec B101
        {"role": "system", "content": "sys"},
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "Hello"},
        {"role": "user", "content": "What's 2+2?"},
    ]


def test_model_falls_back_to_backend_first_model(registry):
    conv = Conversation(registry, Settings(backend="local", model=None))
    assert conv.prepare(DOC).body["model"] == "llama"  # nosec B101


def test_global_stream_switch_disables_streaming(registry):
    conv = Conversation(registry, Settings(backend="local", stream=False))
    assert conv.prepare(DOC, stream=True).stream is False  # nosec B101


def test_unknown_backend(registry):
    conv = Conversation(registry, Settings())
    with pytest.raises(BackendNotFound):
        conv.prepare(DOC, backend="ghost")


def test_no_model_available():
    reg = BackendRegistry()
    register_openai_compatible(reg, "empty", key="k")
    conv = Conversation(reg, Settings(backend="empty", model=None))
    with pytest.raises(ProviderError) as exc:
        conv.prepare(DOC)
    assert exc.value.code is ErrorCode.VALIDATION  # nosec B101


def test_missing_key_warns(events):
    conv = Conversation(default_registry(), Settings())
    conv.prepare(DOC)
    warned = [e for e in events if e.get("event") == "chat.missing_key"]
    assert warned and warned[-1]["env_var"] == "OPENAI_API_KEY"  # nosec B101
    assert warned[-1]["level"] == "WARNING"  # nosec B101


def test_images_only_for_media_models(registry, tmp_path, tmp_png):
    doc = Document("Describe\n![cat](cat.png)", mode="markdown", base_dir=tmp_path)
    conv = Conversation(registry, Settings(backend="local"))
    with_images = conv.prepare(doc, model="llava").body["messages"][-1]["content"]
    text_only = conv.prepare(doc, model="llama").body["messages"][-1]["content"]
    assert isinstance(with_images, list)  # nosec B101
    assert text_only == "Describe\n![cat](cat.png)"  # nosec B101


def test_send_streams_and_logs(registry, events):
    sse = b'data: {"choices":[{"delta":{"content":"4"}}]}\ndata: [DONE]\n'
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200, content=sse)))
    conv = Conversation(registry, Settings(backend="local"))
    deltas = []
    assert conv.send(DOC, model="llama", on_delta=deltas.append, client=client) == "4"  # nosec B101
    assert deltas == ["4"]  # nosec B101
    names = [e.get("event") for e in events]
    assert "chat.start" in names and "chat.finish" in names  # nosec B101


def test_send_logs_error(registry, events):
    client = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(503, text="down")))
    conv = Conversation(registry, Settings(backend="local"))
    with pytest.raises(ProviderError):
        conv.send(DOC, model="llama", client=client)
    errors = [e for e in events if e.get("event") == "chat.error"]
    assert errors and errors[-1]["error_code"] == "unavailable"  # nosec B101

"""Contract tests for the incremental stream parser."""

from __future__ import annotations

import json

import pytest

from docchat.base.streaming import StreamParser, accumulate_events, extract_delta_content, iter_stream_events


def _frame(content) -> str:
    return "data: " + json.dumps({"choices": [{"delta": {"content": content}}]}, ensure_ascii=False) + "\n"


STREAM = (
    ": keep-alive\n"
    + 'data: {"choices":[{"delta":{"role":"assistant"}}]}\n'
    + _frame("Hé")
    + "event: ping\n\n"
    + _frame("llo ")
    + _frame("wörld ✓")
    + "data: [DONE]\n"
).encode("utf-8")


def test_two_chunks_split_inside_frame():
    parser = StreamParser()
    first = parser.feed(b'data: {"choices":[{"delta":{"content":"Hel"}}]}\ndata: {"choi')
    second = parser.feed(b'ces":[{"delta":{"content":"lo"}}]}\ndata: [DONE]\n')
    assert first == ["Hel"]  # nosec B101
    assert second == ["lo"]  # nosec B101
    assert parser.done  # nosec B101
    assert parser.finish() == "Hello"  # nosec B101


def test_every_split_point_yields_same_fragments():
    expected = StreamParser()
    expected.feed(STREAM)
    want = expected.fragments
    assert want == ["Hé", "llo ", "wörld ✓"]  # nosec B101
    for i in range(len(STREAM) + 1):
        parser = StreamParser()
        got = parser.feed(STREAM[:i]) + parser.feed(STREAM[i:])
        assert got == want, f"split at byte {i}"  # nosec B101


def test_byte_at_a_time():
    parser = StreamParser()
    got = []
    for i in range(len(STREAM)):
        got.extend(parser.feed(STREAM[i : i + 1]))
    assert "".join(got) == "Héllo wörld ✓"  # nosec B101
    assert parser.done  # nosec B101


def test_unterminated_line_waits_until_finish():
    parser = StreamParser()
    assert parser.feed(_frame("tail").rstrip("\n")) == []  # nosec B101
    assert parser.text == ""  # nosec B101
    assert parser.finish() == "tail"  # nosec B101


def test_empty_chunk_is_noop():
    parser = StreamParser()
    parser.feed(_frame("a"))
    assert parser.feed(b"") == []  # nosec B101
    assert parser.feed(None) == []  # nosec B101
    assert parser.text == "a"  # nosec B101


def test_done_tolerates_whitespace_and_crlf():
    parser = StreamParser()
    parser.feed(_frame("x").replace("\n", "\r\n") + "data:   [DONE]  \r\n")
    assert parser.done  # nosec B101
    assert parser.text == "x"  # nosec B101


def test_null_and_empty_content_contribute_nothing():
    parser = StreamParser()
    out = parser.feed(_frame(None) + _frame("") + 'data: {"choices":[]}\n' + _frame("ok"))
    assert out == ["ok"]  # nosec B101


def test_malformed_terminated_line_is_skipped_and_logged(events):
    parser = StreamParser(provider="local", model="llama")
    out = parser.feed("data: {not json}\n" + _frame("after"))
    assert out == ["after"]  # nosec B101
    malformed = [e for e in events if e.get("event") == "stream.frame_malformed"]
    assert len(malformed) == 1  # nosec B101
    assert malformed[0]["level"] == "WARNING"  # nosec B101
    assert malformed[0]["provider"] == "local"  # nosec B101


def test_fragments_are_never_reemitted():
    parser = StreamParser()
    first = parser.feed(_frame("a"))
    again = parser.feed(_frame("b"))
    assert first == ["a"] and again == ["b"]  # nosec B101
    assert parser.finish() == "ab"  # nosec B101
    assert parser.finish() == "ab"  # nosec B101


@pytest.mark.parametrize(
    "event, expected",
    [
        ({"choices": [{"delta": {"content": "x"}}]}, "x"),
        ({"choices": [{"delta": {}}]}, None),
        ({"choices": [{}]}, None),
        ({"choices": "bad"}, None),
        ([], None),
    ],
)
def test_extract_delta_content(event, expected):
    assert extract_delta_content(event) == expected  # nosec B101


def test_iter_stream_events_terminal_event():
    chunks = [STREAM[:30], STREAM[30:]]
    evs = list(iter_stream_events(chunks, provider="p", model="m"))
    assert evs[-1].finish and evs[-1].delta is None  # nosec B101
    assert all(not e.finish for e in evs[:-1])  # nosec B101
    assert accumulate_events(evs) == "Héllo wörld ✓"  # nosec B101

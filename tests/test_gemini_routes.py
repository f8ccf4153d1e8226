"""Tests for the Gemini NDJSON and WebSocket streaming routes"""

import json

from omnia_gateway.config import settings
from omnia_gateway.dependencies import get_gemini
from omnia_gateway.errors import VendorError
from omnia_gateway.main import app
from omnia_gateway.messages import localize

from conftest import FakeGemini, text_candidate

GROUNDING = {
    "grounding_chunks": [{"web": {"uri": "https://pocasi.test", "title": "Počasí"}}],
    "grounding_supports": [{"segment": {"text": "V Praze je 20 stupňů"}, "grounding_chunk_indices": [0]}],
}

REQUEST = {
    "requestId": "req-1",
    "messages": [{"sender": "user", "text": "Jaké je počasí v Praze?"}],
    "language": "cs",
}


def events(response):
    return [json.loads(line) for line in response.text.splitlines() if line]


def test_raw_stream(client):
    fake = FakeGemini([text_candidate("Ahoj "), text_candidate("světe")])
    app.dependency_overrides[get_gemini] = lambda: fake

    response = client.post("/api/gemini", json=REQUEST)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/x-ndjson")
    assert response.headers["x-accel-buffering"] == "no"
    assert events(response) == [
        {"requestId": "req-1", "type": "text", "content": "Ahoj "},
        {"requestId": "req-1", "type": "text", "content": "světe"},
        {"requestId": "req-1", "type": "completed", "sources": [], "webSearchUsed": False},
    ]
    call = fake.calls[0]
    assert call["system_instruction"].endswith("VŽDY odpovídaj v jazyce: češtině")
    assert call["max_tokens"] == settings.gemini_max_tokens
    assert "Aktuální čas:" in call["contents"][-1]["parts"][0]["text"]


def test_search_start_sent_once_with_sources(client):
    app.dependency_overrides[get_gemini] = lambda: FakeGemini([
        text_candidate("V Praze ", GROUNDING),
        text_candidate("je hezky.", GROUNDING),
    ])

    result = events(client.post("/api/gemini", json=REQUEST))

    search_events = [event for event in result if event.get("type") == "search_start"]
    assert len(search_events) == 1
    assert search_events[0]["message"] == localize("google_searching")
    assert result[0]["type"] == "search_start"
    completed = result[-1]
    assert completed["type"] == "completed"
    assert completed["webSearchUsed"] is True
    assert completed["sources"] == [{
        "title": "Počasí",
        "url": "https://pocasi.test",
        "snippet": "V Praze je 20 stupňů...",
    }]


def test_chunked_stream_reassembles_text(client, monkeypatch):
    monkeypatch.setattr(settings, "stream_word_delay_ms", 0)
    app.dependency_overrides[get_gemini] = lambda: FakeGemini([
        text_candidate("Ahoj, jak se "),
        text_candidate("**Dobře** díky"),
    ])

    result = events(client.post("/api/gemini-ws", json=REQUEST))

    texts = [event["content"] for event in result if event["type"] == "text"]
    assert texts == ["Ahoj, ", "jak ", "se ", "**Dobře**", " díky"]
    assert result[-1]["type"] == "completed"
    assert result[-1]["fullText"] == "Ahoj, jak se **Dobře** díky"


def test_setup_failure_is_single_error_event(client):
    app.dependency_overrides[get_gemini] = lambda: FakeGemini(start_error=VendorError("Gemini", 403, "denied"))

    result = events(client.post("/api/gemini", json=REQUEST))

    assert len(result) == 1
    assert result[0]["requestId"] == "req-1"
    assert result[0]["error"] is True
    assert result[0]["message"].startswith("Server error: ")


def test_provisioning_error_message(client):
    app.dependency_overrides[get_gemini] = lambda: FakeGemini(
        start_error=RuntimeError("Service agents are being provisioned for this project")
    )
    result = events(client.post("/api/gemini", json=REQUEST))
    assert result[0]["message"] == localize("service_agents_provisioning")


def test_mid_stream_failure_ends_with_error(client):
    app.dependency_overrides[get_gemini] = lambda: FakeGemini(
        [text_candidate("Začátek")],
        stream_error=RuntimeError("connection reset"),
    )

    result = events(client.post("/api/gemini", json=REQUEST))

    assert [event["type"] for event in result] == ["text", "error", "end"]
    assert result[1]["message"] == "Stream processing failed: connection reset"
    assert result[2]["error"] is True


def test_missing_credentials_reported_in_stream(client):
    app.dependency_overrides[get_gemini] = lambda: None
    result = events(client.post("/api/gemini", json=REQUEST))
    assert result == [{"requestId": "req-1", "error": True, "message": localize("google_credentials_missing")}]


def test_websocket_round_trip(client, monkeypatch):
    monkeypatch.setattr(settings, "stream_word_delay_ms", 0)
    app.dependency_overrides[get_gemini] = lambda: FakeGemini([text_candidate("Ahoj světe")])

    with client.websocket_connect("/api/gemini-ws") as websocket:
        websocket.send_text("not json")
        assert websocket.receive_json() == {"error": True, "message": "Invalid message format"}

        websocket.send_text(json.dumps(REQUEST))
        received = []
        while True:
            event = websocket.receive_json()
            received.append(event)
            if event.get("type") == "completed":
                break

    assert [event["content"] for event in received if event["type"] == "text"] == ["Ahoj ", "světe"]
    assert received[-1]["fullText"] == "Ahoj světe"


def test_websocket_setup_error_prefix(client):
    app.dependency_overrides[get_gemini] = lambda: FakeGemini(start_error=RuntimeError("bad model"))

    with client.websocket_connect("/api/gemini-ws") as websocket:
        websocket.send_text(json.dumps(REQUEST))
        event = websocket.receive_json()

    assert event == {"requestId": "req-1", "error": True, "message": "WebSocket error: bad model"}


def test_websocket_accepts_binary_frames(client, monkeypatch):
    monkeypatch.setattr(settings, "stream_word_delay_ms", 0)
    app.dependency_overrides[get_gemini] = lambda: FakeGemini([text_candidate("Ahoj")])

    with client.websocket_connect("/api/gemini-ws") as websocket:
        websocket.send_bytes(b"\xff\xfe")
        assert websocket.receive_json() == {"error": True, "message": "Invalid message format"}

        websocket.send_bytes(json.dumps(REQUEST).encode("utf-8"))
        received = []
        while True:
            event = websocket.receive_json()
            received.append(event)
            if event.get("type") == "completed":
                break

    assert received[-1]["fullText"] == "Ahoj"
    assert received[-1]["requestId"] == "req-1"


def test_websocket_rejects_non_object_message(client):
    app.dependency_overrides[get_gemini] = lambda: FakeGemini([text_candidate("Ahoj")])

    with client.websocket_connect("/api/gemini-ws") as websocket:
        websocket.send_text("[1, 2]")
        assert websocket.receive_json() == {"error": True, "message": "Invalid message format"}

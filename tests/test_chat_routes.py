"""Tests for the Claude and OpenAI chat routes"""

from types import SimpleNamespace

from omnia_gateway.dependencies import get_claude, get_openai
from omnia_gateway.errors import VendorError
from omnia_gateway.main import app
from omnia_gateway.routes.chat import to_claude_messages

from conftest import FakeClaude, FakeOpenAI, claude_message


def test_health_reports_missing_vendors(client):
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert body["services"]["claude"] == "missing"


def test_liveness(client):
    assert client.get("/health/live").json() == {"status": "alive"}


def test_missing_key_is_configuration_error(client):
    response = client.post("/api/claude", json={"messages": []})
    assert response.status_code == 500
    assert response.json()["error"] == "Configuration error"
    assert "Claude" in response.json()["message"]


def test_claude_requires_message_list(client):
    app.dependency_overrides[get_claude] = lambda: FakeClaude()
    response = client.post("/api/claude", json={"messages": "nope"})
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_claude_sends_recent_messages(client):
    fake = FakeClaude([claude_message("Jsem Omnia.")])
    app.dependency_overrides[get_claude] = lambda: fake
    messages = [{"sender": "user" if i % 2 == 0 else "bot", "text": f"zpráva {i}"} for i in range(9)]

    response = client.post("/api/claude", json={"messages": messages})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["content"][0]["text"] == "Jsem Omnia."
    assert body["usage"]["output_tokens"] == 8
    sent = fake.calls[0]["messages"]
    assert len(sent) == 5
    assert sent[0] == {"role": "user", "content": "zpráva 4"}
    assert sent[-1] == {"role": "user", "content": "zpráva 8"}
    assert fake.calls[0]["system"].startswith("Jsi Omnia")


def test_claude_vendor_error_keeps_status(client):
    app.dependency_overrides[get_claude] = lambda: FakeClaude([VendorError("Claude", 529, "overloaded")])

    response = client.post("/api/claude", json={"messages": [{"role": "user", "content": "Ahoj"}]})

    assert response.status_code == 529
    body = response.json()
    assert body["error"] == "Claude API error"
    assert body["status"] == 529
    assert body["details"] == "overloaded"


def test_claude_empty_answer(client):
    app.dependency_overrides[get_claude] = lambda: FakeClaude([claude_message("   ")])
    response = client.post("/api/claude", json={"messages": [{"role": "user", "content": "Ahoj"}]})
    assert response.status_code == 500
    assert response.json()["error"] == "Invalid response from Claude"


def test_to_claude_messages_accepts_both_shapes():
    assert to_claude_messages([
        {"sender": "user", "text": "Ahoj"},
        {"sender": "bot", "text": "Čau"},
        {"role": "user", "content": "Jak je?"},
        "garbage",
    ]) == [
        {"role": "user", "content": "Ahoj"},
        {"role": "assistant", "content": "Čau"},
        {"role": "user", "content": "Jak je?"},
    ]


def web_search_message(text):
    return SimpleNamespace(
        model="claude-test",
        usage=None,
        content=[
            SimpleNamespace(type="server_tool_use", name="web_search"),
            SimpleNamespace(type="text", text=text),
        ],
    )


def test_web_search_requires_query(client):
    app.dependency_overrides[get_claude] = lambda: FakeClaude()
    response = client.post("/api/claude-web-search", json={"query": ""})
    assert response.status_code == 400
    assert response.json()["error"] == "Query is required"


def test_web_search_answer(client):
    fake = FakeClaude([web_search_message("Dnes je v Praze dvacet stupňů a cena bitcoinu je vysoká.")])
    app.dependency_overrides[get_claude] = lambda: fake

    response = client.post("/api/claude-web-search", json={"query": "Počasí v Praze", "language": "cs"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["webSearchUsed"] is True
    assert body["sources"][0]["domain"] == "claude-search"
    assert body["language"] == "cs"
    assert body["query"] == "Počasí v Praze"
    assert "timestamp" in body
    assert len(fake.calls) == 1
    assert fake.calls[0]["tools"][0]["name"] == "web_search"
    assert "Respond ONLY in Czech" in fake.calls[0]["messages"][0]["content"]


def test_web_search_translates_wrong_language(client):
    fake = FakeClaude([
        web_search_message("Today the stock price is twenty dollars."),
        claude_message("Dnes je cena akcie dvacet dolarů."),
    ])
    app.dependency_overrides[get_claude] = lambda: fake

    response = client.post("/api/claude-web-search", json={"query": "Cena akcie", "language": "cs"})

    assert response.status_code == 200
    assert response.json()["result"] == "Dnes je cena akcie dvacet dolarů."
    assert len(fake.calls) == 2
    assert "Czech" in fake.calls[1]["system"]


def test_web_search_vendor_error(client):
    app.dependency_overrides[get_claude] = lambda: FakeClaude([VendorError("Claude", 500, "boom")])
    response = client.post("/api/claude-web-search", json={"query": "x", "language": "en"})
    assert response.status_code == 500
    assert response.json()["error"] == "Claude API error: 500"
    assert response.json()["message"] == "Could not get search results."


def test_openai_passthrough(client):
    completion = {"id": "chatcmpl-1", "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hi"}}]}
    fake = FakeOpenAI(chat_response=completion)
    app.dependency_overrides[get_openai] = lambda: fake

    response = client.post("/api/openai", json={"messages": [{"role": "user", "content": "Hello"}]})

    assert response.status_code == 200
    assert response.json() == completion
    assert fake.chat_calls[0]["messages"] == [{"role": "user", "content": "Hello"}]


def test_openai_without_choices(client):
    app.dependency_overrides[get_openai] = lambda: FakeOpenAI(chat_response={"id": "x", "choices": []})
    response = client.post("/api/openai", json={"messages": []})
    assert response.status_code == 500
    assert response.json()["error"] == "Invalid response from OpenAI"


def test_openai_vendor_error(client):
    app.dependency_overrides[get_openai] = lambda: FakeOpenAI(chat_response=VendorError("OpenAI", 401, "bad key"))
    response = client.post("/api/openai", json={"messages": []})
    assert response.status_code == 401
    assert response.json()["error"] == "OpenAI API error"

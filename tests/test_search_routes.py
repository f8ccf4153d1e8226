"""Tests for the Grok, Perplexity, Sonar and Google search routes"""

import json
from datetime import datetime, timezone

import pytest

from omnia_gateway.config import settings
from omnia_gateway.dependencies import get_google_search, get_grok, get_perplexity
from omnia_gateway.errors import VendorError
from omnia_gateway.main import app
from omnia_gateway.messages import localize
from omnia_gateway.models import ChatMessage
from omnia_gateway.prompts import GROK_SYSTEM_PROMPT, SONAR_PROMPTS, perplexity_prompt
from omnia_gateway.services.grok_relay import SEARCH_PARAMETERS, enhance_time_aware, grok_messages

from conftest import FakeGoogleSearch, FakeOpenAI


def completion(content, **extra):
    return {
        "model": "test-model",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        **extra,
    }


def events(response):
    return [json.loads(line) for line in response.text.splitlines() if line]


@pytest.fixture
def no_delays(monkeypatch):
    monkeypatch.setattr(settings, "grok_word_delay_ms", 0)
    monkeypatch.setattr(settings, "grok_search_pause_ms", 0)


# Grok

def test_grok_streams_words_with_citations(client, no_delays):
    fake = FakeOpenAI(chat_response=completion("Bitcoin stojí hodně", citations=["https://btc.test"]))
    app.dependency_overrides[get_grok] = lambda: fake

    response = client.post("/api/grok", json={"messages": [{"sender": "user", "text": "Jaká je cena bitcoinu?"}]})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/x-ndjson")
    result = events(response)
    assert result[0] == {"type": "search_start", "message": localize("searching_latest")}
    assert [event["content"] for event in result if event["type"] == "text"] == ["Bitcoin ", "stojí ", "hodně "]
    assert result[-1] == {
        "type": "completed",
        "fullText": "Bitcoin stojí hodně",
        "citations": ["https://btc.test"],
        "webSearchUsed": True,
    }

    call = fake.chat_calls[0]
    assert call["max_tokens"] == settings.grok_max_tokens
    assert call["search_parameters"] == SEARCH_PARAMETERS
    assert call["messages"][0] == {"role": "system", "content": GROK_SYSTEM_PROMPT}
    assert call["messages"][-1]["content"].startswith("User query: Jaká je cena bitcoinu?. Start your response")


def test_grok_without_citations_skips_search_start(client, no_delays):
    app.dependency_overrides[get_grok] = lambda: FakeOpenAI(chat_response=completion("Ahoj"))

    result = events(client.post("/api/grok", json={"messages": [{"sender": "user", "text": "Ahoj"}]}))

    assert [event["type"] for event in result] == ["text", "completed"]
    assert result[-1]["webSearchUsed"] is False


def test_grok_empty_answer_uses_placeholder(client, no_delays):
    app.dependency_overrides[get_grok] = lambda: FakeOpenAI(chat_response=completion("  "))
    result = events(client.post("/api/grok", json={"messages": [{"sender": "user", "text": "?"}]}))
    assert result[-1]["fullText"] == localize("no_answer")


def test_grok_vendor_error_in_stream(client):
    app.dependency_overrides[get_grok] = lambda: FakeOpenAI(chat_response=VendorError("Grok", 401, "bad key"))
    result = events(client.post("/api/grok", json={"messages": [{"sender": "user", "text": "Ahoj"}]}))
    assert result == [{"error": True, "message": "HTTP 401: bad key"}]


def test_grok_missing_key_reported_in_stream(client):
    app.dependency_overrides[get_grok] = lambda: None
    result = events(client.post("/api/grok", json={"messages": [{"sender": "user", "text": "Ahoj"}]}))
    assert result == [{"error": True, "message": localize("config_missing", service="Grok")}]


def test_grok_requires_messages(client):
    app.dependency_overrides[get_grok] = lambda: FakeOpenAI()
    response = client.post("/api/grok", json={"messages": []})
    assert response.status_code == 400


def test_grok_messages_keep_recent_window():
    messages = [ChatMessage(sender="user" if i % 2 == 0 else "bot", text=f"zpráva {i}") for i in range(7)]

    converted = grok_messages(messages, "Systém")

    assert converted[0] == {"role": "system", "content": "Systém"}
    assert len(converted) == 1 + settings.grok_history_window
    assert converted[1] == {"role": "user", "content": "zpráva 2"}
    assert converted[-1] == {"role": "user", "content": "zpráva 6"}


def test_enhance_time_aware_uses_prague_time():
    now = datetime(2025, 1, 15, 11, 5, tzinfo=timezone.utc)
    assert enhance_time_aware("Ahoj", now) == "Ahoj"
    enhanced = enhance_time_aware("Weather today?", now)
    assert "exact Prague time 2025-01-15 12:05" in enhanced
    assert enhanced.endswith("Answer in user's language.")


# Perplexity

def test_perplexity_search_returns_numbered_sources(client):
    fake = FakeOpenAI(chat_response=completion(
        "Dnes je v Praze dvacet stupňů.",
        search_results=[{"title": "Počasí", "url": "https://pocasi.test/praha"}],
        citations=["https://pocasi.test/praha"],
        usage={"total_tokens": 42},
    ))
    app.dependency_overrides[get_perplexity] = lambda: fake

    response = client.post("/api/perplexity-search", json={"query": "Počasí v Praze", "language": "cs"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["result"] == "Dnes je v Praze dvacet stupňů."
    assert body["sources"] == [{"id": 1, "title": "Počasí", "url": "https://pocasi.test/praha", "domain": "pocasi.test"}]
    assert body["citations"] == ["https://pocasi.test/praha"]
    assert body["model"] == "test-model"
    assert body["usage"] == {"total_tokens": 42}

    call = fake.chat_calls[0]
    assert call["model"] == settings.perplexity_model
    assert call["max_tokens"] == 1500
    assert call["messages"][0]["content"].startswith("Jsi expert na vyhledávání")
    assert call["messages"][1] == {"role": "user", "content": "Počasí v Praze"}


def test_perplexity_sources_from_bare_citations(client):
    app.dependency_overrides[get_perplexity] = lambda: FakeOpenAI(chat_response=completion(
        "Answer", citations=["https://news.test/a"],
    ))
    body = client.post("/api/perplexity-search", json={"query": "news", "language": "en"}).json()
    assert body["sources"] == [{"id": 1, "title": "Zdroj 1", "url": "https://news.test/a", "domain": "news.test"}]


def test_perplexity_requires_query(client):
    app.dependency_overrides[get_perplexity] = lambda: FakeOpenAI()
    response = client.post("/api/perplexity-search", json={"query": "   "})
    assert response.status_code == 400
    assert response.json()["message"] == localize("search_query_required")


def test_perplexity_vendor_error(client):
    app.dependency_overrides[get_perplexity] = lambda: FakeOpenAI(chat_response=VendorError("Perplexity", 429, "slow down"))
    response = client.post("/api/perplexity-search", json={"query": "news"})
    assert response.status_code == 429
    body = response.json()
    assert body["error"] == "Perplexity search failed"
    assert body["retryable"] is True


def test_perplexity_invalid_structure(client):
    app.dependency_overrides[get_perplexity] = lambda: FakeOpenAI(chat_response={"choices": []})
    response = client.post("/api/perplexity-search", json={"query": "news"})
    assert response.status_code == 500
    assert response.json()["error"] == "Invalid response structure from Perplexity"


def test_perplexity_without_credentials(client):
    response = client.post("/api/perplexity-search", json={"query": "news"})
    assert response.status_code == 500
    assert response.json()["error"] == "Configuration error"


def test_perplexity_prompt_dates():
    today = datetime(2025, 3, 7)
    assert perplexity_prompt("en", today).endswith("CURRENT DATE: 3/7/2025")
    assert "(2025)" in perplexity_prompt("ro", today)
    assert perplexity_prompt("de", today) == perplexity_prompt("cs", today)


# Sonar

def test_sonar_search(client):
    fake = FakeOpenAI(chat_response=completion("Výsledek", citations=["https://a.test", {"title": "B"}]))
    app.dependency_overrides[get_perplexity] = lambda: fake

    response = client.post("/api/sonar-search", json={"query": "Zprávy", "language": "cs"})

    assert response.status_code == 200
    body = response.json()
    assert body["result"] == "Výsledek"
    assert body["sources"] == ["https://a.test", "B"]
    assert body["query"] == "Zprávy"
    call = fake.chat_calls[0]
    assert call["model"] == settings.sonar_model
    assert call["search_recency_filter"] == "week"
    assert call["messages"][0]["content"] == SONAR_PROMPTS["cs"]


def test_sonar_unknown_freshness_is_not_forwarded(client):
    fake = FakeOpenAI(chat_response=completion("ok"))
    app.dependency_overrides[get_perplexity] = lambda: fake
    client.post("/api/sonar-search", json={"query": "x", "freshness": "whenever"})
    assert "search_recency_filter" not in fake.chat_calls[0]


def test_sonar_vendor_error(client):
    app.dependency_overrides[get_perplexity] = lambda: FakeOpenAI(chat_response=VendorError("Perplexity", 400, "bad model"))
    response = client.post("/api/sonar-search", json={"query": "x"})
    assert response.status_code == 400
    assert response.json()["error"] == "Sonar API Error: 400"
    assert response.json()["details"] == "bad model"


# Google Custom Search

def test_google_search_results(client):
    fake = FakeGoogleSearch([{"title": "Omnia", "snippet": "AI", "link": "https://omnia.test"}])
    app.dependency_overrides[get_google_search] = lambda: fake

    response = client.post("/api/google-search", json={"query": "omnia", "language": "en"})

    assert response.json() == {"success": True, "results": [{"title": "Omnia", "snippet": "AI", "link": "https://omnia.test"}]}
    assert fake.calls[0] == {"query": "omnia", "language": "en"}


def test_google_search_no_results(client):
    app.dependency_overrides[get_google_search] = lambda: FakeGoogleSearch([])
    body = client.post("/api/google-search", json={"query": "nic"}).json()
    assert body == {"success": False, "message": localize("no_search_results"), "results": []}


def test_google_search_vendor_error(client):
    app.dependency_overrides[get_google_search] = lambda: FakeGoogleSearch(VendorError("Google Search", 403, "quota"))
    response = client.post("/api/google-search", json={"query": "x"})
    assert response.status_code == 403
    assert response.json()["error"] == "Google Search API error"

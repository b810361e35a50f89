import pytest
from fakes import FakeProvider, ScriptedRandom, score
from fastapi.testclient import TestClient
from loguru import logger

from humanly.api.app import create_app
from humanly.errors import UpstreamError


@pytest.fixture
def client(provider):
    with TestClient(create_app(provider=provider, rng=ScriptedRandom(5, 0, 0))) as c:
        yield c


def test_healthcheck(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"status": "AI Humanizer + Detector API running"}


def test_humanize(client):
    response = client.post("/humanize", json={"text": "The system works well."})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "humanized_text": (
            "So the thing works mostly. It is fast. You just set it up, and go."
        ),
        "words_used": 4,
        "words_left": 196,
        "trusted_human": True,
    }


@pytest.mark.parametrize("body", [{}, {"text": ""}, {"text": "   "}, {"text": None}])
def test_humanize_requires_text(client, body):
    response = client.post("/humanize", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "text required"}


def test_humanize_word_limit(client):
    accepted = client.post("/humanize", json={"text": " ".join(["word"] * 200)})
    rejected = client.post("/humanize", json={"text": " ".join(["word"] * 201)})

    assert accepted.status_code == 200
    assert rejected.status_code == 400
    assert rejected.json() == {"error": "word limit exceeded", "limit": 200}


def test_humanize_provider_failure_hides_details():
    provider = FakeProvider(rewrite=UpstreamError("secret upstream detail"))
    with TestClient(create_app(provider=provider)) as client:
        response = client.post("/humanize", json={"text": "The system works well."})

    assert response.status_code == 500
    assert response.json() == {"error": "Humanization failed"}


def test_humanize_empty_generation():
    with TestClient(create_app(provider=FakeProvider(rewrite=""))) as client:
        response = client.post("/humanize", json={"text": "The system works well."})

    assert response.status_code == 500
    assert response.json() == {"error": "Humanization failed"}


def test_detect():
    provider = FakeProvider(default_score=score(80, "Polished"))
    with TestClient(create_app(provider=provider)) as client:
        response = client.post(
            "/detect", json={"text": "The system works well. It is efficient."}
        )

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["words_used"] == 7
    assert body["words_left"] == 793
    assert body["overall"] == {
        "ai_probability": 95,
        "human_probability": 5,
        "verdict": "Likely AI-generated",
    }
    assert body["sentences"] == [
        {
            "sentence": "The system works well.",
            "ai": 80,
            "human": 20,
            "reason": "Polished",
            "highlight": "high",
        },
        {
            "sentence": "It is efficient.",
            "ai": 80,
            "human": 20,
            "reason": "Polished",
            "highlight": "high",
        },
    ]


def test_detect_trusted_human(client, provider):
    response = client.post(
        "/detect",
        json={"text": "The system works well. It is efficient.", "trusted_human": True},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["overall"]["verdict"] == "Human-written (Verified)"
    assert body["overall"]["ai_probability"] == 2
    assert provider.classify_calls == []


def test_detect_survives_failing_provider(failing_provider):
    with TestClient(create_app(provider=failing_provider)) as client:
        response = client.post(
            "/detect", json={"text": "The system works well. It is efficient."}
        )

    assert response.status_code == 200
    assert [s["reason"] for s in response.json()["sentences"]] == [
        "Neutral structured sentence",
        "Neutral structured sentence",
    ]


def test_detect_word_limit(client):
    accepted = client.post("/detect", json={"text": " ".join(["word"] * 800)})
    rejected = client.post("/detect", json={"text": " ".join(["word"] * 801)})

    assert accepted.status_code == 200
    assert rejected.status_code == 400
    assert rejected.json() == {"error": "word limit exceeded", "limit": 800}


def test_detect_requires_text(client):
    response = client.post("/detect", json={"trusted_human": True})

    assert response.status_code == 400
    assert response.json() == {"error": "text required"}


def test_malformed_body(client):
    response = client.post(
        "/detect", content="not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": "invalid request body"}


def test_unexpected_error_is_generic():
    class BrokenProvider(FakeProvider):
        async def classify(self, sentence, instructions):
            raise RuntimeError("secret internal detail")

    errors: list[str] = []
    handler_id = logger.add(errors.append, format="{message}", level="ERROR")
    app = create_app(provider=BrokenProvider())
    try:
        with TestClient(app) as client:
            response = client.post(
                "/detect",
                json={"text": "The system works well."},
                headers={"Origin": "https://example.com"},
            )
    finally:
        logger.remove(handler_id)

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert response.headers["access-control-allow-origin"] == "*"
    assert len(errors) == 1
    assert errors[0].startswith("Unexpected error in POST /detect.")

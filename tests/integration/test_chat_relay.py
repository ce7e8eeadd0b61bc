"""Integration tests for the streaming relay endpoint.

Requests go through the real FastAPI app with httpx AsyncClient and
ASGITransport. The upstream model is the scripted FakeRelayService from
conftest, except for tests marked requires_api_key.

Requirements:
    - OPENAI_API_KEY environment variable for the live test
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient

from biosarthi.api import app

CONVERSATION = {
    "messages": [
        {"role": "user", "content": "What is biogas?"},
        {"role": "assistant", "content": "A gas made from organic waste."},
        {"role": "user", "content": "How is it produced?"},
    ]
}


def has_openai_key() -> bool:
    """Check if OpenAI API key is configured."""
    key = os.environ.get("OPENAI_API_KEY", "")
    return bool(key and not key.isspace())


requires_api_key = pytest.mark.skipif(
    not has_openai_key(),
    reason="OPENAI_API_KEY not set - skipping LLM integration test",
)


class TestRelayEndpoint:
    """Integration tests for POST /api/chat."""

    async def test_streams_upstream_text_verbatim(self, async_client: AsyncClient, fake_relay) -> None:
        """Deltas reach the caller byte for byte, in order."""
        fake_relay.chunks = ["Anaerobic ", "digestion\n", "  of **manure**."]

        async with async_client.stream("POST", "/api/chat", json=CONVERSATION) as response:
            assert response.status_code == 200
            assert response.headers["content-type"].startswith("text/plain")
            body = "".join([text async for text in response.aiter_text()])

        assert body == "Anaerobic digestion\n  of **manure**."

    async def test_upstream_called_once_with_conversation(
        self, async_client: AsyncClient, fake_relay
    ) -> None:
        response = await async_client.post("/api/chat", json=CONVERSATION)

        assert response.status_code == 200
        assert len(fake_relay.calls) == 1
        assert [(m.role.value, m.content) for m in fake_relay.calls[0]] == [
            (m["role"], m["content"]) for m in CONVERSATION["messages"]
        ]

    async def test_empty_upstream_response_is_success(
        self, async_client: AsyncClient, fake_relay
    ) -> None:
        fake_relay.chunks = []

        response = await async_client.post("/api/chat", json=CONVERSATION)

        assert response.status_code == 200
        assert response.text == ""

    async def test_health(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "biosarthi-relay"}

    @requires_api_key
    async def test_live_completion_streams_text(self) -> None:
        """Real provider returns non-empty text for a simple question."""
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/api/chat",
                json={"messages": [{"role": "user", "content": "Say the word 'biogas' and nothing else"}]},
                timeout=60.0,
            )

        assert response.status_code == 200
        assert len(response.text) > 0


class TestRelayValidation:
    """Requests without a conversation are rejected before any upstream call."""

    @pytest.mark.parametrize(
        "payload",
        [{}, {"messages": None}, {"messages": []}],
        ids=["missing", "null", "empty"],
    )
    async def test_no_messages_returns_400(
        self, async_client: AsyncClient, fake_relay, payload: dict
    ) -> None:
        response = await async_client.post("/api/chat", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "No messages provided"}
        assert fake_relay.calls == []

    async def test_unknown_role_returns_422(self, async_client: AsyncClient, fake_relay) -> None:
        response = await async_client.post(
            "/api/chat",
            json={"messages": [{"role": "narrator", "content": "hi"}]},
        )

        assert response.status_code == 422
        assert fake_relay.calls == []

    async def test_invalid_json_returns_422(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/chat",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 422

    async def test_wrong_http_method_returns_405(self, async_client: AsyncClient) -> None:
        response = await async_client.get("/api/chat")

        assert response.status_code == 405


class TestRelayUpstreamFailure:
    """Tests for error scenarios in the upstream call."""

    async def test_failure_before_stream_returns_generic_500(
        self, async_client: AsyncClient, fake_relay
    ) -> None:
        fake_relay.fail_before = True

        response = await async_client.post("/api/chat", json=CONVERSATION)

        assert response.status_code == 500
        assert response.json() == {"error": "An error occurred while processing the chat"}
        assert "secret-host" not in response.text
        assert len(fake_relay.calls) == 1

    async def test_failure_mid_stream_ends_stream(
        self, async_client: AsyncClient, fake_relay
    ) -> None:
        """Status is already sent; the caller gets the text produced so far."""
        fake_relay.chunks = ["one ", "two ", "three"]
        fake_relay.fail_after = 2

        response = await async_client.post("/api/chat", json=CONVERSATION)

        assert response.status_code == 200
        assert response.text == "one two "
        assert "connection reset" not in response.text

    async def test_cors_headers_present(self, async_client: AsyncClient) -> None:
        response = await async_client.post(
            "/api/chat",
            json=CONVERSATION,
            headers={"Origin": "http://localhost:3000"},
        )

        assert "access-control-allow-origin" in response.headers

"""Pytest fixtures and shared test configuration.

Fixtures:
    - fake_relay: In-process stand-in for the upstream completion service
    - async_client: HTTPX client for the real FastAPI app, relay overridden
    - sample_messages: A short two-turn conversation
"""

from collections.abc import AsyncGenerator, Sequence

import pytest
from httpx import ASGITransport, AsyncClient

from biosarthi.api import app
from biosarthi.models.schemas import ChatMessage, MessageRole
from biosarthi.relay.errors import UpstreamError
from biosarthi.relay.service import get_relay_service


class FakeRelayService:
    """Records calls and replays scripted deltas instead of calling a model.

    Attributes:
        chunks: Deltas yielded for each call.
        fail_before: Raise UpstreamError before the first delta.
        fail_after: Raise UpstreamError after this many deltas.
        calls: Conversations received, one entry per call.
    """

    def __init__(self) -> None:
        self.chunks: list[str] = ["Biogas ", "is a ", "renewable fuel."]
        self.fail_before: bool = False
        self.fail_after: int | None = None
        self.calls: list[list[ChatMessage]] = []

    async def stream_completion(
        self, messages: Sequence[ChatMessage]
    ) -> AsyncGenerator[str]:
        self.calls.append(list(messages))
        if self.fail_before:
            raise UpstreamError("provider unreachable: secret-host:443")
        for i, chunk in enumerate(self.chunks):
            if self.fail_after is not None and i == self.fail_after:
                raise UpstreamError("connection reset")
            yield chunk


@pytest.fixture
def fake_relay() -> FakeRelayService:
    return FakeRelayService()


@pytest.fixture
async def async_client(fake_relay: FakeRelayService) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        AsyncClient bound to the app with the relay service replaced.
    """
    app.dependency_overrides[get_relay_service] = lambda: fake_relay
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_messages() -> list[ChatMessage]:
    return [
        ChatMessage(role=MessageRole.USER, content="What is biogas?"),
        ChatMessage(role=MessageRole.ASSISTANT, content="A gas made from organic waste."),
        ChatMessage(role=MessageRole.USER, content="How is it produced?"),
    ]

"""HTTP client for the relay endpoint, used by the chat page."""

import os
from collections.abc import Callable, Sequence

import httpx

from biosarthi.models.schemas import ChatMessage

RELAY_PATH = "/api/chat"


def api_base_url() -> str:
    """Relay location; defaults to this server's own PORT in integrated mode."""
    return os.getenv("API_BASE_URL") or f"http://localhost:{os.getenv('PORT', '8000')}"


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, str) and error:
        return error
    return f"HTTP {response.status_code}"


async def _consume(
    client: httpx.AsyncClient,
    url: str,
    messages: Sequence[ChatMessage],
    on_chunk: Callable[[str], None],
    on_complete: Callable[[], None],
    on_error: Callable[[str], None],
) -> None:
    payload = {"messages": [m.model_dump(mode="json") for m in messages]}
    try:
        async with client.stream(
            "POST",
            url,
            json=payload,
            headers={"Accept": "text/plain"},
        ) as response:
            if response.is_error:
                await response.aread()
                on_error(_error_message(response))
                return
            async for text in response.aiter_text():
                if text:
                    on_chunk(text)
        on_complete()
    except httpx.RequestError as e:
        on_error(f"Connection failed: {e}")


async def stream_chat_response(
    messages: Sequence[ChatMessage],
    on_chunk: Callable[[str], None],
    on_complete: Callable[[], None],
    on_error: Callable[[str], None],
    client: httpx.AsyncClient | None = None,
) -> None:
    """Post the conversation to the relay and feed back the streamed text.

    Exactly one of ``on_complete`` or ``on_error`` is called.
    """
    if client is not None:
        await _consume(client, RELAY_PATH, messages, on_chunk, on_complete, on_error)
        return

    async with httpx.AsyncClient(base_url=api_base_url(), timeout=60.0) as own_client:
        await _consume(
            own_client, RELAY_PATH, messages, on_chunk, on_complete, on_error
        )

"""Completion relay endpoint.

Accepts a conversation, forwards it to the relay service and streams the
model's text back to the caller as it arrives.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from biosarthi.models.schemas import ChatRequest, ErrorResponse
from biosarthi.relay.errors import InvalidRequestError, UpstreamError
from biosarthi.relay.service import RelayService, get_relay_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


async def _relay_stream(
    first_chunk: str,
    stream: AsyncGenerator[str],
) -> AsyncGenerator[str]:
    """Yield the already received first delta, then the rest of the stream.

    The status line is sent with the first delta, so a failure after this
    point can only end the stream early.
    """
    if first_chunk:
        yield first_chunk
    try:
        async for chunk in stream:
            yield chunk
    except UpstreamError as e:
        logger.error(f"Upstream failed mid-stream: {e}")
    finally:
        await stream.aclose()


@router.post(
    "/chat",
    response_class=StreamingResponse,
    responses={
        200: {"content": {"text/plain": {}}, "description": "Streamed completion text"},
        400: {"model": ErrorResponse, "description": "No messages provided"},
        500: {"model": ErrorResponse, "description": "Upstream call failed"},
    },
)
async def relay_chat(
    request: ChatRequest,
    relay: RelayService = Depends(get_relay_service),
) -> StreamingResponse:
    """Relay a conversation to the completion model.

    Args:
        request: The conversation to complete.
        relay: Relay service (injected).

    Returns:
        StreamingResponse carrying the model's text deltas unmodified.

    Raises:
        InvalidRequestError: 400 if the message list is absent or empty.
        UpstreamError: 500 if the model call fails before any text arrives.
    """
    if not request.messages:
        logger.warning("Rejected relay request without messages")
        raise InvalidRequestError()

    logger.info(f"Relaying conversation with {len(request.messages)} messages")

    stream = relay.stream_completion(request.messages)

    # Pull the first delta before committing to a 200
    try:
        first_chunk = await anext(stream)
    except StopAsyncIteration:
        first_chunk = ""
    except UpstreamError as e:
        logger.error(f"Upstream call failed: {e}")
        raise

    return StreamingResponse(
        _relay_stream(first_chunk, stream),
        media_type="text/plain; charset=utf-8",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )

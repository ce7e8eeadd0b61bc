"""Completion relay service backed by an Agno agent.

Forwards a caller-owned conversation to the hosted model and yields the
streamed text deltas unchanged.

The agent is built without storage, history or knowledge: every request
carries its full conversation, so the relay stays stateless and can serve
independent callers concurrently.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator, Sequence

from agno.agent import Agent
from agno.models.message import Message
from agno.models.openai import OpenAIChat
from agno.run.agent import RunEvent

from biosarthi.models.schemas import ChatMessage
from biosarthi.relay.config import RelayConfig, get_relay_config
from biosarthi.relay.errors import UpstreamError

logger = logging.getLogger(__name__)


class RelayService:
    """Service relaying conversations to the completion model.

    Wraps Agno's Agent with:
    - A fixed model identifier taken from configuration
    - A total duration bound on each streamed completion
    - Conversion of every upstream failure into UpstreamError
    """

    def __init__(self, config: RelayConfig | None = None) -> None:
        """Initialize the relay service.

        Args:
            config: Optional relay configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_relay_config()
        self._agent = self._create_agent()

    @property
    def model_name(self) -> str:
        return self._config.model_name

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Agent with an OpenAI model and no persistence.
        """
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            add_history_to_context=False,
            markdown=False,
        )

    @staticmethod
    def _to_agent_messages(messages: Sequence[ChatMessage]) -> list[Message]:
        return [Message(role=m.role.value, content=m.content) for m in messages]

    async def stream_completion(
        self,
        messages: Sequence[ChatMessage],
    ) -> AsyncGenerator[str]:
        """Stream completion text for a conversation.

        Args:
            messages: Ordered conversation, oldest first.

        Yields:
            Response text deltas as they arrive.

        Raises:
            UpstreamError: If the model call fails, reports a run error,
                or exceeds the configured duration.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self._config.max_duration

        stream = None
        try:
            stream = self._agent.arun(
                self._to_agent_messages(messages),
                stream=True,
            )
            while True:
                try:
                    async with asyncio.timeout_at(deadline):
                        chunk = await anext(stream)
                except StopAsyncIteration:
                    break

                event = getattr(chunk, "event", None)
                if event == RunEvent.run_error:
                    raise UpstreamError(f"Model run failed: {chunk.content}")
                if event == RunEvent.run_content and chunk.content:
                    yield chunk.content

        except UpstreamError:
            raise
        except TimeoutError as e:
            raise UpstreamError(
                f"Completion exceeded {self._config.max_duration:g}s"
            ) from e
        except Exception as e:
            raise UpstreamError(f"{type(e).__name__}: {e}") from e
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()


# Module-level singleton instance
_relay_service: RelayService | None = None


def get_relay_service() -> RelayService:
    """Get or create the global relay service.

    Returns:
        The RelayService instance.
    """
    global _relay_service
    if _relay_service is None:
        _relay_service = RelayService()
        logger.info(f"Relay service ready (model={_relay_service.model_name})")
    return _relay_service

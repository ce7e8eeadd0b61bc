"""Client-side state for the chat screens.

Kept free of NiceGUI so the conversation, voice and suggestion logic can be
exercised without a browser.
"""

import random
import time
import uuid
from collections.abc import Callable, Sequence
from datetime import datetime

from biosarthi.models.schemas import ChatMessage, MessageRole

SUGGESTIONS: tuple[str, ...] = (
    "What is biogas?",
    "How is biogas produced?",
    "Benefits of biogas?",
    "Biogas vs natural gas?",
    "Biogas and greenhouse gases?",
    "Materials for biogas production?",
    "Biogas in rural areas?",
    "Biogas plant setup cost?",
    "Biogas energy efficiency?",
    "Biogas in transportation?",
)

SUGGESTION_COUNT = 3
SUGGESTION_INTERVAL = 50.0  # seconds
SILENCE_TIMEOUT = 2.0  # seconds


class ChatSession:
    """Manages chat state for a user session.

    The message list is append-only; ``reset`` starts a new conversation.
    Each conversation has a generation number. A response started in an
    earlier generation is dropped when it finishes.
    """

    def __init__(self) -> None:
        self.messages: list[dict] = []
        self.session_id: str = str(uuid.uuid4())
        self.is_streaming: bool = False
        self._generation: int = 0

    def add_message(self, role: str, content: str) -> None:
        self.messages.append({
            "role": MessageRole(role).value,
            "content": content,
            "time": datetime.now().strftime("%I:%M %p"),
        })

    def history(self) -> list[ChatMessage]:
        """Return the conversation in the shape the relay expects."""
        return [
            ChatMessage(role=m["role"], content=m["content"]) for m in self.messages
        ]

    def begin_response(self) -> int | None:
        """Mark a response as in flight.

        Returns:
            Token to pass to finish_response / fail_response, or None if a
            response is already in flight.
        """
        if self.is_streaming:
            return None
        self.is_streaming = True
        return self._generation

    def is_current(self, token: int) -> bool:
        return token == self._generation

    def finish_response(self, token: int, content: str) -> bool:
        """Append the assistant reply. Returns False if the token is stale."""
        if not self.is_current(token):
            return False
        self.add_message(MessageRole.ASSISTANT.value, content)
        self.is_streaming = False
        return True

    def fail_response(self, token: int, error: str) -> bool:
        """Append an error reply. Returns False if the token is stale."""
        if not self.is_current(token):
            return False
        self.add_message(MessageRole.ASSISTANT.value, f"Error: {error}")
        self.is_streaming = False
        return True

    def reset(self) -> None:
        self.messages.clear()
        self.session_id = str(uuid.uuid4())
        self.is_streaming = False
        self._generation += 1


class VoiceCapture:
    """Listening state for browser speech recognition.

    The browser owns the recognizer; this object tracks what the page shows
    and decides when a silent capture should end.

    Attributes:
        listening: Whether the recognizer is currently running.
        transcript: Text recognized in the current capture.
        silence_timeout: Seconds without a result before the capture is
            considered finished, or None to listen until stopped.
    """

    def __init__(
        self,
        silence_timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.listening: bool = False
        self.transcript: str = ""
        self.silence_timeout = silence_timeout
        self._clock = clock
        self._last_activity: float = 0.0

    def start(self) -> bool:
        """Begin listening. Returns False if already listening."""
        if self.listening:
            return False
        self.listening = True
        self._last_activity = self._clock()
        return True

    def stop(self) -> str:
        """Stop listening and return the transcript captured so far."""
        self.listening = False
        return self.transcript

    def toggle(self) -> bool:
        """Flip between listening and idle. Returns the new state."""
        if self.listening:
            self.stop()
        else:
            self.start()
        return self.listening

    def on_result(self, transcript: str) -> None:
        # Continuous recognition reports the whole utterance each time
        self.transcript = transcript
        self._last_activity = self._clock()

    def on_end(self) -> None:
        self.listening = False

    def clear(self) -> None:
        self.transcript = ""

    def silence_expired(self) -> bool:
        if not self.listening or self.silence_timeout is None:
            return False
        return self._clock() - self._last_activity >= self.silence_timeout


class SuggestionRotator:
    """Picks a few distinct example questions from a fixed pool."""

    def __init__(
        self,
        pool: Sequence[str] = SUGGESTIONS,
        count: int = SUGGESTION_COUNT,
        rng: random.Random | None = None,
    ) -> None:
        if count > len(pool):
            raise ValueError(f"Cannot pick {count} suggestions from {len(pool)}")
        self._pool = list(pool)
        self._count = count
        self._rng = rng or random.Random()
        self.current: list[str] = []

    def rotate(self) -> list[str]:
        self.current = self._rng.sample(self._pool, self._count)
        return self.current

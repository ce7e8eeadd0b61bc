from enum import Enum

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    """Speaker of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """A single turn in the conversation.

    Attributes:
        role: Who produced the message (user or assistant).
        content: The message text.
    """

    role: MessageRole
    content: str


class ChatRequest(BaseModel):
    """Request payload for the relay endpoint.

    ``messages`` is optional at the schema level so that an absent list is
    reported with the relay's own error payload rather than a 422.

    Attributes:
        messages: Ordered conversation history, oldest first.
    """

    messages: list[ChatMessage] | None = None


class ErrorResponse(BaseModel):
    """Error payload returned by the relay endpoint."""

    error: str = Field(..., description="Human readable error message")

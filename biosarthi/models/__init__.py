"""Pydantic models for the relay API.

Models:
    - MessageRole: user or assistant
    - ChatMessage: Individual message in a conversation
    - ChatRequest: Incoming relay request payload
    - ErrorResponse: Error body for rejected or failed requests
"""

from biosarthi.models.schemas import ChatMessage, ChatRequest, ErrorResponse, MessageRole

__all__ = ["ChatMessage", "ChatRequest", "ErrorResponse", "MessageRole"]

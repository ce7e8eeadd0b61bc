"""Completion relay between the chat UI and the hosted model.

Responsibilities:
    - Relay configuration from the environment
    - Forwarding a conversation to the model with a fixed identifier
    - Passing streamed text deltas through unchanged
    - Reporting failures as InvalidRequestError / UpstreamError

Holds no conversation state; the caller sends the full history each time.
"""

from biosarthi.relay.config import RelayConfig, get_relay_config
from biosarthi.relay.errors import InvalidRequestError, RelayError, UpstreamError
from biosarthi.relay.service import RelayService, get_relay_service

__all__ = [
    "InvalidRequestError",
    "RelayConfig",
    "RelayError",
    "RelayService",
    "UpstreamError",
    "get_relay_config",
    "get_relay_service",
]

"""FastAPI endpoints for the BioSarthi relay.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat: Relay a conversation and stream the completion
"""

from biosarthi.api.app import app, create_app

__all__ = ["app", "create_app"]

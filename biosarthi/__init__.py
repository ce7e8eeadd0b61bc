"""BioSarthi - voice-enabled biogas assistant with a streaming LLM relay.

Combines FastAPI for the relay endpoint, Agno for the model call,
NiceGUI for the chat screens, and Pydantic for data validation.

Components:
    - api: Relay endpoint and app factory
    - relay: Configuration, errors and the upstream completion service
    - ui: Landing and chat screens, voice capture, relay client
    - models: Request/response schemas
"""

__version__ = "0.1.0"

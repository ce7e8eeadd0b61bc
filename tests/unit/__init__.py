"""Unit tests for individual components in isolation.

Coverage:
    - relay/: Configuration validation and the Agno-backed service
    - models/: Pydantic validation
    - ui/: Session, voice capture, suggestions and the relay client

Uses mocks for the model provider.
"""

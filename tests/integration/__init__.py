"""Integration tests for the relay endpoint.

Requests go through the real FastAPI app via ASGITransport. The upstream
model is replaced with a scripted fake, except for tests marked
requires_api_key, which call the live provider when OPENAI_API_KEY is set.
"""

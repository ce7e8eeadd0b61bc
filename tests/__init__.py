"""Test package for BioSarthi.

Structure:
    - unit/: Individual function and class tests
    - integration/: Relay endpoint tests through the real FastAPI app

Leverages pytest with pytest-check for soft assertions.
"""

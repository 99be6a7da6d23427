"""Test package for the Strategic Insight Dashboard.

Structure:
    - unit/: Individual function and class tests
    - integration/: Client and state against a fake document service

The remote service is replaced by an in-memory FastAPI app served over
ASGI transport, so no network or external process is needed.
Leverages pytest with pytest-check for soft assertions.
"""

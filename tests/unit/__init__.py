"""Unit tests for individual components in isolation.

Coverage:
    - config: Environment loading and validation
    - client: Request building, error mapping, upload filter
    - state: Controller operations, busy gate, stale response handling
    - ui: Display helpers

Uses stubs with asyncio events to make request interleavings
deterministic. Leverages pytest-check for multiple assertions per test.
"""

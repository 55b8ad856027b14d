"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - storage/: Key/value store implementations
    - parsing/: Backend payload normalization
    - chat/: Session tracker, message store and user profile
    - api/: Client configuration

Uses in-memory storage instead of a browser. Follows single responsibility
per test function. Leverages pytest-check for multiple assertions per test.
"""

"""Test package for MediBot Chat.

Unit tests cover isolated logic; integration tests drive whole flows.

Structure:
    - unit/: Storage, normalization, session tracking, message store, config
    - integration/: Backend client, chat controller flows, host app

Integration tests use a fake chat backend served through httpx.MockTransport,
so real HTTP payloads are built and parsed without a network.
Leverages pytest with pytest-check for soft assertions.
"""

"""Integration tests for components working together as a system.

Coverage:
    - BackendClient against every chat backend endpoint
    - ChatController send, load, refresh, history and share flows
    - Host app health endpoint with real HTTP requests

The chat backend is replaced by an in-process fake behind httpx.MockTransport;
everything on the client side runs for real.
"""

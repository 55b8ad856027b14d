"""MediBot Chat - client screen for the MediBot conversational assistant.

Combines NiceGUI for the chat interface, httpx for talking to the chat
backend, FastAPI for hosting, and Pydantic for data validation.

Components:
    - api: Backend HTTP client and the hosting FastAPI app
    - chat: Session tracking, message store and the send/load flow
    - parsing: Normalization of backend payload shapes
    - storage: Durable key/value persistence
    - ui: Web interface for chat interactions
    - models: Message, session and wire schemas
"""

__version__ = "0.1.0"

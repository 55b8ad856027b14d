"""NiceGUI interface - thin visualization layer for the chat screen.

Responsibilities:
    - Chat message display with a typing indicator while a reply is pending
    - Sidebar with new chat, history, share and navigation actions
    - History panel listing previous sessions
    - Error banner and session title header

Contains no business logic. Delegates all operations to ChatController.
"""

"""Send/load flow for the chat screen.

Runs on the UI event loop and owns every piece of screen state that is not
pure layout: the current operation, the error banner, the input text, the
sidebar and history panel flags, and the history list.

Concurrency policy:

1. **One operation at a time** - ``send`` and ``load_history`` share a single
   ``ChatState`` token. A request made while another is in flight is rejected
   (logged, no state change). Nothing is cancelled.

2. **Stale replies are dropped** - every session switch (refresh or loading a
   historical session) bumps an epoch counter. A reply that arrives for an
   older epoch is discarded instead of being written into the new session.

3. **Latest history fetch wins** - each session-list fetch takes a request
   number; only the most recent one may replace the list.

4. **Optimistic send, no rollback** - the user message is stored before the
   backend answers and stays there if the backend fails.

5. **Storage failures stay on screen** - a failed write to the store is logged
   and shown in the error banner. The in-memory state is kept, and a send whose
   user message could not be saved is not sent.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from medibot.api.client import BackendClient, BackendError
from medibot.api.config import ClientConfig, get_client_config
from medibot.chat.message_store import MessageStore
from medibot.chat.profile import AuthRequired, UserProfile
from medibot.chat.session_tracker import SessionTracker
from medibot.models.schemas import (
    DEFAULT_TITLE,
    ChatRequest,
    ChatState,
    Message,
    Sender,
    SessionSummary,
    ShareOutcome,
)
from medibot.storage.local_storage import KeyValueStore, StorageError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
VOICE_PATH = "/voice"
CHATBOT_PATH = "/chatbot"

AUTH_ERROR = "User not authenticated. Please log in again."
SEND_ERROR = "Failed to get response. Please try again."
LOAD_ERROR = "Failed to load chat. Please try again."
HISTORY_ERROR = "Failed to load chat history. Please try again."
STORAGE_ERROR = "Couldn't save your chat on this device."

SHARE_TITLE = "My MediBot Conversation"
NOTHING_TO_SHARE = "Start a conversation first before sharing!"
SHARE_FAILED = "Couldn't share the chat. Copy feature coming soon!"
SHARE_UNSUPPORTED = "Sharing feature coming soon!"


async def _share_unsupported(title: str, text: str) -> ShareOutcome:
    return ShareOutcome.UNSUPPORTED


@dataclass
class ChatHooks:
    """Outbound collaborators supplied by the presentation layer.

    Attributes:
        navigate: Go to another page (login, voice, chatbot).
        notify: Show a short alert to the user.
        share: Open the platform share sheet with a title and plain text.
        on_change: Called whenever screen state changes and needs a redraw.
    """

    navigate: Callable[[str], None] = lambda path: logger.info(f"Navigate to {path}")
    notify: Callable[[str], None] = lambda text: logger.info(f"Notice: {text}")
    share: Callable[[str, str], Awaitable[ShareOutcome]] = field(
        default=_share_unsupported
    )
    on_change: Callable[[], None] = lambda: None


class ChatController:
    """State machine behind the chat screen.

    States: ``idle -> sending -> idle`` and ``idle -> loading_history -> idle``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        client: BackendClient | None = None,
        config: ClientConfig | None = None,
        hooks: ChatHooks | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Durable storage for the session and its messages.
            client: Chat backend client. Built from ``config`` if not provided.
            config: Client configuration. Loads from environment if not provided.
            hooks: UI collaborators. Logging no-ops if not provided.
        """
        self._config = config or get_client_config()
        self.client = client or BackendClient(self._config)
        self.hooks = hooks or ChatHooks()

        self.profile = UserProfile(store)
        self.sessions = SessionTracker(store)
        self.messages = MessageStore(store, self.profile.display_name, self._config.bot_name)

        self.state = ChatState.IDLE
        self.error: str | None = None
        self.input_text = ""
        self.show_sidebar = True
        self.show_history = False
        self.history: list[SessionSummary] = []

        self._epoch = 0
        self._history_request = 0

    @property
    def is_busy(self) -> bool:
        return self.state is not ChatState.IDLE

    @property
    def title(self) -> str:
        return self.sessions.title or DEFAULT_TITLE

    @property
    def session_id(self) -> str:
        return self.sessions.session_id

    def _changed(self) -> None:
        self.hooks.on_change()

    def _persisted(self, write: Callable[[], object]) -> bool:
        """Run a storage write. On failure, show the storage error and return False."""
        try:
            write()
        except StorageError as e:
            logger.error(f"Failed to save chat state: {e}")
            self.error = STORAGE_ERROR
            return False
        return True

    def init(self) -> None:
        """Restore the session and its messages from storage."""
        self._persisted(self.sessions.init)
        self._persisted(self.messages.init)

    async def mount(self) -> None:
        """Restore persisted state and fetch the history list."""
        self.init()
        self._changed()
        await self.fetch_sessions()

    async def fetch_sessions(self) -> None:
        """Refresh the history list. Failures keep the previous list."""
        user_id = self.profile.user_id
        if user_id is None:
            logger.error("User not authenticated; skipping session list fetch")
            return

        self._history_request += 1
        request_number = self._history_request

        try:
            sessions = await self.client.fetch_sessions(user_id)
        except BackendError as e:
            logger.error(f"Failed to fetch sessions: {e}")
            if request_number == self._history_request:
                self.error = HISTORY_ERROR
                self._changed()
            return

        if request_number != self._history_request:
            logger.debug(f"Dropping superseded session list #{request_number}")
            return

        self.history = sessions
        self._changed()

    async def send(self, text: str | None = None) -> None:
        """Send a user message and append the bot reply.

        Args:
            text: Message to send. Defaults to the current input text.
        """
        text = self.input_text if text is None else text
        if not text.strip():
            return
        if self.is_busy:
            logger.info(f"Ignoring send while {self.state.value}")
            return

        try:
            user_id = self.profile.require_user_id()
        except AuthRequired:
            logger.warning("Send attempted without a signed-in user")
            self.error = AUTH_ERROR
            self._changed()
            self.hooks.navigate(LOGIN_PATH)
            return

        is_first = self.messages.user_message_count == 0
        self.input_text = ""
        self.error = None
        user_message = Message(text=text, sender=Sender.USER)
        message_saved = self._persisted(lambda: self.messages.append(user_message))
        title_saved = self._persisted(
            lambda: self.sessions.derive_title_on_first_message(text, is_first)
        )
        if not (message_saved and title_saved):
            self._changed()
            return
        title = self.sessions.title

        request = ChatRequest(
            user_id=user_id,
            message=text,
            session_id=self.sessions.session_id,
            title=title,
        )
        epoch = self._epoch
        self.state = ChatState.SENDING
        self._changed()

        try:
            reply = await self.client.send_message(request)
        except BackendError as e:
            logger.error(f"Chat API error: {e}")
            if epoch == self._epoch:
                self.error = SEND_ERROR
            return
        finally:
            self.state = ChatState.IDLE
            self._changed()

        if epoch != self._epoch:
            logger.warning(f"Discarding reply for session {request.session_id}: session changed")
            return

        self._persisted(lambda: self.messages.append(Message(text=reply, sender=Sender.BOT)))
        self._changed()

    async def load_history(self, session_id: str) -> None:
        """Replace the screen with a historical session.

        Failures leave the current session and its messages untouched.
        """
        if self.is_busy:
            logger.info(f"Ignoring history load while {self.state.value}")
            return

        try:
            user_id = self.profile.require_user_id()
        except AuthRequired:
            logger.warning("History load attempted without a signed-in user")
            self.error = AUTH_ERROR
            self._changed()
            self.hooks.navigate(LOGIN_PATH)
            return

        epoch = self._epoch
        self.state = ChatState.LOADING_HISTORY
        self._changed()

        try:
            loaded = await self.client.load_session(session_id, user_id)
        except BackendError as e:
            logger.error(f"Error loading chat history: {e}")
            if epoch == self._epoch:
                self.error = LOAD_ERROR
            return
        finally:
            self.state = ChatState.IDLE
            self._changed()

        if epoch != self._epoch:
            logger.warning(f"Discarding history for session {session_id}: session changed")
            return

        title = next(
            (summary.title for summary in self.history if summary.id == session_id),
            DEFAULT_TITLE,
        )
        self._epoch += 1
        self.error = None
        self.show_history = False
        self._persisted(lambda: self.sessions.adopt(session_id, title))
        self._persisted(lambda: self.messages.replace_all(loaded))
        logger.info(f"Loaded session {session_id} ({len(loaded)} messages)")
        self._changed()

    def refresh_chat(self) -> None:
        """Start a new chat: fresh session, greeting only, history panel closed."""
        self._epoch += 1
        self.error = None
        self.show_history = False
        self._persisted(self.sessions.refresh)
        self._persisted(self.messages.reset)
        self._changed()

    async def toggle_history(self) -> None:
        """Open or close the history panel, fetching the list when opening."""
        self.show_history = not self.show_history
        self._changed()
        if self.show_history:
            await self.fetch_sessions()

    def toggle_sidebar(self) -> None:
        self.show_sidebar = not self.show_sidebar
        self._changed()

    def transcript(self) -> str:
        """Plain-text rendering of the conversation for sharing."""
        name = self.profile.display_name
        return "\n\n".join(
            f"{name if message.is_user else self._config.bot_name}: {message.text}"
            for message in self.messages.messages
        )

    async def share(self) -> ShareOutcome | None:
        """Hand the transcript to the share sheet.

        Returns:
            The share sheet outcome, or None if there was nothing to share.
        """
        if len(self.messages) <= 1:
            self.hooks.notify(NOTHING_TO_SHARE)
            return None

        outcome = await self.hooks.share(SHARE_TITLE, self.transcript())
        if outcome is ShareOutcome.FAILED:
            logger.error("Error sharing chat transcript")
            self.hooks.notify(SHARE_FAILED)
        elif outcome is ShareOutcome.UNSUPPORTED:
            self.hooks.notify(SHARE_UNSUPPORTED)
        return outcome

    def go_login(self) -> None:
        self.hooks.navigate(LOGIN_PATH)

    def go_voice(self) -> None:
        self.hooks.navigate(VOICE_PATH)

    def go_chatbot(self) -> None:
        self.hooks.navigate(CHATBOT_PATH)

"""Current session identity and title, persisted across reloads."""

import logging
import uuid

from medibot.models.schemas import DEFAULT_TITLE, Session
from medibot.storage.local_storage import SESSION_ID_KEY, SESSION_TITLE_KEY, KeyValueStore

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 30


def derive_title(text: str) -> str:
    """Title for a session started with ``text``: 30 chars plus an ellipsis if longer."""
    if len(text) > MAX_TITLE_LENGTH:
        return text[:MAX_TITLE_LENGTH] + "..."
    return text


def _new_session_id() -> str:
    return str(uuid.uuid4())


class SessionTracker:
    """Owns the current session id and title.

    The id is stable across reloads: it only changes on ``refresh`` or when a
    historical session is adopted.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store
        self._session: Session | None = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("SessionTracker.init() has not been called")
        return self._session

    @property
    def session_id(self) -> str:
        return self.session.id

    @property
    def title(self) -> str:
        return self.session.title

    def init(self) -> Session:
        """Load the persisted session, creating and persisting an id if absent."""
        session_id = self._store.get(SESSION_ID_KEY)
        title = self._store.get(SESSION_TITLE_KEY) or DEFAULT_TITLE
        if session_id:
            self._session = Session(id=session_id, title=title)
            return self._session

        self._session = Session(id=_new_session_id(), title=title)
        self._store.set(SESSION_ID_KEY, self._session.id)
        logger.info(f"Started new chat session {self._session.id}")
        return self._session

    def refresh(self) -> Session:
        """Start a new session with a fresh id and the default title."""
        previous = self._session.id if self._session else None
        session_id = _new_session_id()
        while session_id == previous:
            session_id = _new_session_id()

        self._session = Session(id=session_id, title=DEFAULT_TITLE)
        self._store.set(SESSION_ID_KEY, session_id)
        self._store.set(SESSION_TITLE_KEY, DEFAULT_TITLE)
        logger.info(f"Refreshed chat session {previous} -> {session_id}")
        return self._session

    def derive_title_on_first_message(self, text: str, is_first: bool) -> str:
        """Name the session after its first user message.

        Args:
            text: The user message being sent.
            is_first: Whether no user message has been sent in this session yet.

        Returns:
            The title to send along with the message.
        """
        session = self.session
        if session.title == DEFAULT_TITLE and is_first:
            session.title = derive_title(text)
            self._store.set(SESSION_TITLE_KEY, session.title)
        return session.title

    def adopt(self, session_id: str, title: str) -> Session:
        """Make an existing (historical) session current without generating an id."""
        self._session = Session(id=session_id, title=title or DEFAULT_TITLE)
        self._store.set(SESSION_ID_KEY, session_id)
        self._store.set(SESSION_TITLE_KEY, self._session.title)
        return self._session

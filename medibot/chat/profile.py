"""Read-only view of the signed-in user, as left in storage by the login flow."""

from medibot.storage.local_storage import EMAIL_KEY, NAME_KEY, KeyValueStore

DEFAULT_DISPLAY_NAME = "User"


class AuthRequired(Exception):
    """Raised when an operation needs a signed-in user and there is none."""

    pass


class UserProfile:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    @property
    def display_name(self) -> str:
        return self._store.get(NAME_KEY) or DEFAULT_DISPLAY_NAME

    @property
    def user_id(self) -> str | None:
        return self._store.get(EMAIL_KEY) or None

    def require_user_id(self) -> str:
        """Return the user id.

        Raises:
            AuthRequired: If no user is signed in.
        """
        user_id = self.user_id
        if user_id is None:
            raise AuthRequired("User not authenticated")
        return user_id

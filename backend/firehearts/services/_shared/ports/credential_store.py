from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class RefreshCredentialView:
    """
    Read-model for a persisted refresh credential.

    :ivar token: The signed refresh token exactly as handed to the client.
    :ivar user_id: External id of the owning profile.
    """

    token: str
    user_id: str


class CredentialStore(Protocol):
    """
    Persisted set of issued refresh credentials.

    A credential is valid for rotation exactly as long as it is present;
    it is never mutated, only inserted and deleted in bulk per owner.
    """

    def find(self, token: str) -> RefreshCredentialView | None:
        """Return the credential for ``token`` or ``None`` when absent."""

    def insert(self, token: str, user_id: str) -> None:
        """
        Persist a freshly issued refresh token.

        This MUST complete *before* the token is handed to the client.
        """

    def delete_for_user(self, user_id: str) -> int:
        """
        Delete every credential owned by ``user_id``.

        :returns: Number of credentials removed.
        """


class InMemoryCredentialStore(CredentialStore):
    """
    In-memory credential store.

    .. note::
       Uses a threading lock so concurrent requests in one process see
       consistent state; contents are lost on restart.
    """

    def __init__(self) -> None:
        self._by_token: dict[str, str] = {}
        self._lock = threading.Lock()

    def find(self, token: str) -> RefreshCredentialView | None:
        with self._lock:
            user_id = self._by_token.get(token)
        if user_id is None:
            return None
        return RefreshCredentialView(token=token, user_id=user_id)

    def insert(self, token: str, user_id: str) -> None:
        with self._lock:
            self._by_token[token] = user_id

    def delete_for_user(self, user_id: str) -> int:
        with self._lock:
            owned = [t for t, uid in self._by_token.items() if uid == user_id]
            for token in owned:
                del self._by_token[token]
            return len(owned)

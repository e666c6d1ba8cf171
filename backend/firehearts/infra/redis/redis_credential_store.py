# comments in English; reST docstrings
from __future__ import annotations

import hashlib
from dataclasses import dataclass

import redis  # type: ignore[import-untyped]

from firehearts.services._shared.ports import CredentialStore, RefreshCredentialView


@dataclass(slots=True)
class RedisCredentialStore(CredentialStore):
    """
    Redis-backed refresh credential store.

    Layout
    ------
    - ``rc:<sha256(token)>`` → owner ``user_id`` (string key, no TTL).
    - ``rc:u:<user_id>`` → set of token digests owned by the user.

    Tokens are stored by digest only; ``find`` receives the token from the
    client and can rebuild the view from it.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _digest(token: str) -> str:
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    @staticmethod
    def _k(digest: str) -> str:
        return f"rc:{digest}"

    @staticmethod
    def _ku(user_id: str) -> str:
        return f"rc:u:{user_id}"

    # -------------------- API ------------------------

    def find(self, token: str) -> RefreshCredentialView | None:
        raw = self.r.get(self._k(self._digest(token)))
        if raw is None:
            return None
        user_id = raw.decode() if isinstance(raw, bytes | bytearray) else str(raw)
        return RefreshCredentialView(token=token, user_id=user_id)

    def insert(self, token: str, user_id: str) -> None:
        digest = self._digest(token)
        pipe = self.r.pipeline(transaction=True)
        pipe.set(self._k(digest), user_id)
        pipe.sadd(self._ku(user_id), digest)
        pipe.execute()

    def delete_for_user(self, user_id: str) -> int:
        """Delete every credential of ``user_id`` and its index in one MULTI."""
        index_key = self._ku(user_id)
        members = self.r.smembers(index_key)
        digests = [m.decode() if isinstance(m, bytes | bytearray) else str(m) for m in members]
        pipe = self.r.pipeline(transaction=True)
        for digest in digests:
            pipe.delete(self._k(digest))
        pipe.delete(index_key)
        results = pipe.execute()
        # Last result is the index deletion; the rest count removed credentials
        return int(sum(results[:-1]))

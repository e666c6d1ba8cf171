"""
firehearts.services._shared.ports
=================================

*Ports* (hexagonal interfaces) for token signing and refresh credential
storage. They keep the service layer independent from concrete adapters,
which live under ``firehearts.infra``.

Modules
-------
- :mod:`token_provider`:
    :class:`~.TokenProvider`, :class:`~.SigningKeys` and :class:`~.KeyClass`.
- :mod:`credential_store`:
    :class:`~.CredentialStore`, :class:`~.RefreshCredentialView` and the
    :class:`~.InMemoryCredentialStore` used by unit tests.
"""

from __future__ import annotations

from .credential_store import CredentialStore, InMemoryCredentialStore, RefreshCredentialView
from .token_provider import KeyClass, SigningKeys, TokenProvider

__all__ = [
    "CredentialStore",
    "InMemoryCredentialStore",
    "KeyClass",
    "RefreshCredentialView",
    "SigningKeys",
    "TokenProvider",
]

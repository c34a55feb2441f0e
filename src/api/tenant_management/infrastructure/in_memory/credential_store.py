"""In-memory credential store."""

from __future__ import annotations

import asyncio

from tenant_management.domain import Credential, CredentialType


class InMemoryCredentialStore:
    """In-memory implementation of ICredentialStore.

    Suitable for development and testing. Data is lost on restart.

    Credentials are keyed by (owner_id, type); INDIVIDUAL credentials also
    by their id, so a tenant can hold one login per username but only one
    client credential of each other kind.
    """

    def __init__(self) -> None:
        self._credentials: dict[tuple[int, CredentialType, str], Credential] = {}
        self._lock = asyncio.Lock()

    @staticmethod
    def _key(
        owner_id: int, type: CredentialType, id: str | None
    ) -> tuple[int, CredentialType, str]:
        if type is CredentialType.INDIVIDUAL:
            return (owner_id, type, id or "")
        return (owner_id, type, "")

    async def get_credential(
        self,
        owner_id: int,
        type: CredentialType,
        id: str | None = None,
    ) -> Credential | None:
        """Get a credential, or None if there is none."""
        async with self._lock:
            return self._credentials.get(self._key(owner_id, type, id))

    async def put_credential(self, credential: Credential) -> None:
        """Store a credential, replacing any prior one of the same key."""
        key = self._key(credential.owner_id, credential.type, credential.id)
        async with self._lock:
            self._credentials[key] = credential

    async def list_credentials(self, owner_id: int) -> list[Credential]:
        """List all credentials stored for an owner."""
        async with self._lock:
            return [
                credential
                for (owner, _, _), credential in self._credentials.items()
                if owner == owner_id
            ]

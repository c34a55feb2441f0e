"""In-memory federated authentication registrar."""

from __future__ import annotations

import asyncio
import secrets

from tenant_management.domain import ClientCredentials, FederatedClientMetadata


class InMemoryFederatedAuthenticationClient:
    """In-memory implementation of IFederatedAuthenticationClient.

    Issues a random client pair for every registration and keeps the
    submitted metadata for inspection.
    """

    def __init__(self) -> None:
        self._registrations: dict[int, FederatedClientMetadata] = {}
        self._lock = asyncio.Lock()

    async def register_client(
        self, metadata: FederatedClientMetadata
    ) -> ClientCredentials:
        """Register a federation client for the tenant."""
        async with self._lock:
            self._registrations[metadata.tenant_id] = metadata
        return ClientCredentials(
            client_id=f"cilogon:/client_id/{secrets.token_hex(16)}",
            client_secret=secrets.token_urlsafe(32),
        )

    async def get_registration(
        self, tenant_id: int
    ) -> FederatedClientMetadata | None:
        """Metadata submitted for the tenant, if any."""
        async with self._lock:
            return self._registrations.get(tenant_id)

"""In-memory identity provider administration."""

from __future__ import annotations

import asyncio
import secrets

from tenant_management.domain import (
    ClientCredentials,
    FederatedIdpConfiguration,
    IdentityProviderRegistration,
)


class RealmNotFoundError(Exception):
    """Raised when updating or configuring a realm that was never created."""

    pass


class RealmExistsError(Exception):
    """Raised when creating a realm that already exists."""

    pass


class InMemoryIdentityProviderAdmin:
    """In-memory implementation of IIdentityProviderAdmin.

    Keeps one realm per tenant. Creating a realm issues a random client
    secret; updating keeps the client pair and refreshes the registration.
    """

    def __init__(self, base_url: str = "http://localhost:8080/auth/") -> None:
        self._base_url = base_url
        self._realms: dict[int, IdentityProviderRegistration] = {}
        self._clients: dict[int, ClientCredentials] = {}
        self._federated_idps: dict[int, FederatedIdpConfiguration] = {}
        self._lock = asyncio.Lock()

    async def create_tenant(
        self, registration: IdentityProviderRegistration
    ) -> ClientCredentials:
        """Create the tenant realm and issue its client pair.

        Raises:
            RealmExistsError: If the realm already exists
        """
        tenant_id = registration.tenant_id
        async with self._lock:
            if tenant_id in self._realms:
                raise RealmExistsError(f"Realm already exists: {tenant_id}")

            issued = ClientCredentials(
                client_id=f"custos-{tenant_id}-{secrets.token_hex(4)}",
                client_secret=secrets.token_urlsafe(32),
            )
            self._realms[tenant_id] = registration
            self._clients[tenant_id] = issued
            return issued

    async def update_tenant(
        self, registration: IdentityProviderRegistration
    ) -> ClientCredentials:
        """Refresh the realm registration and return its client pair.

        Raises:
            RealmNotFoundError: If the realm does not exist
        """
        tenant_id = registration.tenant_id
        async with self._lock:
            if tenant_id not in self._realms:
                raise RealmNotFoundError(f"Realm not found: {tenant_id}")

            self._realms[tenant_id] = registration
            return self._clients[tenant_id]

    async def get_base_url(self) -> str:
        """Base URL of the identity provider server."""
        return self._base_url

    async def configure_federated_idp(
        self, configuration: FederatedIdpConfiguration
    ) -> None:
        """Attach a federated identity broker to the tenant realm.

        Raises:
            RealmNotFoundError: If the realm does not exist
        """
        async with self._lock:
            if configuration.tenant_id not in self._realms:
                raise RealmNotFoundError(f"Realm not found: {configuration.tenant_id}")
            self._federated_idps[configuration.tenant_id] = configuration

    async def get_realm(self, tenant_id: int) -> IdentityProviderRegistration | None:
        """Registration of the tenant realm, or None if not created."""
        async with self._lock:
            return self._realms.get(tenant_id)

    async def get_federated_idp(
        self, tenant_id: int
    ) -> FederatedIdpConfiguration | None:
        """Federated broker attached to the tenant realm, if any."""
        async with self._lock:
            return self._federated_idps.get(tenant_id)

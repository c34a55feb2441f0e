"""Collaborator protocols (ports) for the tenant management context.

Each protocol describes the slice of an external service that tenant
activation consumes. Every call is scoped by tenant id, which is the join key
across all of them.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenant_management.domain import (
    AccessControlType,
    ClientCredentials,
    Credential,
    CredentialType,
    FederatedClientMetadata,
    FederatedIdpConfiguration,
    IdentityProviderRegistration,
    Tenant,
    TenantStatus,
    TenantStatusUpdated,
)


@runtime_checkable
class ICredentialStore(Protocol):
    """Secret storage keyed by (owner, kind).

    At most one credential exists per (owner_id, type); INDIVIDUAL
    credentials are additionally keyed by their id (the username).
    """

    async def get_credential(
        self,
        owner_id: int,
        type: CredentialType,
        id: str | None = None,
    ) -> Credential | None:
        """Retrieve a credential.

        Args:
            owner_id: Tenant owning the credential
            type: Kind of credential
            id: Username, required for INDIVIDUAL credentials

        Returns:
            The stored credential, or None if there is none
        """
        ...

    async def put_credential(self, credential: Credential) -> None:
        """Store a credential, replacing any prior one of the same key.

        Args:
            credential: The credential to store
        """
        ...


@runtime_checkable
class IIdentityProviderAdmin(Protocol):
    """Administration of tenant realms in the identity provider."""

    async def create_tenant(
        self, registration: IdentityProviderRegistration
    ) -> ClientCredentials:
        """Create the tenant realm, its admin user and its client.

        Returns:
            Client id and secret issued for the tenant
        """
        ...

    async def update_tenant(
        self, registration: IdentityProviderRegistration
    ) -> ClientCredentials:
        """Update an existing tenant realm and its client.

        Returns:
            Client id and secret of the tenant client
        """
        ...

    async def get_base_url(self) -> str:
        """Base URL of the identity provider server."""
        ...

    async def configure_federated_idp(
        self, configuration: FederatedIdpConfiguration
    ) -> None:
        """Attach a federated identity broker to a tenant realm."""
        ...


@runtime_checkable
class ISharingService(Protocol):
    """Tenant-scoped access-control vocabulary of the sharing service."""

    async def create_permission_type(
        self, permission_type: AccessControlType, tenant_id: int
    ) -> None:
        """Register a permission type for the tenant."""
        ...

    async def create_entity_type(
        self, entity_type: AccessControlType, tenant_id: int
    ) -> None:
        """Register an entity type for the tenant."""
        ...


@runtime_checkable
class ITenantProfileStore(Protocol):
    """Tenant profile records and their lifecycle status."""

    async def get_tenant(self, tenant_id: int) -> Tenant | None:
        """Retrieve a tenant profile.

        Returns:
            The tenant, or None if no tenant has this id
        """
        ...

    async def update_status(
        self,
        tenant_id: int,
        status: TenantStatus,
        updated_by: str,
    ) -> TenantStatusUpdated:
        """Transition the tenant to a new status.

        Returns:
            The recorded status change
        """
        ...


@runtime_checkable
class IFederatedAuthenticationClient(Protocol):
    """Client registration with the federated authentication service."""

    async def register_client(
        self, metadata: FederatedClientMetadata
    ) -> ClientCredentials:
        """Register a federation client for a tenant.

        Returns:
            Client id and secret issued by the federation service
        """
        ...

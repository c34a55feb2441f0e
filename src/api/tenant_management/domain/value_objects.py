"""Value objects for the tenant management domain.

Value objects are immutable descriptors exchanged with the collaborating
services (credential store, identity provider, sharing service, federated
authentication). They are built with constructor calls and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class TenantStatus(StrEnum):
    """Lifecycle status of a tenant."""

    REQUESTED = "REQUESTED"
    CREATED = "CREATED"
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    DENIED = "DENIED"
    CANCELLED = "CANCELLED"
    DEACTIVATED = "DEACTIVATED"


class CredentialType(StrEnum):
    """Kinds of secrets the credential store keeps for a tenant.

    INDIVIDUAL credentials belong to a named user (the tenant admin login);
    the other kinds are client credentials, at most one per tenant.
    """

    INDIVIDUAL = "INDIVIDUAL"
    IAM = "IAM"
    CUSTOS = "CUSTOS"
    CILOGON = "CILOGON"


class FederatedIdp(StrEnum):
    """External identity brokers a tenant realm can federate with."""

    CILOGON = "CILOGON"


@dataclass(frozen=True)
class Credential:
    """A secret stored for an owner.

    Attributes:
        owner_id: Tenant the credential belongs to
        type: Kind of credential
        id: Client id, or the username for INDIVIDUAL credentials
        secret: Client secret or password
    """

    owner_id: int
    type: CredentialType
    id: str = ""
    secret: str = field(default="", repr=False)

    @property
    def has_id(self) -> bool:
        """Whether the credential carries a non-empty id."""
        return bool(self.id)

    @property
    def has_secret(self) -> bool:
        """Whether the credential carries a non-empty secret."""
        return bool(self.secret)


@dataclass(frozen=True)
class ClientCredentials:
    """Client id and secret issued by an identity service."""

    client_id: str
    client_secret: str = field(repr=False)

    def as_credential(self, owner_id: int, type: CredentialType) -> Credential:
        """Wrap the pair as a stored credential of the given kind."""
        return Credential(
            owner_id=owner_id,
            type=type,
            id=self.client_id,
            secret=self.client_secret,
        )


@dataclass(frozen=True)
class IdentityProviderRegistration:
    """Request to create or update a tenant realm in the identity provider.

    Attributes:
        tenant_id: Tenant whose realm is provisioned
        tenant_name: Display name of the realm
        tenant_url: Home page of the tenant application
        admin_username: Realm admin login
        admin_first_name: Realm admin first name
        admin_last_name: Realm admin last name
        admin_email: Realm admin email
        admin_password: Realm admin password
        redirect_uris: Redirect URIs registered for the tenant client
        requester_email: Email of the person who requested the tenant
        custos_client_id: Calling identity presented to the identity provider
    """

    tenant_id: int
    tenant_name: str
    tenant_url: str
    admin_username: str
    admin_first_name: str
    admin_last_name: str
    admin_email: str
    admin_password: str = field(repr=False)
    redirect_uris: tuple[str, ...]
    requester_email: str
    custos_client_id: str


@dataclass(frozen=True)
class AccessControlType:
    """A permission type or entity type registered with the sharing service."""

    id: str
    name: str
    description: str


OWNER_PERMISSION_TYPE = AccessControlType(
    id="OWNER",
    name="OWNER",
    description="Owner permission type",
)

SECRET_ENTITY_TYPE = AccessControlType(
    id="SECRET",
    name="SECRET",
    description="Secret entity type",
)


@dataclass(frozen=True)
class FederatedClientMetadata:
    """Client registration submitted to the federated authentication service."""

    tenant_id: int
    tenant_name: str
    tenant_uri: str
    comment: str
    scope: tuple[str, ...]
    redirect_uris: tuple[str, ...]
    contacts: tuple[str, ...]
    performed_by: str
    client_id: str


@dataclass(frozen=True)
class FederatedIdpConfiguration:
    """Request to attach a federated identity broker to a tenant realm."""

    tenant_id: int
    client_id: str
    client_secret: str = field(repr=False)
    scope: str
    requester_email: str
    type: FederatedIdp = FederatedIdp.CILOGON

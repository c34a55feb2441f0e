"""Domain layer for the tenant management context.

Pure data: tenant records, credentials, collaborator request/response values
and pipeline events. Nothing here performs I/O.
"""

from tenant_management.domain.events import (
    ActivationResult,
    TenantEvent,
    TenantProfileUpdated,
    TenantRequested,
    TenantStatusUpdated,
)
from tenant_management.domain.tenant import Tenant
from tenant_management.domain.value_objects import (
    OWNER_PERMISSION_TYPE,
    SECRET_ENTITY_TYPE,
    AccessControlType,
    ClientCredentials,
    Credential,
    CredentialType,
    FederatedClientMetadata,
    FederatedIdp,
    FederatedIdpConfiguration,
    IdentityProviderRegistration,
    TenantStatus,
)

__all__ = [
    "AccessControlType",
    "ActivationResult",
    "ClientCredentials",
    "Credential",
    "CredentialType",
    "FederatedClientMetadata",
    "FederatedIdp",
    "FederatedIdpConfiguration",
    "IdentityProviderRegistration",
    "OWNER_PERMISSION_TYPE",
    "SECRET_ENTITY_TYPE",
    "Tenant",
    "TenantEvent",
    "TenantProfileUpdated",
    "TenantRequested",
    "TenantStatus",
    "TenantStatusUpdated",
]

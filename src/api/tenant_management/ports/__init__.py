"""Ports for the tenant management context."""

from tenant_management.ports.exceptions import (
    DownstreamServiceError,
    InvalidPayloadError,
    MissingAdminCredentialError,
    TenantActivationError,
    TenantNotFoundError,
)
from tenant_management.ports.services import (
    ICredentialStore,
    IFederatedAuthenticationClient,
    IIdentityProviderAdmin,
    ISharingService,
    ITenantProfileStore,
)

__all__ = [
    "DownstreamServiceError",
    "ICredentialStore",
    "IFederatedAuthenticationClient",
    "IIdentityProviderAdmin",
    "ISharingService",
    "ITenantProfileStore",
    "InvalidPayloadError",
    "MissingAdminCredentialError",
    "TenantActivationError",
    "TenantNotFoundError",
]

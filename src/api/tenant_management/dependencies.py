"""Factories wiring the tenant activation stage.

Collaborator adapters are supplied by the caller; settings default to the
cached environment settings.
"""

from __future__ import annotations

from infrastructure.settings import (
    TenantManagementSettings,
    get_tenant_management_settings,
)
from tenant_management.application.services import TenantActivationService
from tenant_management.application.tasks import TenantActivationTask
from tenant_management.ports.services import (
    ICredentialStore,
    IFederatedAuthenticationClient,
    IIdentityProviderAdmin,
    ISharingService,
    ITenantProfileStore,
)


def get_tenant_activation_service(
    credential_store: ICredentialStore,
    identity_provider: IIdentityProviderAdmin,
    sharing_service: ISharingService,
    tenant_profile_store: ITenantProfileStore,
    federated_authentication: IFederatedAuthenticationClient | None = None,
    settings: TenantManagementSettings | None = None,
) -> TenantActivationService:
    """Build the tenant activation service."""
    return TenantActivationService(
        credential_store=credential_store,
        identity_provider=identity_provider,
        sharing_service=sharing_service,
        tenant_profile_store=tenant_profile_store,
        federated_authentication=federated_authentication,
        settings=settings or get_tenant_management_settings(),
    )


def get_tenant_activation_task(
    credential_store: ICredentialStore,
    identity_provider: IIdentityProviderAdmin,
    sharing_service: ISharingService,
    tenant_profile_store: ITenantProfileStore,
    federated_authentication: IFederatedAuthenticationClient | None = None,
    settings: TenantManagementSettings | None = None,
) -> TenantActivationTask:
    """Build the tenant activation pipeline stage and its service.

    Both share the same settings, so the actor the stage records and the
    service's feature flags come from one source.
    """
    settings = settings or get_tenant_management_settings()
    service = get_tenant_activation_service(
        credential_store=credential_store,
        identity_provider=identity_provider,
        sharing_service=sharing_service,
        tenant_profile_store=tenant_profile_store,
        federated_authentication=federated_authentication,
        settings=settings,
    )
    return TenantActivationTask(
        activation_service=service,
        credential_store=credential_store,
        tenant_profile_store=tenant_profile_store,
        settings=settings,
    )

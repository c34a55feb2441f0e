"""Application entry point for the tenant activation pipeline.

Wires the activation stage over the in-memory collaborator adapters. A
deployment supplies real service clients through the same factories.
"""

from dataclasses import dataclass, field

import structlog

from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings, get_tenant_management_settings
from shared_kernel.pipeline import ServiceCallback, ServiceChain
from tenant_management.dependencies import get_tenant_activation_task
from tenant_management.infrastructure.in_memory import (
    InMemoryCredentialStore,
    InMemoryFederatedAuthenticationClient,
    InMemoryIdentityProviderAdmin,
    InMemorySharingService,
    InMemoryTenantProfileStore,
)


@dataclass
class LocalServices:
    """In-memory stand-ins for the collaborating services."""

    credential_store: InMemoryCredentialStore = field(
        default_factory=InMemoryCredentialStore
    )
    identity_provider: InMemoryIdentityProviderAdmin = field(
        default_factory=InMemoryIdentityProviderAdmin
    )
    sharing_service: InMemorySharingService = field(
        default_factory=InMemorySharingService
    )
    tenant_profile_store: InMemoryTenantProfileStore = field(
        default_factory=InMemoryTenantProfileStore
    )
    federated_authentication: InMemoryFederatedAuthenticationClient = field(
        default_factory=InMemoryFederatedAuthenticationClient
    )


def create_activation_pipeline(
    callback: ServiceCallback,
    services: LocalServices | None = None,
) -> ServiceChain:
    """Configure logging and build the tenant activation pipeline.

    Args:
        callback: Sink for the activation outcome
        services: Collaborating services (defaults to fresh in-memory ones)

    Returns:
        A chain whose single stage is the tenant activation task
    """
    settings = get_settings()
    configure_logging(settings.log_level, service_name=settings.app_name)

    services = services or LocalServices()
    task = get_tenant_activation_task(
        credential_store=services.credential_store,
        identity_provider=services.identity_provider,
        sharing_service=services.sharing_service,
        tenant_profile_store=services.tenant_profile_store,
        federated_authentication=services.federated_authentication,
        settings=get_tenant_management_settings(),
    )

    structlog.get_logger().info(
        "activation_pipeline_created",
        federated_registration_enabled=(
            settings.tenant_management.federated_registration_enabled
        ),
    )
    return ServiceChain([task], callback)

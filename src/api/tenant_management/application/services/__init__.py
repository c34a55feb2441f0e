"""Application services for the tenant management context."""

from tenant_management.application.services.tenant_activation_service import (
    TenantActivationService,
    build_broker_redirect_uri,
)

__all__ = [
    "TenantActivationService",
    "build_broker_redirect_uri",
]

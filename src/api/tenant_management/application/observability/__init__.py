"""Domain-Oriented Observability for the tenant management application layer."""

from tenant_management.application.observability.tenant_activation_service_probe import (
    DefaultTenantActivationServiceProbe,
    TenantActivationServiceProbe,
)
from tenant_management.application.observability.tenant_activation_task_probe import (
    DefaultTenantActivationTaskProbe,
    TenantActivationTaskProbe,
)

__all__ = [
    "TenantActivationServiceProbe",
    "DefaultTenantActivationServiceProbe",
    "TenantActivationTaskProbe",
    "DefaultTenantActivationTaskProbe",
]

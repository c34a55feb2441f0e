"""Pipeline stages for the tenant management context."""

from tenant_management.application.tasks.tenant_activation_task import (
    TenantActivationTask,
)

__all__ = ["TenantActivationTask"]

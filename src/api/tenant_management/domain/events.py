"""Pipeline events for the tenant management context.

These are the messages passed between tenant pipeline stages. The set is
closed: ``TenantEvent`` lists every variant, and stages dispatch on it with
``match``.
"""

from __future__ import annotations

from dataclasses import dataclass

from tenant_management.domain.value_objects import TenantStatus


@dataclass(frozen=True)
class TenantRequested:
    """A new tenant was submitted and awaits approval.

    Attributes:
        tenant_id: Id assigned to the requested tenant
        requester_email: Who asked for the tenant
    """

    tenant_id: int
    requester_email: str


@dataclass(frozen=True)
class TenantStatusUpdated:
    """The tenant profile service recorded a status change.

    Attributes:
        tenant_id: Tenant whose status changed
        status: The new status
        updated_by: Actor that performed the change
    """

    tenant_id: int
    status: TenantStatus
    updated_by: str


@dataclass(frozen=True)
class TenantProfileUpdated:
    """Descriptive fields of a tenant profile were edited.

    Attributes:
        tenant_id: Tenant whose profile changed
        updated_by: Actor that performed the change
    """

    tenant_id: int
    updated_by: str


TenantEvent = TenantRequested | TenantStatusUpdated | TenantProfileUpdated

# An activation ends with the profile service's response to the ACTIVE
# status request; it is forwarded down the pipeline unchanged.
ActivationResult = TenantStatusUpdated

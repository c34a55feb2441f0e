"""In-memory tenant profile store."""

from __future__ import annotations

import asyncio

from tenant_management.domain import Tenant, TenantStatus, TenantStatusUpdated


class InMemoryTenantProfileStore:
    """In-memory implementation of ITenantProfileStore.

    Suitable for development and testing. Data is lost on restart.
    """

    def __init__(self) -> None:
        self._tenants: dict[int, Tenant] = {}
        self._status_history: list[TenantStatusUpdated] = []
        self._lock = asyncio.Lock()

    async def add_tenant(self, tenant: Tenant) -> None:
        """Store a tenant profile, replacing any prior one with the same id.

        The admin password is never kept with the profile.
        """
        async with self._lock:
            self._tenants[tenant.tenant_id] = tenant.with_admin_password(None)

    async def get_tenant(self, tenant_id: int) -> Tenant | None:
        """Get a tenant profile, or None if not found."""
        async with self._lock:
            return self._tenants.get(tenant_id)

    async def update_status(
        self,
        tenant_id: int,
        status: TenantStatus,
        updated_by: str,
    ) -> TenantStatusUpdated:
        """Set a tenant's status and record the change.

        Raises:
            KeyError: If the tenant does not exist
        """
        async with self._lock:
            tenant = self._tenants.get(tenant_id)
            if tenant is None:
                raise KeyError(f"Tenant not found: {tenant_id}")

            self._tenants[tenant_id] = tenant.with_status(status)
            change = TenantStatusUpdated(
                tenant_id=tenant_id,
                status=status,
                updated_by=updated_by,
            )
            self._status_history.append(change)
            return change

    async def status_history(self, tenant_id: int) -> list[TenantStatusUpdated]:
        """Status changes recorded for a tenant, oldest first."""
        async with self._lock:
            return [c for c in self._status_history if c.tenant_id == tenant_id]

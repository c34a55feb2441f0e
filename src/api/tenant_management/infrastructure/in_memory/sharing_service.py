"""In-memory sharing service."""

from __future__ import annotations

import asyncio

from tenant_management.domain import AccessControlType


class AccessControlTypeExistsError(Exception):
    """Raised when a permission or entity type already exists for a tenant."""

    pass


class InMemorySharingService:
    """In-memory implementation of ISharingService.

    Suitable for development and testing. Like the sharing service it
    stands in for, it rejects a type id that already exists for the tenant.
    """

    def __init__(self) -> None:
        self._permission_types: dict[int, dict[str, AccessControlType]] = {}
        self._entity_types: dict[int, dict[str, AccessControlType]] = {}
        self._lock = asyncio.Lock()

    async def create_permission_type(
        self, permission_type: AccessControlType, tenant_id: int
    ) -> None:
        """Register a permission type for the tenant.

        Raises:
            AccessControlTypeExistsError: If the id is already registered
        """
        async with self._lock:
            self._add(self._permission_types, permission_type, tenant_id)

    async def create_entity_type(
        self, entity_type: AccessControlType, tenant_id: int
    ) -> None:
        """Register an entity type for the tenant.

        Raises:
            AccessControlTypeExistsError: If the id is already registered
        """
        async with self._lock:
            self._add(self._entity_types, entity_type, tenant_id)

    async def list_permission_types(self, tenant_id: int) -> list[AccessControlType]:
        """Permission types registered for the tenant."""
        async with self._lock:
            return list(self._permission_types.get(tenant_id, {}).values())

    async def list_entity_types(self, tenant_id: int) -> list[AccessControlType]:
        """Entity types registered for the tenant."""
        async with self._lock:
            return list(self._entity_types.get(tenant_id, {}).values())

    @staticmethod
    def _add(
        registry: dict[int, dict[str, AccessControlType]],
        access_control_type: AccessControlType,
        tenant_id: int,
    ) -> None:
        types = registry.setdefault(tenant_id, {})
        if access_control_type.id in types:
            raise AccessControlTypeExistsError(
                f"{access_control_type.id} already exists for tenant {tenant_id}"
            )
        types[access_control_type.id] = access_control_type

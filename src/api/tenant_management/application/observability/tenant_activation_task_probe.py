"""Protocol for tenant activation stage observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantActivationTaskProbe(Protocol):
    """Domain probe for the checks made before an activation runs."""

    def activation_requested(self, tenant_id: int) -> None:
        """Record that a status update arrived for a tenant."""
        ...

    def invalid_payload(self, payload_type: str) -> None:
        """Record that the stage received an unsupported payload."""
        ...

    def tenant_not_found(self, tenant_id: int) -> None:
        """Record that no tenant profile exists for the id."""
        ...

    def admin_credential_missing(self, tenant_id: int, admin_username: str) -> None:
        """Record that the tenant admin password is absent or empty."""
        ...

    def activation_branch_selected(self, tenant_id: int, is_update: bool) -> None:
        """Record whether the tenant takes the create or update branch."""
        ...

    def with_context(self, context: ObservationContext) -> TenantActivationTaskProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantActivationTaskProbe:
    """Default implementation of TenantActivationTaskProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        if self._context is None:
            return {}
        # tenant_id is always passed explicitly
        return {k: v for k, v in self._context.as_dict().items() if k != "tenant_id"}

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantActivationTaskProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantActivationTaskProbe(logger=self._logger, context=context)

    def activation_requested(self, tenant_id: int) -> None:
        """Record that a status update arrived for a tenant."""
        self._logger.debug(
            "tenant_activation_requested",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def invalid_payload(self, payload_type: str) -> None:
        """Record that the stage received an unsupported payload."""
        self._logger.error(
            "tenant_activation_invalid_payload",
            payload_type=payload_type,
            **self._get_context_kwargs(),
        )

    def tenant_not_found(self, tenant_id: int) -> None:
        """Record that no tenant profile exists for the id."""
        self._logger.error(
            "tenant_activation_tenant_not_found",
            tenant_id=tenant_id,
            **self._get_context_kwargs(),
        )

    def admin_credential_missing(self, tenant_id: int, admin_username: str) -> None:
        """Record that the tenant admin password is absent or empty."""
        self._logger.error(
            "tenant_activation_admin_credential_missing",
            tenant_id=tenant_id,
            admin_username=admin_username,
            **self._get_context_kwargs(),
        )

    def activation_branch_selected(self, tenant_id: int, is_update: bool) -> None:
        """Record whether the tenant takes the create or update branch."""
        self._logger.debug(
            "tenant_activation_branch_selected",
            tenant_id=tenant_id,
            branch="update" if is_update else "create",
            **self._get_context_kwargs(),
        )

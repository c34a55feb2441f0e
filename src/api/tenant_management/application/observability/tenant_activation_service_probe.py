"""Protocol for tenant activation service observability.

Defines the interface for domain probes that capture the steps of a tenant
activation. Secrets never reach the probe.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TenantActivationServiceProbe(Protocol):
    """Domain probe for tenant activation steps."""

    def activation_started(self, tenant_id: int, is_update: bool) -> None:
        """Record that an activation began on the create or update branch."""
        ...

    def identity_provider_provisioned(
        self, tenant_id: int, client_id: str, is_update: bool
    ) -> None:
        """Record that the identity provider created or updated the realm."""
        ...

    def iam_credential_stored(self, tenant_id: int, client_id: str) -> None:
        """Record that the IAM client credential was persisted."""
        ...

    def federated_registration_skipped(self, tenant_id: int, is_update: bool) -> None:
        """Record that the federation client metadata was built but not submitted."""
        ...

    def federated_client_registered(self, tenant_id: int, client_id: str) -> None:
        """Record that a federation client was registered and configured."""
        ...

    def access_control_bootstrapped(
        self, tenant_id: int, permission_type: str, entity_type: str
    ) -> None:
        """Record that the tenant's permission and entity types were created."""
        ...

    def tenant_activated(self, tenant_id: int, status: str) -> None:
        """Record that the tenant status was set."""
        ...

    def activation_step_failed(
        self, tenant_id: int, step: str, error: Exception
    ) -> None:
        """Record that a collaborator call failed and activation stopped."""
        ...

    def with_context(
        self, context: ObservationContext
    ) -> TenantActivationServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantActivationServiceProbe:
    """Default implementation of TenantActivationServiceProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        # tenant_id is always passed explicitly
        return {k: v for k, v in self._context.as_dict().items() if k != "tenant_id"}

    def with_context(
        self, context: ObservationContext
    ) -> DefaultTenantActivationServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantActivationServiceProbe(logger=self._logger, context=context)

    def activation_started(self, tenant_id: int, is_update: bool) -> None:
        """Record that an activation began on the create or update branch."""
        self._logger.info(
            "tenant_activation_started",
            tenant_id=tenant_id,
            branch="update" if is_update else "create",
            **self._get_context_kwargs(),
        )

    def identity_provider_provisioned(
        self, tenant_id: int, client_id: str, is_update: bool
    ) -> None:
        """Record that the identity provider created or updated the realm."""
        self._logger.info(
            "identity_provider_tenant_updated"
            if is_update
            else "identity_provider_tenant_created",
            tenant_id=tenant_id,
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def iam_credential_stored(self, tenant_id: int, client_id: str) -> None:
        """Record that the IAM client credential was persisted."""
        self._logger.debug(
            "iam_credential_stored",
            tenant_id=tenant_id,
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def federated_registration_skipped(self, tenant_id: int, is_update: bool) -> None:
        """Record that the federation client metadata was built but not submitted."""
        self._logger.debug(
            "federated_registration_skipped",
            tenant_id=tenant_id,
            reason="update_branch" if is_update else "disabled",
            **self._get_context_kwargs(),
        )

    def federated_client_registered(self, tenant_id: int, client_id: str) -> None:
        """Record that a federation client was registered and configured."""
        self._logger.info(
            "federated_client_registered",
            tenant_id=tenant_id,
            client_id=client_id,
            **self._get_context_kwargs(),
        )

    def access_control_bootstrapped(
        self, tenant_id: int, permission_type: str, entity_type: str
    ) -> None:
        """Record that the tenant's permission and entity types were created."""
        self._logger.info(
            "access_control_bootstrapped",
            tenant_id=tenant_id,
            permission_type=permission_type,
            entity_type=entity_type,
            **self._get_context_kwargs(),
        )

    def tenant_activated(self, tenant_id: int, status: str) -> None:
        """Record that the tenant status was set."""
        self._logger.info(
            "tenant_activated",
            tenant_id=tenant_id,
            status=status,
            **self._get_context_kwargs(),
        )

    def activation_step_failed(
        self, tenant_id: int, step: str, error: Exception
    ) -> None:
        """Record that a collaborator call failed and activation stopped."""
        self._logger.error(
            "tenant_activation_step_failed",
            tenant_id=tenant_id,
            step=step,
            error=str(error),
            error_type=type(error).__name__,
            **self._get_context_kwargs(),
        )

"""Exceptions for the tenant management context.

All of them are ServiceErrors, so a pipeline stage reports them through its
callback unchanged.
"""

from __future__ import annotations

from shared_kernel.pipeline.exceptions import ServiceError


class TenantActivationError(ServiceError):
    """Base exception for failed tenant activations."""

    def __init__(self, message: str, tenant_id: int | None = None) -> None:
        super().__init__(message)
        self.tenant_id = tenant_id


class InvalidPayloadError(TenantActivationError):
    """Raised when the activation stage receives anything but a status update.

    No collaborator is contacted when this is raised.
    """

    def __init__(self, payload_type: str) -> None:
        super().__init__(f"Invalid payload type {payload_type}")
        self.payload_type = payload_type


class TenantNotFoundError(TenantActivationError):
    """Raised when the tenant profile service has no record for the id."""

    def __init__(self, tenant_id: int) -> None:
        super().__init__(f"Tenant not found for id {tenant_id}", tenant_id=tenant_id)


class MissingAdminCredentialError(TenantActivationError):
    """Raised when the tenant admin's password is absent or empty.

    Activation stops before the identity provider is contacted.
    """

    def __init__(self, tenant_id: int, admin_username: str) -> None:
        super().__init__(
            f"Admin password not found for admin {admin_username}",
            tenant_id=tenant_id,
        )
        self.admin_username = admin_username


class DownstreamServiceError(TenantActivationError):
    """Raised when a collaborating service call fails.

    The failing exception is chained as ``__cause__``. ``step`` names the
    operation that failed, e.g. ``"create_identity_provider_tenant"``.
    """

    def __init__(
        self,
        message: str,
        step: str | None = None,
        tenant_id: int | None = None,
    ) -> None:
        super().__init__(message, tenant_id=tenant_id)
        self.step = step

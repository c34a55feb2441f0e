"""Pipeline stage that activates a tenant after its status was updated."""

from __future__ import annotations

from infrastructure.settings import (
    TenantManagementSettings,
    get_tenant_management_settings,
)
from shared_kernel.observability_context import ObservationContext
from shared_kernel.pipeline.exceptions import ServiceError
from shared_kernel.pipeline.observability import ServiceTaskProbe
from shared_kernel.pipeline.task import ServiceTask
from tenant_management.application.observability import (
    DefaultTenantActivationTaskProbe,
    TenantActivationTaskProbe,
)
from tenant_management.application.services import TenantActivationService
from tenant_management.domain import (
    ActivationResult,
    CredentialType,
    Tenant,
    TenantProfileUpdated,
    TenantRequested,
    TenantStatusUpdated,
)
from tenant_management.ports.exceptions import (
    DownstreamServiceError,
    InvalidPayloadError,
    MissingAdminCredentialError,
    TenantNotFoundError,
)
from tenant_management.ports.services import ICredentialStore, ITenantProfileStore


class TenantActivationTask(ServiceTask):
    """Activates the tenant named by a TenantStatusUpdated event.

    Loads the tenant and its admin password, picks the create or update
    branch from the presence of an IAM credential, and runs the activation
    service as the configured system actor. The resulting status change is
    forwarded to the next stage; every failure is reported through the
    callback.
    """

    def __init__(
        self,
        activation_service: TenantActivationService,
        credential_store: ICredentialStore,
        tenant_profile_store: ITenantProfileStore,
        settings: TenantManagementSettings | None = None,
        probe: TenantActivationTaskProbe | None = None,
        stage_probe: ServiceTaskProbe | None = None,
    ):
        """Initialize the stage.

        Args:
            activation_service: Service that performs the activation steps
            credential_store: Credential store for admin and IAM lookups
            tenant_profile_store: Tenant profile service
            settings: Tenant management settings (defaults to cached settings)
            probe: Optional domain probe for observability
            stage_probe: Optional probe for generic stage events
        """
        super().__init__(probe=stage_probe)
        self._activation_service = activation_service
        self._credential_store = credential_store
        self._tenant_profile_store = tenant_profile_store
        self._settings = settings or get_tenant_management_settings()
        self._probe = probe or DefaultTenantActivationTaskProbe()

    async def process(self, data: object) -> ActivationResult:
        """Activate the tenant named by a status update event.

        Raises:
            InvalidPayloadError: If ``data`` is not a status update with a tenant id
            TenantNotFoundError: If the tenant does not exist
            MissingAdminCredentialError: If the admin password is absent or empty
            DownstreamServiceError: If a collaborator call fails
        """
        match data:
            case TenantStatusUpdated(tenant_id=int(tenant_id)) if (
                not isinstance(tenant_id, bool) and tenant_id > 0
            ):
                return await self._activate(tenant_id)
            case TenantStatusUpdated() | TenantRequested() | TenantProfileUpdated():
                # Other tenant events, or a status update without a positive tenant id
                self._probe.invalid_payload(type(data).__name__)
                raise InvalidPayloadError(type(data).__name__)
            case _:
                self._probe.invalid_payload(type(data).__name__)
                raise InvalidPayloadError(type(data).__name__)

    def wrap_error(self, error: Exception) -> ServiceError:
        """Report unexpected failures as downstream service errors."""
        wrapped = DownstreamServiceError(f"Error occurred {error}")
        wrapped.__cause__ = error
        return wrapped

    async def _activate(self, tenant_id: int) -> ActivationResult:
        probe = self._probe.with_context(
            ObservationContext(
                tenant_id=str(tenant_id), performed_by=self._settings.system_actor
            )
        )
        probe.activation_requested(tenant_id)

        tenant = await self._tenant_profile_store.get_tenant(tenant_id)
        if tenant is None:
            probe.tenant_not_found(tenant_id)
            raise TenantNotFoundError(tenant_id)

        admin_password = await self._get_admin_password(tenant, probe)
        is_update = await self._has_iam_credential(tenant_id)
        probe.activation_branch_selected(tenant_id, is_update)

        return await self._activation_service.activate(
            tenant.with_admin_password(admin_password),
            performed_by=self._settings.system_actor,
            is_update=is_update,
        )

    async def _get_admin_password(
        self, tenant: Tenant, probe: TenantActivationTaskProbe
    ) -> str:
        credential = await self._credential_store.get_credential(
            owner_id=tenant.tenant_id,
            type=CredentialType.INDIVIDUAL,
            id=tenant.admin_username,
        )
        if credential is None or not credential.has_secret:
            probe.admin_credential_missing(tenant.tenant_id, tenant.admin_username)
            raise MissingAdminCredentialError(tenant.tenant_id, tenant.admin_username)
        return credential.secret

    async def _has_iam_credential(self, tenant_id: int) -> bool:
        credential = await self._credential_store.get_credential(
            owner_id=tenant_id,
            type=CredentialType.IAM,
        )
        return credential is not None and credential.has_id

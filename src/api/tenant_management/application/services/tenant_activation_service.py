"""Tenant activation service for the tenant management context.

Activation provisions everything a tenant needs to be usable and then marks
it ACTIVE:

1. Read the CUSTOS credential (the identity used to call the identity provider)
2. Create or update the tenant realm in the identity provider
3. Store the issued client pair as the tenant's IAM credential
4. Build the federation client metadata (submitted only when enabled)
5. On first activation, create the OWNER permission type and SECRET entity type
6. Set the tenant status to ACTIVE

Steps run strictly in order. A failed step stops the activation and nothing
already done is undone; re-running the whole activation is the recovery path.
Once the IAM credential exists a re-run takes the update branch.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from infrastructure.settings import (
    TenantManagementSettings,
    get_tenant_management_settings,
)
from shared_kernel.observability_context import ObservationContext
from tenant_management.application.observability import (
    DefaultTenantActivationServiceProbe,
    TenantActivationServiceProbe,
)
from tenant_management.domain import (
    OWNER_PERMISSION_TYPE,
    SECRET_ENTITY_TYPE,
    ActivationResult,
    CredentialType,
    FederatedClientMetadata,
    FederatedIdpConfiguration,
    IdentityProviderRegistration,
    Tenant,
    TenantStatus,
)
from tenant_management.ports.exceptions import DownstreamServiceError
from tenant_management.ports.services import (
    ICredentialStore,
    IFederatedAuthenticationClient,
    IIdentityProviderAdmin,
    ISharingService,
    ITenantProfileStore,
)


def build_broker_redirect_uri(base_url: str, tenant_id: int, broker_alias: str) -> str:
    """Redirect URI of the identity provider's broker endpoint for a tenant realm.

    Example:
        >>> build_broker_redirect_uri("https://iam.example.org/auth/", 42, "oidc")
        'https://iam.example.org/auth/realms/42/broker/oidc/endpoint'
    """
    return f"{base_url.rstrip('/')}/realms/{tenant_id}/broker/{broker_alias}/endpoint"


class TenantActivationService:
    """Application service that activates a tenant across collaborating services.

    The create branch provisions a new realm and bootstraps the tenant's
    access-control vocabulary. The update branch refreshes the realm and
    credentials only, so the vocabulary is created exactly once per tenant.
    """

    def __init__(
        self,
        credential_store: ICredentialStore,
        identity_provider: IIdentityProviderAdmin,
        sharing_service: ISharingService,
        tenant_profile_store: ITenantProfileStore,
        federated_authentication: IFederatedAuthenticationClient | None = None,
        settings: TenantManagementSettings | None = None,
        probe: TenantActivationServiceProbe | None = None,
    ):
        """Initialize TenantActivationService with dependencies.

        Args:
            credential_store: Credential store for tenant secrets
            identity_provider: Identity provider administration client
            sharing_service: Sharing service for access-control types
            tenant_profile_store: Tenant profile service
            federated_authentication: Federation client registrar, required
                when federated registration is enabled
            settings: Tenant management settings (defaults to cached settings)
            probe: Optional domain probe for observability

        Raises:
            ValueError: If federated registration is enabled without a registrar
        """
        self._credential_store = credential_store
        self._identity_provider = identity_provider
        self._sharing_service = sharing_service
        self._tenant_profile_store = tenant_profile_store
        self._federated_authentication = federated_authentication
        self._settings = settings or get_tenant_management_settings()
        self._probe = probe or DefaultTenantActivationServiceProbe()

        if (
            self._settings.federated_registration_enabled
            and self._federated_authentication is None
        ):
            raise ValueError(
                "federated_registration_enabled requires a federated "
                "authentication client"
            )

    async def activate(
        self,
        tenant: Tenant,
        performed_by: str,
        is_update: bool,
    ) -> ActivationResult:
        """Provision the tenant and set its status to ACTIVE.

        Args:
            tenant: The tenant, carrying its admin password
            performed_by: Actor recorded for the status change
            is_update: True if the tenant already has an IAM credential

        Returns:
            The status change recorded by the tenant profile service

        Raises:
            DownstreamServiceError: If any collaborator call fails
        """
        tenant_id = tenant.tenant_id
        probe = self._probe.with_context(
            ObservationContext(tenant_id=str(tenant_id), performed_by=performed_by)
        )
        probe.activation_started(tenant_id=tenant_id, is_update=is_update)

        custos_client_id = await self._get_custos_client_id(tenant_id, probe)
        registration = self._build_registration(tenant, custos_client_id)

        if is_update:
            with self._collaborator_call(probe, tenant_id, "update_identity_provider_tenant"):
                issued = await self._identity_provider.update_tenant(registration)
        else:
            with self._collaborator_call(probe, tenant_id, "create_identity_provider_tenant"):
                issued = await self._identity_provider.create_tenant(registration)
        probe.identity_provider_provisioned(
            tenant_id=tenant_id,
            client_id=issued.client_id,
            is_update=is_update,
        )

        with self._collaborator_call(probe, tenant_id, "put_iam_credential"):
            await self._credential_store.put_credential(
                issued.as_credential(tenant_id, CredentialType.IAM)
            )
        probe.iam_credential_stored(tenant_id=tenant_id, client_id=issued.client_id)

        metadata = await self._build_federated_client_metadata(
            tenant, performed_by, probe
        )

        if is_update:
            probe.federated_registration_skipped(tenant_id=tenant_id, is_update=True)
        else:
            if self._settings.federated_registration_enabled:
                await self._register_federated_client(tenant, metadata, probe)
            else:
                probe.federated_registration_skipped(
                    tenant_id=tenant_id, is_update=False
                )
            await self._bootstrap_access_control(tenant_id, probe)

        with self._collaborator_call(probe, tenant_id, "update_tenant_status"):
            result = await self._tenant_profile_store.update_status(
                tenant_id=tenant_id,
                status=TenantStatus.ACTIVE,
                updated_by=performed_by,
            )
        probe.tenant_activated(tenant_id=tenant_id, status=result.status)
        return result

    async def _get_custos_client_id(
        self,
        tenant_id: int,
        probe: TenantActivationServiceProbe,
    ) -> str:
        """Read the client id the identity provider is called with."""
        step = "get_custos_credential"
        with self._collaborator_call(probe, tenant_id, step):
            credential = await self._credential_store.get_credential(
                owner_id=tenant_id,
                type=CredentialType.CUSTOS,
            )

        if credential is None or not credential.has_id:
            error = DownstreamServiceError(
                f"CUSTOS credential not found for tenant {tenant_id}",
                step=step,
                tenant_id=tenant_id,
            )
            probe.activation_step_failed(tenant_id=tenant_id, step=step, error=error)
            raise error

        return credential.id

    @staticmethod
    def _build_registration(
        tenant: Tenant,
        custos_client_id: str,
    ) -> IdentityProviderRegistration:
        return IdentityProviderRegistration(
            tenant_id=tenant.tenant_id,
            tenant_name=tenant.client_name,
            tenant_url=tenant.client_uri,
            admin_username=tenant.admin_username,
            admin_first_name=tenant.admin_first_name,
            admin_last_name=tenant.admin_last_name,
            admin_email=tenant.admin_email,
            admin_password=tenant.admin_password or "",
            redirect_uris=tuple(tenant.redirect_uris),
            requester_email=tenant.requester_email,
            custos_client_id=custos_client_id,
        )

    async def _build_federated_client_metadata(
        self,
        tenant: Tenant,
        performed_by: str,
        probe: TenantActivationServiceProbe,
    ) -> FederatedClientMetadata:
        """Assemble the federation client registration for the tenant.

        The CILOGON credential may not exist yet; its client id is then empty.
        """
        tenant_id = tenant.tenant_id

        with self._collaborator_call(probe, tenant_id, "get_cilogon_credential"):
            cilogon = await self._credential_store.get_credential(
                owner_id=tenant_id,
                type=CredentialType.CILOGON,
            )
        with self._collaborator_call(probe, tenant_id, "get_identity_provider_url"):
            base_url = await self._identity_provider.get_base_url()

        return FederatedClientMetadata(
            tenant_id=tenant_id,
            tenant_name=tenant.client_name,
            tenant_uri=tenant.client_uri,
            comment=tenant.registration_comment(
                self._settings.default_registration_comment
            ),
            scope=tuple(tenant.scopes),
            redirect_uris=(
                build_broker_redirect_uri(
                    base_url, tenant_id, self._settings.broker_alias
                ),
            ),
            contacts=tuple(tenant.contacts),
            performed_by=performed_by,
            client_id=cilogon.id if cilogon is not None else "",
        )

    async def _register_federated_client(
        self,
        tenant: Tenant,
        metadata: FederatedClientMetadata,
        probe: TenantActivationServiceProbe,
    ) -> None:
        """Register the federation client and attach it to the tenant realm."""
        assert self._federated_authentication is not None  # checked in __init__
        tenant_id = tenant.tenant_id

        with self._collaborator_call(probe, tenant_id, "register_federated_client"):
            issued = await self._federated_authentication.register_client(metadata)

        with self._collaborator_call(probe, tenant_id, "put_cilogon_credential"):
            await self._credential_store.put_credential(
                issued.as_credential(tenant_id, CredentialType.CILOGON)
            )

        with self._collaborator_call(probe, tenant_id, "configure_federated_idp"):
            await self._identity_provider.configure_federated_idp(
                FederatedIdpConfiguration(
                    tenant_id=tenant_id,
                    client_id=issued.client_id,
                    client_secret=issued.client_secret,
                    scope=tenant.scope or "",
                    requester_email=tenant.requester_email,
                )
            )

        probe.federated_client_registered(
            tenant_id=tenant_id, client_id=issued.client_id
        )

    async def _bootstrap_access_control(
        self,
        tenant_id: int,
        probe: TenantActivationServiceProbe,
    ) -> None:
        """Create the tenant's OWNER permission type and SECRET entity type."""
        with self._collaborator_call(probe, tenant_id, "create_permission_type"):
            await self._sharing_service.create_permission_type(
                OWNER_PERMISSION_TYPE, tenant_id
            )
        with self._collaborator_call(probe, tenant_id, "create_entity_type"):
            await self._sharing_service.create_entity_type(
                SECRET_ENTITY_TYPE, tenant_id
            )

        probe.access_control_bootstrapped(
            tenant_id=tenant_id,
            permission_type=OWNER_PERMISSION_TYPE.id,
            entity_type=SECRET_ENTITY_TYPE.id,
        )

    @staticmethod
    @contextmanager
    def _collaborator_call(
        probe: TenantActivationServiceProbe,
        tenant_id: int,
        step: str,
    ) -> Iterator[None]:
        """Convert a failing collaborator call into a DownstreamServiceError."""
        try:
            yield
        except Exception as e:
            probe.activation_step_failed(tenant_id=tenant_id, step=step, error=e)
            raise DownstreamServiceError(
                f"{step} failed for tenant {tenant_id}: {e}",
                step=step,
                tenant_id=tenant_id,
            ) from e

"""Unit tests for TenantActivationService."""

from dataclasses import replace
from unittest.mock import AsyncMock, Mock

import pytest

from infrastructure.settings import TenantManagementSettings
from tenant_management.application.observability import TenantActivationServiceProbe
from tenant_management.application.services import (
    TenantActivationService,
    build_broker_redirect_uri,
)
from tenant_management.domain import (
    OWNER_PERMISSION_TYPE,
    SECRET_ENTITY_TYPE,
    ClientCredentials,
    Credential,
    CredentialType,
    FederatedIdp,
    TenantStatus,
    TenantStatusUpdated,
)
from tenant_management.ports.exceptions import DownstreamServiceError
from tenant_management.ports.services import (
    ICredentialStore,
    IFederatedAuthenticationClient,
    IIdentityProviderAdmin,
    ISharingService,
    ITenantProfileStore,
)

TENANT_ID = 42


def stored_credentials(**by_type: Credential | None):
    """Build a get_credential side effect returning credentials by type name."""

    async def get_credential(owner_id, type, id=None):
        return by_type.get(type.value)

    return get_credential


@pytest.fixture
def mock_credential_store():
    """Mock credential store holding the CUSTOS and CILOGON credentials."""
    store = Mock(spec=ICredentialStore)
    store.get_credential = AsyncMock(
        side_effect=stored_credentials(
            CUSTOS=Credential(
                owner_id=TENANT_ID,
                type=CredentialType.CUSTOS,
                id="custos-client",
                secret="custos-secret",
            ),
            CILOGON=Credential(
                owner_id=TENANT_ID,
                type=CredentialType.CILOGON,
                id="cilogon-client",
                secret="cilogon-secret",
            ),
        )
    )
    store.put_credential = AsyncMock()
    return store


@pytest.fixture
def mock_identity_provider():
    """Mock identity provider issuing a fixed client pair."""
    provider = Mock(spec=IIdentityProviderAdmin)
    issued = ClientCredentials(client_id="iam-client", client_secret="iam-secret")
    provider.create_tenant = AsyncMock(return_value=issued)
    provider.update_tenant = AsyncMock(return_value=issued)
    provider.get_base_url = AsyncMock(return_value="https://iam.example.org/auth/")
    provider.configure_federated_idp = AsyncMock()
    return provider


@pytest.fixture
def mock_sharing_service():
    service = Mock(spec=ISharingService)
    service.create_permission_type = AsyncMock()
    service.create_entity_type = AsyncMock()
    return service


@pytest.fixture
def mock_profile_store():
    store = Mock(spec=ITenantProfileStore)
    store.update_status = AsyncMock(
        return_value=TenantStatusUpdated(
            tenant_id=TENANT_ID, status=TenantStatus.ACTIVE, updated_by="system"
        )
    )
    return store


@pytest.fixture
def mock_federated_authentication():
    client = Mock(spec=IFederatedAuthenticationClient)
    client.register_client = AsyncMock(
        return_value=ClientCredentials(
            client_id="cilogon:/client_id/new", client_secret="cilogon-new-secret"
        )
    )
    return client


@pytest.fixture
def mock_probe():
    """Mock probe whose with_context returns itself."""
    probe = Mock(spec=TenantActivationServiceProbe)
    probe.with_context.return_value = probe
    return probe


@pytest.fixture
def activation_service(
    mock_credential_store,
    mock_identity_provider,
    mock_sharing_service,
    mock_profile_store,
    mock_federated_authentication,
    settings,
    mock_probe,
):
    """Create TenantActivationService with mocked dependencies."""
    return TenantActivationService(
        credential_store=mock_credential_store,
        identity_provider=mock_identity_provider,
        sharing_service=mock_sharing_service,
        tenant_profile_store=mock_profile_store,
        federated_authentication=mock_federated_authentication,
        settings=settings,
        probe=mock_probe,
    )


@pytest.fixture
def tenant_with_password(tenant):
    return tenant.with_admin_password("admin-password")


class TestCreateBranch:
    """Tests for activate() on a tenant without an IAM credential."""

    @pytest.mark.asyncio
    async def test_creates_realm_with_tenant_fields(
        self, activation_service, tenant_with_password, mock_identity_provider
    ):
        """The registration carries tenant, admin and CUSTOS client fields."""
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        mock_identity_provider.create_tenant.assert_awaited_once()
        mock_identity_provider.update_tenant.assert_not_called()

        registration = mock_identity_provider.create_tenant.call_args[0][0]
        assert registration.tenant_id == TENANT_ID
        assert registration.tenant_name == "Science Gateway"
        assert registration.tenant_url == "https://gateway.example.org"
        assert registration.admin_username == "gateway-admin"
        assert registration.admin_first_name == "Ada"
        assert registration.admin_last_name == "Lovelace"
        assert registration.admin_email == "admin@example.org"
        assert registration.admin_password == "admin-password"
        assert registration.redirect_uris == ("https://gateway.example.org/callback",)
        assert registration.requester_email == "requester@example.org"
        assert registration.custos_client_id == "custos-client"

    @pytest.mark.asyncio
    async def test_stores_issued_pair_as_iam_credential(
        self, activation_service, tenant_with_password, mock_credential_store
    ):
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        mock_credential_store.put_credential.assert_awaited_once_with(
            Credential(
                owner_id=TENANT_ID,
                type=CredentialType.IAM,
                id="iam-client",
                secret="iam-secret",
            )
        )

    @pytest.mark.asyncio
    async def test_bootstraps_owner_and_secret_types(
        self, activation_service, tenant_with_password, mock_sharing_service
    ):
        """First activation registers the OWNER and SECRET types once each."""
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        mock_sharing_service.create_permission_type.assert_awaited_once_with(
            OWNER_PERMISSION_TYPE, TENANT_ID
        )
        mock_sharing_service.create_entity_type.assert_awaited_once_with(
            SECRET_ENTITY_TYPE, TENANT_ID
        )

    @pytest.mark.asyncio
    async def test_sets_status_active_and_returns_response(
        self, activation_service, tenant_with_password, mock_profile_store
    ):
        result = await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        mock_profile_store.update_status.assert_awaited_once_with(
            tenant_id=TENANT_ID,
            status=TenantStatus.ACTIVE,
            updated_by="system",
        )
        assert result == mock_profile_store.update_status.return_value

    @pytest.mark.asyncio
    async def test_records_performed_by(
        self, activation_service, tenant_with_password, mock_profile_store
    ):
        """The actor passed in is the one recorded with the status change."""
        await activation_service.activate(
            tenant_with_password, performed_by="operator", is_update=False
        )

        assert mock_profile_store.update_status.call_args.kwargs["updated_by"] == (
            "operator"
        )

    @pytest.mark.asyncio
    async def test_does_not_submit_federation_metadata_when_disabled(
        self,
        activation_service,
        tenant_with_password,
        mock_federated_authentication,
        mock_identity_provider,
        mock_probe,
    ):
        """With the flag off the metadata is built but never registered."""
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        mock_federated_authentication.register_client.assert_not_called()
        mock_identity_provider.configure_federated_idp.assert_not_called()
        mock_probe.federated_registration_skipped.assert_called_once_with(
            tenant_id=TENANT_ID, is_update=False
        )

    @pytest.mark.asyncio
    async def test_steps_run_in_order(
        self,
        activation_service,
        tenant_with_password,
        mock_credential_store,
        mock_identity_provider,
        mock_sharing_service,
        mock_profile_store,
    ):
        """Collaborators are called in the documented order."""
        calls = Mock()
        calls.attach_mock(mock_credential_store.get_credential, "get_credential")
        calls.attach_mock(mock_credential_store.put_credential, "put_credential")
        calls.attach_mock(mock_identity_provider.create_tenant, "create_tenant")
        calls.attach_mock(mock_identity_provider.get_base_url, "get_base_url")
        calls.attach_mock(
            mock_sharing_service.create_permission_type, "create_permission_type"
        )
        calls.attach_mock(mock_sharing_service.create_entity_type, "create_entity_type")
        calls.attach_mock(mock_profile_store.update_status, "update_status")

        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        names = [c[0] for c in calls.mock_calls]
        assert names == [
            "get_credential",
            "create_tenant",
            "put_credential",
            "get_credential",
            "get_base_url",
            "create_permission_type",
            "create_entity_type",
            "update_status",
        ]
        credential_types = [
            c.kwargs["type"] for c in mock_credential_store.get_credential.call_args_list
        ]
        assert credential_types == [CredentialType.CUSTOS, CredentialType.CILOGON]


class TestUpdateBranch:
    """Tests for activate() on a tenant that already has an IAM credential."""

    @pytest.mark.asyncio
    async def test_updates_realm_instead_of_creating(
        self, activation_service, tenant_with_password, mock_identity_provider
    ):
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=True
        )

        mock_identity_provider.update_tenant.assert_awaited_once()
        mock_identity_provider.create_tenant.assert_not_called()

    @pytest.mark.asyncio
    async def test_overwrites_iam_credential(
        self, activation_service, tenant_with_password, mock_credential_store
    ):
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=True
        )

        stored = mock_credential_store.put_credential.call_args[0][0]
        assert stored.type == CredentialType.IAM
        assert stored.id == "iam-client"

    @pytest.mark.asyncio
    async def test_skips_access_control_bootstrap(
        self, activation_service, tenant_with_password, mock_sharing_service
    ):
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=True
        )

        mock_sharing_service.create_permission_type.assert_not_called()
        mock_sharing_service.create_entity_type.assert_not_called()

    @pytest.mark.asyncio
    async def test_still_sets_status_active(
        self, activation_service, tenant_with_password, mock_profile_store
    ):
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=True
        )

        mock_profile_store.update_status.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_never_registers_federation_client_even_when_enabled(
        self,
        mock_credential_store,
        mock_identity_provider,
        mock_sharing_service,
        mock_profile_store,
        mock_federated_authentication,
        tenant_with_password,
    ):
        service = TenantActivationService(
            credential_store=mock_credential_store,
            identity_provider=mock_identity_provider,
            sharing_service=mock_sharing_service,
            tenant_profile_store=mock_profile_store,
            federated_authentication=mock_federated_authentication,
            settings=TenantManagementSettings(federated_registration_enabled=True),
        )

        await service.activate(
            tenant_with_password, performed_by="system", is_update=True
        )

        mock_federated_authentication.register_client.assert_not_called()


class TestFederatedClientMetadata:
    """Tests for the federation client metadata assembled during activation."""

    @pytest.fixture
    def enabled_service(
        self,
        mock_credential_store,
        mock_identity_provider,
        mock_sharing_service,
        mock_profile_store,
        mock_federated_authentication,
    ):
        return TenantActivationService(
            credential_store=mock_credential_store,
            identity_provider=mock_identity_provider,
            sharing_service=mock_sharing_service,
            tenant_profile_store=mock_profile_store,
            federated_authentication=mock_federated_authentication,
            settings=TenantManagementSettings(federated_registration_enabled=True),
        )

    @pytest.mark.asyncio
    async def test_metadata_fields(
        self, enabled_service, tenant_with_password, mock_federated_authentication
    ):
        await enabled_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        metadata = mock_federated_authentication.register_client.call_args[0][0]
        assert metadata.tenant_id == TENANT_ID
        assert metadata.tenant_name == "Science Gateway"
        assert metadata.tenant_uri == "https://gateway.example.org"
        assert metadata.comment == "migrated tenant"
        assert metadata.scope == ("openid", "profile", "email")
        assert metadata.redirect_uris == (
            "https://iam.example.org/auth/realms/42/broker/oidc/endpoint",
        )
        assert metadata.contacts == ("ops@example.org",)
        assert metadata.performed_by == "system"
        assert metadata.client_id == "cilogon-client"

    @pytest.mark.asyncio
    async def test_blank_comment_and_scope_use_defaults(
        self, enabled_service, tenant, mock_federated_authentication
    ):
        blank = replace(tenant, comment="  ", scope=None).with_admin_password("pw")

        await enabled_service.activate(blank, performed_by="system", is_update=False)

        metadata = mock_federated_authentication.register_client.call_args[0][0]
        assert metadata.comment == "Created by custos"
        assert metadata.scope == ()

    @pytest.mark.asyncio
    async def test_missing_cilogon_credential_leaves_client_id_empty(
        self,
        enabled_service,
        tenant_with_password,
        mock_credential_store,
        mock_federated_authentication,
    ):
        mock_credential_store.get_credential.side_effect = stored_credentials(
            CUSTOS=Credential(
                owner_id=TENANT_ID, type=CredentialType.CUSTOS, id="custos-client"
            )
        )

        await enabled_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        metadata = mock_federated_authentication.register_client.call_args[0][0]
        assert metadata.client_id == ""

    @pytest.mark.asyncio
    async def test_enabled_registration_stores_cilogon_credential_and_configures_idp(
        self,
        enabled_service,
        tenant_with_password,
        mock_credential_store,
        mock_identity_provider,
    ):
        await enabled_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        stored = [c[0][0] for c in mock_credential_store.put_credential.call_args_list]
        assert [c.type for c in stored] == [CredentialType.IAM, CredentialType.CILOGON]
        assert stored[1].id == "cilogon:/client_id/new"
        assert stored[1].secret == "cilogon-new-secret"

        configuration = mock_identity_provider.configure_federated_idp.call_args[0][0]
        assert configuration.tenant_id == TENANT_ID
        assert configuration.client_id == "cilogon:/client_id/new"
        assert configuration.client_secret == "cilogon-new-secret"
        assert configuration.scope == "openid profile email"
        assert configuration.requester_email == "requester@example.org"
        assert configuration.type == FederatedIdp.CILOGON

    def test_enabled_registration_requires_registrar(
        self,
        mock_credential_store,
        mock_identity_provider,
        mock_sharing_service,
        mock_profile_store,
    ):
        with pytest.raises(ValueError, match="federated authentication client"):
            TenantActivationService(
                credential_store=mock_credential_store,
                identity_provider=mock_identity_provider,
                sharing_service=mock_sharing_service,
                tenant_profile_store=mock_profile_store,
                settings=TenantManagementSettings(federated_registration_enabled=True),
            )


class TestFailures:
    """Tests for collaborator failures during activate()."""

    @pytest.mark.asyncio
    async def test_missing_custos_credential_stops_before_identity_provider(
        self,
        activation_service,
        tenant_with_password,
        mock_credential_store,
        mock_identity_provider,
    ):
        mock_credential_store.get_credential.side_effect = stored_credentials()

        with pytest.raises(DownstreamServiceError) as exc_info:
            await activation_service.activate(
                tenant_with_password, performed_by="system", is_update=False
            )

        assert exc_info.value.step == "get_custos_credential"
        assert exc_info.value.tenant_id == TENANT_ID
        mock_identity_provider.create_tenant.assert_not_called()

    @pytest.mark.asyncio
    async def test_identity_provider_failure_is_wrapped_with_cause(
        self,
        activation_service,
        tenant_with_password,
        mock_identity_provider,
        mock_credential_store,
        mock_probe,
    ):
        cause = ConnectionError("realm service unavailable")
        mock_identity_provider.create_tenant.side_effect = cause

        with pytest.raises(DownstreamServiceError) as exc_info:
            await activation_service.activate(
                tenant_with_password, performed_by="system", is_update=False
            )

        assert exc_info.value.cause is cause
        assert exc_info.value.step == "create_identity_provider_tenant"
        mock_credential_store.put_credential.assert_not_called()
        mock_probe.activation_step_failed.assert_called_once_with(
            tenant_id=TENANT_ID, step="create_identity_provider_tenant", error=cause
        )

    @pytest.mark.asyncio
    async def test_failure_after_credential_stored_is_not_rolled_back(
        self,
        activation_service,
        tenant_with_password,
        mock_credential_store,
        mock_sharing_service,
        mock_profile_store,
    ):
        """The IAM credential stays written when a later step fails."""
        mock_sharing_service.create_entity_type.side_effect = RuntimeError("boom")

        with pytest.raises(DownstreamServiceError) as exc_info:
            await activation_service.activate(
                tenant_with_password, performed_by="system", is_update=False
            )

        assert exc_info.value.step == "create_entity_type"
        mock_credential_store.put_credential.assert_awaited_once()
        mock_sharing_service.create_permission_type.assert_awaited_once()
        mock_profile_store.update_status.assert_not_called()

    @pytest.mark.asyncio
    async def test_collaborator_is_not_retried(
        self, activation_service, tenant_with_password, mock_profile_store
    ):
        mock_profile_store.update_status.side_effect = TimeoutError()

        with pytest.raises(DownstreamServiceError):
            await activation_service.activate(
                tenant_with_password, performed_by="system", is_update=False
            )

        assert mock_profile_store.update_status.await_count == 1


class TestObservability:
    """Tests for probe calls made by activate()."""

    @pytest.mark.asyncio
    async def test_binds_tenant_and_actor_context(
        self, activation_service, tenant_with_password, mock_probe
    ):
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        context = mock_probe.with_context.call_args[0][0]
        assert context.tenant_id == str(TENANT_ID)
        assert context.performed_by == "system"

    @pytest.mark.asyncio
    async def test_records_each_completed_step(
        self, activation_service, tenant_with_password, mock_probe
    ):
        await activation_service.activate(
            tenant_with_password, performed_by="system", is_update=False
        )

        mock_probe.activation_started.assert_called_once_with(
            tenant_id=TENANT_ID, is_update=False
        )
        mock_probe.identity_provider_provisioned.assert_called_once_with(
            tenant_id=TENANT_ID, client_id="iam-client", is_update=False
        )
        mock_probe.iam_credential_stored.assert_called_once_with(
            tenant_id=TENANT_ID, client_id="iam-client"
        )
        mock_probe.access_control_bootstrapped.assert_called_once_with(
            tenant_id=TENANT_ID, permission_type="OWNER", entity_type="SECRET"
        )
        mock_probe.tenant_activated.assert_called_once_with(
            tenant_id=TENANT_ID, status=TenantStatus.ACTIVE
        )


class TestBuildBrokerRedirectUri:
    """Tests for build_broker_redirect_uri()."""

    def test_base_url_with_trailing_slash(self):
        assert (
            build_broker_redirect_uri("https://iam.example.org/auth/", 42, "oidc")
            == "https://iam.example.org/auth/realms/42/broker/oidc/endpoint"
        )

    def test_base_url_without_trailing_slash(self):
        assert (
            build_broker_redirect_uri("https://iam.example.org/auth", 42, "oidc")
            == "https://iam.example.org/auth/realms/42/broker/oidc/endpoint"
        )

    def test_uses_broker_alias(self):
        assert build_broker_redirect_uri("https://iam", 1, "cilogon").endswith(
            "/realms/1/broker/cilogon/endpoint"
        )

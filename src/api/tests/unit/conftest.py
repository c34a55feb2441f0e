"""Unit test fixtures shared across bounded contexts."""

import pytest

from infrastructure.settings import TenantManagementSettings
from tenant_management.domain import Tenant, TenantStatus


@pytest.fixture
def settings():
    """Tenant management settings with defaults, independent of the environment."""
    return TenantManagementSettings(
        system_actor="system",
        default_registration_comment="Created by custos",
        federated_registration_enabled=False,
        broker_alias="oidc",
    )


@pytest.fixture
def tenant():
    """A requested tenant as stored by the profile service (no password)."""
    return Tenant(
        tenant_id=42,
        client_name="Science Gateway",
        requester_email="requester@example.org",
        admin_username="gateway-admin",
        admin_first_name="Ada",
        admin_last_name="Lovelace",
        admin_email="admin@example.org",
        client_uri="https://gateway.example.org",
        comment="migrated tenant",
        scope="openid profile email",
        contacts=("ops@example.org",),
        redirect_uris=("https://gateway.example.org/callback",),
        status=TenantStatus.REQUESTED,
    )

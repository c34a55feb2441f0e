"""In-memory adapters for the tenant management ports.

Used for local development and tests; every adapter keeps its state in
process memory behind an asyncio lock.
"""

from tenant_management.infrastructure.in_memory.credential_store import (
    InMemoryCredentialStore,
)
from tenant_management.infrastructure.in_memory.federated_authentication import (
    InMemoryFederatedAuthenticationClient,
)
from tenant_management.infrastructure.in_memory.identity_provider import (
    InMemoryIdentityProviderAdmin,
    RealmExistsError,
    RealmNotFoundError,
)
from tenant_management.infrastructure.in_memory.sharing_service import (
    AccessControlTypeExistsError,
    InMemorySharingService,
)
from tenant_management.infrastructure.in_memory.tenant_profile_store import (
    InMemoryTenantProfileStore,
)

__all__ = [
    "AccessControlTypeExistsError",
    "InMemoryCredentialStore",
    "InMemoryFederatedAuthenticationClient",
    "InMemoryIdentityProviderAdmin",
    "InMemorySharingService",
    "InMemoryTenantProfileStore",
    "RealmExistsError",
    "RealmNotFoundError",
]

"""Tenant profile record for the tenant management context."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from tenant_management.domain.value_objects import TenantStatus


@dataclass(frozen=True)
class Tenant:
    """A tenant as stored by the tenant profile service.

    Tenants are the unit of isolation: each owns an identity-provider realm,
    a set of client credentials and an access-control vocabulary, all keyed
    by ``tenant_id``.

    The admin password is never stored with the profile. It is attached
    in memory for the duration of an activation via ``with_admin_password``.
    """

    tenant_id: int
    client_name: str
    requester_email: str
    admin_username: str
    admin_first_name: str = ""
    admin_last_name: str = ""
    admin_email: str = ""
    admin_password: str | None = field(default=None, repr=False)
    client_uri: str = ""
    comment: str | None = None
    scope: str | None = None
    contacts: tuple[str, ...] = ()
    redirect_uris: tuple[str, ...] = ()
    status: TenantStatus = TenantStatus.REQUESTED

    def with_admin_password(self, password: str | None) -> Tenant:
        """Return a copy carrying the admin password (None clears it)."""
        return replace(self, admin_password=password)

    def with_status(self, status: TenantStatus) -> Tenant:
        """Return a copy with a different lifecycle status."""
        return replace(self, status=status)

    @property
    def scopes(self) -> list[str]:
        """Scope string split on whitespace; empty when no scope is set."""
        if not self.scope:
            return []
        return self.scope.split()

    def registration_comment(self, default: str) -> str:
        """The tenant comment, or ``default`` when it is blank."""
        if self.comment is None or not self.comment.strip():
            return default
        return self.comment

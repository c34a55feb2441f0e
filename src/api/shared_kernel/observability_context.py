"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures operation-scoped metadata that should be included with all
    instrumentation events emitted while a tenant is being processed.

    Attributes:
        request_id: Identifier of the pipeline run (if applicable).
        tenant_id: Tenant being processed (if applicable).
        performed_by: Actor on whose behalf the operation runs (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(tenant_id="42", performed_by="system")
        probe = DefaultTenantActivationServiceProbe().with_context(context)
    """

    request_id: str | None = None
    tenant_id: str | None = None
    performed_by: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.tenant_id is not None:
            result["tenant_id"] = self.tenant_id
        if self.performed_by is not None:
            result["performed_by"] = self.performed_by
        result.update(self.extra)
        return result

    def with_tenant(self, tenant_id: int | str) -> ObservationContext:
        """Create a new context with the tenant id set."""
        return ObservationContext(
            request_id=self.request_id,
            tenant_id=str(tenant_id),
            performed_by=self.performed_by,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        new_extra = {**self.extra, **kwargs}
        return ObservationContext(
            request_id=self.request_id,
            tenant_id=self.tenant_id,
            performed_by=self.performed_by,
            extra=new_extra,
        )

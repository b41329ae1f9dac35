"""Binding target and resource hooks.

SharedContext is the narrow capability the configurator writes to: three
settable fields owned by the embedding application.  TenantContext is a
ready-made implementation for applications that have no context object of
their own (the tenant-console CLI uses it).

BindingHooks holds the optional callbacks that wire a tenant's identifiers
into live connections.  An unset hook is simply not called.
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Protocol, Tuple, runtime_checkable

CONTEXT_FIELDS = ("tenant_shard", "tenant_mongo_db", "partner_identifier")

Hook = Callable[[Any], Any]


@runtime_checkable
class SharedContext(Protocol):
    tenant_shard: Any
    tenant_mongo_db: Any
    partner_identifier: Any


@dataclass
class TenantContext:
    """In-memory SharedContext."""

    tenant_shard: Any = None
    tenant_mongo_db: Any = None
    partner_identifier: Any = None

    @property
    def is_bound(self) -> bool:
        return any(getattr(self, name) is not None for name in CONTEXT_FIELDS)


@dataclass
class BindingHooks:
    """Optional resource-binding callbacks, invoked primary first.

    primary:   called with the tenant's shard identifier.
    secondary: called with the secondary-store identifier; skipped when the
               tenant has none.
    """

    primary: Optional[Hook] = None
    secondary: Optional[Hook] = None

    def registered(self) -> List[Tuple[str, Hook]]:
        return [(name, hook) for name, hook in (("primary", self.primary), ("secondary", self.secondary)) if hook is not None]

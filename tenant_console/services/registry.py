"""Tenant registry — ordered mapping of tenant key to descriptor.

Insertion order is significant: it drives menu numbering and the auto-select
choice (the first key).  Two descriptor shapes are accepted:

    {"acme": {"constants": {"shard": "s1", "partner_code": "A"}, "label": "Acme"}}
    {"acme": {"shard": "s1", "partner_code": "A"}}

In the nested form every key besides "constants" is display metadata.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterator, List, Optional

from tenant_console.lib.errors import ConfigurationError

SHARD = "shard"
SECONDARY_STORE = "mongo_db"
PARTNER_CODE = "partner_code"

REQUIRED_CONSTANTS = (SHARD, PARTNER_CODE)

NO_PARTNER = "N/A"


@dataclass(frozen=True)
class TenantDescriptor:
    """Named constants describing one tenant's bindings, plus display metadata."""

    constants: Dict[str, Any]
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(cls, value: Any) -> Optional["TenantDescriptor"]:
        if value is None or isinstance(value, TenantDescriptor):
            return value
        if not isinstance(value, Mapping):
            raise ConfigurationError(
                f"Tenant descriptor must be a mapping, got {type(value).__name__}"
            )
        if "constants" in value:
            constants = value["constants"] or {}
            if not isinstance(constants, Mapping):
                raise ConfigurationError("Tenant 'constants' must be a mapping")
            metadata = {k: v for k, v in value.items() if k != "constants"}
            return cls(constants=dict(constants), metadata=metadata)
        return cls(constants=dict(value))

    @property
    def shard(self) -> Any:
        return self.constants.get(SHARD)

    @property
    def secondary_store(self) -> Any:
        return self.constants.get(SECONDARY_STORE)

    @property
    def partner_code(self) -> Any:
        return self.constants.get(PARTNER_CODE)

    def missing_fields(self) -> List[str]:
        """Required constants that are absent (or None), in declaration order."""
        return [name for name in REQUIRED_CONSTANTS if self.constants.get(name) is None]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    @property
    def display_partner(self) -> str:
        partner = self.partner_code
        return str(partner) if partner is not None else NO_PARTNER


class TenantRegistry(Mapping):
    """Read-only, insertion-ordered mapping of TenantKey -> TenantDescriptor.

    A key may map to None (declared but unconfigured); configuring it fails
    with MissingTenant just like an unknown key.
    """

    def __init__(self, tenants: Optional[Mapping] = None):
        self._tenants: Dict[Hashable, Optional[TenantDescriptor]] = {}
        for key, value in (tenants or {}).items():
            self._tenants[key] = TenantDescriptor.from_value(value)

    @classmethod
    def coerce(cls, value: Any) -> Optional["TenantRegistry"]:
        """Wrap a plain mapping; None (no registry configured) passes through."""
        if value is None or isinstance(value, TenantRegistry):
            return value
        if not isinstance(value, Mapping):
            raise ConfigurationError(
                f"Tenant registry must be a mapping, got {type(value).__name__}"
            )
        return cls(value)

    def __getitem__(self, key: Hashable) -> Optional[TenantDescriptor]:
        return self._tenants[key]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._tenants)

    def __len__(self) -> int:
        return len(self._tenants)

    def __repr__(self) -> str:
        return f"TenantRegistry({list(self._tenants)!r})"

    def first_key(self) -> Hashable:
        return next(iter(self._tenants))

    def key_at(self, position: int) -> Hashable:
        """Key at the 1-based menu *position*."""
        if position < 1:
            raise IndexError(position)
        return list(self._tenants)[position - 1]

    def display_partner(self, key: Hashable) -> str:
        descriptor = self._tenants.get(key)
        return descriptor.display_partner if descriptor else NO_PARTNER

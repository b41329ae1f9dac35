"""Apply a tenant descriptor to the shared context and bind its resources.

configure() runs four steps (lookup, validate, apply, bind) and never
raises: every failure is reported through the output collaborator and handed
back inside a ConfigurationResult.

Validation happens before the context is touched, so an incomplete
descriptor leaves the context exactly as it was.  A failing binding hook, on
the other hand, runs after the fields were written; those writes are not
rolled back.
"""

from dataclasses import dataclass
from typing import Hashable, Mapping, Optional

from tenant_console.lib.errors import (
    BindingFailed,
    IncompleteDescriptor,
    MissingTenant,
    TenantError,
    UnexpectedFailure,
)
from tenant_console.lib.output import Output
from tenant_console.services.context import CONTEXT_FIELDS, BindingHooks, SharedContext
from tenant_console.services.registry import TenantDescriptor, TenantRegistry


@dataclass
class ConfigurationResult:
    key: Hashable
    error: Optional[TenantError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok


class TenantConfigurator:
    def __init__(self, output: Optional[Output] = None, hooks: Optional[BindingHooks] = None):
        self.output = output or Output()
        self.hooks = hooks if hooks is not None else BindingHooks()

    def configure(self, key: Hashable, registry: Mapping, context: SharedContext) -> ConfigurationResult:
        try:
            descriptor = self._lookup(key, TenantRegistry.coerce(registry))
            self._validate(key, descriptor)
            self._apply_context(descriptor, context)
            self._bind_resources(key, descriptor)
        except MissingTenant as exc:
            self.output.error(str(exc))
            return ConfigurationResult(key, exc)
        except IncompleteDescriptor as exc:
            self.output.error(f"Failed to configure tenant '{key}': {exc}")
            return ConfigurationResult(key, exc)
        except BindingFailed as exc:
            self.output.error(f"Failed to configure tenant '{key}': {exc}")
            self.output.backtrace(exc.cause)
            return ConfigurationResult(key, exc)
        except Exception as exc:
            self.output.error(f"Failed to configure tenant '{key}': {exc}")
            self.output.backtrace(exc)
            return ConfigurationResult(key, UnexpectedFailure(exc))

        self.output.success(f"Tenant set to: {key}")
        return ConfigurationResult(key)

    def clear(self, context: SharedContext) -> None:
        """Unset every context field.  Safe to call repeatedly."""
        for name in CONTEXT_FIELDS:
            setattr(context, name, None)
        self.output.info("Tenant context has been cleared.")

    @staticmethod
    def _lookup(key: Hashable, registry: Optional[TenantRegistry]) -> TenantDescriptor:
        descriptor = registry.get(key) if registry is not None else None
        if descriptor is None:
            raise MissingTenant(key)
        return descriptor

    @staticmethod
    def _validate(key: Hashable, descriptor: TenantDescriptor) -> None:
        missing = descriptor.missing_fields()
        if missing:
            raise IncompleteDescriptor(key, missing)

    @staticmethod
    def _apply_context(descriptor: TenantDescriptor, context: SharedContext) -> None:
        context.tenant_shard = descriptor.shard
        context.tenant_mongo_db = descriptor.secondary_store
        context.partner_identifier = descriptor.partner_code

    def _bind_resources(self, key: Hashable, descriptor: TenantDescriptor) -> None:
        # Primary before secondary; the first failure stops the rest.
        if self.hooks.primary is not None:
            self._call_hook(key, "primary", self.hooks.primary, descriptor.shard)
        store = descriptor.secondary_store
        if self.hooks.secondary is not None and store is not None and str(store) != "":
            self._call_hook(key, "secondary", self.hooks.secondary, store)

    @staticmethod
    def _call_hook(key, name, hook, value) -> None:
        try:
            hook(value)
        except Exception as exc:
            raise BindingFailed(key, exc, hook=name) from exc

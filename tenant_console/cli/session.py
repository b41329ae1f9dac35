"""Session-level tenant state.

One SessionController per console session holds the active tenant, so
nothing lives in module globals.  It is the only writer of that state:

    session = SessionController(tenants, context, hooks=hooks)
    session.setup()                  # auto-select or prompt, then configure
    session.current_tenant()         # -> "acme" or None
    session.reset_current_tenant()   # clear the context and choose again

setup() and reset_current_tenant() never raise (KeyboardInterrupt aside);
failures are reported through the output collaborator and kept on
``last_error``.  Not thread-safe: give each thread its own controller.
"""

from typing import Any, Callable, Hashable, Mapping, Optional

from tenant_console.lib.errors import (
    NoTenantsConfigured,
    NoTenantSelected,
    TenantError,
    UnexpectedFailure,
)
from tenant_console.lib.output import Output
from tenant_console.lib.prompt import is_interactive
from tenant_console.services.configurator import TenantConfigurator
from tenant_console.services.context import BindingHooks, SharedContext
from tenant_console.services.registry import TenantRegistry
from tenant_console.services.selector import TenantSelector


class SessionController:
    """Resolve, configure and track the current tenant for one session.

    Args:
        tenants:      Tenant mapping (or TenantRegistry); None means "not configured".
        context:      SharedContext the configurator writes to.
        output:       Output collaborator shared with the selector and configurator.
        hooks:        Resource-binding hooks for the default configurator.
        selector:     Override the TenantSelector (tests, custom prompts).
        configurator: Override the TenantConfigurator.
        interactive:  Probe returning True when the operator can be prompted.
    """

    def __init__(
        self,
        tenants: Optional[Mapping],
        context: SharedContext,
        output: Optional[Output] = None,
        hooks: Optional[BindingHooks] = None,
        selector: Optional[TenantSelector] = None,
        configurator: Optional[TenantConfigurator] = None,
        interactive: Optional[Callable[[], bool]] = None,
    ):
        self.tenants = tenants
        self.context = context
        self.output = output or Output()
        self.selector = selector or TenantSelector(self.output)
        self.configurator = configurator or TenantConfigurator(self.output, hooks)
        self.interactive = interactive or is_interactive
        self.last_error: Optional[TenantError] = None
        self._current_tenant: Optional[Hashable] = None

    @classmethod
    def from_configuration(cls, cfg, **kwargs: Any) -> "SessionController":
        """Build a controller from a tenant_console.config.Configuration."""
        kwargs.setdefault("output", Output(pretty=cfg.pretty_output, timestamps=cfg.timestamps))
        kwargs.setdefault("hooks", cfg.hooks)
        return cls(cfg.tenants, cfg.context, **kwargs)

    @property
    def registry(self) -> Optional[TenantRegistry]:
        return TenantRegistry.coerce(self.tenants)

    def current_tenant(self) -> Optional[Hashable]:
        return self._current_tenant

    @property
    def is_bound(self) -> bool:
        return self._current_tenant is not None

    def setup(self) -> bool:
        """Resolve a tenant and configure it.  Returns True when a tenant got bound."""
        self.last_error = None
        try:
            return self._setup()
        except Exception as exc:
            self._report_unexpected(exc)
            return False

    def reset_current_tenant(self) -> bool:
        """Clear the current tenant (if any) and run setup() again.

        Returns whether the session ended up bound to a tenant.
        """
        self.last_error = None
        try:
            registry = self.registry
            if not registry:
                self.output.warning("Cannot reset: no tenants configured.")
                self.last_error = NoTenantsConfigured()
                return False
            if self._current_tenant is not None:
                self.output.warning(f"Resetting tenant: {self._current_tenant}")
                self.configurator.clear(self.context)
                self._current_tenant = None
        except Exception as exc:
            self._report_unexpected(exc)
            return False

        self.setup()
        return self.is_bound

    def _setup(self) -> bool:
        registry = self.registry
        if not registry:
            self.last_error = NoTenantsConfigured()
            self.output.error(str(self.last_error))
            return False

        key = self._resolve_tenant_key(registry)
        if key is None:
            self.last_error = NoTenantSelected()
            self.output.error(str(self.last_error))
            return False

        result = self.configurator.configure(key, registry, self.context)
        if not result:
            # the configurator already reported the failure
            self.last_error = result.error
            return False

        self._current_tenant = key
        self.output.success(f"Tenant initialized: {key}")
        return True

    def _resolve_tenant_key(self, registry: TenantRegistry) -> Optional[Hashable]:
        if len(registry) == 1 or not self.interactive():
            return registry.first_key()
        return self.selector.select(registry)

    def _report_unexpected(self, exc: Exception) -> None:
        self.last_error = UnexpectedFailure(exc)
        self.output.error(f"Error setting up tenant: {exc}")
        self.output.backtrace(exc)

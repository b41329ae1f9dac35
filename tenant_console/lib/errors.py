"""Error taxonomy for tenant resolution and configuration.

Expected failures are modelled as TenantError subclasses but are *returned*
to callers (see ConfigurationResult and SessionController.last_error) rather
than raised past the public operations.  Only ConfigurationError, which
signals a setup/programming mistake, is raised.
"""

from typing import Any, Iterable, Optional


class TenantError(Exception):
    """Base class for every tenant-console failure."""


class ConfigurationError(TenantError):
    """Invalid process configuration (bad import path, malformed registry)."""


class NoTenantsConfigured(TenantError):
    def __init__(self, message: str = "No tenants configured."):
        super().__init__(message)


class NoTenantSelected(TenantError):
    def __init__(self, message: str = "No tenant selected. Loading without tenant configuration."):
        super().__init__(message)


class MissingTenant(TenantError):
    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"No configuration found for tenant: {key}")


class IncompleteDescriptor(TenantError):
    def __init__(self, key: Any, missing: Iterable[str]):
        self.key = key
        self.missing = list(missing)
        super().__init__(f"Tenant constants missing keys: {', '.join(self.missing)}")


class BindingFailed(TenantError):
    """A resource-binding hook raised.  The original exception is kept as *cause*."""

    def __init__(self, key: Any, cause: BaseException, hook: Optional[str] = None):
        self.key = key
        self.cause = cause
        self.hook = hook
        label = f"{hook} binding" if hook else "binding"
        super().__init__(f"{label} failed: {cause}")


class UnexpectedFailure(TenantError):
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(str(cause))

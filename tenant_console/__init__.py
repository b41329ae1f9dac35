"""tenant-console — pick a tenant for an interactive session and bind it.

    from tenant_console import SessionController, TenantContext

    session = SessionController(TENANTS, TenantContext())
    session.setup()
"""

__version__ = "0.4.0"

from tenant_console.config import Configuration, configuration, configure, load_object
from tenant_console.lib.errors import (
    BindingFailed,
    ConfigurationError,
    IncompleteDescriptor,
    MissingTenant,
    NoTenantSelected,
    NoTenantsConfigured,
    TenantError,
    UnexpectedFailure,
)
from tenant_console.lib.output import Output
from tenant_console.services.configurator import ConfigurationResult, TenantConfigurator
from tenant_console.services.context import BindingHooks, SharedContext, TenantContext
from tenant_console.services.registry import TenantDescriptor, TenantRegistry
from tenant_console.services.selector import TenantSelector
from tenant_console.cli.session import SessionController


def setup(**kwargs) -> SessionController:
    """Build a SessionController from the process configuration and run setup()."""
    session = SessionController.from_configuration(configuration(), **kwargs)
    session.setup()
    return session


__all__ = [
    "BindingFailed",
    "BindingHooks",
    "Configuration",
    "ConfigurationError",
    "ConfigurationResult",
    "IncompleteDescriptor",
    "MissingTenant",
    "NoTenantSelected",
    "NoTenantsConfigured",
    "Output",
    "SessionController",
    "SharedContext",
    "TenantConfigurator",
    "TenantContext",
    "TenantDescriptor",
    "TenantError",
    "TenantRegistry",
    "TenantSelector",
    "UnexpectedFailure",
    "configuration",
    "configure",
    "load_object",
    "setup",
]

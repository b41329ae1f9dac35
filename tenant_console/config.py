"""Process-wide configuration.

The embedding application declares its tenants, context object and binding
hooks once:

    import tenant_console

    tenant_console.configure(
        tenants={"acme": {"constants": {"shard": "s1", "partner_code": "A"}}},
        context=current_context,
        hooks=tenant_console.BindingHooks(primary=db.use_shard),
    )

Environment overrides, read when the configuration is first created:
  TENANT_CONSOLE_PRETTY_OUTPUT   0/false/no/off disables colours
  TENANT_CONSOLE_TIMESTAMPS      1/true/yes/on timestamps every message
  TENANT_CONSOLE_REGISTRY        module:attribute of the tenant mapping
  TENANT_CONSOLE_CONTEXT         module:attribute of the shared context
"""

import importlib
import os
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional

from tenant_console.lib.errors import ConfigurationError
from tenant_console.services.context import BindingHooks, SharedContext

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Configuration:
    pretty_output: bool = True
    timestamps: bool = False
    tenants: Optional[Mapping] = None
    context: Optional[SharedContext] = None
    hooks: BindingHooks = field(default_factory=BindingHooks)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Configuration":
        env = os.environ if environ is None else environ
        cfg = cls(
            pretty_output=_env_flag(env.get("TENANT_CONSOLE_PRETTY_OUTPUT"), default=True),
            timestamps=_env_flag(env.get("TENANT_CONSOLE_TIMESTAMPS"), default=False),
        )
        if registry_path := env.get("TENANT_CONSOLE_REGISTRY"):
            cfg.tenants = load_object(registry_path)
        if context_path := env.get("TENANT_CONSOLE_CONTEXT"):
            cfg.context = load_object(context_path)
        return cfg


_OPTIONS = frozenset(f.name for f in fields(Configuration))

_configuration: Optional[Configuration] = None


def configuration() -> Configuration:
    """Return the process configuration, creating it from the environment on first use."""
    global _configuration
    if _configuration is None:
        _configuration = Configuration.from_env()
    return _configuration


def configure(**overrides: Any) -> Configuration:
    """Update the process configuration in place and return it."""
    cfg = configuration()
    for name, value in overrides.items():
        if name not in _OPTIONS:
            raise ConfigurationError(f"Unknown configuration option: {name}")
        setattr(cfg, name, value)
    return cfg


def reset_configuration() -> None:
    global _configuration
    _configuration = None


def load_object(path: str) -> Any:
    """Import ``package.module:attribute`` (attribute may be dotted)."""
    module_name, sep, attr_path = path.partition(":")
    if not sep or not module_name or not attr_path:
        raise ConfigurationError(f"Expected 'module:attribute', got {path!r}")
    try:
        obj = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"Cannot import module '{module_name}': {e}") from e
    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ConfigurationError(f"'{module_name}' has no attribute '{attr_path}'") from e
    return obj


def _env_flag(value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return default

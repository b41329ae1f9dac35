#!/usr/bin/env python3
"""tenant-console — resolve a tenant, then drop into an interactive console.

Usage:
    tenant-console --registry myapp.tenants:TENANTS
    tenant-console --registry myapp.tenants:TENANTS --context myapp.ctx:Current \\
                   --primary-hook myapp.db:use_shard --secondary-hook myapp.docs:use_store
    tenant-console --registry myapp.tenants:TENANTS --no-repl    # setup only

Inside the console:
    session             the SessionController
    context             the shared context the tenant was applied to
    tenants             the tenant registry
    reset()             clear the context and choose a tenant again
    current_tenant()    the active tenant key (or None)
"""

import argparse
import code
import os
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from tenant_console.cli.banner import render_banner
from tenant_console.cli.session import SessionController
from tenant_console.config import configuration, load_object
from tenant_console.lib.errors import ConfigurationError
from tenant_console.lib.output import Output
from tenant_console.services.context import BindingHooks, TenantContext

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tenant-console",
        description="Select a tenant, apply its settings and open an interactive console",
    )
    parser.add_argument(
        "--registry", "-r",
        default=os.environ.get("TENANT_CONSOLE_REGISTRY"),
        help="module:attribute of the tenant mapping (default: $TENANT_CONSOLE_REGISTRY)",
    )
    parser.add_argument(
        "--context", "-c",
        default=os.environ.get("TENANT_CONSOLE_CONTEXT"),
        help="module:attribute of the shared context object (default: a fresh in-memory context)",
    )
    parser.add_argument("--primary-hook", help="module:function called with the tenant's shard")
    parser.add_argument("--secondary-hook", help="module:function called with the tenant's secondary store")
    parser.add_argument("--no-color", action="store_true", help="Plain output without colours")
    parser.add_argument("--timestamps", action="store_true", help="Timestamp every message")
    parser.add_argument("--no-repl", action="store_true", help="Run tenant setup only, then exit")
    return parser


def build_session(args: argparse.Namespace) -> SessionController:
    """Wire a SessionController from parsed arguments and the process configuration."""
    cfg = configuration()

    if not args.registry and cfg.tenants is None:
        raise ConfigurationError("No tenant registry given. Use --registry module:attribute.")
    tenants = load_object(args.registry) if args.registry else cfg.tenants

    if args.context:
        context = load_object(args.context)
    else:
        context = cfg.context if cfg.context is not None else TenantContext()

    hooks = BindingHooks(
        primary=load_object(args.primary_hook) if args.primary_hook else cfg.hooks.primary,
        secondary=load_object(args.secondary_hook) if args.secondary_hook else cfg.hooks.secondary,
    )
    output = Output(
        pretty=cfg.pretty_output and not args.no_color,
        timestamps=cfg.timestamps or args.timestamps,
    )
    return SessionController(tenants, context, output=output, hooks=hooks)


def open_console(session: SessionController) -> None:
    render_banner(session, console)
    names = ", ".join(name for name, _ in session.configurator.hooks.registered()) or "none"
    console.print(f"[dim]Binding hooks: {names}.  Call [bold]reset()[/bold] to switch tenant.[/dim]")
    code.interact(
        banner="",
        local={
            "session": session,
            "context": session.context,
            "tenants": session.registry,
            "reset": session.reset_current_tenant,
            "current_tenant": session.current_tenant,
        },
        exitmsg="",
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        session = build_session(args)
    except ConfigurationError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        return 1

    session.setup()
    if args.no_repl:
        return 0 if session.is_bound else 1

    open_console(session)
    return 0


if __name__ == "__main__":
    sys.exit(main())

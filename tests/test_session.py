"""Tests for tenant_console.cli.session — the session controller."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tenant_console.cli.session import SessionController
from tenant_console.config import Configuration
from tenant_console.lib.errors import (
    BindingFailed,
    IncompleteDescriptor,
    NoTenantSelected,
    NoTenantsConfigured,
    UnexpectedFailure,
)
from tenant_console.services.context import BindingHooks
from tenant_console.services.selector import TenantSelector


def make_session(tenants, context, output, reader=None, interactive=True, **kwargs):
    selector = TenantSelector(output=output, reader=reader or (lambda: None))
    return SessionController(
        tenants,
        context,
        output=output,
        selector=kwargs.pop("selector", selector),
        interactive=lambda: interactive,
        **kwargs,
    )


# ===========================================================================
# Auto-select
# ===========================================================================

class TestAutoSelect:

    @pytest.mark.parametrize("interactive", [True, False])
    def test_single_tenant_bypasses_selector(self, acme_only, context, output, interactive):
        selector = MagicMock()
        session = make_session(acme_only, context, output, interactive=interactive, selector=selector)

        assert session.setup() is True
        assert session.current_tenant() == "acme"
        selector.select.assert_not_called()
        assert output.messages("success") == ["Tenant set to: acme", "Tenant initialized: acme"]

    def test_non_interactive_picks_first_key(self, two_tenants, context, output, scripted):
        reader = scripted(["2"])
        session = make_session(two_tenants, context, output, reader=reader, interactive=False)

        assert session.setup()
        assert session.current_tenant() == "acme"
        assert reader.calls == 0
        assert output.messages("prompt") == []

    def test_single_tenant_does_not_probe_interactivity(self, acme_only, context, output):
        probe = MagicMock(return_value=True)
        session = SessionController(acme_only, context, output=output, interactive=probe)
        session.setup()
        probe.assert_not_called()


# ===========================================================================
# No tenants / declined
# ===========================================================================

class TestNothingToBind:

    @pytest.mark.parametrize("tenants", [None, {}])
    def test_no_tenants_configured(self, tenants, context, output):
        session = make_session(tenants, context, output)

        assert session.setup() is False
        assert session.current_tenant() is None
        assert isinstance(session.last_error, NoTenantsConfigured)
        assert output.messages("error") == ["No tenants configured."]
        assert context.writes == []

    def test_emptied_registry_keeps_previous_tenant(self, two_tenants, context, output):
        session = make_session(two_tenants, context, output, interactive=False)
        session.setup()

        session.tenants = {}
        assert session.setup() is False
        assert session.current_tenant() == "acme"

    def test_declined_selection(self, two_tenants, context, output, scripted):
        session = make_session(two_tenants, context, output, reader=scripted(["0"]))

        assert session.setup() is False
        assert session.current_tenant() is None
        assert isinstance(session.last_error, NoTenantSelected)
        assert output.messages("error") == ["No tenant selected. Loading without tenant configuration."]

    def test_retries_exhausted(self, two_tenants, context, output, scripted):
        session = make_session(two_tenants, context, output, reader=scripted(["a", "b", "c"]))

        assert session.setup() is False
        assert isinstance(session.last_error, NoTenantSelected)
        assert context.writes == []


# ===========================================================================
# Interactive end-to-end
# ===========================================================================

class TestInteractiveSetup:

    def test_choose_second_tenant(self, two_tenants, context, output, scripted):
        session = make_session(two_tenants, context, output, reader=scripted(["2"]))

        assert session.setup() is True
        assert session.current_tenant() == "globex"
        assert context.partner_identifier == "G"
        assert context.tenant_shard == "s2"

    def test_enter_chooses_first(self, two_tenants, context, output, scripted):
        session = make_session(two_tenants, context, output, reader=scripted([""]))
        session.setup()
        assert session.current_tenant() == "acme"

    def test_setup_while_bound_switches_tenant(self, two_tenants, context, output, scripted):
        session = make_session(two_tenants, context, output, reader=scripted(["1", "2"]))
        session.setup()
        session.setup()
        assert session.current_tenant() == "globex"

    def test_setup_while_bound_rebinds_hooks(self, acme_only, context, output):
        primary = MagicMock()
        session = make_session(acme_only, context, output, hooks=BindingHooks(primary=primary))
        session.setup()
        session.setup()
        assert primary.call_count == 2


# ===========================================================================
# Failure isolation
# ===========================================================================

class TestFailureIsolation:

    def test_binding_failure_leaves_state_unset(self, context, output):
        tenants = {"acme": {"shard": "s1", "mongo_db": "docs", "partner_code": "A"}}
        hooks = BindingHooks(secondary=MagicMock(side_effect=RuntimeError("mongo down")))
        session = make_session(tenants, context, output, hooks=hooks)

        assert session.setup() is False
        assert session.current_tenant() is None
        assert isinstance(session.last_error, BindingFailed)
        assert output.messages("error") == [
            "Failed to configure tenant 'acme': secondary binding failed: mongo down"
        ]
        assert "Tenant initialized: acme" not in output.messages("success")

    def test_failed_switch_keeps_previous_tenant(self, context, output, scripted):
        tenants = {
            "acme": {"shard": "s1", "partner_code": "A"},
            "broken": {"constants": {"mongo_db": "docs"}},
        }
        session = make_session(tenants, context, output, reader=scripted(["1", "2"]))
        session.setup()

        assert session.setup() is False
        assert session.current_tenant() == "acme"
        assert isinstance(session.last_error, IncompleteDescriptor)

    def test_selector_exception_is_contained(self, two_tenants, context, output):
        selector = MagicMock()
        selector.select.side_effect = OSError("stdin closed")
        session = make_session(two_tenants, context, output, selector=selector)

        assert session.setup() is False
        assert isinstance(session.last_error, UnexpectedFailure)
        assert output.messages("error") == ["Error setting up tenant: stdin closed"]
        assert output.messages("trace")

    def test_configurator_exception_is_contained(self, acme_only, context, output):
        configurator = MagicMock()
        configurator.configure.side_effect = KeyError("boom")
        session = make_session(acme_only, context, output, configurator=configurator)

        assert session.setup() is False
        assert session.current_tenant() is None
        assert isinstance(session.last_error, UnexpectedFailure)

    def test_malformed_registry_is_contained(self, context, output):
        session = make_session(["acme"], context, output)
        assert session.setup() is False
        assert isinstance(session.last_error, UnexpectedFailure)

    def test_last_error_cleared_on_success(self, acme_only, context, output):
        session = make_session({}, context, output)
        session.setup()
        session.tenants = acme_only
        session.setup()
        assert session.last_error is None


# ===========================================================================
# Reset
# ===========================================================================

class TestReset:

    def test_reset_rebinds_same_tenant(self, two_tenants, context, output, scripted):
        session = make_session(two_tenants, context, output, reader=scripted(["1", "1"]))
        session.setup()
        assert session.current_tenant() == "acme"
        context.writes.clear()

        assert session.reset_current_tenant() is True
        assert session.current_tenant() == "acme"
        assert output.messages("warning") == ["Resetting tenant: acme"]
        # cleared first, then rebound
        assert context.writes[:3] == [
            ("tenant_shard", None),
            ("tenant_mongo_db", None),
            ("partner_identifier", None),
        ]
        assert context.writes[3:] == [
            ("tenant_shard", "s1"),
            ("tenant_mongo_db", "acme_docs"),
            ("partner_identifier", "A"),
        ]

    def test_reset_can_switch_tenant(self, two_tenants, context, output, scripted):
        session = make_session(two_tenants, context, output, reader=scripted(["1", "2"]))
        session.setup()
        assert session.reset_current_tenant() is True
        assert session.current_tenant() == "globex"

    def test_reset_when_unset_runs_setup(self, acme_only, context, output):
        session = make_session(acme_only, context, output)
        assert session.reset_current_tenant() is True
        assert output.messages("warning") == []
        assert "Tenant context has been cleared." not in output.messages("info")

    def test_reset_declined_ends_unset(self, two_tenants, context, output, scripted):
        session = make_session(two_tenants, context, output, reader=scripted(["1", "0"]))
        session.setup()

        assert session.reset_current_tenant() is False
        assert session.current_tenant() is None
        assert not context.is_bound

    @pytest.mark.parametrize("tenants", [None, {}])
    def test_reset_without_tenants(self, tenants, context, output):
        session = make_session(tenants, context, output)

        assert session.reset_current_tenant() is False
        assert output.messages("warning") == ["Cannot reset: no tenants configured."]
        assert output.messages("error") == []
        assert isinstance(session.last_error, NoTenantsConfigured)


# ===========================================================================
# Construction
# ===========================================================================

class TestFromConfiguration:

    def test_wires_output_and_hooks(self, acme_only, context):
        primary = MagicMock()
        cfg = Configuration(pretty_output=False, tenants=acme_only, context=context,
                            hooks=BindingHooks(primary=primary))
        session = SessionController.from_configuration(cfg)

        assert session.output.pretty is False
        assert session.configurator.hooks is cfg.hooks
        assert session.context is context
        session.setup()
        primary.assert_called_once_with("s1")

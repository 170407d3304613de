"""
Test suite for demo content

Tests that the example scenarios run cleanly and the reference data
reflects the banking rules.
"""

import pytest
from decimal import Decimal

from portfolio_demos.bank import Bank
from portfolio_demos.master_control import MasterControl
from portfolio_demos.rules import BankingRules
from portfolio_demos.scenarios import (
    COMMAND_TEMPLATES, EXAMPLE_SCENARIOS, account_type_info, get_scenario
)


class TestScenarios:
    """Test example command batches"""

    @pytest.mark.parametrize("scenario", EXAMPLE_SCENARIOS, ids=lambda s: s.id)
    def test_every_command_is_valid(self, scenario):
        """Test example scenarios contain no rejected commands"""
        master_control = MasterControl(Bank())
        master_control.start(list(scenario.commands))
        assert master_control.get_invalid_commands() == []

    def test_ids_are_unique(self):
        """Test scenario IDs do not collide"""
        ids = [scenario.id for scenario in EXAMPLE_SCENARIOS]
        assert len(ids) == len(set(ids))

    def test_account_closure_scenario_closes_account(self):
        """Test the closure example ends with no open accounts"""
        master_control = MasterControl(Bank())
        output = master_control.start(list(get_scenario("account-closure").commands))
        assert output == []

    def test_get_unknown_scenario(self):
        """Test unknown IDs raise KeyError"""
        with pytest.raises(KeyError):
            get_scenario("missing")

    def test_to_dict(self):
        """Test serialization keeps every field"""
        data = get_scenario("basic-operations").to_dict()
        assert data["title"] == "Basic Banking Operations"
        assert len(data["commands"]) == 4


class TestReferenceData:
    """Test templates and account type limits"""

    def test_templates_cover_every_command(self):
        """Test a template exists for each command keyword"""
        commands = {template["command"] for template in COMMAND_TEMPLATES}
        assert commands == {"create", "deposit", "withdraw", "transfer", "pass"}

    def test_account_type_info_follows_rules(self):
        """Test limits are read from the rules"""
        info = account_type_info(BankingRules(checking_deposit_limit=Decimal('750')))
        assert info["checking"]["deposit_limit"] == "750"
        assert info["cd"]["withdrawal_lock_months"] == 12
        assert set(info) == {"checking", "savings", "cd"}

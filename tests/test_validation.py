"""
Test suite for command validation

Tests each validator against the banking business rules.
"""

import pytest
from decimal import Decimal

from portfolio_demos.money import Money
from portfolio_demos.accounts import Checking, Savings, CertificateOfDeposit
from portfolio_demos.bank import Bank
from portfolio_demos.commands import CommandType, parse, parse_command
from portfolio_demos.rules import BankingRules
from portfolio_demos.validation import (
    AccountNumberValidation, AccountTypeValidation, CdAccountValidation,
    CommandValidation
)


class TestCommandParsing:
    """Test tokenizing commands"""

    def test_parse_command(self):
        """Test whitespace splitting and blank input"""
        assert parse_command("  deposit   12345678 500 ") == ["deposit", "12345678", "500"]
        assert parse_command("   ") is None

    def test_parse_classifies(self):
        """Test keywords are case-insensitive and unknown ones rejected"""
        command = parse("DEPOSIT 12345678 500")
        assert command.type == CommandType.DEPOSIT
        assert command.params == ["12345678", "500"]
        assert parse("open 12345678") is None


class TestHelpers:
    """Test validation helpers"""

    def test_account_number(self):
        """Test IDs are exactly eight digits"""
        validation = AccountNumberValidation()
        assert validation.is_valid_account_number("12345678")
        assert not validation.is_valid_account_number("1234567")
        assert not validation.is_valid_account_number("123456789")
        assert not validation.is_valid_account_number("1234567a")

    def test_account_number_uses_rules(self):
        """Test the ID length follows the rules"""
        validation = AccountNumberValidation(BankingRules(account_id_length=4))
        assert validation.is_valid_account_number("1234")
        assert not validation.is_valid_account_number("12345678")

    def test_account_type(self):
        """Test account type keywords"""
        assert AccountTypeValidation.is_valid_account_type("Checking")
        assert AccountTypeValidation.is_valid_account_type("cd")
        assert not AccountTypeValidation.is_valid_account_type("brokerage")

    def test_cd_limits(self):
        """Test CD balance range and APR precision"""
        validation = CdAccountValidation()
        assert validation.validate_cd_balance(Decimal('1000'))
        assert validation.validate_cd_balance(Decimal('10000'))
        assert not validation.validate_cd_balance(Decimal('999.99'))
        assert validation.validate_apr(Decimal('10'))
        assert not validation.validate_apr(Decimal('10.01'))
        assert not validation.validate_apr(Decimal('1.234'))
        assert not validation.validate_apr(Decimal('-1'))


class TestCommandValidation:
    """Test routing validation across command types"""

    def setup_method(self):
        self.bank = Bank()
        self.bank.add_account(Checking("11111111", Decimal('1')))
        self.bank.add_account(Savings("22222222", Decimal('2')))
        self.bank.add_account(CertificateOfDeposit("33333333", Decimal('3'), Money.of(2000)))
        self.validation = CommandValidation(self.bank)

    @pytest.mark.parametrize("command", [
        "create checking 12345678 1.0",
        "CREATE Savings 12345678 0",
        "create cd 12345678 4.5 5000",
        "create cd 12345678 10 1000",
    ])
    def test_valid_creates(self, command):
        """Test well-formed create commands"""
        assert self.validation.validate_command(command)

    @pytest.mark.parametrize("command", [
        "create checking 11111111 1.0",
        "create checking 1234567 1.0",
        "create checking 12345678 10.5",
        "create checking 12345678 1.234",
        "create checking 12345678 abc",
        "create checking 12345678 1.0 500",
        "create cd 12345678 4.5",
        "create cd 12345678 4.5 999",
        "create cd 12345678 4.5 10001",
        "create brokerage 12345678 1.0",
        "create checking 12345678",
    ])
    def test_invalid_creates(self, command):
        """Test create commands that break a rule"""
        assert not self.validation.validate_command(command)

    @pytest.mark.parametrize("command,expected", [
        ("deposit 11111111 1000", True),
        ("deposit 11111111 1000.01", False),
        ("deposit 11111111 0", True),
        ("deposit 11111111 -1", False),
        ("deposit 22222222 2500", True),
        ("deposit 22222222 2501", False),
        ("deposit 33333333 100", False),
        ("deposit 99999999 100", False),
        ("deposit 11111111 abc", False),
        ("deposit 11111111", False),
    ])
    def test_deposits(self, command, expected):
        """Test deposit limits per account type"""
        assert self.validation.validate_command(command) is expected

    @pytest.mark.parametrize("command,expected", [
        ("withdraw 11111111 5000", True),
        ("withdraw 22222222 1000", True),
        ("withdraw 22222222 1001", False),
        ("withdraw 33333333 100", False),
        ("withdraw 11111111 -5", False),
        ("withdraw 99999999 5", False),
    ])
    def test_withdrawals(self, command, expected):
        """Test withdrawal limits and the CD lock"""
        assert self.validation.validate_command(command) is expected

    def test_cd_withdrawal_after_lock(self):
        """Test CDs accept withdrawals once twelve months have passed"""
        cd = self.bank.get_account("33333333")
        cd.months_since_creation = 12
        assert self.validation.validate_command("withdraw 33333333 100")

    @pytest.mark.parametrize("command,expected", [
        ("transfer 11111111 22222222 500", True),
        ("transfer 22222222 11111111 400", True),
        ("transfer 22222222 11111111 401", False),
        ("transfer 11111111 22222222 2501", False),
        ("transfer 11111111 11111111 100", False),
        ("transfer 11111111 33333333 100", False),
        ("transfer 33333333 11111111 100", False),
        ("transfer 11111111 99999999 100", False),
        ("transfer 11111111 22222222 0", False),
        ("transfer 11111111 22222222", False),
        ("transfer 11111111 22222222 100 extra", False),
    ])
    def test_transfers(self, command, expected):
        """Test transfer rules"""
        assert self.validation.validate_command(command) is expected

    def test_savings_transfer_out_limit(self):
        """Test savings cannot send more than the outbound cap"""
        self.bank.add_account(Savings("44444444", Decimal('2')))
        assert self.validation.validate_command("transfer 22222222 44444444 1000")
        assert not self.validation.validate_command("transfer 22222222 44444444 1000.01")

    @pytest.mark.parametrize("command,expected", [
        ("pass 1", True),
        ("pass 60", True),
        ("pass 0", False),
        ("pass 61", False),
        ("pass -1", False),
        ("pass 1.5", False),
        ("pass", False),
        ("pass 1 2", False),
    ])
    def test_pass(self, command, expected):
        """Test month range"""
        assert self.validation.validate_command(command) is expected

    @pytest.mark.parametrize("command", ["", "   ", "open 12345678", "hello"])
    def test_unknown_commands(self, command):
        """Test unknown or blank input is invalid"""
        assert not self.validation.validate_command(command)

    def test_custom_rules(self):
        """Test limits come from the supplied rules"""
        rules = BankingRules(checking_deposit_limit=Decimal('50'))
        validation = CommandValidation(self.bank, rules)
        assert validation.validate_command("deposit 11111111 50")
        assert not validation.validate_command("deposit 11111111 51")

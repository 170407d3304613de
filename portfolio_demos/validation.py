"""
Command Validation Module

Checks banking commands against the business rules before anything is
executed. Validators answer True/False and never mutate the bank.
"""

import re
from decimal import Decimal
from typing import List, Optional

from .accounts import AccountType, CertificateOfDeposit
from .bank import Bank
from .commands import CommandType, TransferCommand, parse_command
from .money import parse_decimal, has_at_most_two_decimals
from .rules import BankingRules, DEFAULT_RULES

MONTHS_PATTERN = re.compile(r"[0-9]+")


class AccountNumberValidation:
    """Account ID format check"""

    def __init__(self, rules: BankingRules = DEFAULT_RULES):
        self._pattern = re.compile(rf"[0-9]{{{rules.account_id_length}}}")

    def is_valid_account_number(self, account_number: str) -> bool:
        return self._pattern.fullmatch(account_number) is not None


class AccountTypeValidation:

    @staticmethod
    def is_valid_account_type(account_type: str) -> bool:
        try:
            AccountType.from_keyword(account_type)
        except ValueError:
            return False
        return True


class CdAccountValidation:
    """Opening-balance and APR constraints for certificates of deposit"""

    def __init__(self, rules: BankingRules = DEFAULT_RULES):
        self.rules = rules

    def validate_cd_balance(self, balance: Decimal) -> bool:
        return self.rules.cd_min_balance <= balance <= self.rules.cd_max_balance

    def validate_apr(self, apr: Decimal) -> bool:
        return (
            self.rules.min_apr <= apr <= self.rules.max_apr
            and has_at_most_two_decimals(apr)
        )


class CreateCommandValidator:

    def __init__(self, rules: BankingRules = DEFAULT_RULES):
        self.rules = rules
        self.account_numbers = AccountNumberValidation(rules)
        self.cd_validation = CdAccountValidation(rules)

    def validate(self, command: str, bank: Bank) -> bool:
        parts = parse_command(command)

        if not parts or len(parts) < 4 or parts[0].lower() != CommandType.CREATE.value:
            return False

        account_keyword = parts[1]
        account_id = parts[2]

        if not AccountTypeValidation.is_valid_account_type(account_keyword):
            return False
        account_type = AccountType.from_keyword(account_keyword)

        if not self.account_numbers.is_valid_account_number(account_id):
            return False

        if bank.get_account(account_id) is not None:
            return False

        apr = parse_decimal(parts[3])
        if apr is None or not self.cd_validation.validate_apr(apr):
            return False

        if account_type != AccountType.CD:
            return len(parts) == 4

        if len(parts) != 5:
            return False

        balance = parse_decimal(parts[4])
        if balance is None:
            return False

        return self.cd_validation.validate_cd_balance(balance)


class DepositCommandValidator:

    def __init__(self, rules: BankingRules = DEFAULT_RULES):
        self.rules = rules
        self.account_numbers = AccountNumberValidation(rules)

    def validate(self, command: str, bank: Bank) -> bool:
        parts = parse_command(command)

        if not parts or len(parts) != 3 or parts[0].lower() != CommandType.DEPOSIT.value:
            return False

        account_id, amount_text = parts[1], parts[2]

        if not self.account_numbers.is_valid_account_number(account_id):
            return False

        account = bank.get_account(account_id)
        if account is None:
            return False

        amount = parse_decimal(amount_text)
        if amount is None or amount < 0:
            return False

        if account.account_type == AccountType.CD:
            return False

        if account.account_type == AccountType.SAVINGS:
            return amount <= self.rules.savings_deposit_limit

        return amount <= self.rules.checking_deposit_limit


class WithdrawCommandValidator:
    """
    Withdrawals may exceed the balance; execution withdraws what is there.
    """

    def __init__(self, rules: BankingRules = DEFAULT_RULES):
        self.rules = rules
        self.account_numbers = AccountNumberValidation(rules)

    def validate(self, command: str, bank: Bank) -> bool:
        parts = parse_command(command)

        if not parts or len(parts) != 3 or parts[0].lower() != CommandType.WITHDRAW.value:
            return False

        account_id, amount_text = parts[1], parts[2]

        if not self.account_numbers.is_valid_account_number(account_id):
            return False

        account = bank.get_account(account_id)
        if account is None:
            return False

        amount = parse_decimal(amount_text)
        if amount is None or amount < 0:
            return False

        if account.account_type == AccountType.SAVINGS and amount > self.rules.savings_withdraw_limit:
            return False

        if isinstance(account, CertificateOfDeposit) and not account.can_withdraw(self.rules.cd_lock_months):
            return False

        return True


class TransferCommandValidator:

    def __init__(self, rules: BankingRules = DEFAULT_RULES):
        self.rules = rules

    def validate(self, transfer: TransferCommand, bank: Bank) -> bool:
        if transfer.from_id == transfer.to_id:
            return False

        from_account = bank.get_account(transfer.from_id)
        to_account = bank.get_account(transfer.to_id)
        if from_account is None or to_account is None:
            return False

        if AccountType.CD in (from_account.account_type, to_account.account_type):
            return False

        amount = transfer.amount
        if amount <= 0:
            return False

        if from_account.account_type == AccountType.SAVINGS and amount > self.rules.savings_transfer_out_limit:
            return False

        if to_account.account_type == AccountType.CHECKING and amount > self.rules.checking_transfer_in_limit:
            return False

        if to_account.account_type == AccountType.SAVINGS and amount > self.rules.savings_transfer_in_limit:
            return False

        return True


class PassCommandValidator:

    def __init__(self, rules: BankingRules = DEFAULT_RULES):
        self.rules = rules

    def validate(self, command: str) -> bool:
        parts = parse_command(command)

        if not parts or len(parts) != 2 or parts[0].lower() != CommandType.PASS.value:
            return False

        if not MONTHS_PATTERN.fullmatch(parts[1]):
            return False

        months = int(parts[1])
        return self.rules.min_pass_months <= months <= self.rules.max_pass_months


class CommandValidation:
    """
    Routes each command to the validator for its keyword
    """

    def __init__(self, bank: Bank, rules: Optional[BankingRules] = None):
        self.bank = bank
        self.rules = rules or bank.rules
        self.create_validator = CreateCommandValidator(self.rules)
        self.deposit_validator = DepositCommandValidator(self.rules)
        self.withdraw_validator = WithdrawCommandValidator(self.rules)
        self.transfer_validator = TransferCommandValidator(self.rules)
        self.pass_validator = PassCommandValidator(self.rules)

    def validate_command(self, command: str) -> bool:
        parts = parse_command(command)

        if not parts or len(parts) < 2:
            return False

        command_type = CommandType.from_keyword(parts[0])

        if command_type == CommandType.CREATE:
            return self.create_validator.validate(command, self.bank)
        if command_type == CommandType.DEPOSIT:
            return self.deposit_validator.validate(command, self.bank)
        if command_type == CommandType.WITHDRAW:
            return self.withdraw_validator.validate(command, self.bank)
        if command_type == CommandType.TRANSFER:
            return self._validate_transfer_command(command, parts)
        if command_type == CommandType.PASS:
            return self.pass_validator.validate(command)

        return False

    def _validate_transfer_command(self, command: str, parts: List[str]) -> bool:
        if len(parts) != 4:
            return False

        amount = parse_decimal(parts[3])
        if amount is None:
            return False

        transfer = TransferCommand(
            from_id=parts[1],
            to_id=parts[2],
            amount=amount,
            raw=command
        )
        return self.transfer_validator.validate(transfer, self.bank)

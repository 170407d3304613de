"""
Command Processing Module

Executes validated banking commands against the bank and records the
commands that moved money in the transaction log.
"""

from typing import List, Optional

from .accounts import AccountType, create_account
from .bank import Bank
from .commands import CommandType, parse_command
from .money import Money, parse_decimal
from .rules import BankingRules
from .transaction_log import TransactionLogger


def _amount(text: str) -> Money:
    value = parse_decimal(text)
    if value is None:
        raise ValueError(f"Invalid amount: {text}")
    return Money(value)


class CreateCommandProcessor:

    def __init__(self, bank: Bank, rules: BankingRules):
        self.bank = bank
        self.rules = rules

    def execute(self, parts: List[str]) -> None:
        if len(parts) < 4:
            raise ValueError("Invalid create command format")

        account_type = AccountType.from_keyword(parts[1])
        apr = parse_decimal(parts[3])
        if apr is None:
            raise ValueError(f"Invalid APR: {parts[3]}")

        balance = None
        if account_type == AccountType.CD:
            if len(parts) != 5:
                raise ValueError("CD account requires initial balance")
            balance = _amount(parts[4])

        account = create_account(
            account_type, parts[2], apr, balance,
            compounding_periods=self.rules.cd_compounding_periods
        )
        self.bank.add_account(account)


class DepositCommandProcessor:

    def __init__(self, bank: Bank):
        self.bank = bank

    def execute(self, parts: List[str]) -> None:
        if len(parts) < 3:
            raise ValueError("Invalid deposit command format")

        account_id = parts[1]
        if self.bank.get_account(account_id) is None:
            raise ValueError(f"Account does not exist: {account_id}")

        self.bank.deposit_by_id(account_id, _amount(parts[2]))


class WithdrawCommandProcessor:

    def __init__(self, bank: Bank):
        self.bank = bank

    def execute(self, parts: List[str]) -> None:
        if len(parts) < 3:
            raise ValueError("Invalid withdraw command format")

        account_id = parts[1]
        account = self.bank.get_account(account_id)
        if account is None:
            raise ValueError(f"Account does not exist: {account_id}")

        requested = parse_decimal(parts[2])
        if requested is None:
            raise ValueError(f"Invalid amount: {parts[2]}")
        if requested <= 0:
            raise ValueError("Negative amount not allowed")

        # Requests above the balance drain the account
        available = account.balance.amount
        if requested > available:
            if available <= 0:
                return
            requested = available

        self.bank.withdraw_by_id(account_id, Money(requested))


class TransferCommandProcessor:
    """
    Moves min(amount, source balance) and logs the command on both sides
    """

    def __init__(self, bank: Bank, transaction_logger: TransactionLogger):
        self.bank = bank
        self.transaction_logger = transaction_logger

    def execute(self, command: str, parts: List[str]) -> None:
        if len(parts) != 4:
            raise ValueError("Invalid transfer command format")

        from_id, to_id = parts[1], parts[2]
        from_account = self.bank.get_account(from_id)
        to_account = self.bank.get_account(to_id)

        if from_account is None or to_account is None:
            raise ValueError("One or both accounts do not exist")

        withdrawn = from_account.withdraw(_amount(parts[3]))
        to_account.deposit(withdrawn)

        self.transaction_logger.log_transaction(from_id, command)
        self.transaction_logger.log_transaction(to_id, command)


class PassCommandProcessor:

    def __init__(self, bank: Bank, rules: BankingRules):
        self.bank = bank
        self.rules = rules

    def execute(self, parts: List[str]) -> None:
        if len(parts) != 2:
            raise ValueError("Invalid pass command format")

        try:
            months = int(parts[1])
        except ValueError:
            raise ValueError("Invalid number of months")

        if months < self.rules.min_pass_months or months > self.rules.max_pass_months:
            raise ValueError("Invalid number of months")

        self.bank.pass_time(months)


class CommandProcessor:
    """
    Dispatches a validated command to its processor
    """

    def __init__(self, bank: Bank, transaction_logger: TransactionLogger,
                 rules: Optional[BankingRules] = None):
        self.bank = bank
        self.transaction_logger = transaction_logger
        self.rules = rules or bank.rules
        self.create_processor = CreateCommandProcessor(bank, self.rules)
        self.deposit_processor = DepositCommandProcessor(bank)
        self.withdraw_processor = WithdrawCommandProcessor(bank)
        self.transfer_processor = TransferCommandProcessor(bank, transaction_logger)
        self.pass_processor = PassCommandProcessor(bank, self.rules)

    def process_command(self, command: str) -> None:
        parts = parse_command(command)
        if not parts:
            raise ValueError("Invalid command")

        command_type = CommandType.from_keyword(parts[0])

        if command_type == CommandType.CREATE:
            self.create_processor.execute(parts)
        elif command_type == CommandType.DEPOSIT:
            self.deposit_processor.execute(parts)
            self.transaction_logger.log_transaction(parts[1], command)
        elif command_type == CommandType.WITHDRAW:
            self.withdraw_processor.execute(parts)
            self.transaction_logger.log_transaction(parts[1], command)
        elif command_type == CommandType.TRANSFER:
            self.transfer_processor.execute(command, parts)
        elif command_type == CommandType.PASS:
            self.pass_processor.execute(parts)
        else:
            raise ValueError(f"Unknown command type: {parts[0].lower()}")

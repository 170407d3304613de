"""
Master Control Module

Runs a batch of banking commands through validate → execute → log and
renders the resulting listing: every open account's state line followed
by its transaction history, then the batch's invalid commands verbatim.
"""

from typing import List, Optional

from .bank import Bank
from .processing import CommandProcessor
from .rules import BankingRules
from .transaction_log import TransactionLogger
from .validation import CommandValidation
from .logging_config import get_logger, log_action

logger = get_logger("banking")


class MasterControl:
    """
    Command pipeline bound to a single bank

    Accounts and transaction histories persist across calls to start();
    the invalid-command list only covers the most recent batch.
    """

    def __init__(self, bank: Bank, rules: Optional[BankingRules] = None):
        self.bank = bank
        self.rules = rules or bank.rules
        self.transaction_logger = TransactionLogger()
        self.command_validation = CommandValidation(bank, self.rules)
        self.command_processor = CommandProcessor(bank, self.transaction_logger, self.rules)
        self.invalid_commands: List[str] = []

        bank.add_removal_listener(self.transaction_logger.remove_transactions_for_account)

    def start(self, commands: List[str]) -> List[str]:
        self.invalid_commands = []

        for command in commands:
            if not self.command_validation.validate_command(command):
                self._reject(command, "failed validation")
                continue

            try:
                self.command_processor.process_command(command)
            except ValueError as e:
                self._reject(command, str(e))

        return self.render()

    def render(self) -> List[str]:
        output: List[str] = []
        for account in self.bank.get_all_accounts().values():
            output.append(account.to_line())
            output.extend(self.transaction_logger.get_transactions(account.account_id))

        output.extend(self.invalid_commands)
        return output

    def _reject(self, command: str, reason: str) -> None:
        self.invalid_commands.append(command)
        log_action(
            logger, "info", "Invalid banking command",
            action="invalid_command", resource="banking",
            extra={"command": command, "reason": reason}
        )

    def get_invalid_commands(self) -> List[str]:
        return list(self.invalid_commands)

    def get_bank(self) -> Bank:
        return self.bank

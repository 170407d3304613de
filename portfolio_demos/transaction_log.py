"""
Transaction Log Module

Keeps the raw command strings that touched each account, in the order
they were executed, for rendering beneath the account's state line.
"""

from typing import Dict, List


class TransactionLogger:
    """Per-account history of executed commands"""

    def __init__(self):
        self._transactions: Dict[str, List[str]] = {}

    def log_transaction(self, account_id: str, command: str) -> None:
        self._transactions.setdefault(account_id, []).append(command)

    def get_transactions(self, account_id: str) -> List[str]:
        """Commands logged for an account (empty for unknown IDs)"""
        return list(self._transactions.get(account_id, []))

    def remove_transactions_for_account(self, account_id: str) -> None:
        self._transactions.pop(account_id, None)

    def generate_output(self, account_line: str) -> List[str]:
        """Account state line followed by that account's history"""
        account_id = account_line.split(' ')[1]
        return [account_line, *self.get_transactions(account_id)]

    def clear(self) -> None:
        self._transactions.clear()

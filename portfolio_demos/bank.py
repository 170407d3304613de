"""
Bank Module

In-memory account registry keyed by account ID. Insertion order is
preserved and drives the order accounts are rendered in. Also runs the
month-end cycle: zero-balance closure, minimum-balance fees and APR.
"""

from typing import Callable, Dict, List, Optional

from .accounts import Account, CertificateOfDeposit
from .money import Money
from .rules import BankingRules, DEFAULT_RULES
from .logging_config import get_logger, log_action

logger = get_logger("banking")

RemovalListener = Callable[[str], None]


class Bank:
    """
    Registry of open accounts
    """

    def __init__(self, rules: Optional[BankingRules] = None):
        self.rules = rules or DEFAULT_RULES
        self._accounts: Dict[str, Account] = {}
        self._removal_listeners: List[RemovalListener] = []

    def add_removal_listener(self, listener: RemovalListener) -> None:
        """Register a callback invoked with the ID of every removed account"""
        self._removal_listeners.append(listener)

    def add_account(self, account: Account) -> None:
        if account.account_id in self._accounts:
            raise ValueError(f"Account with ID {account.account_id} already exists")
        self._accounts[account.account_id] = account

    def get_account(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def get_all_accounts(self) -> Dict[str, Account]:
        return self._accounts

    def get_number_of_accounts(self) -> int:
        return len(self._accounts)

    def deposit_by_id(self, account_id: str, amount: Money) -> None:
        account = self.get_account(account_id)
        if account:
            account.deposit(amount)

    def withdraw_by_id(self, account_id: str, amount: Money) -> None:
        account = self.get_account(account_id)
        if account:
            account.withdraw(amount)

    def remove_account(self, account_id: str) -> None:
        if self._accounts.pop(account_id, None) is None:
            return
        for listener in self._removal_listeners:
            listener(account_id)

    def pass_time(self, months: int) -> List[str]:
        """
        Advance the bank by a number of months

        Each month closes zero-balance accounts, then charges minimum-balance
        fees, accrues APR and ages CDs. Accounts left at zero after the final
        month are closed as well.

        Returns:
            IDs of the accounts closed along the way
        """
        removed: List[str] = []

        for _ in range(months):
            removed.extend(self._remove_zero_balance_accounts())

            for account in self._accounts.values():
                account.deduct_minimum_balance_fee(
                    self.rules.minimum_balance_threshold,
                    self.rules.minimum_balance_fee
                )
                account.accrue_monthly_apr()

                if isinstance(account, CertificateOfDeposit):
                    account.increment_months()

        removed.extend(self._remove_zero_balance_accounts())

        if removed:
            log_action(
                logger, "info", f"Closed {len(removed)} zero-balance account(s)",
                action="close_accounts", resource="bank",
                extra={"account_ids": removed, "months": months}
            )

        return removed

    def _remove_zero_balance_accounts(self) -> List[str]:
        to_remove = [
            account_id for account_id, account in self._accounts.items()
            if account.is_zero_balance()
        ]
        for account_id in to_remove:
            self.remove_account(account_id)
        return to_remove

    def clear(self) -> None:
        self._accounts.clear()

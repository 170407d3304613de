"""
Account Module

Checking, savings and certificate-of-deposit accounts for the banking
simulator. Each account owns its balance arithmetic: deposits, capped
withdrawals, minimum-balance fees and monthly APR accrual.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union
from enum import Enum

from .money import Money, format_rate
from .rules import DEFAULT_RULES

MONTHS_PER_YEAR = Decimal('12')
HUNDRED = Decimal('100')


class AccountType(Enum):
    """Account types, valued by their display name"""
    CHECKING = "Checking"
    SAVINGS = "Savings"
    CD = "Cd"

    @property
    def keyword(self) -> str:
        """Keyword used in create commands"""
        return self.value.lower()

    @classmethod
    def from_keyword(cls, keyword: str) -> 'AccountType':
        lowered = keyword.lower()
        for account_type in cls:
            if account_type.keyword == lowered:
                return account_type
        raise ValueError(f"Invalid account type: {keyword}")


@dataclass
class Account:
    """
    Base account: 8-digit ID, APR percentage and a non-negative balance
    """
    account_id: str
    apr: Decimal
    balance: Money = field(default_factory=Money.zero)

    account_type: ClassVar[AccountType] = AccountType.CHECKING

    def __post_init__(self):
        if not isinstance(self.apr, Decimal):
            self.apr = Decimal(str(self.apr))
        if not isinstance(self.balance, Money):
            self.balance = Money.of(self.balance)

    def set_balance(self, new_balance: Money) -> None:
        """Set balance, clamped at zero"""
        self.balance = new_balance if not new_balance.is_negative() else Money.zero()

    def deposit(self, amount: Money) -> bool:
        """Add a positive amount; returns False when nothing was deposited"""
        if amount.is_positive():
            self.balance = self.balance + amount
            return True
        return False

    def withdraw(self, amount: Money) -> Money:
        """
        Withdraw up to the available balance

        Returns:
            The amount actually withdrawn
        """
        if not amount.is_positive():
            raise ValueError("Negative amount not allowed")

        withdrawn = min(amount, self.balance)
        self.set_balance(self.balance - withdrawn)
        return withdrawn

    def is_zero_balance(self) -> bool:
        return self.balance.is_zero()

    def deduct_minimum_balance_fee(
        self,
        threshold: Decimal = DEFAULT_RULES.minimum_balance_threshold,
        fee: Decimal = DEFAULT_RULES.minimum_balance_fee
    ) -> None:
        """Charge the monthly fee when the balance is under the threshold"""
        if self.balance.amount < threshold:
            self.set_balance(self.balance - Money(fee))

    @property
    def monthly_rate(self) -> Decimal:
        return self.apr / HUNDRED / MONTHS_PER_YEAR

    def accrue_monthly_apr(self) -> None:
        """Add one month of interest to a positive balance"""
        if self.balance.is_positive():
            self.set_balance(self.balance + self.balance * self.monthly_rate)

    def to_line(self) -> str:
        """Render as '<Type> <id> <balance> <apr>'"""
        return f"{self.account_type.value} {self.account_id} {self.balance.to_string()} {format_rate(self.apr)}"

    def __str__(self) -> str:
        return self.to_line()


@dataclass
class Checking(Account):
    account_type: ClassVar[AccountType] = AccountType.CHECKING


@dataclass
class Savings(Account):
    account_type: ClassVar[AccountType] = AccountType.SAVINGS


@dataclass
class CertificateOfDeposit(Account):
    """
    Certificate of deposit

    Opened with its full balance, locked for withdrawals until the lock
    period has elapsed, and compounded several times within each month.
    """
    months_since_creation: int = 0
    compounding_periods: int = DEFAULT_RULES.cd_compounding_periods

    account_type: ClassVar[AccountType] = AccountType.CD

    def increment_months(self) -> None:
        self.months_since_creation += 1

    def can_withdraw(self, lock_months: int = DEFAULT_RULES.cd_lock_months) -> bool:
        return self.months_since_creation >= lock_months

    def accrue_monthly_apr(self) -> None:
        if self.balance.is_positive():
            period_rate = self.monthly_rate / Decimal(self.compounding_periods)
            for _ in range(self.compounding_periods):
                self.balance = self.balance + self.balance * period_rate


def create_account(
    account_type: AccountType,
    account_id: str,
    apr: Decimal,
    balance: Optional[Union[Money, Decimal]] = None,
    compounding_periods: int = DEFAULT_RULES.cd_compounding_periods
) -> Account:
    """
    Build an account of the given type

    Args:
        account_type: Type of account to open
        account_id: 8-digit account ID
        apr: APR percentage
        balance: Opening balance, required for CDs
        compounding_periods: CD compounding periods per month

    Returns:
        New Account instance
    """
    if account_type == AccountType.CHECKING:
        return Checking(account_id, apr)
    if account_type == AccountType.SAVINGS:
        return Savings(account_id, apr)
    if balance is None:
        raise ValueError("CD account requires initial balance")
    if not isinstance(balance, Money):
        balance = Money(balance)
    return CertificateOfDeposit(account_id, apr, balance, compounding_periods=compounding_periods)

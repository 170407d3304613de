"""
Business Rules Module

Every limit the banking simulator enforces lives here so validators,
processors and the demo content read the same numbers.
"""

from decimal import Decimal
from dataclasses import dataclass

from .config import PortfolioConfig


@dataclass(frozen=True)
class BankingRules:
    """Limits applied when validating and executing banking commands"""
    account_id_length: int = 8
    min_apr: Decimal = Decimal('0')
    max_apr: Decimal = Decimal('10')
    cd_min_balance: Decimal = Decimal('1000')
    cd_max_balance: Decimal = Decimal('10000')
    checking_deposit_limit: Decimal = Decimal('1000')
    savings_deposit_limit: Decimal = Decimal('2500')
    savings_withdraw_limit: Decimal = Decimal('1000')
    savings_transfer_out_limit: Decimal = Decimal('1000')
    checking_transfer_in_limit: Decimal = Decimal('400')
    savings_transfer_in_limit: Decimal = Decimal('2500')
    minimum_balance_threshold: Decimal = Decimal('100')
    minimum_balance_fee: Decimal = Decimal('25')
    cd_lock_months: int = 12
    cd_compounding_periods: int = 4
    min_pass_months: int = 1
    max_pass_months: int = 60

    @classmethod
    def from_config(cls, config: PortfolioConfig) -> 'BankingRules':
        return cls(
            account_id_length=config.account_id_length,
            max_apr=Decimal(config.max_apr),
            cd_min_balance=Decimal(config.cd_min_balance),
            cd_max_balance=Decimal(config.cd_max_balance),
            checking_deposit_limit=Decimal(config.checking_deposit_limit),
            savings_deposit_limit=Decimal(config.savings_deposit_limit),
            savings_withdraw_limit=Decimal(config.savings_withdraw_limit),
            savings_transfer_out_limit=Decimal(config.savings_transfer_out_limit),
            checking_transfer_in_limit=Decimal(config.checking_transfer_in_limit),
            savings_transfer_in_limit=Decimal(config.savings_transfer_in_limit),
            minimum_balance_threshold=Decimal(config.minimum_balance_threshold),
            minimum_balance_fee=Decimal(config.minimum_balance_fee),
            cd_lock_months=config.cd_lock_months,
            cd_compounding_periods=config.cd_compounding_periods,
            max_pass_months=config.max_pass_months
        )


DEFAULT_RULES = BankingRules()

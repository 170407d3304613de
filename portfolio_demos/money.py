"""
Money Module

Fixed-point amounts for the banking simulator. Balances are held as
Decimal values quantized to cents; NEVER uses float for monetary values.
"""

import re
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from dataclasses import dataclass
from typing import Optional, Union

# Set global decimal context for financial precision
getcontext().prec = 28

CENT = Decimal('0.01')
ZERO = Decimal('0')

NUMBER_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")

Numeric = Union[Decimal, int, str]


@dataclass(frozen=True)
class Money:
    """
    Immutable amount rounded to cents.
    """
    amount: Decimal

    def __post_init__(self):
        try:
            if not isinstance(self.amount, Decimal):
                object.__setattr__(self, 'amount', Decimal(str(self.amount)))
            rounded = self.amount.quantize(CENT, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {self.amount}")

        object.__setattr__(self, 'amount', rounded)

    @classmethod
    def zero(cls) -> 'Money':
        return cls(ZERO)

    @classmethod
    def of(cls, value: Numeric) -> 'Money':
        return cls(value)

    def __add__(self, other: 'Money') -> 'Money':
        return Money(self.amount + other.amount)

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(self.amount - other.amount)

    def __mul__(self, multiplier: Decimal) -> 'Money':
        if not isinstance(multiplier, Decimal):
            multiplier = Decimal(str(multiplier))
        return Money(self.amount * multiplier)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Money):
            return False
        return self.amount == other.amount

    def __hash__(self) -> int:
        return hash(self.amount)

    def __lt__(self, other: 'Money') -> bool:
        return self.amount < other.amount

    def __le__(self, other: 'Money') -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: 'Money') -> bool:
        return self.amount > other.amount

    def __ge__(self, other: 'Money') -> bool:
        return self.amount >= other.amount

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == ZERO

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > ZERO

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < ZERO

    def to_string(self) -> str:
        """Format for display, e.g. 1500.50"""
        return f"{self.amount:.2f}"

    def __str__(self) -> str:
        return self.to_string()


def parse_decimal(text: str) -> Optional[Decimal]:
    """
    Parse a command token as a finite Decimal.

    Only plain ASCII numbers with an optional sign and exponent are
    accepted; returns None for anything else, including NaN, infinities
    and digit-group underscores.
    """
    if not isinstance(text, str):
        return None

    text = text.strip()
    if NUMBER_PATTERN.fullmatch(text) is None:
        return None

    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def has_at_most_two_decimals(value: Decimal) -> bool:
    """True when the value carries no precision beyond cents"""
    try:
        return value == value.quantize(CENT)
    except InvalidOperation:
        return False


def format_rate(rate: Decimal) -> str:
    """Format an APR percentage with two decimals"""
    return f"{rate.quantize(CENT, rounding=ROUND_HALF_UP):.2f}"

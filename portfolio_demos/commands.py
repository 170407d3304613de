"""
Command Parsing Module

Splits raw terminal input into tokens and classifies it by keyword.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum


class CommandType(Enum):
    """Banking command keywords"""
    CREATE = "create"
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TRANSFER = "transfer"
    PASS = "pass"

    @classmethod
    def from_keyword(cls, keyword: str) -> Optional['CommandType']:
        try:
            return cls(keyword.lower())
        except ValueError:
            return None


@dataclass
class Command:
    """A tokenized command together with its original text"""
    raw: str
    type: CommandType
    params: List[str] = field(default_factory=list)


@dataclass
class TransferCommand:
    from_id: str
    to_id: str
    amount: Decimal
    raw: str


def parse_command(command: str) -> Optional[List[str]]:
    """Whitespace-separated tokens, or None for blank input"""
    trimmed = command.strip()
    if not trimmed:
        return None
    return trimmed.split()


def parse(command: str) -> Optional[Command]:
    """Classify a command; None when blank or the keyword is unknown"""
    parts = parse_command(command)
    if not parts:
        return None

    command_type = CommandType.from_keyword(parts[0])
    if command_type is None:
        return None

    return Command(raw=command, type=command_type, params=parts[1:])

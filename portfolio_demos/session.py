"""
Banking Session Module

One simulator per visitor: a bank, its master control, the command
history and the latest rendered output. Sessions live in an in-memory
store that expires idle sessions and caps how many are kept.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
import time
import uuid

from .accounts import Account, CertificateOfDeposit
from .bank import Bank
from .master_control import MasterControl
from .money import format_rate
from .rules import BankingRules, DEFAULT_RULES
from .logging_config import get_logger, log_action

logger = get_logger("banking")


@dataclass
class AccountOutput:
    """State line and transaction history of one account"""
    state: str
    transactions: List[str] = field(default_factory=list)


@dataclass
class ParsedOutput:
    account_outputs: "OrderedDict[str, AccountOutput]"
    invalid_commands: List[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "accounts": [
                {"account_id": account_id, "state": out.state, "transactions": out.transactions}
                for account_id, out in self.account_outputs.items()
            ],
            "invalid_commands": self.invalid_commands
        }


def account_to_dict(account: Account) -> Dict[str, Any]:
    result = {
        "account_id": account.account_id,
        "type": account.account_type.value,
        "balance": account.balance.to_string(),
        "apr": format_rate(account.apr),
    }
    if isinstance(account, CertificateOfDeposit):
        result["months_since_creation"] = account.months_since_creation
    return result


class BankingSession:
    """
    Simulator state for one visitor
    """

    def __init__(self, session_id: Optional[str] = None, rules: BankingRules = DEFAULT_RULES):
        self.session_id = session_id or str(uuid.uuid4())
        self.rules = rules
        self.reset()

    def reset(self) -> None:
        """Start over with an empty bank"""
        self.bank = Bank(self.rules)
        self.master_control = MasterControl(self.bank, self.rules)
        self.command_history: List[str] = []
        self.output: List[str] = []

    def execute_command(self, command: str) -> List[str]:
        if not command.strip():
            return self.output
        return self._run([command])

    def execute_batch(self, commands: List[str]) -> List[str]:
        if not commands:
            return self.output
        return self._run(commands)

    def _run(self, commands: List[str]) -> List[str]:
        self.output = self.master_control.start(commands)
        self.command_history.extend(commands)

        log_action(
            logger, "debug", f"Executed {len(commands)} banking command(s)",
            action="execute", resource="banking_session",
            extra={
                "session_id": self.session_id,
                "invalid": len(self.master_control.invalid_commands)
            }
        )
        return self.output

    @property
    def accounts(self) -> List[Account]:
        return list(self.bank.get_all_accounts().values())

    def get_account(self, account_id: str) -> Optional[Account]:
        return self.bank.get_account(account_id)

    def get_invalid_commands(self) -> List[str]:
        return self.master_control.get_invalid_commands()

    def parsed_output(self) -> ParsedOutput:
        """Group the latest output by account, separating invalid commands"""
        account_outputs: "OrderedDict[str, AccountOutput]" = OrderedDict()
        for account in self.accounts:
            account_outputs[account.account_id] = AccountOutput(
                state=account.to_line(),
                transactions=self.master_control.transaction_logger.get_transactions(account.account_id)
            )
        return ParsedOutput(account_outputs, self.get_invalid_commands())

    def snapshot(self) -> Dict[str, Any]:
        return {
            "session_id": self.session_id,
            "accounts": [account_to_dict(account) for account in self.accounts],
            "output": self.output,
            "parsed_output": self.parsed_output().to_dict(),
            "command_history": self.command_history,
            "invalid_commands": self.get_invalid_commands()
        }


class SessionStore:
    """
    In-memory sessions with idle expiry and a size cap
    """

    def __init__(self, ttl_seconds: int = 3600, max_sessions: int = 1000,
                 rules: BankingRules = DEFAULT_RULES,
                 clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self.max_sessions = max_sessions
        self.rules = rules
        self._clock = clock
        self._sessions: "OrderedDict[str, BankingSession]" = OrderedDict()
        self._last_used: Dict[str, float] = {}

    def create(self) -> BankingSession:
        self.expire()
        while len(self._sessions) >= self.max_sessions:
            oldest_id, _ = self._sessions.popitem(last=False)
            self._last_used.pop(oldest_id, None)

        session = BankingSession(rules=self.rules)
        self._sessions[session.session_id] = session
        self._last_used[session.session_id] = self._clock()
        return session

    def get(self, session_id: str) -> BankingSession:
        """Fetch a live session; raises KeyError when unknown or expired"""
        self.expire()
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found")

        self._sessions.move_to_end(session_id)
        self._last_used[session_id] = self._clock()
        return session

    def delete(self, session_id: str) -> bool:
        self._last_used.pop(session_id, None)
        return self._sessions.pop(session_id, None) is not None

    def expire(self) -> int:
        now = self._clock()
        expired = [
            session_id for session_id, last_used in self._last_used.items()
            if now - last_used > self.ttl_seconds
        ]
        for session_id in expired:
            self.delete(session_id)
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

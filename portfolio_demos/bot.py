"""
Bot Simulator Module

Stateless chat-bot command handler for the demo chat window. A command
string and its parameters come in together with the caller's queues
("pools"); a text response, an optional embed and the updated queues go
back out. Nothing is stored server-side; the client owns the queues.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .config import PortfolioConfig, get_config
from .logging_config import get_logger, log_action
from .rate_limit import validate_operation_limit

logger = get_logger("bot")

Pools = Dict[str, List[str]]

GREEN = "#00ff00"
RED = "#ff0000"
ORANGE = "#ffa500"
BLUE = "#4169E1"

CONTROL_CHARACTERS = re.compile(r"[\x00-\x1f\x7f]")

BULK_ADD = "/bulk_add"
BULK_REMOVE = "/bulk_remove"
BULK_COMMANDS = frozenset({BULK_ADD, BULK_REMOVE})

CLEAR_CONFIRM = "clear_confirm"
CLEAR_CANCEL = "clear_cancel"

COMMAND_LIST = [
    "/help", "/status", "/next", "/add_item", "/bulk_add",
    "/bulk_remove", "/clear", "/open", "/close", "/break",
]


@dataclass
class BotResult:
    response: str
    embed: Optional[Dict[str, Any]] = None
    updated_pools: Optional[Pools] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "response": self.response,
            "embed": self.embed,
            "updatedPools": self.updated_pools
        }


def normalize_pools(pools: Any, queue_names: List[str]) -> Pools:
    """
    Return a copy of the caller's queues with every configured queue present

    Accepts None, a bare list (taken as the first queue) or a partial
    mapping. Non-string entries are dropped.
    """
    if isinstance(pools, list):
        pools = {queue_names[0]: pools}
    elif not isinstance(pools, dict):
        pools = {}

    normalized: Pools = {}
    for name, entries in pools.items():
        if isinstance(entries, list):
            normalized[str(name)] = [entry for entry in entries if isinstance(entry, str)]

    for name in queue_names:
        normalized.setdefault(name, [])

    return normalized


def validate_entry(entry: Any, max_length: int) -> Optional[str]:
    """Error message for an unusable queue entry, or None when it is fine"""
    if not isinstance(entry, str) or not entry.strip():
        return "Item is required"
    if len(entry.strip()) > max_length:
        return f"Item longer than {max_length} characters"
    if CONTROL_CHARACTERS.search(entry):
        return "Item contains control characters"
    return None


def split_bulk_data(params: Dict[str, Any]) -> Optional[List[str]]:
    """
    Lines of a bulk upload, from either a `file` ({name, content}) or `data`

    A CSV file whose first line is a header mentioning "item" has that
    line skipped. Returns None when neither source carries text.
    """
    upload = params.get("file")
    if isinstance(upload, dict):
        content = upload.get("content")
        if not isinstance(content, str):
            return None
        is_csv = str(upload.get("name") or "").lower().endswith(".csv")
    elif isinstance(params.get("data"), str):
        content = params["data"]
        is_csv = False
    else:
        return None

    lines = [line.strip() for line in content.splitlines() if line.strip()]
    if is_csv and len(lines) > 1 and "item" in lines[0].lower():
        lines = lines[1:]
    return lines


def is_truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


class BotSimulator:
    """
    Dispatches bot commands to their handlers
    """

    def __init__(self, config: Optional[PortfolioConfig] = None):
        self.config = config or get_config()
        self.queue_names = list(self.config.bot_queue_names)
        self.operation_limits = {
            BULK_ADD: self.config.bulk_add_max,
            BULK_REMOVE: self.config.bulk_remove_max,
        }
        self._handlers: Dict[str, Callable[..., BotResult]] = {
            "/help": self._handle_help,
            "/status": self._handle_status,
            "/next": self._handle_next,
            "/add_item": self._handle_add_item,
            BULK_ADD: self._handle_bulk_add,
            BULK_REMOVE: self._handle_bulk_remove,
            "/clear": self._handle_clear,
            "/open": self._handle_channel_status,
            "/close": self._handle_channel_status,
            "/break": self._handle_channel_status,
            CLEAR_CONFIRM: self._handle_clear_button,
            CLEAR_CANCEL: self._handle_clear_button,
        }

    @staticmethod
    def command_name(command: str) -> str:
        return command.strip().split(" ")[0].lower()

    @staticmethod
    def is_bulk_operation(command_name: str) -> bool:
        return command_name in BULK_COMMANDS

    def is_authorized(self, user_id: Optional[str]) -> bool:
        """Anonymous demo visitors and the configured admin are authorized"""
        return not user_id or user_id == self.config.bot_admin_user_id

    def handle(self, command: str, params: Optional[Dict[str, Any]] = None,
               pools: Any = None, user_id: Optional[str] = None) -> BotResult:
        """
        Run one bot command

        Args:
            command: Raw command text, e.g. "/next"
            params: Named command options
            pools: The caller's queues
            user_id: Caller identity used for authorization

        Returns:
            BotResult with response text, embed and updated queues
        """
        name = self.command_name(command)
        params = params or {}

        handler = self._handlers.get(name)
        if handler is None:
            return self._unknown_command(name)

        result = handler(name=name, params=params, pools=pools, user_id=user_id)
        log_action(
            logger, "debug", f"Handled bot command {name}",
            user_id=user_id, action=name, resource="bot"
        )
        return result

    # Helpers

    def _resolve_queue(self, params: Dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
        queue = str(params.get("pool") or self.queue_names[0])
        if queue not in self.queue_names:
            return None, f"❌ Invalid pool type. Valid pools: {', '.join(self.queue_names)}"
        return queue, None

    def _pool_warnings(self, pools: Pools) -> Optional[str]:
        warnings = [
            f"⚠️ {name} queue empty!" for name in self.queue_names if not pools.get(name)
        ]
        if warnings and len(warnings) == len(self.queue_names):
            return "⚠️ All queues empty!"
        return " | ".join(warnings) if warnings else None

    def _unauthorized(self, pools: Any = None) -> BotResult:
        return BotResult(
            response="❌ You are not authorized.",
            updated_pools=normalize_pools(pools, self.queue_names) if pools is not None else None
        )

    def _unknown_command(self, name: str) -> BotResult:
        listing = "\n".join(f"• `{command}`" for command in COMMAND_LIST)
        return BotResult(response=f"❌ Unknown command: {name}\n\nAvailable commands:\n{listing}")

    # Informational commands

    def _handle_help(self, **_: Any) -> BotResult:
        brand = self.config.bot_brand_name
        embed = {
            "title": f"{brand} Bot Commands",
            "description": "Here are all the available commands you can use:",
            "color": BLUE,
            "fields": [
                {
                    "name": "📋 Queue Commands",
                    "value": "```\n/status\n/next pool:main\n```\nInspect queues and take the next item"
                },
                {
                    "name": "⚙️ Admin Commands",
                    "value": (
                        "```\n/add_item item:\"text\" pool:main top:true\n"
                        "/bulk_add data:\"one item per line\"\n"
                        "/bulk_remove data:\"one item per line\"\n"
                        "/clear pool:backlog\n/open\n/close\n/break\n```\n"
                        "Manage queues and channel status"
                    )
                },
                {
                    "name": "📝 Examples",
                    "value": (
                        "Try these commands:\n• `/status` - See queue sizes\n"
                        "• `/next` - Take the next item\n• `/help` - Show this help message"
                    )
                }
            ],
            "footer": "Commands are case-insensitive. Options are passed as params."
        }
        return BotResult(response="📋 Command help displayed!", embed=embed)

    def _handle_channel_status(self, name: str, **_: Any) -> BotResult:
        brand = self.config.bot_brand_name
        if name == "/open":
            embed = {
                "title": f"{brand} is now OPEN!",
                "description": "We are now taking requests! Use /next to pick up work.",
                "color": GREEN
            }
            return BotResult(response="✅ Channel opened 🟢🟢", embed=embed)

        if name == "/close":
            embed = {
                "title": f"{brand} is now CLOSED!",
                "description": "We are currently closed. Please come back later!",
                "color": RED
            }
            return BotResult(response="✅ Channel closed 🔴🔴", embed=embed)

        embed = {
            "title": f"{brand} is on BREAK!",
            "description": "We are temporarily on hold. Please wait for us to reopen.",
            "color": ORANGE
        }
        return BotResult(response="✅ Channel put on hold 🟡🟡", embed=embed)

    def _handle_status(self, pools: Any, **_: Any) -> BotResult:
        pools = normalize_pools(pools, self.queue_names)
        embed = {
            "title": "Queue Status",
            "color": BLUE,
            "fields": [
                {"name": name, "value": str(len(pools[name])), "inline": True}
                for name in self.queue_names
            ],
            "footer": self._pool_warnings(pools)
        }
        return BotResult(response="📊 Queue status displayed!", embed=embed, updated_pools=pools)

    # Queue commands

    def _handle_next(self, params: Dict[str, Any], pools: Any, **_: Any) -> BotResult:
        pools = normalize_pools(pools, self.queue_names)
        queue, error = self._resolve_queue(params)
        if error:
            return BotResult(response=error, updated_pools=pools)

        if not pools[queue]:
            return BotResult(response=f"❌ The {queue} queue is empty.", updated_pools=pools)

        item = pools[queue][0]
        pools[queue] = pools[queue][1:]

        embed = {
            "title": "Next Item",
            "color": GREEN,
            "fields": [
                {"name": "Item", "value": f"```{item}```"},
                {"name": "Queue", "value": queue, "inline": True},
                {"name": "Remaining", "value": str(len(pools[queue])), "inline": True}
            ],
            "footer": self._pool_warnings(pools)
        }
        return BotResult(response="✅ Next item pulled from the queue!", embed=embed, updated_pools=pools)

    def _handle_add_item(self, params: Dict[str, Any], pools: Any,
                         user_id: Optional[str], **_: Any) -> BotResult:
        if not self.is_authorized(user_id):
            return self._unauthorized(pools)

        pools = normalize_pools(pools, self.queue_names)

        if not params.get("item"):
            return BotResult(response="❌ Please provide an item.", updated_pools=pools)

        queue, error = self._resolve_queue(params)
        if error:
            return BotResult(response=error, updated_pools=pools)

        item = params["item"]
        invalid = validate_entry(item, self.config.max_entry_length)
        if invalid:
            return BotResult(response=f"❌ {invalid}.", updated_pools=pools)

        item = item.strip()
        if is_truthy(params.get("top")):
            pools[queue] = [item] + pools[queue]
        else:
            pools[queue] = pools[queue] + [item]

        return BotResult(response=f"✅ Item `{item}` added to {queue} queue.", updated_pools=pools)

    def _handle_bulk_add(self, name: str, params: Dict[str, Any], pools: Any,
                         user_id: Optional[str], **_: Any) -> BotResult:
        if not self.is_authorized(user_id):
            return self._unauthorized(pools)

        pools = normalize_pools(pools, self.queue_names)
        queue, error = self._resolve_queue(params)
        if error:
            return BotResult(response=error, updated_pools=pools)

        lines = split_bulk_data(params)
        if lines is None:
            return BotResult(
                response="❌ No data provided. Send items one per line in `data` or upload a file.",
                updated_pools=pools
            )

        limit_error = self._check_operation_limit(name, len(lines))
        if limit_error:
            limit_error.updated_pools = pools
            return limit_error

        existing = set(pools[queue])
        added: List[str] = []
        duplicates: List[str] = []
        invalid: List[str] = []

        for line in lines:
            if validate_entry(line, self.config.max_entry_length):
                invalid.append(line)
            elif line in existing:
                duplicates.append(line)
            else:
                existing.add(line)
                added.append(line)

        pools[queue] = pools[queue] + added

        embed = {
            "title": "Bulk Add Results",
            "color": GREEN if added else ORANGE,
            "fields": [
                {"name": "✅ Added", "value": str(len(added)), "inline": True},
                {"name": "♻️ Duplicates", "value": str(len(duplicates)), "inline": True},
                {"name": "⚠️ Invalid", "value": str(len(invalid)), "inline": True}
            ],
            "footer": f"{queue} queue: {len(pools[queue])} item(s)"
        }
        if invalid:
            embed["fields"].append({"name": "Invalid lines", "value": "\n".join(invalid[:5])})

        if added:
            response = f"✅ Added {len(added)} item(s) to {queue} queue."
        else:
            response = f"⚠️ No new items added to {queue} queue."
        return BotResult(response=response, embed=embed, updated_pools=pools)

    def _handle_bulk_remove(self, name: str, params: Dict[str, Any], pools: Any,
                            user_id: Optional[str], **_: Any) -> BotResult:
        if not self.is_authorized(user_id):
            return self._unauthorized(pools)

        pools = normalize_pools(pools, self.queue_names)
        queue, error = self._resolve_queue(params)
        if error:
            return BotResult(response=error, updated_pools=pools)

        lines = split_bulk_data(params)
        if lines is None:
            return BotResult(
                response="❌ No data provided. Send items one per line in `data` or upload a file.",
                updated_pools=pools
            )

        limit_error = self._check_operation_limit(name, len(lines))
        if limit_error:
            limit_error.updated_pools = pools
            return limit_error

        remaining = list(pools[queue])
        removed: List[str] = []
        not_found: List[str] = []

        for line in lines:
            if line in remaining:
                remaining.remove(line)
                removed.append(line)
            else:
                not_found.append(line)

        pools[queue] = remaining

        embed = {
            "title": "Bulk Remove Results",
            "color": GREEN if removed else ORANGE,
            "fields": [
                {"name": "🗑️ Removed", "value": str(len(removed)), "inline": True},
                {"name": "❓ Not found", "value": str(len(not_found)), "inline": True}
            ],
            "footer": f"{queue} queue: {len(remaining)} item(s)"
        }
        return BotResult(
            response=f"✅ Removed {len(removed)} item(s) from {queue} queue.",
            embed=embed,
            updated_pools=pools
        )

    def _check_operation_limit(self, name: str, count: int) -> Optional[BotResult]:
        message = validate_operation_limit(name, count, self.operation_limits)
        if message is None:
            return None
        embed = {
            "title": "Bulk Operation Limit Exceeded",
            "color": RED,
            "description": message
        }
        return BotResult(response=f"❌ {message}", embed=embed)

    def _handle_clear(self, params: Dict[str, Any], pools: Any,
                      user_id: Optional[str], **_: Any) -> BotResult:
        if not self.is_authorized(user_id):
            return self._unauthorized(pools)

        pools = normalize_pools(pools, self.queue_names)
        queue, error = self._resolve_queue(params)
        if error:
            return BotResult(response=error, updated_pools=pools)

        embed = {
            "title": f"Clear the {queue} queue?",
            "description": f"This removes all {len(pools[queue])} item(s) from the {queue} queue.",
            "color": ORANGE,
            "buttons": [
                {"id": CLEAR_CONFIRM, "label": "Confirm", "params": {"pool": queue}},
                {"id": CLEAR_CANCEL, "label": "Cancel", "params": {"pool": queue}}
            ]
        }
        return BotResult(response="⚠️ Please confirm.", embed=embed, updated_pools=pools)

    def _handle_clear_button(self, name: str, params: Dict[str, Any], pools: Any,
                             user_id: Optional[str], **_: Any) -> BotResult:
        if not self.is_authorized(user_id):
            return self._unauthorized(pools)

        pools = normalize_pools(pools, self.queue_names)
        if name == CLEAR_CANCEL:
            return BotResult(response="❌ Clear cancelled.", updated_pools=pools)

        queue, error = self._resolve_queue(params)
        if error:
            return BotResult(response=error, updated_pools=pools)

        cleared = len(pools[queue])
        pools[queue] = []
        return BotResult(
            response=f"✅ Cleared {cleared} item(s) from {queue} queue.",
            embed={"title": "Queue Cleared", "color": GREEN, "footer": self._pool_warnings(pools)},
            updated_pools=pools
        )

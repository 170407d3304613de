"""
Test suite for the bot simulator

Tests command dispatch, queue handling, authorization and bulk uploads.
"""

import pytest

from portfolio_demos.bot import (
    BotSimulator, BotResult, normalize_pools, validate_entry, split_bulk_data
)
from portfolio_demos.config import PortfolioConfig

ADMIN = "745694160002089130"
QUEUES = ["main", "priority", "backlog"]


class TestHelpers:
    """Test pool normalization and entry validation"""

    def test_normalize_none(self):
        """Test missing pools become empty queues"""
        assert normalize_pools(None, QUEUES) == {"main": [], "priority": [], "backlog": []}

    def test_normalize_list(self):
        """Test a bare list is taken as the first queue"""
        pools = normalize_pools(["a", "b", 3], QUEUES)
        assert pools["main"] == ["a", "b"]
        assert pools["backlog"] == []

    def test_normalize_does_not_mutate(self):
        """Test the caller's pools are copied"""
        original = {"main": ["a"]}
        pools = normalize_pools(original, QUEUES)
        pools["main"].append("b")
        assert original == {"main": ["a"]}

    def test_validate_entry(self):
        """Test entry rules"""
        assert validate_entry("ticket-1", 200) is None
        assert validate_entry("", 200) == "Item is required"
        assert validate_entry("   ", 200) == "Item is required"
        assert validate_entry(None, 200) == "Item is required"
        assert validate_entry("x" * 201, 200) == "Item longer than 200 characters"
        assert validate_entry("bad\x07", 200) == "Item contains control characters"

    def test_split_bulk_data(self):
        """Test bulk data from text or file upload"""
        assert split_bulk_data({"data": "a\n\n b \nc"}) == ["a", "b", "c"]
        assert split_bulk_data({"file": {"name": "items.csv", "content": "Item\nx\ny"}}) == ["x", "y"]
        assert split_bulk_data({"file": {"name": "items.txt", "content": "Item\nx"}}) == ["Item", "x"]
        assert split_bulk_data({}) is None
        assert split_bulk_data({"file": {"name": "items.txt", "content": 5}}) is None
        assert split_bulk_data({"file": {"name": "items.txt"}}) is None


class TestBotSimulator:
    """Test command handling"""

    def setup_method(self):
        self.bot = BotSimulator(PortfolioConfig())

    def test_result_to_dict(self):
        """Test wire keys"""
        result = BotResult(response="ok", updated_pools={"main": []})
        assert result.to_dict() == {"response": "ok", "embed": None, "updatedPools": {"main": []}}

    def test_unknown_command(self):
        """Test unknown commands list the available ones"""
        result = self.bot.handle("/dance")
        assert result.response.startswith("❌ Unknown command: /dance")
        assert "/help" in result.response

    def test_commands_are_case_insensitive(self):
        """Test the command name is lower-cased"""
        result = self.bot.handle("/HELP extra words")
        assert result.response == "📋 Command help displayed!"
        assert result.embed["fields"]

    @pytest.mark.parametrize("command,response", [
        ("/open", "✅ Channel opened 🟢🟢"),
        ("/close", "✅ Channel closed 🔴🔴"),
        ("/break", "✅ Channel put on hold 🟡🟡"),
    ])
    def test_channel_status(self, command, response):
        """Test channel status embeds carry the brand name"""
        result = self.bot.handle(command)
        assert result.response == response
        assert "Demo Desk" in result.embed["title"]

    def test_status(self):
        """Test queue counts and warnings"""
        result = self.bot.handle("/status", pools={"main": ["a", "b"]})

        counts = {field["name"]: field["value"] for field in result.embed["fields"]}
        assert counts == {"main": "2", "priority": "0", "backlog": "0"}
        assert "priority queue empty" in result.embed["footer"]

    def test_status_all_empty(self):
        """Test a single warning when every queue is empty"""
        result = self.bot.handle("/status")
        assert result.embed["footer"] == "⚠️ All queues empty!"

    def test_next_pops_first_item(self):
        """Test /next returns and removes the head of the queue"""
        pools = {"main": ["a", "b"], "priority": [], "backlog": []}
        result = self.bot.handle("/next", pools=pools)

        assert result.updated_pools["main"] == ["b"]
        assert result.embed["fields"][0]["value"] == "```a```"
        assert pools["main"] == ["a", "b"]

    def test_next_empty_queue(self):
        """Test /next on an empty queue"""
        result = self.bot.handle("/next", {"pool": "priority"})
        assert result.response == "❌ The priority queue is empty."

    def test_invalid_pool(self):
        """Test unknown queue names are rejected"""
        result = self.bot.handle("/next", {"pool": "vip"})
        assert result.response == "❌ Invalid pool type. Valid pools: main, priority, backlog"

    def test_add_item(self):
        """Test items append or go to the top"""
        result = self.bot.handle("/add_item", {"item": "b"}, {"main": ["a"]})
        assert result.updated_pools["main"] == ["a", "b"]

        result = self.bot.handle("/add_item", {"item": "z", "top": "true"}, result.updated_pools)
        assert result.updated_pools["main"] == ["z", "a", "b"]

    def test_add_item_requires_item(self):
        """Test missing and invalid items"""
        assert self.bot.handle("/add_item", {}).response == "❌ Please provide an item."
        assert self.bot.handle("/add_item", {"item": "x" * 300}).response == \
            "❌ Item longer than 200 characters."

    def test_admin_commands_require_authorization(self):
        """Test unknown users cannot change queues"""
        for command in ["/add_item", "/bulk_add", "/bulk_remove", "/clear", "clear_confirm"]:
            result = self.bot.handle(command, {"item": "x", "data": "x"}, user_id="123")
            assert result.response == "❌ You are not authorized."

        result = self.bot.handle("/add_item", {"item": "x"}, user_id=ADMIN)
        assert result.updated_pools["main"] == ["x"]

    def test_bulk_add(self):
        """Test bulk add reports added, duplicate and invalid lines"""
        result = self.bot.handle(
            "/bulk_add",
            {"data": "a\nb\na\n" + "x" * 201, "pool": "backlog"},
            {"backlog": ["b"]}
        )

        assert result.updated_pools["backlog"] == ["b", "a"]
        fields = {field["name"]: field["value"] for field in result.embed["fields"]}
        assert fields["✅ Added"] == "1"
        assert fields["♻️ Duplicates"] == "2"
        assert fields["⚠️ Invalid"] == "1"

    def test_bulk_add_requires_data(self):
        """Test bulk add without data"""
        result = self.bot.handle("/bulk_add", {})
        assert result.response.startswith("❌ No data provided.")

    def test_bulk_add_item_limit(self):
        """Test per-request item caps"""
        data = "\n".join(f"item-{i}" for i in range(101))
        result = self.bot.handle("/bulk_add", {"data": data})

        assert result.response == "❌ Operation exceeds limit: 101 items (max 100 per request)"
        assert result.updated_pools["main"] == []

    def test_bulk_remove(self):
        """Test bulk remove reports missing entries"""
        result = self.bot.handle("/bulk_remove", {"data": "a\nzzz"}, {"main": ["a", "b"]})

        assert result.updated_pools["main"] == ["b"]
        assert result.response == "✅ Removed 1 item(s) from main queue."

    def test_bulk_remove_item_limit(self):
        """Test bulk remove has its own cap"""
        data = "\n".join(f"item-{i}" for i in range(51))
        result = self.bot.handle("/bulk_remove", {"data": data})
        assert "max 50 per request" in result.response

    def test_clear_flow(self):
        """Test clear asks for confirmation and the buttons act on it"""
        pools = {"main": ["a", "b"]}
        prompt = self.bot.handle("/clear", {"pool": "main"}, pools)

        assert prompt.updated_pools["main"] == ["a", "b"]
        button_ids = [button["id"] for button in prompt.embed["buttons"]]
        assert button_ids == ["clear_confirm", "clear_cancel"]

        cancelled = self.bot.handle("clear_cancel", {"pool": "main"}, pools)
        assert cancelled.updated_pools["main"] == ["a", "b"]

        confirmed = self.bot.handle("clear_confirm", {"pool": "main"}, pools)
        assert confirmed.updated_pools["main"] == []
        assert confirmed.response == "✅ Cleared 2 item(s) from main queue."

    def test_is_bulk_operation(self):
        """Test bulk command detection"""
        assert self.bot.is_bulk_operation("/bulk_add")
        assert self.bot.is_bulk_operation("/bulk_remove")
        assert not self.bot.is_bulk_operation("/add_item")

    def test_bulk_add_non_text_file_content(self):
        """Test uploads without text content are treated as missing data"""
        result = self.bot.handle("/bulk_add", {"file": {"name": "items.csv", "content": 5}})

        assert result.response.startswith("❌ No data provided.")
        assert result.updated_pools["main"] == []

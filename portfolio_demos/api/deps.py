"""
Shared dependencies for the API routers
"""

from typing import Optional

from ..bot import BotSimulator
from ..config import PortfolioConfig, get_config
from ..rate_limit import BulkOperationLimiter, RateLimiter
from ..rules import BankingRules
from ..session import SessionStore


class DemoSystem:
    """Every demo component, wired from one configuration"""

    def __init__(self, config: Optional[PortfolioConfig] = None):
        self.config = config or get_config()
        self.rules = BankingRules.from_config(self.config)
        self.sessions = SessionStore(
            ttl_seconds=self.config.session_ttl_seconds,
            max_sessions=self.config.max_sessions,
            rules=self.rules
        )
        self.bot = BotSimulator(self.config)
        self.rate_limiter = RateLimiter.from_config(self.config)
        self.bulk_limiter = BulkOperationLimiter.from_config(self.config)


# Global demo system instance
demo_system = DemoSystem()


# Dependency to get demo system
def get_demo_system() -> DemoSystem:
    return demo_system

"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class PortfolioConfig(BaseSettings):
    """Portfolio demos configuration"""

    model_config = SettingsConfigDict(
        env_prefix="PORTFOLIO_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8090

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Banking rules (Decimal values kept as strings)
    account_id_length: int = 8
    max_apr: str = "10"
    cd_min_balance: str = "1000"
    cd_max_balance: str = "10000"
    checking_deposit_limit: str = "1000"
    savings_deposit_limit: str = "2500"
    savings_withdraw_limit: str = "1000"
    savings_transfer_out_limit: str = "1000"
    checking_transfer_in_limit: str = "400"
    savings_transfer_in_limit: str = "2500"
    minimum_balance_threshold: str = "100"
    minimum_balance_fee: str = "25"
    cd_lock_months: int = 12
    cd_compounding_periods: int = 4
    max_pass_months: int = 60

    # Banking sessions
    session_ttl_seconds: int = 3600
    max_sessions: int = 1000

    # Bot simulator rate limiting
    rate_limit_window_seconds: int = 60
    rate_limit_max_requests: int = 5
    bulk_window_seconds: int = 300
    bulk_max_operations: int = 3
    violation_reset_seconds: int = 3600
    max_penalty_minutes: int = 60

    # Bot simulator behaviour
    bot_admin_user_id: str = "745694160002089130"
    bot_queue_names: List[str] = ["main", "priority", "backlog"]
    bulk_add_max: int = 100
    bulk_remove_max: int = 50
    max_entry_length: int = 200
    bot_brand_name: str = "Demo Desk"


# Global configuration instance
config = PortfolioConfig()


def get_config() -> PortfolioConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> PortfolioConfig:
    """Reload configuration from environment"""
    global config
    config = PortfolioConfig()
    return config

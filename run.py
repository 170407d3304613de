#!/usr/bin/env python3
"""
Portfolio Demos Entry Point

Starts the FastAPI server with the banking simulator and bot simulator.
"""

import sys

from portfolio_demos.api import run_server
from portfolio_demos.config import get_config


if __name__ == "__main__":
    config = get_config()

    print("🏦 Starting Portfolio Demos...")
    print("💰 Banking simulator amounts use Decimal precision")
    print(f"🌐 API available at: http://localhost:{config.api_port}")
    print(f"📚 Documentation at: http://localhost:{config.api_port}/docs")
    print()

    try:
        run_server(host=config.api_host, port=config.api_port, debug=False)
    except KeyboardInterrupt:
        print("\n👋 Shutting down Portfolio Demos...")
    except Exception as e:
        print(f"❌ Error starting server: {e}")
        sys.exit(1)

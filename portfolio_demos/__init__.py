"""
Portfolio Demos

Interactive demos served behind a small JSON API: a banking-rules
simulator built on Decimal arithmetic and a rate-limited bot command
simulator.
"""

__version__ = "1.0.0"

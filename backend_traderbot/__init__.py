"""
Backend TraderBot: transaction log and analytics backend for the DeFi chat assistant.

Stores swap and stake records produced by the chat agent, and serves the
chart-ready analytics bundle rendered by the dashboard. Modular layout:
transactions (models + store), analytics (pure derivations), API server.
"""

__version__ = "0.1.0"

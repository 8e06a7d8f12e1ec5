"""
Test that traderbot_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from traderbot_logging and use the logger."""
    from backend_traderbot.traderbot_logging import bind_wallet, get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    # Smoke test: call info (should not raise)
    logger.info("test_message", key="value")
    bind_wallet("0x1111").info("test_wallet_message", tx_id="swap-1")


def test_bind_wallet_shortens_long_addresses():
    """Long wallet addresses are logged as their 16-character prefix."""
    from structlog.testing import capture_logs

    from backend_traderbot.traderbot_logging import bind_wallet

    with capture_logs() as logs:
        bind_wallet("0x1111111111111111111111111111111111111111", "test").info("wallet_event")
        bind_wallet(" 0xabc ", "test").info("short_wallet_event")
    assert logs[0]["wallet"] == "0x11111111111111..."
    assert logs[1]["wallet"] == "0xabc"


def test_configure_structlog_level_filter():
    from structlog.testing import capture_logs

    from backend_traderbot.traderbot_logging import configure_structlog, get_logger

    configure_structlog("warning", "json")
    try:
        with capture_logs() as logs:
            get_logger("test").info("dropped_event")
            get_logger("test").warning("kept_event", wallet="0x2222222222222222222222")
        assert [entry["event"] for entry in logs] == ["kept_event"]
    finally:
        configure_structlog()

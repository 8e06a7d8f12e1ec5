"""
Main entrypoint: FastAPI server for the TraderBot transaction log and analytics.

Env: DATABASE_URL or TRADERBOT_DB_PATH, ANALYTICS_TIMEZONE, API_HOST, API_PORT, LOG_LEVEL.

Equivalent: uvicorn backend_traderbot.api_server.app:app --host 0.0.0.0 --port 8000
"""

# Configure structured JSON logging before other imports that may log
from backend_traderbot.traderbot_logging import configure_structlog, get_logger

logger = get_logger("main")


def main() -> None:
    """Initialise the store and run the FastAPI server in the main thread."""
    from backend_traderbot.config import get_settings
    from backend_traderbot.transactions import store

    settings = get_settings()
    configure_structlog(settings.log_level, settings.log_format)
    store.init_db()

    from backend_traderbot.api_server.app import app
    import uvicorn

    logger.info(
        "main_server_starting",
        host=settings.api_host,
        port=settings.api_port,
        analytics_timezone=settings.analytics_timezone,
    )
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level)


if __name__ == "__main__":
    main()

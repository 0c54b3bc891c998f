import logging


def configure_logging(level: str = "INFO") -> None:
    """Root logging setup. Called once when the app starts."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # asyncpg logs every listener reconnect at INFO.
    logging.getLogger("asyncpg").setLevel(logging.WARNING)

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str) -> None:
    """Configure process logging with a consistent format and runtime level."""
    normalized = level.strip().upper() if level and level.strip() else "INFO"
    logging.basicConfig(
        level=getattr(logging, normalized, logging.INFO),
        format=_LOG_FORMAT,
    )

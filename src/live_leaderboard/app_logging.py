"""Logging configuration helpers."""

import logging

# Supabase talks to PostgREST through httpx, which logs every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the package logger.

    Safe to call repeatedly; later calls only adjust the level.
    """
    logger = logging.getLogger("live_leaderboard")
    logger.setLevel(level.upper())
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s: %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.propagate = False

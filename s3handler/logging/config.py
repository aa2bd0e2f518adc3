"""
loguru sink setup for the object handler.

Inside the Lambda runtime records are serialised as JSON lines on stdout;
anywhere else a coloured single-line format is used.
"""

import os
import sys

from loguru import logger

from s3handler.settings import LOG_LEVEL

__all__ = ["logger", "setup_logging", "resolve_log_level"]

_SILENT_LEVELS = {"0", "OFF", "NONE", "SILENT"}


def resolve_log_level(raw: str) -> str:
    """
    Normalise LOG_LEVEL. Returns "" when logging should be silenced.
    """
    level = (raw or "INFO").strip().upper()
    if level in _SILENT_LEVELS:
        return ""
    if level == "1":
        return "INFO"
    if level == "2":
        return "DEBUG"
    return level


# -----------------------------------------------------------------------------
# Logging Setup
# -----------------------------------------------------------------------------
def setup_logging() -> None:
    """
    Replace the default loguru sink with one at the LOG_LEVEL threshold.

    A silent level leaves no sink installed.
    """
    logger.remove()

    log_level = resolve_log_level(LOG_LEVEL)
    if not log_level:
        return

    is_lambda = bool(os.getenv("AWS_LAMBDA_FUNCTION_NAME"))

    if is_lambda:
        # CloudWatch adds the ingestion time, the record keeps its own
        logger.add(
            sys.stdout,
            level=log_level,
            format="{level} | {name}:{function}:{line} | {message}",
            serialize=True,
            enqueue=False,
            backtrace=True,
            diagnose=False,  # never dump local variables (object payloads) into logs
        )
    else:
        logger.add(
            sys.stdout,
            level=log_level,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "<level>{message}</level>"
            ),
            colorize=True,
            enqueue=False,
            backtrace=True,
            diagnose=True,
        )

    logger.debug(f"Logging initialized with level: {log_level}")

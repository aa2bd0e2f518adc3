"""
Operation timing and progress tracking.

`log_operation` times the single storage call of an invocation and
`ProgressLogger` reports progress while a log object is being scanned.
"""

import time
from contextlib import contextmanager
from typing import Any, Iterator

from s3handler.errors import HandlerError
from s3handler.logging.context import clogger

__all__ = ["log_operation", "ProgressLogger"]


# -----------------------------------------------------------------------------
# Operation Timing Context Manager
# -----------------------------------------------------------------------------
@contextmanager
def log_operation(
    operation_name: str, log_level: str = "debug", **metadata: Any
) -> Iterator[None]:
    """
    Context manager for timing and logging operations.

    Usage:
        with log_operation("s3.get_object", bucket=bucket, key=key):
            response = s3.get_object(Bucket=bucket, Key=key)

    Classified failures (HandlerError) are logged at WARNING without a
    traceback; anything else is logged with one.
    """
    start = time.time()
    clogger.debug(f"Starting operation: {operation_name}", extra=metadata)

    try:
        yield
    except HandlerError as e:
        duration_ms = int((time.time() - start) * 1000)
        clogger.warning(
            f"Operation failed: {operation_name} ({duration_ms}ms): {e}",
            extra={
                **metadata,
                "duration_ms": duration_ms,
                "status": "failure",
                "error_type": type(e).__name__,
            },
        )
        raise
    except Exception as e:
        duration_ms = int((time.time() - start) * 1000)
        clogger.exception(
            f"Operation failed: {operation_name} ({duration_ms}ms)",
            extra={
                **metadata,
                "duration_ms": duration_ms,
                "status": "failure",
                "error_type": type(e).__name__,
            },
        )
        raise
    else:
        duration_ms = int((time.time() - start) * 1000)
        getattr(clogger, log_level)(
            f"Operation completed: {operation_name} ({duration_ms}ms)",
            extra={**metadata, "duration_ms": duration_ms, "status": "success"},
        )


# -----------------------------------------------------------------------------
# Progress Logger
# -----------------------------------------------------------------------------
class ProgressLogger:
    """
    Counts items and logs a progress line every `interval` items.

    Usage:
        progress = ProgressLogger("num_log_events", interval=1000)
        for line in lines:
            progress.advance()
        progress.count
    """

    def __init__(self, label: str, interval: int = 1000):
        self.label = label
        self.interval = interval if interval > 0 else 0
        self.count = 0
        self.start_time = time.time()

    def advance(self, n: int = 1) -> None:
        before = self.count
        self.count += n
        if self.interval and before // self.interval != self.count // self.interval:
            clogger.info(
                f"{self.label}={self.count}",
                extra={"progress_label": self.label, "progress_count": self.count},
            )

    @property
    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time

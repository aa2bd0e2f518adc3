"""
Lambda invocation logging decorator.

Provides per-invocation logging for AWS Lambda handlers with:
- Correlation ID tracking (from the Lambda request id)
- Timing of the whole invocation
- Masked event logging at DEBUG
- Classified failure logging
"""

import time
import uuid
from functools import wraps
from typing import Any, Callable, Dict, TypeVar

from s3handler.errors import HandlerError
from s3handler.logging.config import logger
from s3handler.logging.context import clogger, correlation_id, request_start_time
from s3handler.logging.masking import mask_sensitive_data

F = TypeVar("F", bound=Callable[..., Any])

__all__ = ["log_invocation", "request_id_from_context"]


def request_id_from_context(context: Any) -> str:
    """
    Lambda request id of the running invocation, or a fresh UUID when the
    handler is called outside the Lambda runtime.
    """
    request_id = getattr(context, "aws_request_id", None)
    if isinstance(request_id, str) and request_id:
        return request_id
    return str(uuid.uuid4())


def _event_summary(event: Any) -> Dict[str, Any]:
    if not isinstance(event, dict):
        return {"event_kind": type(event).__name__}
    # runs before validation, so it must accept any shape
    if "Records" in event:
        records = event.get("Records")
        record_count = len(records) if isinstance(records, list) else None
        return {"event_kind": "records", "record_count": record_count}
    return {
        "event_kind": "direct",
        "operation": event.get("operation"),
        "bucket": event.get("bucket"),
        "key": event.get("key"),
    }


# -----------------------------------------------------------------------------
# Lambda Invocation Logging Decorator
# -----------------------------------------------------------------------------
def log_invocation(function_name: str, log_event: bool = True) -> Callable[[F], F]:
    """
    Invocation logging decorator.

    - INFO: one start line and one completion/failure line per invocation
    - DEBUG: the masked event
    - Expected HandlerErrors are logged at WARNING, anything else with a
      traceback; both are re-raised unchanged

    Args:
        function_name: Name used in log records (e.g., "s3-object-handler")
        log_event: Log the masked event at DEBUG level

    Usage:
        @log_invocation("s3-object-handler")
        def lambda_handler(event, context):
            ...
    """

    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(event: Any, context: Any, **kwargs: Any) -> Any:
            cid = request_id_from_context(context)
            correlation_id.set(cid)
            request_start_time.set(time.time())

            summary = {"event_type": "invocation", "function": function_name}
            summary.update(_event_summary(event))
            clogger.info(f"Invocation started: {function_name}", extra=summary)

            if log_event and logger._core.min_level <= 10:  # type: ignore[attr-defined]  # DEBUG = 10
                clogger.debug(
                    "Invocation event",
                    extra={
                        "event_type": "invocation_event",
                        "event": mask_sensitive_data(event),
                    },
                )

            try:
                result = func(event, context, **kwargs)

                clogger.info(
                    f"Invocation completed: {function_name} ({_duration_ms()}ms)",
                    extra={
                        "event_type": "invocation_result",
                        "function": function_name,
                        "status": "ok",
                        "duration_ms": _duration_ms(),
                    },
                )
                return result

            except HandlerError as e:
                clogger.warning(
                    f"Invocation failed: {function_name}: {type(e).__name__}: {e}",
                    extra={
                        "event_type": "invocation_error",
                        "function": function_name,
                        "duration_ms": _duration_ms(),
                        "error_type": type(e).__name__,
                        "error_code": e.error_code,
                        "details": e.details,
                    },
                )
                raise

            except Exception as e:
                clogger.exception(
                    f"Invocation failed: {function_name}",
                    extra={
                        "event_type": "error",
                        "function": function_name,
                        "duration_ms": _duration_ms(),
                        "error_type": type(e).__name__,
                    },
                )
                raise

            finally:
                correlation_id.set(None)
                request_start_time.set(None)

        return wrapper  # type: ignore[return-value]

    return decorator


def _duration_ms() -> int:
    start = request_start_time.get()
    return int((time.time() - (start or time.time())) * 1000)

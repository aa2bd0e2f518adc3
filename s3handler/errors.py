"""
Typed failures raised by the invocation handler.

Each one propagates to the Lambda runtime, which reports the class name as
``errorType``. The platform owns retry and dead-lettering, so nothing here is
retried.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class HandlerError(Exception):
    """Base class for classified invocation failures."""

    error_code = "HANDLER_ERROR"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details = {k: v for k, v in details.items() if v is not None}

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
            "error_type": type(self).__name__,
        }
        if self.details:
            payload["details"] = self.details
        return payload


class MalformedEvent(HandlerError):
    """The trigger payload is invalid or incomplete."""

    error_code = "MALFORMED_EVENT"

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message, field=field)
        self.field = field


class NotFound(HandlerError):
    """The referenced bucket or object does not exist."""

    error_code = "NOT_FOUND"

    def __init__(self, bucket: str, key: str, backend_code: Optional[str] = None):
        super().__init__(
            f"Object s3://{bucket}/{key} does not exist",
            bucket=bucket,
            key=key,
            backend_code=backend_code,
        )
        self.bucket = bucket
        self.key = key
        self.backend_code = backend_code


class StorageUnavailable(HandlerError):
    """The backend was unreachable or answered with an error."""

    error_code = "STORAGE_UNAVAILABLE"

    def __init__(
        self,
        message: str,
        bucket: Optional[str] = None,
        key: Optional[str] = None,
        backend_code: Optional[str] = None,
        http_status: Optional[int] = None,
    ) -> None:
        super().__init__(
            message,
            bucket=bucket,
            key=key,
            backend_code=backend_code,
            http_status=http_status,
        )
        self.bucket = bucket
        self.key = key
        self.backend_code = backend_code
        self.http_status = http_status


class InvalidObjectContent(HandlerError):
    """A scanned object is not valid zstd or not newline-delimited JSON."""

    error_code = "INVALID_OBJECT_CONTENT"

    def __init__(
        self,
        message: str,
        bucket: Optional[str] = None,
        key: Optional[str] = None,
        line_number: Optional[int] = None,
    ) -> None:
        super().__init__(message, bucket=bucket, key=key, line_number=line_number)
        self.bucket = bucket
        self.key = key
        self.line_number = line_number

"""
Invocation event parsing.

Turns the raw Lambda event into an InvocationEvent, or raises MalformedEvent
before anything touches S3. Two wire shapes are accepted:

- a direct invocation document:
    {"bucket": "...", "key": "...", "operation": "read|write|scan", ...}
- an S3 event notification carrying exactly one record:
    {"Records": [{"s3": {"bucket": {"name": "..."}, "object": {"key": "..."}}}]}
"""

from __future__ import annotations

import base64
import binascii
import urllib.parse
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, cast

from s3handler.errors import MalformedEvent
from s3handler.settings import MAX_KEY_BYTES

Operation = Literal["read", "write", "scan"]
Compression = Literal["zstd", "none"]

OPERATIONS = ("read", "write", "scan")
COMPRESSIONS = ("zstd", "none")


@dataclass(frozen=True)
class InvocationEvent:
    correlation_id: str
    bucket: str
    key: str
    operation: Operation
    payload: Optional[bytes] = None
    content_type: Optional[str] = None
    compression: Compression = "zstd"

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


# =============================================================================
# Field helpers
# =============================================================================
def _require_str(doc: Dict[str, Any], field: str, allow_blank: bool = False) -> str:
    value = doc.get(field)
    if value is None:
        raise MalformedEvent(f"Missing required field '{field}'", field=field)
    if not isinstance(value, str):
        raise MalformedEvent(
            f"Field '{field}' must be a string, got {type(value).__name__}",
            field=field,
        )
    # object keys may legitimately be whitespace, bucket names may not
    if value == "" or (not allow_blank and not value.strip()):
        raise MalformedEvent(f"Field '{field}' must not be empty", field=field)
    return value


def _optional_str(doc: Dict[str, Any], field: str) -> Optional[str]:
    value = doc.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise MalformedEvent(
            f"Field '{field}' must be a string, got {type(value).__name__}",
            field=field,
        )
    return value


def _check_key(key: str) -> str:
    if len(key.encode("utf-8")) > MAX_KEY_BYTES:
        raise MalformedEvent(
            f"Field 'key' exceeds {MAX_KEY_BYTES} bytes", field="key"
        )
    return key


def _decode_payload(doc: Dict[str, Any]) -> Optional[bytes]:
    text = _optional_str(doc, "payload")
    encoded = _optional_str(doc, "payload_base64")

    if text is not None and encoded is not None:
        raise MalformedEvent(
            "Fields 'payload' and 'payload_base64' are mutually exclusive",
            field="payload",
        )
    if text is not None:
        return text.encode("utf-8")
    if encoded is not None:
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError):
            raise MalformedEvent(
                "Field 'payload_base64' is not valid base64", field="payload_base64"
            ) from None
    return None


# =============================================================================
# Shapes
# =============================================================================
def _from_s3_notification(doc: Dict[str, Any], correlation_id: str) -> InvocationEvent:
    records = doc.get("Records")
    if not isinstance(records, list) or len(records) != 1:
        count = len(records) if isinstance(records, list) else 0
        raise MalformedEvent(
            f"Expected exactly one record, got {count}", field="Records"
        )

    record = records[0]
    s3_info = record.get("s3") if isinstance(record, dict) else None
    if not isinstance(s3_info, dict):
        raise MalformedEvent("Record has no 's3' section", field="Records")

    bucket_info = s3_info.get("bucket") or {}
    object_info = s3_info.get("object") or {}
    if not isinstance(bucket_info, dict) or not isinstance(object_info, dict):
        raise MalformedEvent("Record 's3' section is malformed", field="Records")

    bucket = _require_str(bucket_info, "name")
    # notification keys are URL-encoded with '+' for spaces
    key = urllib.parse.unquote_plus(_require_str(object_info, "key", allow_blank=True))

    return InvocationEvent(
        correlation_id=correlation_id,
        bucket=bucket,
        key=_check_key(key),
        operation="read",
    )


def _from_direct(doc: Dict[str, Any], correlation_id: str) -> InvocationEvent:
    bucket = _require_str(doc, "bucket")
    key = _check_key(_require_str(doc, "key", allow_blank=True))
    payload = _decode_payload(doc)

    operation = _optional_str(doc, "operation")
    if operation is None:
        operation = "write" if payload is not None else "read"
    operation = operation.lower()
    if operation not in OPERATIONS:
        raise MalformedEvent(
            f"Unknown operation '{operation}', expected one of {', '.join(OPERATIONS)}",
            field="operation",
        )
    if operation == "write" and payload is None:
        raise MalformedEvent(
            "Operation 'write' requires 'payload' or 'payload_base64'",
            field="payload",
        )
    if operation != "write" and payload is not None:
        raise MalformedEvent(
            f"Operation '{operation}' does not take a payload",
            field="payload",
        )

    compression = (_optional_str(doc, "compression") or "zstd").lower()
    if compression not in COMPRESSIONS:
        raise MalformedEvent(
            f"Unknown compression '{compression}', expected one of {', '.join(COMPRESSIONS)}",
            field="compression",
        )

    return InvocationEvent(
        correlation_id=_optional_str(doc, "correlation_id") or correlation_id,
        bucket=bucket,
        key=key,
        operation=cast(Operation, operation),
        payload=payload,
        content_type=_optional_str(doc, "content_type"),
        compression=cast(Compression, compression),
    )


def parse_event(raw: Any, request_id: str) -> InvocationEvent:
    """
    Validate a raw Lambda event and build the InvocationEvent.

    `request_id` is the Lambda request id; it becomes the correlation id unless
    the event carries its own.
    """
    if not isinstance(raw, dict):
        raise MalformedEvent(
            f"Event must be a JSON object, got {type(raw).__name__}"
        )

    if "Records" in raw:
        return _from_s3_notification(raw, request_id)
    return _from_direct(raw, request_id)

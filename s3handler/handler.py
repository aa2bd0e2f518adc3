"""
Invocation handler core: one event in, one S3 operation, one result out.

Malformed events are rejected before the storage layer is touched. Storage
failures surface as NotFound / StorageUnavailable and are never retried here;
the Lambda platform owns invocation retries.
"""

from __future__ import annotations

from typing import Any, Callable, Dict

from s3handler.events import InvocationEvent, parse_event
from s3handler.logging import clogger
from s3handler.results import InvocationResult, clean_etag, encode_payload
from s3handler.storage import log_scan, s3_utils


def _read(event: InvocationEvent, request_id: str) -> InvocationResult:
    stored = s3_utils.get_object_bytes(event.bucket, event.key)
    body = stored.body or b""
    return InvocationResult.for_event(
        event,
        request_id,
        **encode_payload(body),
        content_length=len(body),
        content_type=stored.content_type,
        etag=clean_etag(stored.etag),
        version_id=stored.version_id,
    )


def _write(event: InvocationEvent, request_id: str) -> InvocationResult:
    payload = event.payload or b""
    stored = s3_utils.put_object_bytes(
        event.bucket, event.key, payload, content_type=event.content_type
    )
    return InvocationResult.for_event(
        event,
        request_id,
        content_length=stored.content_length,
        etag=clean_etag(stored.etag),
        version_id=stored.version_id,
    )


def _scan(event: InvocationEvent, request_id: str) -> InvocationResult:
    summary = log_scan.scan_log_object(
        event.bucket, event.key, compression=event.compression
    )
    return InvocationResult.for_event(
        event,
        request_id,
        num_log_events=summary.num_log_events,
        elapsed_ms=summary.elapsed_ms,
        msg=summary.msg,
    )


_OPERATIONS: Dict[str, Callable[[InvocationEvent, str], InvocationResult]] = {
    "read": _read,
    "write": _write,
    "scan": _scan,
}


def handle_invocation(raw_event: Any, request_id: str) -> InvocationResult:
    """
    Map one raw Lambda event to one InvocationResult.

    Raises:
        MalformedEvent: invalid or incomplete event (no storage call made)
        NotFound: referenced bucket/object does not exist
        StorageUnavailable: S3 unreachable or returned an error
        InvalidObjectContent: a scanned object is not zstd / JSON lines
    """
    event = parse_event(raw_event, request_id)
    clogger.info(
        f"Handling {event.operation} of {event.uri}",
        extra={
            "operation": event.operation,
            "bucket": event.bucket,
            "key": event.key,
            "event_correlation_id": event.correlation_id,
        },
    )
    return _OPERATIONS[event.operation](event, request_id)

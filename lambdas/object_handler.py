"""
Lambda entry point: s3-object-handler

Reads, writes or scans exactly one S3 object per invocation.

Event (direct invocation):
    {
        "bucket": "test-bucket",
        "key": "hello.txt",
        "operation": "read" | "write" | "scan",   # optional
        "payload": "text",                         # write only
        "payload_base64": "aGVsbG8=",              # write only
        "content_type": "text/plain",              # write only
        "compression": "zstd" | "none",            # scan only
        "correlation_id": "..."                    # optional
    }

An S3 event notification with a single record is also accepted and is
treated as a read.
"""

from __future__ import annotations

from typing import Any, Dict

from s3handler.handler import handle_invocation
from s3handler.logging import correlation_id, log_invocation, request_id_from_context


# =============================================================================
# Lambda Handler
# =============================================================================
#
# Failures:
#   MalformedEvent      - invalid or incomplete event, no S3 call made
#   NotFound            - bucket or object absent
#   StorageUnavailable  - S3 unreachable or returned an error
#   InvalidObjectContent - scanned object is not zstd / JSON lines
#
# All of them propagate to the Lambda runtime (reported as errorType); the
# platform owns retry and dead-lettering.
# =============================================================================


@log_invocation("s3-object-handler")
def lambda_handler(event: Any, context: Any) -> Dict[str, Any]:
    # log_invocation has already resolved the request id for this invocation
    request_id = correlation_id.get() or request_id_from_context(context)
    return handle_invocation(event, request_id=request_id).to_dict()

"""
Invocation results returned to the Lambda platform.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from s3handler.events import InvocationEvent


@dataclass
class InvocationResult:
    operation: str
    request_id: str
    correlation_id: str
    bucket: str
    key: str
    data: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_event(
        cls, event: InvocationEvent, request_id: str, **data: Any
    ) -> "InvocationResult":
        return cls(
            operation=event.operation,
            request_id=request_id,
            correlation_id=event.correlation_id,
            bucket=event.bucket,
            key=event.key,
            data=data,
        )

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "status": "ok",
            "operation": self.operation,
            "request_id": self.request_id,
            "correlation_id": self.correlation_id,
            "bucket": self.bucket,
            "key": self.key,
        }
        body.update(self.data)
        return body


def encode_payload(data: bytes) -> Dict[str, Any]:
    """
    JSON-safe rendering of object bytes: text when the body is UTF-8,
    base64 otherwise.
    """
    try:
        return {"payload": data.decode("utf-8"), "encoding": "utf-8"}
    except UnicodeDecodeError:
        return {
            "payload": base64.b64encode(data).decode("ascii"),
            "encoding": "base64",
        }


def clean_etag(etag: Optional[str]) -> Optional[str]:
    return etag.strip('"') if etag else etag

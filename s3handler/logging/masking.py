"""
Masking of invocation events before they are logged.

Secret-like fields are redacted and object payload fields are replaced by a
size marker, so neither credentials nor object bytes reach CloudWatch.
"""

import re
from typing import Any, List, Set, Tuple

SENSITIVE_FIELDS: Set[str] = {
    "password",
    "secret",
    "token",
    "authorization",
    "x-amz-security-token",
    "access_token",
    "session_token",
    "api_key",
    "aws_secret_access_key",
}

# Fields that hold object bytes
PAYLOAD_FIELDS: Set[str] = {"payload", "payload_base64", "body"}

SENSITIVE_PATTERNS: List[Tuple[str, str]] = [
    (r"(https?://[^\s]*X-Amz-Signature=[^\s]*)", "[PRESIGNED_URL]"),
]

__all__ = ["mask_sensitive_data", "SENSITIVE_FIELDS", "PAYLOAD_FIELDS"]


def _payload_marker(value: Any) -> str:
    if isinstance(value, str):
        return f"[{len(value)} chars]"
    if isinstance(value, (bytes, bytearray)):
        return f"[{len(value)} bytes]"
    return "[PAYLOAD]"


def mask_sensitive_data(data: Any, max_depth: int = 5) -> Any:
    """
    Recursively mask sensitive data in dicts, lists, and strings.

    Returns a copy; the input is never modified.
    """
    if max_depth <= 0:
        return "[MAX_DEPTH_EXCEEDED]"

    if isinstance(data, dict):
        masked = {}
        for k, v in data.items():
            name = str(k).lower()
            if name in SENSITIVE_FIELDS:
                masked[k] = "[REDACTED]"
            elif name in PAYLOAD_FIELDS:
                masked[k] = _payload_marker(v)
            else:
                masked[k] = mask_sensitive_data(v, max_depth - 1)
        return masked

    if isinstance(data, list):
        return [mask_sensitive_data(item, max_depth - 1) for item in data]

    if isinstance(data, (bytes, bytearray)):
        return f"[{len(data)} bytes]"

    if isinstance(data, str):
        masked_str = data
        for pattern, replacement in SENSITIVE_PATTERNS:
            masked_str = re.sub(pattern, replacement, masked_str, flags=re.IGNORECASE)
        return masked_str

    return data

"""
Global function settings loaded from environment variables.
Deployment parameters (function name, timeout, profile) are owned by the
deployment tooling and are not read here.
"""

from __future__ import annotations

import os


# -----------------------------------------------------------------------------
# Helper: Fetch Numeric Environment Variables
# -----------------------------------------------------------------------------
def _int_env(name: str, default: int) -> int:
    """
    Fetch an optional integer environment variable or raise a descriptive error.
    """
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(
            f"Environment variable {name} must be an integer, got {raw!r}"
        ) from None


# -----------------------------------------------------------------------------
# Core AWS Settings
# -----------------------------------------------------------------------------
AWS_REGION: str = os.environ.get("AWS_REGION", "eu-west-1")

# S3 client timeouts (seconds)
S3_CONNECT_TIMEOUT: int = _int_env("S3_CONNECT_TIMEOUT", 5)
S3_READ_TIMEOUT: int = _int_env("S3_READ_TIMEOUT", 60)

# Logging Configuration (Optional)
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")


# -----------------------------------------------------------------------------
# Log Scan Settings
# -----------------------------------------------------------------------------
# Emit a progress line every N parsed log events
SCAN_PROGRESS_INTERVAL: int = _int_env("SCAN_PROGRESS_INTERVAL", 1000)

# S3 rejects object keys longer than this many UTF-8 bytes
MAX_KEY_BYTES: int = 1024

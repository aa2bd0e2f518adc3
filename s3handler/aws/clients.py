"""
AWS client factory with lazy initialization and caching.
The client survives across warm invocations of the same execution environment.
"""

from __future__ import annotations

from typing import Optional

import boto3
from botocore.config import Config
from mypy_boto3_s3 import S3Client

from s3handler.settings import AWS_REGION, S3_CONNECT_TIMEOUT, S3_READ_TIMEOUT


# -------------------------------------------------------------------------------------
# Lazy-initialized client cache
# -------------------------------------------------------------------------------------
_s3_client: Optional[S3Client] = None


def _s3_config() -> Config:
    """
    One attempt per call: the Lambda platform owns invocation retries.
    """
    return Config(
        region_name=AWS_REGION,
        connect_timeout=S3_CONNECT_TIMEOUT,
        read_timeout=S3_READ_TIMEOUT,
        retries={"total_max_attempts": 1, "mode": "standard"},
    )


# -------------------------------------------------------------------------------------
# S3
# -------------------------------------------------------------------------------------
def get_s3() -> S3Client:
    """
    Returns a cached S3 client.
    """
    global _s3_client

    if _s3_client is None:
        _s3_client = boto3.client(
            "s3", region_name=AWS_REGION, config=_s3_config()
        )

    return _s3_client


def reset_clients() -> None:
    """
    Drop cached clients so the next call builds a fresh one (used by tests).
    """
    global _s3_client
    _s3_client = None

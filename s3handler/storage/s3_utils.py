"""
S3 storage utilities for the invocation handler.
This module provides:
- Reading a whole object into memory
- Opening an object as a stream (for the log scanner)
- Writing an object from bytes
- Classification of botocore failures into NotFound / StorageUnavailable

Every public function issues exactly one S3 request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NoReturn, Optional

from botocore.exceptions import BotoCoreError, ClientError
from botocore.response import StreamingBody
from mypy_boto3_s3 import S3Client

from s3handler.aws.clients import get_s3
from s3handler.errors import NotFound, StorageUnavailable
from s3handler.logging import clogger, log_operation

NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "NotFound", "404"})


@dataclass(frozen=True)
class StoredObject:
    bucket: str
    key: str
    etag: Optional[str] = None
    version_id: Optional[str] = None
    content_length: Optional[int] = None
    content_type: Optional[str] = None
    body: Optional[bytes] = None


# =====================================================================================
# Error classification
# =====================================================================================
def raise_storage_error(
    err: Exception, bucket: str, key: str, operation: str
) -> NoReturn:
    """
    Re-raise a botocore failure as NotFound or StorageUnavailable.
    """
    if isinstance(err, ClientError):
        error = err.response.get("Error", {})
        code = str(error.get("Code", ""))
        status = err.response.get("ResponseMetadata", {}).get("HTTPStatusCode")

        if code in NOT_FOUND_CODES or status == 404:
            raise NotFound(bucket, key, backend_code=code or None) from err

        raise StorageUnavailable(
            f"S3 {operation} failed for s3://{bucket}/{key}: "
            f"{code or 'Unknown'} {error.get('Message', '')}".rstrip(),
            bucket=bucket,
            key=key,
            backend_code=code or None,
            http_status=status,
        ) from err

    raise StorageUnavailable(
        f"S3 {operation} failed for s3://{bucket}/{key}: {err}",
        bucket=bucket,
        key=key,
        backend_code=type(err).__name__,
    ) from err


# =====================================================================================
# Read
# =====================================================================================
def open_object_stream(bucket: str, key: str) -> StreamingBody:
    """
    Issue GetObject and return the unread body stream.

    Errors raised while the caller reads the stream are not translated here.
    """
    s3: S3Client = get_s3()

    with log_operation("s3.get_object", bucket=bucket, key=key):
        try:
            response = s3.get_object(Bucket=bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise_storage_error(e, bucket, key, "GetObject")

    body = response.get("Body")
    if body is None:
        raise StorageUnavailable(
            f"No body found in S3 response for s3://{bucket}/{key}",
            bucket=bucket,
            key=key,
        )
    return body


def get_object_bytes(bucket: str, key: str) -> StoredObject:
    """
    Read an S3 object fully into memory.
    """
    s3: S3Client = get_s3()

    with log_operation("s3.get_object", bucket=bucket, key=key):
        try:
            response = s3.get_object(Bucket=bucket, Key=key)
            body = response.get("Body")
            data = body.read() if body is not None else None
        except (ClientError, BotoCoreError) as e:
            raise_storage_error(e, bucket, key, "GetObject")

    if data is None:
        raise StorageUnavailable(
            f"No body found in S3 response for s3://{bucket}/{key}",
            bucket=bucket,
            key=key,
        )

    clogger.debug(f"Read {len(data)} bytes from s3://{bucket}/{key}")

    return StoredObject(
        bucket=bucket,
        key=key,
        etag=response.get("ETag"),
        version_id=response.get("VersionId"),
        content_length=len(data),
        content_type=response.get("ContentType"),
        body=data,
    )


# =====================================================================================
# Write
# =====================================================================================
def put_object_bytes(
    bucket: str,
    key: str,
    data: bytes,
    content_type: Optional[str] = None,
) -> StoredObject:
    """
    Write bytes to an S3 object, replacing any existing object at the key.
    """
    s3: S3Client = get_s3()

    kwargs = {"Bucket": bucket, "Key": key, "Body": data}
    if content_type:
        kwargs["ContentType"] = content_type

    with log_operation("s3.put_object", bucket=bucket, key=key, size=len(data)):
        try:
            response = s3.put_object(**kwargs)  # type: ignore[arg-type]
        except (ClientError, BotoCoreError) as e:
            raise_storage_error(e, bucket, key, "PutObject")

    clogger.info(f"Upload successful: s3://{bucket}/{key} ({len(data)} bytes)")

    return StoredObject(
        bucket=bucket,
        key=key,
        etag=response.get("ETag"),
        version_id=response.get("VersionId"),
        content_length=len(data),
        content_type=content_type,
    )

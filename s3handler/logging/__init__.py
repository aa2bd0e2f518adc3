"""
Logging infrastructure for the Lambda function.

Provides:
- Structured logging with loguru
- Correlation ID tracking
- Masking of secrets and object payloads
- Invocation logging and operation timing

Usage:
    from s3handler.logging import clogger, log_invocation

    @log_invocation("s3-object-handler")
    def lambda_handler(event, context):
        clogger.info("Reading object", extra={"bucket": "my-bucket"})
        ...
"""

from s3handler.logging.config import logger, setup_logging
from s3handler.logging.context import clogger, correlation_id, request_start_time
from s3handler.logging.decorators import log_invocation, request_id_from_context
from s3handler.logging.masking import mask_sensitive_data
from s3handler.logging.operations import ProgressLogger, log_operation

# Initialize logging when package is imported
setup_logging()

__all__ = [
    "logger",  # Raw loguru logger
    "clogger",  # Contextual logger with correlation ID
    "log_invocation",
    "request_id_from_context",
    "log_operation",
    "ProgressLogger",
    "mask_sensitive_data",
    "correlation_id",
    "request_start_time",
    "setup_logging",
]

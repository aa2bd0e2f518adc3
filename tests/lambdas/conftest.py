"""
Conftest for lambda tests - provides a fake Lambda context.
"""

from types import SimpleNamespace

import pytest


# ====================================================================================
# FIXTURE: Lambda context object
# ====================================================================================
@pytest.fixture
def lambda_context():
    """
    Minimal stand-in for the LambdaContext the Python runtime passes in.
    """
    return SimpleNamespace(
        aws_request_id="0f1e2d3c-4b5a-6978-8796-a5b4c3d2e1f0",
        function_name="s3-object-handler",
        memory_limit_in_mb=128,
        get_remaining_time_in_millis=lambda: 30_000,
    )

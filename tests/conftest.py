import os

import boto3
import pytest


def pytest_configure(config):
    # Tests must never reach real AWS: fixed region and dummy credentials
    os.environ["AWS_REGION"] = "us-east-1"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ.pop("AWS_PROFILE", None)
    os.environ["LOG_LEVEL"] = "DEBUG"


@pytest.fixture(autouse=True)
def reset_aws_clients():
    """
    Reset cached AWS clients before each test.

    A client cached outside a @mock_aws context would keep pointing at real
    AWS instead of moto.
    """
    from s3handler.aws.clients import reset_clients

    reset_clients()
    yield
    reset_clients()


@pytest.fixture
def s3_bucket():
    """
    Moto-backed S3 with an empty "test-bucket". Yields the raw boto3 client
    so tests can seed and inspect objects.
    """
    from moto import mock_aws

    with mock_aws():
        client = boto3.client("s3", region_name="us-east-1")
        client.create_bucket(Bucket="test-bucket")
        yield client

"""
Module: conftest.py
Description: Shared pytest fixtures for sqsbridge tests.

Provides configs, fake AWS credentials and moto backed SNS/SQS
resources so tests never reach real AWS endpoints.
"""

import boto3
import pytest
from moto import mock_aws

from sqsbridge.models.config import Config

TEST_REGION = "us-east-1"
TEST_ACCOUNT_ID = "123456789012"


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch):
    """Fake credentials so a misconfigured test cannot reach real AWS."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)


@pytest.fixture
def sample_config():
    """
    Provide a Config with valid static credentials.

    Response logging is off to keep test output quiet.
    """
    return Config(
        key="testing",
        secret="testing",
        region=TEST_REGION,
        aws_account_id=TEST_ACCOUNT_ID,
        env="test",
        topic_prefix="orders",
        log_responses=False
    )


@pytest.fixture
def mock_sns_topic(sample_config):
    """Create a mocked SNS topic named after the sample config."""
    with mock_aws():
        sns = boto3.client("sns", region_name=TEST_REGION)
        response = sns.create_topic(Name=sample_config.topic_name())
        yield response["TopicArn"]


@pytest.fixture
def mock_sqs_queue():
    """Create a mocked SQS queue named test-inbox."""
    with mock_aws():
        sqs = boto3.client("sqs", region_name=TEST_REGION)
        response = sqs.create_queue(QueueName="test-inbox")
        yield sqs, response["QueueUrl"]

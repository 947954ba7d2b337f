#!/usr/bin/env python3
"""
Custom session provider example.

Shows how to replace the default key/secret bootstrap with your own
session setup, here pointed at a local SNS/SQS emulator.

Usage:
    python examples/config_provider.py
"""

import boto3
from botocore.config import Config as BotoConfig

from sqsbridge import (
    Config,
    DataType,
    InvalidCredentialsError,
    Publisher,
    ResolvedClientConfig,
    RetryPolicy,
    StaticCredentialProvider,
    resolve,
)
from sqsbridge.utils.logger import get_logger

logger = get_logger("examples.config_provider")

EMULATOR_URL = "http://localhost:4150"


def local_provider(config: Config) -> ResolvedClientConfig:
    """Hardcoded credentials and endpoint, but this could do anything."""
    try:
        credentials = StaticCredentialProvider("mykey", "mysecret").load()
    except Exception as e:
        raise InvalidCredentialsError().with_context(e) from e

    session = boto3.Session(
        aws_access_key_id=credentials.access_key,
        aws_secret_access_key=credentials.secret_key,
        region_name="us-west-1",
    )
    retry_policy = RetryPolicy(config.retry_count)

    return ResolvedClientConfig(
        session=session,
        region="us-west-1",
        credentials=credentials.get_frozen_credentials(),
        retry_policy=retry_policy,
        boto_config=BotoConfig(retries=retry_policy.boto_retries()),
        endpoint_url=EMULATOR_URL,
    )


def main():
    config = Config(
        aws_config_provider=local_provider,
        topic_arn="arn:aws:sns:local:000000000000:dispatcher",
        region="us-west-1",
    )
    config.add_attribute(DataType.STRING, "source", "examples")

    resolved = resolve(config)
    logger.info(
        "Client configuration resolved",
        region=resolved.region,
        endpoint_url=resolved.endpoint_url,
        max_attempts=resolved.max_attempts
    )

    publisher = Publisher(config, resolved)
    publisher.publish("example.created", {"hello": "world"})


if __name__ == "__main__":
    main()

"""
sqsbridge: configuration and authentication for SNS/SQS clients.

Build a Config, resolve it into a ResolvedClientConfig and create boto3
clients from the result:

    >>> from sqsbridge import Config, resolve
    >>> resolved = resolve(Config(key="k", secret="s", region="us-west-1"))
    >>> sqs = resolved.sqs()
"""

from .errors import (
    InvalidCredentialsError,
    MarshalError,
    SQSBridgeError,
    UndefinedQueueError,
    UndefinedTopicError,
)
from .models import DEFAULT_EXTENSION_LIMIT, Config, CustomAttribute, DataType
from .session import (
    DEFAULT_MAX_ATTEMPTS,
    ClientConfigurator,
    ResolvedClientConfig,
    RetryPolicy,
    SessionProviderFunc,
    StaticCredentialProvider,
    resolve,
)
from .sqs_queue import Publisher

__version__ = "0.1.0"

__all__ = [
    "InvalidCredentialsError",
    "MarshalError",
    "SQSBridgeError",
    "UndefinedQueueError",
    "UndefinedTopicError",
    "DEFAULT_EXTENSION_LIMIT",
    "Config",
    "CustomAttribute",
    "DataType",
    "DEFAULT_MAX_ATTEMPTS",
    "ClientConfigurator",
    "ResolvedClientConfig",
    "RetryPolicy",
    "SessionProviderFunc",
    "StaticCredentialProvider",
    "resolve",
    "Publisher",
]

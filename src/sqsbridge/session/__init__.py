"""
Module: session
Description: AWS session bootstrap for SNS and SQS clients.

- configurator: Resolves a Config into a ready client configuration
- credentials: Static key/secret credential provider
- retry: Bounded standard-mode retry policy
"""

from .configurator import ClientConfigurator, ResolvedClientConfig, SessionProviderFunc, resolve
from .credentials import StaticCredentialProvider
from .retry import DEFAULT_MAX_ATTEMPTS, RetryPolicy

__all__ = [
    "ClientConfigurator",
    "ResolvedClientConfig",
    "SessionProviderFunc",
    "resolve",
    "StaticCredentialProvider",
    "DEFAULT_MAX_ATTEMPTS",
    "RetryPolicy",
]

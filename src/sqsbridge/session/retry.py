"""
Module: session/retry.py
Description: Retry policy for AWS clients.

Maps the configured retry count onto botocore's "standard" retry mode,
which retries throttling and transient errors with exponential backoff
and jitter.
"""

from dataclasses import dataclass
from typing import Any, Dict

# Attempts used when the configured retry count is not positive
DEFAULT_MAX_ATTEMPTS = 10

RETRY_MODE = "standard"


@dataclass(frozen=True)
class RetryPolicy:
    """
    Bounded retry policy.

    Attributes:
        retry_count: Configured attempt count, non-positive values use the default
        default_attempts: Fallback attempt count
    """

    retry_count: int = 0
    default_attempts: int = DEFAULT_MAX_ATTEMPTS

    @property
    def max_attempts(self) -> int:
        """Total attempts, including the first request."""
        if self.retry_count > 0:
            return self.retry_count
        return self.default_attempts

    def boto_retries(self) -> Dict[str, Any]:
        """Retry settings for botocore.config.Config(retries=...)."""
        return {
            "mode": RETRY_MODE,
            "total_max_attempts": self.max_attempts,
        }

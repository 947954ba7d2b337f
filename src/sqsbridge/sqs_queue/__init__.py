"""
Package: sqs_queue
Description: SNS and SQS message publishing.

Sends JSON payloads with custom message attributes using a resolved
client configuration.
"""

from .publisher import Publisher

__all__ = ["Publisher"]

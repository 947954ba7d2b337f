"""
Module: config.py
Description: Client configuration models for SNS and SQS.

Defines the Config model callers build before resolving an AWS client
configuration, together with the custom message attributes that are
attached to every outgoing SNS/SQS message.

Key Components:
- Config: Caller-provided settings (credentials, region, topic/queue addressing)
- CustomAttribute: Typed key/value metadata sent alongside a message body
- DataType: Allowed data type tags for custom attributes

Dependencies: pydantic, typing
"""

from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from sqsbridge.errors import MarshalError, UndefinedQueueError, UndefinedTopicError

# Number of visibility timeout extensions applied when none is configured
DEFAULT_EXTENSION_LIMIT = 2

# Message attribute carrying the event name, set by the publisher
ROUTE_ATTRIBUTE = "route"


class DataType(str, Enum):
    """Data type tags understood by SNS and SQS message attributes."""

    NUMBER = "Number"
    STRING = "String"

    def __str__(self) -> str:
        return self.value


class CustomAttribute(BaseModel):
    """
    Custom attribute added to SNS and SQS messages.

    Attributes can hold correlation ids, log ids or any information that
    should travel separately from the payload body. They are visible as
    message metadata in the SQS console.

    Attributes:
        title: Attribute name
        data_type: "Number" or "String"
        value: String form of the value, matching data_type
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1, description="Attribute name")
    data_type: str = Field(..., min_length=1, description="Attribute data type tag")
    value: str = Field(..., description="String encoded attribute value")


class Config(BaseModel):
    """
    sqsbridge configuration.

    Attributes:
        aws_config_provider: Optional replacement for the default session setup
        key: AWS access key id
        secret: AWS secret access key
        region: AWS region, also used to derive the topic ARN
        hostname: Endpoint override for emulators and local testing
        aws_account_id: Account id, used to derive the topic ARN
        env: Environment name, used to derive the topic ARN
        topic_prefix: Topic name, prefixed with the environment
        topic_arn: Optional full topic ARN
        queue_url: Optional full queue URL
        visibility_timeout: Seconds a received message stays hidden
        retry_count: Attempts the exponential backoff makes before giving up
        worker_pool: Number of concurrent message handlers
        extension_limit: Visibility timeout extensions, None for the default
        attributes: Custom attributes sent with every message, in order
        logger: Optional structlog compatible logger
        log_responses: Log every AWS response at info level
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        validate_assignment=True,
    )

    aws_config_provider: Optional[Callable[..., Any]] = Field(
        default=None,
        description="Custom session provider, the key/secret default is used if unset"
    )
    key: str = Field(default="", description="AWS access key id")
    secret: str = Field(default="", description="AWS secret access key")
    region: str = Field(default="", description="AWS region")
    hostname: str = Field(default="", description="Endpoint override for emulators")
    aws_account_id: str = Field(default="", description="AWS account id")
    env: str = Field(default="", description="Environment name")
    topic_prefix: str = Field(default="", description="Topic name prefix")
    topic_arn: str = Field(default="", description="Full topic ARN")
    queue_url: str = Field(default="", description="Full queue URL")
    visibility_timeout: int = Field(
        default=30,
        ge=0,
        le=43200,
        description="Visibility timeout in seconds"
    )
    retry_count: int = Field(default=0, description="Exponential backoff attempts")
    worker_pool: int = Field(default=30, ge=1, description="Concurrent handlers")
    # None keeps the default, 0 turns extension off
    extension_limit: Optional[int] = Field(
        default=None,
        ge=0,
        description="Number of visibility timeout extensions"
    )
    attributes: List[CustomAttribute] = Field(
        default_factory=list,
        description="Custom attributes attached to outgoing messages"
    )
    logger: Optional[Any] = Field(default=None, description="Custom logger")
    log_responses: bool = Field(default=True, description="Log AWS responses")

    @property
    def effective_extension_limit(self) -> int:
        """Extension limit with the default applied."""
        if self.extension_limit is None:
            return DEFAULT_EXTENSION_LIMIT
        return self.extension_limit

    def add_attribute(self, data_type: DataType, title: str, value: Any) -> None:
        """
        Add a custom attribute to outgoing SNS and SQS messages.

        The value must match the data type: an int for DataType.NUMBER and
        a str for any other type.

        Args:
            data_type: DataType.NUMBER or DataType.STRING
            title: Attribute name
            value: Attribute value

        Raises:
            MarshalError: If value does not match data_type, or title is
                reserved or already used
        """
        tag = str(data_type)

        if title == ROUTE_ATTRIBUTE:
            raise MarshalError(context=f"attribute title {title!r} is reserved")
        if any(attr.title == title for attr in self.attributes):
            raise MarshalError(context=f"attribute {title!r} already exists")

        if data_type == DataType.NUMBER:
            # bool is an int subclass but not a number attribute
            if not isinstance(value, int) or isinstance(value, bool):
                raise MarshalError(context=f"attribute {title!r} expects an integer")
            encoded = str(value)
        else:
            if not isinstance(value, str):
                raise MarshalError(context=f"attribute {title!r} expects a string")
            encoded = value

        self.attributes.append(CustomAttribute(title=title, data_type=tag, value=encoded))

    def message_attributes(self) -> Dict[str, Dict[str, str]]:
        """Render custom attributes as an SNS/SQS MessageAttributes mapping."""
        return {
            attr.title: {
                "DataType": attr.data_type,
                "StringValue": attr.value,
            }
            for attr in self.attributes
        }

    def topic_name(self) -> str:
        """Topic name made of the environment and the topic prefix."""
        return "-".join(part for part in (self.env, self.topic_prefix) if part)

    def resolved_topic_arn(self) -> str:
        """
        Return the configured topic ARN or derive it.

        The derived form is arn:aws:sns:{region}:{account}:{env}-{prefix}.

        Raises:
            UndefinedTopicError: If the ARN is unset and cannot be derived
        """
        if self.topic_arn:
            return self.topic_arn

        name = self.topic_name()
        if not (self.region and self.aws_account_id and name):
            raise UndefinedTopicError(
                context="topic_arn or region, aws_account_id and env/topic_prefix are required"
            )

        return f"arn:aws:sns:{self.region}:{self.aws_account_id}:{name}"

    def resolved_queue_url(self, queue_name: str) -> str:
        """
        Return the configured queue URL or derive it from the queue name.

        Args:
            queue_name: Queue name without the environment prefix

        Raises:
            UndefinedQueueError: If the URL is unset and cannot be derived
        """
        if self.queue_url:
            return self.queue_url

        if not queue_name:
            raise UndefinedQueueError(context="queue_name must be a non-empty string")
        if not self.aws_account_id or not (self.hostname or self.region):
            raise UndefinedQueueError(
                context="queue_url or aws_account_id and region/hostname are required"
            )

        base = self.hostname.rstrip("/") or f"https://sqs.{self.region}.amazonaws.com"
        name = f"{self.env}-{queue_name}" if self.env else queue_name

        return f"{base}/{self.aws_account_id}/{name}"

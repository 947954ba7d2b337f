"""
Module: publisher.py
Description: SNS/SQS publisher using a resolved client configuration.

Publishes JSON payloads to the configured SNS topic or sends them to an
SQS queue, attaching the config's custom attributes and the event route
as message attributes.
"""

import json
from typing import Any, Dict, Optional

from botocore.exceptions import ClientError

from sqsbridge.errors import MarshalError
from sqsbridge.models.config import ROUTE_ATTRIBUTE, Config, DataType
from sqsbridge.session.configurator import ResolvedClientConfig, resolve
from sqsbridge.utils.logger import get_logger

logger = get_logger(__name__)


class Publisher:
    """
    Publisher for SNS topics and SQS queues.

    Attributes:
        config: Client settings, source of custom attributes and addresses
        resolved: Resolved client configuration
        topic_arn: Resolved SNS topic ARN, None if it cannot be derived

    Example:
        >>> publisher = Publisher(config)
        >>> publisher.publish("order.created", {"order_id": "123"})
    """

    def __init__(self, config: Config, resolved: Optional[ResolvedClientConfig] = None):
        if not isinstance(config, Config):
            raise ValueError("config must be a Config instance")

        self.config = config
        self.resolved = resolved or resolve(config)
        self.log = config.logger or logger
        self._sns = None
        self._sqs = None

        self.log.info(
            "Publisher initialized",
            region=self.resolved.region,
            endpoint_url=self.resolved.endpoint_url,
            max_attempts=self.resolved.max_attempts
        )

    @property
    def sns(self) -> Any:
        if self._sns is None:
            self._sns = self.resolved.sns()
        return self._sns

    @property
    def sqs(self) -> Any:
        if self._sqs is None:
            self._sqs = self.resolved.sqs()
        return self._sqs

    def _message(self, event: str, payload: Any) -> Dict[str, Any]:
        if not event or not isinstance(event, str):
            raise ValueError("event must be a non-empty string")

        try:
            body = json.dumps(payload)
        except (TypeError, ValueError) as e:
            raise MarshalError().with_context(e) from e

        attributes = self.config.message_attributes()
        attributes[ROUTE_ATTRIBUTE] = {
            "DataType": DataType.STRING.value,
            "StringValue": event
        }

        return {"body": body, "attributes": attributes}

    def publish(self, event: str, payload: Any) -> str:
        """
        Publish payload to the configured SNS topic.

        Args:
            event: Event name, sent as the route attribute
            payload: JSON serializable payload

        Returns:
            Message ID from SNS

        Raises:
            MarshalError: If payload is not JSON serializable
            UndefinedTopicError: If no topic ARN can be resolved
            ClientError: If the SNS operation fails
        """
        message = self._message(event, payload)
        topic_arn = self.config.resolved_topic_arn()

        try:
            response = self.sns.publish(
                TopicArn=topic_arn,
                Message=message["body"],
                MessageAttributes=message["attributes"]
            )
        except ClientError as e:
            self.log.error(
                "Failed to publish message to SNS",
                route=event,
                topic_arn=topic_arn,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

        message_id = response['MessageId']
        self.log.info(
            "Message published to SNS",
            route=event,
            message_id=message_id,
            topic_arn=topic_arn
        )

        return message_id

    def send_message(
        self,
        queue_name: str,
        event: str,
        payload: Any,
        delay_seconds: int = 0
    ) -> str:
        """
        Send payload directly to an SQS queue.

        Args:
            queue_name: Queue name without environment prefix, ignored when
                Config.queue_url is set
            event: Event name, sent as the route attribute
            payload: JSON serializable payload
            delay_seconds: Delay before the message becomes visible

        Returns:
            Message ID from SQS

        Raises:
            MarshalError: If payload is not JSON serializable
            UndefinedQueueError: If no queue URL can be resolved
            ClientError: If the SQS operation fails
        """
        if not 0 <= delay_seconds <= 900:
            raise ValueError("delay_seconds must be between 0 and 900")

        message = self._message(event, payload)
        queue_url = self.config.resolved_queue_url(queue_name)

        try:
            response = self.sqs.send_message(
                QueueUrl=queue_url,
                MessageBody=message["body"],
                MessageAttributes=message["attributes"],
                DelaySeconds=delay_seconds
            )
        except ClientError as e:
            self.log.error(
                "Failed to send message to SQS",
                route=event,
                queue_url=queue_url,
                error_code=e.response['Error']['Code'],
                error_message=e.response['Error']['Message']
            )
            raise

        message_id = response['MessageId']
        self.log.info(
            "Message sent to SQS",
            route=event,
            message_id=message_id,
            queue_url=queue_url
        )

        return message_id

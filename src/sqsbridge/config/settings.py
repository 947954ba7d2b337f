"""
Module: settings.py
Description: Environment configuration using pydantic-settings.

Loads sqsbridge settings from SQSBRIDGE_* environment variables or a
.env file and converts them into a Config. The configurator itself never
reads the environment, this module is the place where that happens.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sqsbridge.models.config import Config
from sqsbridge.utils.logger import configure_logging


class Settings(BaseSettings):
    """sqsbridge settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SQSBRIDGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    # AWS settings
    aws_access_key_id: str = Field(default="", description="AWS access key id")
    aws_secret_access_key: str = Field(default="", description="AWS secret access key")
    region: str = Field(default="us-east-1", description="AWS region")
    hostname: str = Field(default="", description="Endpoint override for emulators")
    aws_account_id: str = Field(default="", description="AWS account id")

    # Topic and queue settings
    env: str = Field(default="dev", description="Environment name")
    topic_prefix: str = Field(default="", description="Topic name prefix")
    topic_arn: str = Field(default="", description="Full topic ARN")
    queue_url: str = Field(default="", description="Full queue URL")

    # Consumer settings
    visibility_timeout: int = Field(
        default=30,
        ge=0,
        le=43200,
        description="Visibility timeout in seconds"
    )
    retry_count: int = Field(default=0, description="Exponential backoff attempts")
    worker_pool: int = Field(default=30, ge=1, description="Concurrent handlers")
    extension_limit: Optional[int] = Field(
        default=None,
        ge=0,
        description="Visibility timeout extensions, unset for the default"
    )
    log_responses: bool = Field(default=True, description="Log AWS responses")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @field_validator('hostname')
    @classmethod
    def validate_hostname(cls, v: str) -> str:
        """Hostname overrides must be full HTTP/HTTPS URLs."""
        if v and not v.startswith(('http://', 'https://')):
            raise ValueError("hostname must be a valid HTTP/HTTPS URL")
        return v

    def to_config(self, **overrides) -> Config:
        """
        Build a Config from these settings.

        Also applies log_level to the package logging configuration.

        Args:
            **overrides: Config fields that replace the loaded values,
                e.g. aws_config_provider or logger

        Returns:
            Config instance
        """
        values = {
            "key": self.aws_access_key_id,
            "secret": self.aws_secret_access_key,
            "region": self.region,
            "hostname": self.hostname,
            "aws_account_id": self.aws_account_id,
            "env": self.env,
            "topic_prefix": self.topic_prefix,
            "topic_arn": self.topic_arn,
            "queue_url": self.queue_url,
            "visibility_timeout": self.visibility_timeout,
            "retry_count": self.retry_count,
            "worker_pool": self.worker_pool,
            "extension_limit": self.extension_limit,
            "log_responses": self.log_responses,
        }
        configure_logging(self.log_level)

        values.update(overrides)
        return Config(**values)

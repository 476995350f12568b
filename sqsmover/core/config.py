"""Configuration management using Pydantic Settings.

NO try-catch blocks - let Pydantic raise ValidationError if env vars are invalid.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# SQS hard limit for receive_message, delete_message_batch and send_message_batch
MAX_BATCH = 10


class SQSMoverConfig(BaseSettings):
    """Global configuration - loads from environment variables or .env file."""

    # AWS
    aws_region: str = Field(default="us-east-1", description="AWS region")
    aws_profile: str | None = Field(default=None, description="AWS profile name")
    sqs_endpoint_url: str | None = Field(default=None, description="Custom SQS endpoint (e.g. LocalStack)")

    # Dump
    dump_dir: str = Field(default="./", description="Directory for dump files")

    # Receive
    receive_wait_seconds: int = Field(default=0, ge=0, le=20, description="Long polling wait per receive call")
    visibility_timeout: int | None = Field(
        default=None, ge=0, le=43200, description="Visibility timeout override for received messages"
    )

    # Logging
    log_level: str = Field(default="WARNING", description="Root log level")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton instance
config = SQSMoverConfig()

"""
S3 Configuration

Reads object store settings from the environment and builds the boto3 client.
"""

import logging
import os
from datetime import timedelta
from typing import Optional

import boto3
from botocore.config import Config as BotoConfig

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class S3Config:
    """Object store and token settings."""

    def __init__(self):
        self.endpoint = os.getenv("ENDPOINT", "").strip()
        self.access_key_id = os.getenv("ACCESS_KEY_ID")
        self.secret_access_key = os.getenv("SECRET_ACCESS_KEY")
        # BUCKER_NAME is the legacy spelling still found in deployed .env files
        self.bucket_name = os.getenv("BUCKET_NAME") or os.getenv("BUCKER_NAME", "")
        self.secret_token = os.getenv("SECRET_TOKEN", "")
        self.use_ssl = _env_flag("USE_SSL", "true")
        self.region = os.getenv("REGION") or None

        self.presigned_url_ttl = timedelta(
            seconds=int(os.getenv("PRESIGNED_URL_TTL", 3600))
        )
        self.record_ttl_days = int(os.getenv("RECORD_TTL_DAYS", 7))
        self.auto_create_bucket = _env_flag("S3_AUTO_CREATE_BUCKET", "true")
        self.connect_timeout = float(os.getenv("S3_CONNECT_TIMEOUT", 10))
        self.read_timeout = float(os.getenv("S3_READ_TIMEOUT", 60))

        self.public_object_url_prefix = os.getenv("PUBLIC_OBJECT_URL_PREFIX") or (
            f"https://{self.bucket_name}.s3.amazonaws.com/"
        )

    @property
    def endpoint_url(self) -> Optional[str]:
        """
        Endpoint as a URL for boto3.

        MinIO-style ``host:port`` endpoints get a scheme derived from
        ``use_ssl``. An empty endpoint means the AWS default.
        """
        if not self.endpoint:
            return None
        if "://" in self.endpoint:
            return self.endpoint
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.endpoint}"


def create_s3_client(config: Optional[S3Config] = None):
    """
    Create a boto3 S3 client from configuration.

    Retries are disabled so every backend failure is reported on the first
    attempt. Custom endpoints use path-style addressing, which MinIO expects.

    Args:
        config: S3 configuration, uses default if None

    Returns:
        boto3 S3 client
    """
    if config is None:
        config = S3Config()

    boto_config = BotoConfig(
        signature_version="s3v4",
        retries={"max_attempts": 0},
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
        s3={"addressing_style": "path" if config.endpoint_url else "auto"},
    )

    client = boto3.client(
        "s3",
        endpoint_url=config.endpoint_url,
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
        region_name=config.region,
        use_ssl=config.use_ssl,
        config=boto_config,
    )
    logger.info(
        f"S3 client created (endpoint={config.endpoint_url or 'aws default'}, "
        f"region={config.region or 'default'}, bucket={config.bucket_name})"
    )
    return client

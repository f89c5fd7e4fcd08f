"""
Storage Factory

Factory for creating the object store implementation.

The application layer stays decoupled from boto3 through the
`IObjectStore` interface; this factory is the only place that picks
the concrete adapter.
"""

from typing import Optional

from sharelink.config.s3_config import S3Config, create_s3_client
from sharelink.domain.file_storage.object_store import IObjectStore
from sharelink.infrastructure.s3_object_store import S3ObjectStore


class StorageFactory:
    """Factory that returns an S3-compatible object store."""

    @staticmethod
    def create_storage(config: Optional[S3Config] = None) -> IObjectStore:
        """
        Create the S3 object store.

        Args:
            config: S3 configuration, uses default if None

        Returns:
            S3ObjectStore bound to a fresh boto3 client

        Raises:
            RuntimeError: If the boto3 client cannot be created
        """
        if config is None:
            config = S3Config()

        try:
            client = create_s3_client(config)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize S3 storage: {e}") from e

        return S3ObjectStore(client, region=config.region)

"""
Object Store Interface

Abstract interface for S3-compatible object storage operations.
This abstraction keeps the domain and application layers independent of
the concrete client library: adapters translate every backend failure into
an ObjectStoreError carrying one of the ObjectStoreErrorKind variants.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import timedelta
from typing import BinaryIO, Optional


@dataclass(frozen=True)
class StoredObject:
    """Content and metadata of an object fetched from the store."""

    content: bytes
    content_type: Optional[str] = None
    size: Optional[int] = None


class IObjectStore(ABC):
    """
    Interface for the object store collaborator.

    Contract Guarantees:
    - Every failure is raised as ObjectStoreError (or its subclass
      ObjectNotFoundError); library exceptions never escape
    - No method retries; failures surface on the first attempt
    - Calls block until the backend responds

    Thread Safety:
    - Implementations must be safe to call from concurrent request handlers
    """

    @abstractmethod
    def put_object(
        self,
        bucket: str,
        object_name: str,
        content: BinaryIO,
        size: Optional[int],
        content_type: Optional[str],
    ) -> None:
        """
        Store an object.

        Args:
            bucket: Bucket name
            object_name: Key of the object
            content: Binary stream positioned at the start of the data
            size: Length of the data in bytes, if known
            content_type: MIME type to store with the object

        Raises:
            ObjectStoreError: If the object could not be stored
        """
        pass  # pragma: no cover

    @abstractmethod
    def presigned_get_url(
        self, bucket: str, object_name: str, expiry: timedelta
    ) -> str:
        """
        Generate a presigned GET URL for an object.

        Args:
            bucket: Bucket name
            object_name: Key of the object
            expiry: Validity window of the URL

        Returns:
            Presigned URL string

        Raises:
            ObjectStoreError: If the URL could not be generated
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_object(self, bucket: str, object_name: str) -> StoredObject:
        """
        Fetch an object's content.

        Raises:
            ObjectNotFoundError: If the object does not exist
            ObjectStoreError: For any other backend failure
        """
        pass  # pragma: no cover

    @abstractmethod
    def remove_object(self, bucket: str, object_name: str) -> None:
        """
        Delete an object.

        Raises:
            ObjectNotFoundError: If the object does not exist
            ObjectStoreError: For any other backend failure
        """
        pass  # pragma: no cover

    @abstractmethod
    def bucket_exists(self, bucket: str) -> bool:
        """
        Check whether a bucket exists.

        Returns:
            True if the bucket exists, False if it does not

        Raises:
            ObjectStoreError: If existence could not be determined
        """
        pass  # pragma: no cover

    @abstractmethod
    def make_bucket(self, bucket: str) -> None:
        """
        Create a bucket.

        Raises:
            ObjectStoreError: If the bucket could not be created
        """
        pass  # pragma: no cover

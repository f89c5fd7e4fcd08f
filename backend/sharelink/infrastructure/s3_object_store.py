"""
S3 Object Store Implementation

Concrete implementation of IObjectStore for S3-compatible storage
(AWS S3, MinIO, ...). Uses boto3 for all operations and translates
botocore errors into the domain's ObjectStoreError variants so the rest
of the application never inspects botocore error shapes.
"""

import logging
from datetime import timedelta
from typing import BinaryIO, Optional

from botocore.exceptions import BotoCoreError, ClientError

from sharelink.domain.errors import (
    ObjectNotFoundError,
    ObjectStoreError,
    ObjectStoreErrorKind,
)
from sharelink.domain.file_storage.object_store import IObjectStore, StoredObject

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {"404", "NoSuchKey", "NoSuchBucket", "NotFound"}
UNAUTHORIZED_CODES = {
    "403",
    "AccessDenied",
    "Forbidden",
    "InvalidAccessKeyId",
    "SignatureDoesNotMatch",
    "ExpiredToken",
}


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def classify_error(error: Exception) -> ObjectStoreErrorKind:
    """
    Map a boto3/botocore exception to an ObjectStoreErrorKind.

    Args:
        error: Exception raised by the boto3 client

    Returns:
        NOT_FOUND, UNAUTHORIZED or INTERNAL
    """
    if isinstance(error, ClientError):
        code = _error_code(error)
        if code in NOT_FOUND_CODES:
            return ObjectStoreErrorKind.NOT_FOUND
        if code in UNAUTHORIZED_CODES:
            return ObjectStoreErrorKind.UNAUTHORIZED
    return ObjectStoreErrorKind.INTERNAL


def translate_error(error: Exception, message: str) -> ObjectStoreError:
    """Wrap a boto3/botocore exception in the matching domain error."""
    kind = classify_error(error)
    if kind is ObjectStoreErrorKind.NOT_FOUND:
        return ObjectNotFoundError(f"{message}: {error}", original_error=error)
    return ObjectStoreError(f"{message}: {error}", kind=kind, original_error=error)


class S3ObjectStore(IObjectStore):
    """
    boto3 implementation of IObjectStore.

    Thread Safety:
        boto3 low-level clients are thread-safe, so a single instance is
        shared by all request handlers.

    Attributes:
        client: boto3 S3 client
        region: Region used for bucket creation (None for the default)
    """

    def __init__(self, client, region: Optional[str] = None):
        """
        Initialize the S3 object store.

        Args:
            client: boto3 S3 client (see sharelink.config.s3_config.create_s3_client)
            region: Region used as LocationConstraint when creating buckets
        """
        self.client = client
        self.region = region

    def put_object(
        self,
        bucket: str,
        object_name: str,
        content: BinaryIO,
        size: Optional[int],
        content_type: Optional[str],
    ) -> None:
        params = {"Bucket": bucket, "Key": object_name, "Body": content}
        if size is not None:
            params["ContentLength"] = size
        if content_type:
            params["ContentType"] = content_type

        try:
            self.client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, f"Failed to store {object_name}") from e

        logger.info(f"Stored object {object_name} in bucket {bucket}")

    def presigned_get_url(
        self, bucket: str, object_name: str, expiry: timedelta
    ) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": bucket, "Key": object_name},
                ExpiresIn=int(expiry.total_seconds()),
            )
        except (ClientError, BotoCoreError) as e:
            raise translate_error(
                e, f"Failed to generate presigned URL for {object_name}"
            ) from e

    def get_object(self, bucket: str, object_name: str) -> StoredObject:
        try:
            response = self.client.get_object(Bucket=bucket, Key=object_name)
            body = response["Body"]
            try:
                content = body.read()
            finally:
                body.close()
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, f"Failed to fetch {object_name}") from e

        return StoredObject(
            content=content,
            content_type=response.get("ContentType"),
            size=response.get("ContentLength", len(content)),
        )

    def remove_object(self, bucket: str, object_name: str) -> None:
        # DeleteObject succeeds for missing keys, so probe first to report not-found
        try:
            self.client.head_object(Bucket=bucket, Key=object_name)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, f"Failed to stat {object_name}") from e

        try:
            self.client.delete_object(Bucket=bucket, Key=object_name)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, f"Failed to delete {object_name}") from e

        logger.info(f"Deleted object {object_name} from bucket {bucket}")

    def bucket_exists(self, bucket: str) -> bool:
        try:
            self.client.head_bucket(Bucket=bucket)
            return True
        except ClientError as e:
            if classify_error(e) is ObjectStoreErrorKind.NOT_FOUND:
                return False
            raise translate_error(e, f"Failed to check bucket {bucket}") from e
        except BotoCoreError as e:
            raise translate_error(e, f"Failed to check bucket {bucket}") from e

    def make_bucket(self, bucket: str) -> None:
        params = {"Bucket": bucket}
        # us-east-1 rejects an explicit LocationConstraint
        if self.region and self.region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}

        try:
            self.client.create_bucket(**params)
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, f"Failed to create bucket {bucket}") from e

        logger.info(f"Successfully created bucket: {bucket}")

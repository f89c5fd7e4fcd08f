"""
File Share Application Service

Coordinates upload, download-link, delete and bucket use cases on top of
the token authority, the file registry and the object store.
"""

import logging
from datetime import timedelta
from typing import Iterable, List, Optional
from urllib.parse import unquote

from sharelink.application.results import DownloadLink, UploadFile, UploadResult
from sharelink.domain.errors import (
    BatchUploadError,
    DomainError,
    InvalidLinkError,
    InvalidTokenError,
    ObjectNotFoundError,
    ObjectStoreError,
)
from sharelink.domain.file_storage.entities import DEFAULT_RECORD_TTL_DAYS
from sharelink.domain.file_storage import (
    FileRecord,
    FileRegistry,
    IObjectStore,
    ObjectName,
    StoredObject,
    TokenAuthority,
)

logger = logging.getLogger(__name__)

DEFAULT_PRESIGNED_URL_TTL = timedelta(hours=1)


def _short(token: str) -> str:
    return f"{token[:8]}..." if token else "<empty>"


class FileShareService:
    """
    Application service for token-gated file sharing.

    Every operation that targets an existing object verifies the presented
    token first and makes no object store call when verification fails.
    No operation retries a failed backend call.
    """

    def __init__(
        self,
        object_store: IObjectStore,
        registry: FileRegistry,
        token_authority: TokenAuthority,
        bucket_name: str,
        presigned_url_ttl: timedelta = DEFAULT_PRESIGNED_URL_TTL,
        record_ttl_days: int = DEFAULT_RECORD_TTL_DAYS,
        public_url_prefix: Optional[str] = None,
    ):
        """
        Initialize FileShareService.

        Args:
            object_store: Object store adapter
            registry: Token -> FileRecord registry
            token_authority: Token derivation and verification
            bucket_name: Bucket all objects are stored in
            presigned_url_ttl: Validity window of every presigned URL
            record_ttl_days: Informational expiry of registry records
            public_url_prefix: Prefix of public object URLs accepted by view_file
                (defaults to the AWS virtual-hosted URL of the bucket)
        """
        self.object_store = object_store
        self.registry = registry
        self.token_authority = token_authority
        self.bucket_name = bucket_name
        self.presigned_url_ttl = presigned_url_ttl
        self.record_ttl_days = record_ttl_days
        self.public_url_prefix = public_url_prefix or (
            f"https://{bucket_name}.s3.amazonaws.com/"
        )

    def upload_files(self, files: Iterable[UploadFile]) -> List[UploadResult]:
        """
        Upload a batch of files.

        Items are processed in order. The first failure aborts the batch:
        remaining files are not attempted and already stored objects are
        kept.

        Args:
            files: Files to upload

        Returns:
            One UploadResult per file

        Raises:
            BatchUploadError: If any item fails; ``completed`` holds the
                results of the items stored before it
        """
        results: List[UploadResult] = []
        for upload in files:
            try:
                results.append(self.upload_file(upload))
            except DomainError as e:
                logger.error(
                    f"Upload of {upload.filename!r} failed after "
                    f"{len(results)} stored file(s): {e}"
                )
                raise BatchUploadError(
                    f"Upload of {upload.filename!r} failed: {e}",
                    completed=results,
                    failed_filename=upload.filename,
                    original_error=e,
                ) from e
        return results

    def upload_file(self, upload: UploadFile) -> UploadResult:
        """
        Store one file and issue its access token and presigned URL.

        Args:
            upload: File to upload

        Returns:
            UploadResult with the generated object name, token and URL

        Raises:
            ObjectStoreError: If storing or presigning fails
            ConfigurationError: If no token secret is configured
        """
        object_name = str(ObjectName.generate())

        self.object_store.put_object(
            self.bucket_name,
            object_name,
            upload.stream,
            upload.size,
            upload.content_type,
        )

        token = self.token_authority.derive_token(object_name)
        url = self.object_store.presigned_get_url(
            self.bucket_name, object_name, self.presigned_url_ttl
        )

        record = FileRecord.create(
            object_name,
            original_filename=upload.filename,
            content_type=upload.content_type,
            size=upload.size,
            ttl_days=self.record_ttl_days,
        )
        self.registry.record_upload(token, record)

        logger.info(
            f"Uploaded {upload.filename!r} as {object_name} (token={_short(token)})"
        )
        return UploadResult(status=200, token=token, file_name=object_name, url=url)

    def generate_download_url(self, object_name: str, token: str) -> DownloadLink:
        """
        Issue a fresh presigned URL for a verified object.

        Args:
            object_name: Claimed object name
            token: Presented access token

        Returns:
            DownloadLink with a URL valid for ``presigned_url_ttl``

        Raises:
            InvalidTokenError: If the token does not match
            ObjectStoreError: If presigning fails
            ConfigurationError: If no token secret is configured
        """
        self._verify(object_name, token)

        url = self.object_store.presigned_get_url(
            self.bucket_name, object_name, self.presigned_url_ttl
        )
        return DownloadLink(status=200, url=url)

    def delete_file(self, object_name: str, token: str) -> None:
        """
        Delete a verified object and its registry records.

        Args:
            object_name: Claimed object name
            token: Presented access token

        Raises:
            InvalidTokenError: If the token does not match
            ObjectNotFoundError: If the object does not exist
            ObjectStoreError: For any other backend failure
            ConfigurationError: If no token secret is configured
        """
        self._verify(object_name, token)

        try:
            self.object_store.remove_object(self.bucket_name, object_name)
        except ObjectNotFoundError:
            logger.warning(f"Delete requested for missing object {object_name}")
            raise

        removed = self.registry.remove_by_object_name(object_name)
        logger.info(f"Deleted {object_name} ({removed} registry record(s) removed)")

    def ensure_bucket(self) -> bool:
        """
        Create the configured bucket if it does not exist.

        Returns:
            True if the bucket was created, False if it already existed

        Raises:
            ObjectStoreError: If the bucket could not be checked or created
        """
        if self.object_store.bucket_exists(self.bucket_name):
            logger.info(f"Bucket {self.bucket_name} already exists")
            return False

        try:
            self.object_store.make_bucket(self.bucket_name)
        except ObjectStoreError:
            # Another caller may have created it between the check and the create
            if self.object_store.bucket_exists(self.bucket_name):
                logger.info(f"Bucket {self.bucket_name} already exists")
                return False
            raise

        logger.info(f"Successfully created bucket: {self.bucket_name}")
        return True

    def bucket_available(self) -> bool:
        """Return True when the configured bucket can be reached."""
        try:
            return self.object_store.bucket_exists(self.bucket_name)
        except ObjectStoreError as e:
            logger.warning(f"Bucket check failed for {self.bucket_name}: {e}")
            return False

    def view_file(self, link: str) -> StoredObject:
        """
        Fetch the object a public object URL points to.

        Args:
            link: Public object URL supplied by the client

        Returns:
            StoredObject with the object's content

        Raises:
            InvalidLinkError: If the link is outside the prefix
            ObjectNotFoundError: If the object does not exist
            ObjectStoreError: For any other backend failure
        """
        if not link or not link.startswith(self.public_url_prefix):
            raise InvalidLinkError(f"Invalid file link: {link!r}")

        # Presigned URLs carry the signature in the query string
        object_name = unquote(link[len(self.public_url_prefix):].split("?", 1)[0])
        if not object_name:
            raise InvalidLinkError(f"Invalid file link: {link!r}")

        return self.object_store.get_object(self.bucket_name, object_name)

    def _verify(self, object_name: str, token: str) -> None:
        if not self.token_authority.verify_token(object_name, token):
            logger.warning(
                f"Rejected token {_short(token)} for object {object_name}"
            )
            raise InvalidTokenError(f"invalid token for {object_name}")

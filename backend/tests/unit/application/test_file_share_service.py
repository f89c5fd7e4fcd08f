"""
Unit tests for FileShareService.
"""

import re
from datetime import timedelta
from io import BytesIO

import pytest

from sharelink.application.file_share_service import FileShareService
from sharelink.domain.errors import (
    BatchUploadError,
    ConfigurationError,
    InvalidLinkError,
    InvalidTokenError,
    ObjectNotFoundError,
    ObjectStoreError,
    ObjectStoreErrorKind,
)
from sharelink.domain.file_storage import TokenAuthority, derive_token, verify_token
from tests.fixtures.mock_repositories import MockObjectStore, make_upload

GENERATED_NAME = re.compile(
    r"^[0-9a-f]{32}-[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)


class TestUpload:
    def test_upload_issues_verifiable_token(self, file_share_service, secret):
        result = file_share_service.upload_file(make_upload())

        assert result.status == 200
        assert GENERATED_NAME.match(result.file_name)
        assert verify_token(secret, result.file_name, result.token) is True
        assert result.token == derive_token(secret, result.file_name)

    def test_upload_stores_content_under_generated_name(
        self, file_share_service, object_store, bucket_name
    ):
        result = file_share_service.upload_file(make_upload(content=b"payload"))

        assert object_store.objects(bucket_name) == {result.file_name: b"payload"}

    def test_upload_url_is_presigned_for_one_hour(self, file_share_service):
        result = file_share_service.upload_file(make_upload())

        assert result.file_name in result.url
        assert result.url.endswith("X-Amz-Expires=3600")

    def test_upload_records_registry_entry(self, file_share_service, registry):
        result = file_share_service.upload_file(make_upload(filename="report.pdf"))

        record = registry.get_by_token(result.token)
        assert record is not None
        assert record.object_name == result.file_name
        assert record.original_filename == "report.pdf"
        assert record.expires_at - record.created_at == timedelta(days=7)

    def test_same_content_gets_distinct_names(self, file_share_service):
        first = file_share_service.upload_file(make_upload())
        second = file_share_service.upload_file(make_upload())

        assert first.file_name != second.file_name
        assert first.token != second.token

    def test_batch_returns_one_result_per_file(self, file_share_service):
        results = file_share_service.upload_files(
            [make_upload("a.txt"), make_upload("b.txt"), make_upload("c.txt")]
        )

        assert len(results) == 3
        assert len({r.file_name for r in results}) == 3

    def test_batch_stops_at_first_failure(
        self, file_share_service, object_store, registry, bucket_name
    ):
        object_store.fail_put_on_call = 2

        with pytest.raises(BatchUploadError) as exc_info:
            file_share_service.upload_files(
                [make_upload("a.txt"), make_upload("b.txt"), make_upload("c.txt")]
            )

        error = exc_info.value
        assert len(error.completed) == 1
        assert error.failed_filename == "b.txt"
        assert isinstance(error.original_error, ObjectStoreError)
        assert len(object_store.calls_to("put_object")) == 2
        # the first object is kept
        assert list(object_store.objects(bucket_name)) == [error.completed[0].file_name]
        assert len(registry) == 1

    def test_upload_without_secret_fails_batch(self, object_store, registry, bucket_name):
        service = FileShareService(
            object_store, registry, TokenAuthority(""), bucket_name
        )

        with pytest.raises(BatchUploadError) as exc_info:
            service.upload_files([make_upload()])

        assert isinstance(exc_info.value.original_error, ConfigurationError)
        assert len(registry) == 0


class TestDownloadUrl:
    def test_valid_token_returns_fresh_url(self, file_share_service):
        uploaded = file_share_service.upload_file(make_upload())

        link = file_share_service.generate_download_url(uploaded.file_name, uploaded.token)

        assert link.status == 200
        assert uploaded.file_name in link.url

    def test_tampered_token_makes_no_backend_call(self, file_share_service, object_store):
        uploaded = file_share_service.upload_file(make_upload())
        tampered = ("0" if uploaded.token[0] != "0" else "1") + uploaded.token[1:]
        calls_before = object_store.call_count

        with pytest.raises(InvalidTokenError):
            file_share_service.generate_download_url(uploaded.file_name, tampered)

        assert object_store.call_count == calls_before

    def test_token_for_other_object_rejected(self, file_share_service):
        first = file_share_service.upload_file(make_upload())
        second = file_share_service.upload_file(make_upload())

        with pytest.raises(InvalidTokenError):
            file_share_service.generate_download_url(first.file_name, second.token)

    def test_unknown_name_with_matching_token_is_presigned(self, file_share_service, secret):
        # Verification is stateless; existence is not checked before presigning
        token = derive_token(secret, "never-uploaded")

        link = file_share_service.generate_download_url("never-uploaded", token)

        assert "never-uploaded" in link.url

    def test_missing_secret_raises_configuration_error(self, object_store, registry, bucket_name):
        service = FileShareService(
            object_store, registry, TokenAuthority(""), bucket_name
        )

        with pytest.raises(ConfigurationError):
            service.generate_download_url("name", "a" * 64)


class TestDelete:
    def test_delete_removes_object_and_records(
        self, file_share_service, object_store, registry, bucket_name
    ):
        uploaded = file_share_service.upload_file(make_upload())

        file_share_service.delete_file(uploaded.file_name, uploaded.token)

        assert object_store.objects(bucket_name) == {}
        assert registry.get_by_token(uploaded.token) is None
        assert len(registry) == 0

    def test_delete_never_uploaded_reports_not_found(self, file_share_service, secret):
        token = derive_token(secret, "never-uploaded")

        with pytest.raises(ObjectNotFoundError):
            file_share_service.delete_file("never-uploaded", token)

    def test_delete_twice_reports_not_found(self, file_share_service):
        uploaded = file_share_service.upload_file(make_upload())
        file_share_service.delete_file(uploaded.file_name, uploaded.token)

        with pytest.raises(ObjectNotFoundError):
            file_share_service.delete_file(uploaded.file_name, uploaded.token)

    def test_delete_with_bad_token_keeps_object(
        self, file_share_service, object_store, bucket_name
    ):
        uploaded = file_share_service.upload_file(make_upload())
        calls_before = object_store.call_count

        with pytest.raises(InvalidTokenError):
            file_share_service.delete_file(uploaded.file_name, "f" * 64)

        assert object_store.call_count == calls_before
        assert uploaded.file_name in object_store.objects(bucket_name)

    def test_backend_failure_keeps_registry(self, file_share_service, object_store, registry):
        uploaded = file_share_service.upload_file(make_upload())
        object_store.failures["remove_object"] = ObjectStoreError("boom")

        with pytest.raises(ObjectStoreError):
            file_share_service.delete_file(uploaded.file_name, uploaded.token)

        assert registry.get_by_token(uploaded.token) is not None


class TestBucket:
    def test_ensure_bucket_creates_missing_bucket(self, registry, token_authority):
        store = MockObjectStore()
        service = FileShareService(store, registry, token_authority, "fresh")

        assert service.ensure_bucket() is True
        assert store.bucket_exists("fresh") is True

    def test_ensure_bucket_is_idempotent(self, file_share_service, object_store):
        assert file_share_service.ensure_bucket() is False
        assert object_store.calls_to("make_bucket") == []

    def test_ensure_bucket_tolerates_concurrent_creation(
        self, file_share_service, object_store, bucket_name
    ):
        answers = iter([False, True])
        object_store.bucket_exists = lambda bucket: next(answers)

        assert file_share_service.ensure_bucket() is False

    def test_ensure_bucket_propagates_failure(self, registry, token_authority):
        store = MockObjectStore()
        store.failures["make_bucket"] = ObjectStoreError(
            "access denied", ObjectStoreErrorKind.UNAUTHORIZED
        )
        service = FileShareService(store, registry, token_authority, "fresh")

        with pytest.raises(ObjectStoreError) as exc_info:
            service.ensure_bucket()

        assert exc_info.value.kind is ObjectStoreErrorKind.UNAUTHORIZED

    def test_bucket_available_swallows_backend_errors(self, file_share_service, object_store):
        object_store.failures["bucket_exists"] = ObjectStoreError("down")

        assert file_share_service.bucket_available() is False


class TestViewFile:
    def test_returns_object_content(self, file_share_service, bucket_name):
        uploaded = file_share_service.upload_file(make_upload(content=b"hi there"))
        link = f"https://{bucket_name}.s3.amazonaws.com/{uploaded.file_name}"

        stored = file_share_service.view_file(link)

        assert stored.content == b"hi there"
        assert stored.content_type == "text/plain"

    @pytest.mark.parametrize(
        "link",
        ["", "https://evil.example.com/file", "https://test-bucket.s3.amazonaws.com/"],
    )
    def test_rejects_links_outside_prefix(self, file_share_service, object_store, link):
        with pytest.raises(InvalidLinkError):
            file_share_service.view_file(link)

        assert object_store.calls_to("get_object") == []

    def test_missing_object(self, file_share_service, bucket_name):
        with pytest.raises(ObjectNotFoundError):
            file_share_service.view_file(f"https://{bucket_name}.s3.amazonaws.com/nope")

    def test_presigned_link_query_is_ignored(self, file_share_service, bucket_name):
        uploaded = file_share_service.upload_file(make_upload(content=b"signed"))
        link = (
            f"https://{bucket_name}.s3.amazonaws.com/{uploaded.file_name}"
            "?X-Amz-Algorithm=AWS4-HMAC-SHA256&X-Amz-Expires=3600"
        )

        assert file_share_service.view_file(link).content == b"signed"

    def test_percent_encoded_name_is_decoded(
        self, file_share_service, object_store, bucket_name
    ):
        object_store.put_object(bucket_name, "my report.txt", BytesIO(b"r"), 1, None)

        stored = file_share_service.view_file(
            f"https://{bucket_name}.s3.amazonaws.com/my%20report.txt"
        )

        assert stored.content == b"r"

    def test_custom_prefix(self, object_store, registry, token_authority, bucket_name):
        service = FileShareService(
            object_store,
            registry,
            token_authority,
            bucket_name,
            public_url_prefix="https://cdn.example.com/",
        )
        uploaded = service.upload_file(make_upload(content=b"x"))

        assert service.view_file(f"https://cdn.example.com/{uploaded.file_name}").content == b"x"

"""
API Namespaces - Organized endpoint groups
"""

from typing import List, Optional

from flask import Response, current_app, request
from flask_restx import Namespace, Resource

from sharelink.api.models import (
    download_link,
    error_response,
    upload_parser,
    upload_result,
    view_file_parser,
)
from sharelink.application.file_share_service import FileShareService
from sharelink.application.results import UploadFile, UploadResult
from sharelink.domain.errors import (
    BatchUploadError,
    ConfigurationError,
    ErrorCategory,
    InvalidLinkError,
    InvalidTokenError,
    ObjectNotFoundError,
    ObjectStoreError,
    create_error_response,
)


def _get_service() -> Optional[FileShareService]:
    container = getattr(current_app, "container", None)
    if container is None or not container.is_registered(FileShareService):
        return None
    return container.resolve(FileShareService)


def _service_unavailable():
    return create_error_response(
        ErrorCategory.SYSTEM_ERROR,
        "File share service not initialized",
        status_code=503,
    )


def _status_only(status_code: int) -> Response:
    return Response(status=status_code)


def _text(body: str, status_code: int = 200) -> Response:
    return Response(body, status=status_code, mimetype="text/plain")


def _stream_size(stream) -> Optional[int]:
    """Measure a seekable stream and rewind it."""
    try:
        stream.seek(0, 2)
        size = stream.tell()
        stream.seek(0)
        return size
    except (AttributeError, OSError):
        return None


def _collect_uploads() -> List[UploadFile]:
    uploads = []
    for storage in request.files.getlist("file"):
        uploads.append(
            UploadFile(
                filename=storage.filename or "",
                stream=storage.stream,
                content_type=storage.content_type,
                size=_stream_size(storage.stream),
            )
        )
    return uploads


# =============================================================================
# File Namespace - Upload, download link and delete operations
# =============================================================================

file_ns = Namespace("files", description="File upload and sharing operations")


@file_ns.route("/upload")
class Upload(Resource):
    """Upload files"""

    @file_ns.doc("upload_files")
    @file_ns.expect(upload_parser)
    @file_ns.response(200, "Success", [upload_result])
    @file_ns.response(400, "Bad Request", error_response)
    @file_ns.response(500, "Partial failure", [upload_result])
    def post(self):
        """
        Upload one or more files

        Each multipart `file` part is stored under a generated object name and
        returned with its access token and a presigned URL valid for one hour.
        The first failing file aborts the rest of the batch: the response is a
        500 listing the files stored before it, then the failed file with
        status 500 and an empty token. Later files are not attempted.
        """
        service = _get_service()
        if service is None:
            return _service_unavailable()

        uploads = _collect_uploads()
        if not uploads:
            return create_error_response(
                ErrorCategory.INVALID_REQUEST,
                "Missing 'file' in multipart form",
                status_code=400,
            )

        try:
            results = service.upload_files(uploads)
            return [result.to_dict() for result in results], 200

        except BatchUploadError as e:
            stored = [result.file_name for result in e.completed]
            if isinstance(e.original_error, ConfigurationError):
                current_app.logger.error(f"Token secret not configured: {e.original_error}")
            current_app.logger.error(
                f"Batch upload aborted at {e.failed_filename!r}; already stored: {stored}"
            )
            # Stored files keep their tokens; the failed file is reported in place
            results = list(e.completed) + [UploadResult.failure(e.failed_filename or "")]
            return [result.to_dict() for result in results], 500
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /upload: {str(e)}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                f"Unexpected error: {str(e)}",
                status_code=500,
            )


@file_ns.route("/download/<string:filename>/<string:token>")
@file_ns.param("filename", "The stored object name")
@file_ns.param("token", "The access token issued at upload")
class Download(Resource):
    """Generate a download link"""

    @file_ns.doc("generate_download_url")
    @file_ns.response(200, "Success", download_link)
    @file_ns.response(401, "Invalid Token", error_response)
    @file_ns.response(500, "Internal Server Error", error_response)
    def get(self, filename, token):
        """
        Get a fresh presigned URL for a stored file

        The token is re-derived from the object name and compared; a mismatch
        is rejected without contacting the object store.
        """
        service = _get_service()
        if service is None:
            return _service_unavailable()

        try:
            link = service.generate_download_url(filename, token)
            return link.to_dict(), 200

        except InvalidTokenError as e:
            return create_error_response(
                ErrorCategory.INVALID_TOKEN, str(e), status_code=401
            )
        except ConfigurationError as e:
            current_app.logger.error(f"Token secret not configured: {e}")
            return create_error_response(
                ErrorCategory.CONFIGURATION_ERROR, str(e), status_code=500
            )
        except ObjectStoreError as e:
            current_app.logger.error(f"Presign failed for {filename}: {e}")
            return create_error_response(
                ErrorCategory.STORAGE_ERROR, str(e), status_code=500
            )
        except Exception as e:
            current_app.logger.exception(
                f"Unexpected error generating download URL for {filename}: {str(e)}"
            )
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                f"Unexpected error: {str(e)}",
                status_code=500,
            )


@file_ns.route("/delete/<string:filename>/<string:token>")
@file_ns.param("filename", "The stored object name")
@file_ns.param("token", "The access token issued at upload")
class Delete(Resource):
    """Delete a stored file"""

    @file_ns.doc("delete_file")
    @file_ns.response(200, "File deleted")
    @file_ns.response(401, "Invalid Token")
    @file_ns.response(404, "File Not Found")
    @file_ns.response(500, "Internal Server Error")
    def delete(self, filename, token):
        """
        Delete a stored file

        Responds with a status code only.
        """
        service = _get_service()
        if service is None:
            return _status_only(503)

        try:
            service.delete_file(filename, token)
            return _status_only(200)

        except InvalidTokenError:
            return _status_only(401)
        except ObjectNotFoundError:
            return _status_only(404)
        except (ConfigurationError, ObjectStoreError) as e:
            current_app.logger.error(f"Delete failed for {filename}: {e}")
            return _status_only(500)
        except Exception as e:
            current_app.logger.exception(f"Unexpected error deleting {filename}: {str(e)}")
            return _status_only(500)


@file_ns.route("/view-file")
class ViewFile(Resource):
    """Proxy a stored file's content"""

    @file_ns.doc("view_file")
    @file_ns.expect(view_file_parser)
    @file_ns.response(200, "File content")
    @file_ns.response(400, "Invalid file link")
    @file_ns.response(404, "File Not Found", error_response)
    @file_ns.response(500, "Internal Server Error", error_response)
    def get(self):
        """
        Return the content of the object a public object URL points to

        The link must start with the bucket's public object URL prefix.
        """
        service = _get_service()
        if service is None:
            return _service_unavailable()

        link = request.args.get("link", "")

        try:
            stored = service.view_file(link)
        except InvalidLinkError:
            return {"error": "Invalid file link"}, 400
        except ObjectNotFoundError as e:
            return create_error_response(
                ErrorCategory.FILE_NOT_FOUND, str(e), status_code=404
            )
        except ObjectStoreError as e:
            current_app.logger.error(f"Fetching {link!r} failed: {e}")
            return create_error_response(
                ErrorCategory.STORAGE_ERROR, str(e), status_code=500
            )
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /view-file: {str(e)}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR,
                f"Unexpected error: {str(e)}",
                status_code=500,
            )

        return Response(
            stored.content,
            status=200,
            mimetype=stored.content_type or "application/octet-stream",
        )


# =============================================================================
# Bucket Namespace - Bucket management
# =============================================================================

bucket_ns = Namespace("buckets", description="Bucket management operations")


@bucket_ns.route("/create-bucket")
class CreateBucket(Resource):
    """Create the configured bucket"""

    @bucket_ns.doc("create_bucket")
    @bucket_ns.response(200, "Bucket created or already exists")
    @bucket_ns.response(500, "Internal Server Error")
    def post(self):
        """
        Create the configured bucket if it does not exist

        Idempotent; responds with a plain-text confirmation.
        """
        service = _get_service()
        if service is None:
            return _text("File share service not initialized", 503)

        try:
            created = service.ensure_bucket()
        except ObjectStoreError as e:
            current_app.logger.error(f"Bucket creation failed: {e}")
            return _text(str(e), 500)

        return _text("Bucket created" if created else "Bucket already exists")

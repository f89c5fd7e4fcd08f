"""
API Models for request/response validation and Swagger documentation
"""

from flask_restx import fields, reqparse
from werkzeug.datastructures import FileStorage

from sharelink.api import api

# =============================================================================
# Request Parsers
# =============================================================================

upload_parser = reqparse.RequestParser()
upload_parser.add_argument(
    "file",
    location="files",
    type=FileStorage,
    required=True,
    action="append",
    help="One or more files to upload",
)

view_file_parser = reqparse.RequestParser()
view_file_parser.add_argument(
    "link",
    location="args",
    type=str,
    required=True,
    help="Public object URL returned for a stored file",
)

# =============================================================================
# Response Models
# =============================================================================

upload_result = api.model(
    "UploadResult",
    {
        "status": fields.Integer(description="HTTP status of this file's upload", example=200),
        "token": fields.String(
            description="Access token for the stored object (hex HMAC-SHA256)"
        ),
        "file_name": fields.String(
            description="Generated object name in the bucket",
            example="9f86d081884c7d659a2feaa0c55ad015-3b241101-e2bb-4255-8caf-4136c566a962",
        ),
        "url": fields.String(description="Presigned download URL"),
    },
)

download_link = api.model(
    "DownloadLink",
    {
        "status": fields.Integer(description="HTTP status", example=200),
        "url": fields.String(description="Freshly presigned download URL"),
    },
)

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Short error title"),
        "message": fields.String(description="User-facing error message"),
        "action": fields.String(description="Suggested action"),
    },
)

"""
ShareLink REST API

Token-gated file sharing endpoints with OpenAPI/Swagger documentation.
Routes are mounted at the application root for compatibility with
existing clients (POST /upload, GET /download/..., DELETE /delete/...).
"""

from flask import Blueprint
from flask_restx import Api

api_bp = Blueprint("api", __name__)

# Initialize Flask-RESTX API with Swagger documentation
api = Api(
    api_bp,
    version="1.0",
    title="ShareLink API",
    description="Upload files to S3-compatible storage and share them through token-gated presigned links",
    doc="/docs",  # Swagger UI will be available at /docs
    license="MIT",
    # Upload is intentionally unauthenticated; access control is per-object tokens
)

# Import namespaces after api is created to avoid circular imports
from .namespaces import bucket_ns, file_ns  # noqa: E402

# Register namespaces
api.add_namespace(file_ns, path="/")
api.add_namespace(bucket_ns, path="/")

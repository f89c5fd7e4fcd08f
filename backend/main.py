"""
main.py

Flask gateway for token-gated file sharing on S3-compatible storage.

Dependencies:
  - Python packages: Flask, flask-restx, flask-cors, boto3
  - Infrastructure: S3-compatible object store (AWS S3, MinIO, ...)

Notes:
  - Endpoints: POST /upload, GET /download/<file>/<token>,
    DELETE /delete/<file>/<token>, POST /create-bucket, GET /view-file
  - Swagger docs at /docs
  - Uses application factory pattern for better testability
"""

import os

from app_factory import create_app

app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", 3000))
    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    # Threaded so slow object store calls don't block other requests
    app.run(host=host, port=port, debug=debug, threaded=True)

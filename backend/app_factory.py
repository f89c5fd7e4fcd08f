"""
Application Factory

Creates and configures Flask application with all dependencies.
This factory pattern improves testability by allowing dependency injection
and configuration overrides.
"""

import logging
import os
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from sharelink.application.dependency_container import DependencyContainer
from sharelink.application.file_share_service import FileShareService
from sharelink.config.s3_config import S3Config
from sharelink.domain.errors import ObjectStoreError
from sharelink.domain.file_storage import FileRegistry, IObjectStore, TokenAuthority
from sharelink.infrastructure.in_memory_file_registry import InMemoryFileRegistry
from sharelink.infrastructure.storage_factory import StorageFactory

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class AppConfig:
    """Application configuration."""

    def __init__(self, s3: Optional[S3Config] = None):
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

        self.s3 = s3 or S3Config()


def configure_logging(level: str = "INFO") -> None:
    """
    Configure root logging once per process.

    Args:
        level: Logging level name (e.g. "DEBUG", "INFO")
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(getattr(logging, level, logging.INFO))

    # botocore is very chatty at DEBUG
    logging.getLogger("botocore").setLevel(logging.WARNING)


def create_app(
    config: Optional[AppConfig] = None,
    object_store: Optional[IObjectStore] = None,
) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Application configuration, uses default if None
        object_store: Object store adapter, created from config if None

    Returns:
        Configured Flask application
    """
    if config is None:
        config = AppConfig()

    configure_logging(config.log_level)

    # Create Flask app
    app = Flask(__name__)

    # Configure CORS
    CORS(
        app,
        resources={
            r"/*": {
                "origins": "*",
                "methods": ["GET", "POST", "DELETE", "OPTIONS"],
                "allow_headers": ["Content-Type", "Authorization"],
                "max_age": 3600,
            }
        },
    )

    # Initialize infrastructure
    object_store = _initialize_infrastructure(config, object_store)

    # Initialize services
    _initialize_services(app, config, object_store)

    # Register blueprints
    _register_blueprints(app)

    # Register health check endpoint
    _register_health_endpoint(app)

    return app


def _initialize_infrastructure(
    config: AppConfig, object_store: Optional[IObjectStore]
) -> IObjectStore:
    """
    Initialize the object store.

    Args:
        config: Application configuration
        object_store: Pre-built adapter (tests), or None to build one

    Returns:
        Object store adapter
    """
    if object_store is None:
        object_store = StorageFactory.create_storage(config.s3)
        logger.info("S3 object store initialized successfully")

    if not config.s3.bucket_name:
        logger.warning("BUCKET_NAME not set, object operations will fail")
    if not config.s3.secret_token:
        logger.warning("SECRET_TOKEN not set, token issuing and verification will fail")

    return object_store


def _initialize_services(
    app: Flask, config: AppConfig, object_store: IObjectStore
) -> None:
    """
    Initialize application services and attach to app context using DependencyContainer.

    The registry is created here, once per application, and injected into
    the service; it is never held as module-level state.

    Args:
        app: Flask application
        config: Application configuration
        object_store: Object store adapter
    """
    container = DependencyContainer()

    registry = InMemoryFileRegistry()
    token_authority = TokenAuthority(config.s3.secret_token)

    container.register_singleton(IObjectStore, object_store)
    container.register_singleton(FileRegistry, registry)
    container.register_singleton(TokenAuthority, token_authority)

    file_share_service = FileShareService(
        object_store,
        registry,
        token_authority,
        config.s3.bucket_name,
        presigned_url_ttl=config.s3.presigned_url_ttl,
        record_ttl_days=config.s3.record_ttl_days,
        public_url_prefix=config.s3.public_object_url_prefix,
    )
    container.register_singleton(FileShareService, file_share_service)

    if config.s3.auto_create_bucket and config.s3.bucket_name:
        try:
            file_share_service.ensure_bucket()
        except ObjectStoreError as e:
            logger.warning(f"Could not ensure bucket {config.s3.bucket_name}: {e}")

    # Attach container to Flask app context
    app.container = container

    logger.info("Application services initialized successfully with DependencyContainer")


def _register_blueprints(app: Flask) -> None:
    """
    Register API blueprints.

    Args:
        app: Flask application
    """
    from sharelink.api import api_bp

    app.register_blueprint(api_bp)

    logger.info("API registered at / with Swagger UI at /docs")


def _get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Get health status of the object store and registry.

    Args:
        app: Flask application instance

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    service: FileShareService = app.container.resolve(FileShareService)

    health_status = {
        "status": "ok",
        "bucket": "unknown",
        "registry_size": service.registry.count(),
    }

    if service.bucket_available():
        health_status["bucket"] = "available"
    else:
        health_status["bucket"] = "unavailable"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


def _register_health_endpoint(app: Flask) -> None:
    """
    Register health check endpoint.

    Args:
        app: Flask application
    """

    @app.route("/health", methods=["GET"])
    def health():
        """
        Health check endpoint.
        Returns overall health status of the application and its dependencies.
        """
        health_status, status_code = _get_health_status(app)
        return jsonify(health_status), status_code

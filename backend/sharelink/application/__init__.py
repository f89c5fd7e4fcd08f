"""
Application Layer

Use-case orchestration between the HTTP API and the domain.
"""

from .dependency_container import DependencyContainer, DependencyNotFoundError
from .file_share_service import FileShareService
from .results import DownloadLink, UploadFile, UploadResult

__all__ = [
    "DependencyContainer",
    "DependencyNotFoundError",
    "FileShareService",
    "DownloadLink",
    "UploadFile",
    "UploadResult",
]

"""
Result Value Objects

Value objects exchanged between the application services and the API layer.
"""

from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, Optional


@dataclass(frozen=True)
class UploadFile:
    """
    A file received from a client, independent of the web framework.

    Attributes:
        filename: Filename supplied by the client
        stream: Binary stream positioned at the start of the content
        content_type: MIME type supplied by the client
        size: Content length in bytes, if known
    """
    filename: str
    stream: BinaryIO
    content_type: Optional[str] = None
    size: Optional[int] = None


@dataclass(frozen=True)
class UploadResult:
    """Per-file outcome of an upload."""
    status: int
    token: str
    file_name: str
    url: str

    @classmethod
    def failure(cls, file_name: str) -> "UploadResult":
        """Result for a file that could not be stored; it carries no token."""
        return cls(status=500, token="", file_name=file_name, url="")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "token": self.token,
            "file_name": self.file_name,
            "url": self.url,
        }


@dataclass(frozen=True)
class DownloadLink:
    """Freshly presigned download URL for a verified object."""
    status: int
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "url": self.url}

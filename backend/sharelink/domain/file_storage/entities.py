"""
File Storage Entities

Domain entities for uploaded file bookkeeping.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

DEFAULT_RECORD_TTL_DAYS = 7


@dataclass
class FileRecord:
    """
    Entity recording an uploaded object in the registry.

    ``expires_at`` is informational only. Access is governed by the object
    store's presigned URL expiry, never by this timestamp.
    """
    object_name: str
    expires_at: datetime
    created_at: datetime
    original_filename: Optional[str] = None
    content_type: Optional[str] = None
    size: Optional[int] = None

    @classmethod
    def create(cls, object_name: str, original_filename: Optional[str] = None,
               content_type: Optional[str] = None, size: Optional[int] = None,
               ttl_days: int = DEFAULT_RECORD_TTL_DAYS) -> 'FileRecord':
        """
        Factory method to create a new file record.

        Args:
            object_name: Generated object name in the bucket
            original_filename: Filename supplied by the client
            content_type: MIME type stored with the object
            size: Object size in bytes
            ttl_days: Days until the record is considered expired

        Returns:
            New FileRecord instance
        """
        now = datetime.utcnow()
        return cls(
            object_name=object_name,
            expires_at=now + timedelta(days=ttl_days),
            created_at=now,
            original_filename=original_filename,
            content_type=content_type,
            size=size,
        )


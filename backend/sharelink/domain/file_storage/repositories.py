"""
File Storage Repositories

Repository interface for the token to file record registry.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .entities import FileRecord


class FileRegistry(ABC):
    """
    Abstract registry mapping access tokens to file records.

    The registry supports delete-time cleanup only. Download verification
    never reads it, since tokens are re-derived from object names.

    Thread Safety:
        Implementations are shared by every request handler and must make
        each operation atomic with respect to concurrent callers.
    """

    @abstractmethod
    def record_upload(self, token: str, record: FileRecord) -> None:
        """
        Insert or overwrite the record stored under ``token``.

        Args:
            token: Access token derived for the record's object name
            record: FileRecord to store (last write wins)
        """
        pass  # pragma: no cover

    @abstractmethod
    def remove_by_object_name(self, object_name: str) -> int:
        """
        Remove every record whose object name matches.

        Args:
            object_name: Stored object name

        Returns:
            Number of records removed (0 if none matched)
        """
        pass  # pragma: no cover

    @abstractmethod
    def get_by_token(self, token: str) -> Optional[FileRecord]:
        """
        Retrieve a record by token.

        Returns:
            FileRecord if found, None otherwise
        """
        pass  # pragma: no cover

    @abstractmethod
    def find_by_object_name(self, object_name: str) -> List[FileRecord]:
        """
        Retrieve all records for an object name.

        Returns:
            Matching records (empty list if none)
        """
        pass  # pragma: no cover

    @abstractmethod
    def snapshot(self) -> Dict[str, FileRecord]:
        """
        Return a point-in-time copy of the whole mapping.

        Returns:
            Dictionary of token -> FileRecord
        """
        pass  # pragma: no cover

    @abstractmethod
    def count(self) -> int:
        """Return the number of records held."""
        pass  # pragma: no cover

    def __len__(self) -> int:
        return self.count()

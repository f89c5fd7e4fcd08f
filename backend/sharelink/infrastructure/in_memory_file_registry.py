"""
In-Memory File Registry

Process-local implementation of FileRegistry. Records live for the
lifetime of the process and are lost on restart.
"""

import logging
import threading
from typing import Dict, List, Optional

from sharelink.domain.file_storage.entities import FileRecord
from sharelink.domain.file_storage.repositories import FileRegistry

logger = logging.getLogger(__name__)


class InMemoryFileRegistry(FileRegistry):
    """
    Lock-guarded dictionary of token -> FileRecord.

    Every read and write holds ``_lock``, so concurrent uploads and deletes
    never observe a partially updated mapping. Removal by object name is a
    linear scan over all records.
    """

    def __init__(self):
        self._records: Dict[str, FileRecord] = {}
        self._lock = threading.Lock()

    def record_upload(self, token: str, record: FileRecord) -> None:
        with self._lock:
            self._records[token] = record
        logger.debug(f"Recorded upload {record.object_name} (token={token[:8]}...)")

    def remove_by_object_name(self, object_name: str) -> int:
        with self._lock:
            tokens = [
                token
                for token, record in self._records.items()
                if record.object_name == object_name
            ]
            for token in tokens:
                del self._records[token]

        if tokens:
            logger.debug(f"Removed {len(tokens)} record(s) for {object_name}")
        return len(tokens)

    def get_by_token(self, token: str) -> Optional[FileRecord]:
        with self._lock:
            return self._records.get(token)

    def find_by_object_name(self, object_name: str) -> List[FileRecord]:
        with self._lock:
            return [
                record
                for record in self._records.values()
                if record.object_name == object_name
            ]

    def snapshot(self) -> Dict[str, FileRecord]:
        with self._lock:
            return dict(self._records)

    def count(self) -> int:
        with self._lock:
            return len(self._records)

"""
File Storage Domain

Handles token-based access to stored objects and upload bookkeeping.
"""

from .entities import FileRecord
from .object_store import IObjectStore, StoredObject
from .repositories import FileRegistry
from .token_authority import TokenAuthority, derive_token, verify_token
from .value_objects import InvalidObjectNameError, ObjectName

__all__ = [
    "FileRecord",
    "FileRegistry",
    "IObjectStore",
    "StoredObject",
    "TokenAuthority",
    "derive_token",
    "verify_token",
    "ObjectName",
    "InvalidObjectNameError",
]

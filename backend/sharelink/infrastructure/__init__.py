"""
Infrastructure Layer

Concrete adapters for the domain's object store and registry interfaces.
"""

from .in_memory_file_registry import InMemoryFileRegistry
from .s3_object_store import S3ObjectStore
from .storage_factory import StorageFactory

__all__ = ["InMemoryFileRegistry", "S3ObjectStore", "StorageFactory"]

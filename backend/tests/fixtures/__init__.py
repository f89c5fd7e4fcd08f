"""
Test fixtures package.

Provides mock implementations and factory functions for testing.
"""

from .mock_repositories import MockObjectStore, make_upload

__all__ = ["MockObjectStore", "make_upload"]

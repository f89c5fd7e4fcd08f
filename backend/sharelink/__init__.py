"""
ShareLink - token-gated file sharing on top of S3-compatible object storage.
"""

__version__ = "1.0.0"

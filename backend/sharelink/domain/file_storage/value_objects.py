"""
File Storage Value Objects

Immutable value objects for type safety and validation.
"""

import secrets
import uuid
from dataclasses import dataclass

# S3 object keys are limited to 1024 bytes of UTF-8
MAX_OBJECT_NAME_BYTES = 1024


class InvalidObjectNameError(ValueError):
    """Raised when an object name is empty or too long."""
    pass


@dataclass(frozen=True)
class ObjectName:
    """
    Value object representing the key of a stored object.

    Generated names combine a random 128-bit hex identifier with a random
    UUID4 suffix, so uniqueness never needs a round-trip to the store.
    """
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str) or not self.value:
            raise InvalidObjectNameError("Object name must be a non-empty string")

        if len(self.value.encode("utf-8")) > MAX_OBJECT_NAME_BYTES:
            raise InvalidObjectNameError(
                f"Object name exceeds {MAX_OBJECT_NAME_BYTES} bytes"
            )

    @classmethod
    def generate(cls) -> 'ObjectName':
        """
        Generate a new collision-resistant object name.

        Returns:
            ObjectName of the form ``<32 hex chars>-<uuid4>``
        """
        file_id = secrets.token_hex(16)
        return cls(f"{file_id}-{uuid.uuid4()}")

    def __str__(self) -> str:
        return self.value

"""
KeyValueStore Protocol Definition.

This module defines the interface every durable storage backend implements.
The editor keeps its whole collection under a single key, so the surface is
deliberately small: get, set, delete.
"""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """
    Abstract protocol for storage backends.

    Values are text (the serialized collection). A missing key reads as None,
    which the editor treats as a first run.
    """

    @property
    def backend_type(self) -> str:
        """Return the backend type identifier ('browser', 'file' or 'memory')."""
        ...

    @property
    def description(self) -> str:
        """Human-readable location, used in user feedback."""
        ...

    def get(self, key: str) -> Optional[str]:
        """
        Read a stored value.

        Returns:
            The stored text, or None if the key was never written
        """
        ...

    def set(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Raises:
            OSError: if the backend cannot persist the value
        """
        ...

    def delete(self, key: str) -> None:
        """Remove a key. Deleting a missing key is not an error."""
        ...

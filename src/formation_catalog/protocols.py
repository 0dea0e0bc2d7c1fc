"""Protocols for dependency injection in the catalog."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FetcherProtocol(Protocol):
    """Protocol for document fetchers."""

    def fetch(self, path: str) -> str:
        """Return the raw text at ``path`` (relative to the content root).

        Implementations never raise: transport failures yield the fallback text.
        """
        ...


@runtime_checkable
class IdentifierSourceProtocol(Protocol):
    """Protocol for per-section document identifier lists."""

    def list_identifiers(self) -> list[str]:
        """Return the ordered document identifiers of the section."""
        ...


@runtime_checkable
class BlobStoreProtocol(Protocol):
    """Protocol for the key-value string store behind the offline cache."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value. Raise StoreWriteError if the write is rejected."""
        ...

    def remove(self, key: str) -> None:
        """Delete a value if present."""
        ...

"""
PostBoard Backend: Abstract Resource Store
==========================================

What:  Interface every record store implements.
Why:   Handlers depend on this contract, not on a concrete backend, so the
       in-memory and database variants are interchangeable.
How:   Python ABC with async methods (the database variant awaits I/O; the
       in-memory variant simply never suspends).

Not-found is a return value (None), never an exception. Invalid input on
create raises ValidationError before anything is stored.

Implementations:
    - InMemoryStore (stores/memory.py): list-backed, random integer ids
    - DatabaseStore (stores/database.py): SQLAlchemy async, hex UUID ids
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel

from postboard.resources import ResourceKind


class ResourceStore(ABC):
    """
    Ordered collection of records of one ResourceKind.

    Identifiers arrive as raw path segments (strings); each store decides how
    to interpret them. A segment it cannot interpret is simply not found.
    """

    def __init__(self, kind: ResourceKind):
        self.kind = kind

    @abstractmethod
    async def create(self, attrs: Any) -> BaseModel:
        """
        Validate attrs, assign a fresh identifier, append and return the record.

        Raises:
            ValidationError: a required attribute is missing or empty
            UpstreamError: the backend failed to persist the record
        """

    @abstractmethod
    async def list(self) -> List[BaseModel]:
        """Return every record in store order."""

    @abstractmethod
    async def get(self, record_id: Any) -> Optional[BaseModel]:
        """Return the record with this identifier, or None."""

    @abstractmethod
    async def update(self, record_id: Any, changes: Mapping[str, Any]) -> Optional[BaseModel]:
        """
        Merge already-filtered changes onto the record and return the result.

        Fields absent from changes are preserved. Returns None if absent.
        """

    @abstractmethod
    async def delete(self, record_id: Any) -> Optional[BaseModel]:
        """Remove exactly one record and return it, or None if absent."""

    @abstractmethod
    async def count(self) -> int:
        """Number of stored records."""

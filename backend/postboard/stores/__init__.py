"""
PostBoard Backend: Resource Stores
==================================

    - ResourceStore (abstract): create / list / get / update / delete / count
    - InMemoryStore: process-lifetime list, random integer ids
    - DatabaseStore: SQLAlchemy async tables, hex UUID ids

Stores are created by create_app() and injected into handlers; there is no
module-level store instance.
"""

from postboard.stores.base import ResourceStore
from postboard.stores.database import DatabaseStore
from postboard.stores.memory import InMemoryStore

__all__ = ["ResourceStore", "DatabaseStore", "InMemoryStore"]

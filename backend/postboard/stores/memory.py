"""
PostBoard Backend: In-Memory Resource Store
===========================================

What:  Process-lifetime list of records with pseudo-random integer ids.
Why:   Zero-dependency variant for demos and tests; state is lost on restart.
How:   Linear scans over a Python list; insertion order is store order.

Identifier scheme:
    random integer in [0, 100000). Collisions are NOT checked: two records
    may share an id, in which case lookups find the first one.

Concurrency:
    No method awaits, so under asyncio each call runs to completion without
    interleaving. Nothing prevents two requests from updating the same
    record one after the other (last write wins).
"""

import logging
import random
import re
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import BaseModel

from postboard.resources import ResourceKind
from postboard.stores.base import ResourceStore

logger = logging.getLogger(__name__)

ID_UPPER_BOUND = 100_000

# Plain ASCII digits; no "_" separators or non-ASCII numerals
_ID_PATTERN = re.compile(r"-?[0-9]+")


class InMemoryStore(ResourceStore):
    """
    List-backed ResourceStore.

    Args:
        kind:           Resource definition (schemas, messages)
        seed:           Initial records (already typed)
        rng:            Random source for identifiers; inject a seeded
                        random.Random in tests for reproducible ids
        legacy_delete:  Remove the matched record AND the one after it,
                        returning only the first. Compatibility mode only.
    """

    def __init__(
        self,
        kind: ResourceKind,
        seed: Optional[Iterable[BaseModel]] = None,
        rng: Optional[random.Random] = None,
        legacy_delete: bool = False,
    ):
        super().__init__(kind)
        self._records: List[BaseModel] = list(seed or [])
        self._rng = rng or random.Random()
        self._legacy_delete = legacy_delete
        if legacy_delete:
            logger.warning("%s store running with legacy two-record delete", kind.name)

    def _new_id(self) -> int:
        return self._rng.randrange(ID_UPPER_BOUND)

    @staticmethod
    def _parse_id(record_id: Any) -> Optional[int]:
        if isinstance(record_id, bool):
            return None
        if isinstance(record_id, int):
            return record_id
        text = str(record_id)
        if not _ID_PATTERN.fullmatch(text):
            return None
        return int(text)

    def _index_of(self, record_id: Any) -> int:
        wanted = self._parse_id(record_id)
        if wanted is None:
            return -1
        for index, record in enumerate(self._records):
            if record.id == wanted:
                return index
        return -1

    async def create(self, attrs: Any) -> BaseModel:
        fields = self.kind.parse_create(attrs)
        record = self.kind.build_record(self._new_id(), fields)
        self._records.append(record)
        logger.debug("Created %s %s", self.kind.name, record.id)
        return record

    async def list(self) -> List[BaseModel]:
        return list(self._records)

    async def get(self, record_id: Any) -> Optional[BaseModel]:
        index = self._index_of(record_id)
        return self._records[index] if index >= 0 else None

    async def update(self, record_id: Any, changes: Mapping[str, Any]) -> Optional[BaseModel]:
        index = self._index_of(record_id)
        if index < 0:
            return None
        merged = self._records[index].model_copy(update=dict(changes))
        self._records[index] = merged
        return merged

    async def delete(self, record_id: Any) -> Optional[BaseModel]:
        index = self._index_of(record_id)
        if index < 0:
            return None
        width = 2 if self._legacy_delete else 1
        removed = self._records[index:index + width]
        del self._records[index:index + width]
        return removed[0]

    async def count(self) -> int:
        return len(self._records)

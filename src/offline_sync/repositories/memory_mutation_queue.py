"""In-memory implementation of MutationQueue."""

import itertools
from datetime import datetime, timezone
from typing import Any

from offline_sync.entities import MutationCategory, PendingMutationEntity


class InMemoryMutationQueue:
    """Dictionary-backed queue. Durable only for the life of the process."""

    def __init__(self) -> None:
        self._records: dict[MutationCategory, dict[int, PendingMutationEntity]] = {
            category: {} for category in MutationCategory
        }
        self._sequences = {category: itertools.count(1) for category in MutationCategory}

    async def open(self) -> None:
        return None

    async def enqueue(self, category: MutationCategory, payload: Any) -> int:
        record_id = next(self._sequences[category])
        self._records[category][record_id] = PendingMutationEntity(
            id=record_id,
            category=category,
            payload=payload,
            created_at=datetime.now(timezone.utc),
        )
        return record_id

    async def list_pending(self, category: MutationCategory) -> list[PendingMutationEntity]:
        records = self._records[category]
        return [records[record_id] for record_id in sorted(records)]

    async def ack(self, category: MutationCategory, record_id: int) -> bool:
        return self._records[category].pop(record_id, None) is not None

    async def count(self, category: MutationCategory) -> int:
        return len(self._records[category])

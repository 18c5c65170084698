"""Background sync engine.

Replays mutations queued while offline. Records move from pending to
synced (deleted) only on a 2xx from the backend; anything else leaves them
queued for the next sync opportunity. There is no retry limit.
"""

import logging
from typing import Any

from offline_sync.entities import MutationCategory, PendingMutationEntity, SyncReport
from offline_sync.errors import NetworkError
from offline_sync.protocols import HttpClient, MutationQueue

logger = logging.getLogger(__name__)


class BackgroundSyncService:
    """Durable queue plus replay logic.

    Donations and applications are replayed one record at a time; analytics
    events are sent as a single batch and acknowledged all together.

    Example:
        ```python
        sync = BackgroundSyncService(queue=RedisMutationQueue.create(), http_client=client)
        await sync.enqueue(MutationCategory.DONATIONS, {"amount": 500})
        report = await sync.handle_tag("background-sync-donations")
        ```
    """

    ENDPOINTS = {
        MutationCategory.DONATIONS: "/api/donations",
        MutationCategory.APPLICATIONS: "/api/applications",
        MutationCategory.ANALYTICS: "/api/analytics/events",
    }

    def __init__(self, queue: MutationQueue, http_client: HttpClient) -> None:
        """Initialize the sync service.

        Args:
            queue: Durable mutation store (required).
            http_client: Client used to POST replays (required).
        """
        self._queue = queue
        self._http = http_client

    @property
    def queue(self) -> MutationQueue:
        return self._queue

    async def enqueue(self, category: MutationCategory, payload: Any) -> int:
        """Queue a mutation that failed to reach the backend."""
        await self._queue.open()
        record_id = await self._queue.enqueue(category, payload)
        logger.info("Queued offline %s record %d", category.value, record_id)
        return record_id

    async def pending(self, category: MutationCategory) -> list[PendingMutationEntity]:
        await self._queue.open()
        return await self._queue.list_pending(category)

    async def handle_tag(self, tag: str) -> SyncReport | None:
        """Run the replay registered under a sync tag.

        Returns:
            The sync report, or None if the tag is not one of ours
        """
        logger.info("Background sync: %s", tag)
        category = MutationCategory.from_tag(tag)
        if category is None:
            logger.warning("Ignoring unknown sync tag: %s", tag)
            return None
        return await self.replay(category)

    async def replay(self, category: MutationCategory) -> SyncReport:
        """Drain one category against its endpoint."""
        try:
            await self._queue.open()
            records = await self._queue.list_pending(category)
        except Exception as e:
            logger.error("Background sync failed for %s: %s", category.value, e)
            return SyncReport(category=category, aborted=True)

        if category is MutationCategory.ANALYTICS:
            synced = await self._replay_batch(category, records)
        else:
            synced = await self._replay_each(category, records)

        return SyncReport(
            category=category,
            attempted=len(records),
            synced=synced,
            remaining=len(records) - synced,
        )

    async def _post(self, category: MutationCategory, payload: Any) -> bool:
        try:
            response = await self._http.post_json(self.ENDPOINTS[category], payload)
        except NetworkError as e:
            logger.error("Failed to sync %s: %s", category.value, e)
            return False

        if not response.ok:
            logger.error("Failed to sync %s: HTTP %d", category.value, response.status)
            return False
        return True

    async def _replay_record(self, category: MutationCategory, record: PendingMutationEntity) -> bool:
        try:
            if not await self._post(category, record.payload):
                return False
            await self._queue.ack(category, record.id)
        except Exception as e:
            logger.error("Failed to sync offline %s record %d: %s", category.value, record.id, e)
            return False
        logger.info("Synced offline %s record %d", category.value, record.id)
        return True

    async def _replay_each(self, category: MutationCategory, records: list[PendingMutationEntity]) -> int:
        synced = 0
        for record in records:
            if await self._replay_record(category, record):
                synced += 1
        return synced

    async def _replay_batch(self, category: MutationCategory, records: list[PendingMutationEntity]) -> int:
        if not records:
            return 0
        if not await self._post(category, [record.payload for record in records]):
            return 0

        acked = 0
        for record in records:
            try:
                await self._queue.ack(category, record.id)
            except Exception as e:
                logger.error("Failed to clear %s record %d after sync: %s", category.value, record.id, e)
                continue
            acked += 1
        logger.info("Synced %d %s events", acked, category.value)
        return acked

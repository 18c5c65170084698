"""Pending mutation entities for background sync."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

SYNC_TAG_PREFIX = "background-sync-"


class MutationCategory(str, Enum):
    """Record collections in the durable queue, one per kind of offline action."""

    DONATIONS = "donations"
    APPLICATIONS = "applications"
    ANALYTICS = "analytics"

    @property
    def sync_tag(self) -> str:
        return f"{SYNC_TAG_PREFIX}{self.value}"

    @classmethod
    def from_tag(cls, tag: str) -> "MutationCategory | None":
        """Map a sync tag to its category, or None for foreign tags."""
        if not tag.startswith(SYNC_TAG_PREFIX):
            return None
        try:
            return cls(tag[len(SYNC_TAG_PREFIX):])
        except ValueError:
            return None


@dataclass(frozen=True)
class PendingMutationEntity:
    """A user action performed offline, waiting to be replayed.

    Attributes:
        id: Auto-incremented identifier, unique within its category
        category: Which collection the record lives in
        payload: Opaque JSON body to POST on replay
        created_at: When the record was enqueued
    """

    id: int
    category: MutationCategory
    payload: Any
    created_at: datetime


@dataclass(frozen=True)
class SyncReport:
    """Outcome of a single sync attempt for one category."""

    category: MutationCategory
    attempted: int = 0
    synced: int = 0
    remaining: int = 0
    aborted: bool = False

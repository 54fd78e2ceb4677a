"""
Read-through cache for owner lookups by id.

``OwnerService.find_owner`` consults ``owner_cache`` before querying the
database.  The cache holds a snapshot of the owner including its pets,
so every operation that changes an owner (update, add pet, delete) must
call ``invalidate`` once its transaction has committed.  Values are
copied on the way in and on the way out; callers never share the
cached object.
"""

import logging
import threading
from typing import Callable, Dict, Optional

from petclinic_customers.app.core.config import settings
from petclinic_customers.app.schemas.owner import OwnerRead


logger = logging.getLogger(__name__)


class OwnerCache:
    """In-process owner snapshots keyed by owner id."""

    def __init__(self) -> None:
        self._entries: Dict[int, OwnerRead] = {}
        self._lock = threading.Lock()

    def get(self, owner_id: int) -> Optional[OwnerRead]:
        with self._lock:
            owner = self._entries.get(owner_id)
        return owner.model_copy(deep=True) if owner is not None else None

    def put(self, owner: OwnerRead) -> None:
        with self._lock:
            self._entries[owner.id] = owner.model_copy(deep=True)

    def get_or_load(self, owner_id: int, loader: Callable[[int], Optional[OwnerRead]]) -> Optional[OwnerRead]:
        """Return the cached owner, loading and storing it on a miss.

        Misses for unknown owners are not cached.  When caching is
        switched off in the settings every call goes to ``loader``.
        """
        if not settings.owner_cache_enabled:
            return loader(owner_id)
        cached = self.get(owner_id)
        if cached is not None:
            return cached
        owner = loader(owner_id)
        if owner is not None:
            self.put(owner)
        return owner

    def invalidate(self, owner_id: int) -> None:
        with self._lock:
            removed = self._entries.pop(owner_id, None)
        if removed is not None:
            logger.debug("Evicted owner %s from cache", owner_id)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, owner_id: int) -> bool:
        with self._lock:
            return owner_id in self._entries


owner_cache = OwnerCache()

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from loguru import logger

from ivr_task_sync.state_store.base_state_store import BaseCallStateStore


@dataclass
class MemoryMapItem:
    key: str
    data: Dict[str, Any]
    expires_at: float


@dataclass
class MemoryMap:
    unique_name: str
    expires_at: float
    items: Dict[str, MemoryMapItem] = field(default_factory=dict)


class InMemoryCallStateStore(BaseCallStateStore):
    """Process-local stand-in for a Sync service, used for local runs and tests.

    Maps and items carry independent absolute expiries. Anything past its
    expiry behaves exactly as if it had never been created.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._maps: Dict[str, MemoryMap] = {}

    def _live_map(self, map_name: str) -> Optional[MemoryMap]:
        sync_map = self._maps.get(map_name)
        if sync_map is None:
            return None
        if sync_map.expires_at <= self._clock():
            del self._maps[map_name]
            return None
        return sync_map

    def _live_item(self, sync_map: MemoryMap, key: str) -> Optional[MemoryMapItem]:
        item = sync_map.items.get(key)
        if item is None:
            return None
        if item.expires_at <= self._clock():
            del sync_map.items[key]
            return None
        return item

    def get_item(self, map_name: str, key: str) -> Optional[MemoryMapItem]:
        sync_map = self._live_map(map_name)
        if sync_map is None:
            return None
        return self._live_item(sync_map, key)

    async def update_item(
        self, map_name: str, key: str, value: Dict[str, Any], item_ttl: int
    ) -> Optional[MemoryMapItem]:
        sync_map = self._live_map(map_name)
        if sync_map is None:
            logger.warning(f"Map {map_name} not found, cannot update item {key}")
            return None
        item = self._live_item(sync_map, key)
        if item is None:
            logger.warning(f"Item {key} not found in map {map_name}")
            return None
        item.data = dict(value)
        item.expires_at = self._clock() + item_ttl
        return item

    async def create_item(
        self, map_name: str, key: str, value: Dict[str, Any], item_ttl: int
    ) -> Optional[MemoryMapItem]:
        sync_map = self._live_map(map_name)
        if sync_map is None:
            logger.warning(f"Map {map_name} not found, cannot create item {key}")
            return None
        if self._live_item(sync_map, key) is not None:
            logger.warning(f"Item {key} already exists in map {map_name}")
            return None
        item = MemoryMapItem(key=key, data=dict(value), expires_at=self._clock() + item_ttl)
        sync_map.items[key] = item
        return item

    async def create_map(self, map_name: str, ttl: int) -> Optional[MemoryMap]:
        if self._live_map(map_name) is not None:
            logger.warning(f"Map {map_name} already exists")
            return None
        sync_map = MemoryMap(unique_name=map_name, expires_at=self._clock() + ttl)
        self._maps[map_name] = sync_map
        return sync_map

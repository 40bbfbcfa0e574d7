from enum import Enum
from typing import Optional

from loguru import logger

from ivr_task_sync.constants import CALL_SYNC_MAP_NAME, SYNC_TTL_SECONDS
from ivr_task_sync.errors import CallStateUpsertError
from ivr_task_sync.models.call_state import CallStateEntry
from ivr_task_sync.state_store.base_state_store import BaseCallStateStore


class UpsertStep(str, Enum):
    UPDATED = "updated"
    CREATED = "created"
    BOOTSTRAPPED = "bootstrapped"


class CallStateUpsertProtocol:
    """Records a call's active task in the call state map.

    The map service has no upsert, so the write walks a fixed ladder:
    update the item, create the item, create the map and create the item
    again. The map expires on its own TTL and is re-created lazily here.
    """

    def __init__(
        self,
        store: BaseCallStateStore,
        map_name: str = CALL_SYNC_MAP_NAME,
        ttl_seconds: int = SYNC_TTL_SECONDS,
    ):
        self.store = store
        self.map_name = map_name
        self.ttl_seconds = ttl_seconds

    async def record(self, call_sid: str, task_sid: Optional[str]) -> UpsertStep:
        value = CallStateEntry(active_task=task_sid).to_wire()

        item = await self.store.update_item(self.map_name, call_sid, value, self.ttl_seconds)
        if item:
            logger.debug(f"Call state for {call_sid} updated")
            return UpsertStep.UPDATED

        item = await self.store.create_item(self.map_name, call_sid, value, self.ttl_seconds)
        if item:
            logger.debug(f"Call state for {call_sid} created")
            return UpsertStep.CREATED

        logger.warning(f"Call state map {self.map_name} unavailable, creating it")
        sync_map = await self.store.create_map(self.map_name, self.ttl_seconds)
        if not sync_map:
            raise CallStateUpsertError("Error creating Sync Map. Unable to update call Sync Map.")

        item = await self.store.create_item(self.map_name, call_sid, value, self.ttl_seconds)
        if not item:
            raise CallStateUpsertError(
                "Error creating Sync Map Item. Unable to update call Sync Map."
            )
        logger.debug(f"Call state for {call_sid} created in new map {self.map_name}")
        return UpsertStep.BOOTSTRAPPED

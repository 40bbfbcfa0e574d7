from typing import Any, Dict, Optional

from loguru import logger
from twilio.rest import Client

from ivr_task_sync.state_store.base_state_store import BaseCallStateStore


class TwilioSyncCallStateStore(BaseCallStateStore):
    def __init__(self, client: Client, sync_service_sid: str):
        self.client = client
        self.sync_service_sid = sync_service_sid

    @property
    def _service(self):
        return self.client.sync.v1.services(self.sync_service_sid)

    async def update_item(
        self, map_name: str, key: str, value: Dict[str, Any], item_ttl: int
    ) -> Optional[Any]:
        logger.debug(f"Updating Sync Map item {key} in {map_name}")
        try:
            item = (
                await self._service.sync_maps(map_name)
                .sync_map_items(key)
                .update_async(data=value, item_ttl=item_ttl)
            )
        except Exception as e:
            logger.error(f"Error updating Sync Map item {key}: {e}")
            return None
        logger.debug(f"Sync Map item {key} updated")
        return item

    async def create_item(
        self, map_name: str, key: str, value: Dict[str, Any], item_ttl: int
    ) -> Optional[Any]:
        logger.debug(f"Creating Sync Map item {key} in {map_name}")
        try:
            item = await self._service.sync_maps(map_name).sync_map_items.create_async(
                key=key, data=value, item_ttl=item_ttl
            )
        except Exception as e:
            logger.error(f"Error creating Sync Map item {key}: {e}")
            return None
        logger.debug(f"Sync Map item {key} created")
        return item

    async def create_map(self, map_name: str, ttl: int) -> Optional[Any]:
        logger.debug(f"Creating Sync Map {map_name}")
        try:
            sync_map = await self._service.sync_maps.create_async(unique_name=map_name, ttl=ttl)
        except Exception as e:
            logger.error(f"Error creating Sync Map {map_name}: {e}")
            return None
        logger.debug(f"Sync Map {map_name} created")
        return sync_map

from typing import Any, Dict, Optional


class BaseCallStateStore:
    """Write-side capabilities of a TTL-bounded key-value map service.

    Every method returns ``None`` instead of raising when the store refuses the
    write, whatever the cause, so callers can fall back to the next step.
    """

    async def update_item(
        self, map_name: str, key: str, value: Dict[str, Any], item_ttl: int
    ) -> Optional[Any]:
        raise NotImplementedError

    async def create_item(
        self, map_name: str, key: str, value: Dict[str, Any], item_ttl: int
    ) -> Optional[Any]:
        raise NotImplementedError

    async def create_map(self, map_name: str, ttl: int) -> Optional[Any]:
        raise NotImplementedError

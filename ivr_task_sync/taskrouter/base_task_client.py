from typing import Optional


class BaseTaskClient:
    async def create_task(
        self, call_sid: str, first_task_sid: Optional[str], ivr_path: str
    ) -> str:
        raise NotImplementedError

    async def cancel_task(self, task_sid: str, ivr_path: str) -> int:
        """Cancel the task and return the seconds recorded as its ``ivr_time``"""
        raise NotImplementedError

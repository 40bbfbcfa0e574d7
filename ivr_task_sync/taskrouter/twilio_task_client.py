import json
from datetime import datetime, timezone
from typing import Callable, Optional

from loguru import logger
from twilio.rest import Client

from ivr_task_sync.constants import (
    ABANDONED_NO,
    CANCEL_REASON,
    CANCELED_ASSIGNMENT_STATUS,
    IVR_TASK_CHANNEL,
)
from ivr_task_sync.models.task import ConversationAttributes, IvrTaskAttributes
from ivr_task_sync.taskrouter.base_task_client import BaseTaskClient
from ivr_task_sync.taskrouter.elapsed import elapsed_seconds


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TwilioTaskClient(BaseTaskClient):
    """Creates and cancels IVR step tasks in a TaskRouter workspace.

    Errors are logged and re-raised; a failed task write aborts the transition.
    """

    def __init__(
        self,
        client: Client,
        workspace_sid: str,
        workflow_sid: str,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.client = client
        self.workspace_sid = workspace_sid
        self.workflow_sid = workflow_sid
        self._clock = clock

    @property
    def _tasks(self):
        return self.client.taskrouter.v1.workspaces(self.workspace_sid).tasks

    async def create_task(
        self, call_sid: str, first_task_sid: Optional[str], ivr_path: str
    ) -> str:
        attributes = IvrTaskAttributes(
            conversations=ConversationAttributes(
                conversation_attribute_1=call_sid,
                conversation_id=first_task_sid,
                ivr_path=ivr_path,
            )
        )
        logger.debug(f"Creating IVR task for call {call_sid}")
        try:
            task = await self._tasks.create_async(
                attributes=json.dumps(attributes.to_wire()),
                task_channel=IVR_TASK_CHANNEL,
                workflow_sid=self.workflow_sid,
            )
        except Exception as e:
            logger.error(f"Error creating task for call {call_sid}: {e}")
            raise
        logger.info(f"Task created: {task.sid}")
        return task.sid

    async def cancel_task(self, task_sid: str, ivr_path: str) -> int:
        logger.debug(f"Canceling task {task_sid}")
        try:
            task = await self._tasks(task_sid).fetch_async()
            ivr_time = elapsed_seconds(task.date_created, self._clock())

            # Existing attributes pass through untouched, nulls and foreign types included
            attributes = json.loads(task.attributes) if task.attributes else {}
            conversations = {
                **(attributes.get("conversations") or {}),
                "abandoned": ABANDONED_NO,
                "ivr_path": ivr_path,
                "ivr_time": ivr_time,
            }

            await self._tasks(task_sid).update_async(
                attributes=json.dumps({**attributes, "conversations": conversations}),
                assignment_status=CANCELED_ASSIGNMENT_STATUS,
                reason=CANCEL_REASON,
            )
        except Exception as e:
            logger.error(f"Error canceling task {task_sid}: {e}")
            raise
        logger.info(f"Task {task_sid} canceled after {ivr_time}s on {ivr_path}")
        return ivr_time

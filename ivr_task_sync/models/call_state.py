from typing import Optional

from pydantic import Field

from ivr_task_sync.models.model import BaseModel


class CallStateEntry(BaseModel):
    """Value kept under the call SID in the call state map.

    A call that has left the menu is written with no active task, which
    serializes to an empty object.
    """

    active_task: Optional[str] = Field(None, alias="activeTask")

from typing import Optional

from pydantic import Field

from ivr_task_sync.models.model import BaseModel


class ConversationAttributes(BaseModel):
    """The `conversations` block Flex Insights reads from task attributes"""

    conversation_attribute_1: Optional[str] = None  # call SID
    conversation_id: Optional[str] = None  # first IVR task SID of the journey
    ivr_path: Optional[str] = None


class IvrTaskAttributes(BaseModel):
    conversations: ConversationAttributes = Field(default_factory=ConversationAttributes)

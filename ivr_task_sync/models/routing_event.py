from typing import Any, Mapping, Optional

from pydantic import Field, ValidationError, field_validator

from ivr_task_sync.constants import FINAL_IVR_TASK_FLAG
from ivr_task_sync.errors import InvalidRoutingEventError
from ivr_task_sync.models.model import BaseModel


class RoutingEvent(BaseModel):
    """One IVR step transition reported by the voice flow"""

    active_task_sid: Optional[str] = Field(None, alias="activeTaskSid")
    call_sid: str = Field(..., alias="callSid")
    first_ivr_task_sid: Optional[str] = Field(None, alias="firstIvrTaskSid")
    # Studio sends every widget parameter as a string
    is_final_ivr_task: str = Field(..., alias="isFinalIvrTask")
    ivr_path: str = Field(..., alias="ivrPath")

    @field_validator("active_task_sid", "first_ivr_task_sid", mode="before")
    @classmethod
    def _blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("is_final_ivr_task", mode="before")
    @classmethod
    def _flag_as_text(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @property
    def is_final(self) -> bool:
        return self.is_final_ivr_task == FINAL_IVR_TASK_FLAG


def parse_routing_event(payload: Mapping[str, Any]) -> RoutingEvent:
    try:
        return RoutingEvent.model_validate(dict(payload))
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise InvalidRoutingEventError(f"Invalid routing event: {fields or e}") from e

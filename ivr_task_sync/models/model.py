import pydantic
from pydantic import ConfigDict


class BaseModel(pydantic.BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        """Serialize using the camelCase aliases Twilio payloads use"""
        return self.model_dump(by_alias=True, exclude_none=True)

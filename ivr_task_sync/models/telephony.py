from ivr_task_sync.models.model import BaseModel


class TwilioConfig(BaseModel):
    account_sid: str
    auth_token: str

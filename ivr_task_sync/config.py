from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from ivr_task_sync.constants import CALL_SYNC_MAP_NAME, SYNC_TTL_SECONDS
from ivr_task_sync.models.telephony import TwilioConfig


class Settings(BaseSettings):
    twilio_account_sid: str = ""
    twilio_auth_token: str = ""
    twilio_sync_services_sid: str = ""
    twilio_workspace_sid: str = ""
    twilio_ivr_workflow_sid: str = ""

    call_sync_map_name: str = CALL_SYNC_MAP_NAME
    sync_ttl_seconds: int = SYNC_TTL_SECONDS
    state_store_backend: Literal["twilio", "memory"] = "twilio"

    log_level: str = "DEBUG"
    host: str = "0.0.0.0"
    port: int = 3000

    # This means a .env file can be used to overload these settings
    # ex: "TWILIO_WORKSPACE_SID=WS..." will set twilio_workspace_sid over the default above
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def twilio_config(self) -> TwilioConfig:
        return TwilioConfig(
            account_sid=self.twilio_account_sid,
            auth_token=self.twilio_auth_token,
        )

from twilio.http.async_http_client import AsyncTwilioHttpClient
from twilio.rest import Client

from ivr_task_sync.models.telephony import TwilioConfig


def create_twilio_client(twilio_config: TwilioConfig) -> Client:
    return Client(
        twilio_config.account_sid,
        twilio_config.auth_token,
        http_client=AsyncTwilioHttpClient(),
    )

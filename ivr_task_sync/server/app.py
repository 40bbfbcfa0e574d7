from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from loguru import logger

from ivr_task_sync.config import Settings
from ivr_task_sync.coordinator.events_manager import create_default_events_manager
from ivr_task_sync.coordinator.ivr_transition_coordinator import IvrTransitionCoordinator
from ivr_task_sync.errors import InvalidRoutingEventError
from ivr_task_sync.models.routing_event import parse_routing_event
from ivr_task_sync.server.responses import error_response, success_response
from ivr_task_sync.state_store.base_state_store import BaseCallStateStore
from ivr_task_sync.state_store.call_state_upsert import CallStateUpsertProtocol
from ivr_task_sync.state_store.memory_state_store import InMemoryCallStateStore
from ivr_task_sync.state_store.twilio_sync_store import TwilioSyncCallStateStore
from ivr_task_sync.taskrouter.twilio_task_client import TwilioTaskClient
from ivr_task_sync.telephony.twilio_client import create_twilio_client

CAPTURE_IVR_METRICS_PATH = "/capture-ivr-metrics"


def build_coordinator(settings: Settings) -> IvrTransitionCoordinator:
    client = create_twilio_client(settings.twilio_config)
    store: BaseCallStateStore
    if settings.state_store_backend == "memory":
        logger.warning("Using in-memory call state store, state is lost on restart")
        store = InMemoryCallStateStore()
    else:
        store = TwilioSyncCallStateStore(client, settings.twilio_sync_services_sid)
    return IvrTransitionCoordinator(
        task_client=TwilioTaskClient(
            client,
            workspace_sid=settings.twilio_workspace_sid,
            workflow_sid=settings.twilio_ivr_workflow_sid,
        ),
        call_state=CallStateUpsertProtocol(
            store,
            map_name=settings.call_sync_map_name,
            ttl_seconds=settings.sync_ttl_seconds,
        ),
        events_manager=create_default_events_manager(),
    )


async def read_event_payload(request: Request) -> Dict[str, Any]:
    """Merge query parameters with a JSON or form-encoded body"""
    payload: Dict[str, Any] = dict(request.query_params)
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as e:
            raise InvalidRoutingEventError(f"Invalid JSON body: {e}") from e
        if not isinstance(body, dict):
            raise InvalidRoutingEventError("Routing event body must be a JSON object")
        payload.update(body)
    elif content_type.startswith(
        ("application/x-www-form-urlencoded", "multipart/form-data")
    ):
        form = await request.form()
        payload.update({key: value for key, value in form.items() if isinstance(value, str)})
    return payload


def create_app(
    settings: Optional[Settings] = None,
    coordinator: Optional[IvrTransitionCoordinator] = None,
) -> FastAPI:
    settings = settings or Settings()
    coordinator = coordinator or build_coordinator(settings)

    app = FastAPI(title="IVR Task Sync")

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @app.post(CAPTURE_IVR_METRICS_PATH)
    async def capture_ivr_metrics(request: Request):
        try:
            event = parse_routing_event(await read_event_payload(request))
            result = await coordinator.handle(event)
        except Exception as e:
            return error_response(e)
        return success_response(result.task_sid)

    return app

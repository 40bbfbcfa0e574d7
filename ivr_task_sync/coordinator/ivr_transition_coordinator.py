from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from loguru import logger

from ivr_task_sync.coordinator.events_manager import (
    TransitionEvent,
    TransitionEventsManager,
    TransitionEventType,
)
from ivr_task_sync.coordinator.metrics import TransitionMetrics
from ivr_task_sync.coordinator.state import TransitionKind, plan_transition
from ivr_task_sync.models.routing_event import RoutingEvent
from ivr_task_sync.state_store.call_state_upsert import CallStateUpsertProtocol
from ivr_task_sync.taskrouter.base_task_client import BaseTaskClient


@dataclass
class TransitionResult:
    task_sid: Optional[str] = None
    metrics: TransitionMetrics = field(default_factory=TransitionMetrics)


class IvrTransitionCoordinator:
    """Moves a call from one IVR step task to the next.

    Holds no per-call state: the call state map is the only record of which
    task is active. Steps run strictly in order (cancel, create, record) and
    the map is written exactly once per event, after any cancellation.
    Overlapping events for the same call are not serialized; the last write
    to the map wins.
    """

    def __init__(
        self,
        task_client: BaseTaskClient,
        call_state: CallStateUpsertProtocol,
        events_manager: Optional[TransitionEventsManager] = None,
    ):
        self.task_client = task_client
        self.call_state = call_state
        self.events = events_manager or TransitionEventsManager()

    async def handle(self, event: RoutingEvent) -> TransitionResult:
        logger.debug("Event properties:")
        for key, value in event.model_dump(by_alias=True).items():
            logger.debug(f"{key}: {value}")

        plan = plan_transition(event)
        result = TransitionResult()
        metrics = result.metrics
        try:
            if plan.cancel_task_sid:
                metrics.ivr_time = await self.task_client.cancel_task(
                    plan.cancel_task_sid, event.ivr_path
                )
                metrics.canceled_task_sid = plan.cancel_task_sid
                await self.events.emit(
                    TransitionEvent(
                        type=TransitionEventType.TASK_CANCELED,
                        call_sid=event.call_sid,
                        task_sid=plan.cancel_task_sid,
                        ivr_path=event.ivr_path,
                        ivr_time=metrics.ivr_time,
                    )
                )

            if plan.kind == TransitionKind.ADVANCE:
                result.task_sid = await self.task_client.create_task(
                    event.call_sid, event.first_ivr_task_sid, event.ivr_path
                )
                metrics.created_task_sid = result.task_sid
                await self.events.emit(
                    TransitionEvent(
                        type=TransitionEventType.TASK_CREATED,
                        call_sid=event.call_sid,
                        task_sid=result.task_sid,
                        ivr_path=event.ivr_path,
                    )
                )

            metrics.upsert_step = await self.call_state.record(event.call_sid, result.task_sid)
            await self.events.emit(
                TransitionEvent(
                    type=TransitionEventType.CALL_STATE_RECORDED,
                    call_sid=event.call_sid,
                    task_sid=result.task_sid,
                    ivr_path=event.ivr_path,
                    step=metrics.upsert_step,
                )
            )
        except Exception as e:
            metrics.error = str(e)
            raise
        finally:
            metrics.ended_at = datetime.now()
            logger.info(
                f"IVR transition for {event.call_sid} ({plan.kind.value}) "
                f"canceled={metrics.canceled_task_sid} created={metrics.created_task_sid} "
                f"store={metrics.upsert_step.value if metrics.upsert_step else None} "
                f"error={metrics.error} took {metrics.duration_ms:.1f}ms"
            )
        return result

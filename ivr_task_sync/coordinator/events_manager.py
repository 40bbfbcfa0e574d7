from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from loguru import logger

from ivr_task_sync.state_store.call_state_upsert import UpsertStep


class TransitionEventType(str, Enum):
    TASK_CANCELED = "task_canceled"
    TASK_CREATED = "task_created"
    CALL_STATE_RECORDED = "call_state_recorded"


@dataclass
class TransitionEvent:
    type: TransitionEventType
    call_sid: str
    task_sid: Optional[str] = None
    ivr_path: Optional[str] = None
    ivr_time: Optional[int] = None
    step: Optional[UpsertStep] = None


TransitionEventHandler = Callable[[TransitionEvent], Awaitable[Any]]


class TransitionEventsManager:
    """Fans transition events out to observers.

    Observers run after the step they describe has completed; an observer
    failure is logged and never fails the transition.
    """

    def __init__(self):
        self._handlers: Dict[TransitionEventType, List[TransitionEventHandler]] = {}

    def subscribe(self, event_type: TransitionEventType, handler: TransitionEventHandler) -> None:
        self._handlers.setdefault(event_type, []).append(handler)

    async def emit(self, event: TransitionEvent) -> None:
        for handler in self._handlers.get(event.type, []):
            try:
                await handler(event)
            except Exception as e:
                logger.error(f"Error in {event.type.value} handler for call {event.call_sid}: {e}")


async def log_ivr_step_time(event: TransitionEvent) -> None:
    logger.info(
        f"IVR step closed: call={event.call_sid} task={event.task_sid} "
        f"ivr_path={event.ivr_path} ivr_time={event.ivr_time}s"
    )


async def log_call_state(event: TransitionEvent) -> None:
    step = event.step.value if event.step else None
    logger.info(f"Call {event.call_sid} active task is now {event.task_sid} ({step})")


def create_default_events_manager() -> TransitionEventsManager:
    events_manager = TransitionEventsManager()
    events_manager.subscribe(TransitionEventType.TASK_CANCELED, log_ivr_step_time)
    events_manager.subscribe(TransitionEventType.CALL_STATE_RECORDED, log_call_state)
    return events_manager

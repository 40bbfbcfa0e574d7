from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ivr_task_sync.models.routing_event import RoutingEvent


class TransitionKind(Enum):
    ADVANCE = "advance"
    FINALIZE = "finalize"


@dataclass
class TransitionPlan:
    kind: TransitionKind
    cancel_task_sid: Optional[str] = None


def plan_transition(event: RoutingEvent) -> TransitionPlan:
    kind = TransitionKind.FINALIZE if event.is_final else TransitionKind.ADVANCE
    return TransitionPlan(kind=kind, cancel_task_sid=event.active_task_sid)

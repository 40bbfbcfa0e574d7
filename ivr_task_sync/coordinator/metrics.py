from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ivr_task_sync.state_store.call_state_upsert import UpsertStep


@dataclass
class TransitionMetrics:
    started_at: datetime = field(default_factory=datetime.now)
    ended_at: Optional[datetime] = None
    canceled_task_sid: Optional[str] = None
    ivr_time: Optional[int] = None
    created_task_sid: Optional[str] = None
    upsert_step: Optional[UpsertStep] = None
    error: Optional[str] = None

    @property
    def duration_ms(self) -> Optional[float]:
        if self.ended_at is None:
            return None
        return (self.ended_at - self.started_at).total_seconds() * 1000

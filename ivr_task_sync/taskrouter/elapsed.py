import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Union


def _parse_timestamp(value: Union[datetime, str, None]) -> Optional[datetime]:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            try:
                parsed = parsedate_to_datetime(text)
            except (TypeError, ValueError):
                return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def elapsed_seconds(
    date_created: Union[datetime, str, None], now: Optional[datetime] = None
) -> int:
    """Whole seconds between task creation and ``now``, rounded half up.

    Missing or unparsable creation times and clock skew into the future all
    yield 0.
    """
    created = _parse_timestamp(date_created)
    if created is None:
        return 0
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    delta = (now - created).total_seconds()
    if math.isnan(delta) or delta <= 0:
        return 0
    return int(math.floor(delta + 0.5))

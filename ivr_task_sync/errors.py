class IvrTaskSyncError(Exception):
    status: int = 500

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        if status is not None:
            self.status = status


class CallStateUpsertError(IvrTaskSyncError):
    """Raised once every step of the call state ladder has been exhausted"""


class InvalidRoutingEventError(IvrTaskSyncError):
    status = 400

CALL_SYNC_MAP_NAME = "CallCacheIvrMetrics"
SYNC_TTL_SECONDS = 86400

IVR_TASK_CHANNEL = "voice"
CANCELED_ASSIGNMENT_STATUS = "canceled"
CANCEL_REASON = "IVR path selected"
ABANDONED_NO = "No"

FINAL_IVR_TASK_FLAG = "true"

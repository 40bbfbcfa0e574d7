from typing import Optional

from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import Field

from ivr_task_sync.models.model import BaseModel


class SuccessBody(BaseModel):
    task_sid: Optional[str] = Field(None, alias="taskSid")
    status: int = 200


class ErrorBody(BaseModel):
    success: bool = False
    message: str


def _status_for(error: Exception) -> int:
    status = getattr(error, "status", None)
    try:
        return int(status) if status else 500
    except (TypeError, ValueError):
        return 500


def success_response(task_sid: Optional[str]) -> JSONResponse:
    return JSONResponse(content=SuccessBody(task_sid=task_sid).to_wire(), status_code=200)


def error_response(error: Exception) -> JSONResponse:
    message = f"Error encountered. {error}"
    logger.error(message)
    return JSONResponse(
        content=ErrorBody(message=message).model_dump(), status_code=_status_for(error)
    )

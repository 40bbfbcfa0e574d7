from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from ivr_task_sync.config import Settings
from ivr_task_sync.coordinator.ivr_transition_coordinator import IvrTransitionCoordinator
from ivr_task_sync.errors import IvrTaskSyncError
from ivr_task_sync.server.app import CAPTURE_IVR_METRICS_PATH, create_app
from ivr_task_sync.state_store.call_state_upsert import CallStateUpsertProtocol
from ivr_task_sync.state_store.memory_state_store import InMemoryCallStateStore
from ivr_task_sync.taskrouter.base_task_client import BaseTaskClient


class WorkflowUnavailable(Exception):
    status = 503


@pytest.fixture
def mock_task_client():
    task_client = AsyncMock(spec=BaseTaskClient)
    task_client.create_task.return_value = "WT0002"
    task_client.cancel_task.return_value = 5
    return task_client


@pytest.fixture
def store():
    return InMemoryCallStateStore()


@pytest.fixture
def client(mock_task_client, store):
    coordinator = IvrTransitionCoordinator(
        task_client=mock_task_client, call_state=CallStateUpsertProtocol(store)
    )
    return TestClient(create_app(Settings(), coordinator=coordinator))


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_first_step_json_event(client, mock_task_client, store):
    response = client.post(
        CAPTURE_IVR_METRICS_PATH,
        json={
            "callSid": "C1",
            "isFinalIvrTask": "false",
            "firstIvrTaskSid": "T0",
            "ivrPath": "menu/1",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"taskSid": "WT0002", "status": 200}
    mock_task_client.create_task.assert_awaited_once_with("C1", "T0", "menu/1")
    mock_task_client.cancel_task.assert_not_awaited()
    assert store.get_item("CallCacheIvrMetrics", "C1").data == {"activeTask": "WT0002"}


def test_final_step_form_event(client, mock_task_client, store):
    response = client.post(
        CAPTURE_IVR_METRICS_PATH,
        data={
            "callSid": "C1",
            "activeTaskSid": "T1",
            "isFinalIvrTask": "true",
            "ivrPath": "menu/1/exit",
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert body == {"status": 200}
    assert body.get("taskSid") is None
    mock_task_client.cancel_task.assert_awaited_once_with("T1", "menu/1/exit")
    mock_task_client.create_task.assert_not_awaited()
    assert store.get_item("CallCacheIvrMetrics", "C1").data == {}


def test_query_params_are_accepted(client, mock_task_client):
    response = client.post(
        CAPTURE_IVR_METRICS_PATH,
        params={"callSid": "C1", "isFinalIvrTask": "false", "ivrPath": "menu"},
    )

    assert response.status_code == 200
    mock_task_client.create_task.assert_awaited_once_with("C1", None, "menu")


def test_task_creation_failure_uses_error_status(client, mock_task_client, store):
    mock_task_client.create_task.side_effect = WorkflowUnavailable("workflow is disabled")

    response = client.post(
        CAPTURE_IVR_METRICS_PATH,
        json={"callSid": "C1", "isFinalIvrTask": "false", "ivrPath": "menu/1"},
    )

    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert "workflow is disabled" in body["message"]
    assert body["message"].startswith("Error encountered.")
    assert store.get_item("CallCacheIvrMetrics", "C1") is None


def test_failure_without_status_is_500(client, mock_task_client):
    mock_task_client.cancel_task.side_effect = RuntimeError("connection reset")

    response = client.post(
        CAPTURE_IVR_METRICS_PATH,
        json={
            "callSid": "C1",
            "activeTaskSid": "T1",
            "isFinalIvrTask": "false",
            "ivrPath": "menu/2",
        },
    )

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Error encountered. connection reset",
    }


def test_store_exhaustion_error_status(client, mock_task_client, mocker):
    mocker.patch.object(
        CallStateUpsertProtocol,
        "record",
        AsyncMock(side_effect=IvrTaskSyncError("Unable to update call Sync Map.")),
    )

    response = client.post(
        CAPTURE_IVR_METRICS_PATH,
        json={"callSid": "C1", "isFinalIvrTask": "true", "ivrPath": "menu/exit"},
    )

    assert response.status_code == 500
    assert "Unable to update call Sync Map." in response.json()["message"]


def test_invalid_event_is_400(client, mock_task_client):
    response = client.post(CAPTURE_IVR_METRICS_PATH, json={"ivrPath": "menu"})

    assert response.status_code == 400
    assert response.json()["success"] is False
    mock_task_client.create_task.assert_not_awaited()


def test_non_utf8_json_body_is_400(client, mock_task_client):
    response = client.post(
        CAPTURE_IVR_METRICS_PATH,
        content=b'{"callSid": "\xff\xfe"}',
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["success"] is False
    mock_task_client.create_task.assert_not_awaited()


def test_malformed_json_body_is_400(client):
    response = client.post(
        CAPTURE_IVR_METRICS_PATH,
        content=b'{"callSid": ',
        headers={"content-type": "application/json"},
    )

    assert response.status_code == 400

"""
HTTP adapter for the Mobilerun automation service.

Only the task submission call is used: the service receives a natural-language
instruction plus a target device and answers with a task id, a stream URL the
caller can follow and a token for that stream.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from .errors import AutomationServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskRequest:
    llm_model: str
    task: str
    device_id: str
    vision: bool = False
    execution_timeout: Optional[int] = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "llmModel": self.llm_model,
            "task": self.task,
            "deviceId": self.device_id,
        }
        if self.vision:
            payload["vision"] = True
        if self.execution_timeout:
            payload["executionTimeout"] = self.execution_timeout
        return payload


@dataclass(frozen=True)
class TaskHandle:
    id: str
    stream_url: Optional[str]
    token: Optional[str]

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"id": self.id, "streamUrl": self.stream_url, "token": self.token}


class MobilerunClient:
    def __init__(
        self,
        api_key: str,
        *,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def run_task(self, request: TaskRequest) -> TaskHandle:
        url = f"{self._base_url}/tasks"
        headers = {"Authorization": f"Bearer {self._api_key}", "Accept": "application/json"}
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(url, json=request.to_payload(), headers=headers)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Mobilerun rejected task for device %s: HTTP %s %s",
                request.device_id,
                exc.response.status_code,
                exc.response.text[:500],
            )
            raise AutomationServiceError(f"Mobilerun returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.error("Mobilerun request failed for device %s: %s", request.device_id, exc)
            raise AutomationServiceError(f"Mobilerun request failed: {exc}") from exc
        except ValueError as exc:
            raise AutomationServiceError("Mobilerun answered with a non-JSON body") from exc
        return _parse_task_handle(body)


def _parse_task_handle(body: Any) -> TaskHandle:
    if isinstance(body, dict) and isinstance(body.get("data"), dict):
        body = body["data"]
    if not isinstance(body, dict) or not body.get("id"):
        raise AutomationServiceError("Mobilerun response is missing the task id")
    return TaskHandle(
        id=str(body["id"]),
        stream_url=body.get("streamUrl"),
        token=body.get("token"),
    )

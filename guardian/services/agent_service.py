"""
Theft agent use case: score the signals, pick a state, render the task prompt
and hand it to Mobilerun on the caller's behalf.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from guardian.core.config import Settings, get_settings
from guardian.core.errors import ConfigurationError, NotFoundError
from guardian.core.mobilerun import MobilerunClient, TaskHandle, TaskRequest
from guardian.domain.prompts import build_task_prompt
from guardian.domain.scoring import AgentState, calculate_confidence_score, determine_agent_state
from guardian.domain.signals import AgentRequest
from guardian.repositories.sql_repository import SQLRepository

logger = logging.getLogger(__name__)

MISSING_API_KEY_MESSAGE = "Mobilerun API key is missing for this user. Update your profile."
MISSING_DEVICE_MESSAGE = "Mobilerun device id is missing for this user. Update your profile."
NORMAL_STATE_MESSAGE = "Status normal, no action dispatched."

ClientFactory = Callable[[str, Settings], MobilerunClient]


def default_client_factory(api_key: str, settings: Settings) -> MobilerunClient:
    return MobilerunClient(
        api_key,
        base_url=settings.mobilerun_base_url,
        timeout=settings.mobilerun_http_timeout_seconds,
    )


@dataclass(frozen=True)
class Credentials:
    api_key: str
    device_id: str


@dataclass
class AgentOutcome:
    state: AgentState
    score: int
    prompt: str
    task: Optional[TaskHandle] = None

    @property
    def dispatched(self) -> bool:
        return self.task is not None


class AgentService:
    def __init__(
        self,
        settings: Settings | None = None,
        repository: SQLRepository | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.repository = repository or SQLRepository()
        self.client_factory = client_factory or default_client_factory

    def resolve_credentials(self, user_id: str) -> Credentials:
        """User-scoped credentials win; the process-wide pair fills whatever is missing."""
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        api_key = (user.mobilerun_api_key or "").strip() or self.settings.mobilerun_api_key
        if not api_key:
            raise ConfigurationError(MISSING_API_KEY_MESSAGE)
        device_id = (user.device_id or "").strip() or self.settings.mobilerun_device_id
        if not device_id:
            raise ConfigurationError(MISSING_DEVICE_MESSAGE)
        return Credentials(api_key=api_key, device_id=device_id)

    def execute(self, user_id: str, request: AgentRequest) -> AgentOutcome:
        score = calculate_confidence_score(request.signals)
        state = determine_agent_state(score)
        prompt = build_task_prompt(
            state,
            score,
            request.signals,
            request.context,
            emergency_contact=self.settings.emergency_contact_name,
        )
        logger.info("Agent evaluation for user %s: state=%s score=%d signals=%d", user_id, state.name, score, len(request.signals))
        if state is AgentState.NORMAL and self.settings.agent_skip_normal_dispatch:
            return AgentOutcome(state=state, score=score, prompt=prompt)

        credentials = self.resolve_credentials(user_id)
        client = self.client_factory(credentials.api_key, self.settings)
        task_request = TaskRequest(
            llm_model=self.settings.mobilerun_llm_model,
            task=prompt,
            device_id=credentials.device_id,
            vision=self.settings.agent_vision,
            execution_timeout=self.settings.agent_task_timeout_seconds or None,
        )
        task = client.run_task(task_request)
        logger.info("Dispatched Mobilerun task %s for user %s", task.id, user_id)
        return AgentOutcome(state=state, score=score, prompt=prompt, task=task)

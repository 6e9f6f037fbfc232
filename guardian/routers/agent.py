from __future__ import annotations

from fastapi import APIRouter, Depends

from guardian.core.security import TokenPayload
from guardian.domain.signals import AgentRequest
from guardian.routers.deps import get_agent_service
from guardian.services.agent_service import NORMAL_STATE_MESSAGE, AgentService
from guardian.services.session_service import current_allowed_user

router = APIRouter(prefix="/agent", tags=["agent"])


@router.post("/execute")
def execute(
    payload: AgentRequest,
    caller: TokenPayload = Depends(current_allowed_user),
    agent_service: AgentService = Depends(get_agent_service),
):
    outcome = agent_service.execute(caller.user_id, payload)
    if not outcome.dispatched:
        return {
            "success": True,
            "message": NORMAL_STATE_MESSAGE,
            "state": outcome.state.name,
            "score": outcome.score,
        }
    return {
        "success": True,
        "state": outcome.state.name,
        "score": outcome.score,
        "agentResponse": outcome.task.to_dict(),
    }

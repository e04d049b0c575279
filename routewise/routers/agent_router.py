"""
Agent router: authenticated entry point for the ride preparation agent.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from routewise.agents import AgentResult, BaseAgent, RidePreparationAgent
from routewise.config.settings import get_app_settings
from routewise.middleware.auth import get_current_user
from routewise.middleware.error_handler import error_response
from routewise.services.auth_service import AuthenticatedUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/agent", tags=["Agent"])


class AgentTestRequest(BaseModel):
    """Trip context sent by the frontend."""

    pickup: Optional[Any] = Field(None, description="Pickup location")
    destination: Optional[Any] = Field(None, description="Destination")


class AgentTestResponse(BaseModel):
    """Successful agent run."""

    success: bool = True
    result: AgentResult
    message: str


def get_ride_preparation_agent() -> BaseAgent:
    """FastAPI dependency returning the ride preparation agent."""
    return RidePreparationAgent()


@router.post("/test", response_model=AgentTestResponse)
async def test_agent(
    request: AgentTestRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    agent: BaseAgent = Depends(get_ride_preparation_agent),
):
    """
    Run the ride preparation agent for the authenticated passenger.

    Requires a bearer token; unauthenticated calls get 401.
    """
    driver_id = get_app_settings().agent_driver_id
    logger.info(
        f"🤖 Agent test for passenger {user.user_id} "
        f"(pickup={request.pickup!r}, destination={request.destination!r})"
    )

    try:
        result = await agent.execute(driver_id, user.user_id)
    except Exception:
        logger.exception("Agent test failed")
        return error_response(500, "Agent execution failed")

    return AgentTestResponse(result=result, message="Agent executed successfully")

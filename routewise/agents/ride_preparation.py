"""
Ride preparation agent.

Prepares a ride for a driver/passenger pair. This build runs in demo mode:
it returns fixed insights without contacting a language model or any
passenger data source.
"""

import logging

from .base import AgentResult, BaseAgent

logger = logging.getLogger(__name__)

DEMO_TIPS = [
    "Optimal route calculated considering current traffic",
    "Music playlist curated based on passenger preferences",
    "Climate controls adjusted for comfort",
]


class RidePreparationAgent(BaseAgent):
    """Ride preparation agent (demo mode)."""

    def __init__(self):
        super().__init__("Ride Preparation Agent")

    async def execute(self, driver_id: str, passenger_id: str) -> AgentResult:
        request_id = self.generate_request_id()
        logger.info(f"🤖 [{self.agent_name}] {request_id}: driver {driver_id} -> passenger {passenger_id}")
        insights = {
            "driverId": driver_id,
            "passengerId": passenger_id,
            "mode": "demo",
            "tips": list(DEMO_TIPS),
        }
        return AgentResult(success=True, data=insights, data_accessed=[])

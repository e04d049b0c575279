"""
Ride agents.

Agents are opaque collaborators to the API layer: routes call
``execute(driver_id, passenger_id)`` and serialize the returned AgentResult.
"""

from .base import AgentResult, BaseAgent
from .ride_preparation import RidePreparationAgent

__all__ = ["AgentResult", "BaseAgent", "RidePreparationAgent"]

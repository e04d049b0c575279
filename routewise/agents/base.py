"""
Base class for ride agents.
"""

import os
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AgentResult(BaseModel):
    """Outcome of one agent run."""

    success: bool = Field(..., description="Whether the agent completed")
    data: Optional[Dict[str, Any]] = Field(None, description="Agent output")
    error: Optional[str] = Field(None, description="Failure summary")
    data_accessed: List[str] = Field(default_factory=list, description="Data sources the agent read")


class BaseAgent(ABC):
    """
    Abstract base class for ride agents.

    Subclasses implement ``execute`` and report failures through the
    returned AgentResult or by raising.
    """

    def __init__(self, agent_name: str):
        self.agent_name = agent_name

    def generate_request_id(self) -> str:
        """Generate an identifier for one agent run."""
        return f"{self.agent_name.lower().replace(' ', '_')}_{os.urandom(4).hex()}"

    @abstractmethod
    async def execute(self, driver_id: str, passenger_id: str) -> AgentResult:
        """Run the agent for a driver/passenger pair."""
        pass

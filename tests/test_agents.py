"""
Tests for the ride preparation agent.
"""

import pytest

from routewise.agents import RidePreparationAgent


class TestRidePreparationAgent:
    """Test the demo agent."""

    @pytest.mark.asyncio
    async def test_execute_returns_demo_insights(self):
        agent = RidePreparationAgent()

        result = await agent.execute("driver-123", "user-42")

        assert result.success is True
        assert result.error is None
        assert result.data["driverId"] == "driver-123"
        assert result.data["passengerId"] == "user-42"
        assert result.data["mode"] == "demo"
        assert len(result.data["tips"]) == 3
        assert result.data_accessed == []

    def test_request_ids_are_prefixed_with_agent_name(self):
        agent = RidePreparationAgent()
        request_id = agent.generate_request_id()

        assert request_id.startswith("ride_preparation_agent_")
        assert request_id != agent.generate_request_id()

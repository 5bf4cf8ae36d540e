"""
Simulated network boundary for the mocked cloud API.

The backend has no real remote peer. Each operation still pays the
latency the real service would have, and can be configured to fail so
callers exercise their retry-or-abort path.
"""

import asyncio
import logging
import os
import random
from typing import Dict, Optional

from dotenv import load_dotenv

from smartflora.errors import TransientFailure

load_dotenv()

logger = logging.getLogger(__name__)

# Round trip latency per operation, in milliseconds
OPERATION_DELAYS_MS: Dict[str, int] = {
    "login": 1500,
    "list_pots": 600,
    "get_pot": 300,
    "get_history": 300,
    "bind_pot": 1000,
    "update_settings": 800,
    "update_name": 500,
    "update_image": 1000,  # simulated upload
    "unbind_pot": 1000,
}
DEFAULT_DELAY_MS = 500


class NetworkSimulator:
    """Applies latency and optional failures to component operations."""

    def __init__(
        self,
        latency_scale: float = 1.0,
        failure_rate: float = 0.0,
        rng: Optional[random.Random] = None,
    ):
        if latency_scale < 0:
            raise ValueError("latency_scale must be >= 0")
        if not 0.0 <= failure_rate <= 1.0:
            raise ValueError("failure_rate must be between 0 and 1")
        self.latency_scale = latency_scale
        self.failure_rate = failure_rate
        self.rng = rng or random.Random()

    @classmethod
    def from_env(cls) -> "NetworkSimulator":
        """Build a simulator from SIMULATED_LATENCY_SCALE / SIMULATED_FAILURE_RATE."""
        return cls(
            latency_scale=float(os.getenv("SIMULATED_LATENCY_SCALE", "1.0")),
            failure_rate=float(os.getenv("SIMULATED_FAILURE_RATE", "0.0")),
        )

    def delay_for(self, operation: str) -> float:
        """Delay in seconds for an operation after scaling."""
        delay_ms = OPERATION_DELAYS_MS.get(operation, DEFAULT_DELAY_MS)
        return delay_ms * self.latency_scale / 1000.0

    async def roundtrip(self, operation: str) -> None:
        """
        Wait out the simulated latency of an operation.

        Raises:
            TransientFailure: if the simulated request fails
        """
        delay = self.delay_for(operation)
        if delay > 0:
            await asyncio.sleep(delay)

        if self.failure_rate and self.rng.random() < self.failure_rate:
            logger.warning(f"Simulated network failure during {operation}")
            raise TransientFailure(operation)

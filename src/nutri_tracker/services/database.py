"""Database connectivity checks."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from nutri_tracker.errors import DatabaseUnavailable

logger = logging.getLogger(__name__)


class DatabaseProbe(Protocol):
    """Interface for a cheap round trip to the database."""

    def ping(self) -> None:
        """Raise when the database cannot be reached."""


@dataclass
class DatabaseMonitor:
    """Tracks whether the database answered the most recent probe."""

    probe: DatabaseProbe
    retries: int = 5
    retry_delay_seconds: float = 5.0
    connected: bool = False

    async def connect(self) -> None:
        """Probe the database, retrying a fixed number of times."""
        attempts = max(self.retries, 1)
        for attempt in range(1, attempts + 1):
            logger.info(
                "Connecting to database (attempt %s/%s)", attempt, attempts
            )
            try:
                await asyncio.to_thread(self.probe.ping)
            except Exception as exc:
                self.connected = False
                logger.error(
                    "Database connection attempt %s failed: %s", attempt, exc
                )
                if attempt < attempts:
                    await asyncio.sleep(self.retry_delay_seconds)
                continue
            self.connected = True
            logger.info("Database connected")
            return
        raise DatabaseUnavailable(
            f"Failed to connect to database after {attempts} attempts"
        )

    async def check(self) -> bool:
        """Run a single probe and record the result."""
        try:
            await asyncio.to_thread(self.probe.ping)
        except Exception as exc:
            if self.connected:
                logger.warning("Database connection lost: %s", exc)
            self.connected = False
        else:
            self.connected = True
        return self.connected

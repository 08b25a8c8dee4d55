# center_finder/pacing.py
"""Pacing policies awaited before each outbound geocoding request."""
import asyncio


class FixedDelayPacer:
    """Sleeps a fixed number of seconds before every request."""

    def __init__(self, delay: float = 1.0):
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay

    async def wait(self) -> None:
        await asyncio.sleep(self.delay)


class NoDelayPacer(FixedDelayPacer):
    """Never waits. For tests and local Nominatim instances."""

    def __init__(self):
        super().__init__(delay=0.0)

    async def wait(self) -> None:
        return None

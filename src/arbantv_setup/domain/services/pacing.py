"""Fixed-interval pacing for remote schema calls.

The remote service rate-limits schema calls and provisions attributes
asynchronously. Every deliberate pause of the setup run goes through a
``Pacer`` so the intervals live in one place and tests can inject a sleep
that does not wait.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class PacingPolicy:
    """Intervals, in seconds, between schema calls."""

    after_field: float = 0.1
    before_indexes: float = 3.0
    after_index: float = 0.2

    @classmethod
    def from_settings(cls, settings) -> "PacingPolicy":
        return cls(
            after_field=settings.setup_field_delay_seconds,
            before_indexes=settings.setup_index_wait_seconds,
            after_index=settings.setup_index_delay_seconds,
        )


class Pacer:
    """Sleeps for the policy's interval at each pacing point."""

    def __init__(self, policy: PacingPolicy | None = None, sleep: Sleep | None = None):
        """Initialize pacer.

        Args:
            policy: Intervals to wait. Defaults to ``PacingPolicy()``.
            sleep: Coroutine function used to wait. Defaults to ``asyncio.sleep``.
        """
        self.policy = policy or PacingPolicy()
        self._sleep = sleep or asyncio.sleep

    async def _wait(self, seconds: float) -> None:
        if seconds > 0:
            await self._sleep(seconds)

    async def after_field(self) -> None:
        """Pause after a field was created."""
        await self._wait(self.policy.after_field)

    async def before_indexes(self) -> None:
        """Pause after a collection's fields, before its indexes.

        Also used as the interval between field readiness polls.
        """
        await self._wait(self.policy.before_indexes)

    async def after_index(self) -> None:
        """Pause after an index was created."""
        await self._wait(self.policy.after_index)

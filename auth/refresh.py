"""Single-flight access token renewal shared by concurrent requests."""

import asyncio
import enum
import logging
from typing import Awaitable, Callable

log = logging.getLogger(__name__)


class RefreshState(enum.Enum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class RefreshCoordinator:
    """Owns the refresh state and the queue of callers waiting on it.

    The first caller to arrive while idle runs the renewal; everyone who
    arrives before it settles gets a future that is resolved (or rejected)
    with the same outcome, in the order they queued.
    """

    def __init__(self):
        self._state = RefreshState.IDLE
        self._waiters: list[asyncio.Future] = []

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def waiting(self) -> int:
        return len(self._waiters)

    async def acquire_or_wait(self, renew: Callable[[], Awaitable[str]]) -> str:
        if self._state is RefreshState.REFRESHING:
            waiter = asyncio.get_running_loop().create_future()
            self._waiters.append(waiter)
            log.debug("Refresh in flight, queued (%d waiting)", len(self._waiters))
            return await waiter

        self._state = RefreshState.REFRESHING
        try:
            token = await renew()
        except asyncio.CancelledError:
            self._settle(cancel=True)
            raise
        except Exception as e:
            self._settle(error=e)
            raise
        self._settle(token=token)
        return token

    def _settle(self, token: str | None = None, error: Exception | None = None,
                cancel: bool = False):
        # Swap the queue and go idle before waking anyone up
        waiters, self._waiters = self._waiters, []
        self._state = RefreshState.IDLE
        if waiters:
            log.debug("Releasing %d queued request(s)", len(waiters))
        for waiter in waiters:
            if waiter.done():
                continue
            if cancel:
                waiter.cancel()
            elif error is not None:
                waiter.set_exception(error)
            else:
                waiter.set_result(token)

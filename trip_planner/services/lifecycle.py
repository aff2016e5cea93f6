"""
Lazy, process-wide provider clients.

Expensive clients (SDK handles, HTTP sessions) are created on first use
and then reused. Concurrent first callers wait for the single in-flight
creation instead of starting their own; a failed creation leaves nothing
cached so the next caller tries again.
"""

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar, Union


logger = logging.getLogger(__name__)

T = TypeVar("T")

Factory = Callable[[], Union[T, Awaitable[T]]]
Closer = Callable[[T], Union[None, Awaitable[None]]]


class LazyResource(Generic[T]):
    """
    Create-once, reuse, explicit-shutdown holder for a shared client.

    The creation lock belongs to the event loop of the first get(), so a
    resource serves one loop at a time. close() drops the lock along with
    the instance; after it the resource can be used from another loop.
    """

    def __init__(self, name: str, factory: Factory, closer: Optional[Closer] = None):
        self.name = name
        self._factory = factory
        self._closer = closer
        self._instance: Optional[T] = None
        self._lock: Optional[asyncio.Lock] = None

    @property
    def initialized(self) -> bool:
        return self._instance is not None

    async def get(self) -> T:
        """Return the shared instance, creating it on first use."""
        if self._instance is not None:
            return self._instance

        if self._lock is None:
            self._lock = asyncio.Lock()

        async with self._lock:
            if self._instance is None:
                logger.info(f"[resource={self.name}] Initializing shared client")
                instance = self._factory()
                if inspect.isawaitable(instance):
                    instance = await instance
                self._instance = instance
        return self._instance

    async def close(self) -> None:
        """Release the shared instance. The next get() creates a new one."""
        instance, self._instance = self._instance, None
        self._lock = None
        if instance is None or self._closer is None:
            return
        logger.info(f"[resource={self.name}] Closing shared client")
        result = self._closer(instance)
        if inspect.isawaitable(result):
            await result

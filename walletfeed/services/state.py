"""Last-result snapshot for activity and UTXO queries.

Each query takes a token from ``begin()``; only the newest token may publish.
Results from superseded queries are dropped so a slow response can never
overwrite a fresher one.
"""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from threading import RLock
from typing import Generic, TypeVar

import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Snapshot(Generic[T]):
    loading: bool = False
    value: T | None = None
    token: int = 0
    error: str | None = None


@dataclass(eq=False)
class ActivitySnapshot(Generic[T]):
    name: str = "activity"
    _current: Snapshot[T] = field(default_factory=Snapshot)
    _issued: int = 0
    _subscribers: list[Callable[[Snapshot[T]], None]] = field(default_factory=list)
    _lock: RLock = field(default_factory=RLock)

    @property
    def current(self) -> Snapshot[T]:
        return self._current

    def subscribe(self, callback: Callable[[Snapshot[T]], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def _publish(self, snapshot: Snapshot[T]) -> None:
        self._current = snapshot
        for callback in list(self._subscribers):
            callback(snapshot)

    def begin(self) -> int:
        with self._lock:
            self._issued += 1
            token: int = self._issued
            self._publish(replace(self._current, loading=True, error=None))
        return token

    def complete(self, token: int, value: T) -> bool:
        with self._lock:
            if token != self._issued:
                logger.debug("Discarding stale result", snapshot=self.name, token=token)
                return False
            self._publish(Snapshot(loading=False, value=value, token=token))
        return True

    def fail(self, token: int, error: str) -> bool:
        with self._lock:
            if token != self._issued:
                return False
            # Keep the previous value; only the loading flag and error change.
            self._publish(replace(self._current, loading=False, error=error, token=token))
        return True

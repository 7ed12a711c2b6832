"""
In-Memory Session State

Thread-safe key/value store satisfying the SessionStateSink port.
"""

import threading
from typing import Any


class InMemorySessionState:
    """
    Session state kept in process memory.

    The resolver only ever writes; get() and snapshot() exist for the
    caller that owns the session.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})
        self._lock = threading.Lock()

    def put(self, key: str, value: Any) -> None:
        with self._lock:
            self._values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def snapshot(self) -> dict[str, Any]:
        """Copy of all stored values"""
        with self._lock:
            return dict(self._values)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._values

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)

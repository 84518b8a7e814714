"""
Keyed singleton registry.
Instances are partitioned by mock namespace, then keyed by (type id, namespace).
"""

import contextlib
import threading
from typing import Any, Dict, Iterator, List, NamedTuple, Optional

DEFAULT_NAMESPACE = "real"
DEFAULT_MOCK_NAMESPACE = "real"


class InstanceKey(NamedTuple):
    type_id: str
    namespace: str = DEFAULT_NAMESPACE


class InstanceRegistry:
    """Thread-safe instance registry."""

    def __init__(self, mock_namespace: str = DEFAULT_MOCK_NAMESPACE):
        self._partitions: Dict[str, Dict[InstanceKey, Any]] = {}
        self._mock_namespace = mock_namespace
        self.lock = threading.RLock()

    # -------------------------
    # Mock namespace
    # -------------------------
    @property
    def mock_namespace(self) -> str:
        return self._mock_namespace

    def set_mock_namespace(self, name: str) -> None:
        with self.lock:
            self._mock_namespace = name

    @contextlib.contextmanager
    def use_mock_namespace(self, name: str) -> Iterator["InstanceRegistry"]:
        """Swap the active partition for the duration of the block."""
        with self.lock:
            previous = self._mock_namespace
            self._mock_namespace = name
        try:
            yield self
        finally:
            with self.lock:
                self._mock_namespace = previous

    @property
    def _active(self) -> Dict[InstanceKey, Any]:
        return self._partitions.setdefault(self._mock_namespace, {})

    # -------------------------
    # Lookup / insert
    # -------------------------
    def contains(self, key: InstanceKey) -> bool:
        with self.lock:
            return key in self._active

    def get(self, key: InstanceKey) -> Optional[Any]:
        with self.lock:
            return self._active.get(key)

    def store(self, key: InstanceKey, instance: Any) -> None:
        """Insert an instance; a key is written at most once."""
        with self.lock:
            active = self._active
            if key in active:
                raise KeyError(f"Instance already registered for {key.type_id} [{key.namespace}]")
            active[key] = instance

    def register_instance(self, type_id: str, instance: Any, namespace: str = DEFAULT_NAMESPACE) -> None:
        """Seed a key with a ready-made object (typically a test double)."""
        with self.lock:
            self._active[InstanceKey(type_id, namespace)] = instance

    def keys(self) -> List[InstanceKey]:
        with self.lock:
            return list(self._active.keys())

    def __len__(self) -> int:
        with self.lock:
            return len(self._active)

    def __contains__(self, key: InstanceKey) -> bool:
        return self.contains(key)

    # -------------------------
    # Reset
    # -------------------------
    def flush(self, mock_namespace: Optional[str] = None) -> None:
        """Drop every instance, or only those of one mock partition."""
        with self.lock:
            if mock_namespace is None:
                self._partitions.clear()
            else:
                self._partitions.pop(mock_namespace, None)

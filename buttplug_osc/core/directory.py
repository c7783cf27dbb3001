"""Concurrent device directory keyed by normalized device names."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from types import MappingProxyType

from buttplug_osc.transports.base import DeviceHandle

DEVICES_ALL = "all"
DEVICES_LAST = "last"


def normalize_device_name(name: str) -> str:
    return "".join(ch for ch in name if ch.isalnum())


class DeviceDirectory:
    """Single-writer, multi-reader map from identifiers to device handles.

    Writers stage changes with `upsert` under a lock; readers only ever see
    the immutable snapshot installed by the last `publish`, so a read never
    waits on a write and may be one publish behind.
    """

    def __init__(self) -> None:
        self._write_lock = threading.Lock()
        self._pending: dict[str, DeviceHandle] = {}
        self._snapshot: Mapping[str, DeviceHandle] = MappingProxyType({})

    def upsert(self, identifier: str, handle: DeviceHandle) -> None:
        with self._write_lock:
            self._pending[identifier] = handle
            self._pending[DEVICES_LAST] = handle

    def publish(self) -> None:
        with self._write_lock:
            self._snapshot = MappingProxyType(dict(self._pending))

    def snapshot(self) -> Mapping[str, DeviceHandle]:
        return self._snapshot

    def identifiers(self) -> list[str]:
        return sorted(k for k in self._snapshot if k != DEVICES_LAST)

    def lookup_exact(self, identifier: str) -> DeviceHandle | None:
        return self._snapshot.get(identifier)

    def lookup_set(self, selector: str) -> list[DeviceHandle]:
        snapshot = self._snapshot
        exact = snapshot.get(selector)
        if exact is not None:
            return [exact]
        return [
            handle
            for key, handle in snapshot.items()
            if key != DEVICES_LAST and (selector == DEVICES_ALL or key.startswith(selector))
        ]

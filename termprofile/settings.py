"""An in-memory hierarchical settings store with change notification."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

ChangeCallback = Callable[[str], None]


class SettingsBackend:
    """Stores key/value settings under paths and notifies listeners per path.

    Keys that were never written read from ``defaults``; a key missing from
    both reads as None.
    """

    def __init__(self, defaults: Optional[Mapping[str, Any]] = None) -> None:
        self._defaults = dict(defaults or {})
        self._values: dict[str, dict[str, Any]] = {}
        self._locked: dict[str, set[str]] = {}
        self._listeners: dict[str, list[ChangeCallback]] = {}

    def get(self, path: str, key: str) -> Any:
        """Return the value of ``key`` under ``path``."""
        values = self._values.get(path, {})
        if key in values:
            return values[key]
        return self._defaults.get(key)

    def is_writable(self, path: str, key: str) -> bool:
        return key not in self._locked.get(path, set())

    def set_writable(self, path: str, key: str, writable: bool) -> None:
        """Lock or unlock a key; listeners are told so they can re-read it."""
        locked = self._locked.setdefault(path, set())
        was_writable = key not in locked
        if writable:
            locked.discard(key)
        else:
            locked.add(key)
        if was_writable != bool(writable):
            self._notify(path, [key])

    def set(self, path: str, key: str, value: Any) -> None:
        """Write a value and notify listeners if it changed.

        Raises PermissionError if the key is not writable.
        """
        self._check_writable(path, key)
        if self._store(path, key, value):
            self._notify(path, [key])

    def connect(self, path: str, callback: ChangeCallback) -> None:
        """Call ``callback(key)`` whenever a key under ``path`` changes."""
        self._listeners.setdefault(path, []).append(callback)

    def disconnect(self, path: str, callback: ChangeCallback) -> None:
        """Remove a listener; does nothing if it was not connected."""
        listeners = self._listeners.get(path)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def changeset(self, path: str) -> "Changeset":
        """Start a batch of writes that take effect on apply()."""
        return Changeset(self, path)

    def _check_writable(self, path: str, key: str) -> None:
        if not self.is_writable(path, key):
            raise PermissionError(f"settings key {key!r} under {path!r} is locked")

    def _store(self, path: str, key: str, value: Any) -> bool:
        values = self._values.setdefault(path, {})
        changed = key not in values or values[key] != value
        values[key] = value
        return changed

    def _notify(self, path: str, keys: list[str]) -> None:
        for key in keys:
            for callback in list(self._listeners.get(path, [])):
                callback(key)


class Changeset:
    """Delayed writes to one path of a SettingsBackend."""

    def __init__(self, backend: SettingsBackend, path: str) -> None:
        self._backend = backend
        self._path = path
        self._pending: dict[str, Any] = {}

    @property
    def path(self) -> str:
        return self._path

    @property
    def pending(self) -> dict[str, Any]:
        return dict(self._pending)

    def set(self, key: str, value: Any) -> None:
        """Queue a write; raises PermissionError if the key is locked."""
        self._backend._check_writable(self._path, key)
        self._pending[key] = value

    def apply(self) -> None:
        """Write every queued value, then notify listeners of the changes."""
        changed = [
            key
            for key, value in self._pending.items()
            if self._backend._store(self._path, key, value)
        ]
        self._pending.clear()
        self._backend._notify(self._path, changed)

    def __enter__(self) -> "Changeset":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.apply()
        else:
            self._pending.clear()
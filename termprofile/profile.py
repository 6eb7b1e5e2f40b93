"""Terminal profiles: named property sets kept in sync with a settings store."""

from __future__ import annotations

import itertools
from typing import Any, Callable, Iterable, Optional

from PIL import Image

from .colors import (
    BUILTIN_PALETTES,
    PALETTE_N_BUILTINS,
    PALETTE_SIZE,
    RGBA,
    fill_palette,
    palette_equal,
    rgba_equal,
)
from .properties import (
    BACKGROUND_IMAGE,
    BACKGROUND_IMAGE_FILE,
    NAME,
    PALETTE,
    SPECS,
    VISIBLE_NAME,
    PropertyKind,
    PropertySpec,
    find_spec,
    spec_for_key,
)
from .settings import SettingsBackend

PROFILE_PATH_PREFIX = "/terminal/profiles/"

NotifyCallback = Callable[["Profile", str], None]
ForgottenCallback = Callable[["Profile"], None]


def _lookup(prop_name: str) -> PropertySpec:
    spec = find_spec(prop_name)
    if spec is None:
        raise KeyError(f"unknown profile property: {prop_name!r}")
    return spec


class Profile:
    """A terminal profile whose properties are loaded from and saved to settings.

    Changes made with set() are remembered and written on save(); changes
    that arrive from the settings store update the profile without being
    written back.
    """

    def __init__(self, name: str, backend: SettingsBackend, **kwargs: Any) -> None:
        if not isinstance(name, str):
            raise TypeError("profile name must be a string")

        overrides: dict[str, Any] = {}
        for arg, value in kwargs.items():
            prop = arg.replace("_", "-")
            spec = find_spec(prop)
            if spec is None:
                raise TypeError(f"unknown profile property: {arg!r}")
            if not spec.writable or spec.construct_only:
                raise ValueError(f"property {prop!r} cannot be set")
            overrides[prop] = spec.validate(value)

        self._backend = backend
        self._values: dict[str, Any] = {spec.name: spec.default() for spec in SPECS}
        self._values[NAME] = name
        self._locked: dict[str, bool] = {}
        self._dirty: list[PropertySpec] = []
        self._save_pending = False
        self._notification_spec: Optional[PropertySpec] = None
        self._background_load_failed = False
        self._forgotten = False
        self._closed = False
        self._notify_callbacks: list[NotifyCallback] = []
        self._forgotten_callbacks: list[ForgottenCallback] = []
        self._path = f"{PROFILE_PATH_PREFIX}{name}/"

        backend.connect(self._path, self._on_settings_changed)
        for spec in SPECS:
            if spec.stored and not spec.construct_only:
                self._on_settings_changed(spec.key)

        for prop, value in overrides.items():
            self._set_value(_lookup(prop), value)

    @property
    def name(self) -> str:
        return self._values[NAME]

    @property
    def path(self) -> str:
        """The settings path the profile is stored under."""
        return self._path

    @property
    def save_pending(self) -> bool:
        """True if there are changes that save() has not written yet."""
        return self._save_pending

    def _on_settings_changed(self, key: str) -> None:
        spec = spec_for_key(key)
        if spec is None:
            return

        self._locked[spec.name] = not self._backend.is_writable(self._path, key)

        raw = self._backend.get(self._path, key)
        if raw is None:
            return
        try:
            value = spec.decode(raw)
        except (TypeError, ValueError):
            return

        validated = spec.validate(value)
        force_set = validated != value
        equal = spec.values_equal(validated, self._values[spec.name])
        if equal and not force_set:
            return

        self._notification_spec = spec
        try:
            self._set_value(spec, validated)
        finally:
            self._notification_spec = None

    def _set_value(self, spec: PropertySpec, value: Any) -> None:
        self._values[spec.name] = value
        if spec.name == BACKGROUND_IMAGE_FILE:
            self._values[BACKGROUND_IMAGE] = None
            self._background_load_failed = False
            self._notify(_lookup(BACKGROUND_IMAGE))
        self._notify(spec)

    def _notify(self, spec: PropertySpec) -> None:
        for callback in list(self._notify_callbacks):
            callback(self, spec.name)
        if spec.stored and spec is not self._notification_spec:
            self._schedule_save(spec)

    def _schedule_save(self, spec: PropertySpec) -> None:
        if spec not in self._dirty:
            self._dirty.append(spec)
        self._save_pending = True

    def _ensure_background_image(self) -> None:
        if self._values[BACKGROUND_IMAGE] is not None or self._background_load_failed:
            return
        path = self._values[BACKGROUND_IMAGE_FILE]
        if not path:
            self._background_load_failed = True
            return
        try:
            with Image.open(path) as image:
                image.load()
                loaded = image.copy()
        except (OSError, ValueError):
            self._background_load_failed = True
            return
        self._values[BACKGROUND_IMAGE] = loaded

    def get(self, prop_name: str) -> Any:
        """Return a property value; raises KeyError for an unknown property."""
        spec = _lookup(prop_name)
        if spec.kind is PropertyKind.IMAGE:
            self._ensure_background_image()
        value = self._values[spec.name]
        if spec.kind is PropertyKind.PALETTE and value is not None:
            return list(value)
        return value

    def set(self, prop_name: str, value: Any) -> None:
        """Set a property and schedule it to be saved.

        Raises KeyError for an unknown property, ValueError for one that
        cannot be set and TypeError for a value of the wrong type.
        """
        spec = _lookup(prop_name)
        if not spec.writable or spec.construct_only:
            raise ValueError(f"property {prop_name!r} cannot be set")
        self._set_value(spec, spec.validate(value))

    def is_locked(self, prop_name: str) -> bool:
        """True if the settings store does not allow the property to change."""
        spec = _lookup(prop_name)
        return self._locked.get(spec.name, False)

    def reset(self, prop_name: str) -> None:
        """Set a property back to its default value."""
        spec = _lookup(prop_name)
        if not spec.writable or spec.construct_only:
            return
        self._set_value(spec, spec.validate(spec.default()))

    def background_image(self) -> Optional[Image.Image]:
        """Return the background image, loading it on first use; None if it fails."""
        self._ensure_background_image()
        return self._values[BACKGROUND_IMAGE]

    def get_palette(self) -> list[Optional[RGBA]]:
        """Return a copy of the palette colours."""
        palette = self._values[PALETTE]
        return list(palette) if palette is not None else []

    def palette_builtin_index(self) -> Optional[int]:
        """Return the index of the built-in palette in use, or None."""
        palette = self.get_palette()
        if len(palette) != PALETTE_SIZE or any(color is None for color in palette):
            return None
        for index, builtin in enumerate(BUILTIN_PALETTES):
            if palette_equal(palette, builtin):
                return index
        return None

    def set_palette_builtin(self, index: int) -> None:
        """Switch to one of the built-in palettes; raises IndexError if there is none."""
        if not 0 <= index < PALETTE_N_BUILTINS:
            raise IndexError(f"no built-in palette {index}")
        self.set(PALETTE, fill_palette(BUILTIN_PALETTES[index]))

    def modify_palette_entry(self, index: int, color: RGBA) -> bool:
        """Replace one palette colour; returns False if the index is out of range."""
        palette = self._values[PALETTE]
        if palette is None or not 0 <= index < len(palette):
            return False
        old = palette[index]
        if old is None or not rgba_equal(old, color):
            palette[index] = color
            self._notify(_lookup(PALETTE))
        return True

    def connect_notify(self, callback: NotifyCallback) -> None:
        """Call ``callback(profile, prop_name)`` whenever a property is set."""
        self._notify_callbacks.append(callback)

    def connect_forgotten(self, callback: ForgottenCallback) -> None:
        """Call ``callback(profile)`` when the profile is forgotten."""
        self._forgotten_callbacks.append(callback)

    def forget(self) -> None:
        """Mark the profile as forgotten; listeners are told once."""
        if self._forgotten:
            return
        self._forgotten = True
        for callback in list(self._forgotten_callbacks):
            callback(self)

    def forgotten(self) -> bool:
        return self._forgotten

    def save(self) -> None:
        """Write every changed property to the settings store.

        Keys that the store has locked are skipped.
        """
        self._save_pending = False
        dirty, self._dirty = self._dirty, []
        changeset = self._backend.changeset(self._path)
        for spec in dirty:
            if not spec.stored:
                continue
            encoded = spec.encode(self._values[spec.name])
            if encoded is None:
                continue
            try:
                changeset.set(spec.key, encoded)
            except PermissionError:
                continue
        changeset.apply()

    def clone(self, visible_name: str, existing_names: Iterable[str] = ()) -> "Profile":
        """Copy this profile under the first free ``profileN`` name and save it."""
        taken = set(existing_names)
        new_name = next(
            candidate
            for candidate in (f"profile{n}" for n in itertools.count())
            if candidate not in taken
        )
        overrides = {}
        for spec in SPECS:
            if not spec.writable or spec.construct_only:
                continue
            value = visible_name if spec.name == VISIBLE_NAME else self.get(spec.name)
            overrides[spec.name.replace("-", "_")] = value

        copy = Profile(new_name, self._backend, **overrides)
        copy._dirty = [spec for spec in SPECS if spec.writable]
        copy.save()
        return copy

    def close(self) -> None:
        """Stop listening to settings, write pending changes and forget the profile."""
        if self._closed:
            return
        self._closed = True
        self._backend.disconnect(self._path, self._on_settings_changed)
        if self._save_pending:
            self.save()
        self.forget()

    def __enter__(self) -> "Profile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
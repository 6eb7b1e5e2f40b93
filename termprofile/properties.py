"""Descriptions of every terminal profile property: defaults, ranges and storage."""

from __future__ import annotations

import gettext
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence

from .colors import (
    DEFAULT_PALETTE,
    RGBA,
    fill_palette,
    format_color,
    format_palette,
    parse_color,
    parse_palette,
    rgba_equal,
)
from .enums import (
    BackgroundType,
    CursorBlinkMode,
    CursorShape,
    EraseBinding,
    ExitAction,
    ScrollbarPosition,
    TitleMode,
    enum_from_nick,
    enum_to_nick,
)
from .font import FontDescription

_ = gettext.gettext

MAX_INT = 2**31 - 1

# Property names
ALLOW_BOLD = "allow-bold"
BACKGROUND_COLOR = "background-color"
BACKGROUND_DARKNESS = "background-darkness"
BACKGROUND_IMAGE = "background-image"
BACKGROUND_IMAGE_FILE = "background-image-file"
BACKGROUND_TYPE = "background-type"
BACKSPACE_BINDING = "backspace-binding"
BOLD_COLOR = "bold-color"
BOLD_COLOR_SAME_AS_FG = "bold-color-same-as-fg"
CURSOR_BLINK_MODE = "cursor-blink-mode"
CURSOR_SHAPE = "cursor-shape"
CUSTOM_COMMAND = "custom-command"
DEFAULT_SHOW_MENUBAR = "default-show-menubar"
DEFAULT_SIZE_COLUMNS = "default-size-columns"
DEFAULT_SIZE_ROWS = "default-size-rows"
DELETE_BINDING = "delete-binding"
EXIT_ACTION = "exit-action"
FONT = "font"
FOREGROUND_COLOR = "foreground-color"
LOGIN_SHELL = "login-shell"
NAME = "name"
PALETTE = "palette"
SCROLL_BACKGROUND = "scroll-background"
SCROLLBACK_LINES = "scrollback-lines"
SCROLLBACK_UNLIMITED = "scrollback-unlimited"
SCROLLBAR_POSITION = "scrollbar-position"
SCROLL_ON_KEYSTROKE = "scroll-on-keystroke"
SCROLL_ON_OUTPUT = "scroll-on-output"
SILENT_BELL = "silent-bell"
COPY_SELECTION = "copy-selection"
TITLE_MODE = "title-mode"
TITLE = "title"
USE_CUSTOM_COMMAND = "use-custom-command"
USE_CUSTOM_DEFAULT_SIZE = "use-custom-default-size"
USE_SKEY = "use-skey"
USE_URLS = "use-urls"
USE_SYSTEM_FONT = "use-system-font"
USE_THEME_COLORS = "use-theme-colors"
VISIBLE_NAME = "visible-name"
WORD_CHARS = "word-chars"

DEFAULT_FOREGROUND_COLOR = "#000000"
DEFAULT_BACKGROUND_COLOR = "#FFFFDD"
DEFAULT_FONT = "Monospace 12"
DEFAULT_WORD_CHARS = "-A-Za-z0-9,./?%&#:_=+@~"


class PropertyKind(Enum):
    """The value type a property holds."""

    BOOLEAN = "boolean"
    STRING = "string"
    ENUM = "enum"
    COLOR = "color"
    FONT = "font"
    DOUBLE = "double"
    INT = "int"
    PALETTE = "palette"
    IMAGE = "image"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class PropertySpec:
    """One profile property and, if it is stored, its settings key."""

    name: str
    kind: PropertyKind
    key: Optional[str] = None
    initial: Any = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    enum_type: Optional[type] = None
    writable: bool = True
    construct_only: bool = False

    @property
    def stored(self) -> bool:
        """True if the property is written to and read from settings."""
        return self.key is not None and self.writable

    def default(self) -> Any:
        """Return a fresh default value for the property."""
        if self.kind is PropertyKind.COLOR:
            color = parse_color(self.initial)
            return RGBA(color.red, color.green, color.blue, 1.0)
        if self.kind is PropertyKind.FONT:
            return FontDescription.from_string(self.initial)
        if self.kind is PropertyKind.PALETTE:
            return list(DEFAULT_PALETTE)
        return self.initial

    def validate(self, value: Any) -> Any:
        """Return ``value`` brought into the property's range.

        Out-of-range numbers are clamped and unknown enum values fall back to
        the default. Raises TypeError for a value of the wrong type.
        """
        kind = self.kind
        if kind is PropertyKind.BOOLEAN:
            if not isinstance(value, bool):
                raise TypeError(f"{self.name} needs a bool, got {value!r}")
            return value
        if kind is PropertyKind.STRING:
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{self.name} needs a string, got {value!r}")
            return value
        if kind is PropertyKind.ENUM:
            if not _is_int(value):
                raise TypeError(f"{self.name} needs an enum value, got {value!r}")
            try:
                return self.enum_type(value)
            except ValueError:
                return self.default()
        if kind is PropertyKind.INT:
            if not _is_int(value):
                raise TypeError(f"{self.name} needs an int, got {value!r}")
            return int(min(self.maximum, max(self.minimum, value)))
        if kind is PropertyKind.DOUBLE:
            if not _is_number(value):
                raise TypeError(f"{self.name} needs a number, got {value!r}")
            return float(min(self.maximum, max(self.minimum, value)))
        if kind is PropertyKind.COLOR:
            if value is not None and not isinstance(value, RGBA):
                raise TypeError(f"{self.name} needs an RGBA colour, got {value!r}")
            return value
        if kind is PropertyKind.FONT:
            if value is not None and not isinstance(value, FontDescription):
                raise TypeError(f"{self.name} needs a FontDescription, got {value!r}")
            return value
        if kind is PropertyKind.PALETTE:
            if value is None:
                return None
            if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
                raise TypeError(f"{self.name} needs a sequence of colours")
            colors = list(value)
            for color in colors:
                if color is not None and not isinstance(color, RGBA):
                    raise TypeError(f"{self.name} holds a non-colour: {color!r}")
            return colors
        return value

    def values_equal(self, a: Any, b: Any) -> bool:
        """Compare two values of this property, colours loosely."""
        kind = self.kind
        if kind is PropertyKind.IMAGE:
            return a is b
        if a == b:
            return True
        if kind is PropertyKind.COLOR:
            if a is None or b is None:
                return False
            return rgba_equal(a, b)
        if kind is PropertyKind.PALETTE:
            if a is None or b is None or len(a) != len(b):
                return False
            for x, y in zip(a, b):
                if x is None or y is None:
                    if x is not y:
                        return False
                elif not rgba_equal(x, y):
                    return False
            return True
        return False

    def decode(self, raw: Any) -> Any:
        """Turn a stored settings value into a property value.

        Raises TypeError if the stored value has the wrong type and
        ValueError if it cannot be parsed.
        """
        kind = self.kind
        if kind is PropertyKind.BOOLEAN:
            if not isinstance(raw, bool):
                raise TypeError(f"{self.name}: stored value is not a bool")
            return raw
        if kind is PropertyKind.INT:
            if not _is_int(raw):
                raise TypeError(f"{self.name}: stored value is not an int")
            return raw
        if kind is PropertyKind.DOUBLE:
            if not isinstance(raw, float):
                raise TypeError(f"{self.name}: stored value is not a double")
            return raw
        if kind is PropertyKind.IMAGE:
            raise TypeError(f"{self.name} is not stored in settings")
        if not isinstance(raw, str):
            raise TypeError(f"{self.name}: stored value is not a string")
        if kind is PropertyKind.STRING:
            return raw
        if kind is PropertyKind.ENUM:
            return enum_from_nick(self.enum_type, raw)
        if kind is PropertyKind.COLOR:
            return parse_color(raw)
        if kind is PropertyKind.FONT:
            return FontDescription.from_string(raw)
        return fill_palette(parse_palette(raw))

    def encode(self, value: Any) -> Any:
        """Turn a property value into its stored form.

        Returns None when there is nothing to store (a missing colour,
        font or palette). Raises TypeError for a property not stored in
        settings.
        """
        kind = self.kind
        if kind is PropertyKind.BOOLEAN:
            return bool(value)
        if kind is PropertyKind.STRING:
            return value if value is not None else ""
        if kind is PropertyKind.ENUM:
            return enum_to_nick(self.enum_type(value))
        if kind is PropertyKind.INT:
            return int(value)
        if kind is PropertyKind.DOUBLE:
            return float(value)
        if kind is PropertyKind.IMAGE:
            raise TypeError(f"{self.name} is not stored in settings")
        if value is None:
            return None
        if kind is PropertyKind.COLOR:
            return format_color(value)
        if kind is PropertyKind.FONT:
            return value.to_string()
        return format_palette(value)


def _boolean(name: str, default: bool) -> PropertySpec:
    return PropertySpec(name, PropertyKind.BOOLEAN, key=name, initial=default)


def _enum(name: str, enum_type: type, default: Any) -> PropertySpec:
    return PropertySpec(
        name, PropertyKind.ENUM, key=name, initial=default, enum_type=enum_type
    )


def _int(name: str, minimum: int, maximum: int, default: int) -> PropertySpec:
    return PropertySpec(
        name, PropertyKind.INT, key=name, initial=default,
        minimum=minimum, maximum=maximum,
    )


def _string(name: str, default: Optional[str], key: Optional[str] = None) -> PropertySpec:
    return PropertySpec(name, PropertyKind.STRING, key=key or name, initial=default)


def _color(name: str, default: str) -> PropertySpec:
    return PropertySpec(name, PropertyKind.COLOR, key=name, initial=default)


SPECS: tuple[PropertySpec, ...] = (
    _boolean(ALLOW_BOLD, True),
    _color(BACKGROUND_COLOR, DEFAULT_BACKGROUND_COLOR),
    PropertySpec(
        BACKGROUND_DARKNESS, PropertyKind.DOUBLE, key=BACKGROUND_DARKNESS,
        initial=0.5, minimum=0.0, maximum=1.0,
    ),
    PropertySpec(BACKGROUND_IMAGE, PropertyKind.IMAGE, writable=False),
    _string(BACKGROUND_IMAGE_FILE, "", key="background-image"),
    _enum(BACKGROUND_TYPE, BackgroundType, BackgroundType.SOLID),
    _enum(BACKSPACE_BINDING, EraseBinding, EraseBinding.ASCII_DELETE),
    _color(BOLD_COLOR, DEFAULT_FOREGROUND_COLOR),
    _boolean(BOLD_COLOR_SAME_AS_FG, True),
    _enum(CURSOR_BLINK_MODE, CursorBlinkMode, CursorBlinkMode.SYSTEM),
    _enum(CURSOR_SHAPE, CursorShape, CursorShape.BLOCK),
    _string(CUSTOM_COMMAND, ""),
    _int(DEFAULT_SIZE_COLUMNS, 1, 1024, 80),
    _int(DEFAULT_SIZE_ROWS, 1, 1024, 24),
    _boolean(DEFAULT_SHOW_MENUBAR, True),
    _enum(DELETE_BINDING, EraseBinding, EraseBinding.DELETE_SEQUENCE),
    _enum(EXIT_ACTION, ExitAction, ExitAction.CLOSE),
    PropertySpec(FONT, PropertyKind.FONT, key=FONT, initial=DEFAULT_FONT),
    _color(FOREGROUND_COLOR, DEFAULT_FOREGROUND_COLOR),
    _boolean(LOGIN_SHELL, False),
    PropertySpec(NAME, PropertyKind.STRING, initial=None, construct_only=True),
    PropertySpec(PALETTE, PropertyKind.PALETTE, key=PALETTE),
    _boolean(SCROLL_BACKGROUND, True),
    _int(SCROLLBACK_LINES, 1, MAX_INT, 512),
    _boolean(SCROLLBACK_UNLIMITED, False),
    _enum(SCROLLBAR_POSITION, ScrollbarPosition, ScrollbarPosition.RIGHT),
    _boolean(SCROLL_ON_KEYSTROKE, True),
    _boolean(SCROLL_ON_OUTPUT, False),
    _boolean(SILENT_BELL, False),
    _string(TITLE, _("Terminal")),
    _enum(TITLE_MODE, TitleMode, TitleMode.REPLACE),
    _boolean(USE_CUSTOM_COMMAND, False),
    _boolean(USE_CUSTOM_DEFAULT_SIZE, False),
    _boolean(USE_SKEY, True),
    _boolean(USE_URLS, True),
    _boolean(USE_SYSTEM_FONT, True),
    _boolean(USE_THEME_COLORS, True),
    _string(VISIBLE_NAME, _("Unnamed")),
    _string(WORD_CHARS, DEFAULT_WORD_CHARS),
    _boolean(COPY_SELECTION, False),
)

_BY_NAME = {spec.name: spec for spec in SPECS}
_BY_KEY = {spec.key: spec for spec in SPECS if spec.key is not None}


def find_spec(name: str) -> Optional[PropertySpec]:
    """Return the spec of a property by name, or None if there is none."""
    return _BY_NAME.get(name)


def spec_for_key(key: str) -> Optional[PropertySpec]:
    """Return the spec stored under a settings key, or None for unknown keys."""
    return _BY_KEY.get(key)
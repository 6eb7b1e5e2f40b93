"""Enumerations used by terminal profile settings."""

from __future__ import annotations

from enum import IntEnum
from typing import Type, TypeVar


class _NickEnum(IntEnum):
    """Integer enum whose members have a lower-case, dash-separated nick."""

    @property
    def nick(self) -> str:
        return self.name.lower().replace("_", "-")


class TitleMode(_NickEnum):
    REPLACE = 0
    BEFORE = 1
    AFTER = 2
    IGNORE = 3


class ScrollbarPosition(_NickEnum):
    LEFT = 0
    RIGHT = 1
    HIDDEN = 2


class ExitAction(_NickEnum):
    CLOSE = 0
    RESTART = 1
    HOLD = 2


class BackgroundType(_NickEnum):
    SOLID = 0
    IMAGE = 1
    TRANSPARENT = 2


class EraseBinding(_NickEnum):
    AUTO = 0
    ASCII_BACKSPACE = 1
    ASCII_DELETE = 2
    DELETE_SEQUENCE = 3
    TTY = 4


class CursorBlinkMode(_NickEnum):
    SYSTEM = 0
    ON = 1
    OFF = 2


class CursorShape(_NickEnum):
    BLOCK = 0
    IBEAM = 1
    UNDERLINE = 2


E = TypeVar("E", bound=_NickEnum)


def enum_from_nick(enum_type: Type[E], nick: str) -> E:
    """Look up a member by its nick; raises ValueError if there is none."""
    for member in enum_type:
        if member.nick == nick:
            return member
    raise ValueError(f"{nick!r} is not a valid {enum_type.__name__} nick")


def enum_to_nick(member: _NickEnum) -> str:
    """Return the nick of an enum member."""
    return member.nick
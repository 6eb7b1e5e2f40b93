"""Colours and palettes for terminal profiles."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

PALETTE_SIZE = 16

PALETTE_TANGO = 0
PALETTE_LINUX = 1
PALETTE_XTERM = 2
PALETTE_RXVT = 3
PALETTE_SOLARIZED = 4
PALETTE_N_BUILTINS = 5

_EQUAL_TOLERANCE = 1e-4


@dataclass(frozen=True)
class RGBA:
    """A colour with floating point channels in the range 0..1."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0


def _palette(rows: Iterable[tuple]) -> tuple[RGBA, ...]:
    return tuple(RGBA(*row) for row in rows)


BUILTIN_PALETTES: tuple[tuple[RGBA, ...], ...] = (
    # Tango
    _palette([
        (0, 0, 0, 1),
        (0.8, 0, 0, 1),
        (0.305882, 0.603922, 0.0235294, 1),
        (0.768627, 0.627451, 0, 1),
        (0.203922, 0.396078, 0.643137, 1),
        (0.458824, 0.313725, 0.482353, 1),
        (0.0235294, 0.596078, 0.603922, 1),
        (0.827451, 0.843137, 0.811765, 1),
        (0.333333, 0.341176, 0.32549, 1),
        (0.937255, 0.160784, 0.160784, 1),
        (0.541176, 0.886275, 0.203922, 1),
        (0.988235, 0.913725, 0.309804, 1),
        (0.447059, 0.623529, 0.811765, 1),
        (0.678431, 0.498039, 0.658824, 1),
        (0.203922, 0.886275, 0.886275, 1),
        (0.933333, 0.933333, 0.92549, 1),
    ]),
    # Linux console
    _palette([
        (0, 0, 0, 1),
        (0.666667, 0, 0, 1),
        (0, 0.666667, 0, 1),
        (0.666667, 0.333333, 0, 1),
        (0, 0, 0.666667, 1),
        (0.666667, 0, 0.666667, 1),
        (0, 0.666667, 0.666667, 1),
        (0.666667, 0.666667, 0.666667, 1),
        (0.333333, 0.333333, 0.333333, 1),
        (1, 0.333333, 0.333333, 1),
        (0.333333, 1, 0.333333, 1),
        (1, 1, 0.333333, 1),
        (0.333333, 0.333333, 1, 1),
        (1, 0.333333, 1, 1),
        (0.333333, 1, 1, 1),
        (1, 1, 1, 1),
    ]),
    # XTerm
    _palette([
        (0, 0, 0, 1),
        (0.803922, 0, 0, 1),
        (0, 0.803922, 0, 1),
        (0.803922, 0.803922, 0, 1),
        (0.117647, 0.564706, 1, 1),
        (0.803922, 0, 0.803922, 1),
        (0, 0.803922, 0.803922, 1),
        (0.898039, 0.898039, 0.898039, 1),
        (0.298039, 0.298039, 0.298039, 1),
        (1, 0, 0, 1),
        (0, 1, 0, 1),
        (1, 1, 0, 1),
        (0.27451, 0.509804, 0.705882, 1),
        (1, 0, 1, 1),
        (0, 1, 1, 1),
        (1, 1, 1, 1),
    ]),
    # RXVT
    _palette([
        (0, 0, 0, 1),
        (0.803922, 0, 0, 1),
        (0, 0.803922, 0, 1),
        (0.803922, 0.803922, 0, 1),
        (0, 0, 0.803922, 1),
        (0.803922, 0, 0.803922, 1),
        (0, 0.803922, 0.803922, 1),
        (0.980392, 0.921569, 0.843137, 1),
        (0.25098, 0.25098, 0.25098, 1),
        (1, 0, 0, 1),
        (0, 1, 0, 1),
        (1, 1, 0, 1),
        (0, 0, 1, 1),
        (1, 0, 1, 1),
        (0, 1, 1, 1),
        (1, 1, 1, 1),
    ]),
    # Solarized
    _palette([
        (0.02745, 0.211764, 0.258823, 1),
        (0.862745, 0.196078, 0.184313, 1),
        (0.521568, 0.6, 0, 1),
        (0.709803, 0.537254, 0, 1),
        (0.149019, 0.545098, 0.823529, 1),
        (0.82745, 0.211764, 0.509803, 1),
        (0.164705, 0.631372, 0.596078, 1),
        (0.933333, 0.909803, 0.835294, 1),
        (0, 0.168627, 0.211764, 1),
        (0.796078, 0.294117, 0.086274, 1),
        (0.345098, 0.431372, 0.458823, 1),
        (0.396078, 0.482352, 0.513725, 1),
        (0.513725, 0.580392, 0.588235, 1),
        (0.423529, 0.443137, 0.768627, 1),
        (0.57647, 0.631372, 0.631372, 1),
        (0.992156, 0.964705, 0.890196, 1),
    ]),
)

DEFAULT_PALETTE: tuple[RGBA, ...] = BUILTIN_PALETTES[PALETTE_TANGO]

_HEX_RE = re.compile(r"#([0-9a-fA-F]+)")
_FUNC_RE = re.compile(r"(rgba?)\s*\((.*)\)", re.IGNORECASE | re.DOTALL)


def _hex_channel(digits: str) -> float:
    """Expand 1-4 hex digits to a 16-bit value by bit replication, then scale."""
    bits = len(digits) * 4
    value = int(digits, 16) << (16 - bits)
    while bits < 16:
        value |= value >> bits
        bits *= 2
    return (value & 0xFFFF) / 65535.0


def _parse_hex(digits: str) -> RGBA:
    length = len(digits)
    if length % 3 or length < 3 or length > 12:
        raise ValueError(f"invalid hex colour: #{digits}")
    width = length // 3
    red, green, blue = (
        _hex_channel(digits[i * width:(i + 1) * width]) for i in range(3)
    )
    return RGBA(red, green, blue, 1.0)


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def _parse_component(text: str) -> float:
    text = text.strip()
    try:
        if text.endswith("%"):
            return _clamp(float(text[:-1]) / 100.0)
        return _clamp(float(text) / 255.0)
    except ValueError:
        raise ValueError(f"invalid colour component: {text!r}") from None


def _parse_alpha(text: str) -> float:
    try:
        return _clamp(float(text.strip()))
    except ValueError:
        raise ValueError(f"invalid alpha component: {text!r}") from None


def _parse_function(name: str, body: str) -> RGBA:
    parts = body.split(",")
    expected = 4 if name.lower() == "rgba" else 3
    if len(parts) != expected:
        raise ValueError(f"{name}() takes {expected} components")
    red, green, blue = (_parse_component(part) for part in parts[:3])
    alpha = _parse_alpha(parts[3]) if expected == 4 else 1.0
    return RGBA(red, green, blue, alpha)


def parse_color(text: str) -> RGBA:
    """Parse ``#rgb`` style hex (1-4 digits per channel), ``rgb()`` or ``rgba()``.

    Raises ValueError if the text is not a colour.
    """
    spec = text.strip()
    match = _HEX_RE.fullmatch(spec)
    if match:
        return _parse_hex(match.group(1))
    match = _FUNC_RE.fullmatch(spec)
    if match:
        return _parse_function(match.group(1), match.group(2))
    raise ValueError(f"cannot parse colour: {text!r}")


def rgba_equal(a: RGBA, b: RGBA) -> bool:
    """Loose colour equality: squared channel distance below 1e-4."""
    distance = (
        (a.red - b.red) ** 2
        + (a.green - b.green) ** 2
        + (a.blue - b.blue) ** 2
        + (a.alpha - b.alpha) ** 2
    )
    return distance < _EQUAL_TOLERANCE


def palette_equal(a: Sequence[RGBA], b: Sequence[RGBA]) -> bool:
    """Compare the first PALETTE_SIZE entries of two palettes."""
    if len(a) < PALETTE_SIZE or len(b) < PALETTE_SIZE:
        return False
    return all(rgba_equal(x, y) for x, y in zip(a[:PALETTE_SIZE], b[:PALETTE_SIZE]))


def format_color(color: RGBA) -> str:
    """Format a colour as ``#RRRRGGGGBBBB`` with 16 bits per channel."""
    return "#{:04X}{:04X}{:04X}".format(
        int(color.red * 65535),
        int(color.green * 65535),
        int(color.blue * 65535),
    )


def format_palette(colors: Iterable[Optional[RGBA]]) -> str:
    """Join colours with ``:``; missing entries leave an empty slot."""
    return ":".join("" if color is None else format_color(color) for color in colors)


def parse_palette(text: str) -> list[RGBA]:
    """Split a ``:``-separated palette; unparsable entries become all-zero colours."""
    if not text:
        return []
    colors = []
    for part in text.split(":"):
        try:
            colors.append(parse_color(part))
        except ValueError:
            colors.append(RGBA(0.0, 0.0, 0.0, 0.0))
    return colors


def fill_palette(colors: Sequence[RGBA]) -> list[RGBA]:
    """Return the colours, padded up to PALETTE_SIZE from the default palette."""
    result = list(colors)
    result.extend(DEFAULT_PALETTE[len(result):PALETTE_SIZE])
    return result
"""Font descriptions in the ``FAMILY [STYLE-OPTIONS] [SIZE]`` text form."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Optional

_WEIGHT_WORDS = {
    "thin": 100,
    "ultralight": 200,
    "extralight": 200,
    "light": 300,
    "semilight": 350,
    "demilight": 350,
    "book": 380,
    "regular": 400,
    "medium": 500,
    "semibold": 600,
    "demibold": 600,
    "bold": 700,
    "ultrabold": 800,
    "extrabold": 800,
    "heavy": 900,
    "black": 900,
    "ultraheavy": 1000,
    "extraheavy": 1000,
}

_WEIGHT_NAMES = {
    100: "Thin",
    200: "Ultra-Light",
    300: "Light",
    350: "Semi-Light",
    380: "Book",
    500: "Medium",
    600: "Semi-Bold",
    700: "Bold",
    800: "Ultra-Bold",
    900: "Heavy",
    1000: "Ultra-Heavy",
}

_STYLE_NAMES = {"italic": "Italic", "oblique": "Oblique"}
_VARIANT_NAMES = {"small-caps": "Small-Caps"}
_STRETCH_NAMES = {
    "ultra-condensed": "Ultra-Condensed",
    "extra-condensed": "Extra-Condensed",
    "condensed": "Condensed",
    "semi-condensed": "Semi-Condensed",
    "semi-expanded": "Semi-Expanded",
    "expanded": "Expanded",
    "extra-expanded": "Extra-Expanded",
    "ultra-expanded": "Ultra-Expanded",
}

_LAST_WORD = re.compile(r"[^\s,]*$")


def _key(word: str) -> str:
    return word.lower().replace("-", "").replace("_", "")


_STYLE_KEYS = {_key(name): value for value, name in _STYLE_NAMES.items()}
_VARIANT_KEYS = {_key(name): value for value, name in _VARIANT_NAMES.items()}
_STRETCH_KEYS = {_key(name): value for value, name in _STRETCH_NAMES.items()}


def _split_last(text: str) -> tuple[str, str]:
    stripped = text.rstrip(" \t\r\n,")
    match = _LAST_WORD.search(stripped)
    return stripped[:match.start()], match.group()


def _parse_size(word: str) -> Optional[tuple[float, bool]]:
    absolute = word.lower().endswith("px")
    number = word[:-2] if absolute else word
    try:
        size = float(number)
    except ValueError:
        return None
    if not math.isfinite(size) or size < 0:
        return None
    return size, absolute


def _is_keyword(word: str) -> bool:
    key = _key(word)
    return (
        key == "normal"
        or key in _WEIGHT_WORDS
        or key in _STYLE_KEYS
        or key in _VARIANT_KEYS
        or key in _STRETCH_KEYS
    )


@dataclass(frozen=True)
class FontDescription:
    """A font family with style options and a size in points (or pixels)."""

    family: Optional[str] = None
    weight: int = 400
    style: str = "normal"
    variant: str = "normal"
    stretch: str = "normal"
    size: float = 0.0
    absolute_size: bool = False

    def __post_init__(self) -> None:
        if self.style != "normal" and self.style not in _STYLE_NAMES:
            raise ValueError(f"unknown font style: {self.style!r}")
        if self.variant != "normal" and self.variant not in _VARIANT_NAMES:
            raise ValueError(f"unknown font variant: {self.variant!r}")
        if self.stretch != "normal" and self.stretch not in _STRETCH_NAMES:
            raise ValueError(f"unknown font stretch: {self.stretch!r}")
        if not 100 <= self.weight <= 1000:
            raise ValueError(f"font weight out of range: {self.weight}")
        if self.size < 0:
            raise ValueError(f"font size must not be negative: {self.size}")

    @classmethod
    def from_string(cls, text: str) -> "FontDescription":
        """Parse a description such as ``"Monospace Bold 12"``."""
        fields: dict = {}
        head, word = _split_last(text)
        parsed = _parse_size(word) if word else None
        if parsed is not None:
            fields["size"], fields["absolute_size"] = parsed
            remaining = head
        else:
            remaining = text

        while True:
            head, word = _split_last(remaining)
            if not word or not _is_keyword(word):
                break
            key = _key(word)
            if key in _WEIGHT_WORDS:
                fields["weight"] = _WEIGHT_WORDS[key]
            elif key in _STYLE_KEYS:
                fields["style"] = _STYLE_KEYS[key]
            elif key in _VARIANT_KEYS:
                fields["variant"] = _VARIANT_KEYS[key]
            elif key in _STRETCH_KEYS:
                fields["stretch"] = _STRETCH_KEYS[key]
            remaining = head

        family = remaining.strip(" \t\r\n,")
        fields["family"] = family or None
        return cls(**fields)

    def _style_words(self) -> list[str]:
        words = []
        if self.weight != 400:
            words.append(_WEIGHT_NAMES.get(self.weight, str(self.weight)))
        if self.style != "normal":
            words.append(_STYLE_NAMES[self.style])
        if self.stretch != "normal":
            words.append(_STRETCH_NAMES[self.stretch])
        if self.variant != "normal":
            words.append(_VARIANT_NAMES[self.variant])
        return words

    def to_string(self) -> str:
        """Format the description so that from_string reads it back."""
        parts = []
        if self.family:
            family = self.family
            last = family.split()[-1] if family.split() else ""
            if last and (_is_keyword(last) or _parse_size(last) is not None):
                family += ","
            parts.append(family)
        words = self._style_words()
        if not words and not parts and self.size == 0:
            words = ["Normal"]
        parts.extend(words)
        if self.size > 0:
            parts.append(f"{self.size:g}" + ("px" if self.absolute_size else ""))
        return " ".join(parts)

    def __str__(self) -> str:
        return self.to_string()
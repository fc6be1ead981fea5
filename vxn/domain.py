"""Domain types shared by the controller, the parameter tables and editors."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

__all__ = [
    "Layer",
    "KeyMode",
    "PresetMeta",
    "DEFAULT_SPLIT_POINT",
    "UNCATEGORIZED",
]


class Layer(IntEnum):
    """Which of the two always-present patches a per-patch param belongs to.

    The value doubles as the index into per-layer arrays.
    """

    UPPER = 0
    LOWER = 1


class KeyMode(IntEnum):
    """Keyboard mode: one patch, both layered, or split across the keyboard."""

    WHOLE = 0
    DUAL = 1
    SPLIT = 2

    @classmethod
    def from_u8(cls, v: int) -> "KeyMode":
        """Decode a stored byte; unknown values fall back to ``WHOLE``."""
        try:
            return cls(v)
        except ValueError:
            return cls.WHOLE

    def label(self) -> str:
        """Human-readable name of the mode."""
        return _KEY_MODE_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> Optional["KeyMode"]:
        """Find the mode whose label matches ``label`` (ASCII case-insensitive)."""
        wanted = _ascii_lower(label)
        return next((m for m in cls if _ascii_lower(m.label()) == wanted), None)


_KEY_MODE_LABELS = {
    KeyMode.WHOLE: "Whole",
    KeyMode.DUAL: "Dual",
    KeyMode.SPLIT: "Split",
}


def _ascii_lower(text: str) -> str:
    return "".join(c.lower() if c.isascii() else c for c in text)


DEFAULT_SPLIT_POINT = 60
"""Split point (MIDI note) used when none has been set: middle C."""

UNCATEGORIZED = "Uncategorised"
"""Label of the virtual root group of the user preset corpus."""


@dataclass
class PresetMeta:
    """Preset metadata as shown to the view."""

    name: str = ""
    author: Optional[str] = None
    category: Optional[str] = None
    comment: Optional[str] = None
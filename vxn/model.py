"""The parameter model the controller programs against."""

from __future__ import annotations

import operator
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from vxn.domain import KeyMode
from vxn.params import ParamDesc

__all__ = ["ParamId", "StateError", "ParamModel"]


@dataclass(frozen=True, order=True)
class ParamId:
    """Stable id of a parameter: its CLAP id. Indexes the model."""

    raw: int

    def __post_init__(self) -> None:
        raw = operator.index(self.raw)
        if raw < 0:
            raise ValueError(f"parameter id must be non-negative, got {raw}")
        object.__setattr__(self, "raw", raw)

    def __int__(self) -> int:
        return self.raw

    def __index__(self) -> int:
        return self.raw


class StateError(Exception):
    """A saved state blob could not be applied to the model."""


class ParamModel(ABC):
    """The live parameter store plus non-automatable shared state.

    Besides the parameter array it exposes the key mode, the split point and
    an opaque byte channel for saving and restoring the whole store.
    """

    @abstractmethod
    def total(self) -> int:
        """Number of parameters in the store."""

    @abstractmethod
    def get(self, id: ParamId) -> float:
        """Plain value of a parameter."""

    @abstractmethod
    def set(self, id: ParamId, plain: float) -> None:
        """Write a plain value."""

    @abstractmethod
    def get_normalized(self, id: ParamId) -> float:
        """Value of a parameter normalised to ``[0, 1]``."""

    @abstractmethod
    def set_normalized(self, id: ParamId, norm: float) -> None:
        """Write a normalised value."""

    @abstractmethod
    def gesture(self, id: ParamId) -> bool:
        """Whether the user is currently dragging this parameter."""

    @abstractmethod
    def set_gesture(self, id: ParamId, on: bool) -> None:
        """Mark the start or end of a user gesture on a parameter."""

    @abstractmethod
    def descriptor(self, id: ParamId) -> Optional[ParamDesc]:
        """Static descriptor (range, formatting, fader mapping) of a parameter."""

    @abstractmethod
    def key_mode(self) -> KeyMode:
        """Current key mode."""

    @abstractmethod
    def set_key_mode(self, mode: KeyMode) -> None:
        """Set the key mode without any seeding (used by state load)."""

    @abstractmethod
    def set_key_mode_seeded(self, mode: KeyMode) -> None:
        """Set the key mode from a UI edit, seeding Lower from Upper on entry."""

    @abstractmethod
    def split_point(self) -> int:
        """Split point as a MIDI note."""

    @abstractmethod
    def set_split_point(self, note: int) -> None:
        """Set the split point."""

    @abstractmethod
    def snapshot_bytes(self) -> bytes:
        """Serialise the whole store for host state save."""

    @abstractmethod
    def restore_from_bytes(self, blob: bytes) -> None:
        """Apply a saved blob; raises :class:`StateError` when it is invalid."""
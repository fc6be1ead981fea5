"""Host-tempo sync: map LFO rate knobs to musical subdivisions."""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = [
    "DEFAULT_TEMPO_BPM",
    "Subdivision",
    "SUBDIVISIONS",
    "index_from_norm",
    "synced_hz",
    "synced_seconds",
]

DEFAULT_TEMPO_BPM = 120.0
"""Tempo used when the host provides none."""


@dataclass(frozen=True)
class Subdivision:
    """A tempo-sync subdivision: label and length in beats per LFO cycle."""

    label: str
    beats: float


_TRIPLET = 2.0 / 3.0


def _family(denominator: str, beats: float) -> tuple[Subdivision, ...]:
    return (
        Subdivision(f"1/{denominator}", beats),
        Subdivision(f"1/{denominator}.", beats * 1.5),
        Subdivision(f"1/{denominator}T", beats * _TRIPLET),
    )


SUBDIVISIONS: tuple[Subdivision, ...] = (
    *_family("1", 4.0),
    *_family("2", 2.0),
    *_family("4", 1.0),
    *_family("8", 0.5),
    *_family("16", 0.25),
    *_family("32", 0.125),
)
"""Subdivisions coarse to fine, each straight / dotted / triplet."""


def index_from_norm(norm: float) -> int:
    """Map a normalised knob position in ``[0, 1]`` to a subdivision index."""
    if math.isnan(norm):
        return 0
    last = len(SUBDIVISIONS) - 1
    clamped = min(max(norm, 0.0), 1.0)
    return int(math.floor(clamped * last + 0.5))


def _beats(index: int) -> float:
    if index < 0:
        raise ValueError(f"subdivision index must be non-negative, got {index}")
    return SUBDIVISIONS[min(index, len(SUBDIVISIONS) - 1)].beats


def synced_hz(tempo_bpm: float, index: int) -> float:
    """LFO frequency in Hz for subdivision ``index`` at ``tempo_bpm``."""
    return (tempo_bpm / 60.0) / _beats(index)


def synced_seconds(tempo_bpm: float, index: int) -> float:
    """Length in seconds of one cycle of subdivision ``index`` at ``tempo_bpm``."""
    beats = _beats(index)
    beats_per_second = tempo_bpm / 60.0
    if beats_per_second == 0.0:
        return math.copysign(math.inf, beats_per_second)
    return beats / beats_per_second
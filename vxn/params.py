"""Parameter tables: typed ids, ranges, formatting and CLAP-id lookup.

CLAP id layout::

    [0, PATCH_COUNT)                    Upper per-patch params
    [PATCH_COUNT, 2 * PATCH_COUNT)      Lower per-patch params
    [2 * PATCH_COUNT, TOTAL_PARAMS)     global params
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional, Union

from vxn.domain import Layer

__all__ = [
    "AssignMode",
    "LfoSel",
    "EnvSel",
    "CrossModType",
    "PatchParam",
    "GlobalParam",
    "PatchRef",
    "GlobalRef",
    "ParamRef",
    "LinearTaper",
    "ExpTaper",
    "Taper",
    "FloatKind",
    "IntKind",
    "BoolKind",
    "EnumKind",
    "ParamKind",
    "ParamDesc",
    "PATCH_PARAMS",
    "GLOBAL_PARAMS",
    "PATCH_COUNT",
    "GLOBAL_COUNT",
    "TOTAL_PARAMS",
    "patch_clap_id",
    "global_clap_id",
    "param_ref",
    "desc_for_clap_id",
    "module_for_clap_id",
]


# ── Param-value enums (variant index stored in the param array) ─────────────


def _variant_or_first(cls, i: int):
    try:
        return cls(i)
    except ValueError:
        return cls(0)


class AssignMode(IntEnum):
    """Per-layer voice-assignment mode."""

    POLY = 0
    UNISON = 1
    SOLO = 2
    TWIN = 3

    @classmethod
    def from_index(cls, i: int) -> "AssignMode":
        """Variant at index ``i``; out-of-range indices give ``POLY``."""
        return _variant_or_first(cls, i)


class LfoSel(IntEnum):
    """LFO source selector for a fixed modulation route."""

    OFF = 0
    LFO1 = 1
    LFO2 = 2

    @classmethod
    def from_index(cls, i: int) -> "LfoSel":
        """Variant at index ``i``; out-of-range indices give ``OFF``."""
        return _variant_or_first(cls, i)


class EnvSel(IntEnum):
    """Envelope source selector for a fixed modulation route."""

    OFF = 0
    ENV1 = 1
    ENV2 = 2

    @classmethod
    def from_index(cls, i: int) -> "EnvSel":
        """Variant at index ``i``; out-of-range indices give ``OFF``."""
        return _variant_or_first(cls, i)


class CrossModType(IntEnum):
    """Oscillator interaction: off, hard sync or phase modulation."""

    OFF = 0
    SYNC = 1
    PM = 2

    @classmethod
    def from_index(cls, i: int) -> "CrossModType":
        """Variant at index ``i``; out-of-range indices give ``OFF``."""
        return _variant_or_first(cls, i)


# ── Param id enums ──────────────────────────────────────────────────────────


class PatchParam(IntEnum):
    """Per-patch parameter ids; the value is the index in the per-patch block."""

    OSC1_WAVE = 0
    OSC1_COARSE = 1
    OSC1_FINE = 2
    OSC1_OCTAVE = 3
    OSC1_LEVEL = 4
    OSC1_PULSE_WIDTH = 5
    OSC2_WAVE = 6
    OSC2_COARSE = 7
    OSC2_FINE = 8
    OSC2_OCTAVE = 9
    OSC2_LEVEL = 10
    OSC2_PULSE_WIDTH = 11
    CROSS_MOD_TYPE = 12
    CROSS_MOD_AMOUNT = 13
    RING_LEVEL = 14
    NOISE_LEVEL = 15
    NOISE_COLOR = 16
    CUTOFF = 17
    RESONANCE = 18
    DRIVE = 19
    FILTER_MODE = 20
    FILTER_SLOPE = 21
    HPF_CUTOFF = 22
    FILTER_KEY_TRACK = 23
    ENV1_ATTACK = 24
    ENV1_DECAY = 25
    ENV1_SUSTAIN = 26
    ENV1_RELEASE = 27
    ENV1_SHAPE = 28
    ENV2_ATTACK = 29
    ENV2_DECAY = 30
    ENV2_SUSTAIN = 31
    ENV2_RELEASE = 32
    ENV2_SHAPE = 33
    AMP_LFO_SRC = 34
    AMP_LFO_DEPTH = 35
    AMP_ENV_BYPASS = 36
    LFO_SHAPE = 37
    LFO_RATE = 38
    LFO_SYNC = 39
    LFO1_DELAY_TIME = 40
    LFO1_FADE = 41
    LFO1_FREE_RUN = 42
    PITCH_LFO_SRC = 43
    PITCH_LFO_DEPTH = 44
    PITCH_ENV_SRC = 45
    PITCH_ENV_DEPTH = 46
    PITCH_WHEEL_DEPTH = 47
    PWM_LFO_SRC = 48
    PWM_LFO_DEPTH = 49
    PWM_ENV_SRC = 50
    PWM_ENV_DEPTH = 51
    CUTOFF_LFO1_DEPTH = 52
    CUTOFF_LFO2_DEPTH = 53
    CUTOFF_ENV_DEPTH = 54
    VEL_CUTOFF_DEPTH = 55
    OSC2_PITCH_ENV_SRC = 56
    OSC2_PITCH_ENV_DEPTH = 57
    MOD_WHEEL_PWM = 58
    MOD_WHEEL_CUTOFF = 59
    MOD_WHEEL_RESO = 60
    MOD_WHEEL_OSC2_PITCH = 61
    ASSIGN_MODE = 62
    LEGATO = 63
    UNISON_DETUNE = 64
    PORTAMENTO_TIME = 65

    @classmethod
    def all(cls) -> Iterator["PatchParam"]:
        """Every per-patch param in index order."""
        return iter(cls)

    @classmethod
    def from_index(cls, i: int) -> Optional["PatchParam"]:
        """Param at index ``i``, or ``None`` when out of range."""
        try:
            return cls(i)
        except ValueError:
            return None

    @classmethod
    def from_name(cls, name: str) -> Optional["PatchParam"]:
        """Resolve a descriptor ``name`` (the preset key) to its param."""
        return next(
            (cls(i) for i, d in enumerate(PATCH_PARAMS) if d.name == name), None
        )

    def desc(self) -> "ParamDesc":
        """Static descriptor of this param."""
        return PATCH_PARAMS[self]


class GlobalParam(IntEnum):
    """Global parameter ids; the value is the index in the global block."""

    MASTER_TUNE = 0
    MASTER_VOLUME = 1
    CHORUS_ON = 2
    CHORUS_RATE = 3
    CHORUS_DEPTH = 4
    CHORUS_MIX = 5
    DELAY_ON = 6
    DELAY_TIME = 7
    DELAY_FEEDBACK = 8
    DELAY_MIX = 9
    DELAY_PING_PONG = 10
    DELAY_SYNC = 11
    LIMITER_ON = 12
    OVERSAMPLE = 13
    LFO2_SHAPE = 14
    LFO2_RATE = 15
    LFO2_SYNC = 16

    @classmethod
    def all(cls) -> Iterator["GlobalParam"]:
        """Every global param in index order."""
        return iter(cls)

    @classmethod
    def from_index(cls, i: int) -> Optional["GlobalParam"]:
        """Param at index ``i``, or ``None`` when out of range."""
        try:
            return cls(i)
        except ValueError:
            return None

    @classmethod
    def from_name(cls, name: str) -> Optional["GlobalParam"]:
        """Resolve a descriptor ``name`` to its param."""
        return next(
            (cls(i) for i, d in enumerate(GLOBAL_PARAMS) if d.name == name), None
        )

    def desc(self) -> "ParamDesc":
        """Static descriptor of this param."""
        return GLOBAL_PARAMS[self]


# ── CLAP id layout ──────────────────────────────────────────────────────────

PATCH_COUNT = len(PatchParam)
GLOBAL_COUNT = len(GlobalParam)
_LAYER_COUNT = len(Layer)
TOTAL_PARAMS = _LAYER_COUNT * PATCH_COUNT + GLOBAL_COUNT


def patch_clap_id(layer: Layer, p: PatchParam) -> int:
    """CLAP id of per-patch param ``p`` on ``layer``."""
    return int(layer) * PATCH_COUNT + int(p)


def global_clap_id(g: GlobalParam) -> int:
    """CLAP id of global param ``g``."""
    return _LAYER_COUNT * PATCH_COUNT + int(g)


@dataclass(frozen=True)
class PatchRef:
    """A resolved CLAP id naming a per-patch param on a layer."""

    layer: Layer
    param: PatchParam


@dataclass(frozen=True)
class GlobalRef:
    """A resolved CLAP id naming a global param."""

    param: GlobalParam


ParamRef = Union[PatchRef, GlobalRef]


def param_ref(clap_id: int) -> Optional[ParamRef]:
    """Resolve a CLAP id to its typed param, or ``None`` when out of range."""
    if clap_id < 0:
        return None
    if clap_id < PATCH_COUNT:
        return PatchRef(Layer.UPPER, PatchParam(clap_id))
    if clap_id < _LAYER_COUNT * PATCH_COUNT:
        return PatchRef(Layer.LOWER, PatchParam(clap_id - PATCH_COUNT))
    if clap_id < TOTAL_PARAMS:
        return GlobalRef(GlobalParam(clap_id - _LAYER_COUNT * PATCH_COUNT))
    return None


def desc_for_clap_id(clap_id: int) -> Optional["ParamDesc"]:
    """Descriptor of the param with this CLAP id, if any."""
    ref = param_ref(clap_id)
    return None if ref is None else ref.param.desc()


def module_for_clap_id(clap_id: int) -> str:
    """Group name for the host's automation list: Upper, Lower or Global."""
    ref = param_ref(clap_id)
    if isinstance(ref, PatchRef):
        return "Upper" if ref.layer is Layer.UPPER else "Lower"
    if isinstance(ref, GlobalRef):
        return "Global"
    return ""


# ── Descriptors ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class LinearTaper:
    """Fader position maps linearly to the value range."""


@dataclass(frozen=True)
class ExpTaper:
    """Exponential fader: midpoint reads ``mid`` and the top reads ``max``."""

    mid: float


Taper = Union[LinearTaper, ExpTaper]


@dataclass(frozen=True)
class FloatKind:
    unit: str
    taper: Taper


@dataclass(frozen=True)
class IntKind:
    unit: str


@dataclass(frozen=True)
class BoolKind:
    pass


@dataclass(frozen=True)
class EnumKind:
    variants: tuple[str, ...]


ParamKind = Union[FloatKind, IntKind, BoolKind, EnumKind]

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _clamp(v: float, lo: float, hi: float) -> float:
    if math.isnan(v):
        return v
    return min(max(v, lo), hi)


def _round_half_away(x: float) -> int:
    magnitude = abs(x)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if x < 0 else whole


def _round_saturating(x: float, lo: int, hi: int) -> int:
    if math.isnan(x):
        return 0
    if x <= lo:
        return lo
    if x >= hi:
        return hi
    return min(max(_round_half_away(x), lo), hi)


def _ln(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    return math.log(x)


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _ascii_lower(text: str) -> str:
    return "".join(c.lower() if c.isascii() else c for c in text)


@dataclass(frozen=True)
class ParamDesc:
    """Static description of one parameter: range, default and formatting."""

    name: str
    label: str
    min: float
    max: float
    default: float
    kind: ParamKind

    def clamp(self, v: float) -> float:
        """Clamp ``v`` into the param's range."""
        return _clamp(v, self.min, self.max)

    def to_normalized(self, v: float) -> float:
        """Linear position of ``v`` in ``[0, 1]`` (0 for a degenerate range)."""
        if self.max > self.min:
            return _clamp((v - self.min) / (self.max - self.min), 0.0, 1.0)
        return 0.0

    def from_normalized(self, n: float) -> float:
        """Plain value at linear position ``n``."""
        return self.min + _clamp(n, 0.0, 1.0) * (self.max - self.min)

    def variant_index(self, label: str) -> Optional[int]:
        """Index of an enum variant label (case-insensitive); None otherwise."""
        if not isinstance(self.kind, EnumKind):
            return None
        wanted = _ascii_lower(label)
        return next(
            (i for i, v in enumerate(self.kind.variants) if _ascii_lower(v) == wanted),
            None,
        )

    def taper(self) -> Taper:
        """Fader taper; only float params can be non-linear."""
        if isinstance(self.kind, FloatKind):
            return self.kind.taper
        return LinearTaper()

    def _exp_coeffs(self) -> Optional[tuple[float, float]]:
        taper = self.taper()
        if not isinstance(taper, ExpTaper):
            return None
        r = self.max / taper.mid - 1.0
        return taper.mid / (r - 1.0), 2.0 * _ln(r)

    def to_fader(self, value: float) -> float:
        """Fader position in ``[0, 1]`` for a plain value."""
        coeffs = self._exp_coeffs()
        if coeffs is None:
            return self.to_normalized(value)
        a, k = coeffs
        return _clamp(_ln(value / a + 1.0) / k, 0.0, 1.0)

    def from_fader(self, n: float) -> float:
        """Plain value at fader position ``n``."""
        coeffs = self._exp_coeffs()
        if coeffs is None:
            return self.from_normalized(n)
        a, k = coeffs
        return a * (_exp(k * _clamp(n, 0.0, 1.0)) - 1.0)

    def display(self, value: float) -> str:
        """Text shown for ``value`` by both the host and the editor."""
        kind = self.kind
        if isinstance(kind, EnumKind):
            last = max(len(kind.variants) - 1, 0)
            return kind.variants[_round_saturating(value, 0, last)]
        if isinstance(kind, BoolKind):
            return "On" if value >= 0.5 else "Off"
        if isinstance(kind, IntKind):
            return f"{_round_saturating(value, _I64_MIN, _I64_MAX)} {kind.unit}"
        if math.isnan(value):
            text = "NaN"
        elif kind.unit:
            return f"{value:.2f} {kind.unit}"
        else:
            return f"{value:.3f}"
        return f"{text} {kind.unit}" if kind.unit else text


# ── Descriptor tables ───────────────────────────────────────────────────────

_WAVE_LABELS = ("Sine", "Triangle", "Saw", "Pulse")
_FILTER_MODE_LABELS = ("LP", "HP", "BP", "Notch")
_SLOPE_LABELS = ("12", "24")
_NOISE_LABELS = ("White", "Pink")
_SHAPE_LABELS = ("Lin", "Exp")
_LFO_LABELS = ("Sine", "Tri", "Saw+", "Saw-", "Square", "S&H")
_OVERSAMPLE_LABELS = ("O/S OFF", "2x", "4x", "8x")
_ASSIGN_LABELS = ("Poly", "Unison", "Solo", "Twin")
_LFO_SEL_LABELS = ("Off", "LFO 1", "LFO 2")
_ENV_SEL_LABELS = ("Off", "Env 1", "Env 2")
# Phase modulation is labelled "FM": that is the name players expect.
_CROSS_MOD_LABELS = ("Off", "Sync", "FM")

_LIN = LinearTaper()


def _f(name, label, lo, hi, default, unit, taper=_LIN) -> ParamDesc:
    return ParamDesc(name, label, lo, hi, default, FloatKind(unit, taper))


def _e(name, label, variants, default) -> ParamDesc:
    return ParamDesc(name, label, 0.0, float(len(variants) - 1), default, EnumKind(variants))


def _b(name, label, default) -> ParamDesc:
    return ParamDesc(name, label, 0.0, 1.0, default, BoolKind())


def _i(name, label, lo, hi, default, unit) -> ParamDesc:
    return ParamDesc(name, label, lo, hi, default, IntKind(unit))


def _mp_vib(name, label, default) -> ParamDesc:
    return _f(name, label, -12.0, 12.0, default, "st")


def _mp_vib_lfo(name, label, default) -> ParamDesc:
    return _f(name, label, 0.0, 12.0, default, "st", ExpTaper(1.0))


def _mp_wide(name, label) -> ParamDesc:
    return _f(name, label, -48.0, 48.0, 0.0, "st")


def _mc(name, label) -> ParamDesc:
    return _f(name, label, -96.0, 96.0, 0.0, "st")


def _mcu(name, label) -> ParamDesc:
    return _f(name, label, 0.0, 96.0, 0.0, "st")


def _mw(name, label) -> ParamDesc:
    return _f(name, label, -0.5, 0.5, 0.0, "")


def _mwu(name, label) -> ParamDesc:
    return _f(name, label, 0.0, 0.5, 0.0, "")


def _lfosel(name, label, default) -> ParamDesc:
    return _e(name, label, _LFO_SEL_LABELS, default)


def _envsel(name, label) -> ParamDesc:
    return _e(name, label, _ENV_SEL_LABELS, 0.0)


PATCH_PARAMS: tuple[ParamDesc, ...] = (
    _e("osc1_wave", "Osc 1 Wave", _WAVE_LABELS, 2.0),
    _i("osc1_coarse", "Osc 1 Coarse", -7.0, 7.0, 0.0, "st"),
    _f("osc1_fine", "Osc 1 Fine", -50.0, 50.0, 0.0, "ct"),
    _i("osc1_octave", "Osc 1 Octave", -4.0, 4.0, 0.0, "oct"),
    _f("osc1_level", "Osc 1 Level", 0.0, 1.0, 0.8, ""),
    _f("osc1_pw", "Osc 1 PW", 0.05, 0.95, 0.5, ""),
    _e("osc2_wave", "Osc 2 Wave", _WAVE_LABELS, 2.0),
    _i("osc2_coarse", "Osc 2 Coarse", -7.0, 7.0, 0.0, "st"),
    _f("osc2_fine", "Osc 2 Fine", -50.0, 50.0, 0.0, "ct"),
    _i("osc2_octave", "Osc 2 Octave", -4.0, 4.0, -1.0, "oct"),
    _f("osc2_level", "Osc 2 Level", 0.0, 1.0, 0.6, ""),
    _f("osc2_pw", "Osc 2 PW", 0.05, 0.95, 0.5, ""),
    _e("cross_mod_type", "Cross Mod", _CROSS_MOD_LABELS, 0.0),
    _f("cross_mod_amount", "Cross Mod Amt", 0.0, 4.0, 0.0, ""),
    _f("ring_level", "Ring Level", 0.0, 1.0, 0.0, ""),
    _f("noise_level", "Noise Level", 0.0, 1.0, 0.0, ""),
    _e("noise_color", "Noise Colour", _NOISE_LABELS, 0.0),
    _f("cutoff", "Cutoff", 20.0, 18000.0, 8000.0, "Hz", ExpTaper(1000.0)),
    _f("resonance", "Resonance", 0.0, 1.0, 0.2, ""),
    _f("drive", "Drive", 0.1, 4.0, 1.0, ""),
    _e("filter_mode", "Filter Mode", _FILTER_MODE_LABELS, 0.0),
    _e("filter_slope", "Filter Slope", _SLOPE_LABELS, 1.0),
    _f("hpf_cutoff", "HPF Cutoff", 20.0, 18000.0, 20.0, "Hz", ExpTaper(1000.0)),
    _b("filter_key_track", "Key Track", 0.0),
    _f("env1_attack", "Env 1 Attack", 0.001, 10.0, 0.005, "s", ExpTaper(1.0)),
    _f("env1_decay", "Env 1 Decay", 0.001, 10.0, 0.3, "s", ExpTaper(1.0)),
    _f("env1_sustain", "Env 1 Sustain", 0.0, 1.0, 0.0, ""),
    _f("env1_release", "Env 1 Release", 0.001, 10.0, 0.3, "s", ExpTaper(1.0)),
    _e("env1_shape", "Env 1 Shape", _SHAPE_LABELS, 0.0),
    _f("env2_attack", "Env 2 Attack", 0.001, 10.0, 0.005, "s", ExpTaper(1.0)),
    _f("env2_decay", "Env 2 Decay", 0.001, 10.0, 0.2, "s", ExpTaper(1.0)),
    _f("env2_sustain", "Env 2 Sustain", 0.0, 1.0, 0.8, ""),
    _f("env2_release", "Env 2 Release", 0.001, 10.0, 0.3, "s", ExpTaper(1.0)),
    _e("env2_shape", "Env 2 Shape", _SHAPE_LABELS, 1.0),
    _lfosel("amp_lfo_src", "Amp LFO", 0.0),
    _f("amp_lfo_depth", "Amp LFO Dep", 0.0, 1.0, 0.0, ""),
    _b("amp_env_bypass", "Amp Gate", 0.0),
    _e("lfo_shape", "LFO 1 Shape", _LFO_LABELS, 0.0),
    _f("lfo_rate", "LFO 1 Rate", 0.01, 40.0, 5.0, "Hz", ExpTaper(5.0)),
    _b("lfo_sync", "LFO 1 Sync", 0.0),
    _f("lfo1_delay_time", "LFO 1 Delay", 0.0, 4.0, 0.0, "s"),
    _f("lfo1_fade", "LFO 1 Fade", 0.0, 4.0, 0.0, "s"),
    _b("lfo1_free_run", "LFO 1 Free", 0.0),
    _lfosel("pitch_lfo_src", "Pitch LFO", 1.0),
    _mp_vib_lfo("pitch_lfo_depth", "Pitch LFO Dep", 0.05),
    _envsel("pitch_env_src", "Pitch Env"),
    _mp_vib("pitch_env_depth", "Pitch Env Dep", 0.0),
    _f("pitch_wheel_depth", "Pitch Wheel", 0.0, 12.0, 2.0, "st"),
    _lfosel("pwm_lfo_src", "PWM LFO", 0.0),
    _mwu("pwm_lfo_depth", "PWM LFO Dep"),
    _envsel("pwm_env_src", "PWM Env"),
    _mw("pwm_env_depth", "PWM Env Dep"),
    _mcu("cutoff_lfo1_depth", "Cutoff LFO1 Dep"),
    _mcu("cutoff_lfo2_depth", "Cutoff LFO2 Dep"),
    _mc("cutoff_env_depth", "Cutoff Env Dep"),
    _mc("vel_cutoff_depth", "Vel→Cutoff"),
    _envsel("osc2_pitch_env_src", "Osc2 Pitch Env"),
    _mp_wide("osc2_pitch_env_depth", "Osc2 Pitch Dep"),
    _mw("mod_wheel_pwm", "Wheel→PWM"),
    _mc("mod_wheel_cutoff", "Wheel→Cutoff"),
    _f("mod_wheel_reso", "Wheel→Reso", 0.0, 1.0, 0.0, ""),
    _mp_wide("mod_wheel_osc2_pitch", "Wheel→Osc2"),
    _e("assign_mode", "Assign", _ASSIGN_LABELS, 0.0),
    _b("legato", "Legato", 0.0),
    _f("unison_detune", "Detune", 0.0, 50.0, 12.0, "ct"),
    _f("portamento_time", "Glide Time", 0.0, 0.5, 0.0, "s", ExpTaper(0.1)),
)

GLOBAL_PARAMS: tuple[ParamDesc, ...] = (
    _f("master_tune", "Master Tune", -12.0, 12.0, 0.0, "st"),
    _f("master_volume", "Volume", 0.0, 1.0, 0.7, ""),
    _b("chorus_on", "Chorus", 1.0),
    _f("chorus_rate", "Chorus Rate", 0.05, 8.0, 0.6, "Hz"),
    _f("chorus_depth", "Chorus Depth", 0.0, 1.0, 0.5, ""),
    _f("chorus_mix", "Chorus Mix", 0.0, 1.0, 0.4, ""),
    _b("delay_on", "Delay", 0.0),
    _f("delay_time", "Delay Time", 0.01, 2.0, 0.35, "s"),
    _f("delay_feedback", "Delay FB", 0.0, 0.95, 0.4, ""),
    _f("delay_mix", "Delay Mix", 0.0, 1.0, 0.25, ""),
    _b("delay_pingpong", "Ping-Pong", 1.0),
    _b("delay_sync", "Delay Sync", 0.0),
    _b("limiter_on", "Limiter", 0.0),
    _e("oversample", "Oversample", _OVERSAMPLE_LABELS, 1.0),
    _e("lfo2_shape", "LFO 2 Shape", _LFO_LABELS, 0.0),
    _f("lfo2_rate", "LFO 2 Rate", 0.01, 40.0, 5.0, "Hz", ExpTaper(5.0)),
    _b("lfo2_sync", "LFO 2 Sync", 0.0),
)
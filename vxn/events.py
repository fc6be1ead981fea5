"""Events passed between the editor, the host shell and the controller.

UI events flow from the editor to the controller, host events from the host
shell to the controller, and view events from the controller to the editor.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

from vxn.domain import KeyMode, Layer, PresetMeta
from vxn.model import ParamId

__all__ = [
    "FactorySource",
    "UserSource",
    "PresetSource",
    "SetParam",
    "SetParamNorm",
    "BeginGesture",
    "EndGesture",
    "ResetLayer",
    "LoadPreset",
    "StepPreset",
    "SavePreset",
    "RenamePreset",
    "DeletePreset",
    "MovePreset",
    "RenameFolder",
    "DeleteFolder",
    "NewFolder",
    "SetKeyMode",
    "SetSplitPoint",
    "SetEditLayer",
    "EditorReady",
    "RequestTextInput",
    "TextInputSubmitted",
    "UiEvent",
    "ParamAutomation",
    "StateLoaded",
    "Tempo",
    "HostEvent",
    "ParamChanged",
    "PresetLoaded",
    "PresetCorpusChanged",
    "KeyModeChanged",
    "SplitPointChanged",
    "EditLayerChanged",
    "Status",
    "OpenTextInput",
    "TextInputResult",
    "ViewEvent",
]


def _set(obj: object, name: str, value: object) -> None:
    object.__setattr__(obj, name, value)


def _param_id(value) -> ParamId:
    return value if isinstance(value, ParamId) else ParamId(operator.index(value))


def _note(value) -> int:
    note = operator.index(value)
    if not 0 <= note <= 255:
        raise ValueError(f"note must fit in a byte, got {note}")
    return note


def _fix_id(obj) -> None:
    _set(obj, "id", _param_id(obj.id))


# ── Preset sources ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class FactorySource:
    """A preset in the embedded factory bank, by index."""

    index: int


@dataclass(frozen=True)
class UserSource:
    """A preset file under the user preset directory."""

    path: Path

    def __post_init__(self) -> None:
        _set(self, "path", Path(self.path))


PresetSource = Union[FactorySource, UserSource]


# ── UI → controller ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SetParam:
    id: ParamId
    plain: float

    def __post_init__(self) -> None:
        _fix_id(self)


@dataclass(frozen=True)
class SetParamNorm:
    id: ParamId
    norm: float

    def __post_init__(self) -> None:
        _fix_id(self)


@dataclass(frozen=True)
class BeginGesture:
    id: ParamId

    def __post_init__(self) -> None:
        _fix_id(self)


@dataclass(frozen=True)
class EndGesture:
    id: ParamId

    def __post_init__(self) -> None:
        _fix_id(self)


@dataclass(frozen=True)
class ResetLayer:
    """Reset every per-patch param of ``layer`` to its default."""

    layer: Layer


@dataclass(frozen=True)
class LoadPreset:
    source: PresetSource


@dataclass(frozen=True)
class StepPreset:
    """Walk the combined factory + user list by ``delta``, wrapping."""

    delta: int


@dataclass(frozen=True)
class SavePreset:
    name: str
    folder: Optional[str] = None


@dataclass(frozen=True)
class RenamePreset:
    path: Path
    new_name: str

    def __post_init__(self) -> None:
        _set(self, "path", Path(self.path))


@dataclass(frozen=True)
class DeletePreset:
    path: Path

    def __post_init__(self) -> None:
        _set(self, "path", Path(self.path))


@dataclass(frozen=True)
class MovePreset:
    path: Path
    dest_folder: Optional[str] = None

    def __post_init__(self) -> None:
        _set(self, "path", Path(self.path))


@dataclass(frozen=True)
class RenameFolder:
    old_name: str
    new_name: str


@dataclass(frozen=True)
class DeleteFolder:
    name: str


@dataclass(frozen=True)
class NewFolder:
    suggested: str


@dataclass(frozen=True)
class SetKeyMode:
    mode: KeyMode


@dataclass(frozen=True)
class SetSplitPoint:
    note: int

    def __post_init__(self) -> None:
        _set(self, "note", _note(self.note))


@dataclass(frozen=True)
class SetEditLayer:
    layer: Layer


@dataclass(frozen=True)
class EditorReady:
    """The editor is listening; the controller re-broadcasts its state."""


@dataclass(frozen=True)
class RequestTextInput:
    """Ask the editor backend to open a text-input popup."""

    id: str
    title: str
    initial: str


@dataclass(frozen=True)
class TextInputSubmitted:
    """A text-input popup was committed (a value) or cancelled (``None``)."""

    id: str
    value: Optional[str] = None


UiEvent = Union[
    SetParam,
    SetParamNorm,
    BeginGesture,
    EndGesture,
    ResetLayer,
    LoadPreset,
    StepPreset,
    SavePreset,
    RenamePreset,
    DeletePreset,
    MovePreset,
    RenameFolder,
    DeleteFolder,
    NewFolder,
    SetKeyMode,
    SetSplitPoint,
    SetEditLayer,
    EditorReady,
    RequestTextInput,
    TextInputSubmitted,
]


# ── Host → controller ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ParamAutomation:
    id: ParamId
    plain: float

    def __post_init__(self) -> None:
        _fix_id(self)


@dataclass(frozen=True)
class StateLoaded:
    """A state blob from the host, applied through the model."""

    blob: bytes

    def __post_init__(self) -> None:
        _set(self, "blob", bytes(self.blob))


@dataclass(frozen=True)
class Tempo:
    bpm: float


HostEvent = Union[ParamAutomation, StateLoaded, Tempo]


# ── Controller → view ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class ParamChanged:
    id: ParamId
    plain: float
    norm: float
    display: str

    def __post_init__(self) -> None:
        _fix_id(self)


@dataclass(frozen=True)
class PresetLoaded:
    meta: PresetMeta
    source: Optional[PresetSource] = None
    warnings: Sequence[str] = ()

    def __post_init__(self) -> None:
        _set(self, "warnings", tuple(self.warnings))


@dataclass(frozen=True)
class PresetCorpusChanged:
    """The user corpus changed; ``follow`` is the preset to move the cursor to."""

    follow: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.follow is not None:
            _set(self, "follow", Path(self.follow))


@dataclass(frozen=True)
class KeyModeChanged:
    mode: KeyMode


@dataclass(frozen=True)
class SplitPointChanged:
    note: int

    def __post_init__(self) -> None:
        _set(self, "note", _note(self.note))


@dataclass(frozen=True)
class EditLayerChanged:
    layer: Layer


@dataclass(frozen=True)
class Status:
    line: str


@dataclass(frozen=True)
class OpenTextInput:
    """Backend-bound: open the floating text-input popup."""

    id: str
    title: str
    initial: str


@dataclass(frozen=True)
class TextInputResult:
    """Page-bound result of a text-input popup; ``None`` on cancel."""

    id: str
    value: Optional[str] = None


ViewEvent = Union[
    ParamChanged,
    PresetLoaded,
    PresetCorpusChanged,
    KeyModeChanged,
    SplitPointChanged,
    EditLayerChanged,
    Status,
    OpenTextInput,
    TextInputResult,
]
"""The controller: the single place the model is changed off the audio thread.

It owns the inbound UI and host queues and the outbound view queue.
:meth:`Controller.tick` drains the inbound queues and applies their effects.
"""

from __future__ import annotations

import queue
import threading
from typing import Callable, Optional

from vxn.domain import Layer, PresetMeta
from vxn.events import (
    BeginGesture,
    DeleteFolder,
    DeletePreset,
    EditLayerChanged,
    EditorReady,
    EndGesture,
    FactorySource,
    HostEvent,
    KeyModeChanged,
    LoadPreset,
    MovePreset,
    NewFolder,
    OpenTextInput,
    ParamAutomation,
    ParamChanged,
    PresetCorpusChanged,
    PresetLoaded,
    PresetSource,
    RenameFolder,
    RenamePreset,
    RequestTextInput,
    ResetLayer,
    SavePreset,
    SetEditLayer,
    SetKeyMode,
    SetParam,
    SetParamNorm,
    SetSplitPoint,
    SplitPointChanged,
    StateLoaded,
    Status,
    StepPreset,
    Tempo,
    TextInputResult,
    TextInputSubmitted,
    UiEvent,
    UserSource,
    ViewEvent,
)
from vxn.model import ParamId, ParamModel, StateError
from vxn.params import PATCH_COUNT, PatchParam, desc_for_clap_id, patch_clap_id
from vxn.preset import PresetCorpus, PresetError, PresetStore

__all__ = ["CHANNEL_CAPACITY", "Tick", "ControllerHandle", "Controller"]

CHANNEL_CAPACITY = 1024
"""Depth of each event queue; sized for a preset-load burst with headroom."""

Tick = Callable[[], None]
"""A main-thread callable that pumps the controller."""


class ControllerHandle:
    """Cheap-to-copy handle the editor uses to post UI intents."""

    __slots__ = ("_ui",)

    def __init__(self, ui_queue: "queue.Queue[UiEvent]") -> None:
        self._ui = ui_queue

    def post(self, event: UiEvent) -> None:
        """Post a UI intent; raises :class:`queue.Full` when the queue is full."""
        self._ui.put_nowait(event)


class Controller:
    """Arbiter between the editor, the host and the parameter model.

    ``corpus`` is the preset snapshot published for the view; it is refreshed
    (under ``corpus_lock``) after every disk-mutating preset operation.
    """

    def __init__(self, model: ParamModel, presets: PresetStore) -> None:
        self._model = model
        self._presets = presets
        self._ui: "queue.Queue[UiEvent]" = queue.Queue(maxsize=CHANNEL_CAPACITY)
        self._host: "queue.Queue[HostEvent]" = queue.Queue(maxsize=CHANNEL_CAPACITY)
        self._view: "queue.Queue[ViewEvent]" = queue.Queue(maxsize=CHANNEL_CAPACITY)
        factory = [
            meta
            for meta in (presets.factory_meta(i) for i in range(presets.factory_len()))
            if meta is not None
        ]
        self.corpus = PresetCorpus(factory=factory, user=presets.list_user_tree())
        self.corpus_lock = threading.Lock()
        self._current_source: Optional[PresetSource] = None

    @property
    def model(self) -> ParamModel:
        return self._model

    @property
    def preset_store(self) -> PresetStore:
        return self._presets

    def handle(self) -> ControllerHandle:
        """A post handle for the editor."""
        return ControllerHandle(self._ui)

    def post_ui(self, event: UiEvent) -> None:
        """Queue a UI intent; raises :class:`queue.Full` when the queue is full."""
        self._ui.put_nowait(event)

    def post_host(self, event: HostEvent) -> None:
        """Queue a host event; raises :class:`queue.Full` when the queue is full."""
        self._host.put_nowait(event)

    def tick(self) -> None:
        """Drain the UI queue, then the host queue, applying each event.

        UI first, so a gesture begun in this tick suppresses the view echo of
        host automation arriving in the same tick.
        """
        for ev in _drain(self._ui):
            self._handle_ui(ev)
        for ev in _drain(self._host):
            self._handle_host(ev)

    def drain_view_events(self) -> list[ViewEvent]:
        """Take every pending view event, oldest first."""
        return list(_drain(self._view))

    # ── Handlers ────────────────────────────────────────────────────────────

    def _handle_ui(self, ev: UiEvent) -> None:
        match ev:
            case SetParam(id=pid, plain=plain):
                self._model.set(pid, plain)
                self._emit_param_changed(pid)
            case SetParamNorm(id=pid, norm=norm):
                self._model.set_normalized(pid, norm)
                self._emit_param_changed(pid)
            case BeginGesture(id=pid):
                self._model.set_gesture(pid, True)
            case EndGesture(id=pid):
                self._model.set_gesture(pid, False)
            case ResetLayer(layer=layer):
                self._reset_layer(layer)
            case LoadPreset(source=source):
                self._load_preset(source)
            case StepPreset(delta=delta):
                self._step_preset(delta)
            case SavePreset(name=name, folder=folder):
                self._save_preset(name, folder)
            case RenamePreset(path=path, new_name=new_name):
                try:
                    new_path = self._presets.user_rename(path, new_name)
                except PresetError as e:
                    self._send_status(f"rename failed: {e}")
                else:
                    self._refresh_user_corpus()
                    self._send(PresetCorpusChanged(follow=new_path))
                    self._send_status(f"Renamed to {new_name.strip()}")
            case DeletePreset(path=path):
                try:
                    self._presets.user_delete(path)
                except PresetError as e:
                    self._send_status(f"delete failed: {e}")
                else:
                    self._refresh_user_corpus()
                    self._send(PresetCorpusChanged())
            case MovePreset(path=path, dest_folder=dest_folder):
                try:
                    new_path = self._presets.user_move(path, dest_folder)
                except PresetError as e:
                    self._send_status(f"move failed: {e}")
                else:
                    self._refresh_user_corpus()
                    self._send(PresetCorpusChanged(follow=new_path))
            case RenameFolder(old_name=old_name, new_name=new_name):
                try:
                    _, final_name = self._presets.user_rename_folder(old_name, new_name)
                except PresetError as e:
                    self._send_status(f"rename folder failed: {e}")
                else:
                    self._refresh_user_corpus()
                    self._send(PresetCorpusChanged())
                    self._send_status(f"Renamed folder to {final_name}")
            case DeleteFolder(name=name):
                try:
                    self._presets.user_delete_folder(name)
                except PresetError as e:
                    self._send_status(f"delete folder failed: {e}")
                else:
                    self._refresh_user_corpus()
                    self._send(PresetCorpusChanged())
                    self._send_status(f"Deleted folder {name}")
            case NewFolder(suggested=suggested):
                try:
                    self._presets.user_create_folder(suggested)
                except PresetError as e:
                    self._send_status(f"create folder failed: {e}")
                else:
                    self._refresh_user_corpus()
                    self._send(PresetCorpusChanged())
            case SetKeyMode(mode=mode):
                # Entering a split/dual mode may seed Lower from Upper, so
                # every param is republished afterwards.
                self._model.set_key_mode_seeded(mode)
                self._send(KeyModeChanged(mode=mode))
                self._broadcast_all_params()
            case SetSplitPoint(note=note):
                self._model.set_split_point(note)
                self._send(SplitPointChanged(note=note))
                self._send_status(f"split point: {note}")
            case SetEditLayer(layer=layer):
                self._send(EditLayerChanged(layer=layer))
            case RequestTextInput(id=token, title=title, initial=initial):
                self._send(OpenTextInput(id=token, title=title, initial=initial))
            case TextInputSubmitted(id=token, value=value):
                self._send(TextInputResult(id=token, value=value))
            case EditorReady():
                self._broadcast_all_params()
                self._send_shared_state()
                # Makes a backend re-push the corpus once the page is ready.
                self._send(PresetCorpusChanged())
            case _:
                raise TypeError(f"unknown UI event: {ev!r}")

    def _handle_host(self, ev: HostEvent) -> None:
        match ev:
            case ParamAutomation(id=pid, plain=plain):
                # The audio path must always see the host value; the view
                # echo waits while the user is dragging this param.
                self._model.set(pid, plain)
                if not self._model.gesture(pid):
                    self._emit_param_changed(pid)
            case StateLoaded(blob=blob):
                try:
                    self._model.restore_from_bytes(blob)
                except StateError as e:
                    self._send_status(f"state load failed: {e}")
                    return
                self._send(PresetLoaded(meta=PresetMeta()))
                self._broadcast_all_params()
                self._send_shared_state()
            case Tempo():
                pass
            case _:
                raise TypeError(f"unknown host event: {ev!r}")

    # ── Presets ─────────────────────────────────────────────────────────────

    def _load_preset(self, source: PresetSource) -> None:
        try:
            if isinstance(source, FactorySource):
                load = self._presets.factory_load(source.index)
            else:
                load = self._presets.user_load(source.path)
        except PresetError as e:
            self._send_status(f"preset load failed: {e}")
            return
        try:
            self._model.restore_from_bytes(load.blob)
        except StateError as e:
            self._send_status(f"preset apply failed: {e}")
            return
        self._current_source = source
        self._send(PresetLoaded(meta=load.meta, source=source, warnings=load.warnings))
        self._broadcast_all_params()
        self._send_shared_state()

    def _step_preset(self, delta: int) -> None:
        """Load the entry ``delta`` steps from the current one, wrapping.

        With no current preset a non-negative step starts at the first entry
        and a negative one at the last.
        """
        entries = self._combined_preset_list()
        if not entries:
            return
        try:
            current = entries.index(self._current_source)
        except ValueError:
            current = None
        if current is not None:
            nxt = (current + delta) % len(entries)
        elif delta >= 0:
            nxt = 0
        else:
            nxt = len(entries) - 1
        self._load_preset(entries[nxt])

    def _combined_preset_list(self) -> list[PresetSource]:
        """Factory entries by name, then user entries by name across folders."""
        with self.corpus_lock:
            factory = sorted(
                enumerate(self.corpus.factory), key=lambda item: item[1].name.lower()
            )
            user = sorted(
                (p for folder in self.corpus.user for p in folder.presets),
                key=lambda p: p.meta.name.lower(),
            )
        out: list[PresetSource] = [FactorySource(index=i) for i, _ in factory]
        out.extend(UserSource(path=p.path) for p in user)
        return out

    def _save_preset(self, name: str, folder: Optional[str]) -> None:
        blob = self._model.snapshot_bytes()
        meta = PresetMeta(name=name)
        try:
            path = self._presets.user_save(name, folder, meta, blob)
        except PresetError as e:
            self._send_status(f"save failed: {e}")
            return
        self._refresh_user_corpus()
        self._send(PresetCorpusChanged(follow=path))
        self._send_status(f"Saved {name}")

    def _refresh_user_corpus(self) -> None:
        user = self._presets.list_user_tree()
        with self.corpus_lock:
            self.corpus.user = user

    # ── Params ──────────────────────────────────────────────────────────────

    def _reset_layer(self, layer: Layer) -> None:
        """Reset each per-patch param of ``layer``, gesture-bracketed."""
        for p in PatchParam.all():
            raw = patch_clap_id(layer, p)
            pid = ParamId(raw)
            desc = desc_for_clap_id(raw)
            default = desc.default if desc is not None else 0.0
            self._model.set_gesture(pid, True)
            self._model.set(pid, default)
            self._model.set_gesture(pid, False)
            self._emit_param_changed(pid)

    def _emit_param_changed(self, pid: ParamId) -> None:
        plain = self._model.get(pid)
        norm = self._model.get_normalized(pid)
        desc = self._model.descriptor(pid)
        display = desc.display(plain) if desc is not None else ""
        self._send(ParamChanged(id=pid, plain=plain, norm=norm, display=display))

    def _broadcast_all_params(self) -> None:
        for i in range(self._model.total()):
            self._emit_param_changed(ParamId(i))

    def _send_shared_state(self) -> None:
        self._send(KeyModeChanged(mode=self._model.key_mode()))
        self._send(SplitPointChanged(note=self._model.split_point()))

    def _send(self, ev: ViewEvent) -> None:
        # A backed-up editor losing a redraw is preferable to blocking.
        try:
            self._view.put_nowait(ev)
        except queue.Full:
            pass

    def _send_status(self, line: str) -> None:
        self._send(Status(line=line))


def _drain(q: queue.Queue):
    while True:
        try:
            yield q.get_nowait()
        except queue.Empty:
            return
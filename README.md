# vxn

The non-audio core of a two-layer polyphonic synthesizer: the parameter
table, LFO tempo sync, the preset corpus types and the controller that sits
between an editor, a plugin host and the live parameter store.

## Modules

- `vxn.domain`: `Layer` (`UPPER` / `LOWER`), `KeyMode` (`WHOLE` / `DUAL` /
  `SPLIT`, with `from_u8`, `label` and `from_label`), `PresetMeta`, and the
  constants `DEFAULT_SPLIT_POINT` (60) and `UNCATEGORIZED`.
- `vxn.params`: the descriptor tables `PATCH_PARAMS` and `GLOBAL_PARAMS`, the
  id enums `PatchParam` and `GlobalParam`, the value enums `AssignMode`,
  `LfoSel`, `EnvSel` and `CrossModType`, and the host-id layout:
  `patch_clap_id`, `global_clap_id`, `param_ref` (giving a `PatchRef` or
  `GlobalRef`), `desc_for_clap_id` and `module_for_clap_id`. Upper per-patch
  params come first, then Lower, then globals (`TOTAL_PARAMS` in all). Each
  `ParamDesc` can `clamp`, `to_normalized` / `from_normalized`, map through its
  fader taper with `to_fader` / `from_fader` (linear or `ExpTaper`), look up
  an enum label with `variant_index`, and format a value with `display`.
- `vxn.sync`: the `SUBDIVISIONS` table (1/1 to 1/32, straight, dotted and
  triplet), `index_from_norm`, `synced_hz` and `synced_seconds`.
- `vxn.model`: `ParamId` and the abstract `ParamModel` store, whose
  `restore_from_bytes` raises `StateError` on a bad blob.
- `vxn.events`: frozen dataclasses for the three event families.
  UI intents: `SetParam`, `SetParamNorm`, `BeginGesture`, `EndGesture`,
  `ResetLayer`, `LoadPreset`, `StepPreset`, `SavePreset`, `RenamePreset`,
  `DeletePreset`, `MovePreset`, `RenameFolder`, `DeleteFolder`, `NewFolder`,
  `SetKeyMode`, `SetSplitPoint`, `SetEditLayer`, `EditorReady`,
  `RequestTextInput`, `TextInputSubmitted`. Host events: `ParamAutomation`,
  `StateLoaded`, `Tempo`. View updates: `ParamChanged`, `PresetLoaded`,
  `PresetCorpusChanged`, `KeyModeChanged`, `SplitPointChanged`,
  `EditLayerChanged`, `Status`, `OpenTextInput`, `TextInputResult`. Presets
  are addressed by `FactorySource` or `UserSource`.
- `vxn.preset`: the abstract `PresetStore` (failures raise `PresetError`) and
  the snapshot types `PresetLoad`, `UserPresetEntry`, `UserFolderEntry` and
  `PresetCorpus`.
- `vxn.controller`: `Controller`, the single place the model is changed off
  the audio thread, and `ControllerHandle`, the editor's posting handle.
- `vxn.backend`: the abstract `EditorBackend` an editor implements.

## The controller

`Controller(model, presets)` keeps bounded queues (`CHANNEL_CAPACITY` = 1024)
for UI events, host events and view events. `post_ui` and `post_host` (and
`ControllerHandle.post`) raise `queue.Full` when a queue is full; view events
that do not fit are dropped. `tick()` drains the UI queue, then the host
queue, and `drain_view_events()` returns the pending view updates.

Host automation always reaches the model, but its `ParamChanged` echo is held
back while the user has a gesture on that parameter. Preset operations that
touch the user directory refresh `controller.corpus` (under
`controller.corpus_lock`) and emit `PresetCorpusChanged`; failures become a
`Status` line. `StepPreset` walks factory presets by name, then user presets
by name across folders, wrapping at either end.

```python
from vxn.controller import Controller
from vxn.events import SetParam, ParamChanged
from vxn.model import ParamId

ctrl = Controller(my_model, my_preset_store)   # your ParamModel / PresetStore
ctrl.post_ui(SetParam(id=ParamId(2), plain=0.5))
ctrl.tick()
for event in ctrl.drain_view_events():
    if isinstance(event, ParamChanged):
        print(event.id, event.display)
```

Tempo sync on its own:

```python
from vxn.sync import index_from_norm, synced_hz

synced_hz(120.0, index_from_norm(0.35))   # Hz for the picked subdivision at 120 BPM
```

## What it does not do

The package renders no audio and has no plugin host integration or command.
It ships no concrete `ParamModel`, `PresetStore` or `EditorBackend`: the
parameter store, preset files on disk and the editor screen are supplied by
the code that uses it.

## Install and test

```
pip install .
pip install ".[test]"
pytest
```
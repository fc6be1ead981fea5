from pathlib import Path

import pytest

from vxn.domain import PresetMeta
from vxn.preset import (
    PresetCorpus,
    PresetError,
    PresetLoad,
    PresetStore,
    UserFolderEntry,
    UserPresetEntry,
)

ROOT = Path("/mock")


class MemoryStore(PresetStore):
    def __init__(self, factory=()):
        self.factory = list(factory)
        self.files = {}
        self.folders = set()

    def factory_len(self):
        return len(self.factory)

    def factory_load(self, index):
        if not 0 <= index < len(self.factory):
            raise PresetError("oob")
        meta, blob = self.factory[index]
        return PresetLoad(meta, blob)

    def factory_meta(self, index):
        if 0 <= index < len(self.factory):
            return self.factory[index][0]
        return None

    def _dir(self, folder):
        return ROOT / folder if folder else ROOT

    def user_load(self, path):
        try:
            blob = self.files[Path(path)]
        except KeyError:
            raise PresetError(f"missing {path}") from None
        return PresetLoad(PresetMeta(name=Path(path).stem), blob)

    def user_save(self, name, folder, meta, blob):
        if folder:
            self.folders.add(folder)
        path = self._dir(folder) / f"{name}.preset"
        self.files[path] = bytes(blob)
        return path

    def user_delete(self, path):
        if self.files.pop(Path(path), None) is None:
            raise PresetError("not found")

    def user_rename(self, path, new_name):
        path = Path(path)
        new_path = path.parent / f"{new_name}.preset"
        self.files[new_path] = self.files.pop(path)
        return new_path

    def user_move(self, path, dest_folder):
        path = Path(path)
        new_path = self._dir(dest_folder) / path.name
        self.files[new_path] = self.files.pop(path)
        return new_path

    def user_create_folder(self, suggested):
        self.folders.add(suggested)
        return ROOT / suggested, suggested

    def user_rename_folder(self, old, new):
        if old not in self.folders:
            raise PresetError("no such folder")
        self.folders.discard(old)
        self.folders.add(new)
        return ROOT / new, new

    def user_delete_folder(self, name):
        self.folders.discard(name)
        self.files = {p: b for p, b in self.files.items() if p.parent != ROOT / name}

    def list_user_tree(self):
        def entries(folder):
            d = self._dir(folder)
            found = [
                UserPresetEntry(p, PresetMeta(name=p.stem), folder)
                for p in self.files
                if p.parent == d
            ]
            return sorted(found, key=lambda e: e.meta.name.lower())

        tree = [UserFolderEntry(None, entries(None))]
        for folder in sorted(self.folders, key=str.lower):
            tree.append(UserFolderEntry(folder, entries(folder)))
        return tree


def test_store_is_abstract():
    with pytest.raises(TypeError):
        PresetStore()


def test_corpus_defaults_are_independent():
    a = PresetCorpus()
    b = PresetCorpus()
    a.factory.append(PresetMeta(name="X"))
    assert b.factory == []
    assert a.user == []


def test_preset_load_normalises_payload():
    load = PresetLoad(PresetMeta(name="Test"), bytearray(b"\x00\x01"), ("w",))
    assert load.blob == b"\x00\x01"
    assert load.warnings == ["w"]


def test_user_entry_path_is_a_path():
    entry = UserPresetEntry("/mock/Init.preset", PresetMeta(name="Init"))
    assert entry.path == Path("/mock/Init.preset")
    assert entry.folder is None


def test_save_then_load_round_trip():
    store = MemoryStore()
    path = store.user_save("Init", None, PresetMeta(name="Init"), b"\x01\x02")
    load = store.user_load(path)
    assert load.blob == b"\x01\x02"
    assert load.meta.name == "Init"


def test_listing_groups_by_folder():
    store = MemoryStore()
    store.user_save("Init", None, PresetMeta(name="Init"), b"")
    store.user_save("Brassy", "Lead", PresetMeta(name="Brassy"), b"")
    tree = store.list_user_tree()
    assert [f.name for f in tree] == [None, "Lead"]
    assert [p.meta.name for p in tree[0].presets] == ["Init"]
    assert [p.folder for p in tree[1].presets] == ["Lead"]


def test_rename_and_move_keep_payload():
    store = MemoryStore()
    path = store.user_save("A", None, PresetMeta(name="A"), b"\x07")
    renamed = store.user_rename(path, "B")
    moved = store.user_move(renamed, "Pads")
    assert moved == ROOT / "Pads" / "B.preset"
    assert store.user_load(moved).blob == b"\x07"
    with pytest.raises(PresetError):
        store.user_load(path)


def test_errors_are_preset_errors():
    err = PresetError("rename failed: no such folder")
    assert str(err) == "rename failed: no such folder"
    store = MemoryStore()
    with pytest.raises(PresetError, match="oob"):
        store.factory_load(0)
    with pytest.raises(PresetError):
        store.user_delete(ROOT / "gone.preset")
    with pytest.raises(PresetError):
        store.user_rename_folder("nope", "other")


def test_factory_meta_out_of_range_is_none():
    store = MemoryStore([(PresetMeta(name="Brass"), b"")])
    assert store.factory_len() == 1
    assert store.factory_meta(0) == PresetMeta(name="Brass")
    assert store.factory_meta(1) is None
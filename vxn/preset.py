"""Preset storage interface and the corpus listing shown in the browser."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from vxn.domain import PresetMeta

__all__ = [
    "PresetError",
    "PresetLoad",
    "UserPresetEntry",
    "UserFolderEntry",
    "PresetCorpus",
    "PresetStore",
]


class PresetError(Exception):
    """A preset operation failed."""


@dataclass
class PresetLoad:
    """A preset payload ready to apply to the model.

    ``blob`` is in the format the model accepts in ``restore_from_bytes``.
    """

    meta: PresetMeta
    blob: bytes
    warnings: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.blob = bytes(self.blob)
        self.warnings = list(self.warnings)


@dataclass
class UserPresetEntry:
    """One on-disk user preset; ``folder`` is ``None`` at the root."""

    path: Path
    meta: PresetMeta
    folder: Optional[str] = None

    def __post_init__(self) -> None:
        self.path = Path(self.path)


@dataclass
class UserFolderEntry:
    """One folder in the listing; ``name`` is ``None`` for the virtual root."""

    name: Optional[str]
    presets: list[UserPresetEntry] = field(default_factory=list)


@dataclass
class PresetCorpus:
    """The read-only factory bank plus the user folders on disk."""

    factory: list[PresetMeta] = field(default_factory=list)
    user: list[UserFolderEntry] = field(default_factory=list)


class PresetStore(ABC):
    """Factory bank reads and user-directory IO.

    Failing operations raise :class:`PresetError`.
    """

    @abstractmethod
    def factory_len(self) -> int:
        """Number of factory presets."""

    @abstractmethod
    def factory_load(self, index: int) -> PresetLoad:
        """Load factory preset ``index``."""

    @abstractmethod
    def factory_meta(self, index: int) -> Optional[PresetMeta]:
        """Metadata of factory preset ``index``, or ``None`` if out of range."""

    @abstractmethod
    def user_load(self, path: Path) -> PresetLoad:
        """Load a user preset file."""

    @abstractmethod
    def user_save(
        self, name: str, folder: Optional[str], meta: PresetMeta, blob: bytes
    ) -> Path:
        """Save a preset (root when ``folder`` is ``None``); return its path."""

    @abstractmethod
    def user_delete(self, path: Path) -> None:
        """Delete a user preset."""

    @abstractmethod
    def user_rename(self, path: Path, new_name: str) -> Path:
        """Rename a user preset; return the new path."""

    @abstractmethod
    def user_move(self, path: Path, dest_folder: Optional[str]) -> Path:
        """Move a user preset into another folder; return the new path."""

    @abstractmethod
    def user_create_folder(self, suggested: str) -> tuple[Path, str]:
        """Create a folder; return its path and chosen name."""

    @abstractmethod
    def user_rename_folder(self, old: str, new: str) -> tuple[Path, str]:
        """Rename a folder; return its new path and chosen (sanitised) name."""

    @abstractmethod
    def user_delete_folder(self, name: str) -> None:
        """Delete a user folder and its contents."""

    @abstractmethod
    def list_user_tree(self) -> list[UserFolderEntry]:
        """List the user side: the root slot first, then each subfolder."""
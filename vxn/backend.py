"""Pluggable editor backend: the surface a UI implements for the host shell."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from vxn.controller import ControllerHandle
from vxn.events import ViewEvent
from vxn.preset import PresetCorpus

__all__ = ["EditorBackend"]


class EditorBackend(ABC):
    """An editor the host shell opens, feeds view events to and closes.

    The instance is the live editor; the host keeps it for the editor's
    lifetime.
    """

    @abstractmethod
    def open(self, parent: Any, ctrl: ControllerHandle, corpus: PresetCorpus) -> None:
        """Open inside ``parent``, posting intents through ``ctrl``.

        ``corpus`` is the controller-published preset snapshot; it is read on
        open and again after each ``PresetCorpusChanged``.
        """

    @abstractmethod
    def close(self) -> None:
        """Tear the editor down."""

    @abstractmethod
    def push_view_event(self, event: ViewEvent) -> None:
        """Deliver a view event; batching backends may buffer it."""

    def flush_view_events(self) -> None:
        """Flush events buffered by :meth:`push_view_event`; no-op by default."""
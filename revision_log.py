# Append-only shape revision log with undo/redo stacks.

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from model import ShapeRevision

logger = logging.getLogger(__name__)


class RevisionLog:
    """Event-sourced drawing state.

    ``entries`` only ever grows through :meth:`append` and :meth:`redo_last`.
    :meth:`undo_last` moves the tail onto the redo stack; :meth:`collapse`
    projects the log onto the visible scene.
    """

    def __init__(self, revisions: Iterable[ShapeRevision] = ()) -> None:
        self._entries: List[ShapeRevision] = list(revisions)
        self._redo: List[ShapeRevision] = []
        self._version = 0
        self._collapsed_version = -1
        self._collapsed: Tuple[ShapeRevision, ...] = ()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> Tuple[ShapeRevision, ...]:
        return tuple(self._entries)

    @property
    def redo_entries(self) -> Tuple[ShapeRevision, ...]:
        return tuple(self._redo)

    @property
    def can_undo(self) -> bool:
        return bool(self._entries)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def append(self, revision: ShapeRevision) -> None:
        self._entries.append(revision)
        # A new edit forks history; the old redo branch is unreachable.
        self._redo.clear()
        self._touch()
        logger.debug("Appended %s revision of %s (z=%s)", revision.tool_kind.value, revision.id, revision.z_index)

    def undo_last(self) -> Optional[ShapeRevision]:
        if not self._entries:
            return None
        revision = self._entries.pop()
        self._redo.append(revision)
        self._touch()
        return revision

    def redo_last(self) -> Optional[ShapeRevision]:
        if not self._redo:
            return None
        revision = self._redo.pop()
        self._entries.append(revision)
        self._touch()
        return revision

    def reset(self) -> None:
        self._entries.clear()
        self._redo.clear()
        self._touch()

    def replace(self, revisions: Iterable[ShapeRevision]) -> None:
        """Description: Replace the whole log, dropping redo history
        Inputs: revisions: Iterable[ShapeRevision]
        """
        self._entries = list(revisions)
        self._redo.clear()
        self._touch()

    def head(self, shape_id: str) -> Optional[ShapeRevision]:
        """Latest revision for ``shape_id``, tombstones included."""
        for revision in reversed(self._entries):
            if revision.id == shape_id:
                return revision
        return None

    def collapse(self) -> Tuple[ShapeRevision, ...]:
        if self._collapsed_version == self._version:
            return self._collapsed
        heads: Dict[str, ShapeRevision] = {}
        for revision in self._entries:
            heads[revision.id] = revision
        visible = [revision for revision in heads.values() if not revision.disabled]
        visible.sort(key=lambda revision: revision.z_index)
        self._collapsed = tuple(visible)
        self._collapsed_version = self._version
        return self._collapsed

    def _touch(self) -> None:
        self._version += 1

"""Undo/redo history over whole-document snapshots."""

from __future__ import annotations

import copy
from collections import deque
from typing import Any, Deque, Dict, List, Mapping, Optional

DEFAULT_HISTORY_LIMIT = 20


class HistoryManager:
    """Bounded undo/redo over whole-document snapshots.

    Silent commits replace the live document without touching the stacks. The
    document as it stood before the first pending silent commit is kept as the
    baseline, so the next recorded commit (or ``checkpoint``) pushes that
    baseline and one undo reverts the silent run together with the commit.
    """

    def __init__(self, document: Mapping[str, Any], *, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        self._limit = max(1, int(limit))
        self._current: Dict[str, Any] = copy.deepcopy(dict(document))
        self._past: Deque[Dict[str, Any]] = deque(maxlen=self._limit)
        self._future: List[Dict[str, Any]] = []
        self._baseline: Optional[Dict[str, Any]] = None

    @property
    def current(self) -> Dict[str, Any]:
        return self._current

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def past(self) -> List[Dict[str, Any]]:
        return list(self._past)

    @property
    def future(self) -> List[Dict[str, Any]]:
        return list(self._future)

    @property
    def has_pending_silent(self) -> bool:
        return self._baseline is not None

    def can_undo(self) -> bool:
        return bool(self._past)

    def can_redo(self) -> bool:
        return bool(self._future)

    def commit(self, snapshot: Mapping[str, Any]) -> None:
        self._record(self._take_baseline())
        self._current = copy.deepcopy(dict(snapshot))

    def silent_commit(self, snapshot: Mapping[str, Any]) -> None:
        if self._baseline is None:
            self._baseline = copy.deepcopy(self._current)
        self._current = copy.deepcopy(dict(snapshot))

    def checkpoint(self) -> bool:
        """Record pending silent changes as a single undo step."""

        if self._baseline is None:
            return False
        self._record(self._take_baseline())
        return True

    def undo(self) -> bool:
        if not self._past:
            return False
        self._baseline = None
        self._future.append(copy.deepcopy(self._current))
        self._current = copy.deepcopy(self._past.pop())
        return True

    def redo(self) -> bool:
        if not self._future:
            return False
        self._baseline = None
        self._past.append(copy.deepcopy(self._current))
        self._current = copy.deepcopy(self._future.pop())
        return True

    def reset(self, document: Mapping[str, Any]) -> None:
        self._current = copy.deepcopy(dict(document))
        self._past.clear()
        self._future.clear()
        self._baseline = None

    def _take_baseline(self) -> Dict[str, Any]:
        baseline = self._baseline if self._baseline is not None else self._current
        self._baseline = None
        return baseline

    def _record(self, snapshot: Dict[str, Any]) -> None:
        self._past.append(copy.deepcopy(snapshot))
        self._future.clear()

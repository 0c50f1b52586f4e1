"""
Interactive session state
=========================

A Session keeps the full dataset, the current filters and a history of
previous filters (undo/redo stacks). The working set itself is never stored:
`current()` rebuilds it from (dataset, filters) on every call.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List
import logging

from .engine import Aggregator
from .models import DataFilters

logger = logging.getLogger(__name__)


@dataclass
class Session:
    dataset: Aggregator
    filters: DataFilters = field(default_factory=DataFilters)
    # State-changing commands, in order
    command_log: List[str] = field(default_factory=list)

    _undo: List[DataFilters] = field(default_factory=list, init=False, repr=False)
    _redo: List[DataFilters] = field(default_factory=list, init=False, repr=False)

    def current(self) -> Aggregator:
        return self.dataset.where(self.filters)

    # ---------------- History (Stacks) ----------------
    def _push_history(self) -> None:
        self._undo.append(self.filters)
        self._redo.clear()

    def apply(self, **changes) -> DataFilters:
        """Replace the given filter fields, keeping the others."""
        new = replace(self.filters, **changes)
        self._push_history()
        self.filters = new
        logger.debug("filters -> %s", new)
        return new

    def reset(self) -> None:
        self._push_history()
        self.filters = DataFilters()
        logger.debug("filters reset")

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self.filters)
        self.filters = self._undo.pop()
        logger.debug("undo -> %s", self.filters)
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self.filters)
        self.filters = self._redo.pop()
        logger.debug("redo -> %s", self.filters)
        return True

"""Linear undo/redo history of whole-workbook snapshots."""

import logging

from ..models.sheet_data import WorkbookData

logger = logging.getLogger(__name__)


class HistoryManager:
    """Undo and redo stacks of workbook snapshots.

    Workbook models are frozen and every store operation returns a new value,
    so by default a snapshot is the workbook object itself and consecutive
    snapshots share unchanged sheets and cells. Set ``deep_copy`` to store
    fully independent copies instead.

    Usage::

        history = HistoryManager()
        history.begin_mutation(workbook)   # before committing a change
        workbook = apply_change(workbook)
        workbook = history.undo(workbook) or workbook
    """

    def __init__(self, max_depth: int | None = None, deep_copy: bool = False) -> None:
        self.max_depth = max_depth
        self.deep_copy = deep_copy
        self._undo_stack: list[WorkbookData] = []
        self._redo_stack: list[WorkbookData] = []

    def _snapshot(self, workbook: WorkbookData) -> WorkbookData:
        if not self.deep_copy:
            return workbook
        # Rebuilt from a dump: the read-only cell mappings cannot be deep-copied
        return WorkbookData.model_validate(workbook.model_dump(), strict=False)

    def _trim(self) -> None:
        if self.max_depth is not None and len(self._undo_stack) > self.max_depth:
            dropped = len(self._undo_stack) - self.max_depth
            del self._undo_stack[:dropped]
            logger.debug(f"Dropped {dropped} oldest undo snapshot(s)")

    def begin_mutation(self, current: WorkbookData) -> None:
        """Record the state just before a user-visible change.

        Call once per logical change so one undo reverts one action. Any
        redo history is discarded.
        """
        self._undo_stack.append(self._snapshot(current))
        self._trim()
        if self._redo_stack:
            logger.debug(f"Discarding {len(self._redo_stack)} redo snapshot(s)")
        self._redo_stack.clear()

    def undo(self, current: WorkbookData) -> WorkbookData | None:
        """Step back one change.

        Returns:
            The previous workbook, or None if there is nothing to undo
        """
        if not self._undo_stack:
            return None
        previous = self._undo_stack.pop()
        self._redo_stack.append(self._snapshot(current))
        return previous

    def redo(self, current: WorkbookData) -> WorkbookData | None:
        """Re-apply the most recently undone change.

        Returns:
            The restored workbook, or None if there is nothing to redo
        """
        if not self._redo_stack:
            return None
        following = self._redo_stack.pop()
        self._undo_stack.append(self._snapshot(current))
        self._trim()
        return following

    def clear(self) -> None:
        """Forget all history."""
        self._undo_stack.clear()
        self._redo_stack.clear()

    @property
    def can_undo(self) -> bool:
        """Whether undo would change anything."""
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        """Whether redo would change anything."""
        return bool(self._redo_stack)

    @property
    def undo_depth(self) -> int:
        """Number of undo steps available."""
        return len(self._undo_stack)

    @property
    def redo_depth(self) -> int:
        """Number of redo steps available."""
        return len(self._redo_stack)

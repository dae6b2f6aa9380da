"""Transient read/write access to a single matrix cell."""

import logging
from typing import TYPE_CHECKING, Any

from infinite_matrix.errors import EmptyCellError

if TYPE_CHECKING:
    from infinite_matrix.dimension_node import DimensionNode, Slot

logger = logging.getLogger(__name__)


class CellHandle:
    """Accessor bound to the value of one slot of a DimensionNode.

    The handle stores the owning node and the index, and looks the slot up
    again on every access rather than keeping a reference to its storage.
    Obtaining a handle never changes occupancy; only ``assign`` and ``clear``
    do, and only on a genuine empty/occupied transition:

    - ``assign`` on an empty cell fires the node's added chain once.
    - ``assign`` on an occupied cell overwrites the value silently.
    - ``clear`` on an occupied cell fires the node's deleted chain once.
    - ``clear`` on an empty cell does nothing.

    Examples:
        handle = matrix.enter_dimension(100).value_handle(100)
        handle.assign(314)
        handle.read()       # 314
        handle.clear()
        handle.is_empty()   # True
    """

    __slots__ = ("_node", "_index")

    def __init__(self, node: "DimensionNode", index: int):
        self._node = node
        self._index = index

    @property
    def node(self) -> "DimensionNode":
        return self._node

    @property
    def index(self) -> int:
        return self._index

    def _slot(self) -> "Slot":
        return self._node._slots[self._index]

    def is_empty(self) -> bool:
        """Return True iff the cell currently holds no value."""
        return not self._slot().has_value

    def read(self) -> Any:
        """Return the stored value.

        Raises:
            EmptyCellError: If the cell is empty. Callers are expected to
                check ``is_empty()`` first; no default is ever substituted.
        """
        slot = self._slot()
        if not slot.has_value:
            raise EmptyCellError(self._index)
        return slot.value

    def assign(self, value: Any) -> None:
        """Store ``value``, counting the cell as occupied if it was empty."""
        slot = self._slot()
        if slot.has_value:
            slot.value = value
            return
        # Count first: the value is stored only once every counter agrees
        self._node._on_value_added()
        slot.value = value
        logger.debug(f"Cell {self._index} became occupied")

    def clear(self) -> None:
        """Empty the cell, uncounting it if it held a value."""
        slot = self._slot()
        if not slot.has_value:
            return
        self._node._on_value_deleted()
        slot.reset_value()
        logger.debug(f"Cell {self._index} became empty")

    # Attribute-style access mirroring read/assign/clear
    @property
    def value(self) -> Any:
        return self.read()

    @value.setter
    def value(self, value: Any) -> None:
        self.assign(value)

    @value.deleter
    def value(self) -> None:
        self.clear()

    def __repr__(self) -> str:
        if self.is_empty():
            return f"CellHandle(index={self._index}, empty)"
        return f"CellHandle(index={self._index}, value={self._slot().value!r})"

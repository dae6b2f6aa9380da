"""Recursive storage for the infinite matrix.

A DimensionNode is one level of the matrix: a sparse table from
non-negative index to Slot. A slot may hold a value (making its index a
terminal cell), a child node (one further dimension reachable through the
index), both, or neither. Slots and child nodes are created lazily on first
reference and never removed.

Each node also maintains ``occupancy``, the number of values stored
anywhere in its subtree. The counter is never recomputed: a cell changing
from empty to occupied raises its node's counter by one and the same update
is delegated to the parent, up to the root.
"""

from dataclasses import dataclass
import logging
from typing import Any, Optional

from infinite_matrix.cell_handle import CellHandle
from infinite_matrix.errors import SLOT_CONFLICT_ERROR_MSG, InfiniteMatrixError, SlotAllocationError
from infinite_matrix.occupancy import DEFAULT_OCCUPANCY_POLICY, OccupancyPolicy
from infinite_matrix.traversal import Visitor, iter_cells, traverse
from infinite_matrix.utils import normalize_index

logger = logging.getLogger(__name__)


class _Empty:
    """Marker for a slot without a value, so that None remains storable."""

    def __repr__(self) -> str:
        return "<empty>"

EMPTY = _Empty()


@dataclass
class Slot:
    """Per-index storage unit of a DimensionNode."""

    value: Any = EMPTY
    child: Optional["DimensionNode"] = None

    @property
    def has_value(self) -> bool:
        return self.value is not EMPTY

    def reset_value(self) -> None:
        self.value = EMPTY


class DimensionNode:
    """One dimension of the infinite matrix.

    Nodes are created by their parent (or by InfiniteMatrix for the root)
    and exclusively own their child nodes. ``parent`` is a back-reference
    used only to forward occupancy updates.

    Args:
        parent: Owning node, or None for the root.
        policy: OccupancyPolicy applied to this node's counter. Children
                inherit the policy of the node that creates them.
    """

    def __init__(self,
                 parent: Optional["DimensionNode"] = None,
                 policy: OccupancyPolicy = DEFAULT_OCCUPANCY_POLICY):
        self._parent = parent
        self._policy = policy
        self._slots: dict[int, Slot] = {}
        self._occupancy = 0

    @property
    def parent(self) -> Optional["DimensionNode"]:
        return self._parent

    @property
    def policy(self) -> OccupancyPolicy:
        return self._policy

    @property
    def occupancy(self) -> int:
        """Number of cells holding a value in this node's subtree."""
        return self._occupancy

    def __len__(self) -> int:
        return self._occupancy

    def __contains__(self, index) -> bool:
        """Whether a slot exists at ``index``. Never allocates.

        Indices outside the non-negative integer domain are never present.
        """
        try:
            index = normalize_index(index)
        except InfiniteMatrixError:
            return False
        return index in self._slots

    def indices(self) -> list[int]:
        """Indices with an allocated slot, whether occupied or not."""
        return list(self._slots)

    def _create_slot_if_required(self, index: int) -> Slot:
        slot = self._slots.get(index)
        if slot is not None:
            return slot
        slot = Slot()
        if self._slots.setdefault(index, slot) is not slot:
            raise SlotAllocationError(SLOT_CONFLICT_ERROR_MSG.format(index=index))
        logger.debug(f"Allocated slot {index}")
        return slot

    def enter_dimension(self, index) -> "DimensionNode":
        """Return the node one dimension below ``index``, creating it if needed.

        Creates the slot and/or the child node when missing. Occupancy is not
        affected: an entered but unwritten dimension holds no values.

        Args:
            index: Non-negative integer index

        Returns:
            DimensionNode: The child node reachable through ``index``

        Raises:
            ValidationError: If ``index`` is not an integer
            InvalidIndexError: If ``index`` is negative
        """
        index = normalize_index(index)
        slot = self._create_slot_if_required(index)
        if slot.child is None:
            slot.child = DimensionNode(parent=self, policy=self._policy)
            logger.debug(f"Allocated child dimension at index {index}")
        return slot.child

    def value_handle(self, index) -> CellHandle:
        """Return a handle to the value at ``index``, creating the slot if needed.

        Obtaining the handle does not change occupancy; assigning through it
        does.

        Raises:
            ValidationError: If ``index`` is not an integer
            InvalidIndexError: If ``index`` is negative
        """
        index = normalize_index(index)
        self._create_slot_if_required(index)
        return CellHandle(self, index)

    # matrix(i)(j)[k] reads as "enter i, enter j, cell k"
    def __call__(self, index) -> "DimensionNode":
        return self.enter_dimension(index)

    def __getitem__(self, index) -> CellHandle:
        return self.value_handle(index)

    def traverse(self, visitor: Visitor) -> None:
        """Call ``visitor(value, path)`` for every occupied cell in the subtree.

        ``path`` is a tuple of indices relative to this node. Exactly
        ``self.occupancy`` calls are made, in unspecified order. The visitor
        must not allocate slots in this subtree.
        """
        traverse(self, visitor)

    def iter_cells(self):
        """Generator form of ``traverse`` yielding ``(path, value)`` pairs."""
        return iter_cells(self)

    def _on_value_added(self) -> None:
        self._propagate(+1)

    def _on_value_deleted(self) -> None:
        self._propagate(-1)

    def _propagate(self, delta: int) -> None:
        # Apply the update here, then to each ancestor exactly once.
        # A policy failure partway up restores every counter already changed.
        applied = []
        node = self
        try:
            while node is not None:
                previous = node._occupancy
                node._occupancy = node._policy.adjust(node, delta)
                applied.append((node, previous))
                node = node._parent
        except Exception:
            for updated, previous in applied:
                updated._occupancy = previous
            raise

    def __repr__(self) -> str:
        return f"DimensionNode(slots={len(self._slots)}, occupancy={self._occupancy})"

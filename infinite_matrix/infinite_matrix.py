import logging
import operator
from typing import Any, Iterable, Iterator, Optional, Union
import numpy as np
import torch

from infinite_matrix.cell_handle import CellHandle
from infinite_matrix.dimension_node import DimensionNode
from infinite_matrix.errors import InfiniteMatrixError, ValidationError
from infinite_matrix.occupancy import DEFAULT_OCCUPANCY_POLICY, OccupancyPolicy
from infinite_matrix.traversal import Visitor
from infinite_matrix.utils import normalize_path

# COORDINATE SYSTEM DEFINITIONS:
# index - one non-negative integer selecting a slot within a single node
# path - tuple of indices from the root; every index but the last enters a dimension,
#        the last one selects the cell
# depth - length of a path; cells of different depths coexist in one matrix

# CONSTANTS
DEFAULT_SPARSE_DTYPE = torch.float32
INDEX_DTYPE = np.int64

# ERROR MESSAGES
COO_SHAPE_ERROR_MSG = "indices must have shape (depth, n), got {actual}"
VALUES_NOT_SEQUENCE_ERROR_MSG = "values must be a sequence of n values, got {actual}"
COO_LENGTH_ERROR_MSG = "indices describe {expected} cells but {actual} values were given"
SIZE_TOO_SMALL_ERROR_MSG = "size {size} cannot hold index {index} in dimension {dim}"

# Set up logging
logger = logging.getLogger(__name__)

Path = Union[int, Iterable[int]]


def _validate_policy(policy) -> None:
    """Validate the occupancy policy."""
    if not isinstance(policy, OccupancyPolicy):
        raise ValidationError(f"policy must be an OccupancyPolicy, got {type(policy)}")

def _validate_depth(depth) -> None:
    """Validate a cell depth for coordinate export."""
    if isinstance(depth, bool) or not isinstance(depth, int) or depth <= 0:
        raise ValidationError(f"depth must be a positive integer, got {depth}")

def _validate_size(size: tuple, depth: int) -> tuple[int, ...]:
    """Validate an explicit sparse tensor size and return it as plain ints."""
    if len(size) != depth:
        raise ValidationError(f"size length {len(size)} must match depth {depth}")
    try:
        sizes = tuple(operator.index(s) for s in size)
    except TypeError:
        raise ValidationError(f"All sizes must be non-negative integers, got {size}") from None
    if any(s < 0 for s in sizes):
        raise ValidationError(f"All sizes must be non-negative integers, got {size}")
    return sizes

def _values_to_list(values) -> list:
    """Collect coordinate values without coercing them through a common dtype.

    numpy arrays and torch tensors are converted element-wise to Python
    scalars; any other sequence is taken as given.
    """
    if isinstance(values, (np.ndarray, torch.Tensor)):
        converted = values.tolist()
        if not isinstance(converted, list):
            raise ValidationError(VALUES_NOT_SEQUENCE_ERROR_MSG.format(actual=type(values)))
        return converted
    if isinstance(values, (str, bytes)):
        raise ValidationError(VALUES_NOT_SEQUENCE_ERROR_MSG.format(actual=type(values)))
    try:
        return list(values)
    except TypeError:
        raise ValidationError(VALUES_NOT_SEQUENCE_ERROR_MSG.format(actual=type(values))) from None


class InfiniteMatrix:
    """A sparse N-dimensional matrix of unbounded extent in every dimension.

    Every coordinate starts out empty and memory is used only for
    coordinates that have been referenced. Coordinates are paths of
    non-negative integers of any length; a path can address a cell and at
    the same time be the prefix of deeper paths.

    Two styles of access are provided. The node style descends one
    dimension at a time and finishes with a CellHandle:

        matrix = InfiniteMatrix()
        matrix.enter_dimension(100).value_handle(100).assign(314)
        matrix(100)(100)[100].assign(2)      # same thing, shorter

    The path style addresses a cell by its full coordinate:

        matrix[100, 100] = 314
        matrix[100, 100]                     # 314
        del matrix[100, 100]

    Both styles allocate slots and nodes along the way; nothing is ever
    freed, even when cells are cleared again.

    Args:
        policy: OccupancyPolicy used by every node of the matrix to apply
                occupancy updates. Defaults to plain counting.
    """

    def __init__(self, policy: Optional[OccupancyPolicy] = None):
        if policy is None:
            policy = DEFAULT_OCCUPANCY_POLICY
        _validate_policy(policy)
        self._root = DimensionNode(parent=None, policy=policy)

    @classmethod
    def from_coo(cls, indices, values, policy: Optional[OccupancyPolicy] = None) -> "InfiniteMatrix":
        """Build a matrix from coordinate-format arrays.

        Args:
            indices: Array-like of shape (depth, n); column j is the path of cell j.
                     numpy arrays, CPU torch tensors and nested lists are accepted.
            values: Sequence of n values, stored as given. numpy arrays and
                    torch tensors are converted to Python scalars first.
            policy: Optional OccupancyPolicy for the new matrix

        Returns:
            InfiniteMatrix holding the n cells. Repeated coordinates keep the
            last value.

        Raises:
            ValidationError: If the arrays have inconsistent shapes
            InvalidIndexError: If any index is negative
        """
        indices = np.asarray(indices)
        if indices.ndim != 2 or indices.shape[0] == 0:
            raise ValidationError(COO_SHAPE_ERROR_MSG.format(actual=indices.shape))
        values = _values_to_list(values)
        if len(values) != indices.shape[1]:
            raise ValidationError(COO_LENGTH_ERROR_MSG.format(expected=indices.shape[1], actual=len(values)))

        matrix = cls(policy=policy)
        for path, value in zip(indices.T.tolist(), values):
            matrix[path] = value
        logger.debug(f"Built matrix from {len(values)} coordinate entries of depth {indices.shape[0]}")
        return matrix

    @property
    def root(self) -> DimensionNode:
        return self._root

    @property
    def policy(self) -> OccupancyPolicy:
        return self._root.policy

    @property
    def occupancy(self) -> int:
        """Number of occupied cells in the whole matrix."""
        return self._root.occupancy

    def __len__(self) -> int:
        return self._root.occupancy

    # Node-style access, delegated to the root

    def enter_dimension(self, index) -> DimensionNode:
        """Return the first-level node reachable through ``index``."""
        return self._root.enter_dimension(index)

    def value_handle(self, index) -> CellHandle:
        """Return a handle to the first-level cell at ``index``."""
        return self._root.value_handle(index)

    def __call__(self, index) -> DimensionNode:
        return self._root.enter_dimension(index)

    def traverse(self, visitor: Visitor) -> None:
        """Call ``visitor(value, path)`` for every occupied cell, in unspecified order."""
        self._root.traverse(visitor)

    # Path-style access

    def node_at(self, path: Path) -> DimensionNode:
        """Enter every index of ``path`` in turn and return the node reached."""
        node = self._root
        for index in normalize_path(path):
            node = node.enter_dimension(index)
        return node

    def cell(self, path: Path) -> CellHandle:
        """Return a handle to the cell addressed by ``path``.

        All indices but the last are entered as dimensions; the last one
        selects the cell in the node reached.
        """
        path = normalize_path(path)
        node = self._root
        for index in path[:-1]:
            node = node.enter_dimension(index)
        return node.value_handle(path[-1])

    def __getitem__(self, path: Path) -> Any:
        """Read the value at ``path``.

        Raises:
            EmptyCellError: If no value is stored at ``path``
        """
        return self.cell(path).read()

    def __setitem__(self, path: Path, value: Any) -> None:
        self.cell(path).assign(value)

    def __delitem__(self, path: Path) -> None:
        """Clear the cell at ``path``. Clearing an empty cell is a no-op."""
        self.cell(path).clear()

    def get(self, path: Path, default: Any = None) -> Any:
        """Return the value at ``path``, or ``default`` if the cell is empty."""
        handle = self.cell(path)
        if handle.is_empty():
            return default
        return handle.read()

    def __contains__(self, path: Path) -> bool:
        """Whether a value is stored at ``path``. Never allocates.

        Paths outside the non-negative integer domain are never present.
        """
        try:
            path = normalize_path(path)
        except InfiniteMatrixError:
            return False
        node = self._root
        for index in path[:-1]:
            slot = node._slots.get(index)
            if slot is None or slot.child is None:
                return False
            node = slot.child
        slot = node._slots.get(path[-1])
        return slot is not None and slot.has_value

    def items(self) -> Iterator[tuple[tuple[int, ...], Any]]:
        """Yield ``(path, value)`` for every occupied cell."""
        return self._root.iter_cells()

    def __iter__(self) -> Iterator[tuple[int, ...]]:
        for path, _ in self._root.iter_cells():
            yield path

    # Coordinate interop

    def to_coo(self, depth: int, dtype=None) -> tuple[np.ndarray, np.ndarray]:
        """Export the cells at exactly ``depth`` in coordinate format.

        Args:
            depth: Path length of the cells to export. Cells at other depths
                   are skipped.
            dtype: Optional numpy dtype for the values array

        Returns:
            Tuple containing:
            - indices: int64 array of shape (depth, n), column j is a path
            - values: array of the n values, in the same column order

        Examples:
            matrix[1, 2] = 5.0
            matrix[3, 4] = 6.0
            matrix[7] = 1.0           # depth 1, not exported below
            matrix.to_coo(2)  -> (array([[1, 3], [2, 4]]), array([5., 6.]))
        """
        _validate_depth(depth)
        paths = []
        values = []
        for path, value in self._root.iter_cells():
            if len(path) == depth:
                paths.append(path)
                values.append(value)

        if paths:
            indices = np.ascontiguousarray(np.array(paths, dtype=INDEX_DTYPE).T)
        else:
            indices = np.empty((depth, 0), dtype=INDEX_DTYPE)
        values = np.asarray(values, dtype=dtype)
        logger.debug(f"Exported {len(paths)} cells of depth {depth} to coordinate format")
        return indices, values

    def to_sparse_tensor(self,
                         depth: int,
                         size: Optional[tuple[int, ...]] = None,
                         dtype: torch.dtype = DEFAULT_SPARSE_DTYPE) -> torch.Tensor:
        """Export the cells at exactly ``depth`` as a torch sparse COO tensor.

        Args:
            depth: Path length of the cells to export
            size: Dense shape of the result. Defaults to the largest index in
                  each dimension plus one.
            dtype: torch dtype of the result (default: torch.float32)

        Returns:
            torch.Tensor: Coalesced sparse tensor with ``depth`` dimensions

        Raises:
            ValidationError: If ``size`` cannot hold every exported index
        """
        indices, values = self.to_coo(depth)
        if size is None:
            size = tuple(int(m) + 1 for m in indices.max(axis=1)) if indices.shape[1] else (0,) * depth
        else:
            size = _validate_size(tuple(size), depth)
            if indices.shape[1]:
                for dim, (s, m) in enumerate(zip(size, indices.max(axis=1))):
                    if m >= s:
                        raise ValidationError(SIZE_TOO_SMALL_ERROR_MSG.format(size=size, index=int(m), dim=dim))

        tensor = torch.sparse_coo_tensor(
            torch.from_numpy(indices),
            torch.as_tensor(values.tolist(), dtype=dtype),
            size=size,
        )
        return tensor.coalesce()

    def __repr__(self) -> str:
        return f"InfiniteMatrix(occupancy={self.occupancy}, policy={self.policy!r})"

from .infinite_matrix import InfiniteMatrix
from .dimension_node import DimensionNode, Slot
from .cell_handle import CellHandle
from .occupancy import OccupancyPolicy, CountingPolicy
from .errors import (
    InfiniteMatrixError,
    EmptyCellError,
    SlotAllocationError,
    OccupancyError,
    ValidationError,
    InvalidIndexError,
)
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("infinite-matrix")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    'InfiniteMatrix',
    'DimensionNode',
    'Slot',
    'CellHandle',
    'OccupancyPolicy',
    'CountingPolicy',
    'InfiniteMatrixError',
    'EmptyCellError',
    'SlotAllocationError',
    'OccupancyError',
    'ValidationError',
    'InvalidIndexError',
]

"""Exceptions raised by infinite matrix operations.

Every exception here signals a broken contract rather than an expected
runtime condition: either the caller violated a precondition (reading an
empty cell, passing a negative index) or the tree's bookkeeping is no longer
consistent.
"""

# ERROR MESSAGES
EMPTY_CELL_ERROR_MSG = "Cell at index {index} is empty. Check is_empty() before reading."
SLOT_CONFLICT_ERROR_MSG = "Slot for index {index} already exists. The node's slot table is inconsistent."
NEGATIVE_OCCUPANCY_ERROR_MSG = "Occupancy {occupancy} cannot be changed by {delta}: counter would become negative."
NEGATIVE_INDEX_ERROR_MSG = "Index {index} is negative. Matrix indices must be non-negative integers."


class InfiniteMatrixError(Exception):
    """Base exception for infinite matrix operations."""
    pass

class SlotAllocationError(InfiniteMatrixError):
    """Raised when lazily creating a slot finds one already in place."""
    pass

class EmptyCellError(InfiniteMatrixError):
    """Raised when reading a cell that holds no value."""

    def __init__(self, index):
        self.index = index
        super().__init__(EMPTY_CELL_ERROR_MSG.format(index=index))

class OccupancyError(InfiniteMatrixError):
    """Raised when an occupancy update would drive a counter below zero."""
    pass

class ValidationError(InfiniteMatrixError):
    """Raised when parameter validation fails."""
    pass

class InvalidIndexError(InfiniteMatrixError, IndexError):
    """Raised for indices outside the non-negative integer domain."""

    def __init__(self, index):
        self.index = index
        super().__init__(NEGATIVE_INDEX_ERROR_MSG.format(index=index))

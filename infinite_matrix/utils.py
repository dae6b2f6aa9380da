"""Utility functions for infinite matrix index processing.

This module contains helpers for normalizing user-provided indices and
paths into the internal representation: plain non-negative ``int`` indices
and tuples of them.
"""

import operator
from typing import Iterable, Union

from infinite_matrix.errors import InvalidIndexError, ValidationError


def normalize_index(index) -> int:
    """Convert an index to a plain non-negative int.

    Anything implementing ``__index__`` is accepted (Python ints, numpy
    integer scalars, 0-d integer tensors). Booleans are rejected even though
    they are ints, since ``matrix[True]`` is almost certainly a mistake.

    Args:
        index: Index to normalize

    Returns:
        int: The index as a Python int

    Raises:
        ValidationError: If the index is not an integer
        InvalidIndexError: If the index is negative

    Examples:
        normalize_index(5) -> 5
        normalize_index(np.int64(7)) -> 7
        normalize_index(-1) -> raises InvalidIndexError
    """
    if isinstance(index, bool):
        raise ValidationError(f"Index must be an integer, got {type(index)}")
    try:
        index = operator.index(index)
    except TypeError:
        raise ValidationError(f"Index must be an integer, got {type(index)}") from None
    if index < 0:
        raise InvalidIndexError(index)
    return index

def normalize_path(path: Union[int, Iterable[int]]) -> tuple[int, ...]:
    """Convert a path specification to a tuple of normalized indices.

    A single integer is treated as a path of length one. Lists, tuples and
    other iterables are normalized element by element.

    Args:
        path: An integer index or an iterable of integer indices

    Returns:
        tuple[int, ...]: Normalized, non-empty path

    Raises:
        ValidationError: If the path is empty or contains non-integers
        InvalidIndexError: If the path contains a negative index

    Examples:
        normalize_path(3) -> (3,)
        normalize_path([100, 100]) -> (100, 100)
        normalize_path(()) -> raises ValidationError
    """
    if isinstance(path, (str, bytes)):
        raise ValidationError(f"Path must be an integer or a sequence of integers, got {type(path)}")
    try:
        indices = tuple(path)
    except TypeError:
        # Not iterable: treat as a single index (ints, numpy scalars, 0-d arrays)
        indices = (path,)
    if len(indices) == 0:
        raise ValidationError("Path must contain at least one index")
    return tuple(normalize_index(i) for i in indices)

"""Shared test fixtures and configuration for infinite matrix tests."""

import pytest
from infinite_matrix import InfiniteMatrix
from infinite_matrix.occupancy import CountingPolicy


class RecordingPolicy(CountingPolicy):
    """Counting policy that remembers every update it applies."""

    def __init__(self):
        self.updates = []

    def adjust(self, node, delta):
        self.updates.append((node, delta))
        return super().adjust(node, delta)


@pytest.fixture
def matrix():
    """Fresh, empty matrix."""
    return InfiniteMatrix()


@pytest.fixture
def recording_policy():
    """Policy that records each (node, delta) update."""
    return RecordingPolicy()


@pytest.fixture
def recorded_matrix(recording_policy):
    """Empty matrix whose updates go through a recording policy."""
    return InfiniteMatrix(policy=recording_policy)


@pytest.fixture
def nested_matrix():
    """Matrix with three cells stacked along a single chain of dimensions."""
    m = InfiniteMatrix()
    m(100)[100].assign(314)
    m(100)(100)[100].assign(2)
    m(100)(100)(100)[100].assign(3)
    return m


@pytest.fixture
def scattered_matrix():
    """Matrix with cells at several depths and branches."""
    m = InfiniteMatrix()
    m[0] = 'a'
    m[0, 1] = 'b'
    m[0, 2] = 'c'
    m[5, 5, 5] = 'd'
    m[5, 6] = 'e'
    m[7, 0, 0, 0, 0] = 'f'
    return m

"""Occupancy counting policies for dimension nodes.

Every dimension node keeps an occupancy counter: the number of cells holding
a value anywhere in its subtree. When a cell goes from empty to occupied (or
back), the owning node and each of its ancestors apply a +1 (or -1) update.
The arithmetic of that update is delegated to an OccupancyPolicy chosen when
the matrix is constructed and shared by every node of the tree.

The default CountingPolicy just adds the delta. Alternative policies can
record updates, or wrap them in synchronization, without touching the node
classes.
"""

import abc

from infinite_matrix.errors import NEGATIVE_OCCUPANCY_ERROR_MSG, OccupancyError


class OccupancyPolicy(abc.ABC):
    """Abstract base class for occupancy update strategies.

    A policy is invoked once per node along an added/deleted chain, starting
    at the node that owns the changed cell and ending at the root. It must
    return the node's new occupancy; the node stores the result.
    """

    @abc.abstractmethod
    def adjust(self, node, delta: int) -> int:
        """Return ``node``'s occupancy after applying ``delta`` (+1 or -1)."""
        raise NotImplementedError

class CountingPolicy(OccupancyPolicy):
    """Plain counter arithmetic, rejecting updates below zero."""

    def adjust(self, node, delta: int) -> int:
        occupancy = node.occupancy + delta
        if occupancy < 0:
            raise OccupancyError(NEGATIVE_OCCUPANCY_ERROR_MSG.format(occupancy=node.occupancy, delta=delta))
        return occupancy

    def __repr__(self) -> str:
        return "CountingPolicy()"


DEFAULT_OCCUPANCY_POLICY = CountingPolicy()

__all__ = ["OccupancyPolicy", "CountingPolicy", "DEFAULT_OCCUPANCY_POLICY"]

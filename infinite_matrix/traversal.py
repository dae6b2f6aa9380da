"""Depth-first enumeration of occupied cells.

The walk keeps a single path stack shared by every level: an index is pushed
when its slot is entered and popped once the slot (and its child subtree, if
any) has been visited, so the path length at any point equals the depth
below the traversed node. Levels are tracked with an explicit stack of slot
iterators instead of Python recursion, so arbitrarily deep trees can be
walked without reaching the interpreter's recursion limit.

Sibling order follows the node's slot table and is not part of the
contract.
"""

from typing import TYPE_CHECKING, Any, Callable, Iterator

if TYPE_CHECKING:
    from infinite_matrix.dimension_node import DimensionNode

Visitor = Callable[[Any, tuple[int, ...]], None]


def iter_cells(node: "DimensionNode") -> Iterator[tuple[tuple[int, ...], Any]]:
    """Yield ``(path, value)`` for every occupied cell below ``node``.

    ``path`` is the tuple of indices leading from ``node`` to the cell,
    inclusive of the cell's own index. Exactly ``node.occupancy`` pairs are
    produced and every path is distinct.

    The slot tables must not grow while the generator is suspended: creating
    slots from inside the loop body raises RuntimeError.
    """
    path: list[int] = []
    levels = [iter(node._slots.items())]
    while levels:
        entry = next(levels[-1], None)
        if entry is None:
            levels.pop()
            # Leaving a child level: drop the index that led into it
            if levels:
                path.pop()
            continue

        index, slot = entry
        path.append(index)
        if slot.has_value:
            yield tuple(path), slot.value
        if slot.child is not None:
            levels.append(iter(slot.child._slots.items()))
        else:
            path.pop()

def traverse(node: "DimensionNode", visitor: Visitor) -> None:
    """Call ``visitor(value, path)`` once per occupied cell below ``node``."""
    for path, value in iter_cells(node):
        visitor(value, path)

"""Depth-first visitor protocol shared by the list tree and the aggregate tree.

``walk`` calls ``enter`` on a node, which returns a factory. The factory is
called once per child to build that child's inbound context, the child is
walked, and finally ``exit`` receives the node, its own context, every context
handed to its children and every value their ``exit`` calls returned. The
return value of ``exit`` is the walk's result for that node, which lets a
visitor fold an accumulator upward without shared mutable state.
"""

from collections.abc import Callable, Sequence
from enum import StrEnum
from typing import Any, Protocol, TypeVar

CtxT = TypeVar("CtxT")
ResultT = TypeVar("ResultT")


class NodeKind(StrEnum):
    """Tag that visitors branch on."""

    ROOT = "root"
    TEMPORAL = "temporal"
    SOURCE = "source"
    TASK = "task"
    LIST = "list"


class Visitable(Protocol):
    """Anything with a kind tag and ordered children."""

    @property
    def kind(self) -> NodeKind: ...

    @property
    def children(self) -> Sequence[Any]: ...


class Visitor(Protocol[CtxT, ResultT]):
    """Per-node callbacks for ``walk``."""

    def enter(self, node: Any, ctx: CtxT) -> Callable[[], CtxT]:
        """Handle a node before its children; return the child context factory."""
        ...

    def exit(
        self,
        node: Any,
        ctx: CtxT,
        children_ctx: list[CtxT],
        children_results: list[ResultT],
    ) -> ResultT:
        """Handle a node after all of its children were walked."""
        ...


def walk(node: Visitable, visitor: Visitor[CtxT, ResultT], ctx: CtxT) -> ResultT:
    """Walk ``node`` and its descendants in document order."""
    make_child_ctx = visitor.enter(node, ctx)
    children_ctx: list[CtxT] = []
    children_results: list[ResultT] = []
    for child in node.children:
        child_ctx = make_child_ctx()
        children_results.append(walk(child, visitor, child_ctx))
        children_ctx.append(child_ctx)
    return visitor.exit(node, ctx, children_ctx, children_results)

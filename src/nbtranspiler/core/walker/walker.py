# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Recursive syntax tree walking in the style of acorn's `walk.recursive`.

Visitors are keyed by tree-sitter node type. A visitor receives the node,
the shared walk state and a continuation `c(child, state)`; it decides
whether to descend at all, which is how the passes prune function bodies.
Kinds without a visitor fall back to `base`, which descends into every
named child.
"""

from collections.abc import Callable, Mapping
from typing import Any

from tree_sitter import Node

from ..exceptions import InvariantError

Continuation = Callable[[Node, Any], None]
Visitor = Callable[..., None]


def base(node: Node, state: Any, c: Continuation) -> None:
    for child in node.named_children:
        c(child, state)


def noop(node: Node, state: Any, c: Continuation, *ancestors) -> None:
    pass


def walk_recursive(node: Node, state: Any, visitors: Mapping[str, Visitor]) -> None:
    """Walk `node` depth first, calling `visitor(node, state, c)` per kind."""

    def c(current: Node, st: Any) -> None:
        visitor = visitors.get(current.type)
        if visitor is None:
            base(current, st, c)
        else:
            visitor(current, st, c)

    c(node, state)


def walk_recursive_with_ancestors(
    node: Node, state: Any, visitors: Mapping[str, Visitor]
) -> None:
    """
    Walk `node` depth first, calling `visitor(node, state, c, ancestors)`.

    `ancestors` is the live chain from the walk root to the node being
    visited, both inclusive: `ancestors[-1]` is the node and `ancestors[-2]`
    its parent. The list is mutated as the walk proceeds, so visitors must
    not keep it around.
    """
    ancestors: list[Node] = []

    def c(current: Node, st: Any) -> None:
        ancestors.append(current)
        try:
            visitor = visitors.get(current.type)
            if visitor is None:
                base(current, st, c)
            else:
                visitor(current, st, c, ancestors)
        finally:
            ancestors.pop()

    c(node, state)


def require_parent(ancestors: list[Node]) -> Node:
    """Return the parent of the node being visited."""
    if len(ancestors) < 2:
        raise InvariantError(
            "Ancestor chain is shorter than expected",
            f"Got {len(ancestors)} ancestors, a visited node needs at least 2",
        )
    return ancestors[-2]

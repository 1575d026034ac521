# MIT License (see LICENSE)
"""
Dynamic bounding volume hierarchy (AABB tree) for broadphase queries.

The tree is a binary hierarchy of AABBs: every leaf holds one entity's box,
and every internal node holds the union of its two children. An overlap
query descends only into subtrees whose box overlaps the query box, so a
query costs O(log n + k) on a balanced tree instead of O(n).

Construction is incremental. Each insert:
    1. Walks down from the root choosing the sibling that minimises the
       added perimeter (the 2D form of the surface area heuristic).
    2. Splices a new internal node above that sibling.
    3. Walks back up refitting boxes and heights, applying AVL-style
       rotations wherever the child heights differ by more than one.

Nodes live in a flat list and refer to each other by index, so a leaf id
is just a position in that list.

Reference:
    E. Catto, "Dynamic Bounding Volume Hierarchies", GDC 2019.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterator

from .aabb import AABB

NULL = -1


@dataclass
class _Node:
    aabb: AABB
    parent: int = NULL
    left: int = NULL
    right: int = NULL
    # Leaves have height 0
    height: int = 0
    payload: Any = None

    @property
    def is_leaf(self) -> bool:
        return self.left == NULL


class BVH:
    """
    Insert-only AABB tree.

    The simulation builds a fresh tree every tick, so there is no removal
    or refit of moved leaves.

    Example:
        tree = BVH()
        tree.insert(AABB(0, 0, 1, 1), payload="a")
        tree.insert(AABB(0.5, 0.5, 2, 2), payload="b")
        tree.query(AABB(0, 0, 0.6, 0.6))   # ["a", "b"] in some order
    """

    def __init__(self) -> None:
        self._nodes: list[_Node] = []
        self._leaves: list[int] = []
        self._root: int = NULL

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        """Number of leaves."""
        return len(self._leaves)

    @property
    def height(self) -> int:
        """Height of the root (0 for a single leaf, -1 for an empty tree)."""
        if self._root == NULL:
            return -1
        return self._nodes[self._root].height

    @property
    def root_aabb(self) -> AABB | None:
        """Box enclosing every leaf, or None when empty."""
        if self._root == NULL:
            return None
        return self._nodes[self._root].aabb

    def leaves(self) -> Iterator[tuple[Any, AABB]]:
        """Yield (payload, aabb) for each leaf in insertion order."""
        for i in self._leaves:
            node = self._nodes[i]
            yield node.payload, node.aabb

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def insert(self, aabb: AABB, payload: Any = None) -> int:
        """
        Add a leaf for aabb and return its leaf id.

        Args:
            aabb: World-space box of the object.
            payload: Value reported back by query() for this leaf.
        """
        leaf = self._allocate(_Node(aabb=aabb, payload=payload))
        self._leaves.append(leaf)

        if self._root == NULL:
            self._root = leaf
            return leaf

        sibling = self._find_best_sibling(aabb)
        nodes = self._nodes

        old_parent = nodes[sibling].parent
        new_parent = self._allocate(_Node(
            aabb=aabb.union(nodes[sibling].aabb),
            parent=old_parent,
            left=sibling,
            right=leaf,
            height=nodes[sibling].height + 1,
        ))
        nodes[sibling].parent = new_parent
        nodes[leaf].parent = new_parent

        if old_parent == NULL:
            self._root = new_parent
        elif nodes[old_parent].left == sibling:
            nodes[old_parent].left = new_parent
        else:
            nodes[old_parent].right = new_parent

        # Refit ancestors, rebalancing on the way up
        index = nodes[leaf].parent
        while index != NULL:
            index = self._balance(index)
            node = nodes[index]
            left, right = nodes[node.left], nodes[node.right]
            node.height = 1 + max(left.height, right.height)
            node.aabb = left.aabb.union(right.aabb)
            index = node.parent

        return leaf

    def _allocate(self, node: _Node) -> int:
        self._nodes.append(node)
        return len(self._nodes) - 1

    def _find_best_sibling(self, aabb: AABB) -> int:
        """
        Descend from the root towards the cheapest place to attach aabb.

        cost(here)  = 2 * perimeter(node ∪ aabb)
        cost(child) = inherited growth of this node + growth of the child
        Stop when attaching here is cheaper than descending into either child.
        """
        nodes = self._nodes
        index = self._root
        while not nodes[index].is_leaf:
            node = nodes[index]
            area = node.aabb.perimeter()
            combined = node.aabb.union(aabb).perimeter()

            cost = 2.0 * combined
            inheritance = 2.0 * (combined - area)

            cost_left = self._descend_cost(node.left, aabb, inheritance)
            cost_right = self._descend_cost(node.right, aabb, inheritance)

            if cost < cost_left and cost < cost_right:
                break
            index = node.left if cost_left < cost_right else node.right
        return index

    def _descend_cost(self, index: int, aabb: AABB, inheritance: float) -> float:
        child = self._nodes[index]
        grown = aabb.union(child.aabb).perimeter()
        if child.is_leaf:
            return grown + inheritance
        return (grown - child.aabb.perimeter()) + inheritance

    def _balance(self, ia: int) -> int:
        """
        Rotate the subtree rooted at ia if it is imbalanced.

        Returns the index of the node now at ia's old position.
        """
        nodes = self._nodes
        a = nodes[ia]
        if a.is_leaf or a.height < 2:
            return ia

        ib, ic = a.left, a.right
        b, c = nodes[ib], nodes[ic]
        balance = c.height - b.height

        if balance > 1:
            # Promote C
            i_f, i_g = c.left, c.right
            f, g = nodes[i_f], nodes[i_g]

            c.left = ia
            c.parent = a.parent
            a.parent = ic
            self._replace_child(c.parent, ia, ic)

            if f.height > g.height:
                c.right = i_f
                a.right = i_g
                g.parent = ia
                a.aabb = b.aabb.union(g.aabb)
                c.aabb = a.aabb.union(f.aabb)
                a.height = 1 + max(b.height, g.height)
                c.height = 1 + max(a.height, f.height)
            else:
                c.right = i_g
                a.right = i_f
                f.parent = ia
                a.aabb = b.aabb.union(f.aabb)
                c.aabb = a.aabb.union(g.aabb)
                a.height = 1 + max(b.height, f.height)
                c.height = 1 + max(a.height, g.height)
            return ic

        if balance < -1:
            # Promote B
            i_d, i_e = b.left, b.right
            d, e = nodes[i_d], nodes[i_e]

            b.left = ia
            b.parent = a.parent
            a.parent = ib
            self._replace_child(b.parent, ia, ib)

            if d.height > e.height:
                b.right = i_d
                a.left = i_e
                e.parent = ia
                a.aabb = c.aabb.union(e.aabb)
                b.aabb = a.aabb.union(d.aabb)
                a.height = 1 + max(c.height, e.height)
                b.height = 1 + max(a.height, d.height)
            else:
                b.right = i_e
                a.left = i_d
                d.parent = ia
                a.aabb = c.aabb.union(d.aabb)
                b.aabb = a.aabb.union(e.aabb)
                a.height = 1 + max(c.height, d.height)
                b.height = 1 + max(a.height, e.height)
            return ib

        return ia

    def _replace_child(self, parent: int, old: int, new: int) -> None:
        if parent == NULL:
            self._root = new
            return
        p = self._nodes[parent]
        if p.left == old:
            p.left = new
        else:
            p.right = new

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _query_leaves(self, aabb: AABB) -> list[int]:
        out: list[int] = []
        if self._root == NULL:
            return out
        nodes = self._nodes
        stack = [self._root]
        while stack:
            index = stack.pop()
            node = nodes[index]
            if not node.aabb.overlaps(aabb):
                continue
            if node.is_leaf:
                out.append(index)
            else:
                stack.append(node.left)
                stack.append(node.right)
        return out

    def query(self, aabb: AABB) -> list[Any]:
        """
        Return the payloads of every leaf whose box overlaps aabb.

        Overlap uses closed intervals, so a leaf built from the very same
        box is always part of the result.
        """
        return [self._nodes[i].payload for i in self._query_leaves(aabb)]

    def count_overlaps(self, aabb: AABB) -> int:
        """Number of leaves whose box overlaps aabb."""
        return len(self._query_leaves(aabb))

    def interfering_pairs(self) -> list[tuple[Any, Any]]:
        """
        All unordered pairs of distinct leaves whose boxes overlap.

        Each pair is reported once as (earlier, later) by insertion order,
        and the list is sorted by that order for deterministic output.
        """
        order = {leaf: rank for rank, leaf in enumerate(self._leaves)}
        pairs: set[tuple[int, int]] = set()
        for leaf in self._leaves:
            rank = order[leaf]
            for other in self._query_leaves(self._nodes[leaf].aabb):
                other_rank = order[other]
                if other_rank > rank:
                    pairs.add((rank, other_rank))
        leaves = self._leaves
        return [
            (self._nodes[leaves[i]].payload, self._nodes[leaves[j]].payload)
            for i, j in sorted(pairs)
        ]

    def validate(self) -> None:
        """
        Check structural invariants; raises AssertionError on corruption.

        Parent/child links agree, every internal node's box is the union of
        its children's boxes, and heights are consistent.
        """
        if self._root == NULL:
            if self._leaves:
                raise AssertionError("empty root with leaves present")
            return
        nodes = self._nodes
        if nodes[self._root].parent != NULL:
            raise AssertionError("root has a parent")
        seen_leaves = 0
        stack = [self._root]
        while stack:
            index = stack.pop()
            node = nodes[index]
            if node.is_leaf:
                if node.height != 0 or node.right != NULL:
                    raise AssertionError(f"malformed leaf {index}")
                seen_leaves += 1
                continue
            left, right = nodes[node.left], nodes[node.right]
            if left.parent != index or right.parent != index:
                raise AssertionError(f"broken parent link under node {index}")
            if node.height != 1 + max(left.height, right.height):
                raise AssertionError(f"bad height at node {index}")
            if node.aabb != left.aabb.union(right.aabb):
                raise AssertionError(f"stale box at node {index}")
            stack.append(node.left)
            stack.append(node.right)
        if seen_leaves != len(self._leaves):
            raise AssertionError(
                f"reachable leaves {seen_leaves} != inserted {len(self._leaves)}"
            )

# aad_numerics/aad/core/engine.py
from __future__ import annotations
from collections import deque
from typing import Deque, Dict, Optional

import numpy as np

from ...exceptions import PreconditionNotSatisfied
from ...logger import aad_numerics_logger
from .node import Node


class _NodeInfo:
    """Bookkeeping of one node during a reverse pass."""
    __slots__ = ("diff", "ref_count")

    def __init__(self, diff):
        self.diff = diff          # accumulated adjoint
        self.ref_count = 0        # edges from reachable parents not yet propagated


class NodeDifferentiator:
    """
    Reverse-mode (adjoint) differentiation over a graph of Nodes.

    ``compute(top)`` makes two breadth-first sweeps:

    1) List every node reachable from ``top`` and count, for each, the
       edges pointing into it from other reachable nodes.
    2) Seed d(top)/d(top) = 1 and propagate
           child.diff += parent.diff * sensitivity
       enqueuing a child only when its count drops to zero, i.e. after all
       of its parents have contributed. Shared sub-expressions (diamonds)
       therefore receive the sum over every path.

    ``coeff(node)`` then returns d(top)/d(node), or zero for nodes that were
    not reached from ``top``.

    An instance holds mutable state and serves one computation at a time;
    calling ``compute`` again discards the previous result.
    """

    def __init__(self, scalar_type=np.float64):
        self.scalar_type = scalar_type
        self._info: Dict[Node, _NodeInfo] = {}
        self._queue: Deque[Node] = deque()

    def compute(self, top_node: Node) -> None:
        if top_node is None:
            raise PreconditionNotSatisfied("The top node to differentiate must not be None.")
        self._list_nodes(top_node)
        self._compute_coeffs(top_node)
        aad_numerics_logger.debug("Reverse pass visited %d nodes.", len(self._info))

    def coeff(self, node: Optional[Node]):
        info = self._info.get(node) if node is not None else None
        if info is None:
            return self.scalar_type(0)
        return info.diff

    # ----------------------------- sweeps ----------------------------- #
    def _list_nodes(self, top_node: Node) -> None:
        zero = self.scalar_type(0)
        self._info = {top_node: _NodeInfo(zero)}
        self._queue.clear()
        self._queue.append(top_node)
        while self._queue:
            node = self._queue.popleft()
            for child in node.children:
                info = self._info.get(child.node)
                if info is None:
                    info = self._info[child.node] = _NodeInfo(zero)
                    self._queue.append(child.node)
                info.ref_count += 1

    def _compute_coeffs(self, top_node: Node) -> None:
        self._info[top_node].diff = self.scalar_type(1)
        self._queue.append(top_node)
        while self._queue:
            node = self._queue.popleft()
            diff = self._info[node].diff
            for child in node.children:
                child_info = self._info[child.node]
                child_info.diff = child_info.diff + diff * child.sensitivity
                child_info.ref_count -= 1
                if child_info.ref_count == 0:
                    self._queue.append(child.node)

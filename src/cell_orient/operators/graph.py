"""
Graph Primitives
================

Narrow wrappers over scipy.sparse.csgraph so the orientation pass never
touches traversal state directly.

    connected_components(adj) -> (count, labels)
    bfs(adj, root)            -> (dists, predecessors)

TIE-BREAK:
    Neighbours are visited in ascending index order (CSR indices are sorted
    before traversal), so predecessors are reproducible run to run.
"""

from typing import Tuple

import numpy as np
from scipy.sparse import csr_matrix, issparse
from scipy.sparse.csgraph import breadth_first_order
from scipy.sparse.csgraph import connected_components as _csgraph_components

from ..spec.constants import BFS_UNREACHABLE, NO_PREDECESSOR


def _as_csr(adj) -> csr_matrix:
    if issparse(adj) and adj.format == "csr" and adj.has_sorted_indices:
        graph = adj
    else:
        graph = adj.tocsr(copy=True) if issparse(adj) else csr_matrix(np.asarray(adj))
    if graph.shape[0] != graph.shape[1]:
        raise ValueError(f"Adjacency matrix must be square, got shape {graph.shape}")
    graph.sort_indices()
    return graph


def connected_components(adj) -> Tuple[int, np.ndarray]:
    """
    Label connected components of an undirected graph.

    Args:
        adj: (n, n) adjacency matrix, sparse or dense; weights ignored

    Returns:
        count: number of components
        labels: (n,) component id per node, ids numbered by first node
    """
    graph = _as_csr(adj)
    count, labels = _csgraph_components(graph, directed=False)
    return int(count), labels


def bfs(adj, root: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Breadth-first search from `root`.

    Args:
        adj: (n, n) adjacency matrix, sparse or dense; weights ignored
        root: start node

    Returns:
        dists: (n,) hop distance from root, BFS_UNREACHABLE if not reachable
        predecessors: (n,) BFS tree parent, NO_PREDECESSOR for root and unreachables
    """
    graph = _as_csr(adj)
    n = graph.shape[0]
    if root < 0 or root >= n:
        raise ValueError(f"BFS root {root} out of range [0, {n - 1}]")

    order, predecessors = breadth_first_order(
        graph, root, directed=False, return_predecessors=True
    )

    dists = np.full(n, BFS_UNREACHABLE, dtype=int)
    dists[root] = 0
    # order is visitation order, so each predecessor is already settled
    for v in order[1:]:
        dists[v] = dists[predecessors[v]] + 1

    predecessors = np.asarray(predecessors, dtype=int)
    predecessors[dists == BFS_UNREACHABLE] = NO_PREDECESSOR
    predecessors[root] = NO_PREDECESSOR

    return dists, predecessors

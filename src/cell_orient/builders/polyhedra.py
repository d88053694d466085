"""
Fixture Complexes
=================

Small simplicial complexes with known orientation properties.

COMPLEXES INCLUDED:
    - Triangle           (N=2, K=3)  one simplex, oriented from the embedding
    - Triangle strip     (N=2, K=3)  planar, CCW when unflipped
    - Tetrahedron surface (N=3, K=3) V=4, E=6, F=4, χ=2, orientable
    - Octahedron surface (N=3, K=3)  V=6, E=12, F=8, χ=2, orientable
    - Möbius strip       (N=3, K=3)  χ=0, NOT orientable
    - Tetrahedral block  (N=3, K=4)  unit cube split into 6 tetrahedra

Every builder takes `flip`: indices of top simplices whose first two vertices
are swapped before building, to start from a deliberately mixed orientation.
Surfaces in R^3 are built with outward-facing vertex order.
"""

import itertools
from typing import List, Sequence

import numpy as np

from ..spec.constants import EPS_ZERO
from ..spec.structures import CellComplex
from .simplicial import build_simplicial_complex


def _apply_flips(simplices: List[List[int]], flip: Sequence[int]) -> List[List[int]]:
    out = [list(s) for s in simplices]
    for idx in flip:
        if idx < 0 or idx >= len(out):
            raise ValueError(f"flip index {idx} out of range [0, {len(out) - 1}]")
        s = out[idx]
        s[0], s[1] = s[1], s[0]
    return out


def _orient_outward(vertices: np.ndarray, faces: List[List[int]]) -> List[List[int]]:
    """Order each triangle so its normal points away from the body centroid."""
    center = vertices.mean(axis=0)
    out = []
    for face in faces:
        a, b, c = (vertices[v] for v in face)
        normal = np.cross(b - a, c - a)
        if np.linalg.norm(normal) < EPS_ZERO:
            raise ValueError(f"Degenerate face {face}")
        if np.dot(normal, (a + b + c) / 3 - center) < 0:
            face = [face[1], face[0], face[2]]
        out.append(list(face))
    return out


def build_triangle(flip: bool = False) -> CellComplex:
    """
    Single right triangle in the plane, CCW unless `flip`.

    TOPOLOGY:
        V = 3, E = 3, F = 1
    """
    vertices = np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]])
    simplices = _apply_flips([[0, 1, 2]], [0] if flip else [])
    return build_simplicial_complex(vertices, simplices)


def build_triangle_strip(n_quads: int = 2, flip: Sequence[int] = ()) -> CellComplex:
    """
    Planar strip of 2·n_quads triangles over [0, n_quads] × [0, 1].

    Vertex 2i is (i, 0), vertex 2i+1 is (i, 1). Quad i is split into
    [2i, 2i+2, 2i+1] and [2i+2, 2i+3, 2i+1], both CCW.

    TOPOLOGY:
        V = 2n + 2, E = 4n + 1, F = 2n
        χ = 1 (a disk)
    """
    if n_quads < 1:
        raise ValueError(f"Triangle strip needs n_quads ≥ 1, got {n_quads}")

    vertices = np.array([(i, y) for i in range(n_quads + 1) for y in (0.0, 1.0)], dtype=float)
    simplices = []
    for i in range(n_quads):
        b0, t0, b1, t1 = 2 * i, 2 * i + 1, 2 * i + 2, 2 * i + 3
        simplices.append([b0, b1, t0])
        simplices.append([b1, t1, t0])

    return build_simplicial_complex(vertices, _apply_flips(simplices, flip))


def build_tetrahedron_surface(flip: Sequence[int] = ()) -> CellComplex:
    """
    Boundary of a regular tetrahedron, faces ordered outward.

    TOPOLOGY:
        V = 4, E = 6, F = 4
        χ = 4 - 6 + 4 = 2
    """
    vertices = np.array([
        (1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1)
    ], dtype=float)
    faces = [list(f) for f in itertools.combinations(range(4), 3)]
    faces = _orient_outward(vertices, faces)
    return build_simplicial_complex(vertices, _apply_flips(faces, flip))


def build_octahedron_surface(flip: Sequence[int] = ()) -> CellComplex:
    """
    Boundary of a regular octahedron (vertices at ±e_i), faces ordered outward.

    TOPOLOGY:
        V = 6, E = 12, F = 8
        χ = 6 - 12 + 8 = 2
    """
    vertices = np.array([
        (1, 0, 0), (-1, 0, 0),
        (0, 1, 0), (0, -1, 0),
        (0, 0, 1), (0, 0, -1)
    ], dtype=float)
    # one vertex from each axis pair
    faces = [[x, 2 + y, 4 + z] for x in (0, 1) for y in (0, 1) for z in (0, 1)]
    faces = _orient_outward(vertices, faces)
    return build_simplicial_complex(vertices, _apply_flips(faces, flip))


def build_mobius_strip(n_segments: int = 6, flip: Sequence[int] = ()) -> CellComplex:
    """
    Triangulated Möbius strip around a circle of radius 2.

    Vertex 2i (bottom) and 2i+1 (top) sit at angle θ_i = 2πi/n, offset from
    the centre line by ∓w(θ), where w rotates by θ/2. Closing the last quad
    swaps bottom and top, so the strip has a single side.

    TOPOLOGY:
        V = 2n, E = 4n, F = 2n
        χ = 2n - 4n + 2n = 0

    NOTE: NOT orientable. orient_cells() still terminates and leaves at
    least one conflicting adjacent pair.
    """
    if n_segments < 3:
        raise ValueError(f"Möbius strip needs n_segments ≥ 3, got {n_segments}")

    R = 2.0
    vertices = []
    for i in range(n_segments):
        theta = 2 * np.pi * i / n_segments
        radial = np.array([np.cos(theta), np.sin(theta), 0.0])
        w = 0.5 * (np.cos(theta / 2) * radial + np.sin(theta / 2) * np.array([0.0, 0.0, 1.0]))
        center = R * radial
        vertices.append(center - w)
        vertices.append(center + w)
    vertices = np.array(vertices)

    simplices = []
    for i in range(n_segments):
        b0, t0 = 2 * i, 2 * i + 1
        if i + 1 < n_segments:
            b1, t1 = 2 * (i + 1), 2 * (i + 1) + 1
        else:
            b1, t1 = 1, 0  # the twist
        simplices.append([b0, b1, t0])
        simplices.append([b1, t1, t0])

    return build_simplicial_complex(vertices, _apply_flips(simplices, flip))


def build_tetrahedral_block(flip: Sequence[int] = ()) -> CellComplex:
    """
    Unit cube split into 6 tetrahedra sharing the main diagonal (Kuhn split).

    Vertex id = x + 2y + 4z for corner (x, y, z) ∈ {0,1}³. Tetrahedron σ walks
    000 → e_σ0 → e_σ0 + e_σ1 → 111, so orientation alternates with the parity
    of σ: the raw block is deliberately mixed.

    TOPOLOGY:
        V = 8, E = 19, F = 18, C = 6
        χ = 8 - 19 + 18 - 6 = 1
    """
    vertices = np.array([((v >> 0) & 1, (v >> 1) & 1, (v >> 2) & 1) for v in range(8)],
                        dtype=float)
    simplices = []
    for sigma in itertools.permutations(range(3)):
        path = [0]
        for axis in sigma:
            path.append(path[-1] + (1 << axis))
        simplices.append(path)

    return build_simplicial_complex(vertices, _apply_flips(simplices, flip))

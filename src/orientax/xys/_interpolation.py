"""Lagrange interpolation on a uniform grid.

The per-node denominators and node offsets depend only on the order and the
grid spacing, so they are computed once and reused for every evaluation.
"""

from __future__ import annotations

import numpy as np


def lagrange_denominators(order: int, step: float) -> tuple[np.ndarray, np.ndarray]:
    """Precompute the Lagrange weights for ``order + 1`` equally spaced nodes.

    Args:
        order: Polynomial order.
        step: Node spacing.

    Returns:
        Tuple ``(denominators, x_table)``: the reciprocal of
        ``step**order * prod_{j != i}(i - j)`` for each node ``i``, and the
        node offsets ``i * step``.
    """
    nodes = np.arange(order + 1)
    denominators = np.full(order + 1, step**order, dtype=np.float64)
    for i in range(order + 1):
        for j in range(order + 1):
            if j != i:
                denominators[i] *= i - j
    return 1.0 / denominators, nodes * step


def lagrange_coefficients(
    x: float, x_table: np.ndarray, denominators: np.ndarray
) -> np.ndarray:
    """Evaluate the Lagrange basis polynomials at *x*.

    Args:
        x: Offset from the first node.
        x_table: Node offsets from :func:`lagrange_denominators`.
        denominators: Reciprocal denominators from :func:`lagrange_denominators`.

    Returns:
        np.ndarray: One coefficient per node; the interpolated value is the
        dot product with the node values.
    """
    work = x - x_table
    coefficients = np.empty_like(denominators)
    for i in range(len(work)):
        coefficients[i] = np.prod(np.delete(work, i)) * denominators[i]
    return coefficients

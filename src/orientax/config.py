"""Module-wide configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype of the
rotation matrices returned by orientax.  The default is ``jnp.float32`` for
GPU/TPU compatibility.  Switching to ``jnp.float64`` automatically enables
JAX's 64-bit mode (``jax_enable_x64``).

Time bookkeeping (:class:`~orientax.epoch.Epoch`, leap seconds, EOP and XYS
sample tables) is always carried out in Python floats / ``numpy.float64``
regardless of this setting; only the assembled matrices follow the dtype.

Also exposes the default location of the IAU 2006 XYS chunk resources,
overridable through the ``ORIENTAX_XYS_URL_TEMPLATE`` environment variable.
"""

from __future__ import annotations

import os

import jax
import jax.numpy as jnp

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float32

XYS_URL_TEMPLATE_ENV: str = "ORIENTAX_XYS_URL_TEMPLATE"
"""Environment variable that overrides the default XYS chunk location."""

DEFAULT_XYS_URL_TEMPLATE: str = "Assets/IAU2006_XYS/IAU2006_XYS_{0}.json"
"""Default XYS chunk location. ``{0}`` is replaced by the chunk index."""


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for orientax.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float32``).
    """
    return _dtype


def get_matrix_tolerance() -> float:
    """Return the dtype-adaptive tolerance for rotation-matrix checks.

    - ``float16``:  1e-2
    - ``bfloat16``: 1e-2
    - ``float32``:  1e-5
    - ``float64``:  1e-12

    Returns:
        float: Absolute element-wise tolerance.
    """
    if _dtype == jnp.float64:
        return 1e-12
    if _dtype == jnp.float32:
        return 1e-5
    # float16 and bfloat16
    return 1e-2


def get_xys_url_template() -> str:
    """Return the template used to locate IAU 2006 XYS chunk resources.

    The value of ``ORIENTAX_XYS_URL_TEMPLATE`` is used when set and
    non-empty, otherwise :data:`DEFAULT_XYS_URL_TEMPLATE`.

    Returns:
        str: URL or filesystem path template containing ``{0}``.
    """
    return os.environ.get(XYS_URL_TEMPLATE_ENV) or DEFAULT_XYS_URL_TEMPLATE

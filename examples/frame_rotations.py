# /// script
# requires-python = ">=3.10"
# dependencies = ["typer>=0.9.0", "orientax"]
#
# [tool.uv.sources]
# orientax = { path = ".." }
# ///
"""Print ICRF, TEME and Moon-fixed rotations over a time span.

Loads Earth orientation parameters (optional) and the IAU 2006 XYS chunks
covering the span, then prints the ICRF -> Earth-fixed,
TEME -> pseudo-fixed and ICRF -> Moon-fixed matrices at each step.

Requires orientax to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/frame_rotations.py [OPTIONS]

Examples:
    # One day at six-hour steps, XYS chunks from a local mirror
    ORIENTAX_XYS_URL_TEMPLATE=/data/IAU2006_XYS/IAU2006_XYS_{0}.json \\
        uv run examples/frame_rotations.py --eop /data/EOP.json

    # Two steps without EOP data
    uv run examples/frame_rotations.py --start 2020-01-01T00:00:00Z --steps 2
"""

import asyncio
import logging
from typing import Annotated, Optional

import jax.numpy as jnp
import numpy as np
import typer

from orientax import Epoch, set_dtype
from orientax.eop import EarthOrientationParameters
from orientax.frames import Transforms

set_dtype(jnp.float64)


def _print_matrix(label: str, m) -> None:
    print(f"  {label}:")
    if m is None:
        print("    (data not available)")
        return
    for row in np.asarray(m):
        print("    " + " ".join(f"{v: .12f}" for v in row))


async def _run(eop_location: Optional[str], start: Epoch, step_hours: float, steps: int) -> None:
    # ── Data providers ──
    eop = EarthOrientationParameters.NONE
    if eop_location:
        eop = await EarthOrientationParameters.from_url(eop_location)

    transforms = Transforms(eop)
    stop = start.add_hours(step_hours * steps)
    try:
        await transforms.preload_icrf_fixed(start, stop)
    except RuntimeError as e:
        print(f"WARNING: {e} ICRF rotations will be unavailable.")

    # ── Rotations ──
    for i in range(steps + 1):
        epc = start.add_hours(step_hours * i)
        print(f"\n{epc}")
        _print_matrix("ICRF -> fixed", transforms.compute_icrf_to_fixed_matrix(epc))
        _print_matrix(
            "TEME -> pseudo-fixed", transforms.compute_teme_to_pseudo_fixed_matrix(epc)
        )
        _print_matrix("ICRF -> Moon-fixed", transforms.compute_icrf_to_moon_fixed_matrix(epc))


def main(
    start: Annotated[str, typer.Option(help="ISO 8601 start time")] = "2020-01-01T00:00:00Z",
    step_hours: Annotated[float, typer.Option(help="Step between evaluations in hours")] = 6.0,
    steps: Annotated[int, typer.Option(help="Number of steps")] = 4,
    eop: Annotated[
        Optional[str], typer.Option(help="URL or path of a JSON EOP record")
    ] = None,
    verbose: Annotated[bool, typer.Option(help="Enable debug logging")] = False,
) -> None:
    """Print frame rotation matrices over a time span."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO)
    asyncio.run(_run(eop, Epoch.from_iso8601(start), step_hours, steps))


if __name__ == "__main__":
    typer.run(main)

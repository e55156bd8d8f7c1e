"""Chunked IAU 2006 XYS series with Lagrange interpolation.

The series is tabulated on a daily TT grid and split into JSON resources
(chunks) of ``samples_per_xys_file`` samples, each
``{"samples": [x0, y0, s0, x1, y1, s1, ...]}``.  Chunks are fetched lazily
on the running asyncio event loop:

- :meth:`Iau2006XysData.preload` requests every chunk covering a time
  range and returns a future that completes when they have all been
  applied.
- :meth:`Iau2006XysData.compute_xys_radians` never waits.  If part of the
  interpolation window is missing it requests the owning chunk and returns
  ``None``; callers poll again later.

A chunk index is requested at most once while in flight and never again
after it has been applied.  A failed request is forgotten so that a later
call can retry it.  Applying a chunk writes a fixed, index-addressed slice
of the sample table, so chunks may complete in any order.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx
import numpy as np

from orientax.config import get_xys_url_template
from orientax.constants import SECONDS_PER_DAY
from orientax.time import split_julian_date
from orientax.utils._download import JsonFetcher, fetch_json
from orientax.xys._interpolation import lagrange_coefficients, lagrange_denominators
from orientax.xys._types import XYSConfig, XYSSample

logger = logging.getLogger(__name__)


class Iau2006XysData:
    """IAU 2006 CIP X, Y and CIO locator s, interpolated from tabulated chunks.

    Args:
        config: Grid layout and chunk location. Default: ``XYSConfig()``.
        fetcher: Coroutine function ``fetcher(location) -> dict`` used to
            retrieve chunks. Default: :func:`orientax.utils.fetch_json`.

    Examples:
        ```python
        import asyncio
        from orientax.xys import Iau2006XysData

        async def main():
            xys = Iau2006XysData()
            await xys.preload(2458849, 43269.184, 2458850, 43269.184)
            return xys.compute_xys_radians(2458849, 50000.0)

        sample = asyncio.run(main())
        ```
    """

    def __init__(
        self, config: XYSConfig | None = None, *, fetcher: JsonFetcher | None = None
    ) -> None:
        self._config = config or XYSConfig()
        self._fetcher = fetcher
        self._url_template = self._config.xys_file_url_template or get_xys_url_template()

        self._sample_zero_day, self._sample_zero_seconds = split_julian_date(
            self._config.sample_zero_julian_ephemeris_date
        )

        # NaN marks samples that have not arrived yet
        self._samples = np.full(self._config.total_samples * 3, np.nan)
        self._loaded_chunks: set[int] = set()
        self._pending: dict[int, asyncio.Task] = {}

        self._denominators, self._x_table = lagrange_denominators(
            self._config.interpolation_order, self._config.step_size_days
        )

    @property
    def config(self) -> XYSConfig:
        """Grid layout and chunk location."""
        return self._config

    @property
    def chunk_count(self) -> int:
        """Number of chunk resources covering the series."""
        return -(-self._config.total_samples // self._config.samples_per_xys_file)

    def chunk_url(self, chunk_index: int) -> str:
        """Return the location of chunk *chunk_index*."""
        return self._url_template.format(chunk_index)

    def chunk_index_for_sample(self, sample_index: int) -> int:
        """Return the index of the chunk holding sample *sample_index*."""
        return sample_index // self._config.samples_per_xys_file

    def is_chunk_loaded(self, chunk_index: int) -> bool:
        """Return ``True`` once chunk *chunk_index* has been applied."""
        return chunk_index in self._loaded_chunks

    def _days_since_epoch(self, day_tt: int, second_tt: float) -> float:
        return (day_tt - self._sample_zero_day) + (
            second_tt - self._sample_zero_seconds
        ) / SECONDS_PER_DAY

    # ------------------------------------------------------------------
    # Chunk requests
    # ------------------------------------------------------------------

    def preload(
        self,
        start_day_tt: int,
        start_second_tt: float,
        stop_day_tt: int,
        stop_second_tt: float,
    ) -> asyncio.Future:
        """Request every chunk needed to interpolate between two TT instants.

        Must be called while an asyncio event loop is running.

        Args:
            start_day_tt: Julian day number of the range start (TT).
            start_second_tt: Seconds of day of the range start (TT).
            stop_day_tt: Julian day number of the range stop (TT).
            stop_second_tt: Seconds of day of the range stop (TT).

        Returns:
            asyncio.Future: Completes when all covering chunks are applied.
            Raises :class:`RuntimeError` when awaited if a chunk could not
            be retrieved.

        Raises:
            RuntimeError: If no event loop is running.
        """
        config = self._config
        order = config.interpolation_order

        start_days = self._days_since_epoch(start_day_tt, start_second_tt)
        stop_days = self._days_since_epoch(stop_day_tt, stop_second_tt)

        start_index = max(int(start_days / config.step_size_days - order / 2), 0)
        stop_index = int(stop_days / config.step_size_days - order / 2) + order
        stop_index = min(stop_index, config.total_samples - 1)

        start_chunk = self.chunk_index_for_sample(start_index)
        stop_chunk = self.chunk_index_for_sample(stop_index)

        loop = asyncio.get_running_loop()
        requests = [
            self._request_chunk(i, loop)
            for i in range(start_chunk, stop_chunk + 1)
            if i not in self._loaded_chunks
        ]
        logger.debug(
            "Preloading XYS chunks %d-%d (%d outstanding)",
            start_chunk,
            stop_chunk,
            len(requests),
        )
        return asyncio.gather(*requests)

    def _request_chunk(self, chunk_index: int, loop: asyncio.AbstractEventLoop) -> asyncio.Task:
        task = self._pending.get(chunk_index)
        if task is not None:
            logger.debug("XYS chunk %d already requested", chunk_index)
            return task

        logger.debug("Requesting XYS chunk %d", chunk_index)
        task = loop.create_task(self._fetch_chunk(chunk_index))
        self._pending[chunk_index] = task
        task.add_done_callback(self._on_chunk_done)
        return task

    def _on_chunk_done(self, task: asyncio.Task) -> None:
        for chunk_index, pending in list(self._pending.items()):
            if pending is task:
                del self._pending[chunk_index]
        if not task.cancelled() and task.exception() is not None:
            logger.warning("XYS chunk request failed: %s", task.exception())

    async def _fetch_chunk(self, chunk_index: int) -> None:
        location = self.chunk_url(chunk_index)
        try:
            if self._fetcher is not None:
                chunk = await self._fetcher(location)
            else:
                chunk = await fetch_json(location, timeout=self._config.timeout)
        except (httpx.HTTPError, OSError, ValueError) as e:
            raise RuntimeError(
                f"An error occurred while retrieving the XYS data from the URL {location}."
            ) from e

        self.apply_chunk(chunk_index, chunk)

    def apply_chunk(self, chunk_index: int, chunk: dict[str, Any]) -> None:
        """Write a chunk's samples into the table.

        Writing the same chunk twice leaves the table unchanged.

        Args:
            chunk_index: Index of the chunk.
            chunk: Decoded chunk resource with a ``samples`` list.

        Raises:
            ValueError: If the chunk has no ``samples`` or is out of range.
        """
        if not isinstance(chunk, dict) or "samples" not in chunk:
            raise ValueError(f"XYS chunk {chunk_index} has no samples property")
        if not 0 <= chunk_index < self.chunk_count:
            raise ValueError(
                f"XYS chunk index {chunk_index} outside [0, {self.chunk_count})"
            )

        new_samples = np.asarray(chunk["samples"], dtype=np.float64)
        start = chunk_index * self._config.samples_per_xys_file * 3
        stop = min(start + new_samples.size, self._samples.size)
        self._samples[start:stop] = new_samples[: stop - start]
        self._loaded_chunks.add(chunk_index)
        logger.debug("Applied XYS chunk %d (%d values)", chunk_index, stop - start)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def compute_xys_radians(self, day_tt: int, second_tt: float) -> XYSSample | None:
        """Interpolate X, Y and s at a TT instant.

        Args:
            day_tt: Julian day number (TT).
            second_tt: Seconds of day (TT).

        Returns:
            XYSSample, or ``None`` when the instant lies outside the series
            or its samples have not arrived yet. In the latter case the
            missing chunks are requested if an event loop is running.
        """
        config = self._config
        days_since_epoch = self._days_since_epoch(day_tt, second_tt)
        if days_since_epoch < 0.0:
            return None

        center_index = int(days_since_epoch / config.step_size_days)
        if center_index >= config.total_samples:
            return None

        degree = config.interpolation_order
        first_index = max(center_index - degree // 2, 0)
        last_index = first_index + degree
        if last_index >= config.total_samples:
            last_index = config.total_samples - 1
            first_index = max(last_index - degree, 0)

        # The window is contiguous within at most two chunks, so checking its
        # ends is enough.
        missing = [
            self.chunk_index_for_sample(index)
            for index in (first_index, last_index)
            if np.isnan(self._samples[index * 3])
        ]
        if missing:
            self._request_missing(missing)
            return None

        x = days_since_epoch - first_index * config.step_size_days
        coefficients = lagrange_coefficients(x, self._x_table, self._denominators)
        window = self._samples[first_index * 3 : (last_index + 1) * 3].reshape(-1, 3)
        result = coefficients @ window
        return XYSSample(float(result[0]), float(result[1]), float(result[2]))

    def _request_missing(self, chunk_indices: list[int]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(
                "No running event loop; XYS chunks %s not requested", chunk_indices
            )
            return

        for chunk_index in dict.fromkeys(chunk_indices):
            self._request_chunk(chunk_index, loop)

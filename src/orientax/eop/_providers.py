"""Earth Orientation Parameter providers.

:class:`EarthOrientationParameters` holds a time-tagged EOP sample table
and interpolates it on demand.  Data is supplied at construction, loaded
asynchronously with :meth:`EarthOrientationParameters.load_from`, or read
from disk with :meth:`EarthOrientationParameters.from_file` /
:func:`load_eop_from_standard_file`.

Until data has been installed :meth:`~EarthOrientationParameters.compute`
returns ``None``; callers poll rather than wait.  Loads parse and install
their record synchronously once the fetch completes, so when several loads
overlap the last one to complete wins.  Leap seconds discovered along the
way are inserted into the shared :class:`~orientax.time.LeapSecondTable`,
which is idempotent, so overlapping loads never register one twice.

:data:`EarthOrientationParameters.NONE` returns zeros for every instant.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import httpx
import numpy as np

from orientax.constants import JD_MJD_OFFSET
from orientax.eop._lookup import DateKey, interpolate, search_dates
from orientax.eop._parsers import parse_eop_record, standard_file_to_record
from orientax.eop._types import (
    REQUIRED_COLUMNS,
    TAI_MINUS_UTC,
    ZERO_SAMPLE,
    EOPConfig,
    EOPSample,
)
from orientax.epoch import Epoch, TimeStandard
from orientax.time import LeapSecond, LeapSecondTable, default_leap_second_table
from orientax.utils._download import JsonFetcher, fetch_json

logger = logging.getLogger(__name__)


class EarthOrientationParameters:
    """Time-tagged Earth orientation samples with linear interpolation.

    Args:
        data: JSON EOP record (``columnNames`` + ``samples``). When omitted
            the provider stays empty until a load completes.
        config: Provider options. Default: ``EOPConfig()``.
        leap_seconds: Table that newly observed leap seconds are added to.
            Default: the process-wide table.
        fetcher: Coroutine function used to retrieve remote or file
            records. Default: :func:`orientax.utils.fetch_json`.

    Raises:
        ValueError: If *data* is malformed.

    Examples:
        ```python
        import asyncio
        from orientax import Epoch
        from orientax.eop import EarthOrientationParameters
        eop = asyncio.run(EarthOrientationParameters.from_url("https://example.com/EOP.json"))
        eop.compute(Epoch.from_iso8601("2020-01-01T00:00:00Z"))
        ```
    """

    NONE: NoEarthOrientationParameters

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        config: EOPConfig | None = None,
        leap_seconds: LeapSecondTable | None = None,
        fetcher: JsonFetcher | None = None,
    ) -> None:
        self._config = config or EOPConfig()
        self._leap_seconds = (
            default_leap_second_table() if leap_seconds is None else leap_seconds
        )
        self._fetcher = fetcher

        self._dates: list[DateKey] | None = None
        self._values: np.ndarray | None = None
        self._last_index: int | None = None

        if data is not None:
            self._install(data)

    @property
    def config(self) -> EOPConfig:
        """Provider options."""
        return self._config

    @property
    def leap_seconds(self) -> LeapSecondTable:
        """Leap-second table this provider reads and extends."""
        return self._leap_seconds

    @property
    def is_loaded(self) -> bool:
        """``True`` once a record has been installed."""
        return self._dates is not None

    @property
    def sample_count(self) -> int:
        """Number of installed samples (0 before loading)."""
        return 0 if self._dates is None else len(self._dates)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    async def from_url(
        cls,
        url: str | Path,
        *,
        config: EOPConfig | None = None,
        leap_seconds: LeapSecondTable | None = None,
        fetcher: JsonFetcher | None = None,
    ) -> EarthOrientationParameters:
        """Create a provider from a JSON EOP record at *url*.

        Args:
            url: HTTP(S) URL or local path of the record.
            config: Provider options.
            leap_seconds: Table that newly observed leap seconds are added to.
            fetcher: Coroutine function used to retrieve the record.

        Returns:
            EarthOrientationParameters: Loaded provider.

        Raises:
            RuntimeError: If the record cannot be retrieved.
            ValueError: If the record is malformed.
        """
        eop = cls(config=config, leap_seconds=leap_seconds, fetcher=fetcher)
        await eop.load_from(url)
        return eop

    @classmethod
    def from_file(
        cls,
        filepath: str | Path,
        *,
        config: EOPConfig | None = None,
        leap_seconds: LeapSecondTable | None = None,
    ) -> EarthOrientationParameters:
        """Create a provider from a JSON EOP record on disk.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the record is malformed.
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"EOP file not found: {filepath}")

        with open(filepath, encoding="utf-8") as f:
            record = json.load(f)
        return cls(record, config=config, leap_seconds=leap_seconds)

    async def load_from(self, source: Mapping[str, Any] | str | Path) -> None:
        """Load a JSON EOP record, replacing any installed data.

        Args:
            source: The record itself, or the HTTP(S) URL / local path of a
                record to fetch.

        Raises:
            RuntimeError: If the record cannot be retrieved.
            ValueError: If the record is malformed.
        """
        if isinstance(source, Mapping):
            record = source
        else:
            location = str(source)
            fetcher = self._fetcher or self._default_fetch
            try:
                record = await fetcher(location)
            except (httpx.HTTPError, OSError, ValueError) as e:
                raise RuntimeError(
                    f"An error occurred while retrieving the EOP data from the URL {location}."
                ) from e

        self._install(record)

    async def _default_fetch(self, location: str) -> Any:
        return await fetch_json(location, timeout=self._config.timeout)

    def _install(self, record: Mapping[str, Any]) -> None:
        mjd, values = parse_eop_record(record)

        dates: list[DateKey] = []
        last_tai_minus_utc = None
        for mjd_utc, tai_minus_utc in zip(mjd, values[:, TAI_MINUS_UTC]):
            # Midnight UTC expressed in TAI
            date = Epoch(
                float(mjd_utc) + JD_MJD_OFFSET, float(tai_minus_utc), TimeStandard.TAI
            )
            dates.append((date.day_number, date.seconds_of_day))

            if self._config.add_new_leap_seconds:
                if last_tai_minus_utc is not None and tai_minus_utc != last_tai_minus_utc:
                    self._register_leap_second(date, float(tai_minus_utc))
                last_tai_minus_utc = tai_minus_utc

        self._dates = dates
        self._values = values
        self._last_index = None
        logger.info("Installed %d EOP samples", len(dates))

    def _register_leap_second(self, date: Epoch, tai_minus_utc: float) -> None:
        added = self._leap_seconds.insert(
            LeapSecond(date.day_number, date.seconds_of_day, tai_minus_utc)
        )
        if added:
            logger.info(
                "Registered leap second at %s (TAI-UTC = %s s)",
                date.to_iso8601(leap_seconds=self._leap_seconds),
                tai_minus_utc,
            )

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def compute(self, epc: Epoch) -> EOPSample | None:
        """Interpolate the Earth orientation parameters at *epc*.

        Before the first sample the first row is returned unchanged; after
        the last sample every value is zero (no extrapolation).

        Args:
            epc: Query instant.

        Returns:
            EOPSample or ``None`` if no data has been loaded yet.
        """
        if self._dates is None:
            return None

        if not self._dates:
            return ZERO_SAMPLE

        dates = self._dates
        key = (epc.day_number, epc.seconds_of_day)

        # Sequential queries usually fall in the previously used bracket. The
        # end of the table always goes through the search.
        last_index = self._last_index
        if last_index is not None and last_index + 1 < len(dates):
            before, after = last_index, last_index + 1
            if dates[before] <= key <= dates[after]:
                return interpolate(dates, self._values, key, before, after)

        index = search_dates(dates, key)
        if index >= 0:
            before = after = index
        else:
            after = ~index
            before = max(after - 1, 0)

        self._last_index = before
        return interpolate(dates, self._values, key, before, after)


class NoEarthOrientationParameters:
    """EOP provider that returns zero for every value at every instant."""

    __slots__ = ()

    is_loaded = True

    def compute(self, epc: Epoch) -> EOPSample:
        """Return the all-zero sample."""
        return ZERO_SAMPLE

    def __repr__(self) -> str:
        return "EarthOrientationParameters.NONE"


EarthOrientationParameters.NONE = NoEarthOrientationParameters()


def zero_eop() -> NoEarthOrientationParameters:
    """Return the provider that ignores Earth orientation corrections.

    Returns:
        :data:`EarthOrientationParameters.NONE`.
    """
    return EarthOrientationParameters.NONE


def static_eop(
    x_pole_wander: float = 0.0,
    y_pole_wander: float = 0.0,
    ut1_minus_utc: float = 0.0,
    x_pole_offset: float = 0.0,
    y_pole_offset: float = 0.0,
    mjd_min: float = 0.0,
    mjd_max: float = 99999.0,
) -> EarthOrientationParameters:
    """Create a provider with constant values over ``[mjd_min, mjd_max]``.

    The dataset contains two samples with identical values, so
    interpolation returns the constants everywhere inside the range.  No
    leap seconds are registered.

    Args:
        x_pole_wander: Polar motion x-component [rad]. Default: 0.0.
        y_pole_wander: Polar motion y-component [rad]. Default: 0.0.
        ut1_minus_utc: UT1-UTC offset [seconds]. Default: 0.0.
        x_pole_offset: Celestial pole offset dX [rad]. Default: 0.0.
        y_pole_offset: Celestial pole offset dY [rad]. Default: 0.0.
        mjd_min: Start of the valid UTC MJD range. Default: 0.0.
        mjd_max: End of the valid UTC MJD range. Default: 99999.0.

    Returns:
        EarthOrientationParameters with constant values.

    Examples:
        ```python
        from orientax.eop import static_eop
        eop = static_eop(ut1_minus_utc=0.1)
        ```
    """
    row = [x_pole_wander, y_pole_wander, ut1_minus_utc, x_pole_offset, y_pole_offset, 0.0]
    record = {
        "columnNames": list(REQUIRED_COLUMNS),
        "samples": [mjd_min, *row, mjd_max, *row],
    }
    return EarthOrientationParameters(
        record, config=EOPConfig(add_new_leap_seconds=False)
    )


def load_eop_from_standard_file(
    filepath: str | Path,
    *,
    config: EOPConfig | None = None,
    leap_seconds: LeapSecondTable | None = None,
) -> EarthOrientationParameters:
    """Load EOP data from an IERS standard format file.

    TAI-UTC for each row is taken from *leap_seconds*, so no new leap
    seconds are discovered from this format.

    Args:
        filepath: Path to an IERS standard format file
            (e.g. ``finals.all.iau2000.txt``).
        config: Provider options.
        leap_seconds: Leap-second table. Default: the process-wide table.

    Returns:
        EarthOrientationParameters ready for lookups.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If no valid EOP data is found.
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"EOP file not found: {filepath}")

    table = default_leap_second_table() if leap_seconds is None else leap_seconds
    record = standard_file_to_record(filepath, table)
    return EarthOrientationParameters(record, config=config, leap_seconds=table)

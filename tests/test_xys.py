"""Tests for the IAU 2006 XYS provider."""

from __future__ import annotations

import asyncio

import numpy as np
import pytest

from orientax.xys import (
    Iau2006XysData,
    XYSConfig,
    XYSSample,
    lagrange_coefficients,
    lagrange_denominators,
)

# Sample 0 at J2000 (day 2451545, 0 s), three chunks of ten daily samples
CONFIG = XYSConfig(
    xys_file_url_template="xys_{0}.json",
    interpolation_order=3,
    sample_zero_julian_ephemeris_date=2451545.0,
    samples_per_xys_file=10,
    total_samples=30,
)
DAY0 = 2451545


def _value(days: float) -> XYSSample:
    return XYSSample(days * 1.0e-6, 2.0 * days * 1.0e-6, -days * 1.0e-8)


def _chunk(index: int) -> dict:
    samples = []
    for i in range(index * 10, min(index * 10 + 10, 30)):
        samples.extend(_value(i))
    return {"samples": samples}


class FakeFetcher:
    """Serves chunks from memory and records every request."""

    def __init__(self, failures: int = 0):
        self.requests: list[str] = []
        self.failures = failures

    async def __call__(self, location: str) -> dict:
        self.requests.append(location)
        await asyncio.sleep(0)
        if self.failures > 0:
            self.failures -= 1
            raise OSError("connection refused")
        index = int(location.removeprefix("xys_").removesuffix(".json"))
        return _chunk(index)


class TestLagrange:
    def test_coefficients_sum_to_one(self):
        denominators, x_table = lagrange_denominators(9, 1.0)
        coefficients = lagrange_coefficients(4.3, x_table, denominators)
        assert coefficients.sum() == pytest.approx(1.0, abs=1e-12)

    def test_reproduces_cubic(self):
        denominators, x_table = lagrange_denominators(3, 2.0)
        values = x_table**3 - 2.0 * x_table
        coefficients = lagrange_coefficients(3.1, x_table, denominators)
        assert coefficients @ values == pytest.approx(3.1**3 - 6.2, rel=1e-12)

    def test_at_node_selects_node(self):
        denominators, x_table = lagrange_denominators(4, 1.0)
        coefficients = lagrange_coefficients(2.0, x_table, denominators)
        np.testing.assert_allclose(coefficients, [0.0, 0.0, 1.0, 0.0, 0.0], atol=1e-14)


class TestXYSConfig:
    def test_defaults(self):
        config = XYSConfig()
        assert config.interpolation_order == 9
        assert config.samples_per_xys_file == 1000
        assert config.total_samples == 27426
        assert config.sample_zero_julian_ephemeris_date == 2442396.5

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"interpolation_order": -1},
            {"step_size_days": 0.0},
            {"samples_per_xys_file": 0},
            {"total_samples": 5, "interpolation_order": 9},
            {"timeout": -1.0},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            XYSConfig(**kwargs)


class TestIau2006XysData:
    def test_chunk_layout(self):
        xys = Iau2006XysData(CONFIG)
        assert xys.chunk_count == 3
        assert xys.chunk_url(2) == "xys_2.json"
        assert xys.chunk_index_for_sample(19) == 1
        assert Iau2006XysData().chunk_count == 28

    def test_default_template_from_environment(self, monkeypatch):
        monkeypatch.setenv("ORIENTAX_XYS_URL_TEMPLATE", "https://example.com/{0}.json")
        assert Iau2006XysData().chunk_url(4) == "https://example.com/4.json"

    def test_outside_series_is_none(self):
        xys = Iau2006XysData(CONFIG)
        assert xys.compute_xys_radians(DAY0 - 1, 0.0) is None
        assert xys.compute_xys_radians(DAY0 + 40, 0.0) is None

    def test_missing_data_without_loop_is_none(self):
        fetcher = FakeFetcher()
        xys = Iau2006XysData(CONFIG, fetcher=fetcher)
        assert xys.compute_xys_radians(DAY0 + 12, 43200.0) is None
        assert fetcher.requests == []

    def test_single_request_before_load_then_defined(self):
        fetcher = FakeFetcher()

        async def main():
            xys = Iau2006XysData(CONFIG, fetcher=fetcher)
            assert xys.compute_xys_radians(DAY0 + 12, 43200.0) is None
            assert xys.compute_xys_radians(DAY0 + 12, 0.0) is None
            await xys.preload(DAY0 + 12, 0.0, DAY0 + 12, 43200.0)
            return xys.compute_xys_radians(DAY0 + 12, 43200.0)

        sample = asyncio.run(main())
        assert fetcher.requests == ["xys_1.json"]
        expected = _value(12.5)
        assert sample.x == pytest.approx(expected.x, rel=1e-12)
        assert sample.y == pytest.approx(expected.y, rel=1e-12)
        assert sample.s == pytest.approx(expected.s, rel=1e-12)

    def test_preload_requests_covering_chunks_once(self):
        fetcher = FakeFetcher()

        async def main():
            xys = Iau2006XysData(CONFIG, fetcher=fetcher)
            await xys.preload(DAY0, 0.0, DAY0 + 25, 0.0)
            await xys.preload(DAY0, 0.0, DAY0 + 25, 0.0)
            return xys

        xys = asyncio.run(main())
        assert sorted(fetcher.requests) == ["xys_0.json", "xys_1.json", "xys_2.json"]
        assert all(xys.is_chunk_loaded(i) for i in range(3))

    def test_concurrent_preloads_share_requests(self):
        fetcher = FakeFetcher()

        async def main():
            xys = Iau2006XysData(CONFIG, fetcher=fetcher)
            first = xys.preload(DAY0 + 2, 0.0, DAY0 + 4, 0.0)
            second = xys.preload(DAY0 + 3, 0.0, DAY0 + 5, 0.0)
            await asyncio.gather(first, second)

        asyncio.run(main())
        assert fetcher.requests == ["xys_0.json"]

    def test_continuous_across_chunk_boundary(self):
        fetcher = FakeFetcher()

        async def main():
            xys = Iau2006XysData(CONFIG, fetcher=fetcher)
            await xys.preload(DAY0 + 8, 0.0, DAY0 + 12, 0.0)
            before = xys.compute_xys_radians(DAY0 + 9, 86399.0)
            after = xys.compute_xys_radians(DAY0 + 10, 1.0)
            return before, after

        before, after = asyncio.run(main())
        assert after.x - before.x == pytest.approx(2.0 / 86400.0 * 1.0e-6, rel=1e-6)
        assert after.s - before.s == pytest.approx(-2.0 / 86400.0 * 1.0e-8, rel=1e-6)

    def test_end_of_series_window(self):
        xys = Iau2006XysData(CONFIG)
        for index in range(3):
            xys.apply_chunk(index, _chunk(index))
        sample = xys.compute_xys_radians(DAY0 + 29, 0.0)
        assert sample.x == pytest.approx(29.0e-6, rel=1e-12)

    def test_failed_request_can_be_retried(self):
        fetcher = FakeFetcher(failures=1)

        async def main():
            xys = Iau2006XysData(CONFIG, fetcher=fetcher)
            with pytest.raises(RuntimeError, match="retrieving the XYS data"):
                await xys.preload(DAY0 + 12, 0.0, DAY0 + 13, 0.0)
            assert not xys.is_chunk_loaded(1)
            await xys.preload(DAY0 + 12, 0.0, DAY0 + 13, 0.0)
            return xys.is_chunk_loaded(1)

        assert asyncio.run(main())
        assert fetcher.requests == ["xys_1.json", "xys_1.json"]

    def test_preload_without_loop_raises(self):
        xys = Iau2006XysData(CONFIG)
        with pytest.raises(RuntimeError):
            xys.preload(DAY0, 0.0, DAY0 + 1, 0.0)

    def test_apply_chunk_validation(self):
        xys = Iau2006XysData(CONFIG)
        with pytest.raises(ValueError, match="no samples"):
            xys.apply_chunk(0, {"values": []})
        with pytest.raises(ValueError, match="outside"):
            xys.apply_chunk(3, _chunk(0))

    def test_apply_chunk_is_idempotent(self):
        xys = Iau2006XysData(CONFIG)
        xys.apply_chunk(1, _chunk(1))
        first = xys.compute_xys_radians(DAY0 + 12, 0.0)
        xys.apply_chunk(1, _chunk(1))
        assert xys.compute_xys_radians(DAY0 + 12, 0.0) == first

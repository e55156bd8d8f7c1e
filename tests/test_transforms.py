"""Tests for the Transforms engine."""

import asyncio

import jax.numpy as jnp
import pytest

from orientax.eop import EarthOrientationParameters, static_eop
from orientax.epoch import Epoch
from orientax.frames import (
    Transforms,
    earth_fixed_strategy,
    moon_fixed_strategy,
    rotation_fixed_to_icrf,
    rotation_icrf_to_moon_fixed,
    rotation_teme_to_pseudo_fixed,
)
from orientax.xys import Iau2006XysData, XYSConfig

XYS_CONFIG = XYSConfig(
    xys_file_url_template="xys_{0}.json",
    interpolation_order=9,
    sample_zero_julian_ephemeris_date=2458849.5,
    samples_per_xys_file=10,
    total_samples=40,
)
TEST_EPOCH = Epoch.from_iso8601("2020-01-15T00:00:00Z")


class ConstantChunkFetcher:
    def __init__(self):
        self.requests = []

    async def __call__(self, location):
        self.requests.append(location)
        return {"samples": [1.0e-5, -2.0e-5, 1.0e-8] * 10}


def _loaded_xys() -> Iau2006XysData:
    xys = Iau2006XysData(XYS_CONFIG)
    for index in range(4):
        xys.apply_chunk(index, {"samples": [1.0e-5, -2.0e-5, 1.0e-8] * 10})
    return xys


class TestTransforms:
    def test_defaults(self):
        transforms = Transforms()
        assert transforms.earth_orientation_parameters is EarthOrientationParameters.NONE
        assert isinstance(transforms.iau2006_xys_data, Iau2006XysData)
        assert transforms.central_body_fixed is earth_fixed_strategy

    def test_fixed_to_icrf_uses_providers(self):
        eop = static_eop(ut1_minus_utc=0.2)
        xys = _loaded_xys()
        transforms = Transforms(eop, xys)
        expected = rotation_fixed_to_icrf(TEST_EPOCH, eop, xys)
        assert jnp.allclose(transforms.compute_fixed_to_icrf_matrix(TEST_EPOCH), expected)
        assert jnp.allclose(transforms.compute_icrf_to_fixed_matrix(TEST_EPOCH), expected.T)

    def test_icrf_none_while_loading(self):
        transforms = Transforms(iau2006_xys_data=Iau2006XysData(XYS_CONFIG))
        assert transforms.compute_fixed_to_icrf_matrix(TEST_EPOCH) is None
        assert transforms.compute_icrf_to_fixed_matrix(TEST_EPOCH) is None

    def test_central_body_falls_back_to_teme(self):
        transforms = Transforms(iau2006_xys_data=Iau2006XysData(XYS_CONFIG))
        m = transforms.compute_icrf_to_central_body_fixed_matrix(TEST_EPOCH)
        assert jnp.allclose(m, rotation_teme_to_pseudo_fixed(TEST_EPOCH))

    def test_central_body_uses_icrf_when_available(self):
        transforms = Transforms(iau2006_xys_data=_loaded_xys())
        m = transforms.compute_icrf_to_central_body_fixed_matrix(TEST_EPOCH)
        assert jnp.allclose(m, transforms.compute_icrf_to_fixed_matrix(TEST_EPOCH))

    def test_moon_strategy(self):
        transforms = Transforms(central_body_fixed=moon_fixed_strategy)
        m = transforms.compute_icrf_to_central_body_fixed_matrix(TEST_EPOCH)
        assert jnp.allclose(m, rotation_icrf_to_moon_fixed(TEST_EPOCH))

    def test_strategy_can_be_swapped(self):
        transforms = Transforms(iau2006_xys_data=_loaded_xys())
        transforms.central_body_fixed = moon_fixed_strategy
        m = transforms.compute_icrf_to_central_body_fixed_matrix(TEST_EPOCH)
        assert jnp.allclose(m, transforms.compute_icrf_to_moon_fixed_matrix(TEST_EPOCH))

    def test_moon_matrices(self):
        transforms = Transforms()
        m = transforms.compute_moon_fixed_to_icrf_matrix(TEST_EPOCH)
        assert jnp.allclose(m.T, transforms.compute_icrf_to_moon_fixed_matrix(TEST_EPOCH))

    def test_teme(self):
        transforms = Transforms()
        m = transforms.compute_teme_to_pseudo_fixed_matrix(TEST_EPOCH)
        assert jnp.allclose(m, rotation_teme_to_pseudo_fixed(TEST_EPOCH))

    @pytest.mark.parametrize(
        "method",
        [
            "compute_fixed_to_icrf_matrix",
            "compute_icrf_to_fixed_matrix",
            "compute_teme_to_pseudo_fixed_matrix",
            "compute_icrf_to_central_body_fixed_matrix",
            "compute_moon_fixed_to_icrf_matrix",
            "compute_icrf_to_moon_fixed_matrix",
        ],
    )
    def test_non_epoch_raises(self, method):
        with pytest.raises(TypeError):
            getattr(Transforms(), method)("2020-01-01T00:00:00Z")

    def test_preload_icrf_fixed(self):
        fetcher = ConstantChunkFetcher()

        async def main():
            xys = Iau2006XysData(XYS_CONFIG, fetcher=fetcher)
            transforms = Transforms(iau2006_xys_data=xys)
            start = Epoch.from_iso8601("2020-01-12T00:00:00Z")
            stop = Epoch.from_iso8601("2020-01-18T00:00:00Z")
            assert transforms.compute_fixed_to_icrf_matrix(start) is None
            await transforms.preload_icrf_fixed(start, stop)
            return transforms.compute_fixed_to_icrf_matrix(start)

        m = asyncio.run(main())
        assert m is not None
        assert jnp.allclose(m @ m.T, jnp.eye(3), atol=1e-12)
        assert sorted(fetcher.requests) == ["xys_0.json", "xys_1.json", "xys_2.json"]

    def test_preload_rejects_non_epoch(self):
        with pytest.raises(TypeError):
            Transforms().preload_icrf_fixed(None, TEST_EPOCH)

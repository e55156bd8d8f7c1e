"""Tests for the orientax.config module."""

import jax.numpy as jnp
import pytest

from orientax.attitude_representations import Rz
from orientax.config import (
    DEFAULT_XYS_URL_TEMPLATE,
    XYS_URL_TEMPLATE_ENV,
    get_dtype,
    get_matrix_tolerance,
    get_xys_url_template,
    set_dtype,
)


@pytest.fixture(autouse=True)
def reset_dtype():
    """Reset dtype to float32 before and after each test."""
    set_dtype(jnp.float32)
    yield
    set_dtype(jnp.float32)


class TestGetSetDtype:
    def test_default_dtype(self):
        assert get_dtype() == jnp.float32

    def test_set_float64(self):
        set_dtype(jnp.float64)
        assert get_dtype() == jnp.float64

    def test_set_bfloat16(self):
        set_dtype(jnp.bfloat16)
        assert get_dtype() == jnp.bfloat16

    def test_invalid_dtype_raises(self):
        with pytest.raises(ValueError, match="Unsupported dtype"):
            set_dtype(jnp.int32)

    def test_matrices_follow_dtype(self):
        assert Rz(0.5).dtype == jnp.float32
        set_dtype(jnp.float64)
        assert Rz(0.5).dtype == jnp.float64


class TestMatrixTolerance:
    def test_float32(self):
        assert get_matrix_tolerance() == 1e-5

    def test_float64(self):
        set_dtype(jnp.float64)
        assert get_matrix_tolerance() == 1e-12

    def test_float16(self):
        set_dtype(jnp.float16)
        assert get_matrix_tolerance() == 1e-2


class TestXysUrlTemplate:
    def test_default(self, monkeypatch):
        monkeypatch.delenv(XYS_URL_TEMPLATE_ENV, raising=False)
        assert get_xys_url_template() == DEFAULT_XYS_URL_TEMPLATE

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv(XYS_URL_TEMPLATE_ENV, "https://example.com/xys_{0}.json")
        assert get_xys_url_template() == "https://example.com/xys_{0}.json"

    def test_empty_environment_uses_default(self, monkeypatch):
        monkeypatch.setenv(XYS_URL_TEMPLATE_ENV, "")
        assert get_xys_url_template() == DEFAULT_XYS_URL_TEMPLATE

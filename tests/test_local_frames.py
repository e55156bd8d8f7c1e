"""Tests for local topocentric frames and heading-pitch-roll placement."""

import itertools
import math

import jax.numpy as jnp
import pytest

from orientax.attitude_representations import HeadingPitchRoll, rotation_from_quaternion
from orientax.constants import WGS84_a, WGS84_b
from orientax.coordinates import Ellipsoid
from orientax.frames import (
    LocalAxis,
    east_north_up_to_fixed_frame,
    fixed_frame_to_heading_pitch_roll,
    heading_pitch_roll_quaternion,
    heading_pitch_roll_to_fixed_frame,
    local_frame_to_fixed_frame_generator,
    north_east_down_to_fixed_frame,
    north_up_east_to_fixed_frame,
    north_west_up_to_fixed_frame,
    rotation_matrix_from_position_velocity,
)

EQUATOR = jnp.array([WGS84_a, 0.0, 0.0])
ORIGIN = Ellipsoid.WGS84.cartographic_to_cartesian(30.0, 60.0, 1000.0, use_degrees=True)


def _columns(m):
    return m[:3, 0], m[:3, 1], m[:3, 2], m[:3, 3]


class TestNamedFrames:
    def test_enu_at_equator(self):
        m = east_north_up_to_fixed_frame(EQUATOR)
        e, n, u, origin = _columns(m)
        assert jnp.allclose(e, jnp.array([0.0, 1.0, 0.0]), atol=1e-15)
        assert jnp.allclose(n, jnp.array([0.0, 0.0, 1.0]), atol=1e-15)
        assert jnp.allclose(u, jnp.array([1.0, 0.0, 0.0]), atol=1e-15)
        assert jnp.allclose(origin, EQUATOR)
        assert jnp.allclose(m[3], jnp.array([0.0, 0.0, 0.0, 1.0]))

    def test_ned_at_equator(self):
        n, e, d, _ = _columns(north_east_down_to_fixed_frame(EQUATOR))
        assert jnp.allclose(n, jnp.array([0.0, 0.0, 1.0]), atol=1e-15)
        assert jnp.allclose(e, jnp.array([0.0, 1.0, 0.0]), atol=1e-15)
        assert jnp.allclose(d, jnp.array([-1.0, 0.0, 0.0]), atol=1e-15)

    def test_nue_and_nwu_at_equator(self):
        n, u, e, _ = _columns(north_up_east_to_fixed_frame(EQUATOR))
        assert jnp.allclose(u, jnp.array([1.0, 0.0, 0.0]), atol=1e-15)
        assert jnp.allclose(e, jnp.array([0.0, 1.0, 0.0]), atol=1e-15)
        n, w, u, _ = _columns(north_west_up_to_fixed_frame(EQUATOR))
        assert jnp.allclose(w, jnp.array([0.0, -1.0, 0.0]), atol=1e-15)
        assert jnp.allclose(u, jnp.array([1.0, 0.0, 0.0]), atol=1e-15)

    def test_enu_matches_geodetic_directions(self):
        lon, lat = math.radians(30.0), math.radians(60.0)
        e, n, u, _ = _columns(east_north_up_to_fixed_frame(ORIGIN))
        assert jnp.allclose(e, jnp.array([-math.sin(lon), math.cos(lon), 0.0]), atol=1e-12)
        assert jnp.allclose(
            n,
            jnp.array([-math.sin(lat) * math.cos(lon), -math.sin(lat) * math.sin(lon), math.cos(lat)]),
            atol=1e-12,
        )
        assert jnp.allclose(
            u,
            jnp.array([math.cos(lat) * math.cos(lon), math.cos(lat) * math.sin(lon), math.sin(lat)]),
            atol=1e-12,
        )

    def test_custom_ellipsoid(self):
        u = east_north_up_to_fixed_frame(jnp.array([1.0, 0.0, 1.0]), Ellipsoid((1.0, 1.0, 2.0)))[:3, 2]
        expected = jnp.array([1.0, 0.0, 0.25]) / math.sqrt(1.0625)
        assert jnp.allclose(u, expected, atol=1e-15)


class TestDegenerateOrigins:
    def test_center(self):
        e, n, u, origin = _columns(east_north_up_to_fixed_frame(jnp.zeros(3)))
        assert jnp.allclose(e, jnp.array([0.0, 1.0, 0.0]))
        assert jnp.allclose(n, jnp.array([-1.0, 0.0, 0.0]))
        assert jnp.allclose(u, jnp.array([0.0, 0.0, 1.0]))
        assert jnp.allclose(origin, jnp.zeros(3))

    def test_north_pole(self):
        e, n, u, _ = _columns(east_north_up_to_fixed_frame(jnp.array([0.0, 0.0, WGS84_b])))
        assert jnp.allclose(e, jnp.array([0.0, 1.0, 0.0]))
        assert jnp.allclose(n, jnp.array([-1.0, 0.0, 0.0]))
        assert jnp.allclose(u, jnp.array([0.0, 0.0, 1.0]))

    def test_south_pole(self):
        e, n, u, _ = _columns(east_north_up_to_fixed_frame(jnp.array([0.0, 0.0, -WGS84_b])))
        assert jnp.allclose(e, jnp.array([0.0, 1.0, 0.0]))
        assert jnp.allclose(n, jnp.array([1.0, 0.0, 0.0]))
        assert jnp.allclose(u, jnp.array([0.0, 0.0, -1.0]))

    def test_nan_origin_raises(self):
        with pytest.raises(ValueError):
            east_north_up_to_fixed_frame(jnp.array([math.nan, 0.0, 0.0]))


class TestGenerator:
    def test_cached(self):
        assert local_frame_to_fixed_frame_generator("east", "north") is east_north_up_to_fixed_frame
        assert (
            local_frame_to_fixed_frame_generator(LocalAxis.NORTH, LocalAxis.EAST)
            is north_east_down_to_fixed_frame
        )

    @pytest.mark.parametrize(
        "first, second",
        [("east", "east"), ("east", "west"), ("up", "down"), ("sideways", "north"), ("north", None)],
    )
    def test_invalid_axes(self, first, second):
        with pytest.raises(ValueError, match="firstAxis and secondAxis"):
            local_frame_to_fixed_frame_generator(first, second)

    @pytest.mark.parametrize(
        "first, second",
        [
            (first, second)
            for first, second in itertools.product(LocalAxis, LocalAxis)
            if first is not second
            and {first, second}
            not in ({LocalAxis.EAST, LocalAxis.WEST}, {LocalAxis.NORTH, LocalAxis.SOUTH}, {LocalAxis.UP, LocalAxis.DOWN})
        ],
    )
    def test_all_pairs_are_right_handed(self, first, second):
        m = local_frame_to_fixed_frame_generator(first, second)(ORIGIN)
        rotation = m[:3, :3]
        assert jnp.allclose(rotation @ rotation.T, jnp.eye(3), atol=1e-12)
        assert jnp.linalg.det(rotation) == pytest.approx(1.0, abs=1e-12)

    def test_third_axis_table(self):
        generator = local_frame_to_fixed_frame_generator
        assert generator("up", "south").third_axis is LocalAxis.EAST
        assert generator("down", "west").third_axis is LocalAxis.NORTH
        assert generator("west", "up").third_axis is LocalAxis.NORTH
        assert generator("east", "down").third_axis is LocalAxis.NORTH
        assert generator("south", "east").third_axis is LocalAxis.UP


class TestHeadingPitchRollFrames:
    def test_zero_hpr_is_local_frame(self):
        m = heading_pitch_roll_to_fixed_frame(ORIGIN, HeadingPitchRoll())
        assert jnp.allclose(m, east_north_up_to_fixed_frame(ORIGIN), atol=1e-12)

    @pytest.mark.parametrize(
        "hpr",
        [
            HeadingPitchRoll(0.5, 0.2, -0.1),
            HeadingPitchRoll(-2.0, -1.0, 2.5),
            HeadingPitchRoll(3.0, 0.0, 0.0),
        ],
    )
    def test_round_trip(self, hpr):
        m = heading_pitch_roll_to_fixed_frame(ORIGIN, hpr)
        result = fixed_frame_to_heading_pitch_roll(m)
        assert result.heading == pytest.approx(hpr.heading, abs=1e-9)
        assert result.pitch == pytest.approx(hpr.pitch, abs=1e-9)
        assert result.roll == pytest.approx(hpr.roll, abs=1e-9)

    def test_round_trip_with_other_frame(self):
        hpr = HeadingPitchRoll(0.3, -0.4, 0.5)
        m = heading_pitch_roll_to_fixed_frame(
            ORIGIN, hpr, fixed_frame_transform=north_west_up_to_fixed_frame
        )
        result = fixed_frame_to_heading_pitch_roll(
            m, fixed_frame_transform=north_west_up_to_fixed_frame
        )
        assert result.heading == pytest.approx(0.3, abs=1e-9)
        assert result.pitch == pytest.approx(-0.4, abs=1e-9)
        assert result.roll == pytest.approx(0.5, abs=1e-9)

    def test_scale_is_ignored(self):
        hpr = HeadingPitchRoll(0.5, 0.2, -0.1)
        m = heading_pitch_roll_to_fixed_frame(ORIGIN, hpr)
        scaled = m.at[:3, :3].multiply(jnp.array([2.0, 3.0, 0.5]))
        result = fixed_frame_to_heading_pitch_roll(scaled)
        assert result.heading == pytest.approx(0.5, abs=1e-9)

    def test_zero_translation(self):
        assert fixed_frame_to_heading_pitch_roll(jnp.eye(4)) == HeadingPitchRoll(0.0, 0.0, 0.0)


class TestHeadingPitchRollQuaternion:
    def test_matches_fixed_frame_rotation(self):
        hpr = HeadingPitchRoll(-math.pi / 2, math.pi / 4, 0.0)
        q = heading_pitch_roll_quaternion(EQUATOR, hpr)
        expected = heading_pitch_roll_to_fixed_frame(EQUATOR, hpr)[:3, :3]
        assert q.shape == (4,)
        assert jnp.linalg.norm(q) == pytest.approx(1.0, abs=1e-12)
        assert jnp.allclose(rotation_from_quaternion(q), expected, atol=1e-12)

    def test_other_frame(self):
        hpr = HeadingPitchRoll(0.3, -0.2, 0.1)
        q = heading_pitch_roll_quaternion(
            ORIGIN, hpr, fixed_frame_transform=north_east_down_to_fixed_frame
        )
        expected = heading_pitch_roll_to_fixed_frame(
            ORIGIN, hpr, fixed_frame_transform=north_east_down_to_fixed_frame
        )[:3, :3]
        assert jnp.allclose(rotation_from_quaternion(q), expected, atol=1e-12)


class TestPositionVelocityFrame:
    def test_eastward_at_equator(self):
        m = rotation_matrix_from_position_velocity(EQUATOR, jnp.array([0.0, 7000.0, 0.0]))
        assert jnp.allclose(m[:, 0], jnp.array([0.0, 1.0, 0.0]), atol=1e-15)
        assert jnp.allclose(m[:, 1], jnp.array([0.0, 0.0, 1.0]), atol=1e-15)
        assert jnp.allclose(m[:, 2], jnp.array([1.0, 0.0, 0.0]), atol=1e-15)

    def test_is_rotation(self):
        m = rotation_matrix_from_position_velocity(ORIGIN, jnp.array([120.0, -35.0, 80.0]))
        assert jnp.allclose(m @ m.T, jnp.eye(3), atol=1e-12)
        assert float(jnp.linalg.det(m)) == pytest.approx(1.0, abs=1e-12)

    def test_velocity_along_normal(self):
        m = rotation_matrix_from_position_velocity(
            jnp.array([0.0, WGS84_a, 0.0]), jnp.array([0.0, 10.0, 0.0])
        )
        assert jnp.allclose(m[:, 0], jnp.array([0.0, 1.0, 0.0]), atol=1e-15)
        assert jnp.allclose(m @ m.T, jnp.eye(3), atol=1e-12)

    def test_zero_velocity_raises(self):
        with pytest.raises(ValueError, match="velocity"):
            rotation_matrix_from_position_velocity(EQUATOR, jnp.zeros(3))

"""Tests for leap-second tables and calendar helpers."""

import math

import pytest

from orientax.time import (
    LeapSecond,
    LeapSecondTable,
    caldate_to_jd,
    caldate_to_jd_components,
    caldate_to_mjd,
    days_in_month,
    default_leap_second_table,
    is_leap_year,
    jd_components_to_caldate,
    jd_to_mjd,
    mjd_to_jd,
    normalize_components,
    seconds_between,
    split_julian_date,
)


class TestNormalizeComponents:
    def test_in_range_unchanged(self):
        assert normalize_components(2451545, 100.0) == (2451545, 100.0)

    def test_carries_whole_days(self):
        assert normalize_components(2451545, 86400.0 * 2 + 5.0) == (2451547, 5.0)

    def test_borrows_negative_seconds(self):
        assert normalize_components(2451545, -1.0) == (2451544, 86399.0)

    def test_seconds_between(self):
        assert seconds_between(2451546, 10.0, 2451545, 20.0) == 86390.0


class TestLeapSecondTable:
    def test_default_table_contents(self):
        table = default_leap_second_table()
        assert len(table) == 28
        assert table[0] == LeapSecond(2441317, 43210.0, 10.0)
        assert table[-1] == LeapSecond(2457754, 43237.0, 37.0)

    def test_default_table_is_sorted_and_increasing(self):
        entries = list(default_leap_second_table())
        for previous, current in zip(entries, entries[1:]):
            assert (previous.day_number, previous.seconds_of_day) < (
                current.day_number,
                current.seconds_of_day,
            )
            assert current.offset == previous.offset + 1.0

    def test_insert_keeps_order(self):
        table = LeapSecondTable()
        assert table.insert(LeapSecond(2457754, 43237.0, 37.0))
        assert table.insert(LeapSecond(2441317, 43210.0, 10.0))
        assert [e.offset for e in table] == [10.0, 37.0]

    def test_insert_duplicate_is_noop(self):
        table = default_leap_second_table().copy()
        assert not table.insert(LeapSecond(2457754, 43237.0, 37.0))
        assert len(table) == 28

    def test_copy_is_independent(self):
        table = default_leap_second_table().copy()
        table.insert(LeapSecond(2470000, 43238.0, 38.0))
        assert len(table) == 29
        assert len(default_leap_second_table()) == 28

    def test_search(self):
        table = default_leap_second_table()
        assert table.search(2441317, 43210.0) == 0
        assert ~table.search(2441318, 0.0) == 1

    def test_lookup_offset(self):
        table = default_leap_second_table()
        assert table.lookup_offset(2456109, 43235.0) == 35.0
        assert table.lookup_offset(2456109, 43234.0) == 34.0
        # Before the first entry the first offset applies
        assert table.lookup_offset(2400000, 0.0) == 10.0
        assert table.compute_tai_minus_utc(2460000, 0.0) == 37.0

    def test_lookup_offset_empty_table(self):
        assert LeapSecondTable().lookup_offset(2451545, 0.0) == 0.0

    def test_utc_to_tai_across_leap_second(self):
        table = default_leap_second_table()
        # 2012-06-30T23:59:59 UTC and 2012-07-01T00:00:00 UTC
        assert table.utc_to_tai(2456109, 43199.0) == (2456109, 43233.0)
        assert table.utc_to_tai(2456109, 43200.0) == (2456109, 43235.0)

    def test_tai_to_utc_inside_leap_second(self):
        table = default_leap_second_table()
        assert table.tai_to_utc(2456109, 43234.0) is None
        assert table.tai_to_utc(2456109, 43234.5) is None
        assert table.tai_to_utc(2456109, 43235.0) == (2456109, 43200.0)
        assert table.tai_to_utc(2456109, 43233.0) == (2456109, 43199.0)

    def test_utc_tai_round_trip(self):
        table = default_leap_second_table()
        for day, seconds in [(2451545, 0.0), (2458849, 43200.0), (2441000, 100.0)]:
            assert table.tai_to_utc(*table.utc_to_tai(day, seconds)) == (day, seconds)


class TestCalendar:
    def test_is_leap_year(self):
        assert is_leap_year(2000)
        assert is_leap_year(2024)
        assert not is_leap_year(1900)
        assert not is_leap_year(2023)

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2023, 2) == 28
        assert days_in_month(2023, 4) == 30
        assert days_in_month(2023, 12) == 31

    def test_j2000(self):
        assert caldate_to_jd_components(2000, 1, 1, 12) == (2451545, 0.0)
        assert caldate_to_jd(2000, 1, 1, 12) == 2451545.0
        assert caldate_to_mjd(2000, 1, 1) == 51544.0

    def test_midnight_belongs_to_previous_julian_day(self):
        assert caldate_to_jd_components(2000, 1, 1) == (2451544, 43200.0)

    def test_jd_components_to_caldate(self):
        assert jd_components_to_caldate(2451545, 0.0) == (2000, 1, 1, 12, 0, 0, 0.0)
        year, month, day, hour, minute, second, ms = jd_components_to_caldate(
            2451544, 43200.0 + 3723.5
        )
        assert (year, month, day, hour, minute, second) == (2000, 1, 1, 1, 2, 3)
        assert ms == pytest.approx(500.0)

    def test_jd_mjd_conversion(self):
        assert jd_to_mjd(2451545.0) == 51544.5
        assert mjd_to_jd(51544.5) == 2451545.0

    def test_split_julian_date(self):
        assert split_julian_date(2451545.5) == (2451545, 43200.0)
        day, seconds = split_julian_date(2442396.5)
        assert (day, seconds) == (2442396, 43200.0)

    def test_split_julian_date_rejects_nan(self):
        with pytest.raises(ValueError):
            split_julian_date(math.nan)

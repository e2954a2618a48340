"""
Tests for age-based candidate selection.
"""

from datetime import timedelta

import pytest

from reaper.cleanup.age import select, within_bound
from reaper.cleanup.models import AgeBound
from reaper.errors import ConfigError

from fakes import NOW, make_resource


def minutes(n):
    return timedelta(minutes=n)


class TestSelect:
    """Test inclusive age windows."""

    def test_min_age_scenario(self):
        """Containers aged 10m, 20m, 40m with min=15m select the 20m and 40m ones."""
        resources = [make_resource("a", age=minutes(10)), make_resource("b", age=minutes(20)),
                     make_resource("c", age=minutes(40))]

        selected = select(resources, AgeBound(min_age=minutes(15)), NOW)

        assert [r.id for r in selected] == ["b", "c"]

    def test_max_age_selects_younger(self):
        """Test that max_age keeps only resources younger than the bound."""
        resources = [make_resource("a", age=minutes(10)), make_resource("b", age=minutes(40))]

        selected = select(resources, AgeBound(max_age=minutes(30)), NOW)

        assert [r.id for r in selected] == ["a"]

    def test_boundaries_are_inclusive(self):
        """age == min and age == max are both eligible."""
        bound = AgeBound(min_age=minutes(15), max_age=minutes(30))
        resources = [
            make_resource("below", age=minutes(15) - timedelta(seconds=1)),
            make_resource("at-min", age=minutes(15)),
            make_resource("inside", age=minutes(20)),
            make_resource("at-max", age=minutes(30)),
            make_resource("above", age=minutes(30) + timedelta(seconds=1)),
        ]

        selected = select(resources, bound, NOW)

        assert [r.id for r in selected] == ["at-min", "inside", "at-max"]

    def test_trivial_bound_keeps_everything(self):
        """Test that an unbounded window selects every resource."""
        resources = [make_resource("a", age=minutes(1)), make_resource("b")]

        assert select(resources, AgeBound(), NOW) == resources

    def test_missing_timestamp_skipped_when_bounded(self):
        """Test that resources without a creation time are skipped."""
        resources = [make_resource("no-ts"), make_resource("old", age=minutes(60))]

        selected = select(resources, AgeBound(min_age=minutes(1)), NOW)

        assert [r.id for r in selected] == ["old"]

    def test_future_timestamp_skipped(self):
        """Test that resources created in the future are skipped."""
        resources = [make_resource("future", age=-minutes(5))]

        assert select(resources, AgeBound(max_age=minutes(30)), NOW) == []

    def test_preserves_input_order(self):
        """Test that selection keeps listing order."""
        resources = [make_resource(str(i), age=minutes(60 - i)) for i in range(10)]

        selected = select(resources, AgeBound(min_age=minutes(1)), NOW)

        assert [r.id for r in selected] == [str(i) for i in range(10)]


class TestAgeBound:
    """Test AgeBound validation."""

    def test_within_bound_open_ended(self):
        """Test bound checks with only one side set."""
        assert within_bound(minutes(1000), AgeBound(min_age=minutes(1)))
        assert within_bound(timedelta(0), AgeBound(max_age=minutes(1)))

    def test_min_must_be_less_than_max(self):
        """Test rejection of an inverted age window."""
        with pytest.raises(ConfigError, match="min_age must be less than max_age"):
            AgeBound(min_age=minutes(30), max_age=minutes(30)).validate()

    def test_bounds_must_be_positive(self):
        """Test rejection of zero or negative bounds."""
        with pytest.raises(ConfigError, match="positive"):
            AgeBound(min_age=timedelta(0)).validate()

    def test_valid_window(self):
        """Test that a proper window validates."""
        bound = AgeBound(min_age=minutes(5), max_age=minutes(10))
        assert bound.validate() is bound
        assert not bound.is_trivial
        assert AgeBound().is_trivial

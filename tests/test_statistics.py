import math

import pytest

from src.application.services.statistics import compute_stats
from src.domain.entities.price_record import StatSummary


def test_empty_series_is_all_zero():
    assert compute_stats([]) == StatSummary(count=0, avg=0.0, min=0.0, max=0.0, std_dev=0.0)


def test_single_value():
    stats = compute_stats([5])
    assert (stats.count, stats.avg, stats.min, stats.max, stats.std_dev) == (1, 5, 5, 5, 0)


def test_population_standard_deviation():
    stats = compute_stats([1, 2, 3, 4, 5])
    assert stats.count == 5
    assert stats.avg == 3
    assert stats.min == 1
    assert stats.max == 5
    # sample std-dev would be 1.5811
    assert stats.std_dev == 1.4142


def test_results_are_rounded_to_four_decimals():
    stats = compute_stats([1.123456, 2.654321])
    assert stats.avg == 1.8889
    assert stats.min == 1.1235
    assert stats.max == 2.6543


@pytest.mark.parametrize(
    "values",
    [
        [3.5, 3.5, 3.5],
        [10_000_000_000.0, 10_000_000_000.0],
        [1_000_000.25] * 50,
    ],
)
def test_equal_values_have_zero_deviation(values):
    assert compute_stats(values).std_dev == 0


@pytest.mark.parametrize(
    "values",
    [
        [2.0, 9.5, 4.25, 7.0],
        [148.2, 151.9, 150.05, 149.7, 152.3],
        [9_870_000_000.0, 10_120_000_000.0, 8_450_000_000.0],
        [999_999.5, 1_000_000.5],
    ],
)
def test_summary_bounds_hold(values):
    stats = compute_stats(values)
    assert stats.count == len(values)
    assert stats.min <= stats.avg <= stats.max
    assert stats.std_dev > 0
    assert all(math.isfinite(x) for x in (stats.avg, stats.min, stats.max, stats.std_dev))

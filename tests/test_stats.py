import pytest

from pricefeed.core.errors import ConfigError
from pricefeed.core.models import Stats
from pricefeed.core.stats import analyze


def test_empty_history_is_all_unavailable():
    assert analyze([]) == Stats(max=None, min=None, avg=None)


def test_basic_stats():
    assert analyze([100, 200, 300]) == Stats(max=300, min=100, avg=200)


def test_round_policy_rounds_half_up():
    assert analyze([1, 2]).avg == 2
    assert analyze([580000, 579999, 579999]).avg == 579999


def test_floor_policy():
    assert analyze([1, 2], rounding="floor").avg == 1
    assert analyze([100, 200, 300], rounding="floor").avg == 200


def test_unknown_policy_is_rejected():
    with pytest.raises(ConfigError):
        analyze([1], rounding="ceil")

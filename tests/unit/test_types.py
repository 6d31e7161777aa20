# unit/test_types.py

import random
from datetime import timedelta

import pytest

from retry_durations.types import GrowthKind, RandomSource

pytestmark = pytest.mark.unit


def test_growth_kind_has_expected_members() -> None:
    """
    ARRANGE: GrowthKind enum
    ACT:     inspect members
    ASSERT:  contains FIXED and EXPONENTIAL
    """
    expected_members = {"FIXED", "EXPONENTIAL"}

    assert {member.name for member in GrowthKind} == expected_members


def test_fixed_apply_is_identity() -> None:
    """
    ARRANGE: 7 second duration
    ACT:     apply FIXED growth
    ASSERT:  returns the same duration
    """
    expected = timedelta(seconds=7)

    actual = GrowthKind.FIXED.apply(expected)

    assert actual == expected


def test_exponential_apply_doubles() -> None:
    """
    ARRANGE: 7 second duration
    ACT:     apply EXPONENTIAL growth
    ASSERT:  returns 14 seconds
    """
    actual = GrowthKind.EXPONENTIAL.apply(timedelta(seconds=7))

    assert actual == timedelta(seconds=14)


def test_exponential_apply_saturates() -> None:
    """
    ARRANGE: largest representable duration
    ACT:     apply EXPONENTIAL growth
    ASSERT:  stays at timedelta.max
    """
    actual = GrowthKind.EXPONENTIAL.apply(timedelta.max)

    assert actual == timedelta.max


def test_exponential_apply_keeps_zero() -> None:
    """
    ARRANGE: zero duration
    ACT:     apply EXPONENTIAL growth
    ASSERT:  stays at zero
    """
    actual = GrowthKind.EXPONENTIAL.apply(timedelta(0))

    assert actual == timedelta(0)


def test_stdlib_random_is_a_random_source() -> None:
    """
    ARRANGE: random.Random instance
    ACT:     check against RandomSource protocol
    ASSERT:  satisfies the protocol
    """
    assert isinstance(random.Random(), RandomSource)

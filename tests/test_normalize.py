from __future__ import annotations

import pytest

from seatassign.models import ObjectiveWeights
from seatassign.normalize import (
    normalize_column_name,
    normalize_weights,
    parse_guest_type,
    parse_seniority,
)


def test_weights_are_rescaled_to_one() -> None:
    weights = normalize_weights(ObjectiveWeights(2, 1, 1, 0))
    assert weights.as_tuple() == pytest.approx((0.5, 0.25, 0.25, 0.0))


def test_zero_weights_become_equal_split() -> None:
    assert normalize_weights(ObjectiveWeights(0, 0, 0, 0)) == ObjectiveWeights()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("senior", "SENIOR"),
        (" VP ", "EXECUTIVE"),
        ("Manager", "MID"),
        ("entry level", "JUNIOR"),
        ("intern", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_seniority(raw, expected) -> None:
    assert parse_seniority(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("buyer", "BUYER"),
        ("Vendor", "SELLER"),
        ("moderator", "CATALYST"),
        ("speaker", "NEUTRAL"),
        (None, "NEUTRAL"),
    ],
)
def test_parse_guest_type(raw, expected) -> None:
    assert parse_guest_type(raw) == expected


def test_column_aliases_are_case_insensitive() -> None:
    assert normalize_column_name("Full Name") == "name"
    assert normalize_column_name(" Organization ") == "company"
    assert normalize_column_name("Experience Level") == "seniority"
    assert normalize_column_name("Favourite colour") is None

from __future__ import annotations

import pytest

from seatassign.models import Guest, SeatingPlan, TableAssignment


def _make_guest(guest_id: str, guest_type: str = "NEUTRAL", **fields) -> Guest:
    fields.setdefault("name", guest_id.title())
    return Guest(id=guest_id, guest_type=guest_type, **fields)


def _make_plan(*tables: list[str]) -> SeatingPlan:
    return SeatingPlan(
        tables=[TableAssignment(f"table_{i + 1}", list(ids)) for i, ids in enumerate(tables)]
    )


@pytest.fixture
def make_guest():
    return _make_guest


@pytest.fixture
def make_plan():
    return _make_plan


@pytest.fixture
def mixed_guests() -> list[Guest]:
    """Twelve guests spread over companies, departments, levels and roles."""
    companies = ["Acme", "Globex", "Initech", "Umbrella"]
    departments = ["Sales", "Engineering", "Finance"]
    levels = ["JUNIOR", "MID", "SENIOR", "EXECUTIVE"]
    types = ["BUYER", "SELLER", "NEUTRAL", "BUYER", "SELLER", "CATALYST"]
    return [
        _make_guest(
            f"g{i}",
            types[i % len(types)],
            company=companies[i % len(companies)],
            department=departments[i % len(departments)],
            seniority=levels[(i // 2) % len(levels)],
        )
        for i in range(1, 13)
    ]

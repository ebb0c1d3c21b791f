from __future__ import annotations

from seatassign.constraints import check_feasibility, validate_constraints
from seatassign.models import Constraint


def test_feasible_at_exact_capacity() -> None:
    result = check_feasibility(8, [], table_count=2, seats_per_table=4)
    assert result.feasible
    assert result.reason is None


def test_not_enough_seats_reports_both_counts() -> None:
    result = check_feasibility(5, [], table_count=2, seats_per_table=2)
    assert not result.feasible
    assert result.reason == "Not enough seats: 5 guests but only 4 seats"


def test_oversized_group_is_infeasible() -> None:
    group = Constraint("c1", "MUST_SIT_TOGETHER", ("a", "b", "c"))
    result = check_feasibility(3, [group], table_count=3, seats_per_table=2)
    assert not result.feasible
    assert "3 guests" in result.reason
    assert "2 seats" in result.reason


def test_other_kinds_do_not_affect_feasibility() -> None:
    constraints = [
        Constraint("c1", "MUST_NOT_SIT_TOGETHER", ("a", "b", "c", "d", "e")),
        Constraint("c2", "MAX_SELLERS_PER_TABLE", (), value=0),
        Constraint("c3", "MIN_BUYERS_PER_TABLE", (), value=5),
    ]
    assert check_feasibility(4, constraints, table_count=1, seats_per_table=4).feasible


def test_must_not_sit_together_violation_is_reported(make_guest, make_plan) -> None:
    guests = [make_guest("a"), make_guest("b"), make_guest("c")]
    plan = make_plan(["a", "b"], ["c"])
    constraint = Constraint("apart", "MUST_NOT_SIT_TOGETHER", ("a", "b"))

    result = validate_constraints(plan, [constraint], guests)

    assert not result.valid
    [violation] = result.violations
    assert violation.constraint_id == "apart"
    assert violation.constraint_type == "MUST_NOT_SIT_TOGETHER"
    assert violation.table_id == "table_1"
    assert violation.guest_ids == ("a", "b")


def test_must_not_sit_together_first_match_and_report_all(make_guest, make_plan) -> None:
    guests = [make_guest(gid) for gid in "abcd"]
    plan = make_plan(["a", "b"], ["c", "d"])
    constraint = Constraint("apart", "MUST_NOT_SIT_TOGETHER", ("a", "b", "c", "d"))

    first = validate_constraints(plan, [constraint], guests)
    every = validate_constraints(plan, [constraint], guests, report_all=True)

    assert [v.table_id for v in first.violations] == ["table_1"]
    assert [v.table_id for v in every.violations] == ["table_1", "table_2"]


def test_must_sit_together_across_tables(make_guest, make_plan) -> None:
    guests = [make_guest(gid) for gid in "abc"]
    constraint = Constraint("together", "MUST_SIT_TOGETHER", ("a", "b"))

    split = validate_constraints(make_plan(["a"], ["b", "c"]), [constraint], guests)
    joined = validate_constraints(make_plan(["a", "b"], ["c"]), [constraint], guests)

    assert not split.valid
    assert split.violations[0].message == "Guests must sit together but are at 2 different tables"
    assert joined.valid


def test_unknown_guest_ids_are_ignored(make_guest, make_plan) -> None:
    guests = [make_guest("a"), make_guest("b")]
    constraints = [
        Constraint("together", "MUST_SIT_TOGETHER", ("a", "ghost")),
        Constraint("apart", "MUST_NOT_SIT_TOGETHER", ("b", "ghost")),
    ]
    assert validate_constraints(make_plan(["a"], ["b"]), constraints, guests).valid


def test_max_sellers_per_table(make_guest, make_plan) -> None:
    guests = [make_guest(f"s{i}", "SELLER") for i in range(3)] + [make_guest("b", "BUYER")]
    plan = make_plan(["s0", "s1", "s2", "b"])

    default = validate_constraints(plan, [Constraint("max", "MAX_SELLERS_PER_TABLE")], guests)
    relaxed = validate_constraints(
        plan, [Constraint("max", "MAX_SELLERS_PER_TABLE", value=3)], guests
    )

    assert not default.valid
    assert default.violations[0].guest_ids == ("s0", "s1", "s2")
    assert default.violations[0].table_id == "table_1"
    assert relaxed.valid


def test_max_sellers_ignores_constraint_guest_ids(make_guest, make_plan) -> None:
    guests = [make_guest(f"s{i}", "SELLER") for i in range(2)]
    constraint = Constraint("max", "MAX_SELLERS_PER_TABLE", ("someone_else",), value=1)
    result = validate_constraints(make_plan(["s0", "s1"]), [constraint], guests)
    assert not result.valid


def test_min_buyers_skips_empty_tables(make_guest, make_plan) -> None:
    guests = [make_guest("b", "BUYER"), make_guest("s", "SELLER"), make_guest("n")]
    constraint = Constraint("min", "MIN_BUYERS_PER_TABLE")

    ok = validate_constraints(make_plan(["b", "s", "n"], []), [constraint], guests)
    short = validate_constraints(make_plan(["b"], ["s", "n"]), [constraint], guests)
    strict = validate_constraints(
        make_plan(["b", "s", "n"]), [Constraint("min", "MIN_BUYERS_PER_TABLE", value=2)], guests
    )

    assert ok.valid
    assert [v.table_id for v in short.violations] == ["table_2"]
    assert not strict.valid
    assert strict.violations[0].message == "Table has 1 buyers, minimum required is 2"

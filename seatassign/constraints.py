"""Feasibility checking and hard-constraint validation for seatassign."""

from collections import defaultdict

from seatassign.models import (
    DEFAULT_MAX_SELLERS,
    DEFAULT_MIN_BUYERS,
    Constraint,
    ConstraintViolation,
    FeasibilityResult,
    Guest,
    SeatingPlan,
    ValidationResult,
)


def check_feasibility(
    guest_count: int,
    constraints: list[Constraint],
    table_count: int,
    seats_per_table: int,
) -> FeasibilityResult:
    """
    Static pre-flight check run before any assignment attempt.

    Only raw capacity and the size of must-sit-together groups are checked;
    every other rule is enforced during assignment and search.
    """
    total_seats = table_count * seats_per_table
    if guest_count > total_seats:
        return FeasibilityResult(
            feasible=False,
            reason=f"Not enough seats: {guest_count} guests but only {total_seats} seats",
        )

    for constraint in constraints:
        if constraint.type == "MUST_SIT_TOGETHER" and len(constraint.guest_ids) > seats_per_table:
            return FeasibilityResult(
                feasible=False,
                reason=(
                    f"MUST_SIT_TOGETHER constraint has {len(constraint.guest_ids)} guests "
                    f"but tables only have {seats_per_table} seats"
                ),
            )

    return FeasibilityResult(feasible=True)


def validate_constraints(
    plan: SeatingPlan,
    constraints: list[Constraint],
    guests: list[Guest],
    report_all: bool = False,
) -> ValidationResult:
    """
    Check a seating plan against every constraint.

    Must-not-sit-together constraints report only the first offending table
    unless ``report_all`` is set. Guest ids unknown to the plan are ignored.
    """
    guest_to_table = plan.guest_to_table()
    guest_map = {g.id: g for g in guests}
    violations: list[ConstraintViolation] = []

    for constraint in constraints:
        if constraint.type == "MUST_SIT_TOGETHER":
            violation = _check_must_sit_together(constraint, guest_to_table)
            if violation:
                violations.append(violation)
        elif constraint.type == "MUST_NOT_SIT_TOGETHER":
            violations.extend(_check_must_not_sit_together(constraint, guest_to_table, report_all))
        elif constraint.type == "MAX_SELLERS_PER_TABLE":
            violations.extend(_check_max_sellers(constraint, plan, guest_map))
        elif constraint.type == "MIN_BUYERS_PER_TABLE":
            violations.extend(_check_min_buyers(constraint, plan, guest_map))

    return ValidationResult(valid=not violations, violations=violations)


def _check_must_sit_together(
    constraint: Constraint,
    guest_to_table: dict[str, str],
) -> ConstraintViolation | None:
    tables = {guest_to_table[gid] for gid in constraint.guest_ids if gid in guest_to_table}
    if len(tables) <= 1:
        return None
    return ConstraintViolation(
        constraint_id=constraint.id,
        constraint_type="MUST_SIT_TOGETHER",
        message=f"Guests must sit together but are at {len(tables)} different tables",
        guest_ids=tuple(constraint.guest_ids),
    )


def _check_must_not_sit_together(
    constraint: Constraint,
    guest_to_table: dict[str, str],
    report_all: bool,
) -> list[ConstraintViolation]:
    # dict preserves first-seen table order, which fixes the first-match result
    by_table: dict[str, list[str]] = defaultdict(list)
    for gid in constraint.guest_ids:
        if gid in guest_to_table:
            by_table[guest_to_table[gid]].append(gid)

    violations: list[ConstraintViolation] = []
    for table_id, guest_ids in by_table.items():
        if len(guest_ids) > 1:
            violations.append(
                ConstraintViolation(
                    constraint_id=constraint.id,
                    constraint_type="MUST_NOT_SIT_TOGETHER",
                    message=(
                        f"Guests must not sit together but {len(guest_ids)} "
                        "are at the same table"
                    ),
                    guest_ids=tuple(guest_ids),
                    table_id=table_id,
                )
            )
            if not report_all:
                break
    return violations


def _check_max_sellers(
    constraint: Constraint,
    plan: SeatingPlan,
    guest_map: dict[str, Guest],
) -> list[ConstraintViolation]:
    # Scoped to every table; constraint.guest_ids is not consulted
    max_sellers = constraint.value if constraint.value is not None else DEFAULT_MAX_SELLERS
    violations: list[ConstraintViolation] = []
    for table in plan.tables:
        sellers = [
            gid
            for gid in table.guest_ids
            if gid in guest_map and guest_map[gid].guest_type == "SELLER"
        ]
        if len(sellers) > max_sellers:
            violations.append(
                ConstraintViolation(
                    constraint_id=constraint.id,
                    constraint_type="MAX_SELLERS_PER_TABLE",
                    message=f"Table has {len(sellers)} sellers, max allowed is {max_sellers}",
                    guest_ids=tuple(sellers),
                    table_id=table.table_id,
                )
            )
    return violations


def _check_min_buyers(
    constraint: Constraint,
    plan: SeatingPlan,
    guest_map: dict[str, Guest],
) -> list[ConstraintViolation]:
    min_buyers = constraint.value if constraint.value is not None else DEFAULT_MIN_BUYERS
    violations: list[ConstraintViolation] = []
    for table in plan.tables:
        if not table.guest_ids:
            continue
        buyers = [
            gid
            for gid in table.guest_ids
            if gid in guest_map and guest_map[gid].guest_type == "BUYER"
        ]
        if len(buyers) < min_buyers:
            violations.append(
                ConstraintViolation(
                    constraint_id=constraint.id,
                    constraint_type="MIN_BUYERS_PER_TABLE",
                    message=(
                        f"Table has {len(buyers)} buyers, minimum required is {min_buyers}"
                    ),
                    guest_ids=tuple(buyers),
                    table_id=table.table_id,
                )
            )
    return violations

"""Greedy initial seating and must-not-sit-together repair."""

import logging
from collections import defaultdict
from typing import TypeVar

import numpy as np

from seatassign.models import Constraint, Guest, SeatingPlan, TableAssignment

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SeededRandom:
    """Deterministic random source keyed by an explicit integer seed."""

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def randint(self, upper: int) -> int:
        """Uniform integer in [0, upper)."""
        return int(self._rng.integers(0, upper))

    def shuffle(self, items: list[T]) -> list[T]:
        """Return a Fisher-Yates shuffled copy of items."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.randint(i + 1)
            result[i], result[j] = result[j], result[i]
        return result


def table_label(index: int) -> str:
    return f"table_{index + 1}"


def _must_not_partners(constraints: list[Constraint]) -> dict[str, set[str]]:
    """Map each guest id to the ids it must not share a table with."""
    partners: dict[str, set[str]] = defaultdict(set)
    for constraint in constraints:
        if constraint.type != "MUST_NOT_SIT_TOGETHER":
            continue
        for gid in constraint.guest_ids:
            partners[gid].update(other for other in constraint.guest_ids if other != gid)
    return partners


def create_initial_assignment(
    guests: list[Guest],
    constraints: list[Constraint],
    table_count: int,
    seats_per_table: int,
    rng: SeededRandom,
) -> SeatingPlan:
    """
    Build the starting plan.

    Must-sit-together groups are placed first, in input order, at the first
    table with room for the group's known, not yet seated members. Everyone
    else is shuffled and dealt round-robin, skipping tables that hold a
    must-not-sit-together partner.
    A guest with no conflict-free table is forced into the first table with
    a free seat.
    """
    tables = [TableAssignment(table_label(i)) for i in range(table_count)]
    known_ids = {g.id for g in guests}
    placed: set[str] = set()

    for constraint in constraints:
        if constraint.type != "MUST_SIT_TOGETHER":
            continue
        # Ids that match no guest never take a seat
        members = [
            gid
            for gid in dict.fromkeys(constraint.guest_ids)
            if gid in known_ids and gid not in placed
        ]
        if not members:
            continue
        target = next(
            (t for t in tables if len(t.guest_ids) + len(members) <= seats_per_table),
            None,
        )
        if target is None:
            logger.debug("No table has room for group %s; deferring its guests", constraint.id)
            continue
        target.guest_ids.extend(members)
        placed.update(members)

    partners = _must_not_partners(constraints)
    remaining = rng.shuffle([g for g in guests if g.id not in placed])

    table_index = 0
    for guest in remaining:
        conflicts = partners.get(guest.id, set())
        seated = False
        for attempt in range(table_count):
            table = tables[(table_index + attempt) % table_count]
            if len(table.guest_ids) >= seats_per_table:
                continue
            if any(gid in conflicts for gid in table.guest_ids):
                continue
            table.guest_ids.append(guest.id)
            seated = True
            break

        if not seated:
            fallback = next((t for t in tables if len(t.guest_ids) < seats_per_table), None)
            if fallback is not None:
                fallback.guest_ids.append(guest.id)
                logger.debug("Forced %s into %s despite a conflict", guest.id, fallback.table_id)
            else:
                logger.debug("No free seat left for %s", guest.id)

        # The pointer advances by one table per guest, wherever they landed
        table_index = (table_index + 1) % table_count

    return SeatingPlan(tables=tables)


def repair_assignment(
    plan: SeatingPlan,
    constraints: list[Constraint],
    seats_per_table: int,
) -> SeatingPlan:
    """
    Move excess members of must-not-sit-together groups to other tables.

    Returns a new plan. Must-sit-together groups are not reconsidered; a
    member with nowhere to go stays put and is reported by validation.
    """
    repaired = plan.copy()

    for constraint in constraints:
        if constraint.type != "MUST_NOT_SIT_TOGETHER":
            continue
        members = set(constraint.guest_ids)
        for table in repaired.tables:
            conflicting = [gid for gid in table.guest_ids if gid in members]
            while len(conflicting) > 1:
                guest_id = conflicting.pop()
                alternative = next(
                    (
                        t
                        for t in repaired.tables
                        if t is not table
                        and len(t.guest_ids) < seats_per_table
                        and not any(gid in members for gid in t.guest_ids)
                    ),
                    None,
                )
                if alternative is None:
                    logger.debug(
                        "Cannot separate %s from group %s at %s",
                        guest_id,
                        constraint.id,
                        table.table_id,
                    )
                    continue
                table.guest_ids.remove(guest_id)
                alternative.guest_ids.append(guest_id)

    return repaired

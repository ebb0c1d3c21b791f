"""Local-search optimization for seating plans.

Uses a deterministic two-phase approach:

1. Greedy initial assignment that honours hard constraints where it can,
   followed by a repair pass when validation fails.
2. First-improvement local search over pairwise swaps and single moves,
   accepting a candidate only when it validates and strictly raises the
   weighted score.

The result is a local optimum, not a global one. Callers wanting better
plans can raise ``max_iterations`` or use ``optimize_with_restarts``.
"""

import logging
from dataclasses import replace
from enum import Enum

from seatassign.assignment import SeededRandom, create_initial_assignment, repair_assignment
from seatassign.constraints import check_feasibility, validate_constraints
from seatassign.explanations import generate_explanations
from seatassign.models import (
    Constraint,
    Guest,
    ObjectiveWeights,
    OptimizationConfig,
    OptimizationResult,
    PlanExplanations,
    PlanMetrics,
    SeatingPlan,
)
from seatassign.scoring import calculate_all_metrics

logger = logging.getLogger(__name__)


class SearchState(str, Enum):
    INITIALIZING = "initializing"
    SEARCHING = "searching"
    CONVERGED = "converged"
    ITERATION_LIMIT_REACHED = "iteration-limit-reached"
    INFEASIBLE_TERMINATED = "infeasible-terminated"


def optimize(
    guests: list[Guest],
    constraints: list[Constraint],
    weights: ObjectiveWeights,
    config: OptimizationConfig,
) -> OptimizationResult:
    """
    Seat guests at tables, optimizing the weighted objectives.

    Never raises for infeasible input: the result carries ``feasible=False``
    and the reason in ``warnings``.
    """
    state = SearchState.INITIALIZING

    feasibility = check_feasibility(
        len(guests), constraints, config.table_count, config.seats_per_table
    )
    if not feasibility.feasible:
        state = SearchState.INFEASIBLE_TERMINATED
        logger.info("Search %s: %s", state.value, feasibility.reason)
        return _infeasible_result(feasibility.reason or "Infeasible constraints")

    rng = SeededRandom(config.seed)
    plan = create_initial_assignment(
        guests, constraints, config.table_count, config.seats_per_table, rng
    )
    validation = validate_constraints(plan, constraints, guests)
    if not validation.valid:
        logger.info(
            "Initial plan has %d violation(s); running repair", len(validation.violations)
        )
        plan = repair_assignment(plan, constraints, config.seats_per_table)

    metrics = calculate_all_metrics(plan, guests, weights)
    logger.info("Baseline weighted score: %.4f", metrics.weighted)

    state = SearchState.SEARCHING
    iterations = 0
    while state is SearchState.SEARCHING:
        if iterations >= config.max_iterations:
            state = SearchState.ITERATION_LIMIT_REACHED
            break
        iterations += 1

        improvement = _first_improving_swap(plan, metrics, guests, constraints, weights)
        if improvement is None:
            improvement = _first_improving_move(
                plan, metrics, guests, constraints, weights, config.seats_per_table
            )
        if improvement is None:
            state = SearchState.CONVERGED
        else:
            plan, metrics = improvement

    logger.info(
        "Search %s after %d iteration(s); weighted score %.4f",
        state.value,
        iterations,
        metrics.weighted,
    )

    final_validation = validate_constraints(plan, constraints, guests)
    warnings = collect_warnings(guests, plan)
    warnings.extend(
        f"Constraint {v.constraint_id} ({v.constraint_type}) violated: {v.message}"
        for v in final_validation.violations
    )

    return OptimizationResult(
        plan=plan,
        metrics=metrics,
        explanations=generate_explanations(plan, guests, metrics, constraints),
        warnings=warnings,
        feasible=final_validation.valid,
        iterations=iterations,
    )


def optimize_with_restarts(
    guests: list[Guest],
    constraints: list[Constraint],
    weights: ObjectiveWeights,
    config: OptimizationConfig,
    restarts: int = 1,
) -> OptimizationResult:
    """
    Run ``optimize`` once per seed in ``seed .. seed + restarts - 1``.

    Returns the best result, preferring feasible plans and then the higher
    weighted score; ties keep the earliest seed. ``iterations`` is the total
    over every run.
    """
    if restarts < 1:
        raise ValueError(f"restarts must be >= 1, got {restarts}")

    best = optimize(guests, constraints, weights, config)
    total_iterations = best.iterations
    for offset in range(1, restarts):
        result = optimize(guests, constraints, weights, replace(config, seed=config.seed + offset))
        total_iterations += result.iterations
        if (result.feasible, result.metrics.weighted) > (best.feasible, best.metrics.weighted):
            best = result
            logger.debug(
                "Restart with seed %d is the new best (%.4f)",
                config.seed + offset,
                result.metrics.weighted,
            )

    best.iterations = total_iterations
    return best


def _accept(
    candidate: SeatingPlan,
    metrics: PlanMetrics,
    guests: list[Guest],
    constraints: list[Constraint],
    weights: ObjectiveWeights,
) -> PlanMetrics | None:
    """Return the candidate's metrics if it validates and strictly improves."""
    if not validate_constraints(candidate, constraints, guests).valid:
        return None
    candidate_metrics = calculate_all_metrics(candidate, guests, weights)
    if candidate_metrics.weighted > metrics.weighted:
        return candidate_metrics
    return None


def _first_improving_swap(
    plan: SeatingPlan,
    metrics: PlanMetrics,
    guests: list[Guest],
    constraints: list[Constraint],
    weights: ObjectiveWeights,
) -> tuple[SeatingPlan, PlanMetrics] | None:
    tables = plan.tables
    for t1 in range(len(tables)):
        for t2 in range(t1 + 1, len(tables)):
            for g1 in range(len(tables[t1].guest_ids)):
                for g2 in range(len(tables[t2].guest_ids)):
                    candidate = swap_guests(plan, t1, g1, t2, g2)
                    accepted = _accept(candidate, metrics, guests, constraints, weights)
                    if accepted is not None:
                        logger.debug(
                            "Swapped %s and %s (%.4f)",
                            tables[t1].guest_ids[g1],
                            tables[t2].guest_ids[g2],
                            accepted.weighted,
                        )
                        return candidate, accepted
    return None


def _first_improving_move(
    plan: SeatingPlan,
    metrics: PlanMetrics,
    guests: list[Guest],
    constraints: list[Constraint],
    weights: ObjectiveWeights,
    seats_per_table: int,
) -> tuple[SeatingPlan, PlanMetrics] | None:
    tables = plan.tables
    for t1 in range(len(tables)):
        for t2 in range(len(tables)):
            if t1 == t2 or len(tables[t2].guest_ids) >= seats_per_table:
                continue
            for g in range(len(tables[t1].guest_ids)):
                candidate = move_guest(plan, t1, g, t2)
                accepted = _accept(candidate, metrics, guests, constraints, weights)
                if accepted is not None:
                    logger.debug(
                        "Moved %s to %s (%.4f)",
                        tables[t1].guest_ids[g],
                        tables[t2].table_id,
                        accepted.weighted,
                    )
                    return candidate, accepted
    return None


def swap_guests(
    plan: SeatingPlan,
    table_index1: int,
    guest_index1: int,
    table_index2: int,
    guest_index2: int,
) -> SeatingPlan:
    """Return a new plan with two guests exchanging seats."""
    new_plan = plan.copy()
    seats1 = new_plan.tables[table_index1].guest_ids
    seats2 = new_plan.tables[table_index2].guest_ids
    seats1[guest_index1], seats2[guest_index2] = seats2[guest_index2], seats1[guest_index1]
    return new_plan


def move_guest(
    plan: SeatingPlan,
    from_table_index: int,
    guest_index: int,
    to_table_index: int,
) -> SeatingPlan:
    """Return a new plan with one guest moved to the end of another table."""
    new_plan = plan.copy()
    guest_id = new_plan.tables[from_table_index].guest_ids.pop(guest_index)
    new_plan.tables[to_table_index].guest_ids.append(guest_id)
    return new_plan


def collect_warnings(guests: list[Guest], plan: SeatingPlan) -> list[str]:
    """Advisories about missing guest data and unseated guests."""
    warnings = [f'Guest "{g.name}" has no company specified' for g in guests if not g.company]

    seated = plan.seated_guest_ids()
    warnings.extend(
        f'Guest "{g.name}" was not assigned to any table' for g in guests if g.id not in seated
    )
    return warnings


def _infeasible_result(reason: str) -> OptimizationResult:
    return OptimizationResult(
        plan=SeatingPlan(tables=[]),
        metrics=PlanMetrics(),
        explanations=PlanExplanations(
            per_table={},
            overall=f"Unable to create seating plan: {reason}",
            reason_codes=[],
        ),
        warnings=[reason],
        feasible=False,
        iterations=0,
    )

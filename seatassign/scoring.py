"""Objective scoring for seating plans.

Every scorer is pure and independent of table order. Missing company,
department or seniority data is treated as an absent dimension rather than
as a shared value.
"""

from collections import Counter

import numpy as np

from seatassign.models import (
    SENIORITY_LEVELS,
    Guest,
    ObjectiveWeights,
    PlanMetrics,
    SeatingPlan,
)

# Novelty penalties for a co-seated pair
SAME_COMPANY_PENALTY = 0.4
SAME_DEPARTMENT_PENALTY = 0.3
KNOWN_CONNECTION_PENALTY = 0.3


def _table_guests(plan: SeatingPlan, guests: list[Guest]) -> list[list[Guest]]:
    """Resolve each non-empty table to its guest records, skipping unknown ids."""
    guest_map = {g.id: g for g in guests}
    resolved: list[list[Guest]] = []
    for table in plan.tables:
        table_guests = [guest_map[gid] for gid in table.guest_ids if gid in guest_map]
        if table_guests:
            resolved.append(table_guests)
    return resolved


def _pair_novelty(g1: Guest, g2: Guest) -> float:
    score = 1.0
    if g1.company and g2.company and g1.company == g2.company:
        score -= SAME_COMPANY_PENALTY
    if g1.department and g2.department and g1.department == g2.department:
        score -= SAME_DEPARTMENT_PENALTY
    if g2.id in g1.known_connections or g1.id in g2.known_connections:
        score -= KNOWN_CONNECTION_PENALTY
    return max(0.0, score)


def calculate_novelty_score(plan: SeatingPlan, guests: list[Guest]) -> float:
    """
    Objective A: new professional connections.

    Mean pair score over every co-seated pair; 1.0 when nobody shares a table.
    """
    total = 0.0
    pairs = 0
    for table_guests in _table_guests(plan, guests):
        for i, g1 in enumerate(table_guests):
            for g2 in table_guests[i + 1 :]:
                total += _pair_novelty(g1, g2)
                pairs += 1
    return total / pairs if pairs > 0 else 1.0


def calculate_diversity_score(plan: SeatingPlan, guests: list[Guest]) -> float:
    """Objective B: distinct companies and departments relative to table size."""
    tables = _table_guests(plan, guests)
    if not tables:
        return 1.0

    total = 0.0
    for table_guests in tables:
        size = len(table_guests)
        companies = {g.company for g in table_guests if g.company}
        departments = {g.department for g in table_guests if g.department}
        total += (len(companies) / size + len(departments) / size) / 2
    return total / len(tables)


def _seniority_evenness(table_guests: list[Guest]) -> float:
    counts = Counter(g.seniority for g in table_guests if g.seniority)
    if not counts:
        return 0.5  # no seniority data

    ideal = sum(counts.values()) / len(SENIORITY_LEVELS)
    terms = [max(0.0, 1 - abs(count - ideal) / max(1.0, ideal)) for count in counts.values()]
    return sum(terms) / len(terms)


def calculate_balance_score(plan: SeatingPlan, guests: list[Guest]) -> float:
    """Objective C: even seniority spread and more than one guest type per table."""
    tables = _table_guests(plan, guests)
    if not tables:
        return 1.0

    total = 0.0
    for table_guests in tables:
        type_score = 1.0 if len({g.guest_type for g in table_guests}) > 1 else 0.5
        total += (_seniority_evenness(table_guests) + type_score) / 2
    return total / len(tables)


def has_competing_sellers(table_guests: list[Guest]) -> bool:
    """True when two or more sellers at a table share a company."""
    seller_companies = [g.company for g in table_guests if g.guest_type == "SELLER" and g.company]
    return len(seller_companies) > len(set(seller_companies))


def _table_transaction(table_guests: list[Guest]) -> float:
    types = Counter(g.guest_type for g in table_guests)
    buyers, sellers, catalysts = types["BUYER"], types["SELLER"], types["CATALYST"]

    score = 0.5
    if buyers and sellers:
        score += 0.4
        score += 0.2 * (min(buyers, sellers) / max(buyers, sellers))
    if catalysts and (buyers or sellers):
        score += 0.2
    if has_competing_sellers(table_guests):
        score -= 0.3
    if (sellers and not buyers) or (buyers and not sellers):
        score -= 0.2
    return min(1.0, max(0.0, score))


def calculate_transaction_score(plan: SeatingPlan, guests: list[Guest]) -> float:
    """Objective D: buyer/seller proximity without competing sellers."""
    tables = _table_guests(plan, guests)
    if not tables:
        return 0.5
    return sum(_table_transaction(t) for t in tables) / len(tables)


def calculate_weighted_score(
    novelty: float,
    diversity: float,
    balance: float,
    transaction: float,
    weights: ObjectiveWeights,
) -> float:
    """Dot product of the four scores with the weights, without renormalization."""
    scores = np.array([novelty, diversity, balance, transaction], dtype=float)
    return float(np.dot(scores, np.array(weights.as_tuple(), dtype=float)))


def calculate_all_metrics(
    plan: SeatingPlan,
    guests: list[Guest],
    weights: ObjectiveWeights,
) -> PlanMetrics:
    """Compute a fresh PlanMetrics for a plan snapshot."""
    novelty = calculate_novelty_score(plan, guests)
    diversity = calculate_diversity_score(plan, guests)
    balance = calculate_balance_score(plan, guests)
    transaction = calculate_transaction_score(plan, guests)
    return PlanMetrics(
        novelty=novelty,
        diversity=diversity,
        balance=balance,
        transaction=transaction,
        weighted=calculate_weighted_score(novelty, diversity, balance, transaction, weights),
    )

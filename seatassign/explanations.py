"""Reason codes and text summaries for finished seating plans.

Every statement produced here is derived from the plan and its metrics.
Richer narrative is left to downstream consumers of the reason codes.
"""

from collections import Counter

from seatassign.models import (
    Constraint,
    Guest,
    PlanExplanations,
    PlanMetrics,
    ReasonCode,
    SeatingPlan,
)
from seatassign.scoring import has_competing_sellers

# Objective labels used in the overall summary, in tie-break order
OBJECTIVE_LABELS: dict[str, str] = {
    "novelty": "new connections",
    "diversity": "cross-department mixing",
    "balance": "balanced conversations",
    "transaction": "business opportunities",
}

STRONG_OBJECTIVE_THRESHOLD = 0.7
SAME_COMPANY_THRESHOLD = 3


def generate_explanations(
    plan: SeatingPlan,
    guests: list[Guest],
    metrics: PlanMetrics,
    constraints: list[Constraint],
) -> PlanExplanations:
    """Generate per-table explanations, reason codes and an overall summary."""
    guest_map = {g.id: g for g in guests}
    reason_codes: list[ReasonCode] = []
    per_table: dict[str, list[str]] = {}

    for table in plan.tables:
        table_guests = [guest_map[gid] for gid in table.guest_ids if gid in guest_map]
        if not table_guests:
            continue

        codes = _table_reason_codes(table.table_id, tuple(table.guest_ids), table_guests)
        codes.extend(_group_reason_codes(table.table_id, table.guest_ids, constraints, guest_map))

        per_table[table.table_id] = [code.description for code in codes]
        reason_codes.extend(codes)

    overall = _overall_summary(metrics, plan, guests, reason_codes)
    return PlanExplanations(per_table=per_table, overall=overall, reason_codes=reason_codes)


def _table_reason_codes(
    table_id: str,
    guest_ids: tuple[str, ...],
    table_guests: list[Guest],
) -> list[ReasonCode]:
    codes: list[ReasonCode] = []

    company_counts = Counter(g.company for g in table_guests if g.company)
    if len(company_counts) > 1:
        codes.append(
            ReasonCode(
                code="COMPANY_DIVERSITY",
                table_id=table_id,
                guest_ids=guest_ids,
                description=(
                    f"Cross-company networking: {len(company_counts)} "
                    "different companies represented"
                ),
                impact="positive",
                objective="diversity",
            )
        )
    for company, count in company_counts.items():
        if count >= SAME_COMPANY_THRESHOLD:
            codes.append(
                ReasonCode(
                    code="SAME_COMPANY",
                    table_id=table_id,
                    guest_ids=tuple(g.id for g in table_guests if g.company == company),
                    description=f"Same company cluster: {count} guests from {company}",
                    impact="negative",
                    objective="novelty",
                )
            )

    departments = {g.department for g in table_guests if g.department}
    if len(departments) > 2:
        codes.append(
            ReasonCode(
                code="DEPARTMENT_DIVERSITY",
                table_id=table_id,
                guest_ids=guest_ids,
                description=f"Department mix: {len(departments)} different departments",
                impact="positive",
                objective="diversity",
            )
        )

    levels = {g.seniority for g in table_guests if g.seniority}
    if len(levels) > 2:
        codes.append(
            ReasonCode(
                code="SENIORITY_MIX",
                table_id=table_id,
                guest_ids=guest_ids,
                description=f"Balanced seniority: {len(levels)} experience levels",
                impact="positive",
                objective="balance",
            )
        )

    buyers = [g for g in table_guests if g.guest_type == "BUYER"]
    sellers = [g for g in table_guests if g.guest_type == "SELLER"]
    if buyers and sellers:
        codes.append(
            ReasonCode(
                code="BUYER_SELLER_MIX",
                table_id=table_id,
                guest_ids=tuple(g.id for g in buyers + sellers),
                description=(
                    f"Business opportunity: {len(buyers)} buyer(s) and {len(sellers)} seller(s)"
                ),
                impact="positive",
                objective="transaction",
            )
        )

    for catalyst in (g for g in table_guests if g.guest_type == "CATALYST"):
        codes.append(
            ReasonCode(
                code="CATALYST_PRESENT",
                table_id=table_id,
                guest_ids=(catalyst.id,),
                description=f"Conversation catalyst: {catalyst.name}",
                impact="positive",
                objective="balance",
            )
        )

    if has_competing_sellers(table_guests):
        codes.append(
            ReasonCode(
                code="COMPETING_SELLERS",
                table_id=table_id,
                guest_ids=tuple(g.id for g in sellers),
                description="Note: Multiple sellers from the same company",
                impact="negative",
                objective="transaction",
            )
        )

    return codes


def _group_reason_codes(
    table_id: str,
    seated: list[str],
    constraints: list[Constraint],
    guest_map: dict[str, Guest],
) -> list[ReasonCode]:
    codes: list[ReasonCode] = []
    for constraint in constraints:
        if constraint.type != "MUST_SIT_TOGETHER" or not constraint.guest_ids:
            continue
        if not all(gid in seated for gid in constraint.guest_ids):
            continue
        names = ", ".join(guest_map[gid].name for gid in constraint.guest_ids if gid in guest_map)
        codes.append(
            ReasonCode(
                code="MUST_SIT_TOGETHER_SATISFIED",
                table_id=table_id,
                guest_ids=tuple(constraint.guest_ids),
                description=f"Grouped by request: {names}",
                impact="neutral",
            )
        )
    return codes


def _overall_summary(
    metrics: PlanMetrics,
    plan: SeatingPlan,
    guests: list[Guest],
    reason_codes: list[ReasonCode],
) -> str:
    parts = [f"Overall optimization score: {metrics.weighted * 100:.1f}%"]

    scores = [(getattr(metrics, name), label) for name, label in OBJECTIVE_LABELS.items()]
    best_score, best_label = max(scores, key=lambda s: s[0])
    if best_score >= STRONG_OBJECTIVE_THRESHOLD:
        parts.append(f"Strong performance in {best_label} ({best_score * 100:.0f}%)")

    positive = sum(1 for r in reason_codes if r.impact == "positive")
    negative = sum(1 for r in reason_codes if r.impact == "negative")
    if positive > negative * 2:
        parts.append("Well-balanced tables with good networking potential")
    elif negative > positive:
        parts.append("Some trade-offs were made to satisfy hard constraints")

    parts.append(f"{len(guests)} guests across {len(plan.occupied_tables())} tables")
    return ". ".join(parts) + "."

"""Output formatting for seatassign."""

import csv
import io

from seatassign.models import Guest, OptimizationResult, ValidationResult


def format_results(result: OptimizationResult, guests: list[Guest]) -> str:
    """Format optimization results for display."""
    lines: list[str] = []
    guest_by_id = {g.id: g for g in guests}
    metrics = result.metrics

    if not result.plan.occupied_tables():
        lines.append("No seating plan could be made.")
        lines.append(result.explanations.overall)
    else:
        lines.append("=== Seating Plan ===")
        lines.append(f"Weighted score: {metrics.weighted:.3f}")
        lines.append(
            f"Novelty {metrics.novelty:.2f} | Diversity {metrics.diversity:.2f} | "
            f"Balance {metrics.balance:.2f} | Transaction {metrics.transaction:.2f}"
        )
        status = "all constraints satisfied" if result.feasible else "constraints violated"
        lines.append(f"Iterations: {result.iterations} ({status})")
        lines.append("")

        for table in result.plan.occupied_tables():
            lines.append(f"--- {table.table_id} ({len(table.guest_ids)} guests) ---")
            for guest_id in table.guest_ids:
                guest = guest_by_id.get(guest_id)
                if guest is None:
                    lines.append(f"    - {guest_id}")
                    continue
                company = guest.company or "no company"
                lines.append(f"    - {guest.name} ({company}, {guest.guest_type.lower()})")
            for explanation in result.explanations.per_table.get(table.table_id, []):
                lines.append(f"  * {explanation}")
            lines.append("")

        lines.append("=== Summary ===")
        lines.append(result.explanations.overall)

    if result.warnings:
        lines.append("")
        lines.append("=== Warnings ===")
        lines.extend(f"  - {warning}" for warning in result.warnings)

    return "\n".join(lines)


def format_plan_csv(result: OptimizationResult, guests: list[Guest]) -> str:
    """Format the seating plan as CSV for export, one row per seated guest."""
    guest_by_id = {g.id: g for g in guests}
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["table", "guest_id", "name", "company", "guest_type"])

    for table in result.plan.tables:
        for guest_id in table.guest_ids:
            guest = guest_by_id.get(guest_id)
            writer.writerow(
                [
                    table.table_id,
                    guest_id,
                    guest.name if guest else "",
                    (guest.company or "") if guest else "",
                    guest.guest_type if guest else "",
                ]
            )

    return buffer.getvalue().rstrip("\n")


def format_violations(validation: ValidationResult) -> str:
    if validation.valid:
        return "No constraint violations."
    lines = []
    for v in validation.violations:
        where = f" at {v.table_id}" if v.table_id else ""
        lines.append(
            f"{v.constraint_id} [{v.constraint_type}]{where}: {v.message} "
            f"({', '.join(v.guest_ids)})"
        )
    return "\n".join(lines)

"""CSV and YAML parsing for seatassign."""

import csv
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from seatassign.models import (
    CONSTRAINT_TYPES,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_SEATS_PER_TABLE,
    DEFAULT_SEED,
    DEFAULT_TABLE_COUNT,
    MAX_SEATS_PER_TABLE,
    MAX_TABLE_COUNT,
    MIN_SEATS_PER_TABLE,
    Constraint,
    Guest,
    ObjectiveWeights,
    OptimizationConfig,
)
from seatassign.normalize import normalize_column_name, parse_guest_type, parse_seniority

LIST_SEPARATOR = ";"


@dataclass
class EventSettings:
    """Everything an event file describes besides the guest list."""

    config: OptimizationConfig = field(default_factory=OptimizationConfig)
    weights: ObjectiveWeights = field(default_factory=ObjectiveWeights)
    constraints: list[Constraint] = field(default_factory=list)


def _split_list(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(LIST_SEPARATOR) if part.strip())


def parse_guests_csv(csv_path: Path) -> list[Guest]:
    """
    Parse a guest list CSV.

    Headers are matched through COLUMN_ALIASES; unknown columns are ignored.
    Rows without a name are skipped. Guests without an id column get
    ``guest_<row>`` ids.
    """
    guests: list[Guest] = []
    seen_ids: set[str] = set()

    with csv_path.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row_number, raw_row in enumerate(reader, start=1):
            row: dict[str, str] = {}
            for header, value in raw_row.items():
                if header is None:
                    continue  # overflow cells on a ragged row
                column = normalize_column_name(header)
                if column:
                    row[column] = (value or "").strip()

            name = row.get("name", "")
            if not name:
                continue

            guest_id = row.get("id") or f"guest_{row_number}"
            if guest_id in seen_ids:
                raise ValueError(f"Duplicate guest id {guest_id!r} on row {row_number}")
            seen_ids.add(guest_id)

            guests.append(
                Guest(
                    id=guest_id,
                    name=name,
                    guest_type=parse_guest_type(row.get("guest_type")),
                    company=row.get("company") or None,
                    department=row.get("department") or None,
                    job_title=row.get("job_title") or None,
                    seniority=parse_seniority(row.get("seniority")),
                    tags=_split_list(row.get("tags", "")),
                    known_connections=_split_list(row.get("known_connections", "")),
                )
            )

    return guests


def _parse_constraint(index: int, entry: dict) -> Constraint:
    constraint_type = str(entry.get("type", "")).strip().upper()
    if constraint_type not in CONSTRAINT_TYPES:
        raise ValueError(f"Unknown constraint type {entry.get('type')!r} in constraint {index + 1}")

    guest_ids = entry.get("guests") or []
    if isinstance(guest_ids, str):
        guest_ids = _split_list(guest_ids)

    value = entry.get("value")
    priority = entry.get("priority")
    return Constraint(
        id=str(entry.get("id", f"constraint_{index + 1}")),
        type=constraint_type,  # type: ignore[arg-type]
        guest_ids=tuple(str(gid) for gid in guest_ids),
        value=int(value) if value is not None else None,
        priority=int(priority) if priority is not None else None,
    )


def _parse_weights(data: dict | None) -> ObjectiveWeights:
    data = data or {}
    defaults = ObjectiveWeights()
    weights = ObjectiveWeights(
        novelty=float(data.get("novelty", defaults.novelty)),
        diversity=float(data.get("diversity", defaults.diversity)),
        balance=float(data.get("balance", defaults.balance)),
        transaction=float(data.get("transaction", defaults.transaction)),
    )
    if any(w < 0 for w in weights.as_tuple()):
        raise ValueError(f"Objective weights must be non-negative: {weights}")
    return weights


def check_table_limits(table_count: int, seats_per_table: int) -> None:
    """Raise ValueError when the room geometry is outside the supported range."""
    if not 1 <= table_count <= MAX_TABLE_COUNT:
        raise ValueError(f"tables must be between 1 and {MAX_TABLE_COUNT}, got {table_count}")
    if not MIN_SEATS_PER_TABLE <= seats_per_table <= MAX_SEATS_PER_TABLE:
        raise ValueError(
            f"seats_per_table must be between {MIN_SEATS_PER_TABLE} and "
            f"{MAX_SEATS_PER_TABLE}, got {seats_per_table}"
        )


def parse_event_yaml(yaml_path: Path) -> EventSettings:
    """Parse an event YAML file into config, weights and constraints."""
    with yaml_path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        return EventSettings()
    if not isinstance(data, dict):
        raise ValueError("Event file must contain a mapping at the top level")

    table_count = int(data.get("tables", DEFAULT_TABLE_COUNT))
    seats_per_table = int(data.get("seats_per_table", DEFAULT_SEATS_PER_TABLE))
    check_table_limits(table_count, seats_per_table)

    config = OptimizationConfig(
        table_count=table_count,
        seats_per_table=seats_per_table,
        max_iterations=int(data.get("max_iterations", DEFAULT_MAX_ITERATIONS)),
        seed=int(data.get("seed", DEFAULT_SEED)),
    )
    constraints = [
        _parse_constraint(i, entry) for i, entry in enumerate(data.get("constraints") or [])
    ]

    return EventSettings(
        config=config,
        weights=_parse_weights(data.get("weights")),
        constraints=constraints,
    )


def create_event_template(output_path: Path, guests: list[Guest]):
    """Create a starter event YAML file for the given guest list."""
    sample_ids = [g.id for g in guests[:2]] or ["guest_1", "guest_2"]
    template = {
        "tables": DEFAULT_TABLE_COUNT,
        "seats_per_table": DEFAULT_SEATS_PER_TABLE,
        "max_iterations": DEFAULT_MAX_ITERATIONS,
        "seed": DEFAULT_SEED,
        "weights": {"novelty": 0.25, "diversity": 0.25, "balance": 0.25, "transaction": 0.25},
        "constraints": [
            {
                "id": "keep_apart",
                "type": "MUST_NOT_SIT_TOGETHER",
                "guests": sample_ids,
            }
        ],
    }

    header = f"""\
# Event file for seatassign
# Describe the room and the seating rules here.
#
# Guest ids in this list: {", ".join(g.id for g in guests)}
#
# Constraint types:
#   - MUST_SIT_TOGETHER: listed guests share one table
#   - MUST_NOT_SIT_TOGETHER: listed guests sit at different tables
#   - MAX_SELLERS_PER_TABLE: at most `value` sellers at any table (default 2)
#   - MIN_BUYERS_PER_TABLE: at least `value` buyers at every occupied table (default 1)
#
# Weights are rescaled to sum to 1 before optimizing.

"""

    with output_path.open("w", encoding="utf-8") as f:
        f.write(header)
        yaml.dump(template, f, default_flow_style=False, sort_keys=False)

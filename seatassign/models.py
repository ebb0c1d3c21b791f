"""Data models for seatassign."""

from dataclasses import dataclass, field
from typing import Literal

Seniority = Literal["JUNIOR", "MID", "SENIOR", "EXECUTIVE"]
GuestType = Literal["BUYER", "SELLER", "NEUTRAL", "CATALYST"]
ConstraintType = Literal[
    "MUST_SIT_TOGETHER",
    "MUST_NOT_SIT_TOGETHER",
    "MAX_SELLERS_PER_TABLE",
    "MIN_BUYERS_PER_TABLE",
]
Impact = Literal["positive", "negative", "neutral"]
Objective = Literal["novelty", "diversity", "balance", "transaction"]

SENIORITY_LEVELS: tuple[str, ...] = ("JUNIOR", "MID", "SENIOR", "EXECUTIVE")
GUEST_TYPES: tuple[str, ...] = ("BUYER", "SELLER", "NEUTRAL", "CATALYST")
CONSTRAINT_TYPES: tuple[str, ...] = (
    "MUST_SIT_TOGETHER",
    "MUST_NOT_SIT_TOGETHER",
    "MAX_SELLERS_PER_TABLE",
    "MIN_BUYERS_PER_TABLE",
)

DEFAULT_TABLE_COUNT = 10
DEFAULT_SEATS_PER_TABLE = 8
DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_SEED = 42
MAX_TABLE_COUNT = 100
MIN_SEATS_PER_TABLE = 2
MAX_SEATS_PER_TABLE = 20

# Thresholds used when a numeric constraint carries no value
DEFAULT_MAX_SELLERS = 2
DEFAULT_MIN_BUYERS = 1


@dataclass(frozen=True)
class Guest:
    """An event guest, immutable for the duration of one optimization run."""

    id: str
    name: str
    guest_type: GuestType = "NEUTRAL"
    company: str | None = None
    department: str | None = None
    job_title: str | None = None
    seniority: Seniority | None = None
    tags: tuple[str, ...] = ()
    known_connections: tuple[str, ...] = ()
    # known_connections is interpreted bidirectionally by the scorers


@dataclass(frozen=True)
class Constraint:
    """A placement rule over a set of guests."""

    id: str
    type: ConstraintType
    guest_ids: tuple[str, ...] = ()
    value: int | None = None  # threshold for the per-table numeric kinds
    priority: int | None = None  # informational only


@dataclass(frozen=True)
class ObjectiveWeights:
    """Relative importance of the four soft objectives, consumed as given."""

    novelty: float = 0.25
    diversity: float = 0.25
    balance: float = 0.25
    transaction: float = 0.25

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.novelty, self.diversity, self.balance, self.transaction)


@dataclass
class TableAssignment:
    """The ordered guests seated at one table."""

    table_id: str
    guest_ids: list[str] = field(default_factory=list)


@dataclass
class SeatingPlan:
    """All tables of one run. A guest id appears in at most one table."""

    tables: list[TableAssignment] = field(default_factory=list)

    def copy(self) -> "SeatingPlan":
        """Return an owned snapshot; mutating it leaves this plan untouched."""
        return SeatingPlan(
            tables=[TableAssignment(t.table_id, list(t.guest_ids)) for t in self.tables]
        )

    def guest_to_table(self) -> dict[str, str]:
        return {gid: t.table_id for t in self.tables for gid in t.guest_ids}

    def seated_guest_ids(self) -> set[str]:
        return {gid for t in self.tables for gid in t.guest_ids}

    def occupied_tables(self) -> list[TableAssignment]:
        return [t for t in self.tables if t.guest_ids]


@dataclass(frozen=True)
class PlanMetrics:
    """Objective scores in [0, 1] plus their weighted composite."""

    novelty: float = 0.0
    diversity: float = 0.0
    balance: float = 0.0
    transaction: float = 0.0
    weighted: float = 0.0


@dataclass(frozen=True)
class ReasonCode:
    """A structured explanation unit attached to a table."""

    code: str
    table_id: str
    guest_ids: tuple[str, ...]
    description: str
    impact: Impact
    objective: Objective | None = None


@dataclass
class PlanExplanations:
    """Per-table explanation lines, reason codes and an overall summary."""

    per_table: dict[str, list[str]] = field(default_factory=dict)
    overall: str = ""
    reason_codes: list[ReasonCode] = field(default_factory=list)


@dataclass(frozen=True)
class ConstraintViolation:
    """A single hard-rule violation found by the validator."""

    constraint_id: str
    constraint_type: ConstraintType
    message: str
    guest_ids: tuple[str, ...]
    table_id: str | None = None


@dataclass
class ValidationResult:
    valid: bool
    violations: list[ConstraintViolation] = field(default_factory=list)


@dataclass(frozen=True)
class FeasibilityResult:
    feasible: bool
    reason: str | None = None


@dataclass(frozen=True)
class OptimizationConfig:
    """Table geometry and search budget for one optimization call."""

    table_count: int = DEFAULT_TABLE_COUNT
    seats_per_table: int = DEFAULT_SEATS_PER_TABLE
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    seed: int = DEFAULT_SEED

    def __post_init__(self) -> None:
        if self.table_count < 1:
            raise ValueError(f"table_count must be positive, got {self.table_count}")
        if self.seats_per_table < 1:
            raise ValueError(f"seats_per_table must be positive, got {self.seats_per_table}")
        if self.max_iterations < 0:
            raise ValueError(f"max_iterations must be >= 0, got {self.max_iterations}")


@dataclass
class OptimizationResult:
    """Result of the optimization."""

    plan: SeatingPlan
    metrics: PlanMetrics
    explanations: PlanExplanations
    warnings: list[str] = field(default_factory=list)
    feasible: bool = False  # whether every hard constraint is satisfied
    iterations: int = 0

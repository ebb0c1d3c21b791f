"""Normalization of weights and raw guest fields for seatassign."""

from seatassign.models import GUEST_TYPES, SENIORITY_LEVELS, GuestType, ObjectiveWeights, Seniority

SENIORITY_ALIASES: dict[str, Seniority] = {
    "JR": "JUNIOR",
    "JUNIOR": "JUNIOR",
    "ENTRY": "JUNIOR",
    "ENTRY LEVEL": "JUNIOR",
    "MID": "MID",
    "MIDDLE": "MID",
    "MID-LEVEL": "MID",
    "MIDLEVEL": "MID",
    "MANAGER": "MID",
    "SR": "SENIOR",
    "SENIOR": "SENIOR",
    "LEAD": "SENIOR",
    "PRINCIPAL": "SENIOR",
    "DIRECTOR": "SENIOR",
    "EXEC": "EXECUTIVE",
    "EXECUTIVE": "EXECUTIVE",
    "C-LEVEL": "EXECUTIVE",
    "CLEVEL": "EXECUTIVE",
    "VP": "EXECUTIVE",
}

GUEST_TYPE_ALIASES: dict[str, GuestType] = {
    "BUY": "BUYER",
    "CUSTOMER": "BUYER",
    "CLIENT": "BUYER",
    "PROSPECT": "BUYER",
    "SELL": "SELLER",
    "VENDOR": "SELLER",
    "SUPPLIER": "SELLER",
    "SALES": "SELLER",
    "ATTENDEE": "NEUTRAL",
    "GUEST": "NEUTRAL",
    "HOST": "CATALYST",
    "FACILITATOR": "CATALYST",
    "MODERATOR": "CATALYST",
}

# Case-insensitive CSV header -> Guest field
COLUMN_ALIASES: dict[str, str] = {
    "id": "id",
    "guest id": "id",
    "name": "name",
    "full name": "name",
    "guest name": "name",
    "attendee": "name",
    "email": "email",
    "email address": "email",
    "e-mail": "email",
    "company": "company",
    "organization": "company",
    "org": "company",
    "employer": "company",
    "firm": "company",
    "department": "department",
    "dept": "department",
    "team": "department",
    "division": "department",
    "title": "job_title",
    "job title": "job_title",
    "jobtitle": "job_title",
    "role": "job_title",
    "position": "job_title",
    "seniority": "seniority",
    "level": "seniority",
    "experience level": "seniority",
    "type": "guest_type",
    "guest type": "guest_type",
    "guesttype": "guest_type",
    "category": "guest_type",
    "tags": "tags",
    "known connections": "known_connections",
    "known_connections": "known_connections",
    "connections": "known_connections",
    "notes": "notes",
    "comments": "notes",
    "remarks": "notes",
}


def normalize_weights(weights: ObjectiveWeights) -> ObjectiveWeights:
    """
    Rescale weights so they sum to 1.0.

    All-zero weights become an equal split. The optimizer consumes weights as
    given, so callers normalize user input with this first.
    """
    total = sum(weights.as_tuple())
    if total == 0:
        return ObjectiveWeights(0.25, 0.25, 0.25, 0.25)
    return ObjectiveWeights(
        novelty=weights.novelty / total,
        diversity=weights.diversity / total,
        balance=weights.balance / total,
        transaction=weights.transaction / total,
    )


def parse_seniority(value: str | None) -> Seniority | None:
    """Map a free-text seniority to a level, or None when unrecognised."""
    if not value:
        return None
    normalized = value.strip().upper()
    if normalized in SENIORITY_LEVELS:
        return normalized  # type: ignore[return-value]
    return SENIORITY_ALIASES.get(normalized)


def parse_guest_type(value: str | None) -> GuestType:
    """Map a free-text guest type to a role, defaulting to NEUTRAL."""
    if not value:
        return "NEUTRAL"
    normalized = value.strip().upper()
    if normalized in GUEST_TYPES:
        return normalized  # type: ignore[return-value]
    return GUEST_TYPE_ALIASES.get(normalized, "NEUTRAL")


def normalize_column_name(header: str) -> str | None:
    return COLUMN_ALIASES.get(header.strip().lower())

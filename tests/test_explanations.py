from __future__ import annotations

from seatassign.explanations import generate_explanations
from seatassign.models import Constraint, PlanMetrics


def _codes(explanations) -> list[str]:
    return [r.code for r in explanations.reason_codes]


def test_well_mixed_table_gets_positive_codes(make_guest, make_plan) -> None:
    guests = [
        make_guest("b", "BUYER", company="Acme", department="Sales", seniority="JUNIOR"),
        make_guest("s", "SELLER", company="Globex", department="Engineering", seniority="SENIOR"),
        make_guest(
            "c", "CATALYST", name="Cat", company="Initech", department="Ops", seniority="EXECUTIVE"
        ),
    ]
    explanations = generate_explanations(
        make_plan(["b", "s", "c"]), guests, PlanMetrics(), []
    )

    assert _codes(explanations) == [
        "COMPANY_DIVERSITY",
        "DEPARTMENT_DIVERSITY",
        "SENIORITY_MIX",
        "BUYER_SELLER_MIX",
        "CATALYST_PRESENT",
    ]
    assert all(r.impact == "positive" for r in explanations.reason_codes)
    assert explanations.per_table["table_1"][0] == (
        "Cross-company networking: 3 different companies represented"
    )
    assert "Conversation catalyst: Cat" in explanations.per_table["table_1"]


def test_one_catalyst_code_per_catalyst(make_guest, make_plan) -> None:
    guests = [make_guest("c1", "CATALYST"), make_guest("c2", "CATALYST")]
    explanations = generate_explanations(make_plan(["c1", "c2"]), guests, PlanMetrics(), [])
    catalysts = [r for r in explanations.reason_codes if r.code == "CATALYST_PRESENT"]
    assert [r.guest_ids for r in catalysts] == [("c1",), ("c2",)]


def test_company_cluster_and_competing_sellers_are_negative(make_guest, make_plan) -> None:
    guests = [make_guest(f"s{i}", "SELLER", company="Acme") for i in range(3)]
    explanations = generate_explanations(
        make_plan(["s0", "s1", "s2"]), guests, PlanMetrics(), []
    )

    assert _codes(explanations) == ["SAME_COMPANY", "COMPETING_SELLERS"]
    assert all(r.impact == "negative" for r in explanations.reason_codes)
    assert "Some trade-offs were made to satisfy hard constraints" in explanations.overall


def test_satisfied_group_is_neutral(make_guest, make_plan) -> None:
    guests = [make_guest("a", name="Ann"), make_guest("b", name="Ben"), make_guest("c")]
    group = Constraint("pair", "MUST_SIT_TOGETHER", ("a", "b"))

    together = generate_explanations(make_plan(["a", "b"], ["c"]), guests, PlanMetrics(), [group])
    apart = generate_explanations(make_plan(["a"], ["b", "c"]), guests, PlanMetrics(), [group])

    [code] = together.reason_codes
    assert code.code == "MUST_SIT_TOGETHER_SATISFIED"
    assert code.impact == "neutral"
    assert code.description == "Grouped by request: Ann, Ben"
    assert apart.reason_codes == []


def test_empty_tables_have_no_entry(make_guest, make_plan) -> None:
    explanations = generate_explanations(
        make_plan(["a"], []), [make_guest("a")], PlanMetrics(), []
    )
    assert list(explanations.per_table) == ["table_1"]


def test_overall_summary(make_guest, make_plan) -> None:
    guests = [
        make_guest("b", "BUYER", company="Acme"),
        make_guest("s", "SELLER", company="Globex"),
        make_guest("n"),
    ]
    metrics = PlanMetrics(novelty=0.6, diversity=0.5, balance=0.4, transaction=0.9, weighted=0.8123)

    explanations = generate_explanations(make_plan(["b", "s"], ["n"], []), guests, metrics, [])

    assert explanations.overall == (
        "Overall optimization score: 81.2%. "
        "Strong performance in business opportunities (90%). "
        "Well-balanced tables with good networking potential. "
        "3 guests across 2 tables."
    )


def test_overall_summary_without_strong_objective(make_guest, make_plan) -> None:
    metrics = PlanMetrics(novelty=0.5, diversity=0.5, balance=0.5, transaction=0.5, weighted=0.5)
    explanations = generate_explanations(make_plan(["a"]), [make_guest("a")], metrics, [])
    assert explanations.overall == "Overall optimization score: 50.0%. 1 guests across 1 tables."

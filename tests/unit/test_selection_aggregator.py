import itertools
import pytest

from paydesk.selection.aggregator import SelectionAggregator
from paydesk.utils.parsing import round_amount

PHONE = {"id": 1, "title": "Phone", "price": 1000, "discountPercentage": "10"}
CASE = {"id": 2, "title": "Case", "price": 250, "discountPercentage": 12.5}


def test_add_string_discount_then_repeat():
    agg = SelectionAggregator()
    line = agg.add(PHONE)
    assert line.quantity == 1
    assert line.deduction == 900
    assert line.discount_percent == 10.0

    line = agg.add(PHONE)
    assert line.quantity == 2
    assert line.deduction == 1800
    assert len(agg) == 1


def test_add_rounds_half_away_from_zero():
    agg = SelectionAggregator()
    cable = {"id": 4, "title": "Cable", "price": 15, "discountPercentage": 10}
    assert agg.add(cable).deduction == 14  # 13.5
    assert agg.add(cable).deduction == 27  # 27.0


def test_malformed_or_missing_discount_is_zero():
    agg = SelectionAggregator()
    assert agg.add({"id": 4, "title": "Cable", "price": 15, "discountPercentage": "oops"}).deduction == 15
    assert agg.add({"id": 5, "title": "Stand", "price": 480}).deduction == 480


def test_remove_decrements_then_deletes():
    agg = SelectionAggregator()
    agg.add(PHONE)
    agg.add(PHONE)
    line = agg.remove(1)
    assert line.quantity == 1
    assert line.deduction == 900
    assert agg.remove(1) is None
    assert agg.get(1) is None
    assert len(agg) == 0


def test_remove_unknown_is_noop():
    agg = SelectionAggregator()
    agg.add(CASE)
    assert agg.remove(99) is None
    assert agg.get(2).quantity == 1


@pytest.mark.parametrize("ops", list(itertools.product("ar", repeat=5)))
def test_add_remove_sequences_clamp_at_zero(ops):
    agg = SelectionAggregator()
    expected = 0
    for op in ops:
        if op == "a":
            agg.add(PHONE)
            expected += 1
        else:
            agg.remove(PHONE["id"])
            expected = max(0, expected - 1)
    line = agg.get(PHONE["id"])
    if expected == 0:
        assert line is None
    else:
        assert line.quantity == expected
        assert line.deduction == 900 * expected


@pytest.mark.parametrize("discount", range(0, 101, 5))
def test_deduction_formula_after_quantity_change(discount):
    agg = SelectionAggregator()
    product = {"id": "x", "title": "X", "price": 999, "discountPercentage": discount}
    agg.add(product)
    agg.add(product)
    agg.set_quantity("x", "3")
    assert agg.get("x").deduction == round_amount(999 * (1 - discount / 100) * 3)


@pytest.mark.parametrize("raw", ["-3", "abc", "0", "", None])
def test_set_quantity_invalid_is_noop(raw):
    agg = SelectionAggregator()
    agg.add(PHONE)
    agg.add(PHONE)
    agg.set_quantity(1, raw)
    assert agg.get(1).quantity == 2
    assert agg.get(1).deduction == 1800


def test_set_quantity_recomputes_deduction():
    agg = SelectionAggregator()
    agg.add(PHONE)
    line = agg.set_quantity(1, "4")
    assert line.quantity == 4
    assert line.deduction == 3600


def test_manual_deduction_persists_until_quantity_change():
    agg = SelectionAggregator()
    agg.add(PHONE)
    agg.add(CASE)
    agg.set_deduction(1, "500")
    assert agg.get(1).deduction == 500
    # une opération sur une autre ligne ne touche pas la saisie manuelle
    agg.add(CASE)
    assert agg.get(1).deduction == 500
    agg.add(PHONE)
    assert agg.get(1).deduction == 1800


def test_manual_deduction_unparsable_is_zero():
    agg = SelectionAggregator()
    agg.add(PHONE)
    agg.set_deduction(1, "abc")
    assert agg.get(1).deduction == 0
    assert agg.set_deduction(99, "10") is None


def test_totals():
    agg = SelectionAggregator()
    agg.add(PHONE)
    agg.add(PHONE)
    agg.add(CASE)
    assert agg.gross_total == 2250
    assert agg.total_deduction == 1800 + 219  # 218.75 arrondi


def test_clear_empties_collection():
    agg = SelectionAggregator()
    agg.add(PHONE)
    agg.clear()
    assert agg.lines == []
    assert agg.gross_total == 0
    assert agg.total_deduction == 0


def test_snapshot_is_independent_of_live_selection():
    agg = SelectionAggregator()
    agg.add(PHONE)
    snapshot = agg.snapshot()
    agg.add(PHONE)
    agg.set_deduction(1, "1")
    agg.clear()
    assert len(snapshot.lines) == 1
    assert snapshot.lines[0].quantity == 1
    assert snapshot.lines[0].deduction == 900
    assert snapshot.gross_total == 1000
    assert snapshot.total_deduction == 900


def test_empty_snapshot():
    assert SelectionAggregator().snapshot().is_empty

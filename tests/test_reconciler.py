import pytest
from conftest import make_node

from invoice_pay.cache import PageCache
from invoice_pay.models import SelectionSnapshot, SnapshotEntry, parse_invoice
from invoice_pay.reconciler import FieldEditReconciler


@pytest.fixture
def cache():
    cache = PageCache("ctx")
    cache.record_page(
        [
            parse_invoice(make_node(1, "100.0000")),
            parse_invoice(make_node(2, "50.5")),
            parse_invoice(make_node(3, "0.0000")),
        ],
        "ctx",
    )
    return cache


def test_new_entries_are_seeded_from_formatted_open_balance(cache):
    reconciler = FieldEditReconciler(decimal_places=2)
    snapshot = reconciler.reconcile([1, 2], cache)
    assert snapshot.entries == (
        SnapshotEntry(id=1, amount="100.00", currency="USD", origin_value="100.0000"),
        SnapshotEntry(id=2, amount="50.50", currency="USD", origin_value="50.5"),
    )
    assert reconciler.snapshot is snapshot


def test_decimal_places_follow_configuration(cache):
    snapshot = FieldEditReconciler(decimal_places=3).reconcile([2], cache)
    assert snapshot.get(2).amount == "50.500"


def test_existing_entries_are_copied_forward(cache):
    reconciler = FieldEditReconciler()
    reconciler.reconcile([1], cache)
    reconciler.edit_field(1, "42")
    cache.record_page([parse_invoice(make_node(1, "150.0000"))], "ctx")
    snapshot = reconciler.reconcile([1, 2], cache)
    assert snapshot.get(1).amount == "42"
    assert snapshot.get(2).amount == "50.50"


def test_order_follows_selection_not_previous_snapshot(cache):
    reconciler = FieldEditReconciler()
    reconciler.reconcile([1, 2], cache)
    assert reconciler.reconcile([2, 1], cache).ids() == [2, 1]


def test_deselected_ids_are_dropped(cache):
    reconciler = FieldEditReconciler()
    reconciler.reconcile([1, 2], cache)
    assert reconciler.reconcile([2], cache).ids() == [2]


def test_unresolved_and_zero_balance_ids_get_no_entry(cache):
    snapshot = FieldEditReconciler().reconcile([3, 77, 1], cache)
    assert snapshot.ids() == [1]


def test_reselection_resets_to_server_default(cache):
    reconciler = FieldEditReconciler()
    reconciler.reconcile([1], cache)
    reconciler.edit_field(1, "42")
    reconciler.reconcile([], cache)
    assert reconciler.reconcile([1], cache).get(1).amount == "100.00"


def test_explicit_previous_snapshot(cache):
    previous = SelectionSnapshot([SnapshotEntry(id=2, amount="7", currency="USD")])
    snapshot = FieldEditReconciler().reconcile([1, 2], cache, previous)
    assert snapshot.get(2).amount == "7"
    assert snapshot.get(1).amount == "100.00"


def test_edit_field_touches_one_entry_only(cache):
    reconciler = FieldEditReconciler()
    before = reconciler.reconcile([1, 2], cache)
    after = reconciler.edit_field(2, ".")
    assert after.get(2).amount == "."
    assert after.get(1) == before.get(1)
    assert before.get(2).amount == "50.50"


def test_edit_field_ignores_unselected_id(cache):
    reconciler = FieldEditReconciler()
    before = reconciler.reconcile([1], cache)
    assert reconciler.edit_field(2, "9") == before


def test_clear(cache):
    reconciler = FieldEditReconciler()
    reconciler.reconcile([1], cache)
    reconciler.clear()
    assert len(reconciler.snapshot) == 0

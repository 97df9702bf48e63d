from conftest import make_node

from invoice_pay.cache import PageCache
from invoice_pay.models import parse_invoice
from invoice_pay.selection import SelectionTracker


def _tracker(*nodes):
    cache = PageCache("ctx")
    cache.record_page([parse_invoice(node) for node in nodes], "ctx")
    return SelectionTracker(cache)


def test_toggle_flips_and_keeps_first_seen_order():
    tracker = _tracker(make_node(1), make_node(2), make_node(3))
    assert tracker.toggle(3)
    assert tracker.toggle(1)
    assert tracker.selected_ids() == [3, 1]
    assert not tracker.toggle(3)
    assert not tracker.is_selected(3)
    assert tracker.selected_ids() == [1]


def test_toggle_all_skips_disabled_items():
    tracker = _tracker(make_node(1, "100"), make_node(2, "0.0000"))
    changed = tracker.toggle_all([1, 2], True)
    assert changed == [1]
    assert tracker.selected_ids() == [1]


def test_toggle_all_skips_server_disabled_checkbox():
    node = make_node(2)
    node["node"]["disableCurrentCheckbox"] = True
    tracker = _tracker(make_node(1), node)
    tracker.toggle_all([1, 2], True)
    assert tracker.selected_ids() == [1]


def test_toggle_all_is_not_limited_to_a_page():
    tracker = _tracker(*[make_node(i) for i in range(1, 41)])
    tracker.toggle_all(list(range(1, 41)), True)
    assert len(tracker) == 40


def test_toggle_all_skips_uncached_ids_but_unchecks_anything():
    tracker = _tracker(make_node(1))
    tracker.toggle(99)
    assert tracker.toggle_all([1, 42], True) == [1]
    assert tracker.toggle_all([1, 99, 42], False) == [1, 99]
    assert tracker.selected_ids() == []


def test_single_toggle_allows_disabled_item():
    tracker = _tracker(make_node(2, "0"))
    assert tracker.toggle(2)
    assert tracker.is_selected(2)


def test_clear():
    tracker = _tracker(make_node(1))
    tracker.toggle(1)
    tracker.clear()
    assert tracker.selected_ids() == []

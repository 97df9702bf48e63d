import pytest
from conftest import make_node

from invoice_pay.cache import PageCache
from invoice_pay.controller import FilterSortController
from invoice_pay.models import SORT_ASC, ListQuery, parse_invoice
from invoice_pay.reconciler import FieldEditReconciler
from invoice_pay.selection import SelectionTracker


@pytest.fixture
def parts():
    cache = PageCache()
    selection = SelectionTracker(cache)
    reconciler = FieldEditReconciler()
    controller = FilterSortController(
        cache, selection, reconciler, ListQuery(filters={"q": ""}, limit=10)
    )
    cache.record_page(
        [parse_invoice(make_node(1)), parse_invoice(make_node(2))],
        controller.context_id,
    )
    selection.toggle(1)
    reconciler.reconcile(selection.selected_ids(), cache)
    return cache, selection, reconciler, controller


def test_initial_context_is_applied_to_cache(parts):
    cache, _, _, controller = parts
    assert cache.context_id == controller.context_id
    assert len(cache) == 2


def test_set_filter_resets_cache_and_selection(parts):
    cache, selection, reconciler, controller = parts
    old_context = controller.context_id
    request = controller.set_filter({"q": "INV-1"})
    assert controller.context_id != old_context
    assert cache.context_id == controller.context_id
    assert len(cache) == 0
    assert selection.selected_ids() == []
    assert len(reconciler.snapshot) == 0
    assert request.keep_checked_items is False
    assert request.query.filters == {"q": "INV-1"}


def test_set_filter_always_starts_new_context(parts):
    _, _, _, controller = parts
    first = controller.set_filter({"q": "x"}).context_id
    second = controller.set_filter({"q": "x"}).context_id
    assert first != second


def test_set_filter_none_removes_key_and_resets_offset(parts):
    _, _, _, controller = parts
    controller.set_page(20)
    request = controller.set_filter({"q": None, "status": 1})
    assert request.query.filters == {"status": 1}
    assert request.query.offset == 0


@pytest.mark.parametrize(
    "change",
    [
        lambda c: c.set_sort("dueDate", SORT_ASC),
        lambda c: c.set_page(10, 20),
        lambda c: c.refresh(),
    ],
)
def test_sort_page_and_refresh_keep_context(parts, change):
    cache, selection, reconciler, controller = parts
    context = controller.context_id
    request = change(controller)
    assert request.keep_checked_items is True
    assert request.context_id == context
    assert len(cache) == 2
    assert selection.selected_ids() == [1]
    assert reconciler.snapshot.ids() == [1]


def test_set_sort_restarts_at_first_page(parts):
    _, _, _, controller = parts
    controller.set_page(30)
    request = controller.set_sort("openBalance", "ASC")
    assert request.query.offset == 0
    assert request.query.order_by == "openBalance"


def test_set_sort_rejects_unknown_direction(parts):
    with pytest.raises(ValueError):
        parts[3].set_sort("dueDate", "sideways")


def test_refresh_without_keep_clears_selection_only(parts):
    cache, selection, reconciler, controller = parts
    request = controller.refresh(keep_checked_items=False)
    assert request.keep_checked_items is False
    assert selection.selected_ids() == []
    assert len(reconciler.snapshot) == 0
    assert len(cache) == 2


def test_requests_are_tagged_and_ordered(parts):
    _, _, _, controller = parts
    received = []
    controller.subscribe(received.append)
    page_request = controller.set_page(10)
    filter_request = controller.set_filter({"q": "z"})
    assert received == [page_request, filter_request]
    assert filter_request.sequence == page_request.sequence + 1
    assert not controller.is_current(page_request)
    assert controller.is_latest(filter_request)
    sort_request = controller.set_sort("status")
    assert controller.is_current(filter_request)
    assert not controller.is_latest(filter_request)
    assert controller.is_latest(sort_request)


def test_filter_context_ignores_pagination_and_empty_values(parts):
    _, _, _, controller = parts
    before = controller.filter_context()
    controller.set_page(50, 25)
    controller.set_sort("dueDate")
    assert controller.filter_context() == before

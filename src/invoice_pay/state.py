"""
Invoice list screen state.

InvoiceListState wires the page cache, selection tracker, field edit
reconciler, aggregation and checkout builder behind the event entry points a
rendering layer calls (row toggled, amount typed, filter changed, pay
clicked) and the read accessors it renders from. One instance per screen.

All state transitions are synchronous; the only suspension points are the
awaits on the list source and the checkout collaborator.
"""

import os
from dataclasses import replace
from typing import Any, Hashable, List, Mapping

from invoice_pay.aggregation import AggregationComputer
from invoice_pay.cache import PageCache
from invoice_pay.checkout import CheckoutPayloadBuilder
from invoice_pay.controller import FilterSortController
from invoice_pay.lib import logs
from invoice_pay.models.checkout import CheckoutResult, ValidationError
from invoice_pay.models.common import SORT_DESC, ListQuery, RefetchRequest
from invoice_pay.models.invoice import InvoiceItem, InvoicePage, InvoiceStats
from invoice_pay.models.selection import Aggregate, SelectionSnapshot
from invoice_pay.reconciler import FieldEditReconciler
from invoice_pay.selection import SelectionTracker
from invoice_pay.services import (
    CheckoutService,
    InvoiceSource,
    get_checkout_service,
    get_invoice_source,
)
from invoice_pay.utils import format_amount

LOG = logs.logger(__file__)

# Configuration from environment
PAGE_SIZE = int(os.getenv("INVOICE_PAY_PAGE_SIZE", "10"))
DECIMAL_PLACES = int(os.getenv("INVOICE_PAY_DECIMAL_PLACES", "2"))
DEFAULT_SORT_KEY = "createdAt"

NOT_LOADED_MESSAGE = "The invoice is not loaded; refresh the list and try again."
NOT_PAYABLE_MESSAGE = "You do not have permission to pay this invoice."


class InvoiceListState:
    """
    Selection, editing and payment state for one invoice list screen.

    Args:
        source: Paged invoice list source (defaults to the configured one).
        checkout: Checkout collaborator (defaults to the configured one).
        page_size: Rows per page.
        decimal_places: Decimal places of the active currency.
        current_company_id: Company of the buyer; invoices of other companies
            are payable only with can_pay_subsidiaries.
        can_pay_subsidiaries: Whether subsidiary invoices may be paid.
        filters: Initial filters.
        load_stats: Refresh the unpaid/overdue header after every page load.
    """

    def __init__(
        self,
        source: InvoiceSource | None = None,
        checkout: CheckoutService | None = None,
        *,
        page_size: int = PAGE_SIZE,
        decimal_places: int = DECIMAL_PLACES,
        current_company_id: int | None = None,
        can_pay_subsidiaries: bool = True,
        filters: Mapping[str, Any] | None = None,
        load_stats: bool = False,
    ) -> None:
        self._source = source or get_invoice_source()
        self._checkout = checkout or get_checkout_service()
        self.decimal_places = decimal_places
        self.current_company_id = current_company_id
        self.can_pay_subsidiaries = can_pay_subsidiaries
        self.load_stats = load_stats

        self.cache: PageCache[InvoiceItem] = PageCache()
        self.selection = SelectionTracker(self.cache)
        self.reconciler = FieldEditReconciler(decimal_places)
        self.aggregator = AggregationComputer(decimal_places)
        self.payload_builder = CheckoutPayloadBuilder(decimal_places)
        self.controller = FilterSortController(
            self.cache,
            self.selection,
            self.reconciler,
            ListQuery(
                filters=dict(filters or {}),
                sort_key=DEFAULT_SORT_KEY,
                sort_direction=SORT_DESC,
                limit=page_size,
            ),
        )

        self.items: List[InvoiceItem] = []
        self.total = 0
        self.offset = 0
        self.stats = InvoiceStats()
        self._in_flight = 0
        self._aggregate = self.aggregator.compute(self.reconciler.snapshot)

    # Read accessors

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total

    @property
    def aggregate(self) -> Aggregate:
        """Total of the selected amounts, recomputed on every snapshot change."""
        return self._aggregate

    @property
    def result_summary(self) -> str:
        noun = "invoice" if self.total == 1 else "invoices"
        selected = len(self.reconciler.snapshot)
        if selected:
            return f"{self.total} {noun} found, {selected} selected"
        return f"{self.total} {noun} found"

    def get_list(self) -> List[InvoiceItem]:
        """Invoices of the page on screen."""
        return list(self.items)

    def get_cache_list(self) -> List[InvoiceItem]:
        """Every invoice seen under the current filters."""
        return self.cache.get_all()

    def get_selected_value(self) -> SelectionSnapshot:
        return self.reconciler.snapshot

    def selected_ids(self) -> List[Hashable]:
        return self.selection.selected_ids()

    def amount_for(self, invoice_id: Hashable) -> str:
        """Amount to show in a row: the edited one if selected, else the default."""
        entry = self.reconciler.snapshot.get(invoice_id)
        if entry is not None:
            return entry.amount
        item = self.cache.get(invoice_id)
        if item is None:
            return format_amount(0, self.decimal_places)
        return format_amount(item.open_balance.value, self.decimal_places)

    # Events

    async def on_load(self) -> InvoicePage | None:
        """Load the first page for the initial filters."""
        return await self._load(self.controller.refresh(keep_checked_items=True))

    def on_row_toggled(self, invoice_id: Hashable) -> bool:
        """Flip one row; returns True when it ends up selected."""
        selected = self.selection.toggle(invoice_id)
        self._reconcile()
        return selected

    def on_select_all_toggled(
        self, checked: bool, ids: List[Hashable] | None = None
    ) -> List[Hashable]:
        """
        Check or uncheck every known matching invoice.

        Without ids, all invoices cached under the current filters are used,
        not only the page on screen.
        """
        target = self.cache.ids() if ids is None else ids
        changed = self.selection.toggle_all(target, checked)
        self._reconcile()
        return changed

    def on_field_edited(self, invoice_id: Hashable, value: str) -> SelectionSnapshot:
        """Store the amount typed for a selected invoice."""
        snapshot = self.reconciler.edit_field(invoice_id, value)
        self._aggregate = self.aggregator.compute(snapshot)
        return snapshot

    async def on_filter_changed(self, patch: Mapping[str, Any]) -> InvoicePage | None:
        request = self.controller.set_filter(patch)
        self._reset_view()
        return await self._load(request)

    async def on_sort_changed(self, key: str, direction: str) -> InvoicePage | None:
        return await self._load(self.controller.set_sort(key, direction))

    async def on_page_changed(
        self, offset: int, limit: int | None = None
    ) -> InvoicePage | None:
        return await self._load(self.controller.set_page(offset, limit))

    async def on_refresh(self, keep_checked_items: bool = True) -> InvoicePage | None:
        request = self.controller.refresh(keep_checked_items=keep_checked_items)
        if not keep_checked_items:
            self._aggregate = self.aggregator.compute(self.reconciler.snapshot)
        return await self._load(request)

    async def load_more(self) -> InvoicePage | None:
        """Move to the next page if there is one."""
        if not self.has_more:
            return None
        query = self.controller.query
        return await self.on_page_changed(query.offset + query.limit)

    async def pay_selected(self) -> CheckoutResult | ValidationError:
        """
        Submit the selected invoices to checkout.

        Returns the ValidationError without calling checkout when the
        selection cannot be paid. Checkout failures propagate.
        """
        blocked = [
            entry.id
            for entry in self.reconciler.snapshot
            if not self._can_pay_id(entry.id)
        ]
        if blocked:
            LOG.info("pay_selected rejected - not payable ids:%s", blocked)
            return ValidationError(NOT_PAYABLE_MESSAGE, tuple(blocked))
        payload = self.payload_builder.build(self.reconciler.snapshot)
        if isinstance(payload, ValidationError):
            LOG.info("pay_selected rejected - %s", payload.message)
            return payload
        LOG.info(
            "pay_selected - invoices:%s currency:%s",
            len(payload.line_items),
            payload.currency,
        )
        return await self._checkout.submit(payload)

    async def pay_invoice(self, invoice_id: Hashable) -> CheckoutResult | ValidationError:
        """Submit one invoice's full open balance to checkout."""
        item = self.cache.get(invoice_id)
        if item is None:
            return ValidationError(NOT_LOADED_MESSAGE, (invoice_id,))
        if not self._can_pay(item):
            return ValidationError(NOT_PAYABLE_MESSAGE, (invoice_id,))
        payload = self.payload_builder.build_single(item)
        if isinstance(payload, ValidationError):
            return payload
        return await self._checkout.submit(payload)

    async def refresh_stats(self) -> InvoiceStats:
        """Reload the unpaid/overdue header; failures keep the old values."""
        try:
            self.stats = await self._source.get_stats(
                self.controller.query.active_filters(), self.decimal_places
            )
        except Exception as e:
            LOG.error("Failed to load invoice stats: %s", e, exc_info=True)
        return self.stats

    # Internals

    async def _load(self, request: RefetchRequest) -> InvoicePage | None:
        LOG.info(
            "Load Started - seq:%s context:%s offset:%s",
            request.sequence,
            request.context_id,
            request.query.offset,
        )
        self._in_flight += 1
        try:
            page = await self._source.fetch_page(request.query)
        finally:
            self._in_flight -= 1

        if not self.controller.is_current(request):
            LOG.info(
                "Stale response discarded - seq:%s context:%s current:%s",
                request.sequence,
                request.context_id,
                self.controller.context_id,
            )
            return None

        items = [self._with_checkbox_state(item) for item in page.items]
        self.cache.record_page(items, request.context_id, request.sequence)
        if self.controller.is_latest(request):
            self.items = items
            self.total = page.total
            self.offset = page.offset
        self._reconcile()
        LOG.info(
            "Load Complete - seq:%s items:%s cached:%s selected:%s",
            request.sequence,
            len(items),
            len(self.cache),
            len(self.selection),
        )

        if self.load_stats:
            await self.refresh_stats()
        return page

    def _reconcile(self) -> None:
        snapshot = self.reconciler.reconcile(self.selection.selected_ids(), self.cache)
        self._aggregate = self.aggregator.compute(snapshot)

    def _reset_view(self) -> None:
        self.items = []
        self.total = 0
        self.offset = 0
        self._aggregate = self.aggregator.compute(self.reconciler.snapshot)

    def _can_pay_id(self, invoice_id: Hashable) -> bool:
        item = self.cache.get(invoice_id)
        return item is not None and self._can_pay(item)

    def _can_pay(self, item: InvoiceItem) -> bool:
        if not item.has_open_balance:
            return False
        if self.current_company_id is None or item.company_id is None:
            return True
        return item.company_id == self.current_company_id or self.can_pay_subsidiaries

    def _with_checkbox_state(self, item: InvoiceItem) -> InvoiceItem:
        return replace(item, disable_checkbox=not self._can_pay(item))

"""
Demo implementations of the collaborators using in-memory data.

These are useful for:
- Local development without a storefront backend
- Testing the engine with realistic paging, sorting and filtering
- Simulating server-side changes (a new open balance) between fetches

Nodes are parsed on every fetch, so edits made through set_open_balance()
show up on the next page load exactly as a server-side change would.
"""

import asyncio
from copy import deepcopy
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Sequence

from invoice_pay.data.demo_invoices import DEMO_INVOICES
from invoice_pay.lib import logs, objects
from invoice_pay.models.checkout import CheckoutPayload, CheckoutResult
from invoice_pay.models.common import SORT_DESC, ListQuery
from invoice_pay.models.invoice import (
    InvoiceItem,
    InvoicePage,
    InvoiceStats,
    InvoiceStatus,
    parse_invoices,
)
from invoice_pay.services.invoice_source import CheckoutService, InvoiceSource
from invoice_pay.utils import quantize

LOG = logs.logger(__file__)

_SORT_FIELDS: Dict[str, Callable[[InvoiceItem], Any]] = {
    "id": lambda item: item.id,
    "invoiceNumber": lambda item: item.invoice_number,
    "orderNumber": lambda item: item.order_number,
    "createdAt": lambda item: item.created_at or 0,
    "dueDate": lambda item: item.due_date or 0,
    "updatedAt": lambda item: item.due_date or 0,
    "originalBalance": lambda item: item.original_balance.amount,
    "openBalance": lambda item: item.open_balance.amount,
    "status": lambda item: item.status,
}


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class DemoInvoiceSource(InvoiceSource):
    """
    In-memory invoice source backed by demo nodes.

    Supported filters: q (invoice/order number or id substring), status
    (display status code, so 3 matches overdue invoices), companyIds,
    beginDateAt/endDateAt (createdAt bounds, epoch seconds).

    Args:
        nodes: Remote-shaped invoice nodes, or None to use DEMO_INVOICES.
        latency: Seconds every call waits before answering.
        clock: Returns "now" for overdue checks.
    """

    def __init__(
        self,
        nodes: Sequence[Mapping[str, Any]] | None = None,
        latency: float = 0.0,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._nodes: List[Dict[str, Any]] = deepcopy(
            list(DEMO_INVOICES if nodes is None else nodes)
        )
        self.latency = latency
        self._clock = clock
        self.calls: List[ListQuery] = []

    async def fetch_page(self, query: ListQuery) -> InvoicePage:
        """Return the matching, ordered slice of invoices."""
        self.calls.append(query.copy())
        if self.latency:
            await asyncio.sleep(self.latency)

        matches = self._apply_filter(query.active_filters())
        key = _SORT_FIELDS.get(query.sort_key, _SORT_FIELDS["id"])
        matches.sort(key=key, reverse=query.sort_direction == SORT_DESC)

        offset, limit = max(query.offset, 0), max(query.limit, 1)
        items = matches[offset : offset + limit]
        LOG.debug(
            "fetch_page - params:%s total:%s returned:%s",
            query.to_params(),
            len(matches),
            len(items),
        )
        return InvoicePage(items=items, total=len(matches), offset=offset, limit=limit)

    async def get_stats(
        self, filters: Mapping[str, Any], decimal_places: int = 2
    ) -> InvoiceStats:
        """Sum open balances, and the overdue part, of the matching invoices."""
        if self.latency:
            await asyncio.sleep(self.latency)
        now = self._clock()
        unpaid = overdue = Decimal(0)
        # the header shows totals over every status
        unfiltered_status = {k: v for k, v in filters.items() if k != "status"}
        for item in self._apply_filter(unfiltered_status):
            unpaid += item.open_balance.amount
            if item.display_status(now) == InvoiceStatus.OVERDUE:
                overdue += item.open_balance.amount
        return InvoiceStats(
            unpaid=quantize(unpaid, decimal_places),
            overdue=quantize(overdue, decimal_places),
        )

    def set_open_balance(self, invoice_id: int, value: str) -> None:
        """Change an invoice's open balance as a server-side update would."""
        for node in self._nodes:
            body = node.get("node", node)
            if str(body.get("id")) == str(invoice_id):
                body.setdefault("openBalance", {})["value"] = value
                return
        raise KeyError(invoice_id)

    def _apply_filter(self, filters: Mapping[str, Any]) -> List[InvoiceItem]:
        now = self._clock()
        items = parse_invoices(self._nodes)
        return [item for item in items if _matches(item, filters, now)]


def _matches(item: InvoiceItem, filters: Mapping[str, Any], now: datetime) -> bool:
    text = str(filters.get("q") or "").strip().lower()
    if text and not any(
        text in value.lower()
        for value in (item.invoice_number, item.order_number, str(item.id))
    ):
        return False

    status = filters.get("status")
    if status not in (None, "") and item.display_status(now) != int(status):
        return False

    company_ids = filters.get("companyIds") or []
    if company_ids and item.company_id not in {int(c) for c in company_ids}:
        return False

    begin, end = filters.get("beginDateAt"), filters.get("endDateAt")
    created = item.created_at or 0
    if begin not in (None, "") and created < int(begin):
        return False
    if end not in (None, "") and created > int(end):
        return False
    return True


class DemoCheckoutService(CheckoutService):
    """
    Checkout collaborator that records payloads and returns a fake URL.

    Args:
        base_url: Storefront URL the redirect points into.
    """

    def __init__(self, base_url: str = "https://store.example.com") -> None:
        self.base_url = base_url.rstrip("/")
        self.submitted: List[CheckoutPayload] = []

    async def submit(self, payload: CheckoutPayload) -> CheckoutResult:
        if not payload.line_items:
            raise ValueError("Checkout payload has no line items")
        self.submitted.append(payload)
        LOG.info("submit - payload:%s", objects.to_json(payload))
        token = objects.hash(payload.to_dict()).short()
        return CheckoutResult(
            redirect_url=f"{self.base_url}/checkout?cart={token}",
            line_item_ids=[line.entity_id for line in payload.line_items],
        )

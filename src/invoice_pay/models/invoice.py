"""
Invoice list models and parsing helpers.

Invoice rows arrive from the remote list source as GraphQL nodes, either
wrapped as {"node": {...}} edges or bare. parse_invoice() turns one node into
the explicit InvoiceItem dataclass the engine works with:

    InvoiceItem
    ├── Money open_balance (what is still owed, the default amount to pay)
    ├── Money original_balance (invoice total)
    └── status, dates, company and checkbox state

Identity is by id only; two InvoiceItems with the same id are the same
invoice, whatever else differs between fetches.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from enum import IntEnum
from typing import Any, Iterable, List, Mapping, Sequence

from benedict import benedict

from invoice_pay.lib import logs
from invoice_pay.utils import format_currency, format_epoch_date, parse_amount

LOG = logs.logger(__file__)


class InvoiceStatus(IntEnum):
    """Invoice status codes as served by the remote list source."""

    OPEN = 0
    PARTIALLY_PAID = 1
    PAID = 2
    OVERDUE = 3


@dataclass(slots=True, frozen=True)
class Money:
    """A decimal amount string with its currency code."""

    code: str
    value: str

    @property
    def amount(self) -> Decimal:
        return parse_amount(self.value)

    def format(self, decimal_places: int = 2) -> str:
        """Return the amount as a currency string (e.g., '$1,234.56')."""
        return format_currency(self.value, self.code, decimal_places)


@dataclass(slots=True)
class InvoiceItem:
    """One invoice row of the paged list."""

    id: int
    invoice_number: str
    order_number: str
    status: int
    open_balance: Money
    original_balance: Money
    company_id: int | None = None
    due_date: int | None = None
    created_at: int | None = None
    disable_checkbox: bool = False

    @property
    def currency(self) -> str:
        return self.open_balance.code or self.original_balance.code

    @property
    def has_open_balance(self) -> bool:
        return self.open_balance.amount != 0

    @property
    def selectable(self) -> bool:
        """True when the row checkbox may be ticked by a select-all."""
        return not self.disable_checkbox and self.has_open_balance

    def display_status(self, now: datetime | None = None) -> InvoiceStatus:
        """
        Return the status to show for the invoice.

        An open invoice whose due date has passed is shown as overdue.
        """
        now = now or datetime.now(tz=timezone.utc)
        if (
            self.status == InvoiceStatus.OPEN
            and self.due_date
            and now.timestamp() > self.due_date
        ):
            return InvoiceStatus.OVERDUE
        try:
            return InvoiceStatus(self.status)
        except ValueError:
            return InvoiceStatus.OPEN

    def formatted_due_date(self) -> str:
        return format_epoch_date(self.due_date)

    def formatted_created_at(self) -> str:
        return format_epoch_date(self.created_at)


@dataclass(slots=True)
class InvoicePage:
    """One page of invoices plus the total count for the active filters."""

    items: Sequence[InvoiceItem]
    total: int
    offset: int = 0
    limit: int = 10

    @property
    def has_more(self) -> bool:
        """Return True when additional pages are available."""
        return self.offset + len(self.items) < self.total


@dataclass(slots=True)
class InvoiceStats:
    """Header totals for the invoices matching the active filters."""

    unpaid: Decimal = field(default_factory=Decimal)
    overdue: Decimal = field(default_factory=Decimal)


def _optional_int(value: Any) -> int | None:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _money(b: benedict, key: str, fallback_code: str = "") -> Money:
    return Money(
        code=str(b.get(f"{key}.code") or fallback_code),
        value=str(b.get(f"{key}.value") or "0"),
    )


def parse_invoice(payload: Mapping[str, Any]) -> InvoiceItem:
    """
    Parse a remote invoice node into an InvoiceItem.

    Uses benedict keypaths so missing or null nested values fall back to
    defaults instead of raising KeyError.

    Args:
        payload: Edge ({"node": {...}}) or bare node mapping.

    Returns:
        Populated InvoiceItem.

    Raises:
        ValueError: If the node carries no usable id.
    """
    b = benedict(dict(payload))
    if isinstance(b.get("node"), Mapping):
        b = benedict(dict(b["node"]))

    invoice_id = _optional_int(b.get("id"))
    if invoice_id is None:
        raise ValueError(f"Invoice node has no usable id: {b.get('id')!r}")

    original_balance = _money(b, "originalBalance")
    open_balance = _money(b, "openBalance", original_balance.code)
    return InvoiceItem(
        id=invoice_id,
        invoice_number=str(b.get("invoiceNumber") or invoice_id),
        order_number=str(b.get("orderNumber") or ""),
        status=_optional_int(b.get("status")) or 0,
        open_balance=open_balance,
        original_balance=replace(
            original_balance, code=original_balance.code or open_balance.code
        ),
        company_id=_optional_int(b.get("companyInfo.companyId", b.get("companyId"))),
        due_date=_optional_int(b.get("dueDate")),
        created_at=_optional_int(b.get("createdAt")),
        disable_checkbox=bool(b.get("disableCurrentCheckbox", False)),
    )


def parse_invoices(payloads: Iterable[Mapping[str, Any]]) -> List[InvoiceItem]:
    """Parse a list of nodes, skipping (and logging) nodes without an id."""
    items: List[InvoiceItem] = []
    for payload in payloads:
        try:
            items.append(parse_invoice(payload))
        except ValueError as e:
            LOG.warning("Skipping invoice node: %s", e)
    return items


def serialize_invoice(item: InvoiceItem) -> dict:
    """Convert an InvoiceItem back into the remote node shape."""
    return {
        "id": str(item.id),
        "invoiceNumber": item.invoice_number,
        "orderNumber": item.order_number,
        "status": item.status,
        "dueDate": item.due_date,
        "createdAt": item.created_at,
        "openBalance": {"code": item.open_balance.code, "value": item.open_balance.value},
        "originalBalance": {
            "code": item.original_balance.code,
            "value": item.original_balance.value,
        },
        "companyInfo": {"companyId": item.company_id},
        "disableCurrentCheckbox": item.disable_checkbox,
    }

"""
Data models for the invoice payment engine.

This package provides:
- Invoice list models (InvoiceItem, Money, InvoicePage, InvoiceStats)
- Query models (ListQuery, RefetchRequest)
- Selection models (SnapshotEntry, SelectionSnapshot, Aggregate)
- Checkout models (CheckoutLineItem, CheckoutPayload, ValidationError)

All models use Python dataclasses for type safety and IDE support.
"""

from invoice_pay.models.checkout import (
    CheckoutLineItem,
    CheckoutPayload,
    CheckoutResult,
    ValidationError,
)
from invoice_pay.models.common import SORT_ASC, SORT_DESC, ListQuery, RefetchRequest
from invoice_pay.models.invoice import (
    InvoiceItem,
    InvoicePage,
    InvoiceStats,
    InvoiceStatus,
    Money,
    parse_invoice,
    parse_invoices,
    serialize_invoice,
)
from invoice_pay.models.selection import Aggregate, SelectionSnapshot, SnapshotEntry

__all__ = [
    "Aggregate",
    "CheckoutLineItem",
    "CheckoutPayload",
    "CheckoutResult",
    "InvoiceItem",
    "InvoicePage",
    "InvoiceStats",
    "InvoiceStatus",
    "ListQuery",
    "Money",
    "RefetchRequest",
    "SORT_ASC",
    "SORT_DESC",
    "SelectionSnapshot",
    "SnapshotEntry",
    "ValidationError",
    "parse_invoice",
    "parse_invoices",
    "serialize_invoice",
]

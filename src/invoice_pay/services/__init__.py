"""
Collaborator factories for the invoice payment engine.

get_invoice_source() and get_checkout_service() return the implementation
selected by name or by the INVOICE_PAY_SERVICE environment variable.

Available Implementations:
- demo: In-memory invoices and a recording checkout (no backend required)

Instances are cached at the module level, so every screen built through the
factories shares one collaborator.
"""

import os
from functools import cache
from typing import Callable, Dict

from invoice_pay.lib import logs
from invoice_pay.services.invoice_source import CheckoutService, InvoiceSource
from invoice_pay.services.invoice_source_demo import DemoCheckoutService, DemoInvoiceSource

LOG = logs.logger(__file__)

_SOURCE_REGISTRY: Dict[str, Callable[[], InvoiceSource]] = {
    "demo": lambda: DemoInvoiceSource(),
}

_CHECKOUT_REGISTRY: Dict[str, Callable[[], CheckoutService]] = {
    "demo": lambda: DemoCheckoutService(
        os.getenv("INVOICE_PAY_STORE_URL", "https://store.example.com")
    ),
}


def _resolve(kind: str | None) -> str:
    return (kind or os.getenv("INVOICE_PAY_SERVICE", "demo")).lower()


@cache
def get_invoice_source(kind: str | None = None) -> InvoiceSource:
    """Return the configured invoice list source."""
    resolved_kind = _resolve(kind)
    LOG.info("get_invoice_source - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _SOURCE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown invoice source kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


@cache
def get_checkout_service(kind: str | None = None) -> CheckoutService:
    """Return the configured checkout collaborator."""
    resolved_kind = _resolve(kind)
    LOG.info("get_checkout_service - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _CHECKOUT_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown checkout service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory()


__all__ = [
    "CheckoutService",
    "DemoCheckoutService",
    "DemoInvoiceSource",
    "InvoiceSource",
    "get_checkout_service",
    "get_invoice_source",
]

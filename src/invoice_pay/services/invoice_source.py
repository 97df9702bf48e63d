"""
Abstract base classes for the engine's remote collaborators.

The engine talks to two asynchronous collaborators:

- InvoiceSource: returns one page of invoices for a ListQuery (plus the
  header statistics for the active filters)
- CheckoutService: turns a CheckoutPayload into a checkout session

Implementations:
- DemoInvoiceSource / DemoCheckoutService: in-memory data for development
  and tests

Timeouts, retries and transport errors belong to the implementations; the
engine propagates whatever they raise.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping

from invoice_pay.models.checkout import CheckoutPayload, CheckoutResult
from invoice_pay.models.common import ListQuery
from invoice_pay.models.invoice import InvoicePage, InvoiceStats


class InvoiceSource(ABC):
    """
    Abstract paged invoice list source.

    Subclasses must implement fetch_page(). Statistics default to zero.
    """

    @abstractmethod
    async def fetch_page(self, query: ListQuery) -> InvoicePage:
        """
        Return one page of invoices for the query.

        Args:
            query: Filters, ordering, offset and page size.
        """

    async def get_stats(
        self, filters: Mapping[str, Any], decimal_places: int = 2
    ) -> InvoiceStats:
        """
        Return the unpaid and overdue balances for the filters.

        Default implementation returns zero balances.
        """
        return InvoiceStats()


class CheckoutService(ABC):
    """Abstract checkout mutation."""

    @abstractmethod
    async def submit(self, payload: CheckoutPayload) -> CheckoutResult:
        """
        Create a checkout session for the payload.

        Returns:
            CheckoutResult carrying the URL to send the buyer to.
        """

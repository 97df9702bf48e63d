import asyncio
from typing import Any, Dict, List

import pytest

from invoice_pay.models.common import ListQuery
from invoice_pay.models.invoice import InvoicePage
from invoice_pay.services.invoice_source_demo import DemoCheckoutService, DemoInvoiceSource
from invoice_pay.state import InvoiceListState


def make_node(
    invoice_id: int,
    open_value: str = "100.0000",
    code: str = "USD",
    company_id: int = 1,
    status: int = 0,
    due_date: int | None = None,
) -> Dict[str, Any]:
    # createdAt falls as the id grows, so the default "-createdAt" order
    # lists invoices by ascending id
    return {
        "node": {
            "id": str(invoice_id),
            "invoiceNumber": f"INV-{invoice_id}",
            "orderNumber": str(500 + invoice_id),
            "status": status,
            "createdAt": 100_000 - invoice_id,
            "dueDate": due_date,
            "openBalance": {"code": code, "value": open_value},
            "originalBalance": {"code": code, "value": "500.0000"},
            "companyInfo": {"companyId": str(company_id)},
        }
    }


class GatedSource(DemoInvoiceSource):
    """Demo source whose fetches wait until the test opens their gate."""

    def __init__(self, nodes) -> None:
        super().__init__(nodes)
        self.gates: List[asyncio.Event] = []

    async def fetch_page(self, query: ListQuery) -> InvoicePage:
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return await super().fetch_page(query)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def checkout() -> DemoCheckoutService:
    return DemoCheckoutService()


@pytest.fixture
def source() -> DemoInvoiceSource:
    return DemoInvoiceSource([make_node(i) for i in range(1, 26)])


@pytest.fixture
def state(source, checkout) -> InvoiceListState:
    return InvoiceListState(source, checkout, page_size=10, decimal_places=2)

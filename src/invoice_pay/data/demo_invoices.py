"""
Demo invoice nodes in the remote GraphQL node shape.

A handful of templates is expanded into a larger deterministic list so that
pagination, select-all across pages and the statistics header can be tried
without a backend.
"""

from typing import Any, Dict, List

# 2024-01-01T00:00:00Z
_BASE_TIMESTAMP = 1704067200
_DAY = 86400

DEMO_COMPANY_ID = 7001
DEMO_SUBSIDIARY_ID = 7002

_TEMPLATES: List[Dict[str, Any]] = [
    {
        "invoiceNumber": "INV-3344",
        "orderNumber": "118",
        "status": 0,
        "originalBalance": {"code": "USD", "value": "433.0000"},
        "openBalance": {"code": "USD", "value": "433.0000"},
    },
    {
        "invoiceNumber": "INV-3345",
        "orderNumber": "119",
        "status": 1,
        "originalBalance": {"code": "USD", "value": "500.0000"},
        "openBalance": {"code": "USD", "value": "232.0000"},
    },
    {
        "invoiceNumber": "INV-3346",
        "orderNumber": "120",
        "status": 2,
        "originalBalance": {"code": "USD", "value": "120.5000"},
        "openBalance": {"code": "USD", "value": "0.0000"},
    },
    {
        "invoiceNumber": "INV-3347",
        "orderNumber": "121",
        "status": 0,
        "originalBalance": {"code": "USD", "value": "1999.9900"},
        "openBalance": {"code": "USD", "value": "1999.9900"},
    },
    {
        "invoiceNumber": "INV-3348",
        "orderNumber": "122",
        "status": 1,
        "originalBalance": {"code": "USD", "value": "75.2500"},
        "openBalance": {"code": "USD", "value": "25.1250"},
    },
]


def demo_invoice(index: int) -> Dict[str, Any]:
    """
    Build the demo node at a virtual index.

    Every fourth invoice belongs to the subsidiary company; due dates are
    spread so some invoices are overdue.
    """
    template = _TEMPLATES[index % len(_TEMPLATES)]
    created_at = _BASE_TIMESTAMP + index * _DAY
    company_id = DEMO_SUBSIDIARY_ID if index % 4 == 3 else DEMO_COMPANY_ID
    return {
        "node": {
            "id": str(3344 + index),
            "invoiceNumber": f"{template['invoiceNumber']}-{index + 1:04d}",
            "orderNumber": str(int(template["orderNumber"]) + index),
            "status": template["status"],
            "createdAt": created_at,
            "dueDate": created_at + 30 * _DAY,
            "originalBalance": dict(template["originalBalance"]),
            "openBalance": dict(template["openBalance"]),
            "companyInfo": {"companyId": str(company_id)},
        }
    }


def demo_invoices(count: int = 45) -> List[Dict[str, Any]]:
    """Return count demo nodes."""
    return [demo_invoice(index) for index in range(count)]


DEMO_INVOICES = demo_invoices()

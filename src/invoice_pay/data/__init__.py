"""
Static and demo data for the invoice payment engine.

This package contains fixture data used by DemoInvoiceSource for
development, testing, and demonstrations without a storefront backend.

Modules:
- demo_invoices: Invoice nodes in the remote GraphQL node shape
"""

"""
Invoice Pay: selection and payment engine for paginated invoice lists.

This package sits between a remote paged invoice list and the screen that
lets a buyer tick invoices across pages, adjust the amount to pay for each
one, and send the selection to checkout.

Subpackages:
- models: Invoice, query, selection and checkout data models
- services: Collaborator interfaces and demo implementations
- lib: Logging and hashing helpers
- data: Demo fixtures

Main entry point:
- state.InvoiceListState: one engine instance per list screen
"""

__all__ = ["__version__"]

__version__ = "0.1.0"

"""
Local library modules shared by the engine.

Modules:
    logs: Logging utilities
    objects: Stable hashing and JSON serialization
"""

from invoice_pay.lib import logs, objects

__all__ = ["logs", "objects"]

"""
Stable hashing and JSON helpers.

Filter contexts are identified by hashing the active filter values, so the
hash must not depend on dict ordering or on the Python session.
"""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from typing import Any


class HashResult:
    """Sha256 digest of a canonical JSON document."""

    def __init__(self, data: bytes) -> None:
        self._hash = hashlib.sha256(data)

    def hexdigest(self) -> str:
        return self._hash.hexdigest()

    def short(self, length: int = 12) -> str:
        """Return a truncated digest, long enough to tell filter sets apart."""
        return self.hexdigest()[:length]


def hash(obj: Any) -> HashResult:
    """
    Create a stable hash of an object.

    Keys are sorted and lists are kept in order, so {"a": 1, "b": [2, 3]}
    and {"b": [2, 3], "a": 1} hash identically.

    Args:
        obj: Any JSON-serializable object (dataclasses and Decimals allowed).

    Returns:
        HashResult instance with hexdigest() method.
    """
    json_str = json.dumps(obj, sort_keys=True, default=_default_serializer)
    return HashResult(json_str.encode("utf-8"))


def to_json(obj: Any, indent: int | None = None) -> str:
    """
    Serialize an object to a JSON string.

    Objects exposing to_dict() (payloads, results) are serialized through it.
    """
    if hasattr(obj, "to_dict"):
        obj = obj.to_dict()
    elif is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return json.dumps(obj, default=_default_serializer, indent=indent)


def _default_serializer(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    return str(obj)

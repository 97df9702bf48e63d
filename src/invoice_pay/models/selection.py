"""
Selection snapshot and aggregate models.

A SelectionSnapshot is the edit-preserving view of the checked invoices:
one SnapshotEntry per selected, resolvable invoice, in selection order.
Snapshots are immutable; every change produces a new snapshot.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Dict, Hashable, Iterator, Sequence, Tuple

from invoice_pay.utils import format_amount, format_currency


@dataclass(slots=True, frozen=True)
class SnapshotEntry:
    """
    Selected invoice with its editable amount to pay.

    Attributes:
        id: Invoice id.
        amount: Amount to pay as typed (or as seeded from the open balance).
        currency: Currency code of the open balance.
        origin_value: Raw open balance value the entry was seeded from.
    """

    id: Hashable
    amount: str
    currency: str
    origin_value: str = ""


class SelectionSnapshot:
    """Ordered, immutable collection of SnapshotEntry."""

    __slots__ = ("_entries", "_index")

    def __init__(self, entries: Sequence[SnapshotEntry] = ()) -> None:
        self._entries: Tuple[SnapshotEntry, ...] = tuple(entries)
        self._index: Dict[Hashable, int] = {
            entry.id: position for position, entry in enumerate(self._entries)
        }

    @property
    def entries(self) -> Tuple[SnapshotEntry, ...]:
        return self._entries

    def ids(self) -> list:
        return [entry.id for entry in self._entries]

    def get(self, entry_id: Hashable) -> SnapshotEntry | None:
        position = self._index.get(entry_id)
        return None if position is None else self._entries[position]

    def with_amount(self, entry_id: Hashable, amount: str) -> "SelectionSnapshot":
        """Return a new snapshot with one entry's amount replaced."""
        position = self._index.get(entry_id)
        if position is None:
            return self
        entries = list(self._entries)
        entries[position] = replace(entries[position], amount=amount)
        return SelectionSnapshot(entries)

    def __contains__(self, entry_id: object) -> bool:
        return entry_id in self._index

    def __iter__(self) -> Iterator[SnapshotEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SelectionSnapshot):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"SelectionSnapshot({list(self._entries)!r})"


@dataclass(slots=True, frozen=True)
class Aggregate:
    """
    Total of the amounts to pay in a snapshot.

    total is the exact decimal sum; rounding happens only in the
    formatted_total/format() display helpers.
    """

    total: Decimal = field(default_factory=Decimal)
    currency: str | None = None
    invalid_entries: Tuple[Hashable, ...] = ()
    decimal_places: int = 2

    @property
    def formatted_total(self) -> str:
        return format_amount(self.total, self.decimal_places)

    def format(self) -> str:
        """Return the total with currency symbol (e.g., '$665.00')."""
        return format_currency(self.total, self.currency, self.decimal_places)

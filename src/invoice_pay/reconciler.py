"""
Edit-preserving reconciliation of the selection snapshot.

The snapshot is derived from the selected ids and the page cache, but an
entry that already exists is never re-derived: a refresh that brings a new
server default for a selected invoice must not overwrite the amount the user
typed. Only invoices newly entering the selection are seeded from the
server's open balance.
"""

from typing import Callable, Hashable, List, Sequence

from invoice_pay.cache import PageCache
from invoice_pay.lib import logs
from invoice_pay.models.invoice import Money
from invoice_pay.models.selection import SelectionSnapshot, SnapshotEntry
from invoice_pay.utils import format_amount

LOG = logs.logger(__file__)


def open_balance(item) -> Money:
    return item.open_balance


class FieldEditReconciler:
    """
    Owns the current SelectionSnapshot for one list screen.

    Args:
        decimal_places: Decimal places used to format seeded amounts.
        default_amount: Returns the server-sourced default Money of an item.
    """

    def __init__(
        self,
        decimal_places: int = 2,
        default_amount: Callable[[object], Money] = open_balance,
    ) -> None:
        self.decimal_places = decimal_places
        self._default_amount = default_amount
        self._snapshot = SelectionSnapshot()

    @property
    def snapshot(self) -> SelectionSnapshot:
        return self._snapshot

    def reconcile(
        self,
        selected_ids: Sequence[Hashable],
        cache: PageCache,
        previous_snapshot: SelectionSnapshot | None = None,
    ) -> SelectionSnapshot:
        """
        Rebuild the snapshot for the given selection.

        Entries already in previous_snapshot are copied forward unchanged.
        New ids are seeded from the cached default amount formatted to the
        configured decimal places. Ids that are unresolvable or have nothing
        left to pay get no entry. Order follows selected_ids.

        Args:
            selected_ids: Selected ids in first-seen order.
            cache: Page cache for the current filter context.
            previous_snapshot: Snapshot to carry edits from; defaults to the
                current one.

        Returns:
            The new snapshot, which also becomes the current one.
        """
        previous = self._snapshot if previous_snapshot is None else previous_snapshot
        entries: List[SnapshotEntry] = []
        unresolved = 0
        for item_id in selected_ids:
            item = cache.get(item_id)
            if item is None:
                unresolved += 1
                continue
            default = self._default_amount(item)
            if default.amount == 0:
                continue
            existing = previous.get(item_id)
            if existing is not None:
                entries.append(existing)
                continue
            entries.append(
                SnapshotEntry(
                    id=item_id,
                    amount=format_amount(default.value, self.decimal_places),
                    currency=default.code,
                    origin_value=default.value,
                )
            )
        if unresolved:
            LOG.debug("reconcile - unresolved selections:%s", unresolved)
        self._snapshot = SelectionSnapshot(entries)
        return self._snapshot

    def edit_field(self, item_id: Hashable, new_value: str) -> SelectionSnapshot:
        """
        Replace the amount of one snapshot entry.

        Nothing is re-derived from the cache. Editing an id that has no entry
        leaves the snapshot unchanged.
        """
        if item_id not in self._snapshot:
            LOG.info("edit_field ignored - id:%s is not in the selection", item_id)
            return self._snapshot
        amount = "" if new_value is None else str(new_value)
        self._snapshot = self._snapshot.with_amount(item_id, amount)
        return self._snapshot

    def clear(self) -> None:
        self._snapshot = SelectionSnapshot()

"""
Page cache for the invoice list.

Accumulates every invoice the list source has returned under the current
filter context, keyed by id, so that a selection made on one page can still
be resolved after the user moves to another page. The cache only grows
within a context; reset() is the only way entries leave it.
"""

from typing import Dict, Generic, Hashable, Iterable, List, Protocol, TypeVar

from invoice_pay.lib import logs

LOG = logs.logger(__file__)


class ListItem(Protocol):
    """Anything with a stable id can be cached."""

    id: Hashable


T = TypeVar("T", bound=ListItem)


class PageCache(Generic[T]):
    """
    In-memory id -> item map for one filter context.

    Attributes:
        context_id: Filter context the current entries belong to.
    """

    def __init__(self, context_id: str = "") -> None:
        self.context_id = context_id
        self._items: Dict[Hashable, T] = {}
        self._sequences: Dict[Hashable, int] = {}

    def record_page(
        self,
        items: Iterable[T],
        filter_context_id: str,
        sequence: int | None = None,
    ) -> int:
        """
        Upsert a fetched page into the cache.

        Server data replaces what was cached for the same id. Pages tagged
        with another context are ignored, as are items without an id. When a
        request sequence is given, an item already written by a later request
        keeps its newer data.

        Returns:
            Number of items recorded.
        """
        if filter_context_id != self.context_id:
            LOG.debug(
                "record_page ignored - page context:%s current:%s",
                filter_context_id,
                self.context_id,
            )
            return 0

        recorded = 0
        for item in items:
            item_id = getattr(item, "id", None)
            if item_id is None:
                LOG.warning("record_page skipped item without id: %r", item)
                continue
            if sequence is not None:
                if sequence < self._sequences.get(item_id, sequence):
                    LOG.debug(
                        "record_page kept newer item - id:%s seq:%s newer:%s",
                        item_id,
                        sequence,
                        self._sequences[item_id],
                    )
                    continue
                self._sequences[item_id] = sequence
            self._items[item_id] = item
            recorded += 1
        return recorded

    def get(self, item_id: Hashable) -> T | None:
        return self._items.get(item_id)

    def get_all(self) -> List[T]:
        """Return every cached item in first-recorded order."""
        return list(self._items.values())

    def ids(self) -> List[Hashable]:
        return list(self._items)

    def reset(self, new_filter_context_id: str) -> None:
        """Discard all entries and start a new filter context."""
        LOG.debug(
            "reset - context:%s -> %s dropped:%s",
            self.context_id,
            new_filter_context_id,
            len(self._items),
        )
        self._items = {}
        self._sequences = {}
        self.context_id = new_filter_context_id

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

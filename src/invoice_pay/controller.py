"""
Filter, sort and pagination control for one list screen.

The controller owns the ListQuery and decides what each change invalidates:

- a filter change starts a new filter context, which resets the page cache
  and clears the selection;
- sort, page and refresh changes keep the context, the cache and (unless
  asked otherwise) the selection.

Every change dispatches a RefetchRequest tagged with the context id, so a
response arriving after the context moved on can be told apart and dropped.
"""

from typing import Any, Callable, List, Mapping

from invoice_pay.cache import PageCache
from invoice_pay.lib import logs, objects
from invoice_pay.models.common import SORT_ASC, SORT_DESC, ListQuery, RefetchRequest
from invoice_pay.reconciler import FieldEditReconciler
from invoice_pay.selection import SelectionTracker

LOG = logs.logger(__file__)

RefetchListener = Callable[[RefetchRequest], None]


class FilterSortController:
    """
    Owns query parameters and filter-context identity.

    Args:
        cache: Page cache reset on filter changes.
        selection: Selection cleared on filter changes.
        reconciler: Snapshot cleared together with the selection.
        query: Initial query; its filters define the first context.
    """

    def __init__(
        self,
        cache: PageCache,
        selection: SelectionTracker,
        reconciler: FieldEditReconciler,
        query: ListQuery | None = None,
    ) -> None:
        self._cache = cache
        self._selection = selection
        self._reconciler = reconciler
        self._query = query.copy() if query else ListQuery()
        self._generation = 0
        self._sequence = 0
        self._listeners: List[RefetchListener] = []
        self.context_id = self._new_context_id()
        self._cache.reset(self.context_id)

    @property
    def query(self) -> ListQuery:
        """Copy of the current query."""
        return self._query.copy()

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    def filter_context(self) -> str:
        """Stable hash of the filters that decide which rows match."""
        return objects.hash(self._query.active_filters()).short()

    def subscribe(self, listener: RefetchListener) -> None:
        """Register a callback invoked with every RefetchRequest."""
        self._listeners.append(listener)

    def set_filter(self, patch: Mapping[str, Any]) -> RefetchRequest:
        """
        Apply a filter patch and start a new filter context.

        Keys with None values are removed. The page cache is reset and the
        selection cleared even when the patch changes nothing. The offset
        goes back to the first page.
        """
        filters = dict(self._query.filters)
        for key, value in patch.items():
            if value is None:
                filters.pop(key, None)
            else:
                filters[key] = value
        self._query.filters = filters
        self._query.offset = 0

        self.context_id = self._new_context_id()
        self._cache.reset(self.context_id)
        self._selection.clear()
        self._reconciler.clear()
        LOG.info("set_filter - context:%s filters:%s", self.context_id, filters)
        return self._dispatch(keep_checked_items=False)

    def set_sort(self, key: str, direction: str = SORT_DESC) -> RefetchRequest:
        """Change ordering; the list restarts at the first page."""
        direction = direction.lower() if direction else SORT_DESC
        if direction not in (SORT_ASC, SORT_DESC):
            raise ValueError(f"Unknown sort direction: {direction}")
        self._query.sort_key = key
        self._query.sort_direction = direction
        self._query.offset = 0
        return self._dispatch(keep_checked_items=True)

    def set_page(self, offset: int, limit: int | None = None) -> RefetchRequest:
        self._query.offset = max(int(offset), 0)
        if limit is not None:
            self._query.limit = max(int(limit), 1)
        return self._dispatch(keep_checked_items=True)

    def refresh(self, keep_checked_items: bool = True) -> RefetchRequest:
        """
        Re-fetch the current page under the same context.

        With keep_checked_items False the selection is dropped, the cache is
        kept.
        """
        if not keep_checked_items:
            self._selection.clear()
            self._reconciler.clear()
        return self._dispatch(keep_checked_items=keep_checked_items)

    def is_current(self, request: RefetchRequest) -> bool:
        """True while request still belongs to the active filter context."""
        return request.context_id == self.context_id

    def is_latest(self, request: RefetchRequest) -> bool:
        """True when no request was dispatched after this one."""
        return self.is_current(request) and request.sequence == self._sequence

    def _new_context_id(self) -> str:
        self._generation += 1
        return f"{self._generation}:{self.filter_context()}"

    def _dispatch(self, keep_checked_items: bool) -> RefetchRequest:
        self._sequence += 1
        request = RefetchRequest(
            query=self._query.copy(),
            keep_checked_items=keep_checked_items,
            context_id=self.context_id,
            sequence=self._sequence,
        )
        LOG.debug(
            "refetch - seq:%s context:%s params:%s",
            request.sequence,
            request.context_id,
            request.query.to_params(),
        )
        for listener in self._listeners:
            listener(request)
        return request

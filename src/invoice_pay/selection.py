"""
Selection tracking independent of the page on screen.

The tracker holds the checked invoice ids in first-seen order. Checked ids
are kept even when their rows are not on the current page, and even when
they cannot currently be resolved in the page cache.
"""

from typing import Callable, Dict, Hashable, Iterable, List

from invoice_pay.cache import PageCache
from invoice_pay.lib import logs

LOG = logs.logger(__file__)


def is_selectable(item) -> bool:
    """Default select-all rule: enabled rows with something left to pay."""
    return bool(getattr(item, "selectable", True))


class SelectionTracker:
    """
    Set of checked ids that survives pagination and sorting.

    Args:
        cache: Page cache used to resolve ids for select-all.
        selectable: Predicate deciding whether select-all may tick an item.
    """

    def __init__(
        self,
        cache: PageCache,
        selectable: Callable[[object], bool] = is_selectable,
    ) -> None:
        self._cache = cache
        self._selectable = selectable
        # dict keeps first-seen order
        self._selected: Dict[Hashable, None] = {}

    def toggle(self, item_id: Hashable) -> bool:
        """
        Flip one id; returns True if it is selected afterwards.

        Single toggles are not filtered by selectability, the row checkbox
        decides whether the user may click it.
        """
        if item_id in self._selected:
            del self._selected[item_id]
            return False
        self._selected[item_id] = None
        return True

    def toggle_all(self, ids: Iterable[Hashable], checked: bool) -> List[Hashable]:
        """
        Check or uncheck many ids at once, across pages.

        When checking, ids whose cached item is disabled (or that are not in
        the cache at all) are skipped. When unchecking every given id is
        removed.

        Returns:
            The ids whose state changed.
        """
        changed: List[Hashable] = []
        for item_id in ids:
            if not checked:
                if item_id in self._selected:
                    del self._selected[item_id]
                    changed.append(item_id)
                continue
            if item_id in self._selected:
                continue
            item = self._cache.get(item_id)
            if item is None or not self._selectable(item):
                continue
            self._selected[item_id] = None
            changed.append(item_id)
        LOG.debug("toggle_all - checked:%s changed:%s", checked, len(changed))
        return changed

    def clear(self) -> None:
        self._selected = {}

    def is_selected(self, item_id: Hashable) -> bool:
        return item_id in self._selected

    def selected_ids(self) -> List[Hashable]:
        return list(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

"""
Query and request models shared by the controller and the list sources.

ListQuery is the full set of parameters a page fetch is made with.
RefetchRequest tags a query with the filter context it was dispatched
under so late responses can be recognised as stale.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

SORT_ASC = "asc"
SORT_DESC = "desc"

# Query keys that page or order the list without changing which rows match
NON_FILTER_KEYS = frozenset({"first", "offset", "orderBy"})


@dataclass(slots=True)
class ListQuery:
    """
    Filter, sort and pagination parameters for one page fetch.

    Attributes:
        filters: Active filter values (search text, status, dates, companies).
        sort_key: Field the list is ordered by.
        sort_direction: SORT_ASC or SORT_DESC.
        offset: Index of the first row of the page.
        limit: Page size.
    """

    filters: Dict[str, Any] = field(default_factory=dict)
    sort_key: str = "createdAt"
    sort_direction: str = SORT_DESC
    offset: int = 0
    limit: int = 10

    @property
    def order_by(self) -> str:
        """Return the remote orderBy value ("-key" for descending)."""
        prefix = "-" if self.sort_direction == SORT_DESC else ""
        return f"{prefix}{self.sort_key}"

    @property
    def page(self) -> int:
        """Current page number (1-indexed)."""
        return self.offset // max(self.limit, 1) + 1

    def active_filters(self) -> Dict[str, Any]:
        """Return the filters that define which rows match, without empty values."""
        return {
            key: value
            for key, value in self.filters.items()
            if key not in NON_FILTER_KEYS and value not in (None, "", [], ())
        }

    def is_filtering(self) -> bool:
        return bool(self.active_filters())

    def copy(self) -> "ListQuery":
        return ListQuery(
            filters=dict(self.filters),
            sort_key=self.sort_key,
            sort_direction=self.sort_direction,
            offset=self.offset,
            limit=self.limit,
        )

    def to_params(self) -> dict:
        """Serialize to the variables expected by the remote list query."""
        return {
            **self.active_filters(),
            "first": self.limit,
            "offset": self.offset,
            "orderBy": self.order_by,
        }


@dataclass(slots=True, frozen=True)
class RefetchRequest:
    """
    A page fetch dispatched by the controller.

    Attributes:
        query: Snapshot of the query at dispatch time.
        keep_checked_items: False only when the selection was dropped.
        context_id: Filter context the request belongs to.
        sequence: Monotonic dispatch counter; the newest request owns the view.
    """

    query: ListQuery
    keep_checked_items: bool
    context_id: str
    sequence: int

"""Totals for the selection snapshot."""

from decimal import Decimal
from typing import Hashable, List

from invoice_pay.models.selection import Aggregate, SelectionSnapshot
from invoice_pay.utils import parse_amount


class AggregationComputer:
    """
    Derives the amount-to-pay total from a snapshot.

    Amounts are summed as exact Decimals; entries holding the "." placeholder,
    garbage, zero or a negative amount add nothing and are reported in
    invalid_entries. The currency is the first entry's.
    """

    def __init__(self, decimal_places: int = 2) -> None:
        self.decimal_places = decimal_places

    def compute(self, snapshot: SelectionSnapshot) -> Aggregate:
        if not snapshot:
            return Aggregate(decimal_places=self.decimal_places)

        total = Decimal(0)
        invalid: List[Hashable] = []
        for entry in snapshot:
            amount = parse_amount(entry.amount)
            if amount <= 0:
                invalid.append(entry.id)
                continue
            total += amount

        return Aggregate(
            total=total,
            currency=snapshot.entries[0].currency,
            invalid_entries=tuple(invalid),
            decimal_places=self.decimal_places,
        )

from decimal import Decimal

from invoice_pay.aggregation import AggregationComputer
from invoice_pay.models import Aggregate, SelectionSnapshot, SnapshotEntry


def _snapshot(*amounts, currency="USD"):
    return SelectionSnapshot(
        SnapshotEntry(id=index + 1, amount=amount, currency=currency)
        for index, amount in enumerate(amounts)
    )


def test_empty_snapshot():
    aggregate = AggregationComputer().compute(SelectionSnapshot())
    assert aggregate.total == 0
    assert aggregate.currency is None
    assert aggregate.invalid_entries == ()


def test_sum_is_exact_decimal():
    aggregate = AggregationComputer().compute(_snapshot(*["0.1"] * 3))
    assert aggregate.total == Decimal("0.3")
    assert aggregate.formatted_total == "0.30"
    assert aggregate.currency == "USD"


def test_placeholder_and_invalid_amounts_are_excluded_and_reported():
    aggregate = AggregationComputer().compute(_snapshot("433", ".", "abc", "0", "-5", "232"))
    assert aggregate.total == Decimal("665")
    assert aggregate.invalid_entries == (2, 3, 4, 5)
    assert aggregate.format() == "$665.00"


def test_display_rounding_uses_configured_decimal_places():
    aggregate = AggregationComputer(decimal_places=3).compute(_snapshot("1.2345", "1"))
    assert aggregate.total == Decimal("2.2345")
    assert aggregate.formatted_total == "2.235"
    assert Aggregate(total=Decimal("1234.5"), currency="USD").format() == "$1,234.50"


def test_currency_comes_from_first_entry():
    snapshot = SelectionSnapshot(
        [
            SnapshotEntry(id=1, amount="1", currency="EUR"),
            SnapshotEntry(id=2, amount="1", currency="USD"),
        ]
    )
    assert AggregationComputer().compute(snapshot).currency == "EUR"


def test_compute_is_idempotent():
    computer = AggregationComputer()
    snapshot = _snapshot("10.10", ".", "5")
    first = computer.compute(snapshot)
    second = computer.compute(snapshot)
    assert first == second
    assert snapshot == _snapshot("10.10", ".", "5")

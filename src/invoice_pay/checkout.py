"""
Checkout payload building.

Turns the selection snapshot into the line items of the checkout mutation.
This is a pure transform: invalid input yields a ValidationError value and
the network call is left to the CheckoutService.
"""

from typing import Hashable, List

from invoice_pay.lib import logs
from invoice_pay.models.checkout import CheckoutLineItem, CheckoutPayload, ValidationError
from invoice_pay.models.invoice import InvoiceItem
from invoice_pay.models.selection import SelectionSnapshot, SnapshotEntry
from invoice_pay.utils import format_amount, is_placeholder, parse_amount, plain_amount

LOG = logs.logger(__file__)

EMPTY_SELECTION_MESSAGE = "Select at least one invoice to pay."
INVALID_AMOUNT_MESSAGE = "The payment amount entered has an invalid value."
MIXED_CURRENCY_MESSAGE = "Invoices in different currencies cannot be paid together."
INVALID_ID_MESSAGE = "Some selected invoices cannot be paid online."


class CheckoutPayloadBuilder:
    """
    Validates a snapshot and builds the CheckoutPayload.

    Args:
        decimal_places: Decimal places the amounts were seeded with; used to
            tell an untouched amount from an edited one.
    """

    def __init__(self, decimal_places: int = 2) -> None:
        self.decimal_places = decimal_places

    def build(self, snapshot: SelectionSnapshot) -> CheckoutPayload | ValidationError:
        """
        Build the payload for every entry of the snapshot.

        Returns:
            CheckoutPayload, or ValidationError when the snapshot is empty,
            any amount is "."/zero/negative/unparseable, or the entries do not
            share one currency, or an id is not a numeric entity id. Partial
            payloads are never produced.
        """
        if not snapshot:
            return ValidationError(EMPTY_SELECTION_MESSAGE)

        invalid = [entry.id for entry in snapshot if not self._is_valid(entry)]
        if invalid:
            LOG.info("build rejected - invalid amounts for ids:%s", invalid)
            return ValidationError(INVALID_AMOUNT_MESSAGE, tuple(invalid))

        bad_ids = [entry.id for entry in snapshot if _entity_id(entry.id) is None]
        if bad_ids:
            LOG.info("build rejected - non-numeric ids:%s", bad_ids)
            return ValidationError(INVALID_ID_MESSAGE, tuple(bad_ids))

        currencies = {entry.currency for entry in snapshot}
        if len(currencies) > 1:
            LOG.info("build rejected - mixed currencies:%s", sorted(currencies))
            return ValidationError(MIXED_CURRENCY_MESSAGE, tuple(snapshot.ids()))

        currency = snapshot.entries[0].currency
        line_items: List[CheckoutLineItem] = [
            CheckoutLineItem(
                entity_id=_entity_id(entry.id),
                amount=self._amount_to_send(entry),
                currency=entry.currency,
            )
            for entry in snapshot
        ]
        return CheckoutPayload(line_items=line_items, currency=currency)

    def build_single(self, item: InvoiceItem) -> CheckoutPayload | ValidationError:
        """Build the payload for paying one invoice's full open balance."""
        entry = SnapshotEntry(
            id=item.id,
            amount=item.open_balance.value,
            currency=item.currency,
            origin_value=item.open_balance.value,
        )
        return self.build(SelectionSnapshot([entry]))

    def _is_valid(self, entry: SnapshotEntry) -> bool:
        if is_placeholder(entry.amount):
            return False
        return parse_amount(entry.amount) > 0

    def _amount_to_send(self, entry: SnapshotEntry) -> str:
        # an untouched amount is the rounded origin value; send the exact one
        if entry.origin_value and entry.amount == format_amount(
            entry.origin_value, self.decimal_places
        ):
            return plain_amount(entry.origin_value)
        return plain_amount(entry.amount)


def _entity_id(entry_id: Hashable) -> int | None:
    if isinstance(entry_id, bool):
        return None
    try:
        return int(str(entry_id).strip())
    except ValueError:
        return None

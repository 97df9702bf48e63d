"""Checkout payload models handed to the checkout mutation."""

from dataclasses import dataclass, field
from typing import Hashable, List, Sequence, Tuple


@dataclass(slots=True, frozen=True)
class CheckoutLineItem:
    """One invoice to pay; amount is a plain decimal string, never a float."""

    entity_id: int
    amount: str
    currency: str

    def to_dict(self) -> dict:
        return {
            "entityId": self.entity_id,
            "amount": self.amount,
            "currency": self.currency,
        }


@dataclass(slots=True)
class CheckoutPayload:
    """Line items plus the currency of the checkout session."""

    line_items: List[CheckoutLineItem] = field(default_factory=list)
    currency: str = ""

    def to_dict(self) -> dict:
        return {
            "lineItems": [item.to_dict() for item in self.line_items],
            "currency": self.currency,
        }


@dataclass(slots=True, frozen=True)
class ValidationError:
    """
    Reason a payload could not be built.

    Returned rather than raised; the caller shows message once and does not
    call checkout.
    """

    message: str
    invalid_ids: Tuple[Hashable, ...] = ()


@dataclass(slots=True)
class CheckoutResult:
    """Outcome of a successful checkout mutation."""

    redirect_url: str
    line_item_ids: Sequence[int] = ()

"""Inquiry cart aggregation and pricing."""

import logging
from decimal import Decimal

from catering_inquiry_service.models.inquiry_models import CartTotals, InquiryItem
from catering_inquiry_service.models.menu_models import MenuItem
from catering_inquiry_service.services.pricing import PricingPolicy

logger = logging.getLogger(__name__)


class InquiryCart:
    """Staging list of menu items a customer wants pricing information about.

    The cart is the only way to mutate inquiry items. Out-of-range requests
    are normalized rather than rejected:
    - add() seeds a new entry at the item's minimum order quantity
    - set_quantity() with zero or less removes the entry
    - decrement() below the minimum order quantity removes the entry
    Totals are recomputed on every call to compute_totals().
    """

    def __init__(
        self,
        items: list[InquiryItem] | None = None,
        pricing: PricingPolicy | None = None,
    ) -> None:
        """Initialize the cart.

        Args:
            items: Existing cart contents, e.g. loaded from a session
            pricing: Pricing configuration (defaults to the standard policy)
        """
        self._items: list[InquiryItem] = [item.model_copy() for item in items or []]
        self.pricing = pricing or PricingPolicy()

    @property
    def items(self) -> list[InquiryItem]:
        """Copies of the current cart entries in insertion order."""
        return [item.model_copy() for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return self._find(item_id) is not None

    def _find(self, item_id: object) -> InquiryItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def add(self, menu_item: MenuItem) -> InquiryItem:
        """Add a menu item, or bump its quantity by one if already present.

        Args:
            menu_item: The menu item to stage

        Returns:
            The resulting cart entry
        """
        existing = self._find(menu_item.id)
        if existing is not None:
            existing.quantity += 1
            return existing.model_copy()

        entry = InquiryItem(
            id=menu_item.id,
            name=menu_item.name,
            price=menu_item.price,
            quantity=menu_item.order_floor,
            minimum_order_quantity=menu_item.minimum_order_quantity,
            image_url=menu_item.image_url,
        )
        self._items.append(entry)
        logger.debug(f"Added {menu_item.id} to inquiry cart with quantity {entry.quantity}")
        return entry.model_copy()

    def set_quantity(self, item_id: str, quantity: int) -> InquiryItem | None:
        """Replace an entry's quantity.

        The floor is not enforced here; a quantity of zero or less removes the
        entry instead.

        Args:
            item_id: Menu item identifier of the entry
            quantity: New quantity

        Returns:
            The updated entry, or None if it was removed or never existed
        """
        if quantity <= 0:
            self.remove(item_id)
            return None

        existing = self._find(item_id)
        if existing is None:
            return None

        existing.quantity = quantity
        return existing.model_copy()

    def decrement(self, item_id: str) -> InquiryItem | None:
        """Lower an entry's quantity by one, removing it below its floor.

        Args:
            item_id: Menu item identifier of the entry

        Returns:
            The updated entry, or None if it was removed or never existed
        """
        existing = self._find(item_id)
        if existing is None:
            return None

        if existing.quantity - 1 < existing.order_floor:
            self.remove(item_id)
            return None

        existing.quantity -= 1
        return existing.model_copy()

    def remove(self, item_id: str) -> bool:
        """Delete an entry unconditionally.

        Returns:
            True if an entry was removed, False if none matched
        """
        before = len(self._items)
        self._items = [item for item in self._items if item.id != item_id]
        return len(self._items) < before

    def clear(self) -> None:
        """Remove every entry."""
        self._items = []

    def compute_totals(self) -> CartTotals:
        """Compute item count, subtotal, delivery fee and total.

        Returns:
            CartTotals derived from the current contents
        """
        subtotal = sum((item.line_total for item in self._items), Decimal("0"))
        delivery_fee = self.pricing.delivery_fee_for(subtotal)
        qualifies = self.pricing.qualifies_for_free_delivery(subtotal)

        return CartTotals(
            item_count=sum(item.quantity for item in self._items),
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total=subtotal + delivery_fee,
            qualifies_for_free_delivery=qualifies,
            amount_until_free_delivery=(
                Decimal("0") if qualifies else self.pricing.free_delivery_threshold - subtotal
            ),
        )

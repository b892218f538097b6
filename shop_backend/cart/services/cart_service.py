# cart/services/cart_service.py

"""
CART SERVICE

Owner-scoped cart mutations. Money is server-owned: unit prices are
snapshotted from Product on add and re-snapshotted on quantity change.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.db.models import Sum

from cart.models import CartLine
from catalog.services.price_snapshot import get_product, line_total_for
from common.exceptions import CartLineNotFound, ProductInactive
from common.money import ZERO, money
from customers.services.owner import OwnerRef

logger = logging.getLogger(__name__)


def cart_lines(owner: OwnerRef):
    return CartLine.objects.filter(**owner.lookup()).select_related("product")


def cart_summary(owner: OwnerRef) -> dict:
    lines = list(cart_lines(owner))
    return {
        "items": lines,
        "item_count": sum(line.quantity for line in lines),
        "subtotal_amount": money(sum((line.line_total for line in lines), ZERO)),
    }


def cart_subtotal(owner: OwnerRef) -> Decimal:
    total = cart_lines(owner).aggregate(total=Sum("line_total")).get("total")
    return money(total or ZERO)


def _get_owned_line(owner: OwnerRef, line_id, *, lock: bool = False) -> CartLine:
    qs = CartLine.objects.filter(**owner.lookup())
    if lock:
        qs = qs.select_for_update()
    line = qs.select_related("product").filter(id=line_id).first()
    if line is None:
        raise CartLineNotFound(details={"line_id": str(line_id)})
    return line


def _locked_line(owner: OwnerRef, product) -> CartLine | None:
    return (
        CartLine.objects.select_for_update()
        .filter(**owner.lookup(), product=product)
        .first()
    )


def _create_line(owner: OwnerRef, product, quantity: int, unit_price) -> CartLine | None:
    try:
        with transaction.atomic():
            line = CartLine.objects.create(
                **owner.create_kwargs(),
                product=product,
                quantity=quantity,
                unit_price=unit_price,
                line_total=line_total_for(unit_price, quantity),
            )
    except IntegrityError:
        logger.info(
            "Cart line created concurrently; incrementing the locked row",
            extra={"product_id": str(product.id)},
        )
        return None

    logger.info(
        "Cart line added",
        extra={"line_id": str(line.id), "product_id": str(product.id), "quantity": quantity},
    )
    return line


@transaction.atomic
def add_item(owner: OwnerRef, product_id, quantity: int) -> CartLine:
    """
    Add a product or bump the quantity of its existing line.

    Two first adds of the same product may race on the insert; the loser
    increments the winner's row.
    """
    product = get_product(product_id)
    if not product.is_active:
        raise ProductInactive(details={"product_ids": [str(product.id)]})

    unit_price = money(product.unit_price)
    line = _locked_line(owner, product)

    if line is None:
        created = _create_line(owner, product, quantity, unit_price)
        if created is not None:
            return created
        line = _locked_line(owner, product)

    line.quantity = line.quantity + quantity
    line.unit_price = unit_price
    line.line_total = line_total_for(unit_price, line.quantity)
    line.save(update_fields=["quantity", "unit_price", "line_total", "updated_at"])

    logger.info(
        "Cart line incremented",
        extra={"line_id": str(line.id), "product_id": str(product.id), "quantity": line.quantity},
    )
    return line


@transaction.atomic
def set_quantity(owner: OwnerRef, line_id, quantity: int) -> CartLine:
    line = _get_owned_line(owner, line_id, lock=True)

    if not line.product.is_active:
        raise ProductInactive(details={"product_ids": [str(line.product_id)]})

    unit_price = money(line.product.unit_price)
    line.quantity = quantity
    line.unit_price = unit_price
    line.line_total = line_total_for(unit_price, quantity)
    line.save(update_fields=["quantity", "unit_price", "line_total", "updated_at"])
    return line


@transaction.atomic
def remove_item(owner: OwnerRef, line_id) -> None:
    line = _get_owned_line(owner, line_id, lock=True)
    line.delete()
    logger.info("Cart line removed", extra={"line_id": str(line_id)})


@transaction.atomic
def clear_cart(owner: OwnerRef) -> int:
    deleted, _ = CartLine.objects.filter(**owner.lookup()).delete()
    return deleted

# catalog/services/price_snapshot.py

"""
PRICE SNAPSHOT RESOLVER

Given cart lines ((product, quantity) pairs), resolve the CURRENT catalog
price and active flag for each.

Rules:
- resolve_prices() is a pure read: no writes, no partial result.
- Any inactive product fails the whole batch with ProductInactive,
  carrying every offending product id.
- refresh_line_prices() additionally persists corrected unit_price /
  line_total on lines whose snapshot drifted (carts may hold lines added
  at an older price). Order initialization calls it before totalling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from django.core.exceptions import ValidationError as DjangoValidationError

from catalog.models import Product
from common.exceptions import ProductInactive, ProductNotFound
from common.money import money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PricedLine:
    line: Any
    unit_price: Decimal
    line_total: Decimal
    changed: bool


def line_total_for(unit_price, quantity: int) -> Decimal:
    return money(money(unit_price) * int(quantity))


def get_product(product_id) -> Product:
    try:
        return Product.objects.get(id=product_id)
    except (Product.DoesNotExist, DjangoValidationError, ValueError):
        raise ProductNotFound(details={"product_id": str(product_id)}) from None


def resolve_prices(lines: Iterable[Any]) -> list[PricedLine]:
    lines = list(lines)

    inactive = [str(line.product_id) for line in lines if not line.product.is_active]
    if inactive:
        raise ProductInactive(
            "Some products are no longer available.",
            details={"product_ids": inactive},
        )

    priced = []
    for line in lines:
        unit_price = money(line.product.unit_price)
        total = line_total_for(unit_price, line.quantity)
        changed = (
            money(line.unit_price) != unit_price or money(line.line_total) != total
        )
        priced.append(
            PricedLine(line=line, unit_price=unit_price, line_total=total, changed=changed)
        )
    return priced


def refresh_line_prices(lines: Iterable[Any]) -> list[PricedLine]:
    priced = resolve_prices(lines)

    for p in priced:
        if not p.changed:
            continue
        logger.debug(
            "Line price snapshot corrected",
            extra={
                "line_id": str(p.line.pk),
                "product_id": str(p.line.product_id),
                "old_unit_price": str(p.line.unit_price),
                "new_unit_price": str(p.unit_price),
            },
        )
        p.line.unit_price = p.unit_price
        p.line.line_total = p.line_total
        p.line.save(update_fields=["unit_price", "line_total", "updated_at"])

    return priced

# orders/models/order.py

"""
ORDER MODEL

Root aggregate of the order engine.

Money invariants (model clean + DB checks):
- total_amount = subtotal_amount - discount_amount
- 0 <= discount_amount <= subtotal_amount

Ownership:
- exactly one of buyer / guest_session

Delivery invariants:
- PICKUP:   pickup_point and pickup_slot are set together
            (both null only before a slot is chosen)
- DELIVERY: both null, delivery_address required

Status:
- PENDING -> PROCESSING -> PAYED -> SHIPPED -> DELIVERED
- CANCELLED from any non-terminal status
- Only orders.services.* mutate status (see order_state.py)
"""

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q

User = settings.AUTH_USER_MODEL


class Order(models.Model):
    # --------------------------------------------------
    # STATUS
    # --------------------------------------------------
    STATUS_PENDING = "PENDING"
    STATUS_PROCESSING = "PROCESSING"
    STATUS_PAYED = "PAYED"
    STATUS_SHIPPED = "SHIPPED"
    STATUS_DELIVERED = "DELIVERED"
    STATUS_CANCELLED = "CANCELLED"

    STATUS_CHOICES = (
        (STATUS_PENDING, "Pending"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_PAYED, "Payed"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    )

    # --------------------------------------------------
    # DELIVERY / PAYMENT
    # --------------------------------------------------
    DELIVERY_PICKUP = "PICKUP"
    DELIVERY_DELIVERY = "DELIVERY"

    DELIVERY_CHOICES = (
        (DELIVERY_PICKUP, "Pickup"),
        (DELIVERY_DELIVERY, "Delivery"),
    )

    PAYMENT_ROBOKASSA = "ROBOKASSA"
    PAYMENT_CASH = "CASH"

    PAYMENT_METHOD_CHOICES = (
        (PAYMENT_ROBOKASSA, "Robokassa"),
        (PAYMENT_CASH, "Cash"),
    )

    id = models.BigAutoField(primary_key=True)

    buyer = models.ForeignKey(
        User,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )
    guest_session = models.ForeignKey(
        "customers.GuestSession",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )

    subtotal_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        db_index=True,
    )

    delivery_method = models.CharField(
        max_length=16,
        choices=DELIVERY_CHOICES,
        default=DELIVERY_PICKUP,
    )
    pickup_point = models.ForeignKey(
        "pickup.PickupPoint",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )
    pickup_slot = models.ForeignKey(
        "pickup.PickupSlot",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="orders",
    )
    delivery_address = models.TextField(blank=True, default="")

    coupon = models.ForeignKey(
        "coupons.Coupon",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders",
    )

    customer_name = models.CharField(max_length=255, blank=True, default="")
    customer_email = models.EmailField(blank=True, default="")
    customer_phone = models.CharField(max_length=32, blank=True, default="")

    payment_method = models.CharField(
        max_length=16,
        choices=PAYMENT_METHOD_CHOICES,
        blank=True,
        default="",
    )
    pay_later = models.BooleanField(default=False)

    bonus_earned = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    paid_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="order_status_created_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(buyer__isnull=False, guest_session__isnull=True)
                    | Q(buyer__isnull=True, guest_session__isnull=False)
                ),
                name="order_single_owner",
            ),
            models.CheckConstraint(
                condition=Q(discount_amount__gte=0),
                name="order_discount_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(total_amount__gte=0),
                name="order_total_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(discount_amount__lte=F("subtotal_amount")),
                name="order_discount_within_subtotal",
            ),
            models.CheckConstraint(
                condition=(
                    Q(pickup_point__isnull=True, pickup_slot__isnull=True)
                    | Q(
                        pickup_point__isnull=False,
                        pickup_slot__isnull=False,
                        delivery_method="PICKUP",
                    )
                ),
                name="order_pickup_pair_consistent",
            ),
        ]

    # --------------------------------------------------
    # VALIDATION
    # --------------------------------------------------
    def clean(self):
        if bool(self.buyer_id) == bool(self.guest_session_id):
            raise ValidationError("Order must belong to exactly one owner.")

        subtotal = Decimal(self.subtotal_amount or 0)
        discount = Decimal(self.discount_amount or 0)
        total = Decimal(self.total_amount or 0)

        if discount < 0 or discount > subtotal:
            raise ValidationError({"discount_amount": "Discount must be between 0 and subtotal."})

        if total != subtotal - discount:
            raise ValidationError({"total_amount": "Total must equal subtotal minus discount."})

        if bool(self.pickup_point_id) != bool(self.pickup_slot_id):
            raise ValidationError("Pickup point and pickup slot must be set together.")

        if self.delivery_method == self.DELIVERY_DELIVERY and self.pickup_slot_id:
            raise ValidationError("Delivery orders cannot hold a pickup slot.")

    def save(self, *args, **kwargs):
        self.full_clean(validate_unique=False, validate_constraints=False)
        return super().save(*args, **kwargs)

    # --------------------------------------------------
    # HELPERS
    # --------------------------------------------------
    @property
    def is_pending(self) -> bool:
        return self.status == self.STATUS_PENDING

    @property
    def is_guest(self) -> bool:
        return self.buyer_id is None

    def __str__(self):
        return f"Order #{self.pk} | {self.status} | {self.total_amount}"

# common/exceptions.py

"""
ORDER ENGINE ERRORS

Centralized domain errors for every order-engine service.

Each concrete error belongs to exactly one KIND, and the kind fixes
the HTTP status the API layer answers with:

    NotFound      404   missing, or not owned by the caller
    Conflict      409   a shared resource is already taken
    InvalidState  400   operation attempted outside its required status
    Validation    400   malformed or contradictory input
    Unavailable   400   inactive product / pickup point / coupon

Services raise these and let them propagate; views turn them into the
{"error": {...}} envelope via common.responses.shop_error_response.
"""

from __future__ import annotations

from typing import Any


class ShopError(Exception):
    """Base exception for all order-engine failures."""

    kind = "error"
    code = "shop_error"
    http_status = 400
    default_message = "Order engine error."

    def __init__(self, message: str | None = None, *, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_dict(self) -> dict:
        return {
            "code": self.code,
            "kind": self.kind,
            "message": self.message,
            "details": self.details,
        }


# ============================================================
# KINDS
# ============================================================


class NotFound(ShopError):
    kind = "not_found"
    code = "not_found"
    http_status = 404
    default_message = "Resource not found."


class Conflict(ShopError):
    kind = "conflict"
    code = "conflict"
    http_status = 409
    default_message = "Resource conflict."


class InvalidState(ShopError):
    kind = "invalid_state"
    code = "invalid_state"
    http_status = 400
    default_message = "Operation not allowed in the current state."


class Validation(ShopError):
    kind = "validation"
    code = "validation"
    http_status = 400
    default_message = "Invalid input."


class Unavailable(ShopError):
    kind = "unavailable"
    code = "unavailable"
    http_status = 400
    default_message = "Resource unavailable."


# ============================================================
# NOT FOUND
# ============================================================


class OrderNotFound(NotFound):
    code = "order_not_found"
    default_message = "Order not found."


class ProductNotFound(NotFound):
    code = "product_not_found"
    default_message = "Product not found."


class PickupPointNotFound(NotFound):
    code = "pickup_point_not_found"
    default_message = "Pickup point not found."


class PickupSlotNotFound(NotFound):
    code = "pickup_slot_not_found"
    default_message = "Pickup slot not found."


class CouponNotFound(NotFound):
    code = "coupon_not_found"
    default_message = "Coupon not found."


class PaymentNotFound(NotFound):
    code = "payment_not_found"
    default_message = "Payment not found."


class CartLineNotFound(NotFound):
    code = "cart_line_not_found"
    default_message = "Cart item not found."


# ============================================================
# CONFLICT
# ============================================================


class SlotFull(Conflict):
    code = "slot_full"
    default_message = "This pickup time is fully booked. Please choose another time."


class SlotInUse(Conflict):
    code = "slot_in_use"
    default_message = "Pickup slot is referenced by orders and cannot be deleted."


class PaymentAlreadyExists(Conflict):
    code = "payment_already_exists"
    default_message = "A payment already exists for this order."


class CouponAlreadyApplied(Conflict):
    code = "coupon_already_applied"
    default_message = "A coupon is already applied to this order."


class CouponCodeTaken(Conflict):
    code = "coupon_code_taken"
    default_message = "A coupon with this code already exists."


# ============================================================
# INVALID STATE
# ============================================================


class OrderNotPending(InvalidState):
    code = "order_not_pending"
    default_message = "Order is no longer pending."


class InvalidStatusTransition(InvalidState):
    code = "invalid_status_transition"
    default_message = "Order status transition is not allowed."


class NoCouponApplied(InvalidState):
    code = "no_coupon_applied"
    default_message = "No coupon is applied to this order."


class PaymentNotPending(InvalidState):
    code = "payment_not_pending"
    default_message = "Payment is not pending."


class CartEmpty(InvalidState):
    code = "cart_empty"
    default_message = "Cart is empty."


# ============================================================
# VALIDATION
# ============================================================


class OutsideServiceHours(Validation):
    code = "outside_service_hours"
    default_message = "Pickup is only available during service hours."


class PayLaterRequiresCash(Validation):
    code = "pay_later_requires_cash"
    default_message = "Pay later is only available for cash payments."


class AddressRequired(Validation):
    code = "address_required"
    default_message = "A delivery address is required."


class PickupDetailsRequired(Validation):
    code = "pickup_details_required"
    default_message = "Pickup point and pickup time are required."


class PickupNotSelected(Validation):
    code = "pickup_not_selected"
    default_message = "Select a pickup point and time before paying."


class InvalidCouponWindow(Validation):
    code = "invalid_coupon_window"
    default_message = "Coupon end date must be after its start date."


class InvalidCouponValue(Validation):
    code = "invalid_coupon_value"
    default_message = "Coupon value is invalid."


class CouponNotYetValid(Validation):
    code = "coupon_not_yet_valid"
    default_message = "Coupon is not valid yet."


class CouponExpired(Validation):
    code = "coupon_expired"
    default_message = "Coupon has expired."


class CouponUsageLimitReached(Validation):
    code = "coupon_usage_limit_reached"
    default_message = "Coupon usage limit has been reached."


class ManualCompletionNotAllowed(Validation):
    code = "manual_completion_not_allowed"
    default_message = "Only cash payments can be completed manually."


class OwnerRequired(Validation):
    code = "owner_required"
    http_status = 401
    default_message = "Sign in or start a guest session first."


# ============================================================
# UNAVAILABLE
# ============================================================


class ProductInactive(Unavailable):
    code = "product_inactive"
    default_message = "Product is not available."


class InactiveProductsPresent(Unavailable):
    code = "inactive_products_present"
    default_message = "Some products in the cart are no longer available."


class PickupPointUnavailable(Unavailable):
    code = "pickup_point_unavailable"
    default_message = "Pickup point is not available."


class CouponInactive(Unavailable):
    code = "coupon_inactive"
    default_message = "Coupon is not active."

from .payment import (
    AdminPaymentDetailSerializer,
    CreatePaymentInputSerializer,
    PaymentListSerializer,
    PaymentMutationResponseSerializer,
    PaymentSerializer,
    UpdatePaymentStatusInputSerializer,
)

__all__ = [
    "AdminPaymentDetailSerializer",
    "CreatePaymentInputSerializer",
    "PaymentListSerializer",
    "PaymentMutationResponseSerializer",
    "PaymentSerializer",
    "UpdatePaymentStatusInputSerializer",
]

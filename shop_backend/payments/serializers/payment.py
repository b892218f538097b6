# payments/serializers/payment.py

from rest_framework import serializers

from orders.serializers import OrderSerializer
from payments.models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    order_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Payment
        fields = [
            "id",
            "order_id",
            "reference",
            "amount",
            "method",
            "status",
            "created_at",
            "completed_at",
            "refunded_at",
        ]
        read_only_fields = fields


class CreatePaymentInputSerializer(serializers.Serializer):
    order_id = serializers.IntegerField(min_value=1)
    method = serializers.ChoiceField(choices=Payment.METHOD_CHOICES)


class UpdatePaymentStatusInputSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[
            (Payment.STATUS_COMPLETED, "Completed"),
            (Payment.STATUS_REFUNDED, "Refunded"),
        ]
    )


class PaymentMutationResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    payment = PaymentSerializer()
    order = OrderSerializer()


class PaymentListSerializer(PaymentSerializer):
    """Payment row plus a short summary of its order."""

    order_status = serializers.CharField(source="order.status", read_only=True)
    order_total = serializers.DecimalField(
        source="order.total_amount", max_digits=14, decimal_places=2, read_only=True
    )
    customer_email = serializers.EmailField(source="order.customer_email", read_only=True)

    class Meta(PaymentSerializer.Meta):
        fields = PaymentSerializer.Meta.fields + ["order_status", "order_total", "customer_email"]
        read_only_fields = fields


class AdminPaymentDetailSerializer(PaymentSerializer):
    order = OrderSerializer(read_only=True)

    class Meta(PaymentSerializer.Meta):
        fields = PaymentSerializer.Meta.fields + ["provider_payload", "order"]
        read_only_fields = fields

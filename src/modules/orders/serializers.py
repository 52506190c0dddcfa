"""Request and response shapes of the order endpoints.

Request serializers only check types; whether a status token or a
transition is acceptable is decided by ``OrderService``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.models import Order, OrderStatusHistory


class CreateOrderSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, default="", allow_blank=True)


class UpdateOrderSerializer(serializers.Serializer):
    notes = serializers.CharField(allow_blank=True)


class StatusTransitionSerializer(serializers.Serializer):
    """``status`` is a free token; unknown values are rejected by the service.

    Whitespace is kept so that a padded token is reported as unknown rather
    than silently matched.
    """

    status = serializers.CharField(max_length=50, trim_whitespace=False)
    notes = serializers.CharField(required=False, default="", allow_blank=True)

    def validate_status(self, value: str) -> str:
        if not value.strip():
            raise serializers.ValidationError("This field may not be blank.")
        return value


class StatusHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderStatusHistory
        fields = [
            "id",
            "old_status",
            "new_status",
            "actor_role",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with their status history."""

    status_history = StatusHistorySerializer(many=True, read_only=True)
    is_terminal = serializers.BooleanField(read_only=True)
    is_editable = serializers.BooleanField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_id",
            "status",
            "total_amount",
            "notes",
            "is_terminal",
            "is_editable",
            "created_at",
            "updated_at",
            "status_history",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for order lists (no nested relations)."""

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "customer_id",
            "status",
            "total_amount",
            "created_at",
        ]
        read_only_fields = fields


class TransitionActionSerializer(serializers.Serializer):
    status = serializers.CharField()
    label = serializers.CharField()
    color = serializers.CharField()
    requires_confirmation = serializers.BooleanField()


class OrderTransitionsSerializer(serializers.Serializer):
    order_id = serializers.UUIDField()
    status = serializers.CharField()
    role = serializers.CharField(allow_null=True)
    is_terminal = serializers.BooleanField()
    can_edit = serializers.BooleanField()
    actions = TransitionActionSerializer(many=True)

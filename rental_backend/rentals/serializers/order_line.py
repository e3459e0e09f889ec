# rentals/serializers/order_line.py

from rest_framework import serializers

from rentals.models import OrderLine


class OrderLineSerializer(serializers.ModelSerializer):
    """
    Order line (read-only).
    sub_total is always quantity * unit_price.
    """

    class Meta:
        model = OrderLine
        fields = [
            "id",
            "position",
            "product",
            "product_name",
            "quantity",
            "unit_price",
            "tax",
            "sub_total",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderLineInputSerializer(serializers.Serializer):
    """
    Input for adding / editing a line. Use partial=True for PATCH.
    Either product or product_name is required when adding.
    """

    product = serializers.UUIDField(required=False, allow_null=True)
    product_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    quantity = serializers.IntegerField(required=False, min_value=1)
    unit_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, min_value=0
    )
    tax = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, min_value=0)
    position = serializers.IntegerField(required=False, min_value=0)

    version = serializers.IntegerField(required=False, min_value=1, write_only=True)

    def validate(self, attrs):
        if self.partial:
            return attrs

        if not attrs.get("product") and not (attrs.get("product_name") or "").strip():
            raise serializers.ValidationError(
                {"product_name": "product or product_name is required"}
            )
        return attrs

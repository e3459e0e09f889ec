# orders/serializers/order.py

from rest_framework import serializers

from orders.models import Order, Reservation


class ReservationSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = Reservation
        fields = [
            "id",
            "order",
            "product",
            "product_name",
            "quantity",
            "is_valid",
            "created_at",
            "released_at",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """
    Orders are created from a quotation; product comes from the quotation.
    """

    product_name = serializers.CharField(source="product.name", read_only=True)
    reservations = ReservationSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "quotation",
            "product",
            "product_name",
            "delivery_address",
            "end_user_confirmation",
            "customer_confirmation",
            "reservations",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "product", "product_name", "reservations", "created_at", "updated_at"]

    def validate(self, attrs):
        if self.instance is not None and "quotation" in attrs and attrs["quotation"] != self.instance.quotation:
            raise serializers.ValidationError({"quotation": "An order's quotation cannot be changed"})
        return attrs

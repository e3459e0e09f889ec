# orders/serializers/quotation.py

from rest_framework import serializers

from orders.models import Quotation


class QuotationSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    duration = serializers.CharField(source="rate.duration", read_only=True)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)
    rental_reference = serializers.CharField(source="rental.reference", read_only=True, default=None)

    class Meta:
        model = Quotation
        fields = [
            "id",
            "product",
            "product_name",
            "rate",
            "duration",
            "quantity",
            "amount",
            "rental",
            "rental_reference",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "product_name", "duration", "amount", "rental_reference", "created_at", "updated_at"]

    def validate_quantity(self, value):
        if value is None or value < 1:
            raise serializers.ValidationError("quantity must be >= 1")
        return value

    def validate(self, attrs):
        product = attrs.get("product", getattr(self.instance, "product", None))
        rate = attrs.get("rate", getattr(self.instance, "rate", None))
        if product is not None and rate is not None and rate.product_id != product.pk:
            raise serializers.ValidationError({"rate": "Rate does not belong to the selected product"})
        return attrs

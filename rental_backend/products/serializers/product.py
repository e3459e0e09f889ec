# products/serializers/product.py

"""
PRODUCT SERIALIZER

Purpose:
- Canonical Product serializer for catalog management and rental forms.
- quantity is read-only here: stock moves only through products.services.stock.
"""

from rest_framework import serializers

from products.models import Product


class ProductSerializer(serializers.ModelSerializer):
    """
    Canonical Product Serializer.

    GUARANTEES:
    - SKU normalized to upper case
    - price is never negative
    - stock (quantity) is not writable through the API after creation
    """

    rate_count = serializers.IntegerField(source="rates.count", read_only=True)

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "description",
            "category",
            "price",
            "quantity",
            "terms_and_conditions",
            "image_url",
            "rate_count",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "rate_count",
            "created_at",
            "updated_at",
        ]

    def validate_sku(self, value):
        value = (value or "").strip().upper()
        if not value:
            raise serializers.ValidationError("SKU is required")
        return value

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("name cannot be blank")
        return value

    def validate_price(self, value):
        # Keep consistent with Product.clean(): non-negative (0 allowed)
        if value is None or value < 0:
            raise serializers.ValidationError("Price must be non-negative")
        return value

    def update(self, instance, validated_data):
        # Stock is owned by the stock service once the product exists
        validated_data.pop("quantity", None)
        return super().update(instance, validated_data)

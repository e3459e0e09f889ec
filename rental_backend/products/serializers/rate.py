# products/serializers/rate.py

from rest_framework import serializers

from products.models import Rate


class RateSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = Rate
        fields = [
            "id",
            "product",
            "product_name",
            "duration",
            "price",
            "is_extra",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "product_name", "created_at", "updated_at"]

    def validate_price(self, value):
        if value is None or value < 0:
            raise serializers.ValidationError("Rate price must be non-negative")
        return value

    def validate(self, attrs):
        product = attrs.get("product", getattr(self.instance, "product", None))
        duration = attrs.get("duration", getattr(self.instance, "duration", None))
        is_extra = attrs.get("is_extra", getattr(self.instance, "is_extra", False))

        clash = Rate.objects.filter(product=product, duration=duration, is_extra=is_extra)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)

        if clash.exists():
            raise serializers.ValidationError(
                {"duration": "A rate for this product and duration already exists."}
            )
        return attrs

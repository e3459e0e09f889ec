# orders/serializers/contract.py

from rest_framework import serializers

from orders.models import Contract


class ContractSerializer(serializers.ModelSerializer):
    class Meta:
        model = Contract
        fields = ["id", "order", "rental_period", "start_date", "created_at"]
        read_only_fields = ["id", "created_at"]

    def validate_rental_period(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("rental_period is required")
        return value

# rentals/serializers/rental.py

from django.conf import settings
from rest_framework import serializers

from rentals.models import RentalOrder
from rentals.serializers.order_line import OrderLineInputSerializer, OrderLineSerializer
from rentals.services.rental_lifecycle import allowed_actions


def totals_payload(rental: RentalOrder) -> dict:
    return {
        "untaxed_total": str(rental.untaxed_total),
        "total_tax": str(rental.tax_total),
        "total": str(rental.total),
    }


class RentalOrderSerializer(serializers.ModelSerializer):
    """
    Rental header (read-only).

    allowed_actions drives which Send / Confirm / Cancel / Print buttons the UI enables.
    """

    status_label = serializers.CharField(source="get_status_display", read_only=True)
    allowed_actions = serializers.SerializerMethodField()
    line_count = serializers.SerializerMethodField()

    class Meta:
        model = RentalOrder
        fields = [
            "id",
            "reference",
            "status",
            "status_label",
            *RentalOrder.EDITABLE_FIELDS,
            "untaxed_total",
            "tax_total",
            "total",
            "line_count",
            "allowed_actions",
            "version",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_allowed_actions(self, obj):
        return allowed_actions(obj.status, strict_send=getattr(settings, "RENTAL_STRICT_SEND", True))

    def get_line_count(self, obj):
        return len(obj.order_lines.all())


class RentalDetailSerializer(serializers.Serializer):
    """
    GET /api/rentals/rentals/{reference}/ payload:
    { rental, order_lines, totals, allowed_actions }
    """

    def to_representation(self, instance):
        rental = RentalOrderSerializer(instance).data
        return {
            "rental": rental,
            "order_lines": OrderLineSerializer(instance.order_lines.all(), many=True).data,
            "totals": totals_payload(instance),
            "allowed_actions": rental["allowed_actions"],
        }


class RentalWriteSerializer(serializers.Serializer):
    """
    Header edits (PUT / PATCH) and creation (POST).
    Every field is optional here; the view clears fields omitted from a PUT.
    Only free-text header fields are accepted; status and totals are rejected.
    """

    customer = serializers.CharField(required=False, allow_blank=True, max_length=255)
    invoice_address = serializers.CharField(required=False, allow_blank=True, max_length=500)
    delivery_address = serializers.CharField(required=False, allow_blank=True, max_length=500)
    schedule_date = serializers.CharField(required=False, allow_blank=True, max_length=100)
    responsible = serializers.CharField(required=False, allow_blank=True, max_length=255)

    rental_template = serializers.CharField(required=False, allow_blank=True, max_length=255)
    price_list = serializers.CharField(required=False, allow_blank=True, max_length=255)
    rental_period = serializers.CharField(required=False, allow_blank=True, max_length=255)
    rental_duration = serializers.CharField(required=False, allow_blank=True, max_length=100)
    expiration = serializers.CharField(required=False, allow_blank=True, max_length=100)
    rental_order_date = serializers.CharField(required=False, allow_blank=True, max_length=100)
    terms_and_conditions = serializers.CharField(required=False, allow_blank=True)

    lines = OrderLineInputSerializer(many=True, required=False)
    version = serializers.IntegerField(required=False, min_value=1, write_only=True)

    def validate(self, attrs):
        unknown = set(self.initial_data or {}) - set(self.fields)
        if unknown:
            raise serializers.ValidationError(
                {name: "This field is not editable." for name in sorted(unknown)}
            )
        return attrs


class RentalActionInputSerializer(serializers.Serializer):
    # Free text on purpose: unknown tokens are rejected by the lifecycle service
    action = serializers.CharField()
    version = serializers.IntegerField(required=False, min_value=1)

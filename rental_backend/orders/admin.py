# orders/admin.py

from django.contrib import admin

from orders.models import Contract, Order, Quotation, Reservation


@admin.register(Quotation)
class QuotationAdmin(admin.ModelAdmin):
    list_display = ("product", "rate", "quantity", "rental", "created_at")
    search_fields = ("product__name", "product__sku")
    list_filter = ("created_at",)


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "product",
        "delivery_address",
        "end_user_confirmation",
        "customer_confirmation",
        "created_at",
    )
    list_filter = ("end_user_confirmation", "customer_confirmation")
    search_fields = ("product__name", "delivery_address")


@admin.register(Contract)
class ContractAdmin(admin.ModelAdmin):
    list_display = ("order", "rental_period", "start_date")


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    """Reservations change only through the order service."""

    list_display = ("order", "product", "quantity", "is_valid", "created_at", "released_at")
    list_filter = ("is_valid",)

    def has_change_permission(self, request, obj=None):
        return False

    def has_add_permission(self, request):
        return False

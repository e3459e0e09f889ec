# rentals/admin.py
"""
=====================================================
PATH: rentals/admin.py
=====================================================

Admin is read-mostly:
- status and totals are never edited here (use the API / lifecycle service)
- lines are shown inline for inspection
"""

from django.contrib import admin

from rentals.models import OrderLine, RentalOrder


class OrderLineInline(admin.TabularInline):
    model = OrderLine
    extra = 0
    can_delete = False
    fields = ("position", "product_name", "quantity", "unit_price", "tax", "sub_total")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(RentalOrder)
class RentalOrderAdmin(admin.ModelAdmin):
    list_display = (
        "reference",
        "customer",
        "status",
        "untaxed_total",
        "tax_total",
        "total",
        "created_at",
    )
    list_filter = ("status", "created_at")
    search_fields = ("reference", "customer")
    ordering = ("-created_at",)

    readonly_fields = (
        "reference",
        "status",
        "untaxed_total",
        "tax_total",
        "total",
        "version",
        "created_at",
        "updated_at",
    )

    inlines = [OrderLineInline]

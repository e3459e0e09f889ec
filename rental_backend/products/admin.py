# products/admin.py
"""
=====================================================
PATH: products/admin.py
=====================================================

Admin rules:
- Products are edited directly; rates are edited inline on the product page.
- quantity is read-only after creation (stock moves through products.services.stock).
"""

from django.contrib import admin

from products.models import Product, Rate


# =====================================================
# RATE INLINE
# =====================================================

class RateInline(admin.TabularInline):
    model = Rate
    extra = 1
    fields = ("duration", "price", "is_extra")


# =====================================================
# PRODUCT
# =====================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        "sku",
        "name",
        "category",
        "price",
        "quantity",
        "is_active",
        "created_at",
    )
    list_filter = ("is_active", "category", "created_at")
    search_fields = ("sku", "name")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at")

    inlines = [RateInline]

    def get_readonly_fields(self, request, obj=None):
        if obj is not None:
            return (*self.readonly_fields, "quantity")
        return self.readonly_fields


# =====================================================
# RATE (LIST)
# =====================================================

@admin.register(Rate)
class RateAdmin(admin.ModelAdmin):
    list_display = ("product", "duration", "price", "is_extra")
    list_filter = ("duration", "is_extra")
    search_fields = ("product__name", "product__sku")

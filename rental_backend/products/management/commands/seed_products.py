from decimal import Decimal

from django.core.management.base import BaseCommand

from products.models import Product, Rate


PRODUCTS = [
    # sku, name, category, price, quantity
    ("LAP-PRO", "Laptop Pro", "Electronics", "800.00", 25),
    ("MOUSE-WL", "Wireless Mouse", "Electronics", "50.00", 100),
    ("PROJ-4K", "Projector 4K", "AV Equipment", "200.00", 10),
    ("CHAIR-EV", "Event Chair", "Furniture", "15.00", 300),
    ("TENT-L", "Large Tent", "Outdoor", "495.00", 6),
]

# Multipliers applied to the product price per duration
RATE_FACTORS = {
    Rate.Duration.HOURLY: Decimal("0.10"),
    Rate.Duration.DAILY: Decimal("1.00"),
    Rate.Duration.WEEKLY: Decimal("5.00"),
    Rate.Duration.MONTHLY: Decimal("18.00"),
}


class Command(BaseCommand):
    help = "Seed rental catalog products and their duration rates"

    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding products and rates..."))

        # -------------------------------
        # PRODUCTS
        # -------------------------------
        for sku, name, category, price, quantity in PRODUCTS:
            product, created = Product.objects.get_or_create(
                sku=sku,
                defaults={
                    "name": name,
                    "category": category,
                    "price": Decimal(price),
                    "quantity": quantity,
                },
            )

            # -------------------------------
            # RATES
            # -------------------------------
            for duration, factor in RATE_FACTORS.items():
                Rate.objects.get_or_create(
                    product=product,
                    duration=duration,
                    is_extra=False,
                    defaults={"price": (product.price * factor).quantize(Decimal("0.01"))},
                )

            if created:
                self.stdout.write(f"  + {product.sku} {product.name}")

        self.stdout.write(self.style.SUCCESS("Products and rates seeded successfully."))

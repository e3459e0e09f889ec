from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from rentals.models import RentalOrder
from rentals.services import rental_service


# (header, lines, actions to reach the target status)
SAMPLE_RENTALS = [
    (
        {
            "customer": "Acme Corporation",
            "invoice_address": "123 Business St, Business City, BC 12345",
            "delivery_address": "456 Delivery Ave, Delivery Town, DT 67890",
            "rental_template": "Standard Rental Template",
            "expiration": "2025-09-15",
            "rental_order_date": "2025-08-11",
            "price_list": "Standard Price List",
            "rental_period": "Monthly",
            "rental_duration": "6 months",
        },
        [
            ("Office Chair Premium", 5, "200.00", "0.00"),
            ("Standing Desk Adjustable", 3, "495.00", "135.00"),
            ("Monitor Arm Dual", 8, "132.00", "96.00"),
        ],
        ["send"],
    ),
    (
        {
            "customer": "Tech Solutions Ltd",
            "invoice_address": "789 Tech Park, Innovation City, IC 54321",
            "delivery_address": "789 Tech Park, Innovation City, IC 54321",
            "rental_template": "Premium Rental Template",
            "expiration": "2025-10-01",
            "rental_order_date": "2025-08-10",
            "price_list": "Premium Price List",
            "rental_period": "Weekly",
            "rental_duration": "12 weeks",
        },
        [
            ("Laptop Pro", 10, "800.00", "240.00"),
            ("Wireless Mouse", 10, "50.00", "15.00"),
        ],
        ["send", "confirm"],
    ),
    (
        {
            "customer": "StartUp Ventures",
            "invoice_address": "321 Startup Blvd, Entrepreneur City, EC 98765",
            "delivery_address": "654 Co-work Space, Shared Office, SO 13579",
            "rental_template": "Startup Rental Template",
            "expiration": "2025-08-25",
            "rental_order_date": "2025-08-09",
            "price_list": "Discounted Price List",
            "rental_period": "Daily",
            "rental_duration": "30 days",
        },
        [
            ("Projector 4K", 2, "200.00", "40.00"),
        ],
        [],
    ),
    (
        {
            "customer": "Global Enterprise Inc",
            "invoice_address": "555 Corporate Plaza, Metro City, MC 11111",
            "delivery_address": "777 Distribution Center, Logistics Hub, LH 22222",
            "rental_template": "Enterprise Rental Template",
            "expiration": "2025-12-31",
            "rental_order_date": "2025-08-08",
            "price_list": "Enterprise Price List",
            "rental_period": "Quarterly",
            "rental_duration": "2 years",
        },
        [
            ("Laptop Pro", 25, "800.00", "600.00"),
            ("Conference Table", 4, "300.00", "120.00"),
        ],
        ["confirm"],
    ),
    (
        {
            "customer": "Small Business Co",
            "invoice_address": "99 Main Street, Small Town, ST 33333",
            "delivery_address": "99 Main Street, Small Town, ST 33333",
            "rental_template": "Basic Rental Template",
            "expiration": "2025-09-01",
            "rental_order_date": "2025-08-07",
            "price_list": "Basic Price List",
            "rental_period": "Monthly",
            "rental_duration": "3 months",
        },
        [
            ("Event Chair", 50, "15.00", "75.00"),
        ],
        ["send", "cancel"],
    ),
]


class Command(BaseCommand):
    help = "Seed the five sample rentals (R0001-R0005) with their order lines"

    def add_arguments(self, parser):
        parser.add_argument(
            "--reset",
            action="store_true",
            help="Delete every existing rental before seeding.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["reset"]:
            deleted, _ = RentalOrder.objects.all().delete()
            self.stdout.write(self.style.WARNING(f"Deleted {deleted} existing rows."))

        if RentalOrder.objects.exists():
            self.stdout.write(
                self.style.WARNING("Rentals already exist; skipping (use --reset to reseed).")
            )
            return

        self.stdout.write(self.style.WARNING("Seeding rentals..."))

        for header, lines, actions in SAMPLE_RENTALS:
            rental = rental_service.create_rental(
                lines=[
                    {
                        "product_name": name,
                        "quantity": qty,
                        "unit_price": Decimal(price),
                        "tax": Decimal(tax),
                    }
                    for name, qty, price, tax in lines
                ],
                **header,
            )

            for action in actions:
                rental = rental_service.perform_action(
                    reference=rental.reference, action=action
                ).rental

            self.stdout.write(f"  + {rental.reference} {rental.customer} [{rental.status}] total={rental.total}")

        self.stdout.write(self.style.SUCCESS("Rentals seeded successfully."))

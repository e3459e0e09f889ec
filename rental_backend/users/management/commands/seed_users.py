# users/management/commands/seed_users.py

from __future__ import annotations

from dataclasses import dataclass

from django.core.management.base import BaseCommand
from django.db import transaction

from permissions.roles import ROLE_ADMIN, ROLE_MANAGER, ROLE_RENTAL_AGENT
from users.models import User


@dataclass(frozen=True)
class SeedUserSpec:
    label: str
    role: str
    email: str


SEED_USERS = (
    SeedUserSpec(label="Admin", role=ROLE_ADMIN, email="admin@rental.local"),
    SeedUserSpec(label="Manager", role=ROLE_MANAGER, email="manager@rental.local"),
    SeedUserSpec(label="Agent", role=ROLE_RENTAL_AGENT, email="agent@rental.local"),
)


class Command(BaseCommand):
    help = "Seed one staff user per role (idempotent)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default="ChangeMe123!",
            help="Password assigned to newly created users",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options["password"]

        for spec in SEED_USERS:
            user = User.objects.filter(email=spec.email).first()
            if user is None:
                User.objects.create_user(
                    email=spec.email,
                    password=password,
                    first_name=spec.label,
                    role=spec.role,
                    is_staff=True,
                    is_superuser=spec.role == ROLE_ADMIN,
                )
                self.stdout.write(self.style.SUCCESS(f"Created {spec.label}: {spec.email}"))
                continue

            user.role = spec.role
            user.is_staff = True
            user.save(update_fields=["role", "is_staff"])
            self.stdout.write(f"Updated {spec.label}: {spec.email}")

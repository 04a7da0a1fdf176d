from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand

from modules.warehouse.dtos import QuantityChangeRequest, RegisterProductRequest
from modules.warehouse.models import Product
from modules.warehouse.repositories.django_repository import ProductDjangoStore
from modules.warehouse.services import WarehouseService

# (name, in stock, reserved)
DEMO_CATALOGUE = [
    ("Ceramic Capacitor 10uF", 5000, 1200),
    ("Carbon Film Resistor 4.7k", 12000, 0),
    ("Schottky Diode 1N5819", 800, 800),
    ("NPN Transistor 2N2222", 2500, 300),
    ("Tactile Switch 6x6mm", 0, 0),
    ("USB-C Receptacle", 450, 120),
    ("Crystal Oscillator 16MHz", 300, 50),
    ("LDO Regulator 3.3V", 1500, 1450),
]


class Command(BaseCommand):
    help = "Seed the warehouse with a demo product catalogue."

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Seed even if products already exist (duplicates get resolved names).",
        )

    def handle(self, *args, **options):
        if Product.objects.exists() and not options["force"]:
            self.stdout.write("Warehouse already has products; use --force to seed anyway.")
            return

        service = WarehouseService(
            store=ProductDjangoStore(),
            max_attempts=settings.WAREHOUSE_MAX_UPDATE_ATTEMPTS,
            name_marker=settings.WAREHOUSE_DUPLICATE_NAME_MARKER,
        )

        created = 0
        for name, in_stock, reserved in DEMO_CATALOGUE:
            result = service.register_product(
                RegisterProductRequest(name=name, in_stock_quantity=in_stock)
            )
            if not result.success:
                self.stderr.write(f"Skipped {name!r}: {result.error_reason}")
                continue
            if reserved:
                reservation = service.order(
                    QuantityChangeRequest(product_id=result.model.id, quantity=reserved)
                )
                if not reservation.success:
                    self.stderr.write(
                        f"Reservation skipped for {result.model.name!r}: "
                        f"{reservation.error_reason}"
                    )
                    continue
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Seed completed: products={created}"))

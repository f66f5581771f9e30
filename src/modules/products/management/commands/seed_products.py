from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand

from modules.products.dtos import ProductInput
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

CATALOG = [
    ("Monitor 27\"", "IPS panel, 144Hz", Decimal("1299.90")),
    ("Mechanical Keyboard", "Brown switches, ABNT2 layout", Decimal("399.90")),
    ("Gaming Mouse", None, Decimal("249.90")),
    ("Notebook 14\"", "16GB RAM, 512GB SSD", Decimal("3999.00")),
    ("Headset", "USB, noise cancelling", Decimal("299.90")),
    ("Office Desk", "120x60cm", Decimal("899.00")),
    ("Ergonomic Chair", "Adjustable lumbar support", Decimal("1499.00")),
    ("Bookshelf", None, Decimal("699.00")),
    ("A4 Paper", "500 sheets", Decimal("29.90")),
    ("Blue Pen", None, Decimal("4.90")),
    ("Notebook", "Spiral, 96 pages", Decimal("19.90")),
    ("Stapler", None, Decimal("39.90")),
]


class Command(BaseCommand):
    help = "Seed the product catalog with development data."

    def handle(self, *args, **options):
        self.stdout.write("Seeding products...")
        service = ProductService(repository=ProductDjangoRepository())

        created = 0
        for name, description, price in CATALOG:
            if Product.objects.filter(name=name).exists():
                continue
            service.create_product(
                ProductInput(name=name, description=description, price=price)
            )
            created += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed completed: products={created}, "
                f"skipped={len(CATALOG) - created}"
            )
        )

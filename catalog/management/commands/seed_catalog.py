"""Seed sample refrigeration and electrical products for local development.

Re-running is idempotent; existing products are reused by slug.
"""

from decimal import Decimal

from catalog.models import Product, ProductVariant
from catalog.services import unique_variant_slug
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.text import slugify

PRODUCTS = [
    {
        "name": "Compresor Embraco 1/3 HP R134a",
        "description": "Compresor hermético para neveras y congeladores domésticos.",
        "price": Decimal("385000"),
        "stock": 14,
        "category": "Compresores",
        "subcategory": "Herméticos",
        "brand": "Embraco",
        "sku": "CMP-EMB-13-134",
        "tags": ["nevera", "r134a"],
        "specifications": [
            {"label": "Potencia", "value": "1/3 HP"},
            {"label": "Voltaje", "value": "115 V"},
            {"label": "Refrigerante", "value": "R134a"},
        ],
        "variants": [
            {"name": "115 V", "price": Decimal("385000"), "stock": 8, "attributes": {"voltaje": "115V"}},
            {"name": "220 V", "price": Decimal("398000"), "stock": 6, "attributes": {"voltaje": "220V"}},
        ],
    },
    {
        "name": "Gas Refrigerante R410A 11.3 kg",
        "description": "Cilindro de refrigerante para aires acondicionados tipo minisplit.",
        "price": Decimal("520000"),
        "stock": 20,
        "category": "Refrigerantes",
        "brand": "Genetron",
        "sku": "GAS-R410A-113",
        "tags": ["aire acondicionado"],
        "specifications": [{"label": "Contenido", "value": "11.3 kg"}],
    },
    {
        "name": "Termostato Danfoss 077B",
        "description": "Termostato de bulbo para refrigeración comercial.",
        "price": Decimal("96000"),
        "stock": 4,
        "category": "Controles",
        "subcategory": "Termostatos",
        "brand": "Danfoss",
        "sku": "TER-DAN-077B",
    },
    {
        "name": "Capacitor de Marcha 35+5 uF",
        "description": "Capacitor dual para condensadoras.",
        "price": Decimal("28000"),
        "stock": 50,
        "category": "Eléctricos",
        "subcategory": "Capacitores",
        "brand": "Genteq",
        "sku": "CAP-35-5",
    },
    {
        "name": "Contactor 3 Polos 40 A",
        "description": "Contactor para arranque de compresores y motores.",
        "price": Decimal("74000"),
        "stock": 0,
        "category": "Eléctricos",
        "subcategory": "Contactores",
        "brand": "Schneider",
        "sku": "CON-3P-40",
    },
]


class Command(BaseCommand):
    help = "Seed sample catalog products and variants"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding catalog data...")
        created = 0
        for raw in PRODUCTS:
            data = dict(raw)
            variants = data.pop("variants", [])
            product, was_created = Product.objects.get_or_create(slug=slugify(data["name"]), defaults=data)
            created += int(was_created)
            for position, variant in enumerate(variants):
                if product.variants.filter(name=variant["name"]).exists():
                    continue
                ProductVariant.objects.create(
                    product=product,
                    slug=unique_variant_slug(product=product, name=variant["name"]),
                    is_default=position == 0,
                    position=position,
                    **variant,
                )
        self.stdout.write(self.style.SUCCESS(f"Catalog seeded ({created} new products)."))

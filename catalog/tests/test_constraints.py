from decimal import Decimal

import pytest
from catalog.tests.factories import ProductFactory, ProductVariantFactory
from django.db import IntegrityError, transaction


@pytest.mark.django_db
def test_product_price_cannot_be_negative():
    with pytest.raises(IntegrityError), transaction.atomic():
        ProductFactory(price=Decimal("-1.00"))


@pytest.mark.django_db
def test_variant_price_cannot_be_negative():
    with pytest.raises(IntegrityError), transaction.atomic():
        ProductVariantFactory(price=Decimal("-0.01"))

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction
from orders.tests.factories import OrderFactory, OrderItemFactory


@pytest.mark.django_db
def test_order_total_cannot_be_negative():
    with pytest.raises(IntegrityError), transaction.atomic():
        OrderFactory(total=Decimal("-5.00"))


@pytest.mark.django_db
def test_order_item_quantity_and_price_are_checked():
    with pytest.raises(IntegrityError), transaction.atomic():
        OrderItemFactory(quantity=0)
    with pytest.raises(IntegrityError), transaction.atomic():
        OrderItemFactory(price=Decimal("-1.00"))

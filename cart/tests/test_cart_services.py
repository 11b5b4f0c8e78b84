from decimal import Decimal

import pytest
from cart.models import CartItem
from cart.selectors import cart_totals, get_or_create_cart
from cart.services import CartError, add_item, clear_cart, merge_items, remove_item, update_item
from catalog.tests.factories import ProductFactory, ProductVariantFactory
from django.http import Http404
from users.tests.factories import UserFactory


@pytest.mark.django_db
def test_get_or_create_cart_is_idempotent():
    user = UserFactory()
    assert get_or_create_cart(user=user).pk == get_or_create_cart(user=user).pk


@pytest.mark.django_db
def test_add_item_accumulates_on_same_line():
    user = UserFactory()
    product = ProductFactory(stock=10)

    add_item(user=user, product_id=product.id, quantity=1)
    item = add_item(user=user, product_id=product.id, quantity=2)

    assert item.quantity == 3
    assert CartItem.objects.filter(cart__user=user).count() == 1


@pytest.mark.django_db
def test_absent_and_concrete_variant_are_distinct_lines():
    user = UserFactory()
    variant = ProductVariantFactory(stock=5)
    product = variant.product

    add_item(user=user, product_id=product.id, quantity=1)
    add_item(user=user, product_id=product.id, variant_id=variant.id, quantity=2)
    add_item(user=user, product_id=product.id, quantity=1)

    lines = {(li.variant_id, li.quantity) for li in CartItem.objects.filter(cart__user=user)}
    assert lines == {(None, 2), (variant.id, 2)}


@pytest.mark.django_db
def test_variant_line_priced_and_stocked_by_variant():
    user = UserFactory()
    variant = ProductVariantFactory(price=Decimal("120.00"), stock=2, product__price=Decimal("100.00"))

    item = add_item(user=user, product_id=variant.product_id, variant_id=variant.id, quantity=2)
    assert item.unit_price == Decimal("120.00")
    with pytest.raises(CartError, match="Only 2 units available"):
        add_item(user=user, product_id=variant.product_id, variant_id=variant.id, quantity=1)


@pytest.mark.django_db
def test_add_out_of_stock_product_fails():
    user = UserFactory()
    product = ProductFactory(stock=0)
    with pytest.raises(CartError, match="out of stock"):
        add_item(user=user, product_id=product.id, quantity=1)
    assert not CartItem.objects.exists()


@pytest.mark.django_db
def test_add_beyond_stock_fails_and_keeps_line():
    user = UserFactory()
    product = ProductFactory(stock=3)
    add_item(user=user, product_id=product.id, quantity=2)
    with pytest.raises(CartError, match="Only 3 units available"):
        add_item(user=user, product_id=product.id, quantity=2)
    assert CartItem.objects.get(cart__user=user).quantity == 2


@pytest.mark.django_db
def test_inactive_variant_is_rejected():
    user = UserFactory()
    variant = ProductVariantFactory(is_active=False)
    with pytest.raises(CartError, match="Variant is not available"):
        add_item(user=user, product_id=variant.product_id, variant_id=variant.id, quantity=1)


@pytest.mark.django_db
def test_unknown_product_or_foreign_variant_is_404():
    user = UserFactory()
    product = ProductFactory()
    foreign = ProductVariantFactory()
    with pytest.raises(Http404):
        add_item(user=user, product_id=999999, quantity=1)
    with pytest.raises(Http404):
        add_item(user=user, product_id=product.id, variant_id=foreign.id, quantity=1)


@pytest.mark.django_db
@pytest.mark.parametrize("quantity", [0, -1, True, "2"])
def test_quantity_must_be_positive_integer(quantity):
    user = UserFactory()
    product = ProductFactory()
    with pytest.raises(CartError, match="positive integer"):
        add_item(user=user, product_id=product.id, quantity=quantity)


@pytest.mark.django_db
def test_update_item_overwrites_and_checks_stock():
    user = UserFactory()
    product = ProductFactory(stock=4)
    add_item(user=user, product_id=product.id, quantity=1)

    assert update_item(user=user, product_id=product.id, quantity=4).quantity == 4
    with pytest.raises(CartError):
        update_item(user=user, product_id=product.id, quantity=5)


@pytest.mark.django_db
def test_update_and_remove_missing_line_are_404():
    user = UserFactory()
    variant = ProductVariantFactory()
    add_item(user=user, product_id=variant.product_id, quantity=1)

    with pytest.raises(Http404):
        update_item(user=user, product_id=variant.product_id, variant_id=variant.id, quantity=1)
    with pytest.raises(Http404):
        remove_item(user=user, product_id=variant.product_id, variant_id=variant.id)

    remove_item(user=user, product_id=variant.product_id)
    assert not CartItem.objects.exists()


@pytest.mark.django_db
def test_clear_cart_on_empty_cart_is_noop():
    user = UserFactory()
    cart = clear_cart(user=user)
    assert cart.items.count() == 0


@pytest.mark.django_db
def test_merge_adds_entries_in_order():
    user = UserFactory()
    p1, p2 = ProductFactory(), ProductFactory()
    add_item(user=user, product_id=p1.id, quantity=1)

    cart = merge_items(user=user, items=[{"product_id": p1.id, "quantity": 1}, {"product_id": p2.id, "quantity": 2}])

    quantities = {li.product_id: li.quantity for li in cart.items.all()}
    assert quantities == {p1.id: 2, p2.id: 2}
    assert cart_totals(cart=cart)["item_count"] == 4


@pytest.mark.django_db
def test_merge_failure_keeps_earlier_entries():
    user = UserFactory()
    ok, empty, later = ProductFactory(), ProductFactory(stock=0), ProductFactory()

    with pytest.raises(CartError):
        merge_items(
            user=user,
            items=[
                {"product_id": ok.id, "quantity": 1},
                {"product_id": empty.id, "quantity": 1},
                {"product_id": later.id, "quantity": 1},
            ],
        )

    assert list(CartItem.objects.filter(cart__user=user).values_list("product_id", flat=True)) == [ok.id]


@pytest.mark.django_db
def test_cart_totals_use_current_prices():
    user = UserFactory()
    product = ProductFactory(price=Decimal("10.00"))
    add_item(user=user, product_id=product.id, quantity=3)
    product.price = Decimal("12.50")
    product.save()

    totals = cart_totals(cart=get_or_create_cart(user=user))
    assert totals == {"subtotal": Decimal("37.50"), "total": Decimal("37.50"), "item_count": 3}

import pytest
from catalog.services import unique_variant_slug
from catalog.tests.factories import ProductFactory, ProductVariantFactory


@pytest.mark.django_db
def test_variant_slug_uses_product_prefix():
    product = ProductFactory(name="Compresor", slug="compresor")
    assert unique_variant_slug(product=product, name="220 V") == "compresor-220-v"


@pytest.mark.django_db
def test_variant_named_like_product_gets_variante_suffix():
    product = ProductFactory(name="Compresor", slug="compresor")
    assert unique_variant_slug(product=product, name="Compresor") == "compresor-variante"
    assert unique_variant_slug(product=product, name="!!!") == "compresor-variante"


@pytest.mark.django_db
def test_variant_name_already_prefixed_is_kept():
    product = ProductFactory(name="Compresor", slug="compresor")
    assert unique_variant_slug(product=product, name="Compresor 1 HP") == "compresor-1-hp"


@pytest.mark.django_db
def test_variant_slug_collision_appends_counter():
    product = ProductFactory(name="Compresor", slug="compresor")
    ProductVariantFactory(product=product, slug="compresor-220-v")
    ProductVariantFactory(product=product, slug="compresor-220-v-1")
    assert unique_variant_slug(product=product, name="220 V") == "compresor-220-v-2"


@pytest.mark.django_db
def test_variant_slug_ignores_itself_on_update():
    product = ProductFactory(name="Compresor", slug="compresor")
    variant = ProductVariantFactory(product=product, slug="compresor-220-v")
    assert unique_variant_slug(product=product, name="220 V", exclude_id=variant.id) == "compresor-220-v"

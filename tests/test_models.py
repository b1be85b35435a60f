import pytest

from apps.products.models import Category, Product, ProductVariant


pytestmark = pytest.mark.django_db


def test_category_path_and_level():
    apparel = Category.objects.create(name='Apparel')
    tops = Category.objects.create(name='Tops', parent=apparel)
    tees = Category.objects.create(name='T-Shirts', parent=tops)

    assert tees.full_path == 'Apparel > Tops > T-Shirts'
    assert tees.level == 2
    assert apparel.level == 0
    assert tees.get_ancestors() == [apparel, tops]


def test_category_slug_is_made_unique():
    first = Category.objects.create(name='Sale')
    second = Category.objects.create(name='Sale')

    assert first.slug == 'sale'
    assert second.slug == 'sale-1'


def test_product_slug_is_generated_from_name():
    product = Product.objects.create(name='Summer Tee Deluxe')
    assert product.slug == 'summer-tee-deluxe'


def test_product_stock_totals(product):
    ProductVariant.objects.create(product=product, sku='SUMM-A', quantity_in_stock=3)
    ProductVariant.objects.create(product=product, sku='SUMM-B', quantity_in_stock=0)

    assert product.variant_count == 2
    assert product.total_stock == 3
    assert not ProductVariant.objects.get(sku='SUMM-B').is_in_stock

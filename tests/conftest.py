import pytest
from rest_framework.test import APIClient

from apps.products.models import Category, Product

from .factories import make_attribute


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def category(db):
    return Category.objects.create(name='Apparel')


@pytest.fixture
def product(db, category):
    return Product.objects.create(name='Summer Tee', slug='summer-tee', category=category)


@pytest.fixture
def size(db):
    return make_attribute('Size', ['Small', 'Large'], display_order=1)


@pytest.fixture
def color(db):
    return make_attribute('Color', ['Red', 'Blue', 'Green'], display_order=2)

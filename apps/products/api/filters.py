from django_filters import rest_framework as filters
from apps.products.models import Product, ProductVariant, AttributeValue


class ProductFilter(filters.FilterSet):
    category = filters.NumberFilter(field_name='category__id')
    category_slug = filters.CharFilter(field_name='category__slug')

    class Meta:
        model = Product
        fields = ['category', 'category_slug', 'is_active', 'slug']


class ProductVariantFilter(filters.FilterSet):
    """Filter for variants by product, stock and attribute values."""

    product = filters.UUIDFilter(field_name='product__id')
    product_slug = filters.CharFilter(field_name='product__slug')

    # Price filters
    min_price = filters.NumberFilter(field_name='price', lookup_expr='gte')
    max_price = filters.NumberFilter(field_name='price', lookup_expr='lte')

    in_stock = filters.BooleanFilter(method='filter_in_stock')
    attribute_value = filters.UUIDFilter(method='filter_by_attribute_value')

    class Meta:
        model = ProductVariant
        fields = ['product', 'product_slug', 'sku']

    def filter_in_stock(self, queryset, name, value):
        if value is True:
            return queryset.filter(quantity_in_stock__gt=0)
        if value is False:
            return queryset.filter(quantity_in_stock__lte=0)
        return queryset

    def filter_by_attribute_value(self, queryset, name, value):
        return queryset.filter(productvariantattribute__attribute_value_id=value).distinct()


class AttributeValueFilter(filters.FilterSet):
    attribute_name = filters.CharFilter(field_name='attribute__name', lookup_expr='iexact')

    class Meta:
        model = AttributeValue
        fields = ['attribute', 'attribute_name']

from .serializers import (
    CategorySerializer,
    ProductSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    AttributeSerializer,
    AttributeValueSerializer,
    ProductVariantSerializer,
    ProductVariantCreateSerializer,
    ProductVariantListSerializer,
    ProductVariantDetailSerializer,
    GenerateVariantsSerializer,
    ProductWithVariantsSerializer,
)

__all__ = [
    'CategorySerializer',
    'ProductSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
    'AttributeSerializer',
    'AttributeValueSerializer',
    'ProductVariantSerializer',
    'ProductVariantCreateSerializer',
    'ProductVariantListSerializer',
    'ProductVariantDetailSerializer',
    'GenerateVariantsSerializer',
    'ProductWithVariantsSerializer',
]

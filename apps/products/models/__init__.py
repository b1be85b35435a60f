"""
Product catalogue models with generated variants.

Model Hierarchy:
- Category: Hierarchical grouping of products
- Product: Base product (e.g., "Summer Tee")
- Attribute: Axis of variation (Size, Color)
- AttributeValue: Values for each attribute (Large, Red)
- ProductVariant: Individual SKU with price and stock
- ProductVariantAttribute: Junction between variants and attribute values
"""

from .category import Category
from .product import Product
from .attribute import Attribute, AttributeValue
from .variant import ProductVariant, ProductVariantAttribute

__all__ = [
    'Category',
    'Product',
    'Attribute',
    'AttributeValue',
    'ProductVariant',
    'ProductVariantAttribute',
]

from .sku import generate_sku, generate_unique_sku, generate_slug
from .gateway import VariantGateway, DjangoVariantGateway, PersistedVariant
from .variant_generator import (
    AttributeValueRef,
    AttributeSelection,
    AttributeDetail,
    GeneratedVariant,
    BulkCreationResult,
    Created,
    Failed,
    generate_combinations,
    create_variant_row,
    summarize_outcomes,
    bulk_create_variants,
)
from .attribute_catalogue import AttributeCatalogueService
from .products import ProductService

__all__ = [
    'generate_sku',
    'generate_unique_sku',
    'generate_slug',
    'VariantGateway',
    'DjangoVariantGateway',
    'PersistedVariant',
    'AttributeValueRef',
    'AttributeSelection',
    'AttributeDetail',
    'GeneratedVariant',
    'BulkCreationResult',
    'Created',
    'Failed',
    'generate_combinations',
    'create_variant_row',
    'summarize_outcomes',
    'bulk_create_variants',
    'AttributeCatalogueService',
    'ProductService',
]

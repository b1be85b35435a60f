"""
Product-level operations built on the variant generator.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from django.core.exceptions import ValidationError
from django.db import transaction

from apps.products.exceptions import (
    CategoryNotFound,
    DuplicateSlugError,
    EmptyAttributeError,
    ProductNotFound,
    VariantGenerationError,
)
from apps.products.models import Category, Product, ProductVariant

from .gateway import DjangoVariantGateway, VariantGateway
from .sku import generate_sku, generate_slug, generate_unique_sku
from .variant_generator import (
    AttributeSelection,
    BulkCreationResult,
    GeneratedVariant,
    bulk_create_variants,
    generate_combinations,
)

logger = logging.getLogger(__name__)


def _get_product(product_id) -> Product:
    try:
        return Product.objects.get(pk=product_id)
    except (Product.DoesNotExist, ValidationError):
        raise ProductNotFound(product_id)


def _check_attributes(attributes: Sequence[AttributeSelection]) -> None:
    """Reject generation input before anything is created."""
    if not attributes:
        raise VariantGenerationError("At least one attribute is required to generate variants")
    for attr in attributes:
        if not attr.values:
            raise EmptyAttributeError(attr.attribute_name)


class ProductService:

    @staticmethod
    def preview_variants(
        product_id,
        attributes: Sequence[AttributeSelection],
        default_quantity: int = 0
    ) -> List[GeneratedVariant]:
        """Generate variant combinations for a product without creating them."""
        product = _get_product(product_id)
        return generate_combinations(product.slug, attributes, default_quantity)

    @staticmethod
    def generate_and_create_variants(
        product_id,
        attributes: Sequence[AttributeSelection],
        default_quantity: int = 0,
        default_price: Optional[Decimal] = None,
        gateway: Optional[VariantGateway] = None
    ) -> BulkCreationResult:
        """
        Generate variants from attribute combinations and create them.

        Partial failures are reported in the returned result; rows that were
        created stay created.
        """
        product = _get_product(product_id)
        _check_attributes(attributes)

        variants = generate_combinations(product.slug, attributes, default_quantity)
        if not variants:
            raise VariantGenerationError("No variant combinations generated")

        logger.info(
            "Generating %s variants for product %s (%s)",
            len(variants), product.pk, product.slug
        )
        return bulk_create_variants(product.pk, variants, gateway=gateway, price=default_price)

    @staticmethod
    def create_product_with_generated_variants(
        product_data: Dict[str, Any],
        attributes: Sequence[AttributeSelection],
        default_price: Optional[Decimal] = None,
        default_quantity: int = 0,
        gateway: Optional[VariantGateway] = None
    ) -> Tuple[Product, BulkCreationResult]:
        """
        Create a product and its generated variants.

        Expected product_data:
        {
            "name": "Summer Tee",
            "slug": "summer-tee",        # optional
            "description": "...",        # optional
            "category_id": "<id>"        # optional
        }
        """
        category_id = product_data.get('category_id')
        if category_id is not None and not Category.objects.filter(pk=category_id).exists():
            raise CategoryNotFound(category_id)

        slug = product_data.get('slug') or generate_slug(product_data['name'])
        if not slug:
            raise VariantGenerationError(
                "Product name must contain letters or digits to build a slug"
            )
        if Product.objects.filter(slug=slug).exists():
            raise DuplicateSlugError(slug)

        product = Product.objects.create(
            name=product_data['name'],
            slug=slug,
            description=product_data.get('description', ''),
            category_id=category_id,
            is_active=product_data.get('is_active', True),
        )

        variants = generate_combinations(slug, attributes, default_quantity)
        result = bulk_create_variants(product.pk, variants, gateway=gateway, price=default_price)
        return product, result

    @staticmethod
    def create_variant_with_auto_sku(
        product_id,
        price: Decimal = Decimal('0.00'),
        quantity_in_stock: int = 0,
        sku: Optional[str] = None,
        attribute_values: Iterable[str] = (),
        gateway: Optional[VariantGateway] = None
    ) -> ProductVariant:
        """
        Create a single variant, generating its SKU when none is given.

        A generated SKU that is already taken is replaced by one with a
        timestamp suffix.
        """
        product = _get_product(product_id)
        gateway = gateway or DjangoVariantGateway()
        labels = list(attribute_values)

        sku = sku or generate_sku(product.slug, labels)
        if gateway.sku_exists(sku):
            unique_sku = generate_unique_sku(product.slug, labels)
            logger.warning("SKU %s already exists, using %s", sku, unique_sku)
            sku = unique_sku

        with transaction.atomic():
            return ProductVariant.objects.create(
                product=product,
                sku=sku,
                price=price,
                quantity_in_stock=quantity_in_stock,
            )

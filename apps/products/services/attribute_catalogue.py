"""
Service supplying attribute data to the variant generator.
"""

import logging
from typing import Iterable, List

from django.core.exceptions import ValidationError
from django.db import transaction

from apps.products.exceptions import (
    AttributeNotFound,
    AttributeValueNotFound,
    DuplicateAttributeError,
    EmptyAttributeError,
)
from apps.products.models import Attribute, AttributeValue, ProductVariant, ProductVariantAttribute

from .variant_generator import AttributeSelection, AttributeValueRef

logger = logging.getLogger(__name__)


class AttributeCatalogueService:
    """
    Looks up attributes and their values for variant generation and
    validates attribute value combinations.
    """

    @staticmethod
    def attributes_for_generation(attribute_ids: Iterable[str]) -> List[AttributeSelection]:
        """
        Build the generator input for the given attributes, in the order given.

        Raises:
            AttributeNotFound: an id does not match any attribute
            EmptyAttributeError: an attribute has no values yet
        """
        selections = []
        for attribute_id in attribute_ids:
            try:
                attribute = Attribute.objects.get(pk=attribute_id)
            except (Attribute.DoesNotExist, ValidationError):
                raise AttributeNotFound(attribute_id)

            values = list(attribute.values.order_by('display_order', 'value'))
            if not values:
                raise EmptyAttributeError(attribute.name)

            selections.append(AttributeSelection(
                attribute_id=str(attribute.pk),
                attribute_name=attribute.name,
                values=tuple(
                    AttributeValueRef(id=str(v.pk), value=v.value) for v in values
                ),
            ))
        return selections

    @staticmethod
    def validate_attribute_combination(attribute_value_ids: Iterable[str]) -> bool:
        """
        Ensure a set of attribute values uses each attribute at most once.

        Raises:
            AttributeValueNotFound: a value id does not exist
            DuplicateAttributeError: two values belong to the same attribute
        """
        seen = set()
        for value_id in attribute_value_ids:
            try:
                value = AttributeValue.objects.select_related('attribute').get(pk=value_id)
            except (AttributeValue.DoesNotExist, ValidationError):
                raise AttributeValueNotFound(value_id)

            if value.attribute_id in seen:
                raise DuplicateAttributeError(value.attribute.name)
            seen.add(value.attribute_id)
        return True

    @staticmethod
    def attribute_values_for_variant(variant: ProductVariant) -> List[AttributeValue]:
        return list(variant.get_attribute_values())

    @staticmethod
    def link_attribute_to_variant(variant: ProductVariant, attribute_value_id: str) -> AttributeValue:
        """
        Add one attribute value to a variant.

        Raises:
            AttributeValueNotFound: the value id does not exist
            DuplicateAttributeError: the variant already has a value for
                that attribute
        """
        linked_ids = list(
            ProductVariantAttribute.objects.filter(variant=variant)
            .values_list('attribute_value_id', flat=True)
        )
        AttributeCatalogueService.validate_attribute_combination(linked_ids + [attribute_value_id])

        value = AttributeValue.objects.select_related('attribute').get(pk=attribute_value_id)
        ProductVariantAttribute.objects.create(variant=variant, attribute_value=value)
        logger.info("Linked %s=%s to variant %s", value.attribute.name, value.value, variant.sku)
        return value

    @staticmethod
    def update_variant_attributes(
        variant: ProductVariant,
        attribute_value_ids: Iterable[str]
    ) -> List[AttributeValue]:
        """Replace all attribute values of a variant."""
        attribute_value_ids = list(attribute_value_ids)
        AttributeCatalogueService.validate_attribute_combination(attribute_value_ids)

        with transaction.atomic():
            ProductVariantAttribute.objects.filter(variant=variant).delete()
            ProductVariantAttribute.objects.bulk_create([
                ProductVariantAttribute(variant=variant, attribute_value_id=value_id)
                for value_id in attribute_value_ids
            ])
        return list(variant.get_attribute_values())

    @staticmethod
    def remove_attribute_from_variant(variant: ProductVariant, attribute_value_id: str) -> int:
        """Unlink one attribute value; returns the number of links removed."""
        try:
            value = AttributeValue.objects.get(pk=attribute_value_id)
        except (AttributeValue.DoesNotExist, ValidationError):
            raise AttributeValueNotFound(attribute_value_id)

        deleted, _ = ProductVariantAttribute.objects.filter(
            variant=variant, attribute_value=value
        ).delete()
        return deleted

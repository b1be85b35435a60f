"""
Persistence gateway used by bulk variant creation.

The engine only talks to ``VariantGateway``; ``DjangoVariantGateway`` is
the ORM-backed implementation used in production.
"""

import uuid
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from django.db import transaction

from apps.products.exceptions import AttributeValueNotFound
from apps.products.models import AttributeValue, ProductVariant, ProductVariantAttribute


@dataclass(frozen=True)
class PersistedVariant:
    id: str
    sku: str


class VariantGateway:
    """Storage operations needed to persist generated variants."""

    def row(self):
        """Context wrapping the work done for a single variant."""
        return nullcontext()

    def insert_variant(self, data: Dict[str, Any]) -> Optional[PersistedVariant]:
        raise NotImplementedError

    def link_variant_attributes(self, variant_id: str, attribute_value_ids: Sequence[str]) -> None:
        raise NotImplementedError

    def sku_exists(self, sku: str) -> bool:
        raise NotImplementedError

    def attribute_value_ids_for_variant(self, variant_id: str) -> List[str]:
        raise NotImplementedError


class DjangoVariantGateway(VariantGateway):

    def row(self):
        # Savepoint per variant: a failed link also undoes the insert
        return transaction.atomic()

    def insert_variant(self, data):
        variant = ProductVariant.objects.create(**data)
        return PersistedVariant(id=str(variant.pk), sku=variant.sku)

    def link_variant_attributes(self, variant_id, attribute_value_ids):
        existing = set(AttributeValue.objects.filter(
            pk__in=attribute_value_ids
        ).values_list('pk', flat=True))
        for value_id in attribute_value_ids:
            if uuid.UUID(str(value_id)) not in existing:
                raise AttributeValueNotFound(value_id)

        ProductVariantAttribute.objects.bulk_create([
            ProductVariantAttribute(variant_id=variant_id, attribute_value_id=value_id)
            for value_id in attribute_value_ids
        ])

    def sku_exists(self, sku):
        return ProductVariant.objects.filter(sku=sku).exists()

    def attribute_value_ids_for_variant(self, variant_id):
        return [
            str(pk) for pk in ProductVariantAttribute.objects.filter(
                variant_id=variant_id
            ).values_list('attribute_value_id', flat=True)
        ]

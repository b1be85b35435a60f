"""
Variant combination engine.

Two stages:

1. ``generate_combinations`` turns a product slug and the selected
   attributes into every combination of their values (Cartesian product),
   each with a SKU and a default stock quantity. Nothing is persisted.
2. ``bulk_create_variants`` persists generated variants one row at a time
   through a ``VariantGateway``. A failing row is recorded and skipped;
   rows created before it are kept.
"""

import itertools
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from .gateway import DjangoVariantGateway, PersistedVariant, VariantGateway
from .sku import generate_sku

logger = logging.getLogger(__name__)


# =============================================================================
# Value types
# =============================================================================

@dataclass(frozen=True)
class AttributeValueRef:
    id: str
    value: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AttributeValueRef':
        return cls(id=data['id'], value=data['value'])

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'value': self.value}


@dataclass(frozen=True)
class AttributeSelection:
    """An attribute picked for generation, with the values to combine."""
    attribute_id: str
    attribute_name: str
    values: Sequence[AttributeValueRef] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AttributeSelection':
        return cls(
            attribute_id=data['attributeId'],
            attribute_name=data['attributeName'],
            values=tuple(AttributeValueRef.from_dict(v) for v in data.get('values', [])),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'attributeId': self.attribute_id,
            'attributeName': self.attribute_name,
            'values': [v.to_dict() for v in self.values],
        }


@dataclass(frozen=True)
class AttributeDetail:
    attribute_id: str
    attribute_name: str
    value: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'attributeId': self.attribute_id,
            'attributeName': self.attribute_name,
            'value': self.value,
        }


@dataclass(frozen=True)
class GeneratedVariant:
    sku: str
    quantity_in_stock: int
    attribute_value_ids: Sequence[str] = ()
    attribute_details: Sequence[AttributeDetail] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GeneratedVariant':
        return cls(
            sku=data['sku'],
            quantity_in_stock=data['quantityInStock'],
            attribute_value_ids=tuple(data.get('attributeValueIds', [])),
            attribute_details=tuple(
                AttributeDetail(
                    attribute_id=d['attributeId'],
                    attribute_name=d['attributeName'],
                    value=d['value'],
                )
                for d in data.get('attributeDetails', [])
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sku': self.sku,
            'quantityInStock': self.quantity_in_stock,
            'attributeValueIds': list(self.attribute_value_ids),
            'attributeDetails': [d.to_dict() for d in self.attribute_details],
        }


@dataclass(frozen=True)
class Created:
    id: str
    sku: str


@dataclass(frozen=True)
class Failed:
    sku: str
    error: str


RowOutcome = Union[Created, Failed]


@dataclass
class BulkCreationResult:
    success: bool
    created_count: int
    failed_count: int
    variants: List[PersistedVariant] = field(default_factory=list)
    errors: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BulkCreationResult':
        return cls(
            success=data['success'],
            created_count=data['createdCount'],
            failed_count=data['failedCount'],
            variants=[PersistedVariant(id=v['id'], sku=v['sku']) for v in data['variants']],
            errors=data.get('errors'),
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'success': self.success,
            'createdCount': self.created_count,
            'failedCount': self.failed_count,
            'variants': [{'id': v.id, 'sku': v.sku} for v in self.variants],
        }
        # errors is absent, not empty, when nothing failed
        if self.errors is not None:
            payload['errors'] = list(self.errors)
        return payload


# =============================================================================
# Combination generation
# =============================================================================

def generate_combinations(
    product_slug: str,
    attributes: Sequence[AttributeSelection],
    default_quantity: int = 0
) -> List[GeneratedVariant]:
    """
    Generate every variant combination for the selected attributes.

    The leftmost attribute varies slowest, and each attribute's values are
    taken in the order given. For cardinalities c1..cN the result has
    c1 * ... * cN variants; an attribute without values therefore yields
    no variants at all.

    Example:
        Size [Small, Large] x Color [Red, Blue] ->
        SMA-RED, SMA-BLU, LAR-RED, LAR-BLU
    """
    if not attributes:
        return []

    variants = []
    for combination in itertools.product(*(attr.values for attr in attributes)):
        details = tuple(
            AttributeDetail(
                attribute_id=attr.attribute_id,
                attribute_name=attr.attribute_name,
                value=val.value,
            )
            for attr, val in zip(attributes, combination)
        )
        variants.append(GeneratedVariant(
            sku=generate_sku(product_slug, [val.value for val in combination]),
            quantity_in_stock=default_quantity,
            attribute_value_ids=tuple(val.id for val in combination),
            attribute_details=details,
        ))
    return variants


# =============================================================================
# Bulk creation
# =============================================================================

def create_variant_row(
    gateway: VariantGateway,
    product_id: Any,
    variant: GeneratedVariant,
    price: Optional[Decimal] = None
) -> RowOutcome:
    """
    Persist one generated variant and link its attribute values.

    Storage errors are turned into a ``Failed`` outcome instead of being
    raised. Insert and link share ``gateway.row()``, so a failed link
    does not leave an attribute-less variant behind.
    """
    data = {
        'product_id': product_id,
        'sku': variant.sku,
        'quantity_in_stock': variant.quantity_in_stock,
    }
    if price is not None:
        data['price'] = price

    try:
        with gateway.row():
            created = gateway.insert_variant(data)
            if created is None:
                return Failed(
                    sku=variant.sku,
                    error=f"Failed to create variant with SKU: {variant.sku}",
                )
            if variant.attribute_value_ids:
                gateway.link_variant_attributes(created.id, list(variant.attribute_value_ids))
    except Exception as e:
        logger.exception("Variant creation error for SKU %s", variant.sku)
        return Failed(
            sku=variant.sku,
            error=f"Failed to create variant with SKU {variant.sku}: {e}",
        )

    return Created(id=created.id, sku=created.sku)


def summarize_outcomes(outcomes: Iterable[RowOutcome]) -> BulkCreationResult:
    """Fold row outcomes into a ``BulkCreationResult``."""
    created = []
    errors = []
    for outcome in outcomes:
        if isinstance(outcome, Created):
            created.append(PersistedVariant(id=outcome.id, sku=outcome.sku))
        else:
            errors.append(outcome.error)

    return BulkCreationResult(
        success=not errors,
        created_count=len(created),
        failed_count=len(errors),
        variants=created,
        errors=errors or None,
    )


def bulk_create_variants(
    product_id: Any,
    variants: Sequence[GeneratedVariant],
    gateway: Optional[VariantGateway] = None,
    price: Optional[Decimal] = None
) -> BulkCreationResult:
    """
    Create variants sequentially, in input order.

    There is no transaction around the whole batch: rows that succeed stay
    created even when later rows fail.
    """
    gateway = gateway or DjangoVariantGateway()
    outcomes = [create_variant_row(gateway, product_id, variant, price) for variant in variants]
    result = summarize_outcomes(outcomes)

    log = logger.info if result.success else logger.warning
    log(
        "Bulk variant creation for product %s: %s created, %s failed",
        product_id, result.created_count, result.failed_count
    )
    return result

import json

from apps.products.services import (
    BulkCreationResult,
    Created,
    Failed,
    GeneratedVariant,
    PersistedVariant,
    bulk_create_variants,
    create_variant_row,
    generate_combinations,
    summarize_outcomes,
)

from .factories import make_selection
from .fakes import InMemoryGateway


def _size_color():
    return [
        make_selection('size', 'Size', ['Small', 'Large']),
        make_selection('color', 'Color', ['Red', 'Blue', 'Green']),
    ]


# =============================================================================
# Combination generation
# =============================================================================

def test_cartesian_product_is_complete():
    variants = generate_combinations('summer-tee', _size_color(), 5)

    assert len(variants) == 6
    pairs = {tuple(v.attribute_value_ids) for v in variants}
    assert pairs == {
        (f'size-{s}', f'color-{c}') for s in range(2) for c in range(3)
    }


def test_leftmost_attribute_varies_slowest():
    variants = generate_combinations('summer-tee', _size_color())

    assert [v.sku for v in variants] == [
        'SUMM-SMA-RED', 'SUMM-SMA-BLU', 'SUMM-SMA-GRE',
        'SUMM-LAR-RED', 'SUMM-LAR-BLU', 'SUMM-LAR-GRE',
    ]


def test_no_attributes_generates_no_variants():
    assert generate_combinations('summer-tee', [], 10) == []


def test_attribute_without_values_collapses_to_no_variants():
    attributes = _size_color() + [make_selection('material', 'Material', [])]
    assert generate_combinations('summer-tee', attributes) == []


def test_every_variant_gets_default_quantity():
    variants = generate_combinations('summer-tee', _size_color(), 7)
    assert {v.quantity_in_stock for v in variants} == {7}


def test_attribute_details_follow_attribute_order():
    variant = generate_combinations('summer-tee', _size_color())[0]

    assert [d.to_dict() for d in variant.attribute_details] == [
        {'attributeId': 'size', 'attributeName': 'Size', 'value': 'Small'},
        {'attributeId': 'color', 'attributeName': 'Color', 'value': 'Red'},
    ]


def test_swapping_attributes_changes_skus_but_not_combinations():
    forward = generate_combinations('summer-tee', _size_color())
    backward = generate_combinations('summer-tee', list(reversed(_size_color())))

    assert {frozenset(v.attribute_value_ids) for v in forward} == \
        {frozenset(v.attribute_value_ids) for v in backward}
    assert 'SUMM-LAR-RED' in {v.sku for v in forward}
    assert 'SUMM-RED-LAR' in {v.sku for v in backward}
    assert 'SUMM-RED-LAR' not in {v.sku for v in forward}


def test_generated_variant_json_shape():
    variant = generate_combinations('summer-tee', _size_color(), 3)[0]
    payload = json.loads(json.dumps(variant.to_dict()))

    assert payload == {
        'sku': 'SUMM-SMA-RED',
        'quantityInStock': 3,
        'attributeValueIds': ['size-0', 'color-0'],
        'attributeDetails': [
            {'attributeId': 'size', 'attributeName': 'Size', 'value': 'Small'},
            {'attributeId': 'color', 'attributeName': 'Color', 'value': 'Red'},
        ],
    }
    assert GeneratedVariant.from_dict(payload) == variant


# =============================================================================
# Bulk creation
# =============================================================================

def _three_sizes():
    return generate_combinations(
        'summer-tee', [make_selection('size', 'Size', ['Small', 'Medium', 'Large'])], 4
    )


def test_bulk_create_all_rows_succeed():
    gateway = InMemoryGateway()
    result = bulk_create_variants('product-1', _three_sizes(), gateway=gateway)

    assert result.success is True
    assert result.created_count == 3
    assert result.failed_count == 0
    assert result.errors is None
    assert [v.sku for v in result.variants] == ['SUMM-SMA', 'SUMM-MED', 'SUMM-LAR']
    assert 'errors' not in result.to_dict()


def test_bulk_create_isolates_collision():
    gateway = InMemoryGateway(existing_skus={'SUMM-MED'})
    result = bulk_create_variants('product-1', _three_sizes(), gateway=gateway)

    assert result.success is False
    assert result.created_count == 2
    assert result.failed_count == 1
    assert [v.sku for v in result.variants] == ['SUMM-SMA', 'SUMM-LAR']
    assert len(gateway.insert_calls) == 3


def test_bulk_create_error_message_has_sku_and_reason():
    gateway = InMemoryGateway(existing_skus={'SUMM-MED'})
    result = bulk_create_variants('product-1', _three_sizes(), gateway=gateway)

    assert result.errors == [
        'Failed to create variant with SKU SUMM-MED: '
        'duplicate key value violates unique constraint on sku "SUMM-MED"'
    ]


def test_bulk_create_empty_insert_is_recorded_and_skipped():
    gateway = InMemoryGateway(empty_insert_skus={'SUMM-SMA'})
    result = bulk_create_variants('product-1', _three_sizes(), gateway=gateway)

    assert result.created_count == 2
    assert result.errors == ['Failed to create variant with SKU: SUMM-SMA']


def test_bulk_create_links_attribute_values_in_one_call_per_row():
    gateway = InMemoryGateway()
    variants = generate_combinations('summer-tee', _size_color())
    result = bulk_create_variants('product-1', variants, gateway=gateway)

    assert len(gateway.link_calls) == 6
    for created, generated in zip(result.variants, variants):
        assert gateway.attribute_value_ids_for_variant(created.id) == list(generated.attribute_value_ids)


def test_bulk_create_skips_link_for_variant_without_attributes():
    gateway = InMemoryGateway()
    variant = GeneratedVariant(sku='SUMM-', quantity_in_stock=0)
    result = bulk_create_variants('product-1', [variant], gateway=gateway)

    assert result.created_count == 1
    assert gateway.link_calls == []


def test_bulk_create_link_failure_is_a_row_failure():
    gateway = InMemoryGateway(failing_link_skus={'SUMM-MED'})
    result = bulk_create_variants('product-1', _three_sizes(), gateway=gateway)

    assert result.failed_count == 1
    assert result.errors == ['Failed to create variant with SKU SUMM-MED: attribute link insert failed']
    assert [v.sku for v in result.variants] == ['SUMM-SMA', 'SUMM-LAR']


def test_bulk_create_passes_price_and_quantity():
    gateway = InMemoryGateway()
    bulk_create_variants('product-1', _three_sizes()[:1], gateway=gateway, price='9.99')

    assert gateway.insert_calls == [{
        'product_id': 'product-1',
        'sku': 'SUMM-SMA',
        'quantity_in_stock': 4,
        'price': '9.99',
    }]


def test_create_variant_row_returns_tagged_outcomes():
    gateway = InMemoryGateway(existing_skus={'SUMM-MED'})
    small, medium, _ = _three_sizes()

    assert create_variant_row(gateway, 'p', small) == Created(id='variant-1', sku='SUMM-SMA')
    outcome = create_variant_row(gateway, 'p', medium)
    assert isinstance(outcome, Failed)
    assert outcome.sku == 'SUMM-MED'


def test_summarize_outcomes():
    result = summarize_outcomes([
        Created(id='1', sku='A'),
        Failed(sku='B', error='boom'),
        Created(id='3', sku='C'),
    ])

    assert result == BulkCreationResult(
        success=False,
        created_count=2,
        failed_count=1,
        variants=[PersistedVariant(id='1', sku='A'), PersistedVariant(id='3', sku='C')],
        errors=['boom'],
    )


def test_bulk_result_round_trips_through_json():
    result = summarize_outcomes([Created(id='1', sku='A'), Failed(sku='B', error='boom')])
    payload = json.loads(json.dumps(result.to_dict()))

    assert payload == {
        'success': False,
        'createdCount': 1,
        'failedCount': 1,
        'variants': [{'id': '1', 'sku': 'A'}],
        'errors': ['boom'],
    }
    assert BulkCreationResult.from_dict(payload) == result

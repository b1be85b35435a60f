from apps.products.services import PersistedVariant, VariantGateway


class InMemoryGateway(VariantGateway):
    """Variant storage kept in dicts, with knobs to make rows fail."""

    def __init__(self, existing_skus=(), empty_insert_skus=(), failing_link_skus=()):
        self.skus = set(existing_skus)
        self.empty_insert_skus = set(empty_insert_skus)
        self.failing_link_skus = set(failing_link_skus)
        self.rows = {}
        self.links = {}
        self.insert_calls = []
        self.link_calls = []

    def insert_variant(self, data):
        self.insert_calls.append(dict(data))
        sku = data['sku']
        if sku in self.empty_insert_skus:
            return None
        if sku in self.skus:
            raise ValueError(f'duplicate key value violates unique constraint on sku "{sku}"')
        self.skus.add(sku)
        variant_id = f"variant-{len(self.rows) + 1}"
        self.rows[variant_id] = dict(data)
        return PersistedVariant(id=variant_id, sku=sku)

    def link_variant_attributes(self, variant_id, attribute_value_ids):
        self.link_calls.append((variant_id, list(attribute_value_ids)))
        if self.rows[variant_id]['sku'] in self.failing_link_skus:
            raise RuntimeError("attribute link insert failed")
        self.links[variant_id] = list(attribute_value_ids)

    def sku_exists(self, sku):
        return sku in self.skus

    def attribute_value_ids_for_variant(self, variant_id):
        return list(self.links.get(variant_id, []))

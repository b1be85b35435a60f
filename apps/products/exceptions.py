"""
Domain errors raised by the product services.

The API layer turns these into ``{"success": false, "error": ...}``
responses; per-row persistence failures during bulk variant creation are
never raised, they are reported inside the bulk result instead.
"""


class CatalogError(Exception):
    """Base class for catalogue errors that map to a client error."""
    status_code = 400


class ProductNotFound(CatalogError):
    status_code = 404

    def __init__(self, product_id=None):
        self.product_id = product_id
        super().__init__("Product not found")


class CategoryNotFound(CatalogError):
    status_code = 404

    def __init__(self, category_id=None):
        self.category_id = category_id
        super().__init__("Category not found")


class AttributeNotFound(CatalogError):
    status_code = 404

    def __init__(self, attribute_id):
        self.attribute_id = attribute_id
        super().__init__(f"Attribute with ID {attribute_id} not found")


class AttributeValueNotFound(CatalogError):
    status_code = 404

    def __init__(self, value_id):
        self.value_id = value_id
        super().__init__(f"Attribute value {value_id} not found")


class EmptyAttributeError(CatalogError):
    def __init__(self, attribute_name):
        self.attribute_name = attribute_name
        super().__init__(
            f'Attribute "{attribute_name}" has no values. '
            f'Add values before generating variants.'
        )


class DuplicateAttributeError(CatalogError):
    def __init__(self, attribute_name):
        self.attribute_name = attribute_name
        super().__init__(
            f'Duplicate attribute detected: "{attribute_name}". '
            f'Each attribute can only have one value per variant.'
        )


class DuplicateSlugError(CatalogError):
    def __init__(self, slug):
        self.slug = slug
        super().__init__("Product with this slug already exists")


class VariantGenerationError(CatalogError):
    pass

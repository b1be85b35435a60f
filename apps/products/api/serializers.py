from rest_framework import serializers
from apps.products.models import (
    Category,
    Product,
    Attribute,
    AttributeValue,
    ProductVariant,
)
from apps.products.services import (
    AttributeSelection,
    AttributeValueRef,
)


# =============================================================================
# Category Serializer
# =============================================================================

class CategorySerializer(serializers.ModelSerializer):
    full_path = serializers.CharField(read_only=True)
    level = serializers.IntegerField(read_only=True)

    class Meta:
        model = Category
        fields = [
            'id', 'name', 'slug', 'parent', 'description', 'is_active',
            'display_order', 'full_path', 'level', 'created_at', 'updated_at'
        ]
        extra_kwargs = {'slug': {'required': False}}


# =============================================================================
# Attribute Serializers
# =============================================================================

class AttributeValueSerializer(serializers.ModelSerializer):
    attribute_name = serializers.CharField(
        source='attribute.name', read_only=True
    )

    class Meta:
        model = AttributeValue
        fields = ['id', 'attribute', 'attribute_name', 'value', 'display_order']


class AttributeSerializer(serializers.ModelSerializer):
    values = AttributeValueSerializer(many=True, read_only=True)

    class Meta:
        model = Attribute
        fields = ['id', 'name', 'display_order', 'values']


# =============================================================================
# Variant Serializers
# =============================================================================

class ProductVariantSerializer(serializers.ModelSerializer):
    """Base variant serializer."""
    class Meta:
        model = ProductVariant
        fields = [
            'id', 'product', 'sku', 'price', 'quantity_in_stock',
            'created_at', 'updated_at'
        ]


class ProductVariantCreateSerializer(serializers.ModelSerializer):
    """
    Variant creation input. ``sku`` may be left out and is then built from
    the product slug and ``attribute_values`` labels; a taken SKU is
    replaced rather than rejected.
    """
    sku = serializers.CharField(max_length=100, required=False, allow_blank=True)
    attribute_values = serializers.ListField(
        child=serializers.CharField(trim_whitespace=False, allow_blank=True),
        required=False,
        write_only=True
    )

    class Meta:
        model = ProductVariant
        fields = ['product', 'sku', 'price', 'quantity_in_stock', 'attribute_values']


class VariantAttributeLinkSerializer(serializers.Serializer):
    attributeValueId = serializers.CharField()


class VariantAttributesSerializer(serializers.Serializer):
    attributeValueIds = serializers.ListField(child=serializers.CharField(), allow_empty=True)


class ProductVariantListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for variant lists."""
    product_name = serializers.CharField(source='product.name', read_only=True)
    is_in_stock = serializers.BooleanField(read_only=True)
    attributes = serializers.SerializerMethodField()

    class Meta:
        model = ProductVariant
        fields = [
            'id', 'sku', 'product', 'product_name', 'price',
            'quantity_in_stock', 'is_in_stock', 'attributes'
        ]

    def get_attributes(self, obj):
        return obj.get_options_dict()


class ProductVariantDetailSerializer(serializers.ModelSerializer):
    """Full variant serializer with linked attribute values."""
    product_name = serializers.CharField(source='product.name', read_only=True)
    product_slug = serializers.CharField(source='product.slug', read_only=True)
    is_in_stock = serializers.BooleanField(read_only=True)
    attribute_values = serializers.SerializerMethodField()

    class Meta:
        model = ProductVariant
        fields = [
            'id', 'product', 'product_name', 'product_slug',
            'sku', 'price', 'quantity_in_stock', 'is_in_stock',
            'attribute_values', 'created_at', 'updated_at'
        ]

    def get_attribute_values(self, obj):
        return AttributeValueSerializer(obj.get_attribute_values(), many=True).data


# =============================================================================
# Product Serializers
# =============================================================================

class ProductSerializer(serializers.ModelSerializer):
    """Base product serializer."""
    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'category', 'is_active',
            'created_at', 'updated_at'
        ]
        extra_kwargs = {'slug': {'required': False}}


class ProductListSerializer(serializers.ModelSerializer):
    """Product list with counts."""
    variant_count = serializers.IntegerField(read_only=True)
    total_stock = serializers.IntegerField(read_only=True)
    category_name = serializers.CharField(source='category.name', read_only=True, default=None)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'category', 'category_name', 'is_active',
            'variant_count', 'total_stock'
        ]


class ProductDetailSerializer(serializers.ModelSerializer):
    """Full product detail with variants and attributes."""
    variants = ProductVariantListSerializer(many=True, read_only=True)
    attributes = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'category', 'is_active',
            'variants', 'attributes', 'created_at', 'updated_at'
        ]

    def get_attributes(self, obj):
        return AttributeSerializer(obj.get_attributes(), many=True).data


# =============================================================================
# Variant Generation Serializers
# =============================================================================

class AttributeValueRefSerializer(serializers.Serializer):
    id = serializers.CharField()
    value = serializers.CharField(trim_whitespace=False, allow_blank=True)


class AttributeSelectionSerializer(serializers.Serializer):
    """
    Generator input as sent by the admin UI:
    {"attributeId": "...", "attributeName": "Size", "values": [{"id": "...", "value": "Large"}]}
    """
    attributeId = serializers.CharField()
    attributeName = serializers.CharField()
    values = AttributeValueRefSerializer(many=True, allow_empty=True)

    @staticmethod
    def to_selection(data):
        return AttributeSelection(
            attribute_id=data['attributeId'],
            attribute_name=data['attributeName'],
            values=tuple(
                AttributeValueRef(id=v['id'], value=v['value']) for v in data['values']
            ),
        )


class GenerateVariantsSerializer(serializers.Serializer):
    """
    Expected payload:
    {
        "attributes": [AttributeSelection, ...],
        "defaultPrice": 19.99,
        "defaultQuantity": 10
    }
    """
    attributes = AttributeSelectionSerializer(many=True, allow_empty=True)
    defaultPrice = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True
    )
    defaultQuantity = serializers.IntegerField(min_value=0, required=False)

    def get_selections(self):
        return [AttributeSelectionSerializer.to_selection(a) for a in self.validated_data['attributes']]


class NewProductSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    slug = serializers.SlugField(max_length=255, required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    categoryId = serializers.IntegerField(required=False, allow_null=True)
    isActive = serializers.BooleanField(required=False, default=True)

    @staticmethod
    def to_product_data(data):
        return {
            'name': data['name'],
            'slug': data.get('slug') or None,
            'description': data.get('description', ''),
            'category_id': data.get('categoryId'),
            'is_active': data.get('isActive', True),
        }


class ProductWithVariantsSerializer(GenerateVariantsSerializer):
    product = NewProductSerializer()


class AttributesForGenerationSerializer(serializers.Serializer):
    attributeIds = serializers.ListField(child=serializers.CharField(), allow_empty=False)

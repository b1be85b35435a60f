import logging
from decimal import Decimal

from django.conf import settings
from django.db.models import Prefetch
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.products.exceptions import CatalogError
from apps.products.models import (
    Category,
    Product,
    Attribute,
    AttributeValue,
    ProductVariant,
)
from apps.products.services import AttributeCatalogueService, ProductService
from .serializers import (
    CategorySerializer,
    ProductSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    AttributeSerializer,
    AttributeValueSerializer,
    ProductVariantSerializer,
    ProductVariantCreateSerializer,
    ProductVariantListSerializer,
    ProductVariantDetailSerializer,
    VariantAttributeLinkSerializer,
    VariantAttributesSerializer,
    GenerateVariantsSerializer,
    NewProductSerializer,
    ProductWithVariantsSerializer,
    AttributesForGenerationSerializer,
)
from .filters import ProductFilter, ProductVariantFilter, AttributeValueFilter

logger = logging.getLogger(__name__)


def _error_response(error, status_code=status.HTTP_400_BAD_REQUEST):
    return Response({'success': False, 'error': error}, status=status_code)


def _catalog_error_response(exc):
    logger.info("Request rejected: %s", exc)
    return _error_response(str(exc), exc.status_code)


def _default_quantity(validated_data):
    return validated_data.get('defaultQuantity', settings.VARIANT_DEFAULT_QUANTITY)


class CategoryViewSet(viewsets.ModelViewSet):
    queryset = Category.objects.select_related('parent')
    serializer_class = CategorySerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['parent', 'is_active']
    search_fields = ['name', 'description']
    ordering = ['display_order', 'name']


class ProductViewSet(viewsets.ModelViewSet):
    """
    API endpoint for products.

    list: List all products
    retrieve: Get product detail with variants
    variants/generate: Generate and create variants from attributes
    variants/preview: Generate variants without creating them
    generate-variants: Create a product together with its generated variants
    """
    queryset = Product.objects.select_related('category')
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'description']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        elif self.action == 'retrieve':
            return ProductDetailSerializer
        return ProductSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'retrieve':
            queryset = queryset.prefetch_related(
                Prefetch(
                    'variants',
                    queryset=ProductVariant.objects.prefetch_related(
                        'productvariantattribute_set__attribute_value__attribute'
                    )
                )
            )
        return queryset

    @action(detail=True, methods=['post'], url_path='variants/generate', url_name='variants-generate')
    def generate_variants(self, request, pk=None):
        """
        Generate and create variants for an existing product.

        Responds 201 even when some rows failed; check data.success.
        """
        serializer = GenerateVariantsSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response(serializer.errors)

        try:
            result = ProductService.generate_and_create_variants(
                pk,
                serializer.get_selections(),
                default_quantity=_default_quantity(serializer.validated_data),
                default_price=serializer.validated_data.get('defaultPrice'),
            )
        except CatalogError as e:
            return _catalog_error_response(e)

        return Response(
            {'success': True, 'data': result.to_dict()},
            status=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['post'], url_path='variants/preview', url_name='variants-preview')
    def preview_variants(self, request, pk=None):
        serializer = GenerateVariantsSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response(serializer.errors)

        try:
            variants = ProductService.preview_variants(
                pk,
                serializer.get_selections(),
                default_quantity=_default_quantity(serializer.validated_data),
            )
        except CatalogError as e:
            return _catalog_error_response(e)

        return Response({'success': True, 'data': [v.to_dict() for v in variants]})

    @action(detail=False, methods=['post'], url_path='generate-variants', url_name='generate-variants')
    def create_with_generated_variants(self, request):
        """
        Create a product with auto-generated variants.

        Expected payload:
        {
            "product": {"name": "Summer Tee", "slug": "summer-tee", "categoryId": 1},
            "attributes": [AttributeSelection, ...],
            "defaultPrice": 19.99,
            "defaultQuantity": 10
        }
        """
        serializer = ProductWithVariantsSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response(serializer.errors)

        data = serializer.validated_data
        try:
            product, result = ProductService.create_product_with_generated_variants(
                NewProductSerializer.to_product_data(data['product']),
                serializer.get_selections(),
                default_price=data.get('defaultPrice'),
                default_quantity=_default_quantity(data),
            )
        except CatalogError as e:
            return _catalog_error_response(e)

        return Response(
            {
                'success': True,
                'data': {
                    'product': ProductSerializer(product).data,
                    'variantResult': result.to_dict(),
                },
            },
            status=status.HTTP_201_CREATED
        )


class AttributeViewSet(viewsets.ModelViewSet):
    """
    API endpoint for attributes (Size, Color, Material, etc).
    """
    queryset = Attribute.objects.prefetch_related('values')
    serializer_class = AttributeSerializer
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['display_order', 'name']

    @action(detail=False, methods=['post'], url_path='for-generation', url_name='for-generation')
    def for_generation(self, request):
        """
        Resolve attribute ids into generator input.

        Expected payload:
        {"attributeIds": ["<id>", "<id>"]}
        """
        serializer = AttributesForGenerationSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response(serializer.errors)

        try:
            selections = AttributeCatalogueService.attributes_for_generation(
                serializer.validated_data['attributeIds']
            )
        except CatalogError as e:
            return _catalog_error_response(e)

        return Response({'success': True, 'data': [s.to_dict() for s in selections]})


class AttributeValueViewSet(viewsets.ModelViewSet):
    queryset = AttributeValue.objects.select_related('attribute')
    serializer_class = AttributeValueSerializer
    filterset_class = AttributeValueFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    search_fields = ['value']


class ProductVariantViewSet(viewsets.ModelViewSet):
    """
    API endpoint for variants.

    Supports filtering by product, price range, stock status and attribute value.
    """
    queryset = ProductVariant.objects.select_related('product').prefetch_related(
        'productvariantattribute_set__attribute_value__attribute'
    )
    filterset_class = ProductVariantFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['sku', 'product__name']
    ordering_fields = ['sku', 'price', 'quantity_in_stock', 'created_at']
    ordering = ['sku']

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductVariantListSerializer
        elif self.action == 'retrieve':
            return ProductVariantDetailSerializer
        elif self.action == 'create':
            return ProductVariantCreateSerializer
        return ProductVariantSerializer

    def create(self, request, *args, **kwargs):
        """
        Create a variant, generating its SKU when none is given.

        Expected payload:
        {"product": "<id>", "price": "19.99", "quantity_in_stock": 5,
         "sku": "optional", "attribute_values": ["Large", "Red"]}
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        try:
            variant = ProductService.create_variant_with_auto_sku(
                data['product'].pk,
                price=data.get('price', Decimal('0.00')),
                quantity_in_stock=data.get('quantity_in_stock', 0),
                sku=data.get('sku') or None,
                attribute_values=data.get('attribute_values', []),
            )
        except CatalogError as e:
            return _catalog_error_response(e)

        return Response(ProductVariantSerializer(variant).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['get', 'post', 'put'])
    def attributes(self, request, pk=None):
        """
        GET: attribute values linked to a variant
        POST: link one value, payload {"attributeValueId": "<id>"}
        PUT: replace all values, payload {"attributeValueIds": ["<id>", ...]}

        A variant holds at most one value per attribute.
        """
        variant = self.get_object()

        if request.method == 'GET':
            values = AttributeCatalogueService.attribute_values_for_variant(variant)
            serializer = AttributeValueSerializer(values, many=True)
            return Response(serializer.data)

        if request.method == 'POST':
            serializer = VariantAttributeLinkSerializer(data=request.data)
            if not serializer.is_valid():
                return _error_response(serializer.errors)
            try:
                value = AttributeCatalogueService.link_attribute_to_variant(
                    variant, serializer.validated_data['attributeValueId']
                )
            except CatalogError as e:
                return _catalog_error_response(e)
            return Response(
                {'success': True, 'data': AttributeValueSerializer(value).data},
                status=status.HTTP_201_CREATED
            )

        serializer = VariantAttributesSerializer(data=request.data)
        if not serializer.is_valid():
            return _error_response(serializer.errors)
        try:
            values = AttributeCatalogueService.update_variant_attributes(
                variant, serializer.validated_data['attributeValueIds']
            )
        except CatalogError as e:
            return _catalog_error_response(e)
        return Response({'success': True, 'data': AttributeValueSerializer(values, many=True).data})

    @action(
        detail=True,
        methods=['delete'],
        url_path=r'attributes/(?P<value_id>[^/.]+)',
        url_name='attribute-remove'
    )
    def remove_attribute(self, request, pk=None, value_id=None):
        variant = self.get_object()
        try:
            AttributeCatalogueService.remove_attribute_from_variant(variant, value_id)
        except CatalogError as e:
            return _catalog_error_response(e)
        return Response({'success': True, 'message': 'Attribute removed from variant'})

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from simple_history.models import HistoricalRecords


class ProductVariant(models.Model):
    """
    Individual SKU with its own price and stock.
    Each variant is a unique combination of attribute values.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Product'
    )
    sku = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='SKU'
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00'),
        validators=[MinValueValidator(Decimal('0.00'))],
        verbose_name='Price'
    )
    quantity_in_stock = models.IntegerField(
        default=0,
        verbose_name='Quantity in stock'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Created at'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Updated at'
    )

    attribute_values = models.ManyToManyField(
        'products.AttributeValue',
        through='ProductVariantAttribute',
        related_name='variants',
        verbose_name='Attribute values'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['product', 'sku']
        verbose_name = 'Product Variant'
        verbose_name_plural = 'Product Variants'

    def __str__(self):
        return self.sku

    @property
    def is_in_stock(self):
        return self.quantity_in_stock > 0

    def get_attribute_values(self):
        """Linked attribute values, ordered by attribute."""
        from .attribute import AttributeValue
        return AttributeValue.objects.filter(
            productvariantattribute__variant=self
        ).select_related('attribute').order_by('attribute__display_order', 'attribute__name')

    def get_options_dict(self):
        """
        Return dict of {attribute_name: value}.

        Reads ``productvariantattribute_set``, so querysets that prefetch
        ``productvariantattribute_set__attribute_value__attribute`` cost
        no extra queries per variant.
        """
        values = sorted(
            (link.attribute_value for link in self.productvariantattribute_set.all()),
            key=lambda av: (av.attribute.display_order, av.attribute.name)
        )
        return {av.attribute.name: av.value for av in values}


class ProductVariantAttribute(models.Model):
    """
    Through model linking ProductVariant to AttributeValue.
    One value per attribute is guaranteed by how variants are generated,
    not checked here.
    """
    variant = models.ForeignKey(
        ProductVariant,
        on_delete=models.CASCADE,
        verbose_name='Variant'
    )
    attribute_value = models.ForeignKey(
        'products.AttributeValue',
        on_delete=models.CASCADE,
        verbose_name='Attribute value'
    )

    class Meta:
        unique_together = ['variant', 'attribute_value']
        verbose_name = 'Variant Attribute'
        verbose_name_plural = 'Variant Attributes'

    def __str__(self):
        return f"{self.variant.sku} - {self.attribute_value}"

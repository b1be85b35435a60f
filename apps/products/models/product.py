import uuid

from django.db import models
from simple_history.models import HistoricalRecords


class Product(models.Model):
    """
    Base product model.
    A product owns its variants; simple products may have none.
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )
    name = models.CharField(
        max_length=255,
        verbose_name='Name'
    )
    slug = models.SlugField(
        max_length=255,
        unique=True,
        verbose_name='Slug'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Description'
    )
    category = models.ForeignKey(
        'products.Category',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
        verbose_name='Category'
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name='Active'
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Created at'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Updated at'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['name']
        verbose_name = 'Product'
        verbose_name_plural = 'Products'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            from apps.products.services.sku import generate_slug
            self.slug = generate_slug(self.name)
        super().save(*args, **kwargs)

    @property
    def variant_count(self):
        return self.variants.count()

    @property
    def total_stock(self):
        result = self.variants.aggregate(total=models.Sum('quantity_in_stock'))
        return result['total'] or 0

    def get_attributes(self):
        """Get all attributes used by this product's variants."""
        from .attribute import Attribute
        return Attribute.objects.filter(
            values__productvariantattribute__variant__product=self
        ).distinct().order_by('display_order', 'name')

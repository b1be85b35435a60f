import uuid

from django.db import models


class Attribute(models.Model):
    """
    A named axis of variation shared by all products.
    Examples: Size, Color, Material
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )
    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='Name'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )

    class Meta:
        ordering = ['display_order', 'name']
        verbose_name = 'Attribute'
        verbose_name_plural = 'Attributes'

    def __str__(self):
        return self.name


class AttributeValue(models.Model):
    """
    Possible values for an attribute.

    The ordering of values is the order in which they are combined
    when variants are generated, so it also drives the order of the
    generated SKUs.

    Examples:
        - Attribute "Size" -> "Small", "Medium", "Large"
        - Attribute "Color" -> "Red", "Navy Blue"
    """
    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )
    attribute = models.ForeignKey(
        Attribute,
        on_delete=models.CASCADE,
        related_name='values',
        verbose_name='Attribute'
    )
    value = models.CharField(
        max_length=100,
        verbose_name='Value'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Display order'
    )

    class Meta:
        ordering = ['display_order', 'value']
        unique_together = ['attribute', 'value']
        verbose_name = 'Attribute Value'
        verbose_name_plural = 'Attribute Values'

    def __str__(self):
        return f"{self.attribute.name}: {self.value}"

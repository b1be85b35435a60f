from django.contrib import admin
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget
from adminsortable2.admin import SortableAdminMixin, SortableInlineAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .models import (
    Category,
    Product,
    Attribute,
    AttributeValue,
    ProductVariant,
    ProductVariantAttribute,
)


# =============================================================================
# Import/Export Resources
# =============================================================================

class ProductVariantResource(resources.ModelResource):
    """Resource for importing/exporting variants."""

    product_slug = fields.Field(
        column_name='product_slug',
        attribute='product',
        widget=ForeignKeyWidget(Product, 'slug')
    )

    class Meta:
        model = ProductVariant
        import_id_fields = ['sku']
        fields = ('sku', 'product_slug', 'price', 'quantity_in_stock')
        export_order = fields


class AttributeValueResource(resources.ModelResource):
    """Resource for importing/exporting attribute values."""

    attribute_name = fields.Field(
        column_name='attribute',
        attribute='attribute',
        widget=ForeignKeyWidget(Attribute, 'name')
    )

    class Meta:
        model = AttributeValue
        import_id_fields = ['attribute_name', 'value']
        fields = ('attribute_name', 'value', 'display_order')


# =============================================================================
# Inlines
# =============================================================================

class AttributeValueInline(SortableInlineAdminMixin, admin.TabularInline):
    model = AttributeValue
    extra = 1
    fields = ['value', 'display_order']


class ProductVariantAttributeInline(admin.TabularInline):
    model = ProductVariantAttribute
    extra = 0
    autocomplete_fields = ['attribute_value']


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ['sku', 'price', 'quantity_in_stock']
    readonly_fields = ['sku']
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Category)
class CategoryAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'full_path', 'is_active', 'display_order']
    list_filter = ['is_active']
    search_fields = ['name', 'slug']
    prepopulated_fields = {'slug': ('name',)}
    autocomplete_fields = ['parent']


@admin.register(Product)
class ProductAdmin(SimpleHistoryAdmin):
    list_display = ['name', 'slug', 'category', 'variant_count', 'total_stock', 'is_active', 'created_at']
    list_filter = ['is_active', 'category', 'created_at']
    search_fields = ['name', 'slug', 'description']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['variant_count', 'total_stock', 'created_at', 'updated_at']
    autocomplete_fields = ['category']
    inlines = [ProductVariantInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'description', 'category', 'is_active')
        }),
        ('Information', {
            'fields': ('variant_count', 'total_stock', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(Attribute)
class AttributeAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'value_count', 'display_order']
    search_fields = ['name']
    inlines = [AttributeValueInline]

    def value_count(self, obj):
        return obj.values.count()
    value_count.short_description = 'Values'


@admin.register(AttributeValue)
class AttributeValueAdmin(ImportExportModelAdmin):
    resource_class = AttributeValueResource
    list_display = ['value', 'attribute', 'display_order']
    list_filter = ['attribute']
    list_editable = ['display_order']
    search_fields = ['value', 'attribute__name']
    autocomplete_fields = ['attribute']


@admin.register(ProductVariant)
class ProductVariantAdmin(ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = ProductVariantResource
    list_display = ['sku', 'product', 'price', 'quantity_in_stock', 'stock_status']
    list_filter = ['product']
    list_editable = ['price', 'quantity_in_stock']
    search_fields = ['sku', 'product__name']
    autocomplete_fields = ['product']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ProductVariantAttributeInline]
    list_per_page = 50

    actions = ['mark_out_of_stock']

    def stock_status(self, obj):
        if obj.is_in_stock:
            return format_html('<span style="color: {};">{}</span>', 'green', 'In stock')
        return format_html('<span style="color: {};">{}</span>', 'red', 'Out of stock')
    stock_status.short_description = 'Stock'

    @admin.action(description='Mark selected variants as out of stock')
    def mark_out_of_stock(self, request, queryset):
        count = queryset.update(quantity_in_stock=0)
        self.message_user(request, f'{count} variants updated.')


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Back Office'
admin.site.site_title = 'Back Office'
admin.site.index_title = 'Catalogue Administration'

"""Django admin registrations for catalog models."""

from django.contrib import admin

from .models import Product, ProductVariant


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ("name", "slug", "sku", "price", "stock", "is_default", "is_active", "position")


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "category", "brand", "price", "stock", "is_active")
    search_fields = ("name", "slug", "sku", "brand")
    list_filter = ("is_active", "category", "brand")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [ProductVariantInline]


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ("name", "product", "sku", "price", "stock", "is_default", "is_active")
    search_fields = ("name", "sku", "product__name")
    list_filter = ("is_active", "is_default")

from django.contrib import admin

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "variant", "product_name", "variant_name", "quantity", "price")
    readonly_fields = fields


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "number", "status", "user", "total", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("number", "email", "user__name")
    date_hierarchy = "created_at"
    inlines = [OrderItemInline]

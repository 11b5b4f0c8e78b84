from django.contrib import admin

from .models import Address


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ("full_name", "user", "city", "state", "is_default", "updated_at")
    list_filter = ("is_default", "state")
    search_fields = ("full_name", "address_line1", "city", "user__email")

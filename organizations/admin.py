from django.contrib import admin
from .models import InventoryItem, OrganizationProfile


@admin.register(OrganizationProfile)
class OrganizationProfileAdmin(admin.ModelAdmin):
    list_display = ['name', 'organization_type', 'city', 'license_id']
    list_filter = ['organization_type']
    search_fields = ['user__name', 'license_id']


@admin.register(InventoryItem)
class InventoryItemAdmin(admin.ModelAdmin):
    list_display = ['organization', 'blood_group', 'units', 'stock_level', 'expiry_date', 'last_updated']
    list_filter = ['stock_level', 'blood_group']
    search_fields = ['organization__user__name']
    readonly_fields = ['stock_level', 'last_updated']

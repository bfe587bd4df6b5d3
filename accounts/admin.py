from django.contrib import admin
from .models import CustomUser

@admin.register(CustomUser)
class CustomUserAdmin(admin.ModelAdmin):
    list_display = ('email', 'name', 'user_type', 'city', 'is_staff')
    search_fields = ('email', 'name')
    list_filter = ('user_type', 'city', 'is_staff')

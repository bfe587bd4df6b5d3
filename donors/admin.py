from django.contrib import admin
from .models import DonorProfile, DonationRecord
from algorithms.eligibility import days_remaining


@admin.register(DonorProfile)
class DonorProfileAdmin(admin.ModelAdmin):
    list_display   = ['name', 'blood_group', 'city', 'last_donation_date', 'cooldown_days_left']
    list_filter    = ['blood_group', 'user__city']
    search_fields  = ['user__name', 'user__email', 'user__contact_number']
    ordering       = ['-created_at']
    readonly_fields = ['last_donation_date', 'cooldown_end_date', 'created_at', 'updated_at']

    fieldsets = (
        ('Donor', {
            'fields': ('user', 'blood_group')
        }),
        ('Cooldown', {
            'fields': ('last_donation_date', 'cooldown_end_date')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description='Cooldown (days left)')
    def cooldown_days_left(self, obj):
        return days_remaining(obj)


@admin.register(DonationRecord)
class DonationRecordAdmin(admin.ModelAdmin):
    list_display  = ['donor', 'blood_group', 'receiver_name', 'hospital_name', 'donation_date', 'cooldown_end_date']
    list_filter   = ['blood_group', 'donation_date']
    search_fields = ['donor__user__name', 'receiver_name', 'hospital_name']
    ordering      = ['-donation_date']

    # Append-only
    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

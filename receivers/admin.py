# receivers/admin.py
from django.contrib import admin
from .models import BloodRequest, ReceiverProfile, VerificationRequest


@admin.register(ReceiverProfile)
class ReceiverProfileAdmin(admin.ModelAdmin):
    list_display = ['name', 'receiver_type', 'city', 'is_verified']
    list_filter = ['receiver_type', 'is_verified']
    search_fields = ['user__name', 'user__email']


@admin.register(BloodRequest)
class BloodRequestAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'hospital_name',
        'receiver_name',
        'blood_group',
        'units_needed',
        'urgency_level',
        'city',
        'status',
        'donor_name',
        'created_at',
    ]
    list_filter = ['status', 'urgency_level', 'blood_group', 'city', 'created_at']
    search_fields = ['receiver_name', 'hospital_name', 'donor_name', 'notes']
    # Status only moves through the lifecycle services
    readonly_fields = ['status', 'donor', 'donor_name', 'donor_contact', 'created_at', 'updated_at']

    fieldsets = (
        ('Request Information', {
            'fields': ('receiver', 'receiver_name', 'receiver_contact', 'blood_group',
                      'units_needed', 'hospital_name', 'city', 'urgency_level', 'notes', 'status')
        }),
        ('Matched Donor', {
            'fields': ('donor', 'donor_name', 'donor_contact'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(VerificationRequest)
class VerificationRequestAdmin(admin.ModelAdmin):
    list_display = ['hospital_name', 'hospital_email', 'city', 'status', 'reviewed_by', 'reviewed_at']
    list_filter = ['status', 'city']
    search_fields = ['hospital_name', 'hospital_email']
    readonly_fields = ['status', 'reviewed_by', 'reviewed_at', 'created_at']

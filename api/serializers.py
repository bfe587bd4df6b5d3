# api/serializers.py
from django.contrib.auth import get_user_model
from rest_framework import serializers

from algorithms.blood_compatibility import BLOOD_GROUP_CHOICES
from algorithms.stock import MAX_UNITS, MIN_UNITS
from donors.models import DonationRecord, DonorProfile
from organizations.models import InventoryItem, OrganizationProfile
from receivers.models import BloodRequest, ReceiverProfile, VerificationRequest

User = get_user_model()


class DonorSerializer(serializers.ModelSerializer):
    name = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    city = serializers.CharField(read_only=True)
    contact_number = serializers.CharField(read_only=True)

    class Meta:
        model = DonorProfile
        fields = [
            'id', 'name', 'email', 'city', 'contact_number', 'blood_group',
            'last_donation_date', 'cooldown_end_date', 'created_at',
        ]


class BloodRequestSerializer(serializers.ModelSerializer):
    """Blood request as shown on dashboards"""

    class Meta:
        model = BloodRequest
        fields = [
            'id',
            'receiver',
            'receiver_name',
            'receiver_contact',
            'blood_group',
            'units_needed',
            'hospital_name',
            'city',
            'urgency_level',
            'notes',
            'status',
            'created_at',
            'updated_at',
            'donor',
            'donor_name',
            'donor_contact',
        ]
        read_only_fields = fields


class BloodRequestCreateSerializer(serializers.Serializer):
    blood_group = serializers.ChoiceField(choices=BLOOD_GROUP_CHOICES)
    units_needed = serializers.IntegerField(min_value=1, max_value=10)
    hospital_name = serializers.CharField(max_length=200)
    city = serializers.CharField(max_length=100, required=False)
    urgency_level = serializers.ChoiceField(choices=BloodRequest.URGENCY_CHOICES)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class DonationRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = DonationRecord
        fields = [
            'id', 'donor', 'blood_request', 'receiver_name', 'blood_group',
            'hospital_name', 'donation_date', 'cooldown_end_date',
        ]
        read_only_fields = fields


class CooldownSerializer(serializers.Serializer):
    on_cooldown = serializers.BooleanField()
    days_remaining = serializers.IntegerField()
    last_donation_date = serializers.DateTimeField(allow_null=True)
    cooldown_end_date = serializers.DateTimeField(allow_null=True)


class VerificationRequestSerializer(serializers.ModelSerializer):
    class Meta:
        model = VerificationRequest
        fields = [
            'id', 'hospital', 'hospital_name', 'hospital_email', 'city',
            'status', 'reviewed_by', 'reviewed_at', 'notes', 'created_at',
        ]
        read_only_fields = fields


class ReviewSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class InventoryItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = InventoryItem
        fields = [
            'id', 'organization', 'blood_group', 'units', 'stock_level',
            'expiry_date', 'last_updated',
        ]
        read_only_fields = fields


class StockUpdateSerializer(serializers.Serializer):
    blood_group = serializers.ChoiceField(choices=BLOOD_GROUP_CHOICES)
    units = serializers.IntegerField(min_value=MIN_UNITS, max_value=MAX_UNITS)
    expiry_date = serializers.DateField()


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    contact_number = serializers.CharField(max_length=15, required=False)
    city = serializers.CharField(max_length=100, required=False)


class RegisterSerializer(serializers.Serializer):
    """
    Registration payload for all three roles.

    Role specific fields are required only for their own role.
    """
    user_type = serializers.ChoiceField(choices=User.USER_TYPE_CHOICES)
    name = serializers.CharField(max_length=200)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    city = serializers.CharField(max_length=100)
    contact_number = serializers.CharField(max_length=15)

    # donor
    blood_group = serializers.ChoiceField(choices=BLOOD_GROUP_CHOICES, required=False)
    last_donation_date = serializers.DateTimeField(required=False, allow_null=True)
    # receiver
    receiver_type = serializers.ChoiceField(choices=ReceiverProfile.RECEIVER_TYPE_CHOICES, required=False)
    # organization
    organization_type = serializers.ChoiceField(choices=OrganizationProfile.ORGANIZATION_TYPE_CHOICES, required=False)
    license_id = serializers.CharField(max_length=100, required=False)

    REQUIRED_BY_ROLE = {
        User.DONOR: ['blood_group'],
        User.RECEIVER: ['receiver_type'],
        User.ORGANIZATION: ['organization_type', 'license_id'],
    }

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def validate(self, attrs):
        missing = [
            field for field in self.REQUIRED_BY_ROLE[attrs['user_type']]
            if not attrs.get(field)
        ]
        if missing:
            raise serializers.ValidationError({field: "This field is required." for field in missing})
        return attrs

# receivers/models.py
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from algorithms.blood_compatibility import BLOOD_GROUP_CHOICES


class ReceiverProfile(models.Model):
    INDIVIDUAL = 'individual'
    HOSPITAL = 'hospital'

    RECEIVER_TYPE_CHOICES = [
        (INDIVIDUAL, 'Individual'),
        (HOSPITAL, 'Hospital'),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='receiver_profile'
    )
    receiver_type = models.CharField(max_length=10, choices=RECEIVER_TYPE_CHOICES, default=INDIVIDUAL)

    # Individuals are verified on registration, hospitals by an organization
    is_verified = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def name(self):
        return self.user.name

    @property
    def email(self):
        return self.user.email

    @property
    def city(self):
        return self.user.city

    @property
    def contact_number(self):
        return self.user.contact_number

    def __str__(self):
        return f"{self.name} ({self.receiver_type})"

    class Meta:
        verbose_name = 'Receiver Profile'
        verbose_name_plural = 'Receiver Profiles'


class BloodRequest(models.Model):
    URGENCY_CHOICES = [
        ('emergency', 'Emergency'),
        ('within_24_hours', 'Within 24 Hours'),
        ('planned', 'Planned'),
    ]

    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('matched', 'Matched'),
        ('fulfilled', 'Fulfilled'),
        ('cancelled', 'Cancelled'),
    ]

    receiver = models.ForeignKey(ReceiverProfile, on_delete=models.CASCADE, related_name='blood_requests')
    receiver_name = models.CharField(max_length=200)
    receiver_contact = models.CharField(max_length=15, blank=True)

    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    units_needed = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(10)]
    )
    hospital_name = models.CharField(max_length=200)
    city = models.CharField(max_length=100, db_index=True)
    urgency_level = models.CharField(max_length=15, choices=URGENCY_CHOICES, default='planned')
    notes = models.TextField(blank=True)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')

    # Filled in when a donor accepts
    donor = models.ForeignKey(
        'donors.DonorProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='matched_requests'
    )
    donor_name = models.CharField(max_length=200, blank=True)
    donor_contact = models.CharField(max_length=15, blank=True)

    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.hospital_name} - {self.blood_group} ({self.urgency_level})"

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Blood Request'
        verbose_name_plural = 'Blood Requests'


class VerificationRequest(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    ]

    # Linked by email; the FK is filled in once the hospital is resolved
    hospital = models.ForeignKey(
        ReceiverProfile,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='verification_requests'
    )
    hospital_name = models.CharField(max_length=200)
    hospital_email = models.EmailField()
    city = models.CharField(max_length=100, db_index=True)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')
    reviewed_by = models.ForeignKey(
        'organizations.OrganizationProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_verifications'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.hospital_name} - {self.status}"

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Verification Request'
        verbose_name_plural = 'Verification Requests'

# organizations/models.py
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone

from algorithms.blood_compatibility import BLOOD_GROUP_CHOICES
from algorithms.stock import MAX_UNITS, MIN_UNITS, STOCK_LEVELS, classify


class OrganizationProfile(models.Model):
    ORGANIZATION_TYPE_CHOICES = [
        ('blood_bank', 'Blood Bank'),
        ('ngo', 'NGO'),
    ]

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='organization_profile'
    )
    organization_type = models.CharField(max_length=10, choices=ORGANIZATION_TYPE_CHOICES, default='blood_bank')
    license_id = models.CharField(max_length=100)

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

    def __str__(self):
        return self.name

    class Meta:
        verbose_name = 'Organization Profile'
        verbose_name_plural = 'Organization Profiles'


class InventoryItem(models.Model):
    STOCK_LEVEL_CHOICES = [(level, level.title()) for level in STOCK_LEVELS]

    organization = models.ForeignKey(
        OrganizationProfile,
        on_delete=models.CASCADE,
        related_name='inventory'
    )
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    units = models.PositiveIntegerField(
        default=0,
        validators=[MinValueValidator(MIN_UNITS), MaxValueValidator(MAX_UNITS)]
    )
    # Derived from units on every save
    stock_level = models.CharField(max_length=10, choices=STOCK_LEVEL_CHOICES, editable=False)
    expiry_date = models.DateField()
    last_updated = models.DateTimeField(default=timezone.now)

    def save(self, *args, **kwargs):
        self.stock_level = classify(self.units)
        update_fields = kwargs.get('update_fields')
        if update_fields is not None and 'units' in update_fields:
            kwargs['update_fields'] = set(update_fields) | {'stock_level'}
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.organization} - {self.blood_group}: {self.units} units"

    class Meta:
        ordering = ['blood_group']
        verbose_name = 'Inventory Item'
        verbose_name_plural = 'Inventory Items'
        constraints = [
            models.UniqueConstraint(
                fields=['organization', 'blood_group'],
                name='one_inventory_item_per_blood_group',
            ),
        ]

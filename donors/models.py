from django.db import models
from django.conf import settings
from django.utils import timezone

from algorithms.blood_compatibility import BLOOD_GROUP_CHOICES
from algorithms.eligibility import is_on_cooldown
from algorithms.exceptions import ImmutableRecord


# ---------------------------
# Donor Profile
# ---------------------------
class DonorProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='donor_profile'
    )

    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)

    # Set only when a match is accepted; cooldown itself is computed
    last_donation_date = models.DateTimeField(null=True, blank=True)
    cooldown_end_date = models.DateTimeField(null=True, blank=True)

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

    @property
    def can_donate(self) -> bool:
        return not is_on_cooldown(self)

    def __str__(self):
        return f"{self.name} ({self.blood_group})"

    class Meta:
        verbose_name = "Donor Profile"
        verbose_name_plural = "Donor Profiles"
        ordering = ['-created_at']
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(cooldown_end_date__isnull=True)
                    | models.Q(last_donation_date__isnull=True)
                    | models.Q(cooldown_end_date__gte=models.F('last_donation_date'))
                ),
                name='donor_cooldown_after_last_donation',
            ),
        ]


class DonationRecord(models.Model):
    """Append-only log entry written when a donor accepts a match"""
    donor = models.ForeignKey(
        DonorProfile,
        on_delete=models.CASCADE,
        related_name='donations'
    )
    blood_request = models.ForeignKey(
        'receivers.BloodRequest',
        on_delete=models.CASCADE,
        related_name='donations'
    )

    receiver_name = models.CharField(max_length=200)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES)
    hospital_name = models.CharField(max_length=200)

    donation_date = models.DateTimeField(default=timezone.now)
    cooldown_end_date = models.DateTimeField()

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ImmutableRecord(f"Donation record {self.pk} cannot be changed")
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.donor} | {self.donation_date:%Y-%m-%d}"

    class Meta:
        ordering = ['-donation_date']
        verbose_name = "Donation Record"
        verbose_name_plural = "Donation Records"

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


class CustomUser(AbstractUser):
    DONOR = 'donor'
    RECEIVER = 'receiver'
    ORGANIZATION = 'organization'

    USER_TYPE_CHOICES = (
        (RECEIVER, 'Receiver'),
        (DONOR, 'Donor'),
        (ORGANIZATION, 'Organization'),
    )

    user_type = models.CharField(
        max_length=15,
        choices=USER_TYPE_CHOICES,
        default=DONOR
    )
    email = models.EmailField(unique=True)

    name = models.CharField(max_length=200)
    city = models.CharField(max_length=100, db_index=True)
    contact_number = models.CharField(max_length=15)

    created_at = models.DateTimeField(default=timezone.now)

    def __str__(self):
        return f"{self.name or self.username} ({self.user_type})"

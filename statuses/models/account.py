from django.db import models
from django.contrib.auth.models import AbstractUser
from django.conf import settings

FIELD_MAX_LENGTH = 30


class Account(AbstractUser):
    """
    Represents a local user of the instance. Inherits from Django's AbstractUser
    and adds the public profile fields rendered with every status.

    Fields:
        username (str): Unique handle, at most 30 characters.
        display_name (str): Public name shown next to the handle.
        note (str, optional): Profile biography.

    Notes:
        - `password`, `is_active` and other auth-related fields are inherited.
        - An account owns zero or more Status rows (see `statuses` related name).
    """
    # overriding 'username' to make the max_length shorter
    username = models.CharField(max_length = FIELD_MAX_LENGTH, unique = True)
    display_name = models.CharField(max_length = FIELD_MAX_LENGTH, blank = True)
    note = models.TextField(blank = True)

    class Meta:
        verbose_name = "Account"
        verbose_name_plural = "Accounts"

    def __str__(self):
        return self.username

    @property
    def acct(self) -> str:
        """Return the handle as seen from this instance (no domain part)."""
        return self.username

    @property
    def url(self) -> str:
        """Return the public profile URL for this account."""
        base = settings.BASE_URL.rstrip('/')
        return f"{base}/@{self.username}"

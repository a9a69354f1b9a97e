from django.db import models
from django.utils import timezone
from django.utils.crypto import get_random_string
from .account import Account

TOKEN_LENGTH = 43


class Application(models.Model):
    """An API client that access tokens are issued to."""
    name = models.CharField(max_length=60)
    website = models.URLField(blank=True)
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = "Application"
        verbose_name_plural = "Applications"

    def __str__(self):
        return self.name


class AccessToken(models.Model):
    """
    Bearer credential presented in the `Authorization` header.

    Fields:
        - token: Random secret string, generated on first save.
        - account: The resource owner the token acts for.
        - application: The client the token was issued to.
        - scopes: Space separated capability tokens, e.g. "read write".
        - expires_at: Optional expiry; null means the token never expires.
        - revoked_at: Set once the token is revoked.
    """
    token = models.CharField(max_length=64, unique=True, editable=False)
    account = models.ForeignKey(
        Account,
        related_name="access_tokens",
        on_delete=models.CASCADE,
    )
    application = models.ForeignKey(
        Application,
        related_name="access_tokens",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
    )
    scopes = models.CharField(max_length=255, blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    expires_at = models.DateTimeField(null=True, blank=True)
    revoked_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = "Access Token"
        verbose_name_plural = "Access Tokens"

    def __str__(self):
        return f"{self.account} [{self.scopes}]"

    def save(self, *args, **kwargs):
        if not self.token:
            self.token = get_random_string(TOKEN_LENGTH)
        super().save(*args, **kwargs)

    @property
    def scope_set(self) -> frozenset:
        return frozenset(self.scopes.split())

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None and self.revoked_at <= timezone.now()

    @property
    def is_expired(self) -> bool:
        return self.expires_at is not None and self.expires_at <= timezone.now()

    @property
    def is_accessible(self) -> bool:
        """Return whether the token may still be used to authenticate."""
        return not (self.is_revoked or self.is_expired)

    def revoke(self):
        self.revoked_at = timezone.now()
        self.save(update_fields=["revoked_at"])

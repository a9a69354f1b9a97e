from django.db import models
from django.conf import settings
from django.utils import timezone
from statuses import visibility as policy
from .account import Account
from .token import Application


class Status(models.Model):
    """
    Represents a short post written by an account.

    Fields:
        - id: Auto-incrementing identifier, rendered as a string in the API.
        - account: The account that wrote the status.
        - application: The client the status was posted from, if known.
        - content: Text body.
        - spoiler_text: Optional content warning shown before the body.
        - sensitive: Whether clients should hide the body behind the warning.
        - visibility: Who can see the status (public/unlisted/private/direct).
        - local_only: Hidden from callers that are not authenticated on this
          instance, whatever the visibility. Fixed at creation.
        - thread: The status this one replies to.
        - in_reply_to_account: Author of `thread`, kept so the reply still
          renders after the parent is deleted.
        - created_at: Timestamp when the status was created.

    Notes:
        - `thread` carries no database constraint. Deleting a parent leaves
          its replies pointing at a missing id; always resolve it through
          StatusStore.get() rather than the `thread` descriptor.
    """
    PUBLIC = policy.PUBLIC
    UNLISTED = policy.UNLISTED
    PRIVATE = policy.PRIVATE
    DIRECT = policy.DIRECT
    VISIBILITY_CHOICES = policy.VISIBILITY_CHOICES

    account = models.ForeignKey(
        Account,
        related_name='statuses',
        on_delete=models.CASCADE
    )
    application = models.ForeignKey(
        Application,
        related_name='statuses',
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )

    content = models.TextField()
    spoiler_text = models.TextField(blank=True, default="")
    sensitive = models.BooleanField(default=False)
    visibility = models.CharField(
        max_length=10,
        choices=VISIBILITY_CHOICES,
        default=PUBLIC
    )
    local_only = models.BooleanField(default=False)

    thread = models.ForeignKey(
        'self',
        related_name='replies',
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True
    )
    in_reply_to_account = models.ForeignKey(
        Account,
        related_name='+',
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )

    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["id"]
        verbose_name_plural = "Statuses"

    def __str__(self):
        return f"{self.account.username}: {self.content[:40]}"

    @property
    def local_only_emoji(self) -> str:
        """The marker that makes a status local-only when `local_only` is not given."""
        return policy.local_only_marker()

    @property
    def uri(self) -> str:
        base = settings.BASE_URL.rstrip('/')
        return f"{base}/users/{self.account.username}/statuses/{self.pk}"

    @property
    def url(self) -> str:
        base = settings.BASE_URL.rstrip('/')
        return f"{base}/@{self.account.username}/{self.pk}"

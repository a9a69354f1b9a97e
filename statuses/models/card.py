from django.db import models
from django.utils import timezone
from .status import Status


class PreviewCard(models.Model):
    """
    Link preview attached to one or more statuses.

    Cards are filled in by whatever fetches the linked page (or by hand in the
    admin); the API only reads them.
    """
    TYPE_CHOICES = [
        ("link", "Link"),
        ("photo", "Photo"),
        ("video", "Video"),
        ("rich", "Rich"),
    ]

    url = models.URLField(max_length=2048)
    title = models.CharField(max_length=200, blank=True)
    description = models.TextField(blank=True)
    type = models.CharField(max_length=10, choices=TYPE_CHOICES, default="link")
    author_name = models.CharField(max_length=200, blank=True)
    provider_name = models.CharField(max_length=200, blank=True)
    image = models.URLField(max_length=2048, blank=True)
    width = models.PositiveIntegerField(default=0)
    height = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)

    statuses = models.ManyToManyField(
        Status,
        related_name='preview_cards',
        blank=True
    )

    class Meta:
        verbose_name = "Preview Card"
        verbose_name_plural = "Preview Cards"

    def __str__(self):
        return self.title or self.url

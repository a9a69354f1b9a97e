from django.conf import settings
from rest_framework import serializers
from statuses.models import Status

DEFAULT_STATUS_MAX_CHARS = 500


class StatusCreateSerializer(serializers.Serializer):
    """
    Validates the parameters of POST /api/v1/statuses.

    `local_only` is tri-state: an omitted value stays None (even for form
    posts) so the flag can be inferred from the content.
    """
    status = serializers.CharField(trim_whitespace=False)
    in_reply_to_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    visibility = serializers.ChoiceField(
        choices=Status.VISIBILITY_CHOICES,
        required=False,
        default=Status.PUBLIC,
    )
    spoiler_text = serializers.CharField(required=False, allow_blank=True, default="")
    sensitive = serializers.BooleanField(required=False, default=False)
    local_only = serializers.BooleanField(required=False, allow_null=True, default=None)

    def validate_status(self, value):
        if not value.strip():
            raise serializers.ValidationError("This field may not be blank.")

        limit = getattr(settings, "STATUS_MAX_CHARS", DEFAULT_STATUS_MAX_CHARS)
        if len(value) > limit:
            raise serializers.ValidationError(
                f"Ensure this field has no more than {limit} characters."
            )
        return value

    def validate_in_reply_to_id(self, value):
        return value or None

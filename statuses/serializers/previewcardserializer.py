from rest_framework import serializers
from statuses.models import PreviewCard


class PreviewCardSerializer(serializers.ModelSerializer):
    """Link preview for a status, in the shape clients expect from /card."""
    image = serializers.SerializerMethodField()

    class Meta:
        model  = PreviewCard
        fields = [
            "url",
            "title",
            "description",
            "type",
            "author_name",
            "provider_name",
            "image",
            "width",
            "height",
        ]

    def get_image(self, obj):
        return obj.image or None

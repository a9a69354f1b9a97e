from rest_framework import serializers
from statuses.models import Application


class ApplicationSerializer(serializers.ModelSerializer):
    website = serializers.SerializerMethodField()

    class Meta:
        model  = Application
        fields = ["name", "website"]

    def get_website(self, obj):
        return obj.website or None

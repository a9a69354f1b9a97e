from rest_framework import serializers
from statuses.models import Status
from .accountserializer import AccountSerializer
from .applicationserializer import ApplicationSerializer


class StatusSerializer(serializers.ModelSerializer):
    """
    Read-only rendering of a Status.

    Ids are rendered as strings. `in_reply_to_id` is taken from the stored
    column, so it is still reported after the parent has been deleted.
    """
    id = serializers.SerializerMethodField()
    in_reply_to_id = serializers.SerializerMethodField()
    in_reply_to_account_id = serializers.SerializerMethodField()
    uri = serializers.CharField(read_only=True)
    url = serializers.CharField(read_only=True)
    account = AccountSerializer(read_only=True)
    application = ApplicationSerializer(read_only=True)

    class Meta:
        model = Status
        fields = [
            "id",
            "created_at",
            "in_reply_to_id",
            "in_reply_to_account_id",
            "sensitive",
            "spoiler_text",
            "visibility",
            "local_only",
            "uri",
            "url",
            "content",
            "account",
            "application",
        ]

    def get_id(self, obj):
        return str(obj.pk)

    def get_in_reply_to_id(self, obj):
        if obj.thread_id is None:
            return None
        return str(obj.thread_id)

    def get_in_reply_to_account_id(self, obj):
        if obj.in_reply_to_account_id is None:
            return None
        return str(obj.in_reply_to_account_id)

from rest_framework import serializers
from statuses.models import Account


class AccountSerializer(serializers.ModelSerializer):
    id          = serializers.SerializerMethodField()
    acct        = serializers.CharField(read_only=True)
    url         = serializers.CharField(read_only=True)
    created_at  = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model  = Account
        fields = ["id", "username", "acct", "display_name", "note", "url", "created_at"]

    def get_id(self, obj):
        return str(obj.pk)

import logging
from rest_framework.decorators import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.exceptions import NotFound
from statuses.authentication import BearerTokenAuthentication, HasScopeForWrites, Principal
from statuses.serializers import (
    PreviewCardSerializer,
    StatusCreateSerializer,
    StatusSerializer,
)
from statuses.store import StatusStore
from statuses.visibility import compute_local_only, is_visible

logger = logging.getLogger(__name__)


class StatusAccessMixin:
    """
    Shared lookup for the status endpoints.

    A status the caller may not see is reported exactly like a missing one.
    Only the log records which of the two it was.
    """

    authentication_classes = [BearerTokenAuthentication]
    permission_classes = [HasScopeForWrites]
    required_scopes = ["write"]
    store_class = StatusStore

    def get_store(self):
        return self.store_class()

    def get_principal(self):
        return Principal.from_request(self.request)

    def get_visible_status(self, status_id):
        status_obj = self.get_store().get(status_id)
        if status_obj is None:
            logger.debug("status %s does not exist", status_id)
            raise NotFound()

        principal = self.get_principal()
        if not is_visible(status_obj, principal):
            logger.debug("status %s is hidden from %r", status_id, principal)
            raise NotFound()
        return status_obj


class StatusListAPIView(StatusAccessMixin, APIView):
    """
    POST /api/v1/statuses → create a status for the token's account.

    Body parameters: status (text), in_reply_to_id, visibility, spoiler_text,
    sensitive, local_only. When local_only is omitted it is inferred from the
    replied-to status and from the content marker.
    """

    def post(self, request):
        serializer = StatusCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        principal = self.get_principal()

        thread = None
        if data.get("in_reply_to_id"):
            thread = self.get_visible_status(data["in_reply_to_id"])

        local_only = compute_local_only(
            data["status"],
            data.get("local_only"),
            thread=thread,
        )

        status_obj = self.get_store().create(
            principal.account,
            data["status"],
            visibility=data["visibility"],
            local_only=local_only,
            thread=thread,
            spoiler_text=data["spoiler_text"],
            sensitive=data["sensitive"],
            application=request.auth.application,
        )
        return Response(StatusSerializer(status_obj).data, status=status.HTTP_200_OK)


class StatusDetailAPIView(StatusAccessMixin, APIView):
    """
    GET    /api/v1/statuses/<id> → show
    DELETE /api/v1/statuses/<id> → destroy (owner only)
    """

    def get(self, request, status_id):
        status_obj = self.get_visible_status(status_id)
        return Response(StatusSerializer(status_obj).data, status=status.HTTP_200_OK)

    def delete(self, request, status_id):
        store = self.get_store()
        status_obj = store.get(status_id)

        # other accounts' statuses are reported as missing
        if status_obj is None or status_obj.account_id != request.user.pk:
            raise NotFound()

        store.delete(status_obj)
        return Response({}, status=status.HTTP_200_OK)


class StatusContextAPIView(StatusAccessMixin, APIView):
    """GET /api/v1/statuses/<id>/context → visible ancestors and descendants."""

    def get(self, request, status_id):
        status_obj = self.get_visible_status(status_id)
        store = self.get_store()
        principal = self.get_principal()

        ancestors = [s for s in store.ancestors(status_obj) if is_visible(s, principal)]
        descendants = [s for s in store.descendants(status_obj) if is_visible(s, principal)]

        return Response(
            {
                "ancestors": StatusSerializer(ancestors, many=True).data,
                "descendants": StatusSerializer(descendants, many=True).data,
            },
            status=status.HTTP_200_OK,
        )


class StatusCardAPIView(StatusAccessMixin, APIView):
    """GET /api/v1/statuses/<id>/card → link preview, or {} when there is none."""

    def get(self, request, status_id):
        status_obj = self.get_visible_status(status_id)
        card = self.get_store().preview_card(status_obj)
        if card is None:
            return Response({}, status=status.HTTP_200_OK)
        return Response(PreviewCardSerializer(card).data, status=status.HTTP_200_OK)

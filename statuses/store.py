import logging
from django.db import transaction
from statuses.models import Status, PreviewCard

logger = logging.getLogger(__name__)


class StatusStore:
    """
    Read/write access to statuses for the API views.

    Lookups return None instead of raising so that callers decide how a miss
    is reported. Reply links are followed by id, so a deleted parent simply
    looks absent.
    """

    def __init__(self, queryset=None):
        if queryset is None:
            queryset = Status.objects.select_related("account", "application")
        self.queryset = queryset

    def create(self, account, content, **options) -> Status:
        thread = options.get("thread")
        with transaction.atomic():
            status_obj = Status.objects.create(
                account=account,
                content=content,
                visibility=options.get("visibility") or Status.PUBLIC,
                local_only=bool(options.get("local_only", False)),
                spoiler_text=options.get("spoiler_text") or "",
                sensitive=bool(options.get("sensitive", False)),
                application=options.get("application"),
                thread=thread,
                in_reply_to_account=thread.account if thread is not None else None,
            )
        logger.info("account %s created status %s", account.pk, status_obj.pk)
        return status_obj

    def get(self, status_id):
        try:
            status_id = int(status_id)
        except (TypeError, ValueError):
            return None
        return self.queryset.filter(pk=status_id).first()

    def ancestors(self, status_obj) -> list:
        """Statuses `status_obj` replies to, oldest first."""
        chain = []
        seen = {status_obj.pk}
        parent_id = status_obj.thread_id
        while parent_id is not None and parent_id not in seen:
            parent = self.get(parent_id)
            if parent is None:
                break
            seen.add(parent.pk)
            chain.append(parent)
            parent_id = parent.thread_id
        chain.reverse()
        return chain

    def descendants(self, status_obj) -> list:
        """Every reply below `status_obj`, in creation order."""
        found = []
        seen = {status_obj.pk}
        frontier = [status_obj.pk]
        while frontier:
            replies = [
                reply for reply in self.queryset.filter(thread_id__in=frontier)
                if reply.pk not in seen
            ]
            seen.update(reply.pk for reply in replies)
            found.extend(replies)
            frontier = [reply.pk for reply in replies]
        found.sort(key=lambda reply: reply.pk)
        return found

    def get_thread(self, status_obj) -> list:
        """Every status under the same thread root, except `status_obj`, in creation order."""
        ancestors = self.ancestors(status_obj)
        root = ancestors[0] if ancestors else status_obj
        members = [root] + self.descendants(root)
        members = [member for member in members if member.pk != status_obj.pk]
        members.sort(key=lambda member: member.pk)
        return members

    def delete(self, target) -> bool:
        """Delete by id, or delete an already loaded Status without re-fetching it."""
        status_obj = target if isinstance(target, Status) else self.get(target)
        if status_obj is None:
            return False
        pk = status_obj.pk
        status_obj.delete()
        logger.info("deleted status %s", pk)
        return True

    def preview_card(self, status_obj):
        return PreviewCard.objects.filter(statuses=status_obj).order_by("-id").first()

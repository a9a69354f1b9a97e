"""
Visibility rules for statuses.

Both functions are pure: they look only at their arguments (and the
configured local-only marker), never at the database.
"""
from django.conf import settings

PUBLIC = "public"
UNLISTED = "unlisted"
PRIVATE = "private"
DIRECT = "direct"

VISIBILITY_CHOICES = [
    (PUBLIC, "Public"),
    (UNLISTED, "Unlisted"),
    (PRIVATE, "Followers only"),
    (DIRECT, "Direct"),
]

LISTED_VISIBILITIES = (PUBLIC, UNLISTED)

DEFAULT_LOCAL_ONLY_EMOJI = "\U0001f441"  # 👁


def local_only_marker() -> str:
    """Return the substring that marks content as local-only."""
    return getattr(settings, "LOCAL_ONLY_EMOJI", DEFAULT_LOCAL_ONLY_EMOJI)


def is_visible(status, principal) -> bool:
    """
    Decide whether `principal` may see `status`.

    - public / unlisted: visible to everyone, except that local-only statuses
      are hidden from anonymous callers.
    - private / direct: visible to authenticated callers only.

    Any authenticated principal counts as local to this instance. A missing
    principal is anonymous.
    """
    anonymous = principal is None or principal.is_anonymous
    if status.visibility in LISTED_VISIBILITIES:
        return not (status.local_only and anonymous)
    return not anonymous


def compute_local_only(content: str, explicit=None, thread=None) -> bool:
    """
    Work out the `local_only` flag for a new status.

    An explicit True/False always wins. Otherwise a reply to a local-only
    status stays local-only, and anything else is local-only iff `content`
    contains the marker.
    """
    if explicit is not None:
        return bool(explicit)
    if thread is not None and thread.local_only:
        return True
    return local_only_marker() in (content or "")

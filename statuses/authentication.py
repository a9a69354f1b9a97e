from rest_framework import exceptions
from rest_framework.authentication import TokenAuthentication
from rest_framework.permissions import BasePermission, SAFE_METHODS
from statuses.models import AccessToken


class BearerTokenAuthentication(TokenAuthentication):
    """
    Resolve `Authorization: Bearer <token>` to (account, AccessToken).

    Requests without the header stay anonymous; an unknown, revoked or expired
    token is rejected with 401.
    """
    keyword = "Bearer"
    model = AccessToken

    def authenticate_credentials(self, key):
        token = (
            AccessToken.objects.select_related("account", "application")
            .filter(token=key)
            .first()
        )
        if token is None or not token.is_accessible:
            raise exceptions.AuthenticationFailed("The access token is invalid")

        if not token.account.is_active:
            raise exceptions.AuthenticationFailed("Your login is currently disabled")

        return (token.account, token)


class Principal:
    """
    The identity making a request, as seen by the visibility rules.

    A principal without an account, or with no granted scope, is anonymous.
    """

    def __init__(self, account=None, scopes=()):
        self.account = account
        self.scopes = frozenset(scopes)

    def __repr__(self):
        if self.is_anonymous:
            return "<Principal anonymous>"
        return f"<Principal {self.account} {sorted(self.scopes)}>"

    @property
    def is_anonymous(self) -> bool:
        return self.account is None or not self.scopes

    def has_scope(self, scope: str) -> bool:
        """`write` also grants its sub-scopes such as `write:statuses`."""
        if self.is_anonymous:
            return False
        return scope in self.scopes or scope.split(":")[0] in self.scopes

    @classmethod
    def from_request(cls, request):
        token = getattr(request, "auth", None)
        if not isinstance(token, AccessToken):
            return ANONYMOUS
        return cls(token.account, token.scope_set)


ANONYMOUS = Principal()


class HasScopeForWrites(BasePermission):
    """
    Let reads through and require a token carrying every scope listed in the
    view's `required_scopes` for anything else.
    """
    message = "This action is outside the authorized scopes"

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True

        # no token at all: DRF turns False into 401 NotAuthenticated
        if request.auth is None:
            return False

        principal = Principal.from_request(request)
        required = getattr(view, "required_scopes", ["write"])
        return all(principal.has_scope(scope) for scope in required)

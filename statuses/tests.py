from datetime import timedelta
from io import StringIO
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase, TestCase, override_settings
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase, APIRequestFactory
from statuses.authentication import ANONYMOUS, Principal
from statuses.models import Account, Application, AccessToken, Status, PreviewCard
from statuses.store import StatusStore
from statuses.visibility import compute_local_only, is_visible, local_only_marker
from unittest.mock import patch

EYEBALL = "\U0001f441"


def make_account(username="alice"):
    return Account.objects.create_user(
        username=username,
        password="testpass",
        display_name=username.title(),
    )


def make_token(account, scopes="write", **kwargs):
    app, _ = Application.objects.get_or_create(
        name="Test app",
        defaults={"website": "http://testapp.com"},
    )
    return AccessToken.objects.create(account=account, application=app, scopes=scopes, **kwargs)


# Visibility rules
class IsVisibleTests(SimpleTestCase):
    def setUp(self):
        self.local = Principal(Account(username="bob"), {"read"})

    def _status(self, visibility, local_only=False):
        return Status(visibility=visibility, local_only=local_only)

    def test_listed_statuses_visible_to_anonymous(self):
        for visibility in (Status.PUBLIC, Status.UNLISTED):
            self.assertTrue(is_visible(self._status(visibility), ANONYMOUS))
            self.assertTrue(is_visible(self._status(visibility), None))

    def test_local_only_hidden_from_anonymous_whatever_the_visibility(self):
        for visibility, _ in Status.VISIBILITY_CHOICES:
            self.assertFalse(is_visible(self._status(visibility, local_only=True), ANONYMOUS))

    def test_private_and_direct_hidden_from_anonymous(self):
        self.assertFalse(is_visible(self._status(Status.PRIVATE), ANONYMOUS))
        self.assertFalse(is_visible(self._status(Status.DIRECT), ANONYMOUS))

    def test_authenticated_principal_sees_everything(self):
        for visibility, _ in Status.VISIBILITY_CHOICES:
            self.assertTrue(is_visible(self._status(visibility), self.local))
            self.assertTrue(is_visible(self._status(visibility, local_only=True), self.local))

    def test_principal_without_scopes_is_anonymous(self):
        scopeless = Principal(Account(username="carol"), ())
        self.assertFalse(is_visible(self._status(Status.PUBLIC, local_only=True), scopeless))
        self.assertFalse(is_visible(self._status(Status.PRIVATE), scopeless))


class ComputeLocalOnlyTests(SimpleTestCase):
    def test_explicit_value_wins(self):
        for content in ("Hello world", f"Hello world {EYEBALL}", ""):
            self.assertTrue(compute_local_only(content, True))
            self.assertFalse(compute_local_only(content, False))

    def test_inferred_from_marker(self):
        self.assertFalse(compute_local_only("Hello world", None))
        self.assertTrue(compute_local_only(f"Hello world {EYEBALL}", None))
        self.assertTrue(compute_local_only(f"Hello world {EYEBALL}\ufe0f"))

    def test_marker_anywhere_in_content(self):
        self.assertTrue(compute_local_only(f"{EYEBALL} just for us", None))

    def test_reply_to_local_only_status_is_local_only(self):
        parent = Status(local_only=True)
        self.assertTrue(compute_local_only("Hello world", None, thread=parent))
        self.assertFalse(compute_local_only("Hello world", False, thread=parent))

    def test_reply_to_federated_status_uses_marker(self):
        parent = Status(local_only=False)
        self.assertFalse(compute_local_only("Hello world", None, thread=parent))
        self.assertTrue(compute_local_only(f"Hello world {EYEBALL}", None, thread=parent))

    def test_deterministic(self):
        results = {compute_local_only(f"Hello world {EYEBALL}") for _ in range(5)}
        self.assertEqual(results, {True})

    @override_settings(LOCAL_ONLY_EMOJI=":local:")
    def test_marker_is_configurable(self):
        self.assertEqual(local_only_marker(), ":local:")
        self.assertEqual(Status().local_only_emoji, ":local:")
        self.assertTrue(compute_local_only("Hello world :local:"))
        self.assertFalse(compute_local_only(f"Hello world {EYEBALL}"))


# Credential resolution
class PrincipalTests(SimpleTestCase):
    def test_anonymous(self):
        self.assertTrue(ANONYMOUS.is_anonymous)
        self.assertFalse(ANONYMOUS.has_scope("read"))

    def test_scope_checks(self):
        principal = Principal(Account(username="alice"), {"read", "write"})
        self.assertFalse(principal.is_anonymous)
        self.assertTrue(principal.has_scope("write"))
        self.assertTrue(principal.has_scope("write:statuses"))
        self.assertFalse(principal.has_scope("follow"))

    def test_sub_scope_does_not_grant_parent(self):
        principal = Principal(Account(username="alice"), {"write:statuses"})
        self.assertTrue(principal.has_scope("write:statuses"))
        self.assertFalse(principal.has_scope("write"))

    def test_from_request_without_token(self):
        request = APIRequestFactory().get("/api/v1/statuses/1")
        request.auth = None
        self.assertIs(Principal.from_request(request), ANONYMOUS)


class AccessTokenTests(TestCase):
    def setUp(self):
        self.account = make_account()

    def test_token_generated_on_save(self):
        token = make_token(self.account)
        self.assertEqual(len(token.token), 43)
        self.assertEqual(token.scope_set, frozenset({"write"}))
        self.assertTrue(token.is_accessible)

    def test_revoked_and_expired_tokens_are_not_accessible(self):
        revoked = make_token(self.account)
        revoked.revoke()
        self.assertFalse(revoked.is_accessible)

        expired = make_token(self.account, expires_at=timezone.now() - timedelta(minutes=1))
        self.assertFalse(expired.is_accessible)

        later = make_token(self.account, expires_at=timezone.now() + timedelta(hours=1))
        self.assertTrue(later.is_accessible)


# Status store
class StatusStoreTests(TestCase):
    def setUp(self):
        self.account = make_account()
        self.store = StatusStore()

    def test_create_then_get(self):
        created = self.store.create(self.account, "Hello world", visibility=Status.UNLISTED)
        fetched = self.store.get(created.pk)
        self.assertEqual(fetched, created)
        self.assertEqual(fetched.visibility, Status.UNLISTED)
        self.assertFalse(fetched.local_only)

    def test_ids_increase(self):
        first = self.store.create(self.account, "one")
        second = self.store.create(self.account, "two")
        self.assertGreater(second.pk, first.pk)

    def test_get_missing_or_malformed_id(self):
        self.assertIsNone(self.store.get(12345))
        self.assertIsNone(self.store.get("not-a-number"))
        self.assertIsNone(self.store.get(None))

    def test_delete_is_idempotent(self):
        created = self.store.create(self.account, "Hello world")
        self.assertTrue(self.store.delete(created.pk))
        self.assertIsNone(self.store.get(created.pk))
        self.assertFalse(self.store.delete(created.pk))
        self.assertIsNone(self.store.get(created.pk))

    def test_delete_loaded_instance_skips_lookup(self):
        created = self.store.create(self.account, "Hello world")
        with patch.object(StatusStore, "get", autospec=True) as get:
            self.assertTrue(self.store.delete(created))
        get.assert_not_called()
        self.assertFalse(Status.objects.filter(pk=created.pk).exists())

    def test_reply_records_parent_account(self):
        bob = make_account("bob")
        parent = self.store.create(bob, "root")
        reply = self.store.create(self.account, "reply", thread=parent)
        self.assertEqual(reply.thread_id, parent.pk)
        self.assertEqual(reply.in_reply_to_account, bob)

    def test_thread_walks(self):
        root = self.store.create(self.account, "root")
        child = self.store.create(self.account, "child", thread=root)
        sibling = self.store.create(self.account, "sibling", thread=root)
        grandchild = self.store.create(self.account, "grandchild", thread=child)

        self.assertEqual(self.store.ancestors(grandchild), [root, child])
        self.assertEqual(self.store.descendants(root), [child, sibling, grandchild])
        self.assertEqual(self.store.descendants(child), [grandchild])
        self.assertEqual(self.store.get_thread(child), [root, sibling, grandchild])
        self.assertEqual(self.store.get_thread(root), [child, sibling, grandchild])
        self.assertEqual(self.store.get_thread(grandchild), [root, child, sibling])

    def test_get_thread_includes_siblings_and_cousins(self):
        root = self.store.create(self.account, "root")
        child = self.store.create(self.account, "child", thread=root)
        sibling = self.store.create(self.account, "sibling", thread=root)
        nephew = self.store.create(self.account, "nephew", thread=sibling)
        grandchild = self.store.create(self.account, "grandchild", thread=child)

        thread = self.store.get_thread(grandchild)
        self.assertIn(sibling, thread)
        self.assertIn(nephew, thread)
        self.assertNotIn(grandchild, thread)
        self.assertEqual(thread, [root, child, sibling, nephew])

    def test_get_thread_reflects_current_state(self):
        root = self.store.create(self.account, "root")
        child = self.store.create(self.account, "child", thread=root)
        self.assertEqual(self.store.get_thread(root), [child])
        self.store.delete(child.pk)
        self.assertEqual(self.store.get_thread(root), [])

    def test_deleted_parent_leaves_dangling_reply(self):
        root = self.store.create(self.account, "root")
        child = self.store.create(self.account, "child", thread=root)
        grandchild = self.store.create(self.account, "grandchild", thread=child)

        self.store.delete(child.pk)

        orphan = self.store.get(grandchild.pk)
        self.assertIsNotNone(orphan)
        self.assertEqual(orphan.thread_id, child.pk)
        self.assertEqual(self.store.ancestors(orphan), [])
        self.assertEqual(self.store.descendants(root), [])

    def test_preview_card(self):
        created = self.store.create(self.account, "https://example.com")
        self.assertIsNone(self.store.preview_card(created))

        card = PreviewCard.objects.create(url="https://example.com", title="Example")
        card.statuses.add(created)
        self.assertEqual(self.store.preview_card(created), card)

        self.store.delete(created.pk)
        self.assertEqual(card.statuses.count(), 0)


# API with a bearer token
class AuthenticatedStatusAPITests(APITestCase):
    def setUp(self):
        self.account = make_account()
        self.token = make_token(self.account)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {self.token.token}")

    def _create(self, **kwargs):
        return Status.objects.create(account=self.account, content="Hello", **kwargs)

    def test_show(self):
        target = self._create()
        resp = self.client.get(f"/api/v1/statuses/{target.pk}")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["id"], str(target.pk))
        self.assertEqual(resp.data["content"], "Hello")
        self.assertEqual(resp.data["visibility"], "public")
        self.assertEqual(resp.data["account"]["username"], "alice")

    def test_show_missing(self):
        resp = self.client.get("/api/v1/statuses/999999")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_show_private_status(self):
        target = self._create(visibility=Status.PRIVATE)
        resp = self.client.get(f"/api/v1/statuses/{target.pk}")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

    def test_local_only_property(self):
        local = self._create(local_only=True)
        federated = self._create(local_only=False)

        resp = self.client.get(f"/api/v1/statuses/{local.pk}")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIs(resp.data["local_only"], True)

        resp = self.client.get(f"/api/v1/statuses/{federated.pk}")
        self.assertIs(resp.data["local_only"], False)

    def test_context(self):
        target = self._create()
        reply = self._create(thread=target)
        resp = self.client.get(f"/api/v1/statuses/{target.pk}/context")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["ancestors"], [])
        self.assertEqual([s["id"] for s in resp.data["descendants"]], [str(reply.pk)])

    def test_context_of_reply_lists_ancestors(self):
        root = self._create()
        middle = self._create(thread=root)
        leaf = self._create(thread=middle)
        resp = self.client.get(f"/api/v1/statuses/{middle.pk}/context")
        self.assertEqual([s["id"] for s in resp.data["ancestors"]], [str(root.pk)])
        self.assertEqual([s["id"] for s in resp.data["descendants"]], [str(leaf.pk)])

    def test_create_without_local_only_or_eyeball(self):
        resp = self.client.post("/api/v1/statuses", {"status": "Hello world"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIs(resp.data["local_only"], False)
        created = Status.objects.get(pk=resp.data["id"])
        self.assertEqual(created.account, self.account)
        self.assertEqual(created.application.name, "Test app")
        self.assertEqual(resp.data["application"]["name"], "Test app")

    def test_create_with_eyeball(self):
        content = f"Hello world {Status().local_only_emoji}"
        resp = self.client.post("/api/v1/statuses", {"status": content}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIs(resp.data["local_only"], True)

    def test_create_with_local_only_true(self):
        resp = self.client.post(
            "/api/v1/statuses",
            {"status": "Hello world", "local_only": True},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIs(resp.data["local_only"], True)
        self.assertTrue(Status.objects.get(pk=resp.data["id"]).local_only)

    def test_create_with_local_only_false(self):
        resp = self.client.post(
            "/api/v1/statuses",
            {"status": f"Hello world {EYEBALL}", "local_only": False},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIs(resp.data["local_only"], False)

    def test_create_form_encoded_infers_local_only(self):
        resp = self.client.post(
            "/api/v1/statuses",
            {"status": f"Hello world {EYEBALL}"},
            format="multipart",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIs(resp.data["local_only"], True)

        resp = self.client.post(
            "/api/v1/statuses",
            {"status": f"Hello world {EYEBALL}", "local_only": "false"},
            format="multipart",
        )
        self.assertIs(resp.data["local_only"], False)

    def test_create_with_visibility_and_spoiler(self):
        resp = self.client.post(
            "/api/v1/statuses",
            {"status": "psst", "visibility": "direct", "spoiler_text": "cw", "sensitive": True},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["visibility"], "direct")
        self.assertEqual(resp.data["spoiler_text"], "cw")
        self.assertIs(resp.data["sensitive"], True)

    def test_create_reply(self):
        bob = make_account("bob")
        parent = Status.objects.create(account=bob, content="root")
        resp = self.client.post(
            "/api/v1/statuses",
            {"status": "reply", "in_reply_to_id": str(parent.pk)},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["in_reply_to_id"], str(parent.pk))
        self.assertEqual(resp.data["in_reply_to_account_id"], str(bob.pk))

    def test_reply_to_local_only_status_inherits_flag(self):
        parent = self._create(local_only=True)
        resp = self.client.post(
            "/api/v1/statuses",
            {"status": "reply", "in_reply_to_id": str(parent.pk)},
            format="json",
        )
        self.assertIs(resp.data["local_only"], True)

    def test_reply_to_missing_status(self):
        resp = self.client.post(
            "/api/v1/statuses",
            {"status": "reply", "in_reply_to_id": "424242"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(Status.objects.count(), 0)

    def test_create_rejects_blank_and_overlong_text(self):
        resp = self.client.post("/api/v1/statuses", {"status": "   "}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("status", resp.data)

        resp = self.client.post("/api/v1/statuses", {"status": "x" * 501}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        resp = self.client.post(
            "/api/v1/statuses",
            {"status": "hi", "visibility": "everyone"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Status.objects.count(), 0)

    def test_create_then_show(self):
        resp = self.client.post("/api/v1/statuses", {"status": "Hello world"}, format="json")
        shown = self.client.get(f"/api/v1/statuses/{resp.data['id']}")
        self.assertEqual(shown.status_code, status.HTTP_200_OK)
        self.assertEqual(shown.data["content"], "Hello world")

    def test_destroy(self):
        target = self._create()
        resp = self.client.delete(f"/api/v1/statuses/{target.pk}")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertIsNone(Status.objects.filter(pk=target.pk).first())

        resp = self.client.get(f"/api/v1/statuses/{target.pk}")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_destroy_looks_the_status_up_once(self):
        target = self._create()
        with patch.object(StatusStore, "get", autospec=True, side_effect=StatusStore.get) as get:
            resp = self.client.delete(f"/api/v1/statuses/{target.pk}")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(get.call_count, 1)
        self.assertFalse(Status.objects.filter(pk=target.pk).exists())

    def test_destroy_someone_elses_status(self):
        other = Status.objects.create(account=make_account("bob"), content="mine")
        resp = self.client.delete(f"/api/v1/statuses/{other.pk}")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertTrue(Status.objects.filter(pk=other.pk).exists())

    def test_context_after_parent_deleted(self):
        root = self._create()
        child = self._create(thread=root)
        leaf = self._create(thread=child)
        self.client.delete(f"/api/v1/statuses/{child.pk}")

        resp = self.client.get(f"/api/v1/statuses/{leaf.pk}")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["in_reply_to_id"], str(child.pk))

        resp = self.client.get(f"/api/v1/statuses/{leaf.pk}/context")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["ancestors"], [])

    def test_card(self):
        target = self._create()
        resp = self.client.get(f"/api/v1/statuses/{target.pk}/card")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data, {})

        card = PreviewCard.objects.create(
            url="https://example.com/article",
            title="An article",
            provider_name="Example",
        )
        card.statuses.add(target)
        resp = self.client.get(f"/api/v1/statuses/{target.pk}/card")
        self.assertEqual(resp.data["url"], "https://example.com/article")
        self.assertEqual(resp.data["title"], "An article")
        self.assertIsNone(resp.data["image"])


# API without a bearer token
class AnonymousStatusAPITests(APITestCase):
    def setUp(self):
        self.account = make_account()

    def _create(self, **kwargs):
        return Status.objects.create(account=self.account, content="Hello", **kwargs)

    def _assert_all_endpoints(self, target, expected):
        Status.objects.create(account=self.account, content="reply", thread=target)
        for suffix in ("", "/context", "/card"):
            resp = self.client.get(f"/api/v1/statuses/{target.pk}{suffix}")
            self.assertEqual(resp.status_code, expected, suffix or "show")

    def test_private_status_is_missing(self):
        self._assert_all_endpoints(self._create(visibility=Status.PRIVATE), status.HTTP_404_NOT_FOUND)

    def test_direct_status_is_missing(self):
        self._assert_all_endpoints(self._create(visibility=Status.DIRECT), status.HTTP_404_NOT_FOUND)

    def test_public_status(self):
        self._assert_all_endpoints(self._create(visibility=Status.PUBLIC), status.HTTP_200_OK)

    def test_unlisted_status(self):
        self._assert_all_endpoints(self._create(visibility=Status.UNLISTED), status.HTTP_200_OK)

    def test_local_only_status_is_missing(self):
        target = self._create(visibility=Status.PUBLIC, local_only=True)
        self._assert_all_endpoints(target, status.HTTP_404_NOT_FOUND)

    def test_hidden_and_absent_look_the_same(self):
        hidden = self._create(visibility=Status.PRIVATE)
        hidden_resp = self.client.get(f"/api/v1/statuses/{hidden.pk}")
        absent_resp = self.client.get("/api/v1/statuses/999999")
        self.assertEqual(hidden_resp.status_code, absent_resp.status_code)
        self.assertEqual(hidden_resp.data, absent_resp.data)

    def test_hidden_and_absent_are_logged_differently(self):
        hidden = self._create(visibility=Status.PRIVATE)
        with self.assertLogs("statuses.views.status_views", level="DEBUG") as logs:
            self.client.get(f"/api/v1/statuses/{hidden.pk}")
            self.client.get("/api/v1/statuses/999999")
        self.assertIn("hidden", logs.output[0])
        self.assertIn("does not exist", logs.output[1])

    def test_context_omits_hidden_members(self):
        root = self._create()
        public_reply = self._create(thread=root)
        self._create(thread=root, visibility=Status.PRIVATE)
        self._create(thread=root, local_only=True)

        resp = self.client.get(f"/api/v1/statuses/{root.pk}/context")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([s["id"] for s in resp.data["descendants"]], [str(public_reply.pk)])

    def test_context_omits_hidden_ancestor(self):
        root = self._create(visibility=Status.PRIVATE)
        reply = self._create(thread=root)
        resp = self.client.get(f"/api/v1/statuses/{reply.pk}/context")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.data["ancestors"], [])

    def test_create_requires_token(self):
        resp = self.client.post("/api/v1/statuses", {"status": "Hello world"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(Status.objects.count(), 0)

    def test_destroy_requires_token(self):
        target = self._create()
        resp = self.client.delete(f"/api/v1/statuses/{target.pk}")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertTrue(Status.objects.filter(pk=target.pk).exists())


# Token scopes and validity
class TokenScopeAPITests(APITestCase):
    def setUp(self):
        self.account = make_account()

    def _use(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.token}")

    def test_read_token_cannot_write(self):
        self._use(make_token(self.account, scopes="read"))
        resp = self.client.post("/api/v1/statuses", {"status": "Hello world"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

        target = Status.objects.create(account=self.account, content="Hello")
        resp = self.client.delete(f"/api/v1/statuses/{target.pk}")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Status.objects.filter(pk=target.pk).exists())

    def test_read_token_sees_private_and_local_only(self):
        self._use(make_token(self.account, scopes="read"))
        private = Status.objects.create(account=self.account, content="p", visibility=Status.PRIVATE)
        local = Status.objects.create(account=self.account, content="l", local_only=True)
        self.assertEqual(self.client.get(f"/api/v1/statuses/{private.pk}").status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get(f"/api/v1/statuses/{local.pk}").status_code, status.HTTP_200_OK)

    def test_revoked_token_rejected(self):
        token = make_token(self.account)
        token.revoke()
        self._use(token)
        target = Status.objects.create(account=self.account, content="Hello")
        resp = self.client.get(f"/api/v1/statuses/{target.pk}")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_expired_token_rejected(self):
        self._use(make_token(self.account, expires_at=timezone.now() - timedelta(seconds=1)))
        resp = self.client.post("/api/v1/statuses", {"status": "Hello world"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_unknown_token_rejected(self):
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-real-token")
        resp = self.client.post("/api/v1/statuses", {"status": "Hello world"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_disabled_account_rejected(self):
        token = make_token(self.account)
        self.account.is_active = False
        self.account.save()
        self._use(token)
        resp = self.client.post("/api/v1/statuses", {"status": "Hello world"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class IssueTokenCommandTests(TestCase):
    def test_issues_token(self):
        account = make_account()
        out = StringIO()
        call_command("issue_token", "alice", "--scopes", "read  write", "--app", "cli", stdout=out)

        token = AccessToken.objects.get(account=account)
        self.assertIn(token.token, out.getvalue())
        self.assertEqual(token.scopes, "read write")
        self.assertEqual(token.application.name, "cli")
        self.assertIsNone(token.expires_at)

    def test_expiry(self):
        make_account()
        call_command("issue_token", "alice", "--expires-in", "60", stdout=StringIO())
        token = AccessToken.objects.get()
        self.assertIsNotNone(token.expires_at)
        self.assertTrue(token.is_accessible)

    def test_unknown_account(self):
        with self.assertRaises(CommandError):
            call_command("issue_token", "nobody", stdout=StringIO())

from datetime import timedelta
from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone
from statuses.models import Account, Application, AccessToken


class Command(BaseCommand):
    help = """
    Issue a bearer token for an existing account.

    - the application is looked up by name and created if missing
    - prints the token so it can be used as `Authorization: Bearer <token>`
    """

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("--scopes", default="read write")
        parser.add_argument("--app", default="Command line")
        parser.add_argument("--website", default="")
        parser.add_argument(
            "--expires-in",
            type=int,
            default=None,
            help="Lifetime in seconds; omit for a token that never expires",
        )

    def handle(self, *args, **options):
        account = Account.objects.filter(username=options["username"]).first()
        if account is None:
            raise CommandError(f"No account named {options['username']}")

        if not account.is_active:
            self.stdout.write(self.style.WARNING(
                f"Account {account.username} is disabled; the token will be rejected"
            ))

        application, created = Application.objects.get_or_create(
            name=options["app"],
            defaults={"website": options["website"]},
        )
        if created:
            self.stdout.write(f"Created application {application.name}")

        expires_at = None
        if options["expires_in"] is not None:
            expires_at = timezone.now() + timedelta(seconds=options["expires_in"])

        token = AccessToken.objects.create(
            account=account,
            application=application,
            scopes=" ".join(options["scopes"].split()),
            expires_at=expires_at,
        )
        self.stdout.write(self.style.SUCCESS(token.token))

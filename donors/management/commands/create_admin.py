# donors/management/commands/create_admin.py
import getpass
import os

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from donors.services.accounts import create_or_reset_admin


class Command(BaseCommand):
    help = "Create an administrator, or reset the password of an existing one (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("--name", default="")
        parser.add_argument(
            "--password",
            help="Password to set. Falls back to $ADMIN_PASSWORD, then an interactive prompt.",
        )

    def handle(self, *args, **opts):
        password = opts["password"] or os.getenv("ADMIN_PASSWORD")
        if not password:
            password = getpass.getpass("Password: ")
            if password != getpass.getpass("Password (again): "):
                raise CommandError("Passwords do not match.")
        try:
            validate_password(password)
        except ValidationError as e:
            raise CommandError("; ".join(e.messages))

        admin, created = create_or_reset_admin(opts["username"], password, name=opts["name"])
        verb = "created" if created else "password reset"
        self.stdout.write(self.style.SUCCESS(f"ok: {admin.username} ({verb})"))

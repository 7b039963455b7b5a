from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError

from common.choices import UserRole


class Command(BaseCommand):
    help = "Create the default administrator account if it does not exist yet."

    def add_arguments(self, parser):
        parser.add_argument("--email", default=None, help="Admin email (defaults to DEFAULT_ADMIN_EMAIL).")
        parser.add_argument("--password", default=None, help="Admin password (defaults to DEFAULT_ADMIN_PASSWORD).")
        parser.add_argument("--name", default="Admin User")

    def handle(self, *args, **options):
        User = get_user_model()
        email = (options["email"] or settings.DEFAULT_ADMIN_EMAIL or "").lower()
        password = options["password"] or settings.DEFAULT_ADMIN_PASSWORD
        if not email or not password:
            raise CommandError("An admin email and password are required.")

        existing = User.objects.filter(email__iexact=email).first()
        if existing:
            if existing.role != UserRole.ADMIN:
                raise CommandError(f"{email} already exists with role '{existing.role}'.")
            self.stdout.write(self.style.WARNING(f"Admin {email} already exists, nothing to do."))
            return

        User.objects.create_superuser(
            email=email,
            password=password,
            name=options["name"],
            phone=getattr(settings, "DEFAULT_ADMIN_PHONE", None),
        )
        self.stdout.write(self.style.SUCCESS(f"Admin user created ({email})."))

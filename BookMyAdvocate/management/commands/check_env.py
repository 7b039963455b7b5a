import os
from collections import defaultdict
from typing import Dict, Iterable, List

from django.core.management.base import BaseCommand, CommandError


class Command(BaseCommand):
    help = "Report presence of the environment variables the API reads at startup."

    def handle(self, *args, **options):
        requirements = self._build_requirements()
        grouped: Dict[str, List[str]] = defaultdict(list)
        missing_required = False

        for requirement in requirements:
            group = requirement["group"]
            key = requirement["key"]
            note = requirement["note"]
            required_flag = self._is_required(requirement)
            value = os.environ.get(key)

            if required_flag and not value:
                missing_required = True
                grouped[group].append(self.style.ERROR(f"✗ {key}: missing ({note})"))
            elif value:
                grouped[group].append(self.style.SUCCESS(f"✓ {key}: set"))
            else:
                grouped[group].append(self.style.WARNING(f"• {key}: optional ({note})"))

        for group, lines in grouped.items():
            self.stdout.write("")
            self.stdout.write(self.style.MIGRATE_HEADING(group))
            for line in lines:
                self.stdout.write(f"  {line}")

        if missing_required:
            raise CommandError("Missing required environment variables. See messages above.")

        self.stdout.write("")
        self.stdout.write(self.style.SUCCESS("All required environment variables are set."))

    def _build_requirements(self) -> Iterable[Dict[str, object]]:
        return [
            {"group": "Core", "key": "SECRET_KEY", "note": "Django crypto key, also signs JWTs", "required": True},
            {"group": "Core", "key": "DEBUG", "note": "Set to 1 only in development", "required": False},
            {"group": "Core", "key": "ALLOWED_HOSTS", "note": "Comma separated host names", "required": False},
            {
                "group": "Database",
                "key": "DB_NAME",
                "note": "PostgreSQL database name; SQLite is used when unset",
                "required": False,
            },
            {
                "group": "Database",
                "key": "DB_USER",
                "note": "Database username",
                "required": self._postgres_configured,
            },
            {
                "group": "Database",
                "key": "DB_PASSWORD",
                "note": "Database password",
                "required": self._postgres_configured,
            },
            {"group": "Database", "key": "DB_HOST", "note": "Defaults to localhost", "required": False},
            {"group": "Database", "key": "DB_PORT", "note": "Defaults to 5432", "required": False},
            {"group": "Auth", "key": "JWT_ACCESS_MINUTES", "note": "Access token lifetime, default 60", "required": False},
            {"group": "Auth", "key": "JWT_REFRESH_DAYS", "note": "Refresh token lifetime, default 7", "required": False},
            {"group": "Auth", "key": "AUTH_THROTTLE_RATE", "note": "Login/register rate, default 20/min", "required": False},
            {
                "group": "Admin",
                "key": "DEFAULT_ADMIN_EMAIL",
                "note": "Account created by `manage.py ensure_admin`",
                "required": False,
            },
            {
                "group": "Admin",
                "key": "DEFAULT_ADMIN_PASSWORD",
                "note": "Change the built-in default outside development",
                "required": self._is_production,
            },
            {"group": "Logging", "key": "LOG_LEVEL", "note": "Application log level, default INFO", "required": False},
        ]

    def _is_required(self, requirement: Dict[str, object]) -> bool:
        flag = requirement.get("required", False)
        if callable(flag):
            return bool(flag())
        return bool(flag)

    def _postgres_configured(self) -> bool:
        return bool(os.environ.get("DB_NAME"))

    def _is_production(self) -> bool:
        return os.environ.get("DEBUG", "").strip().lower() not in {"1", "true", "yes", "on"}

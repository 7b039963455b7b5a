import os
from io import StringIO
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import SimpleTestCase


class CheckEnvCommandTests(SimpleTestCase):

    @mock.patch.dict(os.environ, {"SECRET_KEY": "x", "DEBUG": "1"}, clear=True)
    def test_passes_with_minimal_dev_env(self):
        out = StringIO()
        call_command("check_env", stdout=out)
        self.assertIn("All required environment variables are set.", out.getvalue())

    @mock.patch.dict(os.environ, {"DEBUG": "1"}, clear=True)
    def test_missing_secret_key(self):
        with self.assertRaises(CommandError):
            call_command("check_env", stdout=StringIO())

    @mock.patch.dict(os.environ, {"SECRET_KEY": "x", "DEBUG": "1", "DB_NAME": "bma"}, clear=True)
    def test_postgres_needs_credentials(self):
        out = StringIO()
        with self.assertRaises(CommandError):
            call_command("check_env", stdout=out)
        self.assertIn("DB_USER", out.getvalue())

    @mock.patch.dict(os.environ, {"SECRET_KEY": "x"}, clear=True)
    def test_production_needs_admin_password(self):
        with self.assertRaises(CommandError):
            call_command("check_env", stdout=StringIO())

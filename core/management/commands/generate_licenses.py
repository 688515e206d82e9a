"""
Django management command to issue license keys.

Usage: python manage.py generate_licenses 10
"""
from asgiref.sync import async_to_sync
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import DomainException
from licenses.application.commands.generate_licenses import GenerateLicensesCommand
from licenses.application.handlers.generate_licenses_handler import GenerateLicensesHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository


class Command(BaseCommand):
    """Command to generate a batch of license keys."""

    help = "Generate new, unbound license keys"

    def add_arguments(self, parser):
        parser.add_argument("count", type=int, help="Number of license keys to generate")

    def handle(self, *args, **options):
        """Execute the command."""
        handler = GenerateLicensesHandler(
            license_repository=DjangoLicenseRepository(),
            prefix=settings.LICENSE_KEY_PREFIX,
            max_count=settings.LICENSE_GENERATION_MAX_COUNT,
            max_attempts=settings.LICENSE_GENERATION_MAX_ATTEMPTS,
        )
        try:
            result = async_to_sync(handler.handle)(
                GenerateLicensesCommand(count=options["count"])
            )
        except DomainException as e:
            raise CommandError(e.message) from e

        for license_key in result.license_keys:
            self.stdout.write(license_key)
        self.stdout.write(self.style.SUCCESS(f"Generated {result.created} license key(s)"))

"""
Integration tests for bulk license generation.
"""
import pytest
from asgiref.sync import async_to_sync
from prometheus_client import REGISTRY

from core.domain.exceptions import (
    InvalidLicenseCountError,
    LicenseKeyCollisionError,
    RegistryIntegrityError,
)
from licenses.application.commands.generate_licenses import GenerateLicensesCommand
from licenses.application.handlers.generate_licenses_handler import GenerateLicensesHandler
from licenses.domain.license_key import is_well_formed
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)


class FlakyInsertRepository(DjangoLicenseRepository):
    """Repository whose first ``failures`` batch inserts collide."""

    def __init__(self, failures):
        self.failures = failures
        self.inserts = 0

    async def insert_many(self, licenses):
        self.inserts += 1
        if self.inserts <= self.failures:
            raise LicenseKeyCollisionError()
        return await super().insert_many(licenses)


def generate(handler, count):
    return async_to_sync(handler.handle)(GenerateLicensesCommand(count=count))


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseGeneration:
    """Integration tests for GenerateLicensesHandler."""

    def test_generates_unbound_unique_keys(self, license_repository, clock):
        """Test five well-formed, unique, unbound keys are stored."""
        result = generate(GenerateLicensesHandler(license_repository, clock=clock), 5)

        assert result.created == 5
        assert len(set(result.license_keys)) == 5
        assert all(is_well_formed(key, "TL") for key in result.license_keys)
        rows = LicenseModel.objects.filter(license_key__in=result.license_keys)
        assert rows.count() == 5
        for row in rows:
            assert row.is_active is False
            assert row.domain is None
            assert row.created_at == clock.now

    def test_custom_prefix(self, license_repository):
        """Test keys carry the configured prefix."""
        result = generate(GenerateLicensesHandler(license_repository, prefix="ABC"), 2)

        assert all(is_well_formed(key, "ABC") for key in result.license_keys)

    @pytest.mark.parametrize("count", [0, 101, "abc", None])
    def test_invalid_count_writes_nothing(self, license_repository, count):
        """Test out of bounds counts are refused before any write."""
        with pytest.raises(InvalidLicenseCountError):
            generate(GenerateLicensesHandler(license_repository), count)

        assert not LicenseModel.objects.exists()

    def test_retries_after_insert_collision(self):
        """Test a colliding batch is regenerated."""
        repository = FlakyInsertRepository(failures=2)

        result = generate(GenerateLicensesHandler(repository), 3)

        assert repository.inserts == 3
        assert LicenseModel.objects.count() == 3
        assert set(result.license_keys) == set(
            LicenseModel.objects.values_list("license_key", flat=True)
        )

    def test_gives_up_after_max_attempts(self):
        """Test persistent collisions surface as an integrity failure."""
        repository = FlakyInsertRepository(failures=10)

        with pytest.raises(RegistryIntegrityError):
            generate(GenerateLicensesHandler(repository, max_attempts=3), 1)

        assert repository.inserts == 3
        assert not LicenseModel.objects.exists()

    def test_counts_generated_keys(self, license_repository):
        """Test issued keys are counted through the event handlers."""
        before = REGISTRY.get_sample_value("licenses_generated_total") or 0.0

        generate(GenerateLicensesHandler(license_repository), 4)

        assert REGISTRY.get_sample_value("licenses_generated_total") == before + 4

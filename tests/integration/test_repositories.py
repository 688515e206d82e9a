"""
Integration tests for the Django repository adapters.
"""
from datetime import datetime, timedelta, timezone

import pytest
from asgiref.sync import async_to_sync
from django.db import IntegrityError, OperationalError, transaction

from activations.domain.activation import Activation
from activations.infrastructure.models import Activation as ActivationModel
from core.domain.exceptions import (
    InvalidLicenseKeyError,
    LicenseAlreadyBoundError,
    LicenseKeyCollisionError,
    RegistryIntegrityError,
)
from licenses.domain.license import License
from licenses.infrastructure.models import License as LicenseModel

KEY = "TL-AAAAAAAA-BBBBBBBB"
SHOP = "first-store.myshopify.com"
OTHER_SHOP = "second-store.myshopify.com"
T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
REPOSITORY_MODULE = "activations.infrastructure.repositories.django_activation_repository"


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoLicenseRepository:
    """Integration tests for DjangoLicenseRepository."""

    def test_find_by_key(self, license_repository, db_license):
        """Test lookup by key."""
        license = async_to_sync(license_repository.find_by_key)(KEY)
        assert license is not None
        assert license.license_key == KEY
        assert license.is_active is False

    def test_find_by_key_missing(self, license_repository, db):
        """Test lookup of an unknown key."""
        assert async_to_sync(license_repository.find_by_key)("TL-00000000-00000000") is None

    def test_update_binding_unbound(self, license_repository, db_license):
        """Test binding an unbound license."""
        assert async_to_sync(license_repository.update_binding)(KEY, SHOP, T0) is True
        model = LicenseModel.objects.get(license_key=KEY)
        assert model.is_active is True
        assert model.domain == SHOP
        assert model.activated_at == T0

    def test_update_binding_same_domain(self, license_repository, make_license):
        """Test rebinding to the bound domain succeeds."""
        make_license(domain=SHOP, created_at=T0)
        later = T0 + timedelta(hours=1)
        assert async_to_sync(license_repository.update_binding)(KEY, SHOP, later) is True
        assert LicenseModel.objects.get(license_key=KEY).activated_at == later

    def test_update_binding_other_domain(self, license_repository, make_license):
        """Test binding to another domain is refused."""
        make_license(domain=SHOP, created_at=T0)
        assert async_to_sync(license_repository.update_binding)(KEY, OTHER_SHOP, T0) is False
        assert LicenseModel.objects.get(license_key=KEY).domain == SHOP

    def test_insert_many_and_find_existing(self, license_repository, db):
        """Test batch insert and the collision check."""
        licenses = [
            License.issue("TL-AAAAAAAA-AAAAAAAA", T0),
            License.issue("TL-BBBBBBBB-BBBBBBBB", T0),
        ]
        saved = async_to_sync(license_repository.insert_many)(licenses)

        assert [license.license_key for license in saved] == [
            "TL-AAAAAAAA-AAAAAAAA",
            "TL-BBBBBBBB-BBBBBBBB",
        ]
        assert LicenseModel.objects.filter(is_active=False).count() == 2
        existing = async_to_sync(license_repository.find_existing_keys)(
            ["TL-AAAAAAAA-AAAAAAAA", "TL-CCCCCCCC-CCCCCCCC"]
        )
        assert existing == {"TL-AAAAAAAA-AAAAAAAA"}

    def test_insert_many_is_atomic(self, license_repository, db_license):
        """Test a batch hitting an issued key inserts nothing."""
        licenses = [
            License.issue("TL-CCCCCCCC-CCCCCCCC", T0),
            License.issue(KEY, T0),
        ]
        with pytest.raises(LicenseKeyCollisionError):
            async_to_sync(license_repository.insert_many)(licenses)

        assert not LicenseModel.objects.filter(license_key="TL-CCCCCCCC-CCCCCCCC").exists()

    def test_insert_many_keeps_issue_time(self, license_repository, db):
        """Test created_at comes from the domain entity."""
        async_to_sync(license_repository.insert_many)([License.issue(KEY, T0)])
        assert LicenseModel.objects.get(license_key=KEY).created_at == T0

    def test_list_recent(self, license_repository, make_license):
        """Test newest licenses come first and the limit applies."""
        for i in range(3):
            make_license(
                license_key=f"TL-0000000{i}-00000000",
                created_at=T0 + timedelta(minutes=i),
            )

        licenses = async_to_sync(license_repository.list_recent)(2)

        assert [license.license_key for license in licenses] == [
            "TL-00000002-00000000",
            "TL-00000001-00000000",
        ]


@pytest.mark.django_db
@pytest.mark.integration
class TestDjangoActivationRepository:
    """Integration tests for DjangoActivationRepository."""

    def test_record_binding_new(self, activation_repository, db_license):
        """Test the binding writes both rows."""
        activation = async_to_sync(activation_repository.record_binding)(KEY, SHOP, "42", T0)

        assert activation.license_key == KEY
        assert activation.domain == SHOP
        assert activation.theme_id == "42"
        assert activation.is_active is True
        license = LicenseModel.objects.get(license_key=KEY)
        assert license.is_active is True
        assert license.domain == SHOP
        assert license.activated_at == T0

    def test_record_binding_repeat_keeps_theme(self, activation_repository, db_license):
        """Test rebinding the same pair updates the row in place."""
        record = async_to_sync(activation_repository.record_binding)
        first = record(KEY, SHOP, "42", T0)
        second = record(KEY, SHOP, None, T0 + timedelta(minutes=5))

        assert second.id == first.id
        assert second.theme_id == "42"
        assert second.activated_at == T0 + timedelta(minutes=5)
        assert ActivationModel.objects.filter(license_id=KEY).count() == 1

    def test_record_binding_other_domain(self, activation_repository, make_license):
        """Test the conditional write refuses another domain."""
        make_license(domain=SHOP, created_at=T0)

        with pytest.raises(LicenseAlreadyBoundError) as exc_info:
            async_to_sync(activation_repository.record_binding)(KEY, OTHER_SHOP, None, T0)

        assert exc_info.value.current_domain == SHOP
        assert not ActivationModel.objects.filter(domain=OTHER_SHOP).exists()

    def test_record_binding_unknown_key(self, activation_repository, db):
        """Test binding an unknown key."""
        with pytest.raises(InvalidLicenseKeyError):
            async_to_sync(activation_repository.record_binding)(
                "TL-00000000-00000000", SHOP, None, T0
            )

    def test_record_binding_lock_lost_to_other_domain(
        self, activation_repository, make_license, monkeypatch
    ):
        """Test a write blocked by the winning binding reports that binding."""
        make_license(domain=SHOP, created_at=T0)

        def locked(*args):
            raise OperationalError("database table is locked: licenses")

        monkeypatch.setattr(REPOSITORY_MODULE + ".claim_binding", locked)

        with pytest.raises(LicenseAlreadyBoundError) as exc_info:
            async_to_sync(activation_repository.record_binding)(KEY, OTHER_SHOP, None, T0)

        assert exc_info.value.current_domain == SHOP

    def test_record_binding_lock_on_unbound_license(
        self, activation_repository, db_license, monkeypatch
    ):
        """Test a lock failure with no winner surfaces as a store fault."""

        def locked(*args):
            raise OperationalError("database is locked")

        monkeypatch.setattr(REPOSITORY_MODULE + ".claim_binding", locked)

        with pytest.raises(RegistryIntegrityError):
            async_to_sync(activation_repository.record_binding)(KEY, SHOP, None, T0)

        assert LicenseModel.objects.get(license_key=KEY).is_active is False

    def test_find_active_by_license_key(self, activation_repository, make_license):
        """Test only active rows are returned."""
        license = make_license(domain=SHOP, created_at=T0)
        ActivationModel.objects.create(license=license, domain=OTHER_SHOP, is_active=False)

        active = async_to_sync(activation_repository.find_active_by_license_key)(KEY)

        assert [activation.domain for activation in active] == [SHOP]

    def test_upsert(self, activation_repository, db_license):
        """Test upsert inserts then updates the same pair."""
        upsert = async_to_sync(activation_repository.upsert)
        created = upsert(Activation.create(KEY, SHOP, T0, theme_id="1"))
        updated = upsert(Activation.create(KEY, SHOP, T0 + timedelta(days=1)))

        assert updated.id == created.id
        assert updated.theme_id == "1"
        assert updated.activated_at == T0 + timedelta(days=1)

    def test_list_active(self, activation_repository, make_license):
        """Test active activations are listed newest first."""
        make_license(license_key="TL-00000001-00000000", domain=SHOP, created_at=T0)
        make_license(
            license_key="TL-00000002-00000000",
            domain=OTHER_SHOP,
            created_at=T0 + timedelta(minutes=1),
        )
        inactive = make_license(license_key="TL-00000003-00000000")
        ActivationModel.objects.create(license=inactive, domain=SHOP, is_active=False)

        activations = async_to_sync(activation_repository.list_active)(10)

        assert [activation.license_key for activation in activations] == [
            "TL-00000002-00000000",
            "TL-00000001-00000000",
        ]

    def test_single_active_row_constraint(self, make_license):
        """Test the store refuses a second active row for one key."""
        license = make_license(domain=SHOP, created_at=T0)

        with pytest.raises(IntegrityError):
            with transaction.atomic():
                ActivationModel.objects.create(license=license, domain=OTHER_SHOP, is_active=True)

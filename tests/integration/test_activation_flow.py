"""
Integration tests for license activation against the database.
"""
import threading

import pytest
from asgiref.sync import async_to_sync
from django.db import connection

from activations.application.commands.activate_license import ActivateLicenseCommand
from activations.application.handlers.activate_license_handler import ActivateLicenseHandler
from activations.infrastructure.models import Activation as ActivationModel
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from core.domain.exceptions import (
    InvalidDomainError,
    InvalidLicenseKeyError,
    LicenseAlreadyBoundError,
    RegistryIntegrityError,
)
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import (
    DjangoLicenseRepository,
)

KEY = "TL-AAAAAAAA-BBBBBBBB"
SHOP = "first-store.myshopify.com"
OTHER_SHOP = "second-store.myshopify.com"


class StaleReadActivationRepository(DjangoActivationRepository):
    """Repository whose read never sees the current binding."""

    async def find_active_by_license_key(self, license_key):
        return []


class DoubleBoundActivationRepository(DjangoActivationRepository):
    """Repository reporting the live binding twice."""

    async def find_active_by_license_key(self, license_key):
        active = await super().find_active_by_license_key(license_key)
        return active + active


@pytest.fixture
def handler(license_repository, activation_repository, clock):
    """Fixture for ActivateLicenseHandler backed by the database."""
    return ActivateLicenseHandler(
        license_repository=license_repository,
        activation_repository=activation_repository,
        clock=clock,
    )


def activate(handler, license_key, domain, theme_id=None):
    return async_to_sync(handler.handle)(ActivateLicenseCommand(license_key, domain, theme_id))


@pytest.mark.django_db
@pytest.mark.integration
class TestActivationFlow:
    """Integration tests for the activation flow."""

    def test_activation_binds_license(self, handler, db_license, clock):
        """Test an unbound key binds to the requested domain."""
        result = activate(handler, KEY, SHOP, theme_id="123")

        assert result.binding_kind == "new_binding"
        assert result.activated_at == clock.now
        license = LicenseModel.objects.get(license_key=KEY)
        assert license.is_active is True
        assert license.domain == SHOP
        activation = ActivationModel.objects.get(license_id=KEY)
        assert activation.domain == SHOP
        assert activation.theme_id == "123"

    def test_input_is_trimmed(self, handler, db_license):
        """Test surrounding whitespace is ignored."""
        result = activate(handler, f"  {KEY} ", f" {SHOP}  ")

        assert result.domain == SHOP
        assert LicenseModel.objects.get(license_key=KEY).domain == SHOP

    def test_idempotent_reactivation(self, handler, db_license, clock):
        """Test the same pair twice keeps one active row and the latest time."""
        activate(handler, KEY, SHOP)
        second_time = clock.advance(minutes=10)
        result = activate(handler, KEY, SHOP)

        assert result.binding_kind == "reactivation"
        active = ActivationModel.objects.filter(license_id=KEY, is_active=True)
        assert active.count() == 1
        assert active.get().activated_at == second_time
        assert LicenseModel.objects.get(license_key=KEY).activated_at == second_time

    def test_conflict_leaves_binding(self, handler, db_license, clock):
        """Test a second domain is refused and the first binding stays."""
        activate(handler, KEY, SHOP)
        clock.advance(minutes=1)

        with pytest.raises(LicenseAlreadyBoundError) as exc_info:
            activate(handler, KEY, OTHER_SHOP)

        assert exc_info.value.current_domain == SHOP
        assert exc_info.value.message == f"License is already activated for domain: {SHOP}"
        license = LicenseModel.objects.get(license_key=KEY)
        assert license.domain == SHOP
        assert not ActivationModel.objects.filter(domain=OTHER_SHOP).exists()

    def test_invalid_suffix_rejected_for_any_key(self, handler, db_license):
        """Test a foreign domain is refused whether or not the key exists."""
        with pytest.raises(InvalidDomainError):
            activate(handler, KEY, "example.com")
        with pytest.raises(InvalidDomainError):
            activate(handler, "TL-00000000-00000000", "example.com")

        assert LicenseModel.objects.get(license_key=KEY).is_active is False

    def test_unknown_key(self, handler, db):
        """Test a never-issued key is refused."""
        with pytest.raises(InvalidLicenseKeyError):
            activate(handler, "TL-00000000-00000000", SHOP)

        assert not ActivationModel.objects.exists()

    def test_write_rechecks_binding(self, license_repository, db_license, clock):
        """Test a stale read cannot steal a bound license."""
        activate(
            ActivateLicenseHandler(license_repository, DjangoActivationRepository(), clock=clock),
            KEY,
            SHOP,
        )
        stale = ActivateLicenseHandler(
            license_repository, StaleReadActivationRepository(), clock=clock
        )

        with pytest.raises(LicenseAlreadyBoundError) as exc_info:
            activate(stale, KEY, OTHER_SHOP)

        assert exc_info.value.current_domain == SHOP
        assert LicenseModel.objects.get(license_key=KEY).domain == SHOP
        assert ActivationModel.objects.filter(license_id=KEY).count() == 1

    def test_double_binding_is_integrity_error(self, license_repository, make_license, clock):
        """Test two live bindings for one key are reported as corruption."""
        make_license(domain=SHOP, created_at=clock.now)
        handler = ActivateLicenseHandler(
            license_repository, DoubleBoundActivationRepository(), clock=clock
        )

        with pytest.raises(RegistryIntegrityError):
            activate(handler, KEY, SHOP)


def _activate_in_thread(domain, barrier, outcomes):
    handler = ActivateLicenseHandler(DjangoLicenseRepository(), DjangoActivationRepository())
    try:
        barrier.wait()
        activate(handler, KEY, domain)
        outcomes.append("ok")
    except LicenseAlreadyBoundError:
        outcomes.append("bound")
    except Exception as e:  # pylint: disable=broad-exception-caught
        outcomes.append(f"{type(e).__name__}: {e}")
    finally:
        connection.close()


@pytest.mark.django_db(transaction=True)
@pytest.mark.integration
def test_concurrent_activations_bind_once(make_license):
    """Test concurrent activations for distinct domains bind exactly one."""
    make_license()
    domains = [f"store-{i}.myshopify.com" for i in range(8)]
    barrier = threading.Barrier(len(domains))
    outcomes = []
    threads = [
        threading.Thread(target=_activate_in_thread, args=(domain, barrier, outcomes))
        for domain in domains
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=60)

    assert sorted(outcomes) == ["bound"] * (len(domains) - 1) + ["ok"]
    license = LicenseModel.objects.get(license_key=KEY)
    assert license.domain in domains
    assert ActivationModel.objects.filter(license_id=KEY, is_active=True).count() == 1
    assert ActivationModel.objects.get(license_id=KEY, is_active=True).domain == license.domain

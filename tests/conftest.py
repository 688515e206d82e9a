"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta, timezone as dt_timezone

import pytest
from django.core.cache import cache

from activations.infrastructure.models import Activation as ActivationModel
from activations.infrastructure.repositories.django_activation_repository import (
    DjangoActivationRepository,
)
from licenses.infrastructure.models import License as LicenseModel
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

ADMIN_KEY = "test-admin-key"
SHOP = "first-store.myshopify.com"
OTHER_SHOP = "second-store.myshopify.com"


class FixedClock:
    """Clock returning a controllable, strictly increasing time."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 1, 1, 12, 0, tzinfo=dt_timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture(autouse=True)
def clear_cache():
    """Keep rate limit counters from leaking between tests."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def activation_repository():
    """Fixture for ActivationRepository."""
    return DjangoActivationRepository()


@pytest.fixture
def clock():
    """Fixture for a fixed clock."""
    return FixedClock()


@pytest.fixture
def make_license(db):
    """Factory fixture for License rows saved in database."""

    def _make(license_key="TL-AAAAAAAA-BBBBBBBB", domain=None, created_at=None):
        model = LicenseModel(
            license_key=license_key,
            domain=domain,
            is_active=domain is not None,
            activated_at=created_at if domain else None,
        )
        if created_at is not None:
            model.created_at = created_at
        model.save()
        if domain is not None:
            ActivationModel.objects.create(
                license=model,
                domain=domain,
                is_active=True,
                activated_at=model.activated_at or model.created_at,
            )
        return model

    return _make


@pytest.fixture
def db_license(make_license):
    """Fixture for an unbound License saved in database."""
    return make_license()


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_client():
    """Fixture for DRF API client carrying the admin API key."""
    from rest_framework.test import APIClient

    client = APIClient()
    client.credentials(HTTP_X_API_KEY=ADMIN_KEY)
    return client

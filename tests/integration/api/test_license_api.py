"""
Integration tests for the public activation endpoint.
"""
from datetime import datetime, timezone
from urllib.parse import urlencode

import pytest

from activations.domain.activation import Activation
from activations.infrastructure.models import Activation as ActivationModel
from licenses.infrastructure.models import License as LicenseModel

URL = "/api/v1/license/activate"
KEY = "TL-AAAAAAAA-BBBBBBBB"
SHOP = "first-store.myshopify.com"
OTHER_SHOP = "second-store.myshopify.com"


def post_activation(client, url=URL, **payload):
    return client.post(url, payload, format="json")


@pytest.mark.django_db
@pytest.mark.integration
class TestActivateLicenseAPI:
    """Integration tests for POST /api/v1/license/activate."""

    def test_activate_success(self, api_client, db_license):
        """Test successful activation response shape."""
        response = post_activation(api_client, licenseKey=KEY, domain=SHOP, themeId="99")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "License activated successfully! You can now refresh your theme."
        assert data["activation"]["licenseKey"] == KEY
        assert data["activation"]["domain"] == SHOP
        assert data["activation"]["activatedAt"]
        assert response["X-Correlation-ID"]
        assert ActivationModel.objects.get(license_id=KEY).theme_id == "99"

    def test_activate_alias_path(self, api_client, db_license):
        """Test the short /activate path serves the same operation."""
        response = post_activation(api_client, url="/activate", licenseKey=KEY, domain=SHOP)

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_activate_form_encoded(self, api_client, db_license):
        """Test form-encoded bodies are accepted."""
        response = api_client.post(
            URL,
            urlencode({"licenseKey": KEY, "domain": SHOP}),
            content_type="application/x-www-form-urlencoded",
        )

        assert response.status_code == 200
        assert LicenseModel.objects.get(license_key=KEY).domain == SHOP

    def test_reactivation(self, api_client, db_license):
        """Test repeating the activation for the bound domain succeeds."""
        post_activation(api_client, licenseKey=KEY, domain=SHOP)
        response = post_activation(api_client, licenseKey=KEY, domain=SHOP)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert ActivationModel.objects.filter(license_id=KEY, is_active=True).count() == 1

    @pytest.mark.parametrize(
        "payload",
        [
            {"domain": SHOP},
            {"licenseKey": KEY},
            {"licenseKey": "   ", "domain": SHOP},
            {},
        ],
    )
    def test_missing_fields(self, api_client, db_license, payload):
        """Test a missing key or domain is a validation failure."""
        response = post_activation(api_client, **payload)

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "License key and domain are required",
            "code": "VALIDATION_ERROR",
        }

    @pytest.mark.parametrize(
        "payload, error",
        [
            (
                {"licenseKey": KEY, "domain": SHOP, "themeId": "x" * 256},
                "themeId: Ensure this field has no more than 255 characters.",
            ),
            (
                {"licenseKey": {"nested": "value"}, "domain": SHOP},
                "licenseKey: Not a valid string.",
            ),
        ],
    )
    def test_malformed_field_is_named(self, api_client, db_license, payload, error):
        """Test a field the serializer rejects is named in the error."""
        response = api_client.post(URL, payload, format="json")

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": error, "code": "VALIDATION_ERROR"}
        assert LicenseModel.objects.get(license_key=KEY).is_active is False

    def test_invalid_domain(self, api_client, db_license):
        """Test a domain without the storefront suffix is refused."""
        response = post_activation(api_client, licenseKey=KEY, domain="example.com")

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "error": "Domain must be a valid .myshopify.com domain",
            "code": "INVALID_DOMAIN",
        }

    def test_invalid_license_key(self, api_client, db):
        """Test an unknown key is refused."""
        response = post_activation(api_client, licenseKey="TL-00000000-00000000", domain=SHOP)

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "error": "Invalid license key",
            "code": "INVALID_LICENSE_KEY",
        }

    def test_already_bound(self, api_client, make_license):
        """Test a key bound elsewhere names the current domain."""
        make_license(domain=SHOP, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))

        response = post_activation(api_client, licenseKey=KEY, domain=OTHER_SHOP)

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "error": f"License is already activated for domain: {SHOP}",
            "code": "LICENSE_ALREADY_BOUND",
        }

    def test_method_not_allowed(self, api_client):
        """Test GET is refused."""
        response = api_client.get(URL)

        assert response.status_code == 405
        assert response.json()["error"] == "Method not allowed"
        assert response.json()["code"] == "METHOD_NOT_ALLOWED"

    def test_malformed_json(self, api_client, db):
        """Test an unparsable body is a client error."""
        response = api_client.post(URL, data="{not json", content_type="application/json")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Invalid request body",
            "code": "PARSE_ERROR",
        }

    def test_registry_fault_is_opaque(self, api_client, db_license, monkeypatch):
        """Test an inconsistent registry yields a generic server error."""
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)

        async def two_bindings(license_key):
            return [
                Activation.create(license_key, SHOP, now),
                Activation.create(license_key, OTHER_SHOP, now),
            ]

        monkeypatch.setattr(
            "api.v1.license.views._activation_repo.find_active_by_license_key", two_bindings
        )

        response = post_activation(api_client, licenseKey=KEY, domain=SHOP)

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Internal server error",
            "code": "INTERNAL_ERROR",
        }
        assert LicenseModel.objects.get(license_key=KEY).is_active is False


@pytest.mark.django_db
@pytest.mark.integration
class TestActivationRateLimit:
    """Integration tests for per-IP activation rate limiting."""

    @pytest.fixture(autouse=True)
    def enable_rate_limit(self, settings, monkeypatch):
        settings.RATE_LIMIT_ENABLED = True
        settings.ACTIVATION_RATE_LIMIT = 2
        monkeypatch.setattr("core.middleware.rate_limit.time.time", lambda: 1_700_000_000.0)

    def test_limit_exceeded(self, api_client, db_license):
        """Test requests past the limit are refused with 429."""
        first = post_activation(api_client, licenseKey=KEY, domain=SHOP)
        second = post_activation(api_client, licenseKey=KEY, domain=SHOP)
        third = post_activation(api_client, licenseKey=KEY, domain=SHOP)

        assert first.status_code == 200
        assert first["X-RateLimit-Remaining"] == "1"
        assert second.status_code == 200
        assert third.status_code == 429
        assert third.json() == {
            "success": False,
            "error": "Rate limit exceeded. Please try again later.",
            "code": "RATE_LIMIT_EXCEEDED",
        }
        assert third["Retry-After"]

    def test_limit_is_per_client(self, api_client, db_license):
        """Test another address has its own window."""
        for _ in range(2):
            post_activation(api_client, licenseKey=KEY, domain=SHOP)

        response = api_client.post(
            URL, {"licenseKey": KEY, "domain": SHOP}, format="json", REMOTE_ADDR="10.0.0.9"
        )

        assert response.status_code == 200

    def test_other_paths_not_limited(self, api_client):
        """Test health checks are not rate limited."""
        for _ in range(4):
            assert api_client.get("/health/").status_code == 200

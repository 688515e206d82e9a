"""
Activation domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""

from typing import List, Optional, Tuple

from activations.domain.activation import Activation
from core.domain.exceptions import (
    InvalidDomainError,
    InvalidLicenseKeyError,
    LicenseAlreadyBoundError,
    MissingActivationFieldsError,
    RegistryIntegrityError,
)
from core.domain.value_objects import BindingKind, ShopDomain
from licenses.domain.license import License


class ActivationPolicy:
    """Domain service deciding whether a license may bind to a domain."""

    @staticmethod
    def validate_request(
        license_key: Optional[str],
        domain: Optional[str],
        suffix: str,
    ) -> Tuple[str, ShopDomain]:
        """
        Validate the shape of an activation request.

        Checks run in order and the first failure wins.

        Args:
            license_key: Raw license key from the request
            domain: Raw domain from the request
            suffix: Required storefront domain suffix

        Returns:
            Tuple of (trimmed license key, ShopDomain)

        Raises:
            MissingActivationFieldsError: If key or domain is blank
            InvalidDomainError: If the domain lacks the suffix
        """
        license_key = (license_key or "").strip()
        domain = (domain or "").strip()
        if not license_key or not domain:
            raise MissingActivationFieldsError()

        try:
            shop_domain = ShopDomain(domain)
        except ValueError as e:
            raise InvalidDomainError(suffix) from e
        if not shop_domain.has_suffix(suffix):
            raise InvalidDomainError(suffix)

        return license_key, shop_domain

    @staticmethod
    def current_binding(activations: List[Activation]) -> Optional[Activation]:
        """
        Reduce the active activations of a key to its single live binding.

        Args:
            activations: Active activations for one license key

        Returns:
            The active Activation or None

        Raises:
            RegistryIntegrityError: If more than one activation is active
        """
        if len(activations) > 1:
            raise RegistryIntegrityError(
                f"{len(activations)} active activations for one license key"
            )
        return activations[0] if activations else None

    @staticmethod
    def decide(
        license: Optional[License],
        current: Optional[Activation],
        domain: ShopDomain,
    ) -> BindingKind:
        """
        Decide how a request for ``domain`` relates to the current binding.

        Args:
            license: License looked up by key, or None
            current: Current active binding, or None
            domain: Requested domain

        Returns:
            BindingKind.NEW_BINDING or BindingKind.REACTIVATION

        Raises:
            InvalidLicenseKeyError: If the license does not exist
            LicenseAlreadyBoundError: If bound to another domain
        """
        if license is None:
            raise InvalidLicenseKeyError()
        if current is None:
            return BindingKind.NEW_BINDING
        if current.domain != domain.value:
            raise LicenseAlreadyBoundError(current.domain)
        return BindingKind.REACTIVATION

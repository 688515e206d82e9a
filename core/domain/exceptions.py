"""
Domain exceptions.

Domain exceptions represent business rule violations
and domain-specific error conditions.
"""


class DomainException(Exception):
    """Base exception for all domain exceptions."""

    def __init__(self, message: str, code: str = None):
        """
        Initialize domain exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ActivationException(DomainException):
    """Base exception for activation-related errors."""

    pass


class ActivationValidationError(ActivationException):
    """Raised when an activation request is malformed."""

    def __init__(self, message: str = "Invalid activation request", code: str = "VALIDATION_ERROR"):
        super().__init__(message, code=code)


class MissingActivationFieldsError(ActivationValidationError):
    """Raised when the license key or the domain is missing."""

    def __init__(self, message: str = "License key and domain are required"):
        super().__init__(message, code="VALIDATION_ERROR")


class InvalidDomainError(ActivationValidationError):
    """Raised when the domain does not carry the storefront suffix."""

    def __init__(self, suffix: str = ".myshopify.com", message: str = None):
        super().__init__(
            message or f"Domain must be a valid {suffix} domain",
            code="INVALID_DOMAIN",
        )
        self.suffix = suffix


class InvalidLicenseKeyError(ActivationException):
    """Raised when a license key is not in the registry."""

    def __init__(self, message: str = "Invalid license key"):
        super().__init__(message, code="INVALID_LICENSE_KEY")


class LicenseAlreadyBoundError(ActivationException):
    """Raised when a license is bound to another domain."""

    def __init__(self, current_domain: str, message: str = None):
        super().__init__(
            message or f"License is already activated for domain: {current_domain}",
            code="LICENSE_ALREADY_BOUND",
        )
        self.current_domain = current_domain


class LicenseException(DomainException):
    """Base exception for license-related errors."""

    pass


class InvalidLicenseCountError(LicenseException):
    """Raised when a bulk generation count is out of bounds."""

    def __init__(self, max_count: int = 100, message: str = None):
        super().__init__(
            message or f"Count must be between 1 and {max_count}",
            code="INVALID_COUNT",
        )
        self.max_count = max_count


class RegistryIntegrityError(DomainException):
    """
    Raised when the license registry is in a state the engine cannot trust.

    Examples are two active bindings for one key, or key generation that
    keeps colliding. Never shown to callers in detail.
    """

    def __init__(self, message: str = "License registry integrity violation"):
        super().__init__(message, code="INTERNAL_ERROR")


class LicenseKeyCollisionError(LicenseException):
    """Raised when an inserted batch hits an already issued key."""

    def __init__(self, message: str = "License key already exists"):
        super().__init__(message, code="INTERNAL_ERROR")

"""
License key format and generation.

Keys look like PREFIX-XXXXXXXX-XXXXXXXX where each X is an
uppercase letter or a digit.
"""

import re
import secrets
import string

KEY_ALPHABET = string.ascii_uppercase + string.digits
KEY_GROUP_LENGTH = 8
KEY_GROUP_COUNT = 2

_PREFIX_PATTERN = re.compile(r"^[A-Z0-9]{1,10}$")


def generate_license_key(prefix: str) -> str:
    """
    Generate a license key in format: PREFIX-XXXXXXXX-XXXXXXXX.

    Args:
        prefix: Key prefix (e.g., 'TL' for theme licenses)

    Returns:
        Generated license key string
    """
    if not _PREFIX_PATTERN.match(prefix or ""):
        raise ValueError(f"Invalid license key prefix: {prefix}")
    groups = [
        "".join(secrets.choice(KEY_ALPHABET) for _ in range(KEY_GROUP_LENGTH))
        for _ in range(KEY_GROUP_COUNT)
    ]
    return f"{prefix}-{'-'.join(groups)}"


def license_key_pattern(prefix: str) -> re.Pattern:
    """Return the compiled pattern keys issued with ``prefix`` must match."""
    group = f"[A-Z0-9]{{{KEY_GROUP_LENGTH}}}"
    return re.compile(rf"^{re.escape(prefix)}(-{group}){{{KEY_GROUP_COUNT}}}$")


def is_well_formed(key: str, prefix: str) -> bool:
    """
    Check a key string against the issued format.

    Args:
        key: License key string
        prefix: Expected key prefix

    Returns:
        True if the key has the issued shape
    """
    return bool(license_key_pattern(prefix).match(key or ""))

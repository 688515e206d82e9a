"""
Django models for licenses app.

Import models from infrastructure layer.
"""
from licenses.infrastructure.models import License  # noqa: F401

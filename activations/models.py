"""
Django models for activations app.

Import models from infrastructure layer.
"""
from activations.infrastructure.models import Activation  # noqa: F401

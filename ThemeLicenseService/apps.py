"""
App configuration for Theme License Service.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class ThemeLicenseServiceConfig(AppConfig):
    """App configuration for ThemeLicenseService."""

    name = "ThemeLicenseService"
    verbose_name = "Theme License Service"

    def ready(self):
        """Wire tracing and domain event handlers once apps are loaded."""
        from core.infrastructure.event_handlers import register_event_handlers
        from core.instrumentation import setup_opentelemetry

        setup_opentelemetry()
        register_event_handlers()
        logger.debug("Theme license service ready")

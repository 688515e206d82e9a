"""
Event handlers for domain events.

These handlers process domain events for side effects like audit
logging and metrics.
"""

import logging

from activations.domain.events import LicenseActivated
from core.domain.events import DomainEvent, EventHandler
from core.metrics import licenses_generated_total
from licenses.domain.events import LicensesGenerated

logger = logging.getLogger(__name__)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    Writes every domain event to the structured log.
    """

    async def handle(self, event: DomainEvent) -> None:
        """
        Handle domain event for audit logging.

        Args:
            event: Domain event to log
        """
        logger.info(
            "Audit log: %s - %s",
            event.event_type,
            event.aggregate_id,
            extra={"event": event.to_dict()},
        )


class LicenseGenerationMetricsHandler(EventHandler):
    """Counts issued license keys."""

    async def handle(self, event: DomainEvent) -> None:
        licenses_generated_total.inc(event.count)


audit_handler = AuditLogEventHandler()
generation_metrics_handler = LicenseGenerationMetricsHandler()


def register_event_handlers(bus=None):
    """Register all event handlers with the event bus."""
    if bus is None:
        from core.infrastructure.events import event_bus as bus

    bus.subscribe(LicenseActivated, audit_handler)
    bus.subscribe(LicensesGenerated, audit_handler)
    bus.subscribe(LicensesGenerated, generation_metrics_handler)

    logger.info("Event handlers registered")

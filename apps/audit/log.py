"""
Audit trail writer.

Public API:
  record(actor, event, entity_id)
"""
import logging

from .models import AuditLog
from .payloads import AuditPayload

logger = logging.getLogger(__name__)


def record(actor, event: AuditPayload, entity_id) -> AuditLog:
    """Append one audit row. Call inside the transaction of the audited change."""
    entry = AuditLog.objects.create(
        actor=actor,
        action=event.action,
        entity=event.entity,
        entity_id=str(entity_id),
        payload=event.to_json(),
    )
    logger.debug('Audit %s %s:%s by %s', entry.action, entry.entity, entry.entity_id, actor.pk)
    return entry

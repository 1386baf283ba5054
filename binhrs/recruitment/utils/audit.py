import logging

from binhrs.recruitment.models import AuditLog

logger = logging.getLogger(__name__)


def write_audit(application, action, actor=None, from_status='', to_status='', note=''):
    entry = AuditLog.objects.create(
        application=application,
        actor=actor,
        action=action,
        from_status=from_status or '',
        to_status=to_status or '',
        note=note or ''
    )
    logger.info(
        f"{action} on {application.folio} by "
        f"{getattr(actor, 'email', 'candidate')}: {from_status} -> {to_status}"
    )
    return entry
